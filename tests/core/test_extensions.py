import pytest

from multipage.core.exceptions import ExtensionRegistrationError
from multipage.core.extensions import CONTEXT_UPDATE, ExtensionRegistry


def _update(*args, **kwargs):
    return ("update", args, kwargs)


def test_register_and_call(extensions):
    extensions.register_entry_point(CONTEXT_UPDATE, _update, "ctx-plugin")

    assert extensions.has_entry_point(CONTEXT_UPDATE)
    assert extensions.get_provider(CONTEXT_UPDATE) == "ctx-plugin"
    assert extensions.call(CONTEXT_UPDATE, 1, force=True) == ("update", (1,), {"force": True})


def test_calling_missing_entry_point_is_a_no_op(extensions):
    assert extensions.resolve("missing") is None
    assert extensions.call("missing") is None


def test_duplicate_registration_is_rejected(extensions):
    extensions.register_entry_point(CONTEXT_UPDATE, _update, "first")
    with pytest.raises(ExtensionRegistrationError) as exc:
        extensions.register_entry_point(CONTEXT_UPDATE, _update, "second")
    assert exc.value.provider_id == "second"
    assert extensions.get_provider(CONTEXT_UPDATE) == "first"


def test_non_callable_is_rejected(extensions):
    with pytest.raises(ExtensionRegistrationError):
        extensions.register_entry_point("x", "not callable", "p")


def test_replace_keeps_original(extensions):
    extensions.register_entry_point(CONTEXT_UPDATE, _update, "p")

    def replacement():
        return "replaced"

    previous = extensions.replace(CONTEXT_UPDATE, replacement)

    assert previous is _update
    assert extensions.resolve(CONTEXT_UPDATE) is replacement
    assert extensions.original(CONTEXT_UPDATE) is _update
    assert extensions.get_registry_stats()["replaced"] == [CONTEXT_UPDATE]


def test_replace_requires_existing_entry(extensions):
    with pytest.raises(ExtensionRegistrationError):
        extensions.replace("missing", _update)


def test_unregister(extensions):
    extensions.register_entry_point(CONTEXT_UPDATE, _update, "p")
    assert extensions.unregister_entry_point(CONTEXT_UPDATE) is True
    assert extensions.unregister_entry_point(CONTEXT_UPDATE) is False
    assert extensions.get_registry_stats() == {"entry_points": [], "providers": {}, "replaced": []}


def test_fresh_registry_is_empty():
    assert ExtensionRegistry().get_registry_stats()["entry_points"] == []
