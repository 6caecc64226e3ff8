import pytest

from multipage.core.exceptions import ConfigurationError
from multipage.core.state import MultipageStateRegistry


def test_documents_start_disabled():
    state = MultipageStateRegistry()
    assert state.is_enabled("a.txt", "tab-1") is False
    assert state.enabled_keys() == []


def test_document_scope_shares_flag_across_groups():
    state = MultipageStateRegistry("document")
    state.set_enabled("a.txt", "tab-1", True)

    assert state.is_enabled("a.txt", "tab-1") is True
    assert state.is_enabled("a.txt", "tab-2") is True
    assert state.is_enabled("b.txt", "tab-1") is False


def test_group_scope_keeps_groups_independent():
    state = MultipageStateRegistry("group")
    state.set_enabled("a.txt", "tab-1", True)

    assert state.is_enabled("a.txt", "tab-1") is True
    assert state.is_enabled("a.txt", "tab-2") is False
    assert state.enabled_keys() == [("a.txt", "tab-1")]


def test_disable_clears_flag():
    state = MultipageStateRegistry()
    state.set_enabled("a.txt", "tab-1", True)
    state.set_enabled("a.txt", "tab-1", False)
    assert state.is_enabled("a.txt", "tab-1") is False


@pytest.mark.parametrize("scope", ["document", "group"])
def test_forget_drops_every_flag_for_document(scope):
    state = MultipageStateRegistry(scope)
    state.set_enabled("a.txt", "tab-1", True)
    state.set_enabled("a.txt", "tab-2", True)
    state.set_enabled("b.txt", "tab-1", True)

    state.forget("a.txt")

    assert state.is_enabled("a.txt", "tab-1") is False
    assert state.is_enabled("a.txt", "tab-2") is False
    assert state.is_enabled("b.txt", "tab-1") is True


def test_unknown_scope_is_rejected():
    with pytest.raises(ConfigurationError) as exc:
        MultipageStateRegistry("window")
    assert exc.value.key == "state_scope"


def test_scope_change_only_while_nothing_is_enabled():
    state = MultipageStateRegistry()
    state.set_scope("group")
    assert state.scope == "group"

    state.set_enabled("a.txt", "tab-1", True)
    with pytest.raises(ConfigurationError):
        state.set_scope("document")
    assert state.scope == "group"

    state.set_enabled("a.txt", "tab-1", False)
    state.set_scope("document")
    assert state.scope == "document"
