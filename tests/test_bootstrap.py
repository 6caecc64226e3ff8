import pytest

from multipage import setup, teardown
from multipage.core.context import MultipageContext, get_app_context
from multipage.core.exceptions import ConfigurationError
from multipage.core.extensions import CONTEXT_UPDATE, ExtensionRegistry
from multipage.core.host import HostEvent
from multipage.core.memory_host import InMemoryHost


def test_setup_registers_context_and_subscriptions(host):
    context = setup(host, use_config_files=False)

    assert isinstance(context, MultipageContext)
    assert get_app_context() is context
    assert host.subscriber_count(HostEvent.DOCUMENT_DISPLAYED) == 1
    assert host.subscriber_count(HostEvent.VIEWPORT_ENTERED) == 1


def test_setup_twice_does_not_duplicate_subscriptions(host):
    first = setup(host, use_config_files=False)
    second = setup(host, {"overlap": 2}, use_config_files=False)

    assert second is first
    assert second.config.overlap == 2
    assert host.subscriber_count() == 2


def test_setup_reads_config_files(host, tmp_path):
    user_dir = tmp_path / "config"
    user_dir.mkdir()
    (user_dir / "multipage.yml").write_text("overlap: 4\n", encoding="utf-8")

    context = setup(host)

    assert context.config.overlap == 4


def test_invalid_option_raises_and_keeps_config(host):
    context = setup(host, use_config_files=False)
    with pytest.raises(ConfigurationError):
        setup(host, {"overlap": -1})
    assert context.config.overlap == 1


def test_scope_change_refused_while_enabled(host, document, group):
    context = setup(host, use_config_files=False)
    host.open_viewport(group, document)
    context.commands.execute("MultipageEnable")

    with pytest.raises(ConfigurationError):
        setup(host, {"state_scope": "group"})

    assert context.state.scope == "document"
    assert context.config.state_scope == "document"


def test_new_overlap_applies_on_next_event(host, document, group):
    context = setup(host, use_config_files=False)
    a = host.open_viewport(group, document)
    b = host.open_viewport(group, document)
    context.commands.execute("MultipageEnable")
    assert host.get_topline(b) == 40

    setup(host, {"overlap": 0})
    host.focus(a)

    assert host.get_topline(b) == 41


def test_context_redirect_installed_once(host, document, group):
    extensions = ExtensionRegistry()
    calls = []
    extensions.register_entry_point(CONTEXT_UPDATE, lambda: calls.append(host.get_active_viewport()),
                                    "context-header")

    setup(host, extensions=extensions, use_config_files=False)
    wrapped = extensions.resolve(CONTEXT_UPDATE)
    setup(host, use_config_files=False)

    assert extensions.resolve(CONTEXT_UPDATE) is wrapped

    a = host.open_viewport(group, document)
    b = host.open_viewport(group, document)
    host.set_active_viewport(b)
    get_app_context().commands.execute("MultipageEnable")
    extensions.call(CONTEXT_UPDATE)
    assert calls == [a]


def test_context_redirect_can_be_disabled(host):
    extensions = ExtensionRegistry()
    extensions.register_entry_point(CONTEXT_UPDATE, lambda: None, "context-header")

    context = setup(host, {"context_redirect": False}, extensions=extensions, use_config_files=False)

    assert context.context_redirect.installed is False
    assert extensions.get_registry_stats()["replaced"] == []


def test_new_host_replaces_session(host):
    first = setup(host, use_config_files=False)
    other = InMemoryHost()

    second = setup(other, use_config_files=False)

    assert second is not first
    assert host.subscriber_count() == 0
    assert other.subscriber_count() == 2


def test_teardown(host):
    extensions = ExtensionRegistry()
    original = lambda: None  # noqa: E731
    extensions.register_entry_point(CONTEXT_UPDATE, original, "context-header")
    setup(host, extensions=extensions, use_config_files=False)

    teardown()

    assert get_app_context() is None
    assert host.subscriber_count() == 0
    assert extensions.resolve(CONTEXT_UPDATE) is original
    teardown()  # no session: no-op


def test_context_stats(host, document, group):
    context = setup(host, use_config_files=False)
    host.open_viewport(group, document)
    context.commands.execute("MultipageEnable")

    stats = context.get_context_stats()

    assert stats["enabled"] == [document]
    assert stats["router_attached"] is True
    assert stats["config"]["overlap"] == 1
