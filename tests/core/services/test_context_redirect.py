import pytest

from multipage.core.extensions import CONTEXT_UPDATE


@pytest.fixture
def renderer(host):
    """Context-header update function recording the viewport it runs from."""
    calls = []

    def update(*args, **kwargs):
        calls.append(host.get_active_viewport())
        return "rendered"

    update.calls = calls
    return update


@pytest.fixture
def registered(extensions, renderer):
    extensions.register_entry_point(CONTEXT_UPDATE, renderer, "context-header")
    return extensions


def test_runs_from_left_most_pane_when_enabled(host, state, context_redirect, registered,
                                               renderer, open_columns, document, group):
    a, b, c = open_columns(3)
    state.set_enabled(document, group, True)
    host.set_active_viewport(c)
    assert context_redirect.install(registered) is True

    assert registered.call(CONTEXT_UPDATE, "arg") == "rendered"

    assert renderer.calls == [a]
    assert host.get_active_viewport() == c


def test_passes_through_when_disabled(host, context_redirect, registered, renderer, open_columns):
    a, b = open_columns(2)
    host.set_active_viewport(b)
    context_redirect.install(registered)

    registered.call(CONTEXT_UPDATE)

    assert renderer.calls == [b]


def test_wrapper_keeps_identity_of_wrapped_function(context_redirect, renderer):
    wrapped = context_redirect.wrap(renderer)
    assert wrapped.__wrapped__ is renderer
    assert wrapped.__name__ == renderer.__name__


def test_falls_back_to_unmodified_call_on_error(host, state, context_redirect, extensions,
                                                open_columns, document, group):
    a, b = open_columns(2)
    state.set_enabled(document, group, True)
    host.set_active_viewport(b)
    seen = []

    def flaky():
        seen.append(host.get_active_viewport())
        if len(seen) == 1:
            raise RuntimeError("render failed")
        return "ok"

    extensions.register_entry_point(CONTEXT_UPDATE, flaky, "context-header")
    context_redirect.install(extensions)

    assert extensions.call(CONTEXT_UPDATE) == "ok"
    assert seen == [a, b]
    assert host.get_active_viewport() == b


def test_install_once(context_redirect, registered, renderer):
    assert context_redirect.install(registered) is True
    wrapped = registered.resolve(CONTEXT_UPDATE)

    assert context_redirect.install(registered) is True

    assert registered.resolve(CONTEXT_UPDATE) is wrapped
    assert wrapped.__wrapped__ is renderer


def test_absent_entry_point_is_not_an_error(context_redirect, extensions):
    assert context_redirect.install(extensions) is False
    assert context_redirect.installed is False


def test_uninstall_restores_original(context_redirect, registered, renderer):
    context_redirect.install(registered)

    assert context_redirect.uninstall(registered) is True

    assert registered.resolve(CONTEXT_UPDATE) is renderer
    assert context_redirect.installed is False
    assert context_redirect.uninstall(registered) is False
