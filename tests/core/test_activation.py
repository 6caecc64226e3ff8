import pytest

from multipage.core.activation import activated_viewport
from multipage.core.host import HostEvent


def test_activates_and_restores(host, document, group):
    a = host.open_viewport(group, document)
    b = host.open_viewport(group, document)
    assert host.get_active_viewport() == a

    with activated_viewport(host, b) as vp:
        assert vp == b
        assert host.get_active_viewport() == b

    assert host.get_active_viewport() == a


def test_restores_when_block_raises(host, document, group):
    a = host.open_viewport(group, document)
    b = host.open_viewport(group, document)

    with pytest.raises(RuntimeError):
        with activated_viewport(host, b):
            raise RuntimeError("boom")

    assert host.get_active_viewport() == a


def test_already_active_is_a_no_op(host, document, group):
    a = host.open_viewport(group, document)
    with activated_viewport(host, a):
        assert host.get_active_viewport() == a
    assert host.get_active_viewport() == a


def test_previous_closed_inside_block_leaves_target_active(host, document, group):
    a = host.open_viewport(group, document)
    b = host.open_viewport(group, document)

    with activated_viewport(host, b):
        host.close_viewport(a)

    assert host.get_active_viewport() == b


def test_activation_does_not_emit_events(host, document, group):
    host.open_viewport(group, document)
    b = host.open_viewport(group, document)

    with activated_viewport(host, b):
        pass

    assert not [e for e in host.emitted if e[0] == HostEvent.VIEWPORT_ENTERED]


def test_without_previous_active_viewport_target_stays_active(host, document, group):
    a = host.open_viewport(group, document)
    b = host.open_viewport(group, document)
    host._active = None  # type: ignore[attr-defined]

    with activated_viewport(host, b):
        assert host.get_active_viewport() == b

    assert host.get_active_viewport() == b
    assert host.is_viewport_valid(a)
