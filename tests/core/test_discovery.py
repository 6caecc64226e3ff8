from multipage.core.discovery import discover_viewports, leftmost_viewport


def test_discovery_orders_by_column(host, document, group):
    a = host.open_viewport(group, document)
    b = host.open_viewport(group, document)
    c = host.open_viewport(group, document)
    # Move the first viewport to the far right
    host.place(a, 500)

    assert discover_viewports(host, group, document) == [b, c, a]
    assert leftmost_viewport(host, group, document) == b


def test_discovery_ignores_other_documents_and_groups(host, document, group):
    host.add_document("other.txt", 10)
    mine = host.open_viewport(group, document)
    host.open_viewport(group, "other.txt")
    host.open_viewport("tab-2", document)

    assert discover_viewports(host, group, document) == [mine]


def test_ties_keep_host_iteration_order(host, document, group):
    a = host.open_viewport(group, document)
    b = host.open_viewport(group, document)
    host.place(a, 0)
    host.place(b, 0)

    assert discover_viewports(host, group, document) == [a, b]


def test_nothing_shows_document(host, document, group):
    assert discover_viewports(host, group, document) == []
    assert leftmost_viewport(host, group, document) is None


def test_discovery_is_recomputed_after_close(host, document, group):
    a, b, c = (host.open_viewport(group, document) for _ in range(3))
    assert discover_viewports(host, group, document) == [a, b, c]

    host.close_viewport(b)
    assert discover_viewports(host, group, document) == [a, c]


def test_invalid_handles_are_skipped(host, document, group):
    class StaleListingHost:
        """Delegates to the in-memory host but lists one dead handle."""

        def __init__(self, inner):
            self._inner = inner

        def list_viewports(self, grp):
            return [424242] + self._inner.list_viewports(grp)

        def __getattr__(self, name):
            return getattr(self._inner, name)

    vp = host.open_viewport(group, document)
    assert discover_viewports(StaleListingHost(host), group, document) == [vp]
