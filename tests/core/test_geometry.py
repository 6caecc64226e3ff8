import pytest

from multipage.core.geometry import clamp_topline, desired_topline, max_topline, page_span


class TestPageSpan:
    """Page span is height minus overlap, never below one line."""

    def test_overlap_one(self):
        assert page_span(40, 1) == 39

    def test_no_overlap(self):
        assert page_span(20, 0) == 20

    @pytest.mark.parametrize("overlap", [10, 11, 500])
    def test_overlap_at_or_above_height_degrades_to_one(self, overlap):
        assert page_span(10, overlap) == 1

    def test_single_line_pane(self):
        assert page_span(1, 0) == 1
        assert page_span(1, 1) == 1


class TestClampTopline:
    """Clamping keeps the last document line on the last screen row."""

    def test_in_bounds_is_unchanged(self):
        assert clamp_topline(10, 100, 40) == 10

    def test_past_end_stops_at_last_full_page(self):
        assert clamp_topline(90, 100, 40) == 61

    def test_exactly_last_full_page(self):
        assert clamp_topline(61, 100, 40) == 61

    def test_above_first_line(self):
        assert clamp_topline(0, 100, 40) == 1
        assert clamp_topline(-5, 100, 40) == 1

    def test_document_shorter_than_pane(self):
        assert clamp_topline(20, 15, 40) == 1
        assert max_topline(15, 40) == 1

    def test_empty_document(self):
        assert clamp_topline(5, 0, 40) == 1


def test_desired_topline_advances_by_span_per_column():
    assert [desired_topline(1, 39, idx) for idx in (1, 2, 3)] == [1, 40, 79]
    assert desired_topline(200, 20, 1) == 200
