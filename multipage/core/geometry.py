"""
Pure line arithmetic for paging a document across side-by-side viewports.

All quantities are line counts; lines are 1-based, as the host numbers them.

## Page span

Each additional viewport shows the document advanced by one "page span"
relative to its left neighbour. With an overlap of ``k`` lines the last ``k``
lines of one pane are repeated at the top of the next:

    overlap = 1, height H, base top T:
      left  : [T     ... T+H-1]
      right : [T+H-1 ... T+2H-2]

## Clamping

A viewport never scrolls past the point where the last document line sits on
its last screen row, and never above line 1.
"""


def page_span(height, overlap):
    """
    Returns the number of lines each successive viewport is advanced by.

    >>> page_span(40, 1)
    39
    >>> page_span(20, 0)
    20

    An overlap as large as the pane degrades to single-line advance:
    >>> page_span(10, 10)
    1
    >>> page_span(10, 25)
    1
    """
    return max(1, height - overlap)


def max_topline(total_lines, viewport_height):
    """
    The last valid top-of-view for a viewport of the given height.

    >>> max_topline(100, 40)
    61

    A document shorter than the viewport can only be shown from the top:
    >>> max_topline(15, 40)
    1
    """
    return max(1, total_lines - viewport_height + 1)


def clamp_topline(desired_top, total_lines, viewport_height):
    """
    Returns the nearest valid top-of-view for ``desired_top``.

    In-bounds, no effect is achieved by clamping:
    >>> clamp_topline(10, 100, 40)
    10

    Past the end of the document we stop at the last full page:
    >>> clamp_topline(90, 100, 40)
    61

    Above the first line there is nothing to be seen:
    >>> clamp_topline(0, 100, 40)
    1
    """
    return min(max(desired_top, 1), max_topline(total_lines, viewport_height))


def desired_topline(base_top, span, index):
    """Top-of-view for the viewport at 1-based ``index`` before clamping."""
    return base_top + span * (index - 1)
