"""Tkinter front-end for multipage.

A text viewer whose panes implement the host interface, so the layout
services can be driven interactively.
"""

from .tk_host import TkHost  # noqa: F401

__all__: list[str] = [
    "TkHost",
]
