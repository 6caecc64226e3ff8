# -*- coding: utf-8 -*-
"""Tk-based viewer front-end for multipage.

Exposes the :class:`MultipageViewer` widget, which is instantiated by
``run.py``. The viewer shows one text file in side-by-side panes and accepts
the multipage commands in a command line at the bottom of the window
(``:MultipageEnable 3``, ``:MultipageToggle``, ``:MultipageDisable``).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import tkinter as tk
from tkinter import ttk

from multipage.bootstrap import setup
from multipage.core.context import MultipageContext
from multipage.core.exceptions import MultipageError
from multipage.ui.tk_host import TkHost
from multipage.version import get_app_version

logger = logging.getLogger(__name__)

__all__ = ["MultipageViewer"]


class MultipageViewer:
    """Main application widget wrapping all Tkinter UI components."""

    def __init__(self, root: tk.Tk, path: Optional[Path] = None, columns: Optional[int] = None) -> None:
        self.root = root
        self._logger = logging.getLogger(f"{__name__}.MultipageViewer")

        self.root.title(f"Multipage {get_app_version()}")

        # --- Widgets ---------------------------------------------------
        self.paned = ttk.Panedwindow(self.root, orient="horizontal")
        self.paned.pack(fill="both", expand=True)

        bottom = ttk.Frame(self.root)
        bottom.pack(fill="x", side="bottom")
        self.command_var = tk.StringVar()
        self.command_entry = ttk.Entry(bottom, textvariable=self.command_var)
        self.command_entry.pack(fill="x", side="left", expand=True, padx=4, pady=2)
        self.command_entry.bind("<Return>", self._on_command)
        self.status_label = ttk.Label(bottom, text="", width=40, anchor="e")
        self.status_label.pack(side="right", padx=4)

        # --- Host and services -----------------------------------------
        self.host = TkHost(self.paned)
        self.context: MultipageContext = setup(self.host)

        if path is not None:
            self.open_file(path)
            if columns:
                # Panes have no height until Tk has mapped the window.
                self.root.after(200, lambda: self.run_command(f"MultipageEnable {columns}"))

        self.root.bind("<Control-m>", lambda _e: self.run_command("MultipageToggle"))
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def open_file(self, path: Path) -> None:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
        document = self.host.load_document(str(path), text)
        viewports = self.host.list_viewports(self.host.group)
        if viewports:
            self.host.display(viewports[0], document)
        else:
            self.host.open_viewport(document)
        self._set_status(f"{Path(path).name}: {self.host.line_count(document)} lines")
        self._logger.info("Opened %s", path)

    def run_command(self, line: str) -> None:
        try:
            result = self.context.commands.execute_line(line)
        except MultipageError as exc:
            self._set_status(str(exc))
            self._logger.warning("Command failed: %s", exc)
            return
        if result is None:
            self._set_status("No document")
            return
        state = "on" if result.enabled else "off"
        self._set_status(f"multipage {state} ({len(result.viewports)} panes)")

    def on_close(self) -> None:
        self.context.detach()
        self.root.destroy()
        logger.info("===== Viewer closed =====")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _on_command(self, _event: object = None) -> None:
        line = self.command_var.get()
        self.command_var.set("")
        if line.strip():
            self.run_command(line)

    def _set_status(self, message: str) -> None:
        self.status_label.configure(text=message)
