# -*- coding: utf-8 -*-

"""
Main entry point for launching the multipage viewer.

Usage: ``python run.py FILE [COLUMNS]``
"""

import sys
import logging
import tkinter as tk
from pathlib import Path

from multipage.logging_config import setup_logging
from multipage.app import MultipageViewer


def main():
    """
    Configure logging, main window, and launch the viewer.
    """
    setup_logging()

    if len(sys.argv) < 2:
        print("Usage: python run.py FILE [COLUMNS]")
        return 2
    path = Path(sys.argv[1])
    columns = int(sys.argv[2]) if len(sys.argv) > 2 else None

    root = tk.Tk()
    # Wide enough for three 80-column panes
    window_width, window_height = 1500, 800
    screen_width = root.winfo_screenwidth()
    screen_height = root.winfo_screenheight()
    pos_x = max(0, (screen_width // 2) - (window_width // 2))
    pos_y = max(0, (screen_height // 2) - (window_height // 2))
    root.geometry(f"{window_width}x{window_height}+{pos_x}+{pos_y}")

    MultipageViewer(root, path, columns)

    root.mainloop()
    return 0


if __name__ == '__main__':
    status = main()

    logging.info("===== Application terminated =====")
    sys.exit(status)
