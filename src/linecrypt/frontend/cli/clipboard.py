"""Clipboard utilities for the CLI frontend.

Uses pyperclip for cross-platform clipboard access.
"""

from __future__ import annotations

from typing import Iterable

import pyperclip


def copy_lines_to_clipboard(lines: Iterable[str]) -> None:
    """Copy processed lines to the system clipboard, one per line.

    Raises:
        pyperclip.PyperclipException: If clipboard access fails.
    """
    pyperclip.copy("\n".join(lines))
