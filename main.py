"""Convenience entry point to run the linecrypt CLI.

Allows starting the tool with `python main.py -e` from the project root.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the src/ directory is on sys.path so `import linecrypt` works
ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from linecrypt.frontend.cli.app import main


if __name__ == "__main__":
    sys.exit(main())
