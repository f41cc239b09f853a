"""
Run with: python -m focuscloud [FILE]

FILE is an optional text file whose content pre-fills the input box.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Sequence

from focuscloud.app.application import create_app
from focuscloud.app.ui.main_window import MainWindow
from focuscloud.logging_config import setup_logging

logger = logging.getLogger(__name__)


def read_initial_text(args: Sequence[str]) -> str:
    if not args:
        return ""
    path = Path(args[0])
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Could not read '{path}': {e}")
        return ""


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the application."""
    argv = list(sys.argv if argv is None else argv)
    setup_logging()

    app = create_app(argv)
    win = MainWindow(initial_text=read_initial_text(argv[1:]))
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
