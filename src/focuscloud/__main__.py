"""Allows `python -m focuscloud`."""
import sys

from focuscloud.app.main import main

if __name__ == "__main__":
    sys.exit(main())
