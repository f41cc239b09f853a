"""
Entry Point Script (Bootstrap)
==============================
Starts the application straight from a source checkout.

It is located outside the 'src' package and adds 'src' to 'sys.path' so
imports like 'from focuscloud.model...' resolve without installing.

Usage:
    $ python run.py [FILE]
"""
import os
import sys

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from focuscloud.app.main import main

if __name__ == "__main__":
    sys.exit(main())
