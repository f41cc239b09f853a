"""Interactive word clouds with a focusable center word."""

__version__ = "0.1.0"
