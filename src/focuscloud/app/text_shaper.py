"""
Text Shaper
===========
Measures the footprint of a label rendered in bold at a given pixel size.

The width is the true glyph advance reported by Qt's font metrics, the height
is simply the font size; both get the fixed TEXT_PADDING. When Qt cannot
measure (no QGuiApplication, e.g. headless scripts) the width is approximated
from the character count instead, which degrades the packing but never stops a
layout.
"""
from __future__ import annotations

import logging
import math

from PySide6.QtGui import QFont, QFontMetricsF, QGuiApplication

from focuscloud.model.labels import TextSize
from focuscloud.model.types import TEXT_PADDING

logger = logging.getLogger(__name__)

GENERIC_FONT_FAMILY: str = "Arial, sans-serif"

# Average advance of a glyph relative to the font size, used without metrics.
APPROX_CHAR_WIDTH: float = 0.6


def approximate_size(word: str, font_size_px: int) -> TextSize:
    width = math.ceil(len(word) * font_size_px * APPROX_CHAR_WIDTH) + TEXT_PADDING
    return TextSize(width, font_size_px + TEXT_PADDING)


def primary_family(font_family: str) -> str:
    """First family of a CSS-like list: 'Arial, sans-serif' -> 'Arial'."""
    first = font_family.split(",")[0].strip().strip("'\"")
    return first or GENERIC_FONT_FAMILY.split(",")[0]


def bold_font(font_size_px: int, font_family: str, weight: QFont.Weight = QFont.Weight.Bold) -> QFont:
    font = QFont(primary_family(font_family))
    font.setPixelSize(max(1, int(font_size_px)))
    font.setWeight(weight)
    return font


class TextShaper:
    """
    Label measurement with a Qt backend and an approximate fallback.

    Args:
        use_metrics: Set to False to always approximate.
    """
    def __init__(self, use_metrics: bool = True) -> None:
        self.use_metrics = use_metrics
        self._warned = False

    def metrics_available(self) -> bool:
        return self.use_metrics and QGuiApplication.instance() is not None

    def measure(self, word: str, font_size_px: int, font_family: str = GENERIC_FONT_FAMILY) -> TextSize:
        if not self.metrics_available():
            self._warn_fallback("no GUI application for font metrics")
            return approximate_size(word, font_size_px)

        try:
            metrics = QFontMetricsF(bold_font(font_size_px, font_family))
            advance = metrics.horizontalAdvance(word)
        except RuntimeError as e:
            self._warn_fallback(str(e))
            return approximate_size(word, font_size_px)

        return TextSize(math.ceil(advance) + TEXT_PADDING, font_size_px + TEXT_PADDING)

    def _warn_fallback(self, reason: str) -> None:
        if not self._warned:
            logger.warning(f"Text measurement unavailable ({reason}), using approximate label widths.")
            self._warned = True
