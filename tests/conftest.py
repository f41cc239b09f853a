"""Shared test fixtures."""

from __future__ import annotations

import os

# Qt widgets and font metrics without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import numpy as np
import pytest
from PySide6.QtWidgets import QApplication

from focuscloud.app.text_shaper import approximate_size
from focuscloud.model.labels import TextSize


FRUITS = "apple, banana, orange"

WORDS_45 = [
    "python", "cloud", "spiral", "layout", "design", "thinking", "focus", "center",
    "random", "color", "rotation", "margin", "padding", "surface", "label", "measure",
    "placement", "engine", "policy", "viewport", "compact", "desktop", "pointer", "render",
    "canvas", "glyph", "advance", "bounds", "overlap", "search", "radius", "angle",
    "archimedes", "collision", "shuffle", "palette", "weight", "family", "pixel", "scene",
    "widget", "signal", "timer", "store", "stage",
]


def approx_measure(word: str, font_size: int, font_family: str) -> TextSize:
    return approximate_size(word, font_size)


@pytest.fixture(scope="session")
def qapp() -> QApplication:
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def measure():
    return approx_measure


@pytest.fixture
def words_45() -> list[str]:
    return list(WORDS_45)


@pytest.fixture
def fruits() -> str:
    return FRUITS
