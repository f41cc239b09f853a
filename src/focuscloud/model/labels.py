"""
Label Generator
===============
Turns the word list of one layout pass into Labels: every word receives a
font size, a color, a rotation and its measured footprint.

The random draws come from an injected `numpy.random.Generator`, so tests can
pin them with a seed. Measuring is delegated to a callable, usually
`TextShaper.measure`, which keeps this module free of any Qt dependency.
"""
from __future__ import annotations

import logging
from typing import Callable, NamedTuple, Optional, Sequence

import numpy as np

from focuscloud.model.types import ROTATIONS, Label, SizeRange

logger = logging.getLogger(__name__)

DEFAULT_PALETTE: tuple[str, ...] = ("#0066cc", "#cc6600", "#cc0066", "#6600cc", "#00cc66")

# Four out of six labels stay horizontal, the rest are turned a quarter.
ROTATION_CHOICES: tuple[int, ...] = (0, 0, 0) + ROTATIONS

# The focused word is drawn this much larger than the middle of the range.
FOCUS_SIZE_BOOST: int = 10


class TextSize(NamedTuple):
    width: float
    height: float


MeasureFn = Callable[[str, int, str], TextSize]


def focus_font_size(size_range: SizeRange) -> int:
    return size_range.midpoint + FOCUS_SIZE_BOOST


def order_words(words: Sequence[str], focus: Optional[str], rng: np.random.Generator) -> list[str]:
    """
    Shuffle the words, putting the focus word first.

    Only one occurrence of the focus word is pulled out; its duplicates stay in
    the shuffled remainder as ordinary words.
    """
    rest = list(words)
    head: list[str] = []
    if focus is not None and focus in rest:
        rest.remove(focus)
        head = [focus]
    shuffled = [rest[i] for i in rng.permutation(len(rest))]
    return head + shuffled


def generate_labels(
    words: Sequence[str],
    focus: Optional[str],
    size_range: SizeRange,
    palette: Sequence[str],
    measure: MeasureFn,
    font_family: str,
    rng: np.random.Generator,
) -> list[Label]:
    """
    Build the labels for one layout pass.

    Args:
        words: Words in input order; duplicates are distinct labels.
        focus: Word pinned at the center, or None.
        size_range: Range for the random font sizes of unfocused words.
        palette: Colors to draw from; an empty palette uses DEFAULT_PALETTE.
        measure: (word, font_size, font_family) -> TextSize.
        font_family: Family handed to `measure`.
        rng: Source of all random draws.

    Returns:
        Labels with the focused one (if any) first, the rest shuffled.
    """
    colors = list(palette) or list(DEFAULT_PALETTE)
    ordered = order_words(words, focus, rng)

    labels: list[Label] = []
    for i, word in enumerate(ordered):
        is_focused = focus is not None and i == 0 and word == focus
        if is_focused:
            font_size = focus_font_size(size_range)
            rotation = 0
        else:
            font_size = int(rng.integers(size_range.min, size_range.max, endpoint=True))
            rotation = int(ROTATION_CHOICES[rng.integers(len(ROTATION_CHOICES))])
        color = colors[rng.integers(len(colors))]

        size = measure(word, font_size, font_family)
        labels.append(Label(
            word=word,
            font_size=font_size,
            color=color,
            rotation=rotation,
            width=size.width,
            height=size.height,
            is_focused=is_focused,
        ))

    logger.debug(f"Generated {len(labels)} labels (focus={focus!r}, sizes {size_range.min}-{size_range.max}).")
    return labels
