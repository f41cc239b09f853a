"""
Sizing Policy
=============
Maps the number of words and the viewport class to a font size range and a
spacing profile.

Why is this file needed?
------------------------
1. Readability: few words get big, loosely spaced labels; dense clouds get
   small, tightly packed ones so most of them still fit.
2. Small screens: a second, tighter table is used for compact viewports.

The tables are hand-tuned buckets over the word count (<=10, <=20, <=40,
<=70, >70). Whether a viewport is compact is decided by the caller
(see `is_compact_viewport`), this module never looks at a surface.
"""
from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from focuscloud.model.types import SizeRange, SpacingProfile

if TYPE_CHECKING:
    from focuscloud.config import CloudSettings

# Surfaces narrower than this use the compact tables.
COMPACT_VIEWPORT_WIDTH: int = 500


class SpacingPreset(StrEnum):
    COMPACT = "compact"
    NORMAL = "normal"
    COMFORTABLE = "comfortable"
    LOOSE = "loose"


SPACING_PRESETS: dict[SpacingPreset, SpacingProfile] = {
    SpacingPreset.COMPACT: SpacingProfile(padding=3, margin=5, start_radius=1, spiral_step=1.5),
    SpacingPreset.NORMAL: SpacingProfile(padding=12, margin=12, start_radius=5, spiral_step=4),
    SpacingPreset.COMFORTABLE: SpacingProfile(padding=22, margin=18, start_radius=12, spiral_step=7),
    SpacingPreset.LOOSE: SpacingProfile(padding=35, margin=25, start_radius=20, spiral_step=10),
}

# (upper word count bound, size range); the last entry catches everything above.
_DESKTOP_SIZES: list[tuple[int | None, SizeRange]] = [
    (10, SizeRange(20, 56)),   # big & bold
    (20, SizeRange(16, 40)),   # balanced
    (40, SizeRange(14, 32)),   # compact
    (70, SizeRange(12, 28)),   # dense
    (None, SizeRange(10, 22)), # very dense
]

_COMPACT_SIZES: list[tuple[int | None, SizeRange]] = [
    (10, SizeRange(14, 32)),
    (20, SizeRange(12, 26)),
    (40, SizeRange(10, 20)),
    (70, SizeRange(9, 16)),
    (None, SizeRange(8, 14)),
]

_DESKTOP_SPACING: list[tuple[int | None, SpacingPreset]] = [
    (10, SpacingPreset.LOOSE),
    (20, SpacingPreset.COMFORTABLE),
    (40, SpacingPreset.NORMAL),
    (None, SpacingPreset.COMPACT),
]

_COMPACT_SPACING: list[tuple[int | None, SpacingPreset]] = [
    (10, SpacingPreset.COMFORTABLE),
    (20, SpacingPreset.NORMAL),
    (None, SpacingPreset.COMPACT),
]


def _bucket(table, word_count: int):
    if word_count < 0:
        raise ValueError(f"Word count must be non-negative, got {word_count}.")
    for upper, value in table:
        if upper is None or word_count <= upper:
            return value
    raise AssertionError("Sizing table has no catch-all bucket.")


def is_compact_viewport(width: float) -> bool:
    return width < COMPACT_VIEWPORT_WIDTH


def size_range(word_count: int, is_compact: bool = False) -> SizeRange:
    """Return the automatic font size range for the given word count."""
    return _bucket(_COMPACT_SIZES if is_compact else _DESKTOP_SIZES, word_count)


def spacing_preset(word_count: int, is_compact: bool = False) -> SpacingPreset:
    return _bucket(_COMPACT_SPACING if is_compact else _DESKTOP_SPACING, word_count)


def spacing_profile(word_count: int, is_compact: bool = False) -> SpacingProfile:
    """Return the automatic spacing profile for the given word count."""
    return SPACING_PRESETS[spacing_preset(word_count, is_compact)]


def resolve_size_range(settings: CloudSettings, word_count: int, is_compact: bool) -> SizeRange:
    """Use the policy table, or the user's fixed range when auto sizing is off."""
    if settings.auto_font_size:
        return size_range(word_count, is_compact)
    return SizeRange.from_bounds(settings.min_font_size, settings.max_font_size)


def resolve_spacing(settings: CloudSettings, word_count: int, is_compact: bool) -> SpacingProfile:
    """Use the policy table, or the user's preset when auto spacing is off."""
    if settings.auto_spacing:
        return spacing_profile(word_count, is_compact)
    return SPACING_PRESETS[SpacingPreset(settings.spacing)]
