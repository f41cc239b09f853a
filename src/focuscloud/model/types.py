"""
Layout Data Types
=================
Plain data containers shared by the sizing, label and placement stages.

Classes:
    SizeRange: Font size bounds for one layout pass.
    SpacingProfile: Padding/margin/spiral parameters for one layout pass.
    Label: A word with its resolved visual attributes and measured footprint.
    PlacedRect: The footprint of a placed label used for collision tests.
    Placement: One (Label, PlacedRect | None) entry of a layout.
    LayoutResult: The ordered outcome of one layout pass.
    Surface: The drawable area of one layout pass.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional

# Rotations a label may receive; only 0 and the two perpendicular ones occur.
ROTATIONS: tuple[int, ...] = (0, 90, -90)

# Fixed padding added to the measured text box (both axes).
TEXT_PADDING: int = 8


@dataclass(frozen=True)
class SizeRange:
    """Inclusive font size bounds in surface units."""
    min: int
    max: int

    def __post_init__(self) -> None:
        if self.min <= 0 or self.max <= 0:
            raise ValueError(f"Font sizes must be positive, got {self.min}..{self.max}.")
        if self.min > self.max:
            raise ValueError(f"Minimum font size {self.min} exceeds maximum {self.max}.")

    @classmethod
    def from_bounds(cls, a: int, b: int) -> SizeRange:
        """Build a range from two bounds given in any order."""
        return cls(min=min(a, b), max=max(a, b))

    @property
    def midpoint(self) -> int:
        return (self.min + self.max) // 2


@dataclass(frozen=True)
class SpacingProfile:
    padding: float
    margin: float
    start_radius: float
    spiral_step: float

    def __post_init__(self) -> None:
        for name in ("padding", "margin", "start_radius", "spiral_step"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"Spacing value '{name}' must be non-negative, got {value}.")


@dataclass(frozen=True)
class Surface:
    """Width and height of the layout area, fixed for one pass."""
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return self.width / 2, self.height / 2


@dataclass(frozen=True)
class Label:
    """
    A word plus its resolved attributes for one layout pass.

    `width` and `height` describe the unrotated text box including
    TEXT_PADDING; the rotation is applied only when the footprint is tested.
    """
    word: str
    font_size: int
    color: str
    rotation: int
    width: float
    height: float
    is_focused: bool = False

    def __post_init__(self) -> None:
        if self.rotation not in ROTATIONS:
            raise ValueError(f"Unsupported rotation {self.rotation} for '{self.word}', expected one of {ROTATIONS}.")
        if self.is_focused and self.rotation != 0:
            raise ValueError(f"Focused label '{self.word}' must not be rotated.")

    @property
    def area(self) -> float:
        return self.width * self.height



@dataclass(frozen=True)
class PlacedRect:
    center_x: float
    center_y: float
    width: float
    height: float
    rotation: int = 0

    @property
    def extent(self) -> tuple[float, float]:
        """Axis-aligned (width, height), swapped for quarter turns."""
        if abs(self.rotation) == 90:
            return self.height, self.width
        return self.width, self.height

    def bounds(self, padding: float = 0.0) -> tuple[float, float, float, float]:
        """Return (left, right, top, bottom) of the footprint grown by `padding`."""
        w, h = self.extent
        return (
            self.center_x - w / 2 - padding,
            self.center_x + w / 2 + padding,
            self.center_y - h / 2 - padding,
            self.center_y + h / 2 + padding,
        )


@dataclass(frozen=True)
class Placement:
    label: Label
    rect: Optional[PlacedRect]

    @property
    def is_placed(self) -> bool:
        return self.rect is not None


@dataclass
class LayoutResult:
    """Labels in processing order, each with its rectangle or None if dropped."""
    surface: Surface
    entries: list[Placement] = field(default_factory=list)

    def __iter__(self) -> Iterator[Placement]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def placed(self) -> list[Placement]:
        return [p for p in self.entries if p.is_placed]

    @property
    def unplaced(self) -> list[Label]:
        return [p.label for p in self.entries if not p.is_placed]

    @property
    def focused(self) -> Optional[Placement]:
        for p in self.entries:
            if p.label.is_focused:
                return p
        return None
