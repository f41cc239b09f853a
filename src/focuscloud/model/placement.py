"""
Placement Engine
================
Assigns on-surface coordinates to the labels of one layout pass.

Algorithm
---------
The focused label (if any) is pinned at the surface center and reserves a
footprint 1.5x its own size. Every other label walks an Archimedean spiral
around the center, starting at a fixed radius and a random angle. A spiral
step is accepted when the label's axis-aligned footprint (width and height
swapped for quarter turns) lies within the margins and, grown by `padding` on
every side, does not touch any already placed footprint grown the same way.
A label whose walk leaves the search bound stays unplaced.

The walk is evaluated in numpy batches of spiral steps; the first acceptable
step of a batch is the same one the step-by-step walk would stop at.
"""
from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

import numpy as np

from focuscloud.model.types import Label, LayoutResult, Placement, PlacedRect, SpacingProfile, Surface

logger = logging.getLogger(__name__)

# Spiral search constants
SPIRAL_START_RADIUS: float = 120.0  # just outside the focused word's reserved zone
ANGLE_STEP: float = 0.08  # radians
MAX_ATTEMPTS: int = 20000
MAX_RADIUS_FACTOR: float = 2.0  # times the larger surface dimension

FOCUS_RESERVE_SCALE: float = 1.5

_BATCH_SIZE: int = 1024


def overlaps(a: PlacedRect, b: PlacedRect, padding: float) -> bool:
    """Padded AABB test: overlapping unless separated along some axis."""
    l1, r1, t1, b1 = a.bounds(padding)
    l2, r2, t2, b2 = b.bounds(padding)
    return not (r1 < l2 or l1 > r2 or b1 < t2 or t1 > b2)


class PlacementArena:
    """
    Accumulator of the rectangles placed so far, in placement order.

    The padded bounds are mirrored in an (N, 4) array of
    (left, right, top, bottom) rows for vectorized collision tests.
    """
    def __init__(self, padding: float) -> None:
        self.padding = padding
        self.rects: list[PlacedRect] = []
        self._bounds = np.empty((0, 4), dtype=np.float64)

    def __len__(self) -> int:
        return len(self.rects)

    def add(self, rect: PlacedRect) -> None:
        self.rects.append(rect)
        self._bounds = np.vstack([self._bounds, np.asarray(rect.bounds(self.padding))])

    def free_mask(
        self,
        left: np.ndarray,
        right: np.ndarray,
        top: np.ndarray,
        bottom: np.ndarray,
    ) -> np.ndarray:
        """
        For K candidate footprints (unpadded edges), return a (K,) mask that is
        True where the padded candidate touches no placed rectangle.
        """
        if not self.rects:
            return np.ones(left.shape, dtype=bool)

        p = self.padding
        placed = self._bounds
        separated = (
            ((right + p)[:, None] < placed[:, 0])
            | ((left - p)[:, None] > placed[:, 1])
            | ((bottom + p)[:, None] < placed[:, 2])
            | ((top - p)[:, None] > placed[:, 3])
        )
        return separated.all(axis=1)


def processing_order(labels: Sequence[Label]) -> list[Label]:
    """Largest footprint first, unless a focused label must lead."""
    if any(label.is_focused for label in labels):
        return list(labels)
    return sorted(labels, key=lambda label: label.area, reverse=True)


def place_focused(label: Label, surface: Surface, arena: PlacementArena) -> PlacedRect:
    cx, cy = surface.center
    reserved = PlacedRect(
        center_x=cx,
        center_y=cy,
        width=label.width * FOCUS_RESERVE_SCALE,
        height=label.height * FOCUS_RESERVE_SCALE,
        rotation=label.rotation,
    )
    arena.add(reserved)
    return PlacedRect(cx, cy, label.width, label.height, label.rotation)


def spiral_search(
    label: Label,
    surface: Surface,
    spacing: SpacingProfile,
    arena: PlacementArena,
    rng: np.random.Generator,
) -> Optional[PlacedRect]:
    """
    Walk the spiral until a free, in-bounds slot is found.

    Returns:
        The accepted rectangle (also recorded in `arena`), or None when the
        radius bound or MAX_ATTEMPTS is reached first.
    """
    cx, cy = surface.center
    probe = PlacedRect(0.0, 0.0, label.width, label.height, label.rotation)
    half_w, half_h = (d / 2 for d in probe.extent)
    m = spacing.margin

    max_radius = MAX_RADIUS_FACTOR * max(surface.width, surface.height)
    radial_step = spacing.spiral_step * (ANGLE_STEP / (2 * math.pi))
    start_angle = rng.uniform(0.0, 2 * math.pi)

    for first in range(0, MAX_ATTEMPTS, _BATCH_SIZE):
        steps = np.arange(first, min(first + _BATCH_SIZE, MAX_ATTEMPTS))
        radii = SPIRAL_START_RADIUS + radial_step * steps
        within_radius = radii < max_radius
        steps, radii = steps[within_radius], radii[within_radius]
        if steps.size == 0:
            break

        angles = start_angle + ANGLE_STEP * steps
        xs = cx + radii * np.cos(angles)
        ys = cy + radii * np.sin(angles)
        left, right = xs - half_w, xs + half_w
        top, bottom = ys - half_h, ys + half_h

        ok = (left >= m) & (right <= surface.width - m) & (top >= m) & (bottom <= surface.height - m)
        if ok.any():
            ok[ok] = arena.free_mask(left[ok], right[ok], top[ok], bottom[ok])

        hits = np.flatnonzero(ok)
        if hits.size:
            i = hits[0]
            rect = PlacedRect(float(xs[i]), float(ys[i]), label.width, label.height, label.rotation)
            arena.add(rect)
            return rect

        if not within_radius.all():
            break

    return None


def place_labels(
    labels: Sequence[Label],
    surface: Surface,
    spacing: SpacingProfile,
    rng: np.random.Generator,
) -> LayoutResult:
    """
    Place every label that fits and return the layout in processing order.

    Unplaced labels are kept in the result with `rect=None`; they are an
    expected outcome for crowded surfaces, not an error.
    """
    arena = PlacementArena(padding=spacing.padding)
    result = LayoutResult(surface=surface)

    for label in processing_order(labels):
        if label.is_focused:
            rect = place_focused(label, surface, arena)
        else:
            rect = spiral_search(label, surface, spacing, arena, rng)
            if rect is None:
                logger.debug(f"Dropped '{label.word}': no free slot within the spiral bound.")
        result.entries.append(Placement(label=label, rect=rect))

    dropped = len(result.unplaced)
    logger.info(
        f"Placed {len(result) - dropped}/{len(result)} labels on "
        f"{surface.width:g}x{surface.height:g} surface ({dropped} dropped)."
    )
    return result
