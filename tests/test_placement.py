"""Tests for the spiral placement engine."""

from __future__ import annotations

import itertools

import numpy as np
import pytest

from focuscloud.model.labels import generate_labels
from focuscloud.model.placement import (
    FOCUS_RESERVE_SCALE,
    PlacementArena,
    overlaps,
    place_focused,
    place_labels,
    processing_order,
    spiral_search,
)
from focuscloud.model.sizing import size_range, spacing_profile
from focuscloud.model.types import Label, PlacedRect, SizeRange, SpacingProfile, Surface

PALETTE = ["#000000"]
DESKTOP = Surface(700, 500)


def _label(word="word", w=60.0, h=20.0, rotation=0, focused=False):
    return Label(word=word, font_size=12, color="#000", rotation=rotation, width=w, height=h, is_focused=focused)


def _assert_valid_layout(result, spacing: SpacingProfile):
    placed = result.placed
    for a, b in itertools.combinations(placed, 2):
        assert not overlaps(a.rect, b.rect, spacing.padding), (a.label.word, b.label.word)
    for p in placed:
        if p.label.is_focused:
            continue
        left, right, top, bottom = p.rect.bounds()
        assert left >= spacing.margin
        assert top >= spacing.margin
        assert right <= result.surface.width - spacing.margin
        assert bottom <= result.surface.height - spacing.margin


class TestGeometry:
    def test_extent_swaps_for_quarter_turns(self):
        assert PlacedRect(0, 0, 40, 10, 0).extent == (40, 10)
        assert PlacedRect(0, 0, 40, 10, 90).extent == (10, 40)
        assert PlacedRect(0, 0, 40, 10, -90).extent == (10, 40)
        assert PlacedRect(0, 0, 40, 10, 45).extent == (40, 10)

    def test_padded_overlap(self):
        a = PlacedRect(0, 0, 10, 10)
        b = PlacedRect(20, 0, 10, 10)
        # Edges 10 apart: separated without padding, touching with padding 5
        assert not overlaps(a, b, 0)
        assert overlaps(a, b, 5)
        assert not overlaps(a, b, 4.9)

    def test_rotation_taken_into_account(self):
        a = PlacedRect(0, 0, 100, 10, 0)
        b = PlacedRect(0, 40, 100, 10, 0)
        assert not overlaps(a, b, 0)
        assert overlaps(a, PlacedRect(0, 40, 100, 10, 90), 0)

    def test_arena_mask_matches_scalar_test(self):
        arena = PlacementArena(padding=3)
        placed = [PlacedRect(100, 100, 50, 20), PlacedRect(200, 150, 30, 60, 90)]
        for rect in placed:
            arena.add(rect)

        candidates = [PlacedRect(x, y, 40, 16) for x in range(60, 260, 17) for y in range(60, 220, 13)]
        bounds = np.array([c.bounds() for c in candidates])
        mask = arena.free_mask(bounds[:, 0], bounds[:, 1], bounds[:, 2], bounds[:, 3])
        expected = [not any(overlaps(c, r, 3) for r in placed) for c in candidates]
        assert mask.tolist() == expected


class TestOrder:
    def test_area_descending_without_focus(self):
        labels = [_label("s", 10, 10), _label("l", 100, 30), _label("m", 50, 20)]
        assert [label.word for label in processing_order(labels)] == ["l", "m", "s"]

    def test_given_order_kept_with_focus(self):
        labels = [_label("f", 10, 10, focused=True), _label("l", 100, 30), _label("s", 5, 5)]
        assert [label.word for label in processing_order(labels)] == ["f", "l", "s"]


class TestPlaceLabels:
    def test_focused_label_centered(self, rng):
        labels = [_label("focus", 120, 40, focused=True), _label("other")]
        result = place_labels(labels, DESKTOP, spacing_profile(2), rng)
        focused = result.focused
        assert focused is not None and focused.is_placed
        assert (focused.rect.center_x, focused.rect.center_y) == (350, 250)
        assert focused.rect.rotation == 0
        assert result.entries[0] is focused

    def test_focus_reserves_enlarged_zone(self):
        arena = PlacementArena(padding=0)
        rect = place_focused(_label("focus", 200, 40, focused=True), DESKTOP, arena)
        assert (rect.width, rect.height) == (200, 40)
        reserved = arena.rects[0]
        assert (reserved.width, reserved.height) == (200 * FOCUS_RESERVE_SCALE, 40 * FOCUS_RESERVE_SCALE)
        assert (reserved.center_x, reserved.center_y) == DESKTOP.center

    def test_three_fruits_all_placed(self, rng, measure):
        words = ["apple", "banana", "orange"]
        sizes = size_range(len(words))
        spacing = spacing_profile(len(words))
        labels = generate_labels(words, "banana", sizes, PALETTE, measure, "Arial", rng)
        result = place_labels(labels, DESKTOP, spacing, rng)
        assert len(result.placed) == 3
        assert result.focused.label.word == "banana"
        assert result.focused.rect.rotation == 0
        _assert_valid_layout(result, spacing)

    @pytest.mark.parametrize("seed", range(8))
    def test_random_layouts_valid(self, seed, measure):
        rng = np.random.default_rng(seed)
        count = int(rng.integers(1, 60))
        words = [f"w{'x' * int(rng.integers(1, 9))}{i}" for i in range(count)]
        sizes = SizeRange(int(rng.integers(8, 20)), int(rng.integers(20, 40)))
        spacing = spacing_profile(count, bool(rng.integers(2)))
        focus = words[0] if seed % 2 else None
        labels = generate_labels(words, focus, sizes, PALETTE, measure, "Arial", rng)
        result = place_labels(labels, Surface(int(rng.integers(350, 900)), 500), spacing, rng)
        assert len(result) == count
        _assert_valid_layout(result, spacing)

    def test_45_words_mostly_placed(self, words_45, measure):
        sizes = size_range(45, is_compact=False)
        spacing = spacing_profile(45, is_compact=False)
        assert sizes == SizeRange(12, 28)

        drop_rates = []
        for seed in range(5):
            rng = np.random.default_rng(seed)
            labels = generate_labels(words_45, words_45[seed], sizes, PALETTE, measure, "Arial", rng)
            result = place_labels(labels, DESKTOP, spacing, rng)
            _assert_valid_layout(result, spacing)
            drop_rates.append(len(result.unplaced) / len(result))
        assert np.mean(drop_rates) < 0.05

    def test_crowded_surface_drops_but_keeps_focus(self, rng):
        labels = [_label("focus", 80, 30, focused=True)] + [_label(f"w{i}", 150, 40) for i in range(30)]
        result = place_labels(labels, Surface(400, 300), spacing_profile(30), rng)
        assert result.focused.is_placed
        assert result.unplaced
        assert len(result) == 31


class TestSpiralSearch:
    def test_no_slot_on_tiny_surface(self, rng):
        # The spiral starts at radius 120, entirely outside a 100x100 surface
        spacing = SpacingProfile(padding=0, margin=0, start_radius=0, spiral_step=4)
        arena = PlacementArena(padding=0)
        assert spiral_search(_label(w=10, h=10), Surface(100, 100), spacing, arena, rng) is None
        assert len(arena) == 0

    def test_zero_step_terminates(self, rng):
        spacing = SpacingProfile(padding=0, margin=0, start_radius=0, spiral_step=0)
        arena = PlacementArena(padding=0)
        arena.add(PlacedRect(350, 250, 700, 500))
        assert spiral_search(_label(), DESKTOP, spacing, arena, rng) is None

    def test_first_slot_is_on_start_radius(self, rng):
        spacing = SpacingProfile(padding=0, margin=0, start_radius=0, spiral_step=4)
        arena = PlacementArena(padding=0)
        rect = spiral_search(_label(w=10, h=10), DESKTOP, spacing, arena, rng)
        assert rect is not None
        radius = np.hypot(rect.center_x - 350, rect.center_y - 250)
        assert radius == pytest.approx(120.0)
        assert arena.rects == [rect]
