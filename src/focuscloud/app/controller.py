"""
Interaction Controller
======================
Runs layout passes and reacts to the user selecting a word.

Why is this file needed?
------------------------
1. Orchestration: a pass generates the labels (MEASURING), places them once
   the surface has settled (POSITIONING) and hands the result to the view
   (PLACED).
2. Surface readiness: the hand-off between measuring and positioning is
   deferred by a scheduler so the surface size is read after the view is on
   screen, not when the labels are generated.
3. Refocus: selecting a word emits `focus_requested`, which starts a fresh pass
   with that word in the center. A pass that was superseded before its
   deferred step ran is ignored.

Classes:
    CloudController: Owns the store and drives the passes for one CloudView.

Functions:
    render_cloud: Entry point for hosts; (re)renders text into a view.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

import numpy as np
from PySide6.QtCore import QObject, QTimer, Signal, Slot

from focuscloud.app.state import CloudInput, CloudPass, CloudStore, LayoutStage
from focuscloud.app.text_shaper import TextShaper
from focuscloud.app.ui.cloud_view import COMPACT_SURFACE_HEIGHT, SURFACE_HEIGHT, CloudView
from focuscloud.config import CloudSettings
from focuscloud.model.labels import generate_labels
from focuscloud.model.placement import place_labels
from focuscloud.model.sizing import is_compact_viewport, resolve_size_range, resolve_spacing
from focuscloud.model.tokenizer import parse_words

logger = logging.getLogger(__name__)

Scheduler = Callable[[int, Callable[[], None]], None]

EMPTY_INPUT_MESSAGE = "No words provided. Add {separator}-separated words."

# Delay before the first pass, lets the host finish mounting the view (ms)
INITIAL_DELAY_MS: int = 100
# Delay between measuring and positioning (ms)
DEFER_MS: int = 50


def qt_scheduler(delay_ms: int, callback: Callable[[], None]) -> None:
    QTimer.singleShot(delay_ms, callback)


class CloudController(QObject):
    focus_requested = Signal(str)

    def __init__(
        self,
        view: CloudView,
        settings: Optional[CloudSettings] = None,
        *,
        shaper: Optional[TextShaper] = None,
        rng: Optional[np.random.Generator] = None,
        scheduler: Optional[Scheduler] = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.view = view
        self.settings = settings or CloudSettings()
        self.shaper = shaper or TextShaper()
        self.rng = rng if rng is not None else np.random.default_rng()
        self._schedule = scheduler or qt_scheduler

        self.store = CloudStore(self)
        self.focus_requested.connect(self.request_layout)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def render_cloud(self, source_text: str, view: Optional[CloudView] = None) -> None:
        """
        Clear the view and lay out `source_text` from scratch.

        Empty input shows a placeholder instead of a cloud. Otherwise the first
        pass focuses a random word after INITIAL_DELAY_MS.
        """
        if view is not None:
            self.view = view

        s = self.settings
        separator = s.separator or ","
        words = parse_words(source_text, separator, s.casing)
        self.view.clear()

        if not words:
            logger.info("No words to render, showing placeholder.")
            self.store.set_input(None)
            self.view.show_placeholder(EMPTY_INPUT_MESSAGE.format(separator=separator))
            return

        is_compact = is_compact_viewport(self.view.surface_width())
        cloud_input = CloudInput(
            words=words,
            size_range=resolve_size_range(s, len(words), is_compact),
            spacing=resolve_spacing(s, len(words), is_compact),
            palette=s.palette(),
            is_compact=is_compact,
            surface_height=COMPACT_SURFACE_HEIGHT if is_compact else SURFACE_HEIGHT,
        )
        self.view.set_surface_height(cloud_input.surface_height)
        self.store.set_input(cloud_input)
        logger.info(
            f"Rendering {len(words)} words (compact={is_compact}, "
            f"sizes {cloud_input.size_range.min}-{cloud_input.size_range.max})."
        )

        generation = self.store.generation
        self._schedule(INITIAL_DELAY_MS, lambda: self._focus_random_word(generation))

    @Slot(str)
    def request_layout(self, focus: Optional[str] = None) -> None:
        """Start a new pass with `focus` pinned at the center (None for no focus)."""
        cloud_input = self.store.input
        if cloud_input is None:
            logger.warning("Layout requested before any words were rendered.")
            return

        self.view.clear()
        cloud_pass = self.store.begin_pass(focus)

        self.store.set_stage(LayoutStage.MEASURING)
        cloud_pass.labels = generate_labels(
            words=cloud_input.words,
            focus=focus,
            size_range=cloud_input.size_range,
            palette=cloud_input.palette,
            measure=self.shaper.measure,
            font_family=self.view.font_family(),
            rng=self.rng,
        )

        self._schedule(DEFER_MS, lambda: self._position(cloud_pass))

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _focus_random_word(self, generation: int) -> None:
        cloud_input = self.store.input
        if generation != self.store.generation or cloud_input is None:
            logger.debug("Skipping initial focus of a replaced input.")
            return
        word = cloud_input.words[int(self.rng.integers(len(cloud_input.words)))]
        self.request_layout(word)

    def _position(self, cloud_pass: CloudPass) -> None:
        if not self.store.is_current(cloud_pass):
            logger.debug(f"Skipping stale layout pass {cloud_pass.generation}.")
            return

        self.store.set_stage(LayoutStage.POSITIONING)
        result = place_labels(
            cloud_pass.labels,
            surface=self.view.surface(),
            spacing=self.store.input.spacing,
            rng=self.rng,
        )
        self.view.show_result(result, on_select=self.focus_requested.emit)
        self.store.finish_pass(cloud_pass, result)


def render_cloud(source_text: str, container: CloudView, settings: Optional[CloudSettings] = None) -> None:
    """
    Render `source_text` into `container`, replacing whatever it showed.

    The controller is created on first use and lives as long as the view.
    """
    controller: Optional[CloudController] = getattr(container, "cloud_controller", None)
    if controller is None:
        controller = CloudController(container, settings, parent=container)
        container.cloud_controller = controller
    elif settings is not None:
        controller.settings = settings
    controller.render_cloud(source_text)
