from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

from PySide6.QtCore import QObject, Signal

from focuscloud.model.types import Label, LayoutResult, SizeRange, SpacingProfile


class LayoutStage(IntEnum):
    """Stages of one layout pass; every pass starts again from IDLE."""
    IDLE = 0
    MEASURING = 1
    POSITIONING = 2
    PLACED = 3


@dataclass
class CloudInput:
    """What `render_cloud` resolved once for all passes over the same text."""
    words: list[str]
    size_range: SizeRange
    spacing: SpacingProfile
    palette: list[str]
    is_compact: bool
    surface_height: int


@dataclass
class CloudPass:
    """Labels and result of a single layout pass."""
    generation: int
    focus: Optional[str]
    labels: list[Label] = field(default_factory=list)
    result: Optional[LayoutResult] = None


class CloudStore(QObject):
    """
    Central state of one cloud with signals for the view and the status bar.

    The generation counter grows with every new input and every new pass, so a
    deferred callback can tell whether the pass it belongs to is still current.
    """
    stage_changed = Signal(int)
    layout_finished = Signal(object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.input: Optional[CloudInput] = None
        self.current: Optional[CloudPass] = None
        self._stage = LayoutStage.IDLE
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def stage(self) -> LayoutStage:
        return self._stage

    def set_stage(self, stage: LayoutStage) -> None:
        self._stage = stage
        self.stage_changed.emit(int(stage))

    def set_input(self, cloud_input: Optional[CloudInput]) -> None:
        self._generation += 1
        self.input = cloud_input
        self.current = None
        self.set_stage(LayoutStage.IDLE)

    def begin_pass(self, focus: Optional[str]) -> CloudPass:
        self._generation += 1
        self.current = CloudPass(generation=self._generation, focus=focus)
        self.set_stage(LayoutStage.IDLE)
        return self.current

    def is_current(self, cloud_pass: CloudPass) -> bool:
        return self.current is cloud_pass and cloud_pass.generation == self._generation

    def finish_pass(self, cloud_pass: CloudPass, result: LayoutResult) -> None:
        cloud_pass.result = result
        self.set_stage(LayoutStage.PLACED)
        self.layout_finished.emit(result)
