from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QEvent, Qt, QTimer
from PySide6.QtGui import QColor, QFont, QGuiApplication, QPainter
from PySide6.QtWidgets import (
    QFrame, QGraphicsScene, QGraphicsSimpleTextItem, QGraphicsTextItem, QGraphicsView, QWidget,
)

from focuscloud.app.text_shaper import GENERIC_FONT_FAMILY, bold_font
from focuscloud.model.types import LayoutResult, Placement, Surface

logger = logging.getLogger(__name__)

# Surface size used before the view has been laid out on screen
FALLBACK_SURFACE_WIDTH: int = 700
SCREEN_SIDE_PADDING: int = 40
SURFACE_HEIGHT: int = 500
COMPACT_SURFACE_HEIGHT: int = 400

FOCUS_SCALE: float = 1.2
HOVER_SCALE: float = 1.1
FOCUS_Z: float = 50
HOVER_Z: float = 100
BASE_Z: float = 1

# A cancelled touch keeps its feedback this long (ms)
TOUCH_RESET_DELAY_MS: int = 100


class WordItem(QGraphicsSimpleTextItem):
    """
    One placed label.

    The item is rotated around its own center, which sits on the center of the
    placed rectangle. Clicking or tapping a non-focused word calls
    `on_select(word)`. Hover and touch give the same raised feedback; a
    cancelled touch hands the item to `on_touch_cancel`, which resets it after
    a short delay (immediately when no callback is given).
    """
    def __init__(
        self,
        placement: Placement,
        font_family: str,
        on_select: Callable[[str], None],
        on_touch_cancel: Optional[Callable[[WordItem], None]] = None,
        parent=None,
    ) -> None:
        label = placement.label
        super().__init__(label.word, parent)
        self.label = label
        self._on_select = on_select
        self._on_touch_cancel = on_touch_cancel

        weight = QFont.Weight.Black if label.is_focused else QFont.Weight.Bold
        self.setFont(bold_font(label.font_size, font_family, weight))
        self.setBrush(QColor(label.color))
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setAcceptHoverEvents(not label.is_focused)
        self.setAcceptTouchEvents(not label.is_focused)

        br = self.boundingRect()
        self.setTransformOriginPoint(br.center())
        rect = placement.rect
        self.setPos(rect.center_x - br.width() / 2, rect.center_y - br.height() / 2)
        self.setRotation(label.rotation)

        if label.is_focused:
            self.setScale(FOCUS_SCALE)
            self.setZValue(FOCUS_Z)
        else:
            self.setZValue(BASE_Z)

    @property
    def is_focused(self) -> bool:
        return self.label.is_focused

    def select(self) -> None:
        if not self.is_focused:
            self._on_select(self.label.word)

    def set_highlighted(self, highlighted: bool) -> None:
        """Raise and enlarge the word; the focused word keeps its own styling."""
        if self.is_focused:
            return
        self.setScale(HOVER_SCALE if highlighted else 1.0)
        self.setZValue(HOVER_Z if highlighted else BASE_Z)

    def hoverEnterEvent(self, event) -> None:
        self.set_highlighted(True)
        super().hoverEnterEvent(event)

    def hoverLeaveEvent(self, event) -> None:
        self.set_highlighted(False)
        super().hoverLeaveEvent(event)

    def sceneEvent(self, event) -> bool:
        kind = event.type()
        if kind == QEvent.Type.TouchBegin:
            self.set_highlighted(True)
            event.accept()
            return True
        if kind == QEvent.Type.TouchEnd:
            event.accept()
            self.select()
            return True
        if kind == QEvent.Type.TouchCancel:
            if self._on_touch_cancel is not None:
                self._on_touch_cancel(self)
            else:
                self.set_highlighted(False)
            return True
        return super().sceneEvent(event)

    def mousePressEvent(self, event) -> None:
        # Accept the press, otherwise the release is never delivered here
        if event.button() == Qt.MouseButton.LeftButton:
            event.accept()
        else:
            super().mousePressEvent(event)

    def mouseReleaseEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton and self.contains(event.pos()):
            event.accept()
            self.select()
        else:
            super().mouseReleaseEvent(event)


class CloudView(QGraphicsView):
    """
    Render surface of the cloud.

    The scene uses view pixels as layout units with the origin in the top-left
    corner, so a LayoutResult can be drawn without any transformation.
    """
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setRenderHints(self.renderHints() | QPainter.RenderHint.Antialiasing | QPainter.RenderHint.TextAntialiasing)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)

        self._scene = QGraphicsScene(self)
        self.setScene(self._scene)

        self._surface_height: int = SURFACE_HEIGHT
        self.word_items: list[WordItem] = []
        self.placeholder: Optional[QGraphicsTextItem] = None
        self.cloud_controller = None  # attached by controller.render_cloud

        self._touched: list[WordItem] = []
        self._touch_reset_timer = QTimer(self)
        self._touch_reset_timer.setSingleShot(True)
        self._touch_reset_timer.setInterval(TOUCH_RESET_DELAY_MS)
        self._touch_reset_timer.timeout.connect(self._reset_touched)

    # ---- surface ----

    def is_attached(self) -> bool:
        """True once the view is shown inside a visible window."""
        return self.isVisible() and self.viewport().width() > 0

    def surface_width(self) -> int:
        if self.is_attached():
            return self.viewport().width()
        screen = QGuiApplication.primaryScreen()
        if screen is not None:
            return min(screen.availableGeometry().width() - SCREEN_SIDE_PADDING, FALLBACK_SURFACE_WIDTH)
        return FALLBACK_SURFACE_WIDTH

    def set_surface_height(self, height: int) -> None:
        self._surface_height = height
        self.setFixedHeight(height)

    def surface(self) -> Surface:
        return Surface(width=self.surface_width(), height=self._surface_height)

    def font_family(self) -> str:
        if self.is_attached():
            return self.font().family() or GENERIC_FONT_FAMILY
        return GENERIC_FONT_FAMILY

    # ---- content ----

    def clear(self) -> None:
        self._touch_reset_timer.stop()
        self._touched.clear()
        self._scene.clear()
        self.word_items.clear()
        self.placeholder = None

    def show_placeholder(self, text: str) -> None:
        self.clear()
        self.placeholder = self._scene.addText(text)
        self.placeholder.setDefaultTextColor(self.palette().text().color())
        self._scene.setSceneRect(0, 0, self.surface_width(), self._surface_height)

    def show_result(self, result: LayoutResult, on_select: Callable[[str], None]) -> None:
        """Draw the placed labels of `result`; unplaced ones are skipped."""
        self.clear()
        family = self.font_family()
        for placement in result.placed:
            item = WordItem(placement, family, on_select, on_touch_cancel=self.schedule_touch_reset)
            self._scene.addItem(item)
            self.word_items.append(item)
        self._scene.setSceneRect(0, 0, result.surface.width, result.surface.height)
        logger.debug(f"Rendered {len(self.word_items)} words.")

    def item_for(self, word: str) -> Optional[WordItem]:
        for item in self.word_items:
            if item.label.word == word:
                return item
        return None

    def schedule_touch_reset(self, item: WordItem) -> None:
        self._touched.append(item)
        self._touch_reset_timer.start()

    def _reset_touched(self) -> None:
        for item in self._touched:
            item.set_highlighted(False)
        self._touched.clear()
