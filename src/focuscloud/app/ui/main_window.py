"""
Host window: a text box for the words, Preview/Refresh buttons and the cloud.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Slot
from PySide6.QtWidgets import (
    QHBoxLayout, QLabel, QMainWindow, QPlainTextEdit, QPushButton, QVBoxLayout, QWidget,
)

from focuscloud.app.application import VISIBLE_APP_NAME
from focuscloud.app.controller import CloudController
from focuscloud.app.ui.cloud_view import CloudView
from focuscloud.config import CloudSettings, SettingsStore
from focuscloud.model.tokenizer import separator_name
from focuscloud.model.types import LayoutResult

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, settings: Optional[CloudSettings] = None, initial_text: str = "") -> None:
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(900, 760)

        self.settings = settings if settings is not None else SettingsStore().load()
        name = separator_name(self.settings.separator)

        central = QWidget(self)
        root = QVBoxLayout(central)

        self.hint = QLabel(self.tr("Enter words separated by {name}").format(name=name), central)
        root.addWidget(self.hint)

        self.input = QPlainTextEdit(central)
        self.input.setPlaceholderText(self.tr("Enter {name}-separated words...").format(name=name))
        self.input.setMinimumHeight(100)
        self.input.setMaximumHeight(140)
        self.input.setPlainText(initial_text)
        root.addWidget(self.input)

        buttons = QHBoxLayout()
        self.preview_button = QPushButton(self.tr("Preview"), central)
        self.refresh_button = QPushButton(self.tr("Refresh"), central)
        buttons.addWidget(self.preview_button)
        buttons.addWidget(self.refresh_button)
        root.addLayout(buttons)

        self.cloud_view = CloudView(central)
        root.addWidget(self.cloud_view, 1)

        self.setCentralWidget(central)

        self.controller = CloudController(self.cloud_view, self.settings, parent=self)
        self.controller.store.layout_finished.connect(self._on_layout_finished)

        self.preview_button.clicked.connect(self.render_input)
        self.refresh_button.clicked.connect(self.render_input)

        if initial_text:
            self.render_input()

    @Slot()
    def render_input(self) -> None:
        self.controller.render_cloud(self.input.toPlainText())

    @Slot(object)
    def _on_layout_finished(self, result: LayoutResult) -> None:
        dropped = len(result.unplaced)
        message = self.tr("Placed {placed} of {total} words").format(placed=len(result) - dropped, total=len(result))
        if dropped:
            message += self.tr(" ({n} did not fit)").format(n=dropped)
        self.statusBar().showMessage(message)
