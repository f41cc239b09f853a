"""
Configuration & Settings Persistence
====================================
This module holds the user-tunable settings of the word cloud and loads/saves
them with QSettings.

Why is this file needed?
------------------------
1. Defaults: every setting has a documented default used on first start and
   whenever a persisted value is unusable.
2. Persistence: the host application keeps one settings file per user
   (INI format, see `focuscloud.app.application.create_app`).

Exports:
    CloudSettings: The settings dataclass.
    SettingsStore: Loads/saves CloudSettings from/to QSettings.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from PySide6.QtCore import QSettings
from PySide6.QtGui import QColor

from focuscloud.model.labels import DEFAULT_PALETTE
from focuscloud.model.sizing import SpacingPreset
from focuscloud.model.tokenizer import Casing

logger = logging.getLogger(__name__)

SEPARATOR_CHOICES: tuple[str, ...] = (",", ".", " ", ";", "|")


@dataclass
class CloudSettings:
    """Settings of the word cloud; the font sizes only apply with auto_font_size off."""
    min_font_size: int = 12
    max_font_size: int = 48
    color_palette: list[str] = field(default_factory=lambda: list(DEFAULT_PALETTE))
    separator: str = ","
    spacing: SpacingPreset = SpacingPreset.NORMAL
    auto_font_size: bool = True
    auto_spacing: bool = True
    casing: Casing = Casing.AS_IS

    def palette(self) -> list[str]:
        """The configured colors, or the default palette if none are left."""
        return list(self.color_palette) or list(DEFAULT_PALETTE)


class SettingsStore:
    """Thin wrapper around QSettings under the 'cloud/' group."""
    GROUP = "cloud"

    def __init__(self, settings: Optional[QSettings] = None) -> None:
        self._settings = settings if settings is not None else QSettings()

    def load(self) -> CloudSettings:
        s = self._settings
        defaults = CloudSettings()
        loaded = replace(defaults)

        s.beginGroup(self.GROUP)
        try:
            loaded.min_font_size = self._positive_int(s, "min_font_size", defaults.min_font_size)
            loaded.max_font_size = self._positive_int(s, "max_font_size", defaults.max_font_size)
            loaded.color_palette = self._palette(s.value("color_palette"), defaults.color_palette)
            loaded.separator = self._separator(s.value("separator", defaults.separator, type=str), defaults.separator)
            loaded.spacing = self._enum(SpacingPreset, s.value("spacing"), defaults.spacing)
            loaded.casing = self._enum(Casing, s.value("casing"), defaults.casing)
            loaded.auto_font_size = s.value("auto_font_size", defaults.auto_font_size, type=bool)
            loaded.auto_spacing = s.value("auto_spacing", defaults.auto_spacing, type=bool)
        finally:
            s.endGroup()

        return loaded

    def save(self, settings: CloudSettings) -> None:
        s = self._settings
        s.beginGroup(self.GROUP)
        s.setValue("min_font_size", settings.min_font_size)
        s.setValue("max_font_size", settings.max_font_size)
        s.setValue("color_palette", ",".join(settings.color_palette))
        s.setValue("separator", settings.separator)
        s.setValue("spacing", str(settings.spacing))
        s.setValue("casing", str(settings.casing))
        s.setValue("auto_font_size", settings.auto_font_size)
        s.setValue("auto_spacing", settings.auto_spacing)
        s.endGroup()
        s.sync()
        logger.debug("Cloud settings saved.")

    # ---- value coercion ----

    @staticmethod
    def _positive_int(s: QSettings, key: str, default: int) -> int:
        try:
            number = s.value(key, default, type=int)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring invalid '{key}' setting: {s.value(key)!r}")
            return default
        if number <= 0:
            logger.warning(f"Ignoring non-positive '{key}' setting: {s.value(key)!r}")
            return default
        return number

    @staticmethod
    def _palette(value: Any, default: list[str]) -> list[str]:
        if value is None:
            return list(default)
        items = value if isinstance(value, list) else str(value).split(",")
        colors = [c.strip() for c in items if c.strip() and QColor(c.strip()).isValid()]
        if not colors:
            logger.warning(f"Color palette setting {value!r} has no usable colors, using defaults.")
            return list(default)
        return colors

    @staticmethod
    def _separator(value: str, default: str) -> str:
        if value not in SEPARATOR_CHOICES:
            logger.warning(f"Ignoring unsupported separator setting: {value!r}")
            return default
        return value

    @staticmethod
    def _enum(enum_cls, value: Any, default):
        if value is None:
            return default
        try:
            return enum_cls(str(value))
        except ValueError:
            logger.warning(f"Ignoring unknown {enum_cls.__name__} setting: {value!r}")
            return default
