"""Tests for loading and saving the cloud settings."""

from __future__ import annotations

import pytest
from PySide6.QtCore import QSettings

from focuscloud.config import SEPARATOR_CHOICES, CloudSettings, SettingsStore
from focuscloud.model.labels import DEFAULT_PALETTE
from focuscloud.model.sizing import SpacingPreset
from focuscloud.model.tokenizer import Casing


@pytest.fixture
def qsettings(tmp_path):
    return QSettings(str(tmp_path / "focuscloud.ini"), QSettings.Format.IniFormat)


def test_defaults_when_empty(qsettings):
    assert SettingsStore(qsettings).load() == CloudSettings()


def test_round_trip(qapp, qsettings, tmp_path):
    saved = CloudSettings(
        min_font_size=14,
        max_font_size=40,
        color_palette=["#ff0000", "#00ff00"],
        separator=" ",
        spacing=SpacingPreset.LOOSE,
        auto_font_size=False,
        auto_spacing=False,
        casing=Casing.UPPERCASE,
    )
    SettingsStore(qsettings).save(saved)

    reopened = QSettings(str(tmp_path / "focuscloud.ini"), QSettings.Format.IniFormat)
    assert SettingsStore(reopened).load() == saved


def test_invalid_values_fall_back(qapp, qsettings, caplog):
    qsettings.beginGroup(SettingsStore.GROUP)
    qsettings.setValue("min_font_size", "tiny")
    qsettings.setValue("max_font_size", -4)
    qsettings.setValue("color_palette", "not-a-color, also bad")
    qsettings.setValue("spacing", "cramped")
    qsettings.setValue("casing", "sarcastic")
    qsettings.setValue("separator", "")
    qsettings.endGroup()

    loaded = SettingsStore(qsettings).load()
    assert loaded == CloudSettings()
    assert len(caplog.records) >= 5


def test_palette_partially_valid(qapp, qsettings):
    qsettings.beginGroup(SettingsStore.GROUP)
    qsettings.setValue("color_palette", "#123456,bogus,teal")
    qsettings.endGroup()
    assert SettingsStore(qsettings).load().color_palette == ["#123456", "teal"]


def test_empty_palette_falls_back_to_defaults():
    settings = CloudSettings(color_palette=[])
    assert settings.palette() == list(DEFAULT_PALETTE)
    settings.color_palette = ["#abcdef"]
    assert settings.palette() == ["#abcdef"]


@pytest.mark.parametrize("separator", ["#", "ab", ""])
def test_unsupported_separator_falls_back(qsettings, caplog, separator):
    qsettings.setValue(f"{SettingsStore.GROUP}/separator", separator)
    assert SettingsStore(qsettings).load().separator == ","
    assert "separator" in caplog.text


@pytest.mark.parametrize("separator", SEPARATOR_CHOICES)
def test_every_separator_choice_is_kept(qsettings, separator):
    SettingsStore(qsettings).save(CloudSettings(separator=separator))
    assert SettingsStore(qsettings).load().separator == separator


def test_typed_values_from_ini_text(tmp_path):
    path = tmp_path / "edited.ini"
    path.write_text(
        "[cloud]\nmin_font_size=9\nmax_font_size=0\nauto_font_size=false\nauto_spacing=true\n",
        encoding="utf-8",
    )
    loaded = SettingsStore(QSettings(str(path), QSettings.Format.IniFormat)).load()
    assert loaded.min_font_size == 9
    assert loaded.max_font_size == CloudSettings().max_font_size
    assert loaded.auto_font_size is False
    assert loaded.auto_spacing is True
