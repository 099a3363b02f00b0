from __future__ import annotations

import pytest

from line_editor.runtime import telemetry
from line_editor.runtime.telemetry import PRESETS, LogSettings, preset_settings


def test_console_logging_is_off_by_default() -> None:
    settings = LogSettings.from_env({})

    assert settings.console is False
    assert settings.level == "WARNING"
    assert settings.log_file == ""
    assert settings.buffer_size is None


def test_settings_from_env() -> None:
    settings = LogSettings.from_env(
        {
            "LINE_EDITOR_LOG_LEVEL": "debug",
            "LINE_EDITOR_LOG_CONSOLE": "1",
            "LINE_EDITOR_NO_COLOR": "yes",
            "LINE_EDITOR_LOG_JSON": "true",
            "LINE_EDITOR_LOG_FILE": "run.log",
            "LINE_EDITOR_LOG_BUFFERED": "on",
            "LINE_EDITOR_LOG_BUFFER_SIZE": "64",
        }
    )

    assert settings == LogSettings(
        level="DEBUG",
        console=True,
        colored=False,
        json=True,
        log_file="run.log",
        buffer_size=64,
    )


@pytest.mark.parametrize("preset", PRESETS)
def test_presets_log_to_files_not_console(
    preset: str, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("LINE_EDITOR_LOG_FILE", raising=False)

    settings = preset_settings(preset)

    assert settings.console is False
    assert settings.log_file.endswith(".log")


def test_log_file_variable_overrides_preset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LINE_EDITOR_LOG_FILE", "custom.log")

    assert preset_settings("production").log_file == "custom.log"


def test_unknown_preset() -> None:
    with pytest.raises(ValueError):
        preset_settings("verbose")


def test_configure_rejects_preset_and_settings_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="development", settings=LogSettings())
