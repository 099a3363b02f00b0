"""telelog-backed logging for interpreter and runner activity.

``configure`` installs a preset or settings, ``record_event`` logs one
``event::<name>`` line with key/value data, and ``span`` profiles a block
(``interpreter::process``, ``runner::run``) and logs ``span::fail`` when it
raises.

Protocol output owns stdout, so console logging is opt-in
(``LINE_EDITOR_LOG_CONSOLE=1``); every preset writes to a file instead.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "LINE_EDITOR_"
ROOT_LOGGER = "line_editor"

_LOGGERS: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _truthy(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class LogSettings:
    """Where and how much the editor logs."""

    level: str = "WARNING"
    console: bool = False
    colored: bool = True
    json: bool = False
    log_file: str = ""
    buffer_size: Optional[int] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LogSettings":
        env = os.environ if environ is None else environ

        def lookup(name: str) -> Optional[str]:
            return env.get(f"{ENV_PREFIX}{name}")

        buffer_size = None
        if _truthy(lookup("LOG_BUFFERED"), False):
            buffer_size = int(lookup("LOG_BUFFER_SIZE") or "2048")
        return cls(
            level=(lookup("LOG_LEVEL") or "WARNING").upper(),
            console=_truthy(lookup("LOG_CONSOLE"), False),
            colored=not _truthy(lookup("NO_COLOR"), False),
            json=_truthy(lookup("LOG_JSON"), False),
            log_file=lookup("LOG_FILE") or "",
            buffer_size=buffer_size,
        )

    def to_config(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        config.with_json_format(self.json)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffer_size:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        config.with_profiling(True)
        return config


_PRESET_SETTINGS: Dict[str, LogSettings] = {
    "development": LogSettings(level="DEBUG", log_file="line_editor-debug.log"),
    "production": LogSettings(
        level="INFO", log_file="line_editor.log", buffer_size=2048
    ),
    "performance": LogSettings(
        level="DEBUG",
        json=True,
        log_file="line_editor-performance.log",
        buffer_size=8192,
    ),
}
PRESETS = tuple(_PRESET_SETTINGS)


def preset_settings(preset: str) -> LogSettings:
    """Settings for ``preset``; ``LINE_EDITOR_LOG_FILE`` replaces its log file."""

    try:
        settings = _PRESET_SETTINGS[preset.lower()]
    except KeyError as exc:
        raise ValueError(f"Unknown preset '{preset}'.") from exc
    override = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    if override:
        return replace(settings, log_file=override)
    return settings


def configure(
    *, preset: Optional[str] = None, settings: Optional[LogSettings] = None
) -> None:
    """Install ``preset`` or ``settings`` (default: ``LogSettings.from_env()``)."""

    global _ACTIVE_CONFIG
    if preset and settings:
        raise ValueError("Provide either `preset` or `settings`, not both.")
    if preset:
        settings = preset_settings(preset)
    _ACTIVE_CONFIG = (settings or LogSettings.from_env()).to_config()
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = LogSettings.from_env().to_config()
    logger_name = name or ROOT_LOGGER
    if logger_name not in _LOGGERS:
        _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGERS[logger_name]


def _text(value: Any) -> str:
    return value if isinstance(value, str) else repr(value)


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    # telelog exposes ``<level>_with(message, pairs)`` for structured data on
    # some levels only; fall back to inlining the payload.
    name = level.lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(val)) for key, val in payload.items()])
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span``; metadata added here is logged if the span fails."""

    logger: Any
    name: str
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        _emit(
            self.logger,
            "error",
            "span::fail",
            {"span": self.name, **self.metadata, "reason": reason},
        )


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name``, tracked under ``component`` when given.

    ``metadata`` is attached as logger context while the block runs.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(logger=log, name=name)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)
        log.add_context(key, handle.metadata[key])
    context_keys = list(handle.metadata)

    with ExitStack() as stack:
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in context_keys:
                log.remove_context(key)


__all__ = [
    "PRESETS",
    "LogSettings",
    "SpanHandle",
    "configure",
    "get_logger",
    "preset_settings",
    "record_event",
    "span",
]
