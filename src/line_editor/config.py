"""Run configuration sourced from ``LINE_EDITOR_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

ENV_PREFIX = "LINE_EDITOR_"

DELETE_POLICIES = ("reject", "clamp")
ERROR_POLICIES = ("abort", "skip")

DEFAULT_MAX_COMMANDS = 1_000_000
DEFAULT_MAX_DELETED_CHARS = DEFAULT_MAX_COMMANDS * 2


def _choice(name: str, value: str, choices: tuple[str, ...]) -> str:
    normalized = value.strip().lower()
    if normalized not in choices:
        raise ValueError(f"{name} must be one of {choices}, got {value!r}")
    return normalized


def _limit(name: str, value: str) -> Optional[int]:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc
    if parsed < 0:
        raise ValueError(f"{name} must not be negative, got {parsed}")
    return parsed or None


def _flag(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Policies and limits applied to one run.

    ``delete_policy`` decides whether an oversized delete is rejected with
    ``InvalidCommand`` or clamped to the buffer length. ``on_error`` decides
    whether the runner aborts on the first failing command or skips it.
    A limit of ``None`` disables that limit.
    """

    delete_policy: str = "reject"
    on_error: str = "abort"
    strict_count: bool = False
    max_commands: Optional[int] = DEFAULT_MAX_COMMANDS
    max_deleted_chars: Optional[int] = DEFAULT_MAX_DELETED_CHARS
    initial_text: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "delete_policy",
            _choice("delete_policy", self.delete_policy, DELETE_POLICIES),
        )
        object.__setattr__(
            self, "on_error", _choice("on_error", self.on_error, ERROR_POLICIES)
        )
        for name in ("max_commands", "max_deleted_chars"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")
            if value == 0:
                object.__setattr__(self, name, None)

    @property
    def clamp_deletes(self) -> bool:
        return self.delete_policy == "clamp"

    @property
    def skip_errors(self) -> bool:
        return self.on_error == "skip"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        env = os.environ if environ is None else environ

        def lookup(name: str) -> Optional[str]:
            return env.get(f"{ENV_PREFIX}{name}")

        values: dict[str, object] = {}
        raw = lookup("DELETE_POLICY")
        if raw is not None:
            values["delete_policy"] = _choice("delete_policy", raw, DELETE_POLICIES)
        raw = lookup("ON_ERROR")
        if raw is not None:
            values["on_error"] = _choice("on_error", raw, ERROR_POLICIES)
        raw = lookup("STRICT_COUNT")
        if raw is not None:
            values["strict_count"] = _flag(raw)
        raw = lookup("MAX_COMMANDS")
        if raw is not None:
            values["max_commands"] = _limit("max_commands", raw)
        raw = lookup("MAX_DELETED_CHARS")
        if raw is not None:
            values["max_deleted_chars"] = _limit("max_deleted_chars", raw)
        raw = lookup("INITIAL_TEXT")
        if raw is not None:
            values["initial_text"] = raw
        return cls(**values)  # type: ignore[arg-type]

    def merge(self, **overrides: object) -> "EditorConfig":
        """Return a copy with every non-``None`` override applied."""

        known = {field.name for field in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown config fields: {sorted(unknown)}")
        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        return replace(self, **changes)  # type: ignore[arg-type]


__all__ = [
    "DELETE_POLICIES",
    "ERROR_POLICIES",
    "DEFAULT_MAX_COMMANDS",
    "DEFAULT_MAX_DELETED_CHARS",
    "EditorConfig",
]
