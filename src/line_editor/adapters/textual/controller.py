"""Minimal Textual adapter that feeds protocol lines to an interpreter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from line_editor.commands import Print, command_name, parse_command
from line_editor.errors import EditorError
from line_editor.interpreter import Interpreter


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[str], None]
    update_status: Callable[[str], None] = _noop
    show_output: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


@dataclass(slots=True)
class SubmitResult:
    """Outcome of one submitted line."""

    status: str
    output: Optional[str] = None
    error: Optional[EditorError] = None


class TextualEditorAdapter:
    """Bridges an Interpreter to a Textual-friendly surface.

    Errors never escape ``submit_line``; they become the status text so the
    session keeps going after a typo.
    """

    def __init__(self, interpreter: Interpreter, hooks: TextualUIHooks) -> None:
        self.interpreter = interpreter
        self.hooks = hooks
        self.submitted = 0
        self._refresh_buffer()

    def submit_line(self, line: str) -> SubmitResult:
        """Parse and execute one protocol command line such as ``"1 abc"``."""

        self.submitted += 1
        self._log_state("line ->", line=line)
        try:
            command = parse_command(line, line_number=self.submitted)
            printed = self.interpreter.execute(command)
        except EditorError as exc:
            result = SubmitResult(status=type(exc).__name__, error=exc)
            self.hooks.update_status(f"{result.status}: {exc}")
            self._log_state("error <-", status=result.status, reason=str(exc))
            return result

        result = SubmitResult(status=command_name(command), output=printed)
        if isinstance(command, Print) and printed is not None:
            self.hooks.show_output(printed)
        self.hooks.update_status(result.status)
        self._refresh_buffer()
        self._log_state("result <-", status=result.status, output=printed)
        return result

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.interpreter.final_buffer())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.interpreter.buffer
        return {
            "length": len(buffer),
            "history": self.interpreter.history_depth,
            "buffer_version": buffer.version,
        }


__all__ = ["SubmitResult", "TextualEditorAdapter", "TextualUIHooks"]
