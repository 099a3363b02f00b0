"""Command interpreter owning the buffer and its undo history."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Type

from line_editor.buffer import (
    Appended,
    CharBuffer,
    Deleted,
    UndoHistory,
    ensure_delete_count,
    ensure_index,
)
from line_editor.commands import Append, Command, Delete, Print, Undo
from line_editor.config import DEFAULT_MAX_DELETED_CHARS, EditorConfig
from line_editor.errors import EditorError, LimitExceeded
from line_editor.runtime import telemetry

CommandHandler = Callable[["Interpreter", Command], Optional[str]]


class Interpreter:
    """Applies commands one at a time to a single character buffer.

    Appends and deletes push a compact reversal record (the appended length,
    or the removed characters) instead of a snapshot of the buffer, so undo
    costs are proportional to the edit being reversed.
    """

    def __init__(
        self,
        *,
        initial: str = "",
        delete_policy: str = "reject",
        max_deleted_chars: Optional[int] = DEFAULT_MAX_DELETED_CHARS,
        logger_name: str | None = "line_editor.interpreter",
    ) -> None:
        if delete_policy not in ("reject", "clamp"):
            raise ValueError(f"Unknown delete policy '{delete_policy}'")
        self.buffer = CharBuffer(initial)
        self.history = UndoHistory()
        self.delete_policy = delete_policy
        self.max_deleted_chars = max_deleted_chars or None
        self.deleted_total = 0
        self._logger_name = logger_name

    @classmethod
    def from_config(cls, config: EditorConfig) -> "Interpreter":
        return cls(
            initial=config.initial_text,
            delete_policy=config.delete_policy,
            max_deleted_chars=config.max_deleted_chars,
        )

    @property
    def history_depth(self) -> int:
        return len(self.history)

    def final_buffer(self) -> str:
        return self.buffer.text

    def execute(self, command: Command) -> Optional[str]:
        """Apply ``command``; return the printed character for a ``Print``."""

        handler = _HANDLERS.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported command {command!r}")
        try:
            return handler(self, command)
        except EditorError as exc:
            if exc.command is None:
                exc.command = command
            raise

    def process(self, commands: Iterable[Command]) -> List[str]:
        """Apply ``commands`` in order and collect the print output.

        The first failing command raises; everything before it stays applied.
        """

        outputs: List[str] = []
        with telemetry.span(
            "interpreter::process",
            logger_name=self._logger_name,
            component="interpreter",
            metadata={"delete_policy": self.delete_policy},
        ) as handle:
            position = -1
            for position, command in enumerate(commands):
                try:
                    printed = self.execute(command)
                except EditorError as exc:
                    raise exc.locate(position)
                if printed is not None:
                    outputs.append(printed)
            handle.add_metadata("commands", position + 1)
            handle.add_metadata("outputs", len(outputs))
        return outputs

    def _append(self, command: Append) -> None:
        added = self.buffer.extend(command.text)
        self.history.push(Appended(added))
        return None

    def _delete(self, command: Delete) -> None:
        count = ensure_delete_count(
            self.buffer, command.count, clamp=self.delete_policy == "clamp"
        )
        limit = self.max_deleted_chars
        if limit is not None and self.deleted_total + count > limit:
            raise LimitExceeded(
                f"deleting {count} more characters exceeds the limit of {limit}",
                limit=limit,
            )
        removed = self.buffer.truncate(count)
        self.deleted_total += count
        self.history.push(Deleted(removed))
        return None

    def _print(self, command: Print) -> str:
        return self.buffer.char_at(ensure_index(self.buffer, command.index))

    def _undo(self, command: Undo) -> None:
        del command
        record = self.history.pop()
        if record is None:
            telemetry.record_event(
                "interpreter.undo_empty",
                level="debug",
                logger_name=self._logger_name,
            )
            return None
        record.revert(self.buffer)
        return None


_HANDLERS: Dict[Type[object], CommandHandler] = {
    Append: Interpreter._append,  # type: ignore[dict-item]
    Delete: Interpreter._delete,  # type: ignore[dict-item]
    Print: Interpreter._print,  # type: ignore[dict-item]
    Undo: Interpreter._undo,  # type: ignore[dict-item]
}


__all__ = ["Interpreter"]
