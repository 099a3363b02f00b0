"""Undo records and the history stack that holds them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from .buffer import CharBuffer


@dataclass(frozen=True, slots=True)
class Appended:
    """The last append added ``length`` characters; undo removes them."""

    length: int

    def revert(self, buffer: CharBuffer) -> None:
        buffer.truncate(self.length)


@dataclass(frozen=True, slots=True)
class Deleted:
    """The last delete removed ``characters`` (in order); undo restores them."""

    characters: str

    def revert(self, buffer: CharBuffer) -> None:
        buffer.extend(self.characters)


UndoRecord = Union[Appended, Deleted]


class UndoHistory:
    """Last-in first-out stack of undo records.

    There is no redo: popping a record discards it.
    """

    def __init__(self) -> None:
        self._records: List[UndoRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def push(self, record: UndoRecord) -> None:
        self._records.append(record)

    def peek(self) -> Optional[UndoRecord]:
        return self._records[-1] if self._records else None

    def pop(self) -> Optional[UndoRecord]:
        if not self._records:
            return None
        return self._records.pop()


__all__ = ["Appended", "Deleted", "UndoRecord", "UndoHistory"]
