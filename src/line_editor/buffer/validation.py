"""Bounds checks shared by the interpreter's commands."""

from __future__ import annotations

from line_editor.errors import IndexOutOfRange, InvalidCommand

from .buffer import CharBuffer


def ensure_index(buffer: CharBuffer, index: int) -> int:
    """Validate a 1-based ``index`` and return the matching 0-based offset."""

    length = len(buffer)
    if index < 1 or index > length:
        raise IndexOutOfRange(
            f"print index {index} outside buffer of length {length}",
            index=index,
            length=length,
        )
    return index - 1


def ensure_delete_count(buffer: CharBuffer, count: int, *, clamp: bool) -> int:
    """Return how many characters a delete of ``count`` actually removes."""

    length = len(buffer)
    if count < 0:
        raise InvalidCommand(
            f"delete count {count} is negative", count=count, length=length
        )
    if count > length:
        if clamp:
            return length
        raise InvalidCommand(
            f"cannot delete {count} characters from buffer of length {length}",
            count=count,
            length=length,
        )
    return count
