"""The four protocol commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class Append:
    """Append ``text`` (possibly empty) to the end of the buffer."""

    text: str
    tag = "1"


@dataclass(frozen=True, slots=True)
class Delete:
    """Remove ``count`` characters from the end of the buffer."""

    count: int
    tag = "2"


@dataclass(frozen=True, slots=True)
class Print:
    """Output the character at the 1-based ``index``."""

    index: int
    tag = "3"


@dataclass(frozen=True, slots=True)
class Undo:
    """Reverse the most recent append or delete."""

    tag = "4"


Command = Union[Append, Delete, Print, Undo]


def command_name(command: Command) -> str:
    return type(command).__name__.lower()


__all__ = [
    "Append",
    "Delete",
    "Print",
    "Undo",
    "Command",
    "command_name",
]
