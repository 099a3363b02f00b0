"""Character buffer edited by the interpreter."""

from __future__ import annotations

from typing import Iterable, List


class CharBuffer:
    """Mutable character sequence that only grows or shrinks at its end.

    Characters live in a list so that appending ``k`` characters or removing
    a ``k``-character suffix costs O(k) and indexing stays O(1), no matter
    how large the buffer gets.
    """

    __slots__ = ("_chars", "version")

    def __init__(self, text: str = "") -> None:
        self._chars: List[str] = list(text)
        self.version = 0

    def __len__(self) -> int:
        return len(self._chars)

    def __repr__(self) -> str:
        return f"CharBuffer({self.text!r})"

    @property
    def text(self) -> str:
        return "".join(self._chars)

    def extend(self, chars: Iterable[str]) -> int:
        """Add ``chars`` to the end and return how many were added."""

        before = len(self._chars)
        self._chars.extend(chars)
        self.version += 1
        return len(self._chars) - before

    def truncate(self, count: int) -> str:
        """Remove the last ``count`` characters and return them in order."""

        if count < 0 or count > len(self._chars):
            raise ValueError(f"cannot remove {count} of {len(self._chars)} characters")
        if count == 0:
            removed = ""
        else:
            removed = "".join(self._chars[-count:])
            del self._chars[-count:]
        self.version += 1
        return removed

    def char_at(self, offset: int) -> str:
        """Return the character at the 0-based ``offset``."""

        return self._chars[offset]
