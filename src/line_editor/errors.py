"""Error taxonomy shared by the parser, interpreter, and runner."""

from __future__ import annotations

from typing import Optional


class EditorError(RuntimeError):
    """Base class for every failure the editor reports."""

    def __init__(
        self,
        message: str,
        *,
        command: object | None = None,
        position: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.command = command
        self.position = position

    def locate(self, position: int) -> "EditorError":
        """Attach the 0-based position of the failing command if still unknown."""

        if self.position is None:
            self.position = position
        return self


class ParseError(EditorError):
    """Raised when the count line or a command line is malformed."""

    def __init__(
        self,
        message: str,
        *,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
    ) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class InvalidCommand(EditorError):
    """Raised when a delete asks for more characters than the buffer holds."""

    def __init__(
        self,
        message: str,
        *,
        count: int,
        length: int,
        command: object | None = None,
    ) -> None:
        super().__init__(message, command=command)
        self.count = count
        self.length = length


class IndexOutOfRange(EditorError):
    """Raised when a print index falls outside ``[1, len(buffer)]``."""

    def __init__(
        self,
        message: str,
        *,
        index: int,
        length: int,
        command: object | None = None,
    ) -> None:
        super().__init__(message, command=command)
        self.index = index
        self.length = length


class LimitExceeded(EditorError):
    """Raised when a run exceeds a configured command or deletion limit."""

    def __init__(
        self, message: str, *, limit: int, command: object | None = None
    ) -> None:
        super().__init__(message, command=command)
        self.limit = limit


__all__ = [
    "EditorError",
    "ParseError",
    "InvalidCommand",
    "IndexOutOfRange",
    "LimitExceeded",
]
