"""Turn protocol lines into command objects."""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict, Optional, Type, Union

from line_editor.errors import ParseError

from .models import Append, Command, Delete, Print, Undo

LineParser = Callable[[str, Optional[int], str], Command]


def _strip_terminator(line: str) -> str:
    return line.rstrip("\r\n")


def _parse_int(raw: str, *, what: str, line_number: Optional[int], line: str) -> int:
    value = raw.strip()
    if not value or not (value.isascii() and value.isdigit()):
        raise ParseError(
            f"expected a non-negative integer {what}, got {value!r}",
            line_number=line_number,
            line=line,
        )
    return int(value)


def parse_count(line: str, *, line_number: Optional[int] = 1) -> int:
    """Parse the leading line declaring how many commands follow."""

    return _parse_int(
        _strip_terminator(line),
        what="command count",
        line_number=line_number,
        line=line,
    )


def _parse_append(payload: str, line_number: Optional[int], line: str) -> Command:
    del line_number, line
    return Append(payload)


def _parse_numeric(
    command_cls: Type[Union[Delete, Print]],
    payload: str,
    line_number: Optional[int],
    line: str,
) -> Command:
    what = "count" if command_cls is Delete else "index"
    value = _parse_int(payload, what=what, line_number=line_number, line=line)
    return command_cls(value)


def _parse_undo(payload: str, line_number: Optional[int], line: str) -> Command:
    if payload.strip():
        raise ParseError(
            f"undo takes no argument, got {payload.strip()!r}",
            line_number=line_number,
            line=line,
        )
    return Undo()


_LINE_PARSERS: Dict[str, LineParser] = {
    Append.tag: _parse_append,
    Delete.tag: partial(_parse_numeric, Delete),
    Print.tag: partial(_parse_numeric, Print),
    Undo.tag: _parse_undo,
}


def parse_command(line: str, *, line_number: Optional[int] = None) -> Command:
    """Parse one command line such as ``"1 abc"`` or ``"3 2"``.

    Leading whitespace is ignored. The tag must be followed by a single
    separator character (or the end of the line); for appends everything
    after that separator, including further whitespace, is the text.
    """

    raw = _strip_terminator(line)
    body = raw.lstrip()
    if not body:
        raise ParseError("blank command line", line_number=line_number, line=raw)

    tag, rest = body[0], body[1:]
    parser = _LINE_PARSERS.get(tag)
    if parser is None or (rest and not rest[0].isspace()):
        token = body.split(maxsplit=1)[0]
        raise ParseError(
            f"unknown command {token!r}", line_number=line_number, line=raw
        )
    return parser(rest[1:], line_number, raw)


__all__ = ["parse_command", "parse_count"]
