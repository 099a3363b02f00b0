from __future__ import annotations

import io
from typing import List

import pytest

from line_editor.config import EditorConfig
from line_editor.errors import IndexOutOfRange, LimitExceeded, ParseError
from line_editor.runner import RunReport, ScriptRunner, run_script

REFERENCE = "8\n1 abc\n3 3\n2 3\n1 xy\n3 2\n4\n4\n3 1\n"


def collect(
    text: str, config: EditorConfig | None = None
) -> tuple[List[str], RunReport]:
    written: List[str] = []
    report = run_script(text, config, written.append)
    return written, report


def test_run_writes_prints_then_final_buffer() -> None:
    written, report = collect(REFERENCE)

    assert written == ["c", "y", "a", "abc"]
    assert report.outputs == ["c", "y", "a"]
    assert report.final_buffer == "abc"
    assert report.declared == 8
    assert report.ok


def test_run_with_no_commands() -> None:
    written, report = collect("0\n")

    assert written == [""]
    assert report.outputs == []


def test_run_stream_uses_newline_terminators() -> None:
    source = io.StringIO("5\r\n1 abc\r\n3 3\r\n2 2\r\n4\r\n3 2\r\n")
    sink = io.StringIO()

    ScriptRunner().run_stream(source, sink)

    assert sink.getvalue() == "c\nb\nabc\n"


def test_abort_policy_reraises_after_partial_output() -> None:
    written: List[str] = []

    with pytest.raises(IndexOutOfRange) as excinfo:
        run_script("3\n1 ab\n3 1\n3 5\n", write=written.append)

    assert written == ["a"]
    assert excinfo.value.position == 2


def test_skip_policy_records_errors_and_continues() -> None:
    config = EditorConfig(on_error="skip")

    written, report = collect("4\n1 ab\n3 5\n9 nine\n3 1\n", config)

    assert written == ["a", "ab"]
    assert [type(error) for error in report.errors] == [IndexOutOfRange, ParseError]
    assert report.errors[0].position == 1
    assert report.errors[1].line_number == 4
    assert not report.ok


def test_clamp_policy_through_runner() -> None:
    written, _ = collect("2\n1 x\n2 5\n", EditorConfig(delete_policy="clamp"))

    assert written == [""]


def test_missing_command_lines_always_fatal() -> None:
    with pytest.raises(ParseError) as excinfo:
        run_script("3\n1 a\n", EditorConfig(on_error="skip"))

    assert excinfo.value.line_number == 3


def test_missing_or_bad_count_line() -> None:
    with pytest.raises(ParseError):
        run_script("")
    with pytest.raises(ParseError):
        run_script("many\n1 a\n")


def test_surplus_lines_ignored_by_default() -> None:
    written, report = collect("1\n1 a\n1 b\n\n")

    assert written == ["a"]
    assert report.surplus_lines == 1


def test_surplus_lines_rejected_when_strict() -> None:
    with pytest.raises(ParseError) as excinfo:
        run_script("1\n1 a\n\n1 b\n", EditorConfig(strict_count=True))

    assert excinfo.value.line_number == 4


def test_declared_count_limit() -> None:
    with pytest.raises(LimitExceeded) as excinfo:
        run_script("3\n4\n4\n4\n", EditorConfig(max_commands=2))

    assert excinfo.value.limit == 2


def test_initial_text_from_config() -> None:
    written, _ = collect("1\n3 2\n", EditorConfig(initial_text="xyz"))

    assert written == ["y", "xyz"]


def test_zero_command_limit_disables_the_check() -> None:
    written, _ = collect("2\n1 a\n3 1\n", EditorConfig(max_commands=0))

    assert written == ["a", "a"]
