from __future__ import annotations

import io
from pathlib import Path

import pytest

from line_editor.cli import main

REFERENCE = "8\n1 abc\n3 3\n2 3\n1 xy\n3 2\n4\n4\n3 1\n"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "DELETE_POLICY",
        "ON_ERROR",
        "STRICT_COUNT",
        "MAX_COMMANDS",
        "MAX_DELETED_CHARS",
        "INITIAL_TEXT",
    ):
        monkeypatch.delenv(f"LINE_EDITOR_{name}", raising=False)


def run_cli(*argv: str, stdin: str = "") -> tuple[int, str, str]:
    stdout = io.StringIO()
    stderr = io.StringIO()
    code = main(list(argv), stdin=io.StringIO(stdin), stdout=stdout, stderr=stderr)
    return code, stdout.getvalue(), stderr.getvalue()


def test_reads_script_from_stdin() -> None:
    code, out, err = run_cli(stdin=REFERENCE)

    assert code == 0
    assert out == "c\ny\na\nabc\n"
    assert err == ""


def test_reads_script_from_file(tmp_path: Path) -> None:
    script = tmp_path / "script.txt"
    script.write_text("2\n1 hello\n4\n", encoding="utf-8")

    code, out, _ = run_cli(str(script))

    assert code == 0
    assert out == "\n"


def test_missing_file_reports_error(tmp_path: Path) -> None:
    code, _, err = run_cli(str(tmp_path / "missing.txt"))

    assert code == 1
    assert "missing.txt" in err


def test_invalid_delete_rejected_by_default() -> None:
    code, out, err = run_cli(stdin="2\n1 x\n2 5\n")

    assert code == 1
    assert out == ""
    assert "InvalidCommand" in err


def test_delete_policy_flag_clamps() -> None:
    code, out, _ = run_cli("--delete-policy", "clamp", stdin="2\n1 x\n2 5\n")

    assert code == 0
    assert out == "\n"


def test_skip_policy_reports_skipped_lines() -> None:
    code, out, err = run_cli("--on-error", "skip", stdin="2\n3 1\n1 ok\n")

    assert code == 0
    assert out == "ok\n"
    assert "skipped IndexOutOfRange" in err


def test_initial_and_strict_count_flags() -> None:
    code, out, err = run_cli(
        "--initial", "ab", "--strict-count", stdin="1\n3 2\n3 1\n"
    )

    assert code == 1
    assert out == "b\n"
    assert "ParseError" in err


def test_environment_configures_policy(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LINE_EDITOR_DELETE_POLICY", "clamp")

    code, out, _ = run_cli(stdin="2\n1 x\n2 5\n")

    assert code == 0
    assert out == "\n"


def test_invalid_environment_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LINE_EDITOR_ON_ERROR", "explode")

    code, _, err = run_cli(stdin="0\n")

    assert code == 2
    assert "on_error" in err


def test_non_utf8_input_reports_error(tmp_path: Path) -> None:
    script = tmp_path / "latin1.txt"
    script.write_bytes(b"1\n1 \xff\n")

    code, _, err = run_cli(str(script))

    assert code == 1
    assert "not valid UTF-8" in err
