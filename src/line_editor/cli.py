"""``line-editor`` command line entry point."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, TextIO

from line_editor.config import DELETE_POLICIES, ERROR_POLICIES, EditorConfig
from line_editor.errors import EditorError
from line_editor.runner import ScriptRunner
from line_editor.runtime import telemetry


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="line-editor",
        description="Run an append/delete/print/undo editing script.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Script file to run ('-' or omitted reads stdin)",
    )
    parser.add_argument(
        "--delete-policy",
        choices=DELETE_POLICIES,
        help="Reject or clamp deletes longer than the buffer (default: reject)",
    )
    parser.add_argument(
        "--on-error",
        choices=ERROR_POLICIES,
        help="Abort on the first failing line or skip it (default: abort)",
    )
    parser.add_argument(
        "--strict-count",
        action="store_true",
        default=None,
        help="Fail when more command lines follow than the count declares",
    )
    parser.add_argument(
        "--max-commands",
        type=int,
        help="Largest command count accepted (0 disables the limit)",
    )
    parser.add_argument(
        "--max-deleted",
        type=int,
        help="Most characters deletes may remove in one run (0 disables the limit)",
    )
    parser.add_argument(
        "--initial",
        help="Text the buffer starts with",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        help="telelog preset to use instead of LINE_EDITOR_LOG_* variables",
    )
    parser.add_argument(
        "--tui",
        action="store_true",
        help="Open the interactive Textual editor instead of running a script",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> EditorConfig:
    return EditorConfig.from_env().merge(
        delete_policy=args.delete_policy,
        on_error=args.on_error,
        strict_count=args.strict_count,
        max_commands=args.max_commands,
        max_deleted_chars=args.max_deleted,
        initial_text=args.initial,
    )


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    args = _parse_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    if args.log_preset:
        telemetry.configure(preset=args.log_preset)

    try:
        config = build_config(args)
    except ValueError as exc:
        stderr.write(f"line-editor: {exc}\n")
        return 2

    if args.tui:
        from line_editor.adapters.textual.app import EditorApp

        EditorApp(config=config).run()
        return 0

    runner = ScriptRunner(config)
    try:
        if args.input == "-":
            report = runner.run_stream(stdin, stdout)
        else:
            with open(args.input, encoding="utf-8", newline="") as source:
                report = runner.run_stream(source, stdout)
    except EditorError as exc:
        stdout.flush()
        stderr.write(f"line-editor: {type(exc).__name__}: {exc}\n")
        return 1
    except OSError as exc:
        stderr.write(f"line-editor: {exc}\n")
        return 1
    except UnicodeDecodeError as exc:
        stdout.flush()
        stderr.write(f"line-editor: input is not valid UTF-8: {exc}\n")
        return 1

    for error in report.errors:
        stderr.write(f"line-editor: skipped {type(error).__name__}: {error}\n")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual entry point
    raise SystemExit(main())
