"""Script runner: reads protocol text, drives an interpreter, writes output."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, List, Optional, TextIO

from line_editor.commands import parse_command, parse_count
from line_editor.config import EditorConfig
from line_editor.errors import EditorError, LimitExceeded, ParseError
from line_editor.interpreter import Interpreter
from line_editor.runtime import telemetry

OutputSink = Callable[[str], None]


def _discard(_line: str) -> None:
    return None


@dataclass(slots=True)
class RunReport:
    """Outcome of one script run."""

    declared: int
    outputs: List[str] = field(default_factory=list)
    final_buffer: str = ""
    errors: List[EditorError] = field(default_factory=list)
    surplus_lines: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors


class ScriptRunner:
    """Applies the count line, error, and surplus-line policies around an interpreter.

    With ``on_error="abort"`` the first failing line is re-raised (output
    already written stays written). With ``on_error="skip"`` the failure is
    recorded on the report and the line still counts towards ``N``. A missing
    or malformed count line, or fewer command lines than declared, is always
    fatal.
    """

    def __init__(
        self,
        config: Optional[EditorConfig] = None,
        *,
        logger_name: str | None = "line_editor.runner",
    ) -> None:
        self.config = config or EditorConfig()
        self._logger_name = logger_name

    def run(self, lines: Iterable[str], write: OutputSink = _discard) -> RunReport:
        """Run the protocol lines, sending each output line to ``write``."""

        source = iter(lines)
        with telemetry.span(
            "runner::run",
            logger_name=self._logger_name,
            component="runner",
            metadata={
                "on_error": self.config.on_error,
                "delete_policy": self.config.delete_policy,
            },
        ) as handle:
            count = self._read_count(source)
            handle.add_metadata("declared", count)
            report = RunReport(declared=count)
            interpreter = Interpreter.from_config(self.config)
            self._run_commands(interpreter, source, count, report, write)
            report.surplus_lines = self._check_surplus(source, count)
            report.final_buffer = interpreter.final_buffer()
            write(report.final_buffer)
            handle.add_metadata("errors", len(report.errors))
        return report

    def run_text(self, text: str, write: OutputSink = _discard) -> RunReport:
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        return self.run(lines, write)

    def run_stream(self, source: TextIO, sink: TextIO) -> RunReport:
        def write(line: str) -> None:
            sink.write(line)
            sink.write("\n")

        return self.run(source, write)

    def _read_count(self, source: Iterator[str]) -> int:
        first = next(source, None)
        if first is None:
            raise ParseError("missing command count", line_number=1, line="")
        count = parse_count(first)
        limit = self.config.max_commands
        if limit is not None and count > limit:
            raise LimitExceeded(
                f"declared {count} commands, more than the limit of {limit}",
                limit=limit,
            )
        return count

    def _run_commands(
        self,
        interpreter: Interpreter,
        source: Iterator[str],
        count: int,
        report: RunReport,
        write: OutputSink,
    ) -> None:
        for position in range(count):
            line_number = position + 2
            line = next(source, None)
            if line is None:
                raise ParseError(
                    f"declared {count} commands but input ended after {position}",
                    line_number=line_number,
                )
            try:
                command = parse_command(line, line_number=line_number)
                printed = interpreter.execute(command)
            except EditorError as exc:
                exc.locate(position)
                if not self.config.skip_errors:
                    raise
                report.errors.append(exc)
                telemetry.record_event(
                    "runner.skipped",
                    level="warning",
                    data={
                        "line": line_number,
                        "error": type(exc).__name__,
                        "reason": str(exc),
                    },
                    logger_name=self._logger_name,
                )
                continue
            if printed is not None:
                report.outputs.append(printed)
                write(printed)

    def _check_surplus(self, source: Iterator[str], count: int) -> int:
        surplus = 0
        for line_number, line in enumerate(source, start=count + 2):
            if not line.strip():
                continue
            if self.config.strict_count:
                raise ParseError(
                    f"declared {count} commands but found more",
                    line_number=line_number,
                    line=line.rstrip("\r\n"),
                )
            surplus += 1
        if surplus:
            telemetry.record_event(
                "runner.surplus_lines",
                level="warning",
                data={"declared": count, "ignored": surplus},
                logger_name=self._logger_name,
            )
        return surplus


def run_script(
    text: str, config: Optional[EditorConfig] = None, write: OutputSink = _discard
) -> RunReport:
    """Convenience wrapper running ``text`` with a fresh ``ScriptRunner``."""

    return ScriptRunner(config).run_text(text, write)


__all__ = ["RunReport", "ScriptRunner", "run_script"]
