# src/todo_manager/tasks/task_codec.py

from __future__ import annotations

"""
Delimited-text codec for task lists.

One codec, two layouts:
- STORE: the persisted file read at startup and overwritten at exit.
  "description,<UTC timestamp>" or just "description" when there is no due date.
- EXPORT: a human-facing snapshot with a header row.
  Always two fields; the second one is empty when there is no due date and
  timestamps are rendered in the display timezone.

Records are written with the csv module (minimal quoting), so a description
containing the delimiter is quoted instead of splitting into extra fields.
"""

import codecs
import csv
import io
import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import UTC, tzinfo
from enum import StrEnum
from pathlib import Path

from .task_models import Task, format_timestamp, parse_timestamp

logger = logging.getLogger(__name__)

DELIMITER = ","
EXPORT_HEADER = ("Description", "Due Date")


class CodecMode(StrEnum):
    STORE = "store"
    EXPORT = "export"


class LoadPolicy(StrEnum):
    """
    What load() does with records it cannot read faithfully.

    LENIENT keeps what it can (bad timestamp -> no due date, bad record -> skipped)
    and logs every anomaly. STRICT raises TaskFormatError on the first one.
    """

    LENIENT = "lenient"
    STRICT = "strict"

    @classmethod
    def from_config(cls, raw: str | None) -> LoadPolicy:
        if not raw:
            return cls.LENIENT
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.LENIENT


class TaskFormatError(ValueError):
    def __init__(self, path: Path, lineno: int, reason: str) -> None:
        super().__init__(f"{path}:{lineno}: {reason}")
        self.path = path
        self.lineno = lineno
        self.reason = reason


@dataclass(slots=True)
class LoadReport:
    loaded: int = 0
    downgraded: list[int] = field(default_factory=list)
    dropped: list[int] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.downgraded and not self.dropped


class TaskCodec:
    def __init__(
        self,
        *,
        delimiter: str = DELIMITER,
        policy: LoadPolicy = LoadPolicy.LENIENT,
        display_tz: tzinfo | None = None,
    ) -> None:
        self.delimiter = delimiter
        self.policy = policy
        # None means "machine local time".
        self.display_tz = display_tz

    # ---- formatting ----

    def fields_for(self, task: Task, mode: CodecMode) -> list[str]:
        if mode == CodecMode.STORE:
            if task.due_date is None:
                return [task.description]
            return [task.description, format_timestamp(task.due_date, UTC)]

        if task.due_date is None:
            return [task.description, ""]
        return [task.description, format_timestamp(task.due_date, self.display_tz)]

    def format_line(self, task: Task, mode: CodecMode = CodecMode.STORE) -> str:
        """Single encoded record without the trailing newline."""
        buf = io.StringIO()
        self._writer(buf).writerow(self.fields_for(task, mode))
        return buf.getvalue().rstrip("\r\n")

    def dumps(self, tasks: Iterable[Task], mode: CodecMode = CodecMode.STORE) -> str:
        buf = io.StringIO()
        writer = self._writer(buf)
        if mode == CodecMode.EXPORT:
            writer.writerow(EXPORT_HEADER)
        for task in tasks:
            writer.writerow(self.fields_for(task, mode))
        return buf.getvalue()

    def _writer(self, buf: io.StringIO):
        return csv.writer(
            buf,
            delimiter=self.delimiter,
            lineterminator="\n",
            quoting=csv.QUOTE_MINIMAL,
        )

    # ---- writing ----

    def write(self, path: str | Path, tasks: Iterable[Task], mode: CodecMode) -> Path:
        """
        Overwrite `path` with `tasks` in the given layout.

        Goes through a temp file + os.replace so a failed write leaves the
        previous file intact. OSError propagates.
        """
        path = Path(path)
        tasks = list(tasks)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(path.name + ".tmp")
        try:
            tmp.write_text(self.dumps(tasks, mode), encoding="utf-8")
            os.replace(tmp, path)
        except OSError:
            logger.error("Failed to write %s tasks to %s", mode, path)
            if tmp.exists():
                tmp.unlink()
            raise
        logger.info("Wrote %d task(s) to %s (%s)", len(tasks), path, mode)
        return path

    def save(self, path: str | Path, tasks: Iterable[Task]) -> Path:
        return self.write(path, tasks, CodecMode.STORE)

    def export(self, path: str | Path, tasks: Iterable[Task]) -> Path:
        return self.write(path, tasks, CodecMode.EXPORT)

    # ---- reading ----

    def load(self, path: str | Path, tasks: list[Task]) -> LoadReport:
        """
        Append the tasks stored at `path` to `tasks` (file order).

        LENIENT never fails: a missing or unreadable store adds nothing, and
        undecodable or malformed lines are skipped and logged. STRICT raises
        TaskFormatError instead and appends nothing unless the whole file
        reads cleanly.
        """
        path = Path(path)
        report = LoadReport()
        if not path.exists():
            logger.info("No task store at %s, starting empty.", path)
            return report

        try:
            raw = path.read_bytes()
        except OSError as e:
            if self.policy == LoadPolicy.STRICT:
                raise TaskFormatError(path, 0, f"cannot read store ({e})") from e
            logger.warning("Cannot read task store %s (%s), starting empty.", path, e)
            return report

        parsed = self._parse(path, raw, report)

        tasks.extend(parsed)
        report.loaded = len(parsed)
        if report.clean:
            logger.info("Loaded %d task(s) from %s", report.loaded, path)
        else:
            logger.warning(
                "Loaded %d task(s) from %s; %d without a readable due date, %d record(s) skipped",
                report.loaded,
                path,
                len(report.downgraded),
                len(report.dropped),
            )
        return report

    def _decoded_lines(
        self, path: Path, raw: bytes, report: LoadReport, linemap: list[int]
    ) -> Iterator[str]:
        """Yield UTF-8 lines; undecodable ones are rejected by physical line number."""
        if raw.startswith(codecs.BOM_UTF8):
            raw = raw[len(codecs.BOM_UTF8) :]
        for lineno, chunk in enumerate(raw.splitlines(keepends=True), start=1):
            try:
                line = chunk.decode("utf-8")
            except UnicodeDecodeError as e:
                self._reject(path, lineno, f"invalid UTF-8 ({e.reason})", report)
                continue
            linemap.append(lineno)
            yield line

    def _parse(self, path: Path, raw: bytes, report: LoadReport) -> list[Task]:
        out: list[Task] = []
        # linemap[i] = physical line number of the i-th line the csv reader consumed.
        linemap: list[int] = []
        reader = csv.reader(self._decoded_lines(path, raw, report, linemap), delimiter=self.delimiter)

        def physical_line() -> int:
            return linemap[reader.line_num - 1] if reader.line_num else 0

        while True:
            try:
                row = next(reader)
            except StopIteration:
                break
            except csv.Error as e:
                self._reject(path, physical_line(), f"unreadable record ({e})", report)
                continue

            lineno = physical_line()
            if not row:
                continue

            if len(row) == 1:
                out.append(Task.create(row[0]))
                continue

            if len(row) != 2:
                self._reject(path, lineno, f"expected 1 or 2 fields, got {len(row)}", report)
                continue

            description, raw_due = row
            if not raw_due.strip():
                # Export layout: empty second field = no due date.
                out.append(Task.create(description))
                continue
            try:
                due = parse_timestamp(raw_due)
            except ValueError as e:
                if self.policy == LoadPolicy.STRICT:
                    raise TaskFormatError(path, lineno, f"bad due date {raw_due!r}: {e}") from e
                logger.warning(
                    "%s:%d: bad due date %r for task %r, keeping it without one",
                    path,
                    lineno,
                    raw_due,
                    description,
                )
                report.downgraded.append(lineno)
                due = None
            out.append(Task.create(description, due))
        return out

    def _reject(self, path: Path, lineno: int, reason: str, report: LoadReport) -> None:
        if self.policy == LoadPolicy.STRICT:
            raise TaskFormatError(path, lineno, reason)
        logger.warning("%s:%d: %s, skipping record", path, lineno, reason)
        report.dropped.append(lineno)
