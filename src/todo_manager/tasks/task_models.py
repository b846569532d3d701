# src/todo_manager/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo

INPUT_FORMAT = "%Y-%m-%d %H:%M:%S"


class DueDateParseError(ValueError):
    """Interactive due-date input that does not match INPUT_FORMAT."""


@dataclass(frozen=True, slots=True)
class Task:
    """
    One to-do item.

    due_date is always timezone-aware and in UTC (or None for "no deadline").
    Tasks are never edited after creation.
    """

    description: str
    due_date: datetime | None = None

    @classmethod
    def create(cls, description: str, due_date: datetime | None = None) -> Task:
        if due_date is not None:
            if due_date.tzinfo is None or due_date.utcoffset() is None:
                raise ValueError("due_date must be timezone-aware")
            due_date = due_date.astimezone(UTC)
        return cls(description=description, due_date=due_date)

    def is_due(self, now: datetime | None = None) -> bool:
        if self.due_date is None:
            return False
        if now is None:
            now = datetime.now(UTC)
        elif now.tzinfo is None or now.utcoffset() is None:
            raise ValueError("now must be timezone-aware")
        return now >= self.due_date


def resolve_timezone(name: str | None) -> tzinfo | None:
    """
    Map the configured reference frame to a tzinfo.

    "utc" -> UTC, anything else -> None (meaning: the machine's local timezone,
    as understood by datetime.astimezone()).
    """
    if (name or "").strip().lower() == "utc":
        return UTC
    return None


def parse_due_input(text: str, tz: tzinfo | None = None) -> datetime | None:
    """
    Parse "YYYY-MM-DD HH:MM:SS" typed by the user.

    The wall-clock value is read in `tz` (None = local time) and returned in UTC.
    Blank input returns None.
    """
    text = (text or "").strip()
    if not text:
        return None
    try:
        naive = datetime.strptime(text, INPUT_FORMAT)
    except ValueError as e:
        raise DueDateParseError(str(e)) from e

    if tz is None:
        aware = naive.astimezone()
    else:
        aware = naive.replace(tzinfo=tz)
    return aware.astimezone(UTC)


def parse_timestamp(text: str) -> datetime:
    """
    Parse a stored timestamp; it must carry a UTC offset.

    Accepts ISO 8601 with either separator ("2024-01-01 10:00:00+00:00",
    "2024-01-01T10:00:00Z") and the older "2024-01-01 10:00:00 UTC" spelling.
    """
    text = text.strip()
    if text.endswith(" UTC"):
        text = text[: -len(" UTC")] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise ValueError(f"timestamp has no UTC offset: {text!r}")
    return dt.astimezone(UTC)


def format_timestamp(dt: datetime, tz: tzinfo | None = UTC) -> str:
    # 2024-01-01 10:00:00+00:00
    return dt.astimezone(tz).isoformat(sep=" ", timespec="seconds")


def format_due(task: Task, tz: tzinfo | None = None) -> str:
    if task.due_date is None:
        return "No due date"
    return f"Due date: {format_timestamp(task.due_date, tz)}"
