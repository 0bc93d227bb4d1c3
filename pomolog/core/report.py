"""Per-day totals over the session log, plus the duration formats the UI shows."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from pomolog.core.clock import MS_PER_SECOND
from pomolog.core.config import NO_NAME_LABEL
from pomolog.core.models import Session


@dataclass(frozen=True)
class DayReport:
    day: date
    entries: tuple[tuple[str, int], ...]
    total_seconds: int

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def seconds_for(self, label: str) -> int:
        normalized = session_label(label)
        for entry_label, seconds in self.entries:
            if entry_label == normalized:
                return seconds
        return 0


def session_label(note: str | None) -> str:
    cleaned = (note or "").strip()
    return cleaned if cleaned else NO_NAME_LABEL


def day_bounds_ms(day: date) -> tuple[int, int]:
    """Local-time [start, end) of `day` in epoch milliseconds."""
    start = datetime(day.year, day.month, day.day).astimezone()
    following = day + timedelta(days=1)
    end = datetime(following.year, following.month, following.day).astimezone()
    return int(start.timestamp() * MS_PER_SECOND), int(end.timestamp() * MS_PER_SECOND)


def aggregate_by_label(sessions: Iterable[Session], day: date) -> DayReport:
    start_ms, end_ms = day_bounds_ms(day)
    totals: dict[str, int] = {}
    for session in sessions:
        if not start_ms <= session.ended_at < end_ms:
            continue
        label = session_label(session.note)
        totals[label] = totals.get(label, 0) + max(0, session.duration_seconds)
    # sorted() is stable, so equal totals keep first-seen order
    entries = tuple(sorted(totals.items(), key=lambda item: item[1], reverse=True))
    return DayReport(day=day, entries=entries, total_seconds=sum(totals.values()))


def format_clock(total_seconds: int) -> str:
    total_seconds = max(0, int(total_seconds))
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def humanize_duration(total_seconds: float) -> str:
    total = max(0, round(total_seconds))
    hours, rest = divmod(total, 3600)
    minutes = rest // 60
    if hours > 0:
        text = _plural(hours, "hr")
        return f"{text}, {_plural(minutes, 'min')}" if minutes > 0 else text
    if total < 60:
        return _plural(total, "sec")
    return _plural(minutes, "min")


def legend_duration(total_seconds: float) -> str:
    total = max(0, round(total_seconds))
    if total < 60:
        return f"{total} secs"
    return f"{math.ceil(total / 60)} mins"
