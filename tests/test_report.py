from datetime import date

from pomolog.core.models import Session
from pomolog.core.report import (
    aggregate_by_label,
    day_bounds_ms,
    format_clock,
    humanize_duration,
    legend_duration,
)


DAY = date(2026, 3, 14)


def session_at(offset_hours: float, duration: int, note: str, idx: int = 0, day: date = DAY) -> Session:
    start_ms, _end_ms = day_bounds_ms(day)
    ended_at = start_ms + int(offset_hours * 3_600_000)
    return Session(
        id=f"{ended_at}-{idx}",
        started_at=ended_at - duration * 1000,
        ended_at=ended_at,
        duration_seconds=duration,
        note=note,
    )


def test_groups_by_note_and_sorts_by_total() -> None:
    sessions = [session_at(9, 30, "", 1), session_at(10, 90, "focus", 2)]

    report = aggregate_by_label(sessions, DAY)

    assert report.entries == (("focus", 90), ("(no name)", 30))
    assert report.total_seconds == 120


def test_blank_and_padded_notes_share_labels() -> None:
    sessions = [
        session_at(8, 10, "   ", 1),
        session_at(9, 20, "", 2),
        session_at(10, 5, " reading ", 3),
        session_at(11, 5, "reading", 4),
    ]

    report = aggregate_by_label(sessions, DAY)

    assert report.entries == (("(no name)", 30), ("reading", 10))


def test_ties_keep_first_seen_order() -> None:
    sessions = [session_at(8, 60, "b", 1), session_at(9, 60, "a", 2), session_at(10, 60, "c", 3)]

    report = aggregate_by_label(sessions, DAY)

    assert [label for label, _ in report.entries] == ["b", "a", "c"]


def test_only_sessions_ending_that_day_count() -> None:
    start_ms, end_ms = day_bounds_ms(DAY)
    sessions = [
        session_at(0, 40, "edge start", 1),
        session_at(12, 10, "inside", 2),
        session_at(-1, 999, "yesterday", 3),
        session_at(0, 7, "next day", 4, day=date(2026, 3, 15)),
    ]

    report = aggregate_by_label(sessions, DAY)

    assert sessions[0].ended_at == start_ms
    assert sessions[3].ended_at == end_ms
    assert [label for label, _ in report.entries] == ["edge start", "inside"]
    assert report.total_seconds == 50


def test_no_sessions_is_an_empty_report() -> None:
    report = aggregate_by_label([], DAY)

    assert report.is_empty
    assert report.entries == ()
    assert report.total_seconds == 0


def test_seconds_for_label() -> None:
    report = aggregate_by_label([session_at(9, 30, "", 1)], DAY)

    assert report.seconds_for("") == 30
    assert report.seconds_for("missing") == 0


def test_format_clock() -> None:
    assert format_clock(1500) == "25:00"
    assert format_clock(65) == "01:05"
    assert format_clock(-4) == "00:00"
    assert format_clock(6000) == "100:00"


def test_humanize_duration() -> None:
    assert humanize_duration(45) == "45 secs"
    assert humanize_duration(1) == "1 sec"
    assert humanize_duration(60) == "1 min"
    assert humanize_duration(150) == "2 mins"
    assert humanize_duration(3600) == "1 hr"
    assert humanize_duration(3900) == "1 hr, 5 mins"
    assert humanize_duration(7260) == "2 hrs, 1 min"


def test_legend_duration_rounds_minutes_up() -> None:
    assert legend_duration(30) == "30 secs"
    assert legend_duration(60) == "1 mins"
    assert legend_duration(61) == "2 mins"
