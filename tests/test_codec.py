from pomolog.core.models import PendingSession, Session, SessionLog, TimerState
from pomolog.data.codec import (
    decode_session_log,
    decode_timer_state,
    encode_session_log,
    encode_timer_state,
)


def make_session(session_id: str, ended_at: int, note: str = "", tags: tuple[str, ...] = ()) -> Session:
    return Session(
        id=session_id,
        started_at=ended_at - 60_000,
        ended_at=ended_at,
        duration_seconds=60,
        note=note,
        tags=tags,
    )


def test_timer_state_round_trip_with_pending_session() -> None:
    pending = PendingSession.for_run(1_000_000, 1_300_000)
    state = TimerState(
        planned_seconds=300,
        remaining_seconds=0,
        pending_session=pending,
        input_minutes=5,
        input_seconds=0,
        note_draft="half",
        tags_draft="a, b",
        is_note_open=True,
        updated_at=1_300_500,
    )

    decoded = decode_timer_state(encode_timer_state(state))

    assert decoded == state


def test_running_state_round_trip() -> None:
    state = TimerState(planned_seconds=90, remaining_seconds=90, is_running=True, run_started_at=1_700_000_000_000)

    assert decode_timer_state(encode_timer_state(state)) == state


def test_session_log_round_trip_keeps_tag_order() -> None:
    session_log = SessionLog([
        make_session("2-b", 2_000_000, "second", ("z", "a", "z")),
        make_session("1-a", 1_000_000, "first"),
    ])

    decoded = decode_session_log(encode_session_log(session_log))

    assert decoded.sessions == session_log.sessions
    assert decoded[0].tags == ("z", "a", "z")


def test_missing_blob_is_no_prior_state() -> None:
    assert decode_timer_state(None) is None
    assert decode_timer_state("garbage") is None
    assert len(decode_session_log(None)) == 0
    assert len(decode_session_log({"not": "a list"})) == 0


def test_malformed_numbers_default_to_zero() -> None:
    decoded = decode_timer_state({
        "inputMinutes": "ten",
        "inputSeconds": 99,
        "remainingSeconds": None,
        "plannedSeconds": float("nan"),
        "isRunning": False,
    })

    assert decoded.input_minutes == 0
    assert decoded.input_seconds == 59
    assert decoded.remaining_seconds == 0
    assert decoded.planned_seconds == 59
    assert decoded.pending_session is None


def test_negative_input_seconds_clamp_to_zero() -> None:
    decoded = decode_timer_state({"inputMinutes": 3, "inputSeconds": -4})

    assert (decoded.input_minutes, decoded.input_seconds) == (3, 0)
    assert decoded.planned_seconds == 180


def test_numeric_strings_are_accepted() -> None:
    decoded = decode_timer_state({"remainingSeconds": "42", "runStartedAt": "1700000000000", "isRunning": True})

    assert decoded.remaining_seconds == 42
    assert decoded.run_started_at == 1_700_000_000_000
    assert decoded.is_running is True


def test_legacy_run_start_key_is_read() -> None:
    decoded = decode_timer_state({"isRunning": True, "runStartAt": 1234, "plannedSeconds": 5})

    assert decoded.run_started_at == 1234


def test_session_log_drops_bad_entries_and_duplicates() -> None:
    raw = [
        {"id": "a", "startedAt": 0, "endedAt": 60_000, "durationSeconds": 60, "note": "x", "tags": ["t", "", "  ", 5]},
        "not a record",
        {"note": "no id"},
        {"id": "a", "startedAt": 1, "endedAt": 2, "durationSeconds": 1},
        {"id": "b", "startedAt": "oops", "endedAt": 10, "durationSeconds": -3},
    ]

    decoded = decode_session_log(raw)

    assert [s.id for s in decoded] == ["a", "b"]
    assert decoded[0].tags == ("t",)
    assert decoded[1].started_at == 0
    assert decoded[1].duration_seconds == 0
    assert decoded[1].note == ""


def test_zero_planned_seconds_falls_back_to_inputs() -> None:
    decoded = decode_timer_state({"inputMinutes": 2, "inputSeconds": 0, "plannedSeconds": 0, "remainingSeconds": 0})

    assert decoded.planned_seconds == 120
    assert decoded.remaining_seconds == 0
