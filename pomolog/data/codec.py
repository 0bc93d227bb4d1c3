"""JSON shapes for the two persisted records.

Timestamps are milliseconds since the epoch, durations whole seconds and
tags ordered string lists. Decoding never raises: anything missing or
malformed falls back to a default, and a blob that is not a record at all
decodes to ``None`` ("no prior state").
"""

from __future__ import annotations

import logging
import math
from typing import Any

from pomolog.core.models import PendingSession, Session, SessionLog, TimerState


log = logging.getLogger(__name__)


def _as_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return default
        return int(number) if math.isfinite(number) else default
    return default


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_tags(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(tag.strip() for tag in value if isinstance(tag, str) and tag.strip())


def encode_session(session: PendingSession) -> dict[str, Any]:
    return {
        "id": session.id,
        "startedAt": session.started_at,
        "endedAt": session.ended_at,
        "durationSeconds": session.duration_seconds,
        "note": session.note,
        "tags": list(session.tags),
    }


def _decode_fields(raw: Any) -> dict[str, Any] | None:
    if not isinstance(raw, dict):
        return None
    session_id = raw.get("id")
    if isinstance(session_id, (int, float)) and not isinstance(session_id, bool):
        session_id = str(session_id)
    if not isinstance(session_id, str) or not session_id:
        return None
    started_at = max(0, _as_int(raw.get("startedAt")))
    ended_at = max(started_at, _as_int(raw.get("endedAt")))
    return {
        "id": session_id,
        "started_at": started_at,
        "ended_at": ended_at,
        "duration_seconds": max(0, _as_int(raw.get("durationSeconds"))),
        "note": _as_str(raw.get("note")),
        "tags": _as_tags(raw.get("tags")),
    }


def decode_pending_session(raw: Any) -> PendingSession | None:
    fields = _decode_fields(raw)
    return PendingSession(**fields) if fields else None


def decode_session(raw: Any) -> Session | None:
    fields = _decode_fields(raw)
    return Session(**fields) if fields else None


def encode_session_log(session_log: SessionLog) -> list[dict[str, Any]]:
    return [encode_session(session) for session in session_log]


def decode_session_log(raw: Any) -> SessionLog:
    if raw is None:
        return SessionLog()
    if not isinstance(raw, list):
        log.warning("Persisted session log is not a list, starting with an empty log")
        return SessionLog()
    sessions: list[Session] = []
    seen: set[str] = set()
    dropped = 0
    for entry in raw:
        session = decode_session(entry)
        if session is None or session.id in seen:
            dropped += 1
            continue
        seen.add(session.id)
        sessions.append(session)
    if dropped:
        log.warning(f"Dropped {dropped} malformed or duplicate session entries while loading")
    return SessionLog(sessions)


def encode_timer_state(state: TimerState) -> dict[str, Any]:
    return {
        "inputMinutes": state.input_minutes,
        "inputSeconds": state.input_seconds,
        "plannedSeconds": state.planned_seconds,
        "remainingSeconds": state.remaining_seconds,
        "isRunning": state.is_running,
        "runStartedAt": state.run_started_at,
        "pendingSession": encode_session(state.pending_session) if state.pending_session else None,
        "isNoteOpen": state.is_note_open,
        "noteText": state.note_draft,
        "noteTagsText": state.tags_draft,
        "updatedAt": state.updated_at,
    }


def decode_timer_state(raw: Any) -> TimerState | None:
    if not isinstance(raw, dict):
        if raw is not None:
            log.warning("Persisted timer state is not a record, ignoring it")
        return None

    state = TimerState()
    state.set_inputs(_as_int(raw.get("inputMinutes")), _as_int(raw.get("inputSeconds")))
    # A zero plan falls back to the configured inputs on purpose
    state.planned_seconds = max(0, _as_int(raw.get("plannedSeconds"))) or state.configured_seconds
    state.remaining_seconds = max(0, _as_int(raw.get("remainingSeconds")))
    state.is_running = bool(raw.get("isRunning"))
    # "runStartAt" is the key written by older versions
    started = raw.get("runStartedAt", raw.get("runStartAt"))
    state.run_started_at = _as_int(started) or None
    state.pending_session = decode_pending_session(raw.get("pendingSession"))
    if state.pending_session is not None:
        state.is_note_open = bool(raw.get("isNoteOpen", True))
        state.note_draft = _as_str(raw.get("noteText"))
        state.tags_draft = _as_str(raw.get("noteTagsText"))
    state.updated_at = max(0, _as_int(raw.get("updatedAt")))
    return state
