from __future__ import annotations

import logging

from pomolog.core.clock import Clock
from pomolog.core.config import SESSIONS_KEY, STATE_KEY
from pomolog.core.models import SessionLog, TimerState
from pomolog.data.codec import decode_session_log, decode_timer_state, encode_session_log, encode_timer_state
from pomolog.data.storage import Storage


log = logging.getLogger(__name__)


class StateRepository:
    """Reads and writes the timer state and session log records."""

    def __init__(self, storage: Storage, clock: Clock) -> None:
        self._storage = storage
        self._clock = clock

    def load_timer_state(self) -> TimerState | None:
        state = decode_timer_state(self._storage.get(STATE_KEY))
        if state is None:
            log.info("No saved timer state, starting fresh")
        return state

    def save_timer_state(self, state: TimerState) -> bool:
        state.updated_at = self._clock.now()
        return self._storage.set(STATE_KEY, encode_timer_state(state))

    def load_session_log(self) -> SessionLog:
        session_log = decode_session_log(self._storage.get(SESSIONS_KEY))
        log.info(f"Loaded {len(session_log)} sessions")
        return session_log

    def save_session_log(self, session_log: SessionLog) -> bool:
        return self._storage.set(SESSIONS_KEY, encode_session_log(session_log))

    def clear(self) -> None:
        self._storage.clear(STATE_KEY)
        self._storage.clear(SESSIONS_KEY)
