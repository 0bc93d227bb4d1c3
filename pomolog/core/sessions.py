from __future__ import annotations

import logging
from collections.abc import Callable

from pomolog.core.config import DELETE_PROMPT
from pomolog.core.models import Session, SessionCompleted, SessionLog
from pomolog.core.timer import CountdownTimer
from pomolog.data.repository import StateRepository


log = logging.getLogger(__name__)

ConfirmPrompt = Callable[[str], bool]


class SessionLifecycle:
    """Turns finished countdowns into logged sessions and manages the log afterwards.

    Every method that changes the log writes the whole log back through the
    repository before returning. Calls whose preconditions do not hold
    (nothing pending, unknown id) are silent no-ops.
    """

    def __init__(
        self,
        timer: CountdownTimer,
        session_log: SessionLog,
        repository: StateRepository | None = None,
    ) -> None:
        self._timer = timer
        self._log = session_log
        self._repository = repository
        self._editing_id: str | None = None

    @property
    def sessions(self) -> list[Session]:
        return list(self._log)

    @property
    def session_log(self) -> SessionLog:
        return self._log

    @property
    def editing_id(self) -> str | None:
        return self._editing_id

    def _persist(self) -> None:
        if self._repository:
            self._repository.save_session_log(self._log)

    def on_session_completed(self, event: SessionCompleted) -> None:
        pending = self._timer.pending_session
        if pending is None or pending.id != event.pending_session.id:
            log.warning(f"Ignoring completion for {event.pending_session.id}: it is not the pending session")
            return
        self._timer.open_annotation()

    def update_draft(self, note: str, tags_text: str) -> bool:
        if self._timer.pending_session is None:
            return False
        state = self._timer.state
        state.note_draft = note
        state.tags_draft = tags_text
        return True

    def resolve_annotation(self, confirm: bool, note: str = "", tags_text: str = "") -> Session | None:
        pending = self._timer.pending_session
        if pending is None:
            log.debug("No pending session to resolve")
            return None
        self._timer.resolve_pending()
        if not confirm:
            log.info(f"Skipped session {pending.id}")
            return None
        logged = self._log.find(pending.id)
        if logged is not None:
            # Restored from a timer state saved before the log write landed
            log.warning(f"Session {pending.id} is already logged, keeping the logged copy")
            return logged
        session = pending.finalize(note, tags_text)
        self._log.prepend(session)
        self._persist()
        log.info(f"Logged {session.duration_seconds}s session {session.id}")
        return session

    def begin_edit(self, session_id: str) -> Session | None:
        session = self._log.find(session_id)
        self._editing_id = session.id if session else None
        return session

    def cancel_edit(self) -> None:
        self._editing_id = None

    def edit_session(self, session_id: str, note: str, tags_text: str) -> Session | None:
        existing = self._log.find(session_id)
        if existing is None:
            log.debug(f"Edit ignored: no session {session_id}")
            return None
        updated = existing.with_annotation(note, tags_text)
        self._log.replace(updated)
        self._persist()
        if self._editing_id == session_id:
            self._editing_id = None
        log.info(f"Edited session {session_id}")
        return updated

    def delete_session(self, session_id: str, confirm: ConfirmPrompt) -> bool:
        if not confirm(DELETE_PROMPT):
            return False
        if not self._log.remove(session_id):
            log.debug(f"Delete ignored: no session {session_id}")
            return False
        self._persist()
        if self._editing_id == session_id:
            self._editing_id = None
        log.info(f"Deleted session {session_id}")
        return True
