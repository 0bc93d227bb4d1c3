from __future__ import annotations

import logging
from datetime import date

from PyQt6.QtCore import QObject, pyqtSignal

from pomolog.core.clock import Clock, SystemClock
from pomolog.core.config import Preset
from pomolog.core.models import PendingSession, Session, SessionLog
from pomolog.core.report import DayReport, aggregate_by_label
from pomolog.core.sessions import ConfirmPrompt, SessionLifecycle
from pomolog.core.timer import CountdownTimer, Intent, TimerOutcome, TimerSnapshot
from pomolog.data.repository import StateRepository
from pomolog.data.storage import Storage


log = logging.getLogger(__name__)


class AppState(QObject):
    """Owns the timer and session log, persists every change and re-broadcasts it as signals."""

    state_changed = pyqtSignal()
    timer_changed = pyqtSignal(object)
    tick_armed = pyqtSignal(bool)
    alerts_primed = pyqtSignal()
    session_completed = pyqtSignal(object)
    sessions_changed = pyqtSignal()

    def __init__(self, clock: Clock | None = None) -> None:
        super().__init__()
        self.clock: Clock = clock or SystemClock()
        self.timer = CountdownTimer(self.clock)
        self.lifecycle = SessionLifecycle(self.timer, SessionLog())
        self._repository: StateRepository | None = None

    def load_from_storage(self, storage: Storage) -> None:
        self._repository = StateRepository(storage, self.clock)
        session_log = self._repository.load_session_log()
        self.timer, outcome = CountdownTimer.rehydrate(self._repository.load_timer_state(), self.clock)
        self.lifecycle = SessionLifecycle(self.timer, session_log, self._repository)
        log.info(f"Restored timer in phase '{self.timer.phase.value}' with {self.timer.remaining_seconds()}s left")
        self._apply(outcome)
        self.sessions_changed.emit()

    @property
    def is_running(self) -> bool:
        return self.timer.is_running

    @property
    def remaining_seconds(self) -> int:
        return self.timer.remaining_seconds()

    @property
    def pending_session(self) -> PendingSession | None:
        return self.timer.pending_session

    @property
    def sessions(self) -> list[Session]:
        return self.lifecycle.sessions

    @property
    def editing_id(self) -> str | None:
        return self.lifecycle.editing_id

    def snapshot(self) -> TimerSnapshot:
        return self.timer.snapshot()

    def report(self, day: date | None = None) -> DayReport:
        return aggregate_by_label(self.lifecycle.sessions, day or date.today())

    def configure(self, minutes: int, seconds: int) -> None:
        self._apply(self.timer.configure(minutes, seconds))

    def start(self) -> None:
        self._apply(self.timer.start())

    def stop(self) -> None:
        self._apply(self.timer.stop())

    def reset(self) -> None:
        self._apply(self.timer.reset())

    def tick(self) -> TimerSnapshot:
        outcome = self.timer.tick()
        self._apply(outcome)
        return outcome.snapshot

    def apply_configured_duration(self, total_seconds: int | None = None) -> None:
        self._apply(self.timer.apply_configured_duration(total_seconds))

    def select_preset(self, preset: Preset) -> None:
        self._apply(self.timer.select_preset(preset))

    def update_note_draft(self, note: str, tags_text: str) -> None:
        if self.lifecycle.update_draft(note, tags_text):
            self._save_timer_state()

    def save_annotation(self, note: str, tags_text: str) -> Session | None:
        return self._resolve(True, note, tags_text)

    def skip_annotation(self) -> None:
        self._resolve(False)

    def begin_edit(self, session_id: str) -> Session | None:
        session = self.lifecycle.begin_edit(session_id)
        self.state_changed.emit()
        return session

    def cancel_edit(self) -> None:
        self.lifecycle.cancel_edit()
        self.state_changed.emit()

    def edit_session(self, session_id: str, note: str, tags_text: str) -> Session | None:
        updated = self.lifecycle.edit_session(session_id, note, tags_text)
        if updated is not None:
            self.sessions_changed.emit()
        self.state_changed.emit()
        return updated

    def delete_session(self, session_id: str, confirm: ConfirmPrompt) -> bool:
        removed = self.lifecycle.delete_session(session_id, confirm)
        if removed:
            self.sessions_changed.emit()
            self.state_changed.emit()
        return removed

    def flush(self) -> None:
        """Writes both records; called when the window is hidden or closed."""
        if not self._repository:
            return
        self._repository.save_timer_state(self.timer.state)
        self._repository.save_session_log(self.lifecycle.session_log)

    def _resolve(self, confirm: bool, note: str = "", tags_text: str = "") -> Session | None:
        if self.timer.pending_session is None:
            return None
        session = self.lifecycle.resolve_annotation(confirm, note, tags_text)
        self._save_timer_state()
        if session is not None:
            self.sessions_changed.emit()
        self.timer_changed.emit(self.timer.snapshot())
        self.state_changed.emit()
        return session

    def _save_timer_state(self) -> None:
        if self._repository:
            self._repository.save_timer_state(self.timer.state)

    def _apply(self, outcome: TimerOutcome) -> None:
        if outcome.completed is not None:
            self.lifecycle.on_session_completed(outcome.completed)
        if outcome.changed:
            self._save_timer_state()
        for intent in outcome.intents:
            if intent == Intent.ARM_TICK:
                self.tick_armed.emit(True)
            elif intent == Intent.CANCEL_TICK:
                self.tick_armed.emit(False)
            elif intent == Intent.PRIME_ALERTS:
                self.alerts_primed.emit()
            elif intent == Intent.ANNOUNCE_COMPLETION and outcome.completed is not None:
                self.session_completed.emit(outcome.completed.pending_session)
        self.timer_changed.emit(outcome.snapshot)
        if outcome.changed or outcome.intents:
            self.state_changed.emit()
