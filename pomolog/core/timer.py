from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from pomolog.core.clock import MS_PER_SECOND, Clock, elapsed_whole_seconds
from pomolog.core.config import Preset
from pomolog.core.models import PendingSession, SessionCompleted, TimerPhase, TimerState


log = logging.getLogger(__name__)


class Intent(str, Enum):
    """Side effects the timer asks its host to carry out."""

    PRIME_ALERTS = "prime_alerts"
    ARM_TICK = "arm_tick"
    CANCEL_TICK = "cancel_tick"
    ANNOUNCE_COMPLETION = "announce_completion"


@dataclass(frozen=True)
class TimerSnapshot:
    planned_seconds: int
    remaining_seconds: int
    elapsed_seconds: int
    progress: float
    phase: TimerPhase

    @property
    def is_running(self) -> bool:
        return self.phase == TimerPhase.RUNNING


@dataclass(frozen=True)
class TimerOutcome:
    snapshot: TimerSnapshot
    intents: tuple[Intent, ...] = ()
    completed: SessionCompleted | None = None
    changed: bool = False


class CountdownTimer:
    """Wall-clock countdown with an annotation gate after every expiry.

    Remaining time is never decremented per tick; it is recomputed from
    ``run_started_at`` on every observation, so late, skipped or coalesced
    ticks and long suspensions all converge on the same result.
    """

    def __init__(self, clock: Clock, state: TimerState | None = None) -> None:
        self._clock = clock
        self._state = state if state is not None else TimerState()

    @classmethod
    def rehydrate(cls, state: TimerState | None, clock: Clock) -> tuple["CountdownTimer", TimerOutcome]:
        """Rebuilds a timer from a persisted snapshot, reconciling it against the current time."""
        if state is None:
            timer = cls(clock)
            return timer, timer._outcome()

        timer = cls(clock, state)
        if state.pending_session is not None:
            if state.is_running:
                log.warning("Persisted state was running with a pending session, keeping the pending session")
            state.is_running = False
            state.run_started_at = None
            state.remaining_seconds = 0
            # The dialog is the only way out of this phase
            state.is_note_open = True
            return timer, timer._outcome(changed=True)

        if state.is_running and state.run_started_at is not None:
            remaining = timer._compute_remaining(clock.now())
            if remaining > 0:
                state.remaining_seconds = remaining
                log.debug(f"Resumed running countdown with {remaining}s left")
                return timer, timer._outcome((Intent.ARM_TICK,), changed=True)
            completed = timer._expire()
            return timer, timer._outcome((Intent.ANNOUNCE_COMPLETION,), completed=completed, changed=True)

        state.is_running = False
        state.run_started_at = None
        return timer, timer._outcome()

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def phase(self) -> TimerPhase:
        return self._state.phase

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    @property
    def pending_session(self) -> PendingSession | None:
        return self._state.pending_session

    def remaining_seconds(self) -> int:
        if self._state.is_running:
            return self._compute_remaining(self._clock.now())
        return self._state.remaining_seconds

    def configure(self, minutes: int, seconds: int) -> TimerOutcome:
        self._state.set_inputs(minutes, seconds)
        return self._outcome(changed=True)

    def start(self) -> TimerOutcome:
        state = self._state
        if state.is_running:
            return self._outcome()
        if state.pending_session is not None:
            log.debug("Start ignored: previous session is awaiting annotation")
            return self._outcome()
        if state.remaining_seconds <= 0:
            state.remaining_seconds = state.configured_seconds
        return self._begin_run(state.remaining_seconds)

    def tick(self) -> TimerOutcome:
        state = self._state
        if not state.is_running or state.run_started_at is None:
            return self._outcome()
        remaining = self._compute_remaining(self._clock.now())
        if remaining > 0:
            changed = remaining != state.remaining_seconds
            state.remaining_seconds = remaining
            return self._outcome(changed=changed)
        completed = self._expire()
        return self._outcome(
            (Intent.CANCEL_TICK, Intent.ANNOUNCE_COMPLETION),
            completed=completed,
            changed=True,
        )

    def stop(self) -> TimerOutcome:
        state = self._state
        if not state.is_running or state.run_started_at is None:
            log.debug("Stop ignored: timer is not running")
            return self._outcome()
        remaining = self._compute_remaining(self._clock.now())
        if remaining == 0:
            # The countdown already ran out between ticks
            completed = self._expire()
            return self._outcome(
                (Intent.CANCEL_TICK, Intent.ANNOUNCE_COMPLETION),
                completed=completed,
                changed=True,
            )
        state.remaining_seconds = remaining
        state.is_running = False
        state.run_started_at = None
        log.debug(f"Stopped with {remaining}s left")
        return self._outcome((Intent.CANCEL_TICK,), changed=True)

    def reset(self) -> TimerOutcome:
        state = self._state
        configured = state.configured_seconds
        state.is_running = False
        state.run_started_at = None
        state.planned_seconds = configured
        state.remaining_seconds = configured
        log.debug(f"Reset to {configured}s")
        return self._outcome((Intent.CANCEL_TICK,), changed=True)

    def apply_configured_duration(self, total_seconds: int | None = None) -> TimerOutcome:
        """Sets a new duration and, when it is non-zero, starts running right away."""
        state = self._state
        total = state.configured_seconds if total_seconds is None else max(0, int(total_seconds))
        state.is_running = False
        state.run_started_at = None
        state.planned_seconds = total
        state.remaining_seconds = total
        if total > 0 and state.pending_session is None:
            return self._begin_run(total)
        return self._outcome((Intent.CANCEL_TICK,), changed=True)

    def select_preset(self, preset: Preset) -> TimerOutcome:
        total = preset.seconds
        self._state.set_inputs(total // 60, total % 60)
        if not preset.auto_starts:
            return self.reset()
        return self.apply_configured_duration(total)

    def open_annotation(self) -> None:
        if self._state.pending_session is not None:
            self._state.is_note_open = True

    def resolve_pending(self) -> PendingSession | None:
        """Clears the pending session and annotation drafts, returning what was pending."""
        state = self._state
        pending = state.pending_session
        state.pending_session = None
        state.clear_drafts()
        state.run_started_at = None
        return pending

    def snapshot(self) -> TimerSnapshot:
        planned = self._state.planned_seconds
        remaining = self.remaining_seconds()
        elapsed = max(0, planned - remaining)
        progress = (elapsed / planned) if planned > 0 else 0.0
        return TimerSnapshot(
            planned_seconds=planned,
            remaining_seconds=remaining,
            elapsed_seconds=elapsed,
            progress=max(0.0, min(1.0, progress)),
            phase=self._state.phase,
        )

    def _begin_run(self, seconds: int) -> TimerOutcome:
        state = self._state
        state.run_started_at = self._clock.now()
        state.planned_seconds = seconds
        state.remaining_seconds = seconds
        state.is_running = True
        if seconds <= 0:
            completed = self._expire()
            return self._outcome(
                (Intent.PRIME_ALERTS, Intent.CANCEL_TICK, Intent.ANNOUNCE_COMPLETION),
                completed=completed,
                changed=True,
            )
        log.debug(f"Started {seconds}s run at {state.run_started_at}")
        return self._outcome((Intent.PRIME_ALERTS, Intent.ARM_TICK), changed=True)

    def _expire(self) -> SessionCompleted:
        state = self._state
        started_at = state.run_started_at
        if started_at is None:
            raise RuntimeError("Cannot expire a run that never started")
        # Ends at the planned instant, not at observation time
        ended_at = started_at + state.planned_seconds * MS_PER_SECOND
        pending = PendingSession.for_run(started_at, ended_at)
        state.is_running = False
        state.run_started_at = None
        state.remaining_seconds = 0
        state.pending_session = pending
        state.note_draft = ""
        state.tags_draft = ""
        state.is_note_open = True
        log.info(f"Countdown finished: {pending.duration_seconds}s session {pending.id} awaiting annotation")
        return SessionCompleted(pending)

    def _compute_remaining(self, now: int) -> int:
        started_at = self._state.run_started_at
        if started_at is None:
            return self._state.remaining_seconds
        return max(0, self._state.planned_seconds - elapsed_whole_seconds(started_at, now))

    def _outcome(
        self,
        intents: tuple[Intent, ...] = (),
        completed: SessionCompleted | None = None,
        changed: bool = False,
    ) -> TimerOutcome:
        return TimerOutcome(snapshot=self.snapshot(), intents=intents, completed=completed, changed=changed)
