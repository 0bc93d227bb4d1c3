from pomolog.core.config import Preset
from pomolog.core.models import TimerPhase
from pomolog.core.timer import CountdownTimer, Intent


def make_timer(clock, minutes: int = 0, seconds: int = 5) -> CountdownTimer:
    timer = CountdownTimer(clock)
    timer.configure(minutes, seconds)
    timer.reset()
    return timer


def test_five_ticks_expire_exactly_once(clock) -> None:
    timer = make_timer(clock, seconds=5)
    started = clock.now()
    timer.start()

    completions = []
    for expected_remaining in (4, 3, 2, 1):
        clock.advance(1)
        outcome = timer.tick()
        assert outcome.completed is None
        assert outcome.snapshot.remaining_seconds == expected_remaining
    clock.advance(1)
    outcome = timer.tick()
    completions.append(outcome.completed)
    for _ in range(3):
        clock.advance(1)
        completions.append(timer.tick().completed)

    assert [c for c in completions if c is not None] == [completions[0]]
    pending = completions[0].pending_session
    assert pending.duration_seconds == 5
    assert pending.started_at == started
    assert pending.ended_at == started + 5000
    assert timer.phase == TimerPhase.AWAITING_ANNOTATION
    assert timer.state.run_started_at is None
    assert timer.state.remaining_seconds == 0
    assert Intent.ANNOUNCE_COMPLETION in outcome.intents
    assert Intent.CANCEL_TICK in outcome.intents


def test_start_requests_alert_priming_and_tick(clock) -> None:
    timer = make_timer(clock, seconds=30)

    outcome = timer.start()

    assert outcome.intents == (Intent.PRIME_ALERTS, Intent.ARM_TICK)
    assert timer.is_running
    assert timer.state.run_started_at == clock.now()
    assert timer.state.planned_seconds == 30


def test_skipped_ticks_recompute_from_wall_clock(clock) -> None:
    timer = make_timer(clock, seconds=10)
    started = clock.now()
    timer.start()

    clock.advance(7)
    assert timer.tick().snapshot.remaining_seconds == 3

    clock.advance(100)
    outcome = timer.tick()

    assert outcome.completed is not None
    assert outcome.completed.pending_session.duration_seconds == 10
    assert outcome.completed.pending_session.ended_at == started + 10_000


def test_partial_second_does_not_count(clock) -> None:
    timer = make_timer(clock, seconds=10)
    timer.start()

    clock.advance(ms=999)
    assert timer.tick().snapshot.remaining_seconds == 10
    clock.advance(ms=1)
    assert timer.tick().snapshot.remaining_seconds == 9


def test_stop_freezes_remaining_without_logging(clock) -> None:
    timer = make_timer(clock, seconds=10)
    timer.start()
    clock.advance(4)

    outcome = timer.stop()
    clock.advance(30)
    late = timer.tick()

    assert outcome.intents == (Intent.CANCEL_TICK,)
    assert outcome.completed is None
    assert not timer.is_running
    assert timer.state.run_started_at is None
    assert timer.remaining_seconds() == 6
    assert late.completed is None
    assert timer.phase == TimerPhase.IDLE


def test_resume_after_stop_plans_the_remainder(clock) -> None:
    timer = make_timer(clock, seconds=10)
    timer.start()
    clock.advance(4)
    timer.stop()
    clock.advance(60)

    timer.start()
    resumed_at = clock.now()
    clock.advance(6)
    outcome = timer.tick()

    assert outcome.completed is not None
    pending = outcome.completed.pending_session
    assert pending.started_at == resumed_at
    assert pending.duration_seconds == 6


def test_stop_after_unobserved_expiry_keeps_the_session(clock) -> None:
    timer = make_timer(clock, seconds=10)
    timer.start()
    clock.advance(12)

    outcome = timer.stop()

    assert outcome.completed is not None
    assert outcome.completed.pending_session.duration_seconds == 10
    assert timer.phase == TimerPhase.AWAITING_ANNOTATION


def test_stop_when_idle_is_noop(clock) -> None:
    timer = make_timer(clock, seconds=10)

    outcome = timer.stop()

    assert outcome.intents == ()
    assert outcome.changed is False


def test_reset_restores_configured_duration(clock) -> None:
    timer = make_timer(clock, minutes=1, seconds=30)
    timer.start()
    clock.advance(20)

    outcome = timer.reset()

    assert Intent.CANCEL_TICK in outcome.intents
    assert timer.phase == TimerPhase.IDLE
    assert timer.state.remaining_seconds == 90
    assert timer.state.planned_seconds == 90
    assert timer.state.run_started_at is None


def test_start_with_nothing_left_reloads_configured_duration(clock) -> None:
    timer = make_timer(clock, seconds=3)
    timer.start()
    clock.advance(3)
    timer.tick()
    timer.resolve_pending()
    timer.configure(0, 8)

    timer.start()

    assert timer.is_running
    assert timer.state.planned_seconds == 8


def test_start_is_blocked_while_awaiting_annotation(clock) -> None:
    timer = make_timer(clock, seconds=2)
    timer.start()
    clock.advance(2)
    timer.tick()
    pending = timer.pending_session

    outcome = timer.start()

    assert outcome.intents == ()
    assert not timer.is_running
    assert timer.pending_session is pending


def test_zero_length_run_expires_immediately(clock) -> None:
    timer = make_timer(clock, seconds=0)

    outcome = timer.start()

    assert outcome.completed is not None
    assert outcome.completed.pending_session.duration_seconds == 0
    assert timer.phase == TimerPhase.AWAITING_ANNOTATION


def test_apply_configured_duration_auto_starts(clock) -> None:
    timer = make_timer(clock, seconds=10)

    outcome = timer.apply_configured_duration(120)

    assert timer.is_running
    assert timer.state.planned_seconds == 120
    assert Intent.ARM_TICK in outcome.intents

    timer.apply_configured_duration(0)

    assert not timer.is_running
    assert timer.phase == TimerPhase.IDLE
    assert timer.state.remaining_seconds == 0


def test_apply_does_not_start_while_awaiting_annotation(clock) -> None:
    timer = make_timer(clock, seconds=1)
    timer.start()
    clock.advance(1)
    timer.tick()

    timer.apply_configured_duration(60)

    assert not timer.is_running
    assert timer.phase == TimerPhase.AWAITING_ANNOTATION
    assert timer.state.remaining_seconds == 60


def test_presets(clock) -> None:
    timer = make_timer(clock, minutes=3)

    timer.select_preset(Preset.SHORT_BREAK)
    assert timer.is_running
    assert timer.state.planned_seconds == 300
    assert (timer.state.input_minutes, timer.state.input_seconds) == (5, 0)

    timer.select_preset(Preset.LONG_BREAK)
    assert timer.state.planned_seconds == 600

    timer.select_preset(Preset.POMODORO)
    assert not timer.is_running
    assert timer.state.remaining_seconds == 25 * 60


def test_configure_clamps_inputs(clock) -> None:
    timer = CountdownTimer(clock)

    timer.configure(-3, 75)

    assert timer.state.input_minutes == 0
    assert timer.state.input_seconds == 59


def test_snapshot_progress(clock) -> None:
    timer = make_timer(clock, seconds=10)
    timer.start()
    clock.advance(5)

    snapshot = timer.snapshot()

    assert snapshot.elapsed_seconds == 5
    assert snapshot.progress == 0.5
    assert snapshot.is_running
