"""Tests for the jiggler controller loop."""

import threading

import pytest

from jiggler.core.config_manager import MotionStyle
from jiggler.core.errors import MotionError
from jiggler.core.jiggler_controller import Deadline, JigglerController
from jiggler.core.state_machine import JigglerState, StopReason

from conftest import FakeDeadline, FakeDriver, FakeQuitListener, expire_after_moves, make_config


NEVER = lambda duration: FakeDeadline(lambda: False)  # noqa: E731


def test_straight_runs_n_units_until_deadline(driver, rng):
    controller = JigglerController(
        make_config(MotionStyle.STRAIGHT),
        driver,
        rng=rng,
        deadline_factory=expire_after_moves(driver, 3),
    )

    reason = controller.run()

    assert reason == StopReason.TIMER_EXPIRED
    assert controller.state_machine.get_current_state() == JigglerState.TIMER_EXPIRED
    assert controller.jiggle_count == 3
    assert len(driver.moves) == 3
    for x, y, min_speed, max_speed, delay in driver.moves:
        assert 0 <= x < 1920
        assert 0 <= y < 1080
        assert (min_speed, max_speed, delay) == (0.5, 1.0, 1000)


def test_human_like_unit_is_one_full_path(driver, rng):
    controller = JigglerController(
        make_config(MotionStyle.HUMAN_LIKE),
        driver,
        rng=rng,
        deadline_factory=expire_after_moves(driver, 202),
    )

    reason = controller.run()

    assert reason == StopReason.TIMER_EXPIRED
    assert controller.jiggle_count == 2
    assert len(driver.moves) == 202
    # First point of the first path is where the cursor started
    assert driver.targets[0] == (100, 100)
    # Second path starts where the first ended
    assert driver.targets[101] == driver.targets[100]
    assert all(delay == 10 for *_, delay in driver.moves)


def test_zero_duration_never_moves(driver, rng):
    controller = JigglerController(make_config(duration_minutes=0), driver, rng=rng)

    assert controller.run() == StopReason.TIMER_EXPIRED
    assert driver.moves == []


def test_quit_after_k_units_stops_before_next_unit(rng):
    quits = []

    def on_move(count):
        if count == 4:
            controller.request_stop()
            controller.request_stop()
            quits.append(count)

    driver = FakeDriver(on_move=on_move)
    controller = JigglerController(make_config(), driver, rng=rng, deadline_factory=NEVER)

    reason = controller.run()

    assert reason == StopReason.QUIT_REQUESTED
    assert controller.state_machine.get_current_state() == JigglerState.QUIT_REQUESTED
    assert controller.jiggle_count == 4
    assert len(driver.moves) == 4
    assert quits == [4]

    controller.request_stop()
    assert controller.state_machine.get_current_state() == JigglerState.QUIT_REQUESTED
    assert len(driver.moves) == 4


def test_quit_mid_path_abandons_the_rest(rng):
    driver = FakeDriver(on_move=lambda count: count == 150 and controller.request_stop())
    controller = JigglerController(
        make_config(MotionStyle.HUMAN_LIKE), driver, rng=rng, deadline_factory=NEVER
    )

    assert controller.run() == StopReason.QUIT_REQUESTED
    assert len(driver.moves) == 150
    assert controller.jiggle_count == 1


def test_quit_listener_lifecycle(rng):
    listener = FakeQuitListener()
    driver = FakeDriver(on_move=lambda count: count == 2 and listener.press_quit())
    controller = JigglerController(
        make_config(), driver, rng=rng, quit_listener=listener, deadline_factory=NEVER
    )

    assert listener.callback == controller.request_stop
    assert controller.run() == StopReason.QUIT_REQUESTED
    assert controller.jiggle_count == 2
    assert (listener.started, listener.stopped) == (1, 1)


def test_motion_error_is_fatal(rng):
    listener = FakeQuitListener()
    driver = FakeDriver(fail_on_move=2)
    controller = JigglerController(
        make_config(), driver, rng=rng, quit_listener=listener, deadline_factory=NEVER
    )

    with pytest.raises(MotionError, match="display connection lost"):
        controller.run()

    assert controller.state_machine.get_current_state() == JigglerState.FAILED
    assert "display connection lost" in controller.state_machine.get_error()
    assert controller.jiggle_count == 1
    assert len(driver.moves) == 2
    assert listener.stopped == 1


def test_motion_error_from_driver_is_not_rewrapped(rng):
    class OffScreenDriver(FakeDriver):
        def move_smooth(self, *args):
            raise MotionError("left the desktop")

    controller = JigglerController(make_config(), OffScreenDriver(), rng=rng, deadline_factory=NEVER)

    with pytest.raises(MotionError, match="^left the desktop$"):
        controller.run()


def test_fixed_interval_jumps_once_per_tick(driver, rng):
    controller = JigglerController(
        make_config(MotionStyle.FIXED_INTERVAL, frequency_seconds=1),
        driver,
        rng=rng,
        deadline_factory=expire_after_moves(driver, 2),
    )

    assert controller.run() == StopReason.TIMER_EXPIRED
    assert controller.jiggle_count == 2
    assert all(delay == 1000 for *_, delay in driver.moves)


def test_fixed_interval_wait_is_interrupted_by_stop(driver, rng):
    controller = JigglerController(
        make_config(MotionStyle.FIXED_INTERVAL, frequency_seconds=30, duration_minutes=5),
        driver,
        rng=rng,
    )
    timer = threading.Timer(0.05, controller.request_stop)
    timer.start()

    try:
        reason = controller.run()
    finally:
        timer.cancel()

    assert reason == StopReason.QUIT_REQUESTED
    assert driver.moves == []


def test_controller_runs_once(driver, rng):
    controller = JigglerController(make_config(duration_minutes=0), driver, rng=rng)
    controller.run()

    with pytest.raises(RuntimeError):
        controller.run()


def test_status_snapshot(driver, rng):
    controller = JigglerController(
        make_config(MotionStyle.HUMAN_LIKE, speed="slow", duration_minutes=2),
        driver,
        rng=rng,
        deadline_factory=expire_after_moves(driver, 101),
    )

    before = controller.get_status()
    assert before.state == JigglerState.RUNNING
    assert before.remaining_seconds == 120.0
    assert before.jiggle_count == 0

    controller.run()
    after = controller.get_status()

    assert after.state == JigglerState.TIMER_EXPIRED
    assert after.style == MotionStyle.HUMAN_LIKE
    assert after.speed_label == "slow"
    assert after.jiggle_count == 1


def test_same_seed_same_moves():
    from jiggler.utils import create_rng

    runs = []
    for _ in range(2):
        driver = FakeDriver()
        JigglerController(
            make_config(MotionStyle.HUMAN_LIKE),
            driver,
            rng=create_rng(99),
            deadline_factory=expire_after_moves(driver, 303),
        ).run()
        runs.append(driver.targets)

    assert runs[0] == runs[1]


def test_deadline_uses_injected_clock():
    now = [100.0]
    deadline = Deadline(60.0, clock=lambda: now[0])

    assert not deadline.expired()
    assert deadline.remaining() == 60.0

    now[0] = 130.0
    assert deadline.elapsed() == 30.0
    assert deadline.remaining() == 30.0

    now[0] = 160.0
    assert deadline.expired()
    assert deadline.remaining() == 0.0
