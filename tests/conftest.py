"""Shared fixtures: a recording cursor driver, a scripted deadline, configs."""

from typing import Callable, Optional

import pytest

from jiggler.core.config_manager import JigglerConfig, MotionStyle
from jiggler.core.speed_profiles import resolve_speed_profile
from jiggler.utils import create_rng


class FakeDriver:
    """Cursor driver that records moves instead of touching the screen."""

    def __init__(
        self,
        screen_size: tuple[int, int] = (1920, 1080),
        position: tuple[int, int] = (100, 100),
        on_move: Optional[Callable[[int], None]] = None,
        fail_on_move: Optional[int] = None,
    ):
        self.screen_size = screen_size
        self.position = position
        self.moves: list[tuple[int, int, float, float, int]] = []
        self._on_move = on_move
        self._fail_on_move = fail_on_move

    def move_smooth(self, x, y, min_speed, max_speed, step_delay_ms):
        self.moves.append((x, y, min_speed, max_speed, step_delay_ms))
        if self._fail_on_move is not None and len(self.moves) >= self._fail_on_move:
            raise OSError("display connection lost")
        self.position = (x, y)
        if self._on_move is not None:
            self._on_move(len(self.moves))

    @property
    def targets(self) -> list[tuple[int, int]]:
        return [(x, y) for x, y, *_ in self.moves]


class FakeDeadline:
    """Deadline whose expiry is decided by a callable."""

    def __init__(self, is_expired: Callable[[], bool]):
        self._is_expired = is_expired
        self.checks = 0

    def expired(self) -> bool:
        self.checks += 1
        return self._is_expired()

    def remaining(self) -> float:
        return 0.0

    def elapsed(self) -> float:
        return 0.0


class FakeQuitListener:
    """Quit listener without a keyboard hook."""

    def __init__(self):
        self.callback = None
        self.started = 0
        self.stopped = 0

    def set_callback(self, callback):
        self.callback = callback

    def start_listening(self):
        self.started += 1

    def stop_listening(self):
        self.stopped += 1

    def press_quit(self):
        self.callback()


def make_config(
    style: MotionStyle = MotionStyle.STRAIGHT,
    speed: str = "medium",
    duration_minutes: int = 10,
    frequency_seconds: int = 10,
    screen_size: tuple[int, int] = (1920, 1080),
) -> JigglerConfig:
    return JigglerConfig(
        duration_minutes=duration_minutes,
        speed_label=speed,
        style=style,
        frequency_seconds=frequency_seconds,
        quit_key="q",
        screen_width=screen_size[0],
        screen_height=screen_size[1],
        speed_profile=resolve_speed_profile(speed, human_like=style == MotionStyle.HUMAN_LIKE),
    )


def expire_after_moves(driver: FakeDriver, count: int):
    """Deadline factory that expires once the driver has seen count moves."""
    return lambda duration: FakeDeadline(lambda: len(driver.moves) >= count)


@pytest.fixture
def rng():
    return create_rng(1234)


@pytest.fixture
def driver():
    return FakeDriver()
