"""Main jiggler controller - runs motion units until time runs out or quit."""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

import numpy as np

from jiggler.input.drivers.base import MouseDriverProtocol
from jiggler.input.motion import create_motion
from jiggler.utils import clamp, create_rng
from .config_manager import JigglerConfig, MotionStyle
from .errors import MotionError
from .state_machine import JigglerState, JigglerStateMachine, StopReason


class Deadline:
    """One-shot expiration measured on a monotonic clock."""

    def __init__(self, duration_seconds: float, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._start = clock()
        self._end = self._start + duration_seconds

    def expired(self) -> bool:
        return self._clock() >= self._end

    def remaining(self) -> float:
        return clamp(self._end - self._clock(), 0.0, self._end - self._start)

    def elapsed(self) -> float:
        return self._clock() - self._start


class QuitSignalSource(Protocol):
    """What the controller needs from a quit listener."""

    def start_listening(self) -> None: ...

    def stop_listening(self) -> None: ...

    def set_callback(self, callback: Optional[Callable[[], None]]) -> None: ...


@dataclass(frozen=True)
class JigglerStatus:
    """Point-in-time view of a run."""

    state: JigglerState
    style: MotionStyle
    speed_label: str
    elapsed_seconds: float
    remaining_seconds: float
    jiggle_count: int


class JigglerController:
    """Move the cursor until the deadline passes or a stop is requested."""

    def __init__(
        self,
        config: JigglerConfig,
        driver: MouseDriverProtocol,
        rng: Optional[np.random.Generator] = None,
        quit_listener: Optional[QuitSignalSource] = None,
        deadline_factory: Callable[[float], Deadline] = Deadline,
    ):
        """Initialize jiggler controller.

        Args:
            config: Validated run configuration
            driver: Cursor driver
            rng: Random generator for destinations and control points
            quit_listener: Background key listener; its callback is pointed
                at request_stop()
            deadline_factory: Builds the run deadline from a duration in seconds
        """
        self._logger = logging.getLogger(__name__)
        self.config = config
        self._driver = driver
        self._rng = rng if rng is not None else create_rng()
        self._deadline_factory = deadline_factory
        self._deadline: Optional[Deadline] = None

        self.state_machine = JigglerStateMachine()
        self._motion = create_motion(
            config.style, driver, config.speed_profile, config.screen_size, self._rng
        )

        self._cancelled = threading.Event()
        self._stop_lock = threading.Lock()
        self._jiggle_count = 0
        self._started = False

        self._quit_listener = quit_listener
        if quit_listener is not None:
            quit_listener.set_callback(self.request_stop)

    @property
    def jiggle_count(self) -> int:
        """Number of completed motion units."""
        return self._jiggle_count

    def request_stop(self) -> None:
        """Ask the run to stop before its next motion unit.

        Safe to call from any thread, any number of times.
        """
        with self._stop_lock:
            if self._cancelled.is_set():
                return
            self._cancelled.set()

        self._logger.info("Stop requested")

    def run(self) -> StopReason:
        """Run until the deadline passes or a stop is requested.

        Returns:
            Why the run ended

        Raises:
            MotionError: If the cursor could not be moved
            RuntimeError: If the controller already ran
        """
        if self._started:
            raise RuntimeError("JigglerController can only run once")
        self._started = True

        self._logger.info(
            "Jiggling for %d minute(s): style=%s speed=%s",
            self.config.duration_minutes,
            self.config.style.value,
            self.config.speed_label,
        )
        self._logger.debug("Speed profile: %s", self.config.speed_profile)

        self._deadline = self._deadline_factory(self.config.duration_seconds)

        if self._quit_listener is not None:
            self._quit_listener.start_listening()

        try:
            reason = self._main_loop()
        except MotionError as e:
            self.state_machine.set_error(str(e))
            self.state_machine.fail()
            self._logger.error("Motion failed after %d jiggle(s): %s", self._jiggle_count, e)
            raise
        finally:
            if self._quit_listener is not None:
                self._quit_listener.stop_listening()

        self._logger.info(
            "Stopped (%s) after %d jiggle(s) in %.1fs",
            reason.value,
            self._jiggle_count,
            self._deadline.elapsed(),
        )
        return reason

    def _main_loop(self) -> StopReason:
        """Check for stop and expiry, then perform one motion unit."""
        while True:
            if self._cancelled.is_set():
                self.state_machine.request_quit()
                return StopReason.QUIT_REQUESTED

            if self._deadline.expired():
                self.state_machine.expire()
                return StopReason.TIMER_EXPIRED

            if self.config.style == MotionStyle.FIXED_INTERVAL and not self._wait_for_tick():
                continue

            if self._motion.jiggle(self._cancelled.is_set):
                self._jiggle_count += 1
                self._logger.debug("Jiggle %d done", self._jiggle_count)

    def _wait_for_tick(self) -> bool:
        """Sleep one tick period.

        Returns:
            True if the tick is due, False if the wait was cut short by a
            stop request or the deadline
        """
        timeout = min(float(self.config.frequency_seconds), self._deadline.remaining())
        if self._cancelled.wait(timeout):
            return False
        return not self._deadline.expired()

    def get_status(self) -> JigglerStatus:
        """Get a snapshot of the run for display."""
        if self._deadline is None:
            elapsed, remaining = 0.0, self.config.duration_seconds
        else:
            elapsed, remaining = self._deadline.elapsed(), self._deadline.remaining()

        return JigglerStatus(
            state=self.state_machine.get_current_state(),
            style=self.config.style,
            speed_label=self.config.speed_label,
            elapsed_seconds=elapsed,
            remaining_seconds=remaining,
            jiggle_count=self._jiggle_count,
        )
