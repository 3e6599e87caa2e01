"""Motion styles: one call to jiggle() performs one motion unit."""

import logging
from typing import Callable, Optional

import numpy as np

from jiggler.core.config_manager import MotionStyle
from jiggler.core.errors import MotionError
from jiggler.core.speed_profiles import SpeedProfile
from jiggler.utils import random_point
from .bezier_movement import BEZIER_STEPS, BezierPath, Point
from .drivers.base import MouseDriverProtocol


logger = logging.getLogger(__name__)


def _move(driver: MouseDriverProtocol, point: Point, profile: SpeedProfile) -> None:
    """Issue one smooth move, wrapping driver failures as MotionError."""
    try:
        driver.move_smooth(
            point.x,
            point.y,
            profile.min_speed,
            profile.max_speed,
            profile.step_delay_ms,
        )
    except MotionError:
        raise
    except Exception as e:
        raise MotionError(f"Cursor move to ({point.x}, {point.y}) failed: {e}") from e


class StraightMotion:
    """Jump straight to a random point on the screen."""

    def __init__(
        self,
        driver: MouseDriverProtocol,
        profile: SpeedProfile,
        screen_size: tuple[int, int],
        rng: np.random.Generator,
    ):
        self._driver = driver
        self._profile = profile
        self._width, self._height = screen_size
        self._rng = rng

    def jiggle(self, should_stop: Optional[Callable[[], bool]] = None) -> bool:
        """Move once to a random destination.

        Returns:
            True (a single move cannot be interrupted halfway)
        """
        dest = Point(*random_point(self._rng, self._width, self._height))
        logger.debug("Jumping to (%d, %d)", dest.x, dest.y)
        _move(self._driver, dest, self._profile)
        return True


class HumanLikeMotion:
    """Follow a freshly generated cubic Bezier path to a random point."""

    def __init__(
        self,
        driver: MouseDriverProtocol,
        profile: SpeedProfile,
        screen_size: tuple[int, int],
        rng: np.random.Generator,
        steps: int = BEZIER_STEPS,
    ):
        self._driver = driver
        self._profile = profile
        self._width, self._height = screen_size
        self._rng = rng
        self._steps = steps

    def next_path(self) -> BezierPath:
        """Build the path for the next segment from the current position."""
        try:
            start = Point(*self._driver.position)
        except Exception as e:
            raise MotionError(f"Could not read cursor position: {e}") from e

        dest = Point(*random_point(self._rng, self._width, self._height))
        return BezierPath.between(start, dest, self._rng)

    def jiggle(self, should_stop: Optional[Callable[[], bool]] = None) -> bool:
        """Traverse one path from start to finish.

        Args:
            should_stop: Checked before each point; a True result abandons
                the rest of the path

        Returns:
            True if the whole path was traversed, False if abandoned
        """
        path = self.next_path()
        logger.debug(
            "Curving from (%d, %d) to (%d, %d) via (%d, %d), (%d, %d)",
            path.p0.x, path.p0.y, path.p3.x, path.p3.y,
            path.p1.x, path.p1.y, path.p2.x, path.p2.y,
        )

        for point in path.points(self._steps):
            if should_stop is not None and should_stop():
                return False
            _move(self._driver, point, self._profile)

        return True


def create_motion(
    style: MotionStyle,
    driver: MouseDriverProtocol,
    profile: SpeedProfile,
    screen_size: tuple[int, int],
    rng: np.random.Generator,
):
    """Create the motion strategy for a style.

    Fixed-interval ticks jump straight; the controller owns the tick.
    """
    if style == MotionStyle.HUMAN_LIKE:
        return HumanLikeMotion(driver, profile, screen_size, rng)
    return StraightMotion(driver, profile, screen_size, rng)
