"""Pynput-based cursor driver (default implementation)."""

import logging
import math
import time
from typing import Callable, Optional, Tuple

import mss
import numpy as np
from pynput.mouse import Controller as PynputMouseController

from jiggler.core.errors import MotionError
from jiggler.utils import create_rng, distance


logger = logging.getLogger(__name__)


class PynputMouseDriver:
    """Cursor driver using pynput for movement and mss for screen geometry.

    Works on Windows/Linux/Mac through X11/Win32/Quartz.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        sleep: Callable[[float], None] = time.sleep,
        mouse: Optional[PynputMouseController] = None,
    ):
        """Initialize pynput mouse controller.

        Args:
            rng: Random generator for per-step pull and pause jitter
            sleep: Sleep function (seconds)
            mouse: pynput controller to drive, a new one if None
        """
        self._mouse = mouse if mouse is not None else PynputMouseController()
        self._rng = rng if rng is not None else create_rng()
        self._sleep = sleep
        self._screen_size: Optional[Tuple[int, int]] = None
        self._desktop: Optional[Tuple[int, int, int, int]] = None

    def _load_monitors(self) -> None:
        with mss.mss() as sct:
            # monitors[0] is the whole virtual desktop, monitors[1] the primary
            desktop = sct.monitors[0]
            primary = sct.monitors[1] if len(sct.monitors) > 1 else desktop

        self._screen_size = (primary["width"], primary["height"])
        self._desktop = (
            desktop["left"],
            desktop["top"],
            desktop["left"] + desktop["width"],
            desktop["top"] + desktop["height"],
        )
        logger.debug("Primary screen %dx%d, desktop bounds %s", *self._screen_size, self._desktop)

    @property
    def screen_size(self) -> Tuple[int, int]:
        """Get primary screen size."""
        if self._screen_size is None:
            self._load_monitors()
        return self._screen_size

    @property
    def position(self) -> Tuple[int, int]:
        """Get current mouse position."""
        x, y = self._mouse.position
        return int(x), int(y)

    def move_smooth(
        self,
        x: int,
        y: int,
        min_speed: float,
        max_speed: float,
        step_delay_ms: int,
    ) -> None:
        """Walk the cursor to (x, y).

        Each step adds a random pull toward the target to the velocity,
        normalizes it to one pixel and moves, then pauses for a random
        min_speed..max_speed milliseconds.
        """
        if self._desktop is None:
            self._load_monitors()
        left, top, right, bottom = self._desktop

        cur_x, cur_y = self.position
        velo_x = velo_y = 0.0

        while True:
            dist = distance(cur_x, cur_y, x, y)
            if dist <= 1.0:
                break

            gravity = self._rng.uniform(5.0, 500.0)
            velo_x += gravity * (x - cur_x) / dist
            velo_y += gravity * (y - cur_y) / dist

            velo_dist = math.hypot(velo_x, velo_y)
            velo_x /= velo_dist
            velo_y /= velo_dist

            cur_x += math.floor(velo_x + 0.5)
            cur_y += math.floor(velo_y + 0.5)

            if not (left <= cur_x < right and top <= cur_y < bottom):
                raise MotionError(f"Smooth move left the desktop at ({cur_x}, {cur_y})")

            self._mouse.position = (cur_x, cur_y)
            self._sleep(self._rng.uniform(min_speed, max_speed) / 1000.0)

        self._sleep(step_delay_ms / 1000.0)
