"""Base protocols for cursor drivers."""

from typing import Protocol, Tuple


class MouseDriverProtocol(Protocol):
    """Protocol for cursor driver implementations.

    The controller only talks to the cursor through this interface, so tests
    can swap in a recording fake.
    """

    @property
    def screen_size(self) -> Tuple[int, int]:
        """Get primary screen size.

        Returns:
            (width, height) in pixels
        """
        ...

    @property
    def position(self) -> Tuple[int, int]:
        """Get current mouse position.

        Returns:
            (x, y) tuple of current cursor coordinates
        """
        ...

    def move_smooth(
        self,
        x: int,
        y: int,
        min_speed: float,
        max_speed: float,
        step_delay_ms: int,
    ) -> None:
        """Walk the cursor to (x, y) one pixel at a time.

        Args:
            x: Target x coordinate
            y: Target y coordinate
            min_speed: Lower bound of the pause after each pixel (ms)
            max_speed: Upper bound of the pause after each pixel (ms)
            step_delay_ms: Pause after arriving (ms)

        Raises:
            MotionError: If the cursor could not be moved
        """
        ...
