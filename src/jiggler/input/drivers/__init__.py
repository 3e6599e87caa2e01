"""Cursor driver abstraction layer.

The pynput driver is imported lazily: pynput needs a display at import time,
and the rest of the package must stay importable without one.
"""

from typing import Optional

import numpy as np

from .base import MouseDriverProtocol


SUPPORTED_DRIVERS = ["pynput"]


def create_mouse_driver(
    driver_name: str = "pynput",
    rng: Optional[np.random.Generator] = None,
) -> MouseDriverProtocol:
    """Create a mouse driver instance.

    Args:
        driver_name: Driver to use
        rng: Random generator handed to the driver

    Returns:
        Mouse driver instance

    Raises:
        ValueError: If driver is not supported
    """
    if driver_name == "pynput":
        from .pynput_driver import PynputMouseDriver

        return PynputMouseDriver(rng=rng)

    raise ValueError(f"Unknown driver: {driver_name}. Supported: {SUPPORTED_DRIVERS}")


__all__ = [
    "MouseDriverProtocol",
    "SUPPORTED_DRIVERS",
    "create_mouse_driver",
]
