"""Quit key listener: stops the run cooperatively on a global key press."""

import logging
import threading
from typing import Callable, Optional, Union

from pynput import keyboard


logger = logging.getLogger(__name__)

QuitKey = Union[keyboard.Key, keyboard.KeyCode]


class QuitListener:
    """Watch global key presses and fire a stop callback on the quit key.

    The listener never exits the process itself; it only signals the
    controller, which finishes cleanly.
    """

    _NAMED_KEYS = {
        "escape": keyboard.Key.esc,
        "esc": keyboard.Key.esc,
        "end": keyboard.Key.end,
        "space": keyboard.Key.space,
        **{f"f{n}": getattr(keyboard.Key, f"f{n}") for n in range(1, 13)},
    }

    def __init__(
        self,
        quit_key: str = "q",
        on_stop_callback: Optional[Callable[[], None]] = None,
    ):
        """Initialize quit listener.

        Args:
            quit_key: Single character or key name (e.g., "q", "esc", "f12")
            on_stop_callback: Function to call once when the quit key is hit
        """
        self._quit_key = self._parse_key(quit_key)
        self._quit_key_name = quit_key
        self._on_stop_callback = on_stop_callback
        self._is_stopped = False
        self._listener: Optional[keyboard.Listener] = None
        self._lock = threading.Lock()

    def _parse_key(self, key_str: str) -> QuitKey:
        """Parse key string to pynput Key or KeyCode.

        Args:
            key_str: Key name or single character

        Returns:
            pynput key object

        Raises:
            ValueError: If the key name is not recognised
        """
        name = key_str.strip().lower()
        if name in self._NAMED_KEYS:
            return self._NAMED_KEYS[name]
        if len(name) == 1:
            return keyboard.KeyCode.from_char(name)
        raise ValueError(f"Unsupported quit key: {key_str!r}")

    def _matches(self, key: Optional[QuitKey]) -> bool:
        if isinstance(self._quit_key, keyboard.KeyCode):
            char = getattr(key, "char", None)
            return char is not None and char.lower() == self._quit_key.char
        return key == self._quit_key

    def _on_key_press(self, key: Optional[QuitKey]) -> None:
        """Handle key press events.

        Args:
            key: Pressed key
        """
        if self._matches(key):
            logger.info("Quit key pressed")
            self.trigger_stop()

    def trigger_stop(self) -> None:
        """Trigger the stop. Repeated triggers are ignored."""
        with self._lock:
            if self._is_stopped:
                return
            self._is_stopped = True

        if self._on_stop_callback:
            self._on_stop_callback()

    def start_listening(self) -> None:
        """Start the pynput keyboard listener thread."""
        if self._listener is not None:
            return

        self._listener = keyboard.Listener(on_press=self._on_key_press)
        self._listener.start()
        logger.debug("Started keyboard listener for quit key %r", self._quit_key_name)

    def stop_listening(self) -> None:
        """Stop listening for the quit key."""
        if self._listener is not None:
            self._listener.stop()
            self._listener = None
            logger.debug("Stopped keyboard listener")

    def is_stopped(self) -> bool:
        """Check if the quit key was pressed.

        Returns:
            True if stopped
        """
        with self._lock:
            return self._is_stopped

    def set_callback(self, callback: Optional[Callable[[], None]]) -> None:
        """Set or update the stop callback.

        Args:
            callback: Function to call on stop
        """
        self._on_stop_callback = callback
