"""Tests for the quit key listener.

pynput needs a display backend at import time; skipped on headless machines.
"""

import pytest

keyboard = pytest.importorskip("pynput.keyboard", exc_type=ImportError)

from jiggler.safety.quit_listener import QuitListener  # noqa: E402


class Counter:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


def test_quit_key_fires_callback_once():
    counter = Counter()
    listener = QuitListener("q", on_stop_callback=counter)

    listener._on_key_press(keyboard.KeyCode.from_char("q"))
    listener._on_key_press(keyboard.KeyCode.from_char("q"))
    listener.trigger_stop()

    assert listener.is_stopped()
    assert counter.calls == 1


def test_shifted_quit_key_matches():
    counter = Counter()
    listener = QuitListener("q", on_stop_callback=counter)

    listener._on_key_press(keyboard.KeyCode.from_char("Q"))

    assert counter.calls == 1


def test_other_keys_are_ignored():
    counter = Counter()
    listener = QuitListener("q", on_stop_callback=counter)

    listener._on_key_press(keyboard.KeyCode.from_char("w"))
    listener._on_key_press(keyboard.Key.esc)
    listener._on_key_press(None)

    assert not listener.is_stopped()
    assert counter.calls == 0


@pytest.mark.parametrize("name, key", [("esc", "esc"), ("F12", "f12"), ("end", "end")])
def test_named_keys(name, key):
    counter = Counter()
    listener = QuitListener(name, on_stop_callback=counter)

    listener._on_key_press(getattr(keyboard.Key, key))

    assert counter.calls == 1


def test_unknown_key_name():
    with pytest.raises(ValueError, match="Unsupported quit key"):
        QuitListener("banana")


def test_set_callback_replaces_callback():
    first, second = Counter(), Counter()
    listener = QuitListener("q", on_stop_callback=first)
    listener.set_callback(second)

    listener.trigger_stop()

    assert (first.calls, second.calls) == (0, 1)
