"""Tests for the rich status display."""

from rich.console import Console

from jiggler.core.config_manager import MotionStyle
from jiggler.core.jiggler_controller import JigglerStatus
from jiggler.core.state_machine import JigglerState
from jiggler.ui.status_display import StatusDisplay, format_time_short, progress_bar


def test_format_time_short():
    assert format_time_short(-5) == "0:00"
    assert format_time_short(0) == "0:00"
    assert format_time_short(75.9) == "1:15"
    assert format_time_short(3725) == "1:02:05"


def test_progress_bar():
    assert progress_bar(0, 10, width=10) == "░" * 10
    assert progress_bar(5, 10, width=10) == "█" * 5 + "░" * 5
    assert progress_bar(20, 10, width=10) == "█" * 10
    assert progress_bar(0, 0, width=4) == "████"


def test_render_shows_run_status():
    status = JigglerStatus(
        state=JigglerState.RUNNING,
        style=MotionStyle.HUMAN_LIKE,
        speed_label="slow",
        elapsed_seconds=60.0,
        remaining_seconds=540.0,
        jiggle_count=1234,
    )
    console = Console(record=True, width=80)
    display = StatusDisplay(lambda: status, quit_key="q", console=console)

    console.print(display.render())
    text = console.export_text()

    assert "RUNNING" in text
    assert "human-like" in text
    assert "1,234" in text
    assert "9:00 left" in text
    assert "Press Q to quit" in text
