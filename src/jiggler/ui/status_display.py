"""Rich terminal display for live jiggler status."""

import logging
import threading
import time
from typing import TYPE_CHECKING, Callable, Optional

from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from jiggler.core.jiggler_controller import JigglerStatus


def format_time_short(seconds: float) -> str:
    """Format seconds as M:SS or H:MM:SS."""
    if seconds < 0:
        return "0:00"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def progress_bar(done: float, total: float, width: int = 20) -> str:
    """Render a fixed-width text progress bar."""
    fraction = done / total if total > 0 else 1.0
    filled = int(max(0.0, min(1.0, fraction)) * width)
    return "█" * filled + "░" * (width - filled)


class StatusDisplay:
    """Live panel showing time left and jiggles performed."""

    def __init__(
        self,
        status_provider: Callable[[], "JigglerStatus"],
        quit_key: Optional[str] = None,
        refresh_rate: float = 4.0,
        console: Optional[Console] = None,
    ):
        """Initialize status display.

        Args:
            status_provider: Returns the current run snapshot
            quit_key: Quit key to show in the footer, None if there is none
            refresh_rate: Display refresh rate in Hz
            console: Rich console to draw on
        """
        self._logger = logging.getLogger(__name__)
        self._status_provider = status_provider
        self._quit_key = quit_key
        self._refresh_rate = refresh_rate
        self._console = console

        self._live: Optional[Live] = None
        self._running = False
        self._thread: Optional[threading.Thread] = None

    def start(self) -> bool:
        """Start the status display.

        Returns:
            True if started successfully
        """
        if self._running:
            return True

        if self._console is None:
            self._console = Console()
        self._running = True
        self._thread = threading.Thread(target=self._run_display, daemon=True)
        self._thread.start()

        return True

    def stop(self) -> None:
        """Stop the status display."""
        self._running = False
        if self._thread:
            self._thread.join(timeout=1.0)
            self._thread = None

    def _run_display(self) -> None:
        """Run the display loop in a background thread."""
        try:
            with Live(
                self.render(),
                console=self._console,
                refresh_per_second=self._refresh_rate,
                screen=False,
            ) as live:
                self._live = live
                while self._running:
                    live.update(self.render())
                    time.sleep(1.0 / self._refresh_rate)
        except Exception as e:
            self._logger.error("Status display error: %s", e)
            self._running = False
        finally:
            self._live = None

    def render(self) -> Panel:
        """Render the status panel.

        Returns:
            Rich Panel containing the status display
        """
        status = self._status_provider()
        total = status.elapsed_seconds + status.remaining_seconds

        table = Table.grid(padding=(0, 1))
        table.add_column()
        table.add_column()

        table.add_row("State:", f"[yellow]{status.state.value.upper()}[/]")
        table.add_row("Style:", f"[cyan]{status.style.value}[/]")
        table.add_row("Speed:", status.speed_label)
        table.add_row("Jiggles:", f"[green bold]{status.jiggle_count:,}[/]")
        table.add_row(
            "Time:",
            f"{progress_bar(status.elapsed_seconds, total)} "
            f"[cyan]{format_time_short(status.remaining_seconds)} left[/]",
        )

        footer = f"Press [bold]{self._quit_key.upper()}[/] to quit" if self._quit_key else "Ctrl+C to quit"

        return Panel(
            table,
            title="[bold cyan]Mouse Jiggler[/]",
            subtitle=footer,
            border_style="cyan",
        )
