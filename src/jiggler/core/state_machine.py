"""Jiggler state machine using python-statemachine."""

from enum import Enum
from typing import Optional

from statemachine import StateMachine, State


class JigglerState(Enum):
    """Jiggler states."""

    RUNNING = "running"
    TIMER_EXPIRED = "timer_expired"
    QUIT_REQUESTED = "quit_requested"
    FAILED = "failed"


class StopReason(Enum):
    """Why a run ended normally."""

    TIMER_EXPIRED = "timer_expired"
    QUIT_REQUESTED = "quit_requested"


class JigglerStateMachine(StateMachine):
    """State machine for one jiggler run.

    A run starts in running and ends in exactly one final state.
    """

    # States
    running = State(initial=True)
    timer_expired = State(final=True)
    quit_requested = State(final=True)
    failed = State(final=True)

    # Transitions
    expire = running.to(timer_expired)
    request_quit = running.to(quit_requested)
    fail = running.to(failed)

    def __init__(self):
        """Initialize state machine."""
        # Initialize attributes before super().__init__() because it triggers
        # initial state entry which calls on_enter_state
        self._error_message: Optional[str] = None
        self._state_history: list[str] = []
        super().__init__()

    def on_enter_state(self, state: State) -> None:
        """Called when entering any state."""
        self._state_history.append(state.id)

    def set_error(self, message: str) -> None:
        """Set error message.

        Args:
            message: Error description
        """
        self._error_message = message

    def get_error(self) -> Optional[str]:
        """Get last error message."""
        return self._error_message

    def get_state_history(self) -> list[str]:
        """Get state history."""
        return self._state_history.copy()

    def get_current_state(self) -> JigglerState:
        """Get current state as JigglerState enum."""
        return JigglerState(self.current_state.id)

    def is_running(self) -> bool:
        """Check if the run is still in progress."""
        return self.current_state == self.running

    def is_stopped(self) -> bool:
        """Check if the run has ended, for whatever reason."""
        return not self.is_running()

    def get_stop_reason(self) -> Optional[StopReason]:
        """Get the normal stop reason, or None while running or after failure."""
        if self.current_state in (self.timer_expired, self.quit_requested):
            return StopReason(self.current_state.id)
        return None
