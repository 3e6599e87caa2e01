"""User interface components."""
from .status_display import StatusDisplay, format_time_short
