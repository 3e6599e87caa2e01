"""Safety components.

QuitListener is not re-exported here: importing pynput needs a display.
"""
