"""
Mouse Jiggler - keep the desktop awake by moving the cursor.

Moves the cursor in straight jumps, human-like Bezier paths, or on a fixed
interval until the configured time runs out or the quit key is pressed.
"""

__version__ = "1.0.0"
