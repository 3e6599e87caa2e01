"""Exception types raised by the jiggler."""


class JigglerError(Exception):
    """Base class for jiggler errors."""


class ConfigurationError(JigglerError):
    """Invalid configuration: bad speed label, flags, or config file.

    Raised before any cursor movement happens.
    """


class MotionError(JigglerError):
    """The cursor primitive failed. Fatal for the run, never retried."""
