"""Core jiggler components."""
from .errors import JigglerError, ConfigurationError, MotionError
from .speed_profiles import SpeedProfile, DEFAULT_SPEED_PROFILES, resolve_speed_profile
from .config_manager import ConfigManager, JigglerConfig, MotionStyle, build_jiggler_config
from .state_machine import JigglerStateMachine, JigglerState, StopReason
