"""Configuration manager with YAML loading and validation."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import ConfigurationError
from .speed_profiles import (
    DEFAULT_SPEED_PROFILES,
    SpeedProfile,
    canonical_speed_label,
    resolve_speed_profile,
)


# Fixed-interval ticks always use this label, resolved for straight jumps
FIXED_INTERVAL_SPEED_LABEL = "medium"


class MotionStyle(Enum):
    """How the cursor is moved."""

    STRAIGHT = "straight"
    HUMAN_LIKE = "human-like"
    FIXED_INTERVAL = "fixed-interval"


def parse_motion_style(value: str) -> MotionStyle:
    """Parse a style name such as "human-like" or "fixed_interval".

    Raises:
        ConfigurationError: If the name is unknown
    """
    normalized = str(value).strip().lower().replace("_", "-")
    try:
        return MotionStyle(normalized)
    except ValueError:
        choices = ", ".join(style.value for style in MotionStyle)
        raise ConfigurationError(f"invalid motion style: {value!r} (expected one of: {choices})") from None


@dataclass(frozen=True)
class JigglerConfig:
    """Validated run configuration. Read-only for the lifetime of a run."""

    duration_minutes: int
    speed_label: str
    style: MotionStyle
    frequency_seconds: int
    quit_key: str
    screen_width: int
    screen_height: int
    speed_profile: SpeedProfile

    @property
    def human_like(self) -> bool:
        return self.style == MotionStyle.HUMAN_LIKE

    @property
    def duration_seconds(self) -> float:
        return self.duration_minutes * 60.0

    @property
    def screen_size(self) -> tuple[int, int]:
        return self.screen_width, self.screen_height


class ConfigManager:
    """Load and validate jiggler configuration from YAML files."""

    DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "default_config.yaml"

    def __init__(self, config_path: str | Path | None = None):
        """Initialize config manager.

        Args:
            config_path: Path to config file. Uses default if None.

        Raises:
            ConfigurationError: If the file is missing, unparsable or invalid
        """
        self.config_path = Path(config_path) if config_path else self.DEFAULT_CONFIG_PATH
        self._config: dict[str, Any] = {}
        self._speed_profiles: dict[str, SpeedProfile] = {}
        self._load_config()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            raise ConfigurationError(f"Config file not found: {self.config_path}")

        try:
            with open(self.config_path, "r") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Could not parse {self.config_path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Could not read {self.config_path}: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {self.config_path}")

        self._config = loaded

    def _validate_config(self) -> None:
        """Validate required configuration sections exist."""
        required_sections = [
            "jiggle",
            "speed_profiles",
            "safety",
        ]

        for section in required_sections:
            if not isinstance(self._config.get(section), dict):
                raise ConfigurationError(f"Missing required config section: {section}")

        self._speed_profiles = self._build_speed_profiles(self._config["speed_profiles"])

        jiggle = self._config["jiggle"]
        _require_non_negative_int(jiggle.get("duration_minutes", 10), "jiggle.duration_minutes")
        if _require_non_negative_int(jiggle.get("frequency_seconds", 10), "jiggle.frequency_seconds") == 0:
            raise ConfigurationError("jiggle.frequency_seconds must be positive")
        canonical_speed_label(str(jiggle.get("speed", "medium")), self._speed_profiles)
        parse_motion_style(jiggle.get("style", MotionStyle.STRAIGHT.value))

        quit_key = self._config["safety"].get("quit_key", "q")
        if not isinstance(quit_key, str) or not quit_key.strip():
            raise ConfigurationError("safety.quit_key must be a non-empty string")

    @staticmethod
    def _build_speed_profiles(section: dict[str, Any]) -> dict[str, SpeedProfile]:
        """Merge configured profiles over the built-in table."""
        profiles = dict(DEFAULT_SPEED_PROFILES)

        for label, values in section.items():
            if not isinstance(values, dict):
                raise ConfigurationError(f"speed_profiles.{label} must be a mapping")
            try:
                profiles[str(label).lower()] = SpeedProfile(
                    min_speed=float(values["min_speed"]),
                    max_speed=float(values["max_speed"]),
                    step_delay_ms=int(values["step_delay_ms"]),
                )
            except KeyError as e:
                raise ConfigurationError(f"speed_profiles.{label} is missing {e}") from e
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"speed_profiles.{label} is invalid: {e}") from e

        return profiles

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value using dot notation.

        Args:
            key: Dot-separated key path (e.g., 'jiggle.duration_minutes')
            default: Default value if key not found

        Returns:
            Config value or default
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_section(self, section: str) -> dict[str, Any]:
        """Get an entire config section.

        Args:
            section: Section name

        Returns:
            Section dict or empty dict if not found
        """
        return self._config.get(section, {})

    @property
    def jiggle(self) -> dict[str, Any]:
        """Get jiggle configuration."""
        return self.get_section("jiggle")

    @property
    def safety(self) -> dict[str, Any]:
        """Get safety configuration."""
        return self.get_section("safety")

    @property
    def speed_profiles(self) -> dict[str, SpeedProfile]:
        """Get the speed profile table (built-ins plus configured overrides)."""
        return dict(self._speed_profiles)


def _require_non_negative_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigurationError(f"{name} must be a non-negative integer, got {value!r}")
    return value


def build_jiggler_config(
    config: ConfigManager,
    screen_size: Optional[tuple[int, int]],
    duration_minutes: Optional[int] = None,
    speed: Optional[str] = None,
    style: Optional[MotionStyle] = None,
    frequency_seconds: Optional[int] = None,
    quit_key: Optional[str] = None,
) -> JigglerConfig:
    """Merge command line overrides over the config file.

    Arguments left as None fall back to the config file. A screen_size of
    None means the display could not be queried (dry run only); the config
    then reports a 0x0 screen and must not be run.

    Raises:
        ConfigurationError: If any merged value is invalid
    """
    jiggle = config.jiggle
    profiles = config.speed_profiles

    if duration_minutes is None:
        duration_minutes = jiggle.get("duration_minutes", 10)
    _require_non_negative_int(duration_minutes, "duration")

    if frequency_seconds is None:
        frequency_seconds = jiggle.get("frequency_seconds", 10)
    if _require_non_negative_int(frequency_seconds, "frequency") == 0:
        raise ConfigurationError("frequency must be positive")

    if style is None:
        style = parse_motion_style(jiggle.get("style", MotionStyle.STRAIGHT.value))

    if speed is None:
        speed = str(jiggle.get("speed", "medium"))

    if style == MotionStyle.FIXED_INTERVAL:
        speed_label = FIXED_INTERVAL_SPEED_LABEL
    else:
        speed_label = canonical_speed_label(speed, profiles)
    speed_profile = resolve_speed_profile(
        speed_label, human_like=style == MotionStyle.HUMAN_LIKE, profiles=profiles
    )

    if quit_key is None:
        quit_key = config.safety.get("quit_key", "q")
    if not quit_key or not quit_key.strip():
        raise ConfigurationError("quit key must not be empty")

    if screen_size is None:
        width, height = 0, 0
    else:
        width, height = screen_size
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"invalid screen size: {width}x{height}")

    return JigglerConfig(
        duration_minutes=duration_minutes,
        speed_label=speed_label,
        style=style,
        frequency_seconds=frequency_seconds,
        quit_key=quit_key.strip().lower(),
        screen_width=width,
        screen_height=height,
        speed_profile=speed_profile,
    )
