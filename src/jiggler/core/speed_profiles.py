"""Speed profiles controlling how a single cursor move is paced."""

from dataclasses import dataclass, replace
from typing import Mapping

from .errors import ConfigurationError


# Coarse jumps pause this many times longer than a step along a Bezier path
STRAIGHT_DELAY_FACTOR = 100


@dataclass(frozen=True)
class SpeedProfile:
    """Pacing for one smooth cursor move.

    min_speed/max_speed bound the pause (ms) after every pixel of a smooth
    move; step_delay_ms is the pause after the move completes.
    """

    min_speed: float
    max_speed: float
    step_delay_ms: int

    def __post_init__(self):
        if self.min_speed < 0 or self.max_speed < 0:
            raise ConfigurationError("speed bounds must be non-negative")
        if self.min_speed > self.max_speed:
            raise ConfigurationError(
                f"min_speed ({self.min_speed}) must not exceed max_speed ({self.max_speed})"
            )
        if self.step_delay_ms < 0:
            raise ConfigurationError("step_delay_ms must be non-negative")

    def scaled(self, factor: int) -> "SpeedProfile":
        """Return a copy with the step delay multiplied by factor."""
        return replace(self, step_delay_ms=self.step_delay_ms * factor)


DEFAULT_SPEED_PROFILES: dict[str, SpeedProfile] = {
    "slow": SpeedProfile(min_speed=1.0, max_speed=3.0, step_delay_ms=10),
    "medium": SpeedProfile(min_speed=0.5, max_speed=1.0, step_delay_ms=10),
    "high": SpeedProfile(min_speed=0.01, max_speed=0.05, step_delay_ms=1),
}

DEFAULT_SPEED_LABEL = "medium"


def canonical_speed_label(
    label: str,
    profiles: Mapping[str, SpeedProfile] = DEFAULT_SPEED_PROFILES,
) -> str:
    """Map a user supplied label onto a key of the profile table.

    Exact (case-insensitive) matches win; otherwise the first character is
    matched against the first character of each known label, so "s", "slow"
    and "sxyz" all land on "slow".

    Raises:
        ConfigurationError: If the label is empty or matches nothing
    """
    key = (label or "").strip().lower()
    if not key:
        raise ConfigurationError("invalid speed label")

    if key in profiles:
        return key

    for known in profiles:
        if known[0] == key[0]:
            return known

    raise ConfigurationError(
        f"invalid speed label: {label!r} (expected one of: "
        + ", ".join(f"{name[0]}|{name}" for name in profiles)
        + ")"
    )


def resolve_speed_profile(
    label: str,
    human_like: bool = True,
    profiles: Mapping[str, SpeedProfile] = DEFAULT_SPEED_PROFILES,
) -> SpeedProfile:
    """Resolve a speed label to its profile.

    Args:
        label: Speed label or abbreviation
        human_like: False for straight jumps, which get the step delay
            multiplied by STRAIGHT_DELAY_FACTOR
        profiles: Profile table to resolve against

    Returns:
        Resolved SpeedProfile

    Raises:
        ConfigurationError: If the label is invalid
    """
    profile = profiles[canonical_speed_label(label, profiles)]
    if not human_like:
        profile = profile.scaled(STRAIGHT_DELAY_FACTOR)
    return profile
