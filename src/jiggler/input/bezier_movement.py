"""Human-like mouse movement using Bezier curves."""

from dataclasses import dataclass

import numpy as np


# A path is sampled at t = i / BEZIER_STEPS for i in 0..BEZIER_STEPS
BEZIER_STEPS = 100


@dataclass(frozen=True)
class Point:
    """2D screen point in pixels."""

    x: int
    y: int

    def as_tuple(self) -> tuple[int, int]:
        return self.x, self.y


def control_points_in_bbox(
    p0: Point, p3: Point, rng: np.random.Generator
) -> tuple[Point, Point]:
    """Pick two random control points inside the bounding box of p0 and p3.

    Each coordinate is drawn independently and uniformly over [min, max],
    both bounds inclusive.

    Args:
        p0: Path start
        p3: Path end
        rng: NumPy random generator

    Returns:
        (p1, p2) control points
    """
    min_x, max_x = min(p0.x, p3.x), max(p0.x, p3.x)
    min_y, max_y = min(p0.y, p3.y), max(p0.y, p3.y)

    def pick() -> Point:
        return Point(
            int(rng.integers(min_x, max_x, endpoint=True)),
            int(rng.integers(min_y, max_y, endpoint=True)),
        )

    return pick(), pick()


def cubic_bezier(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> Point:
    """Evaluate a cubic Bezier curve at t.

    B(t) = (1-t)^3 P0 + 3(1-t)^2 t P1 + 3(1-t) t^2 P2 + t^3 P3, 0 <= t <= 1.
    Coordinates are truncated, not rounded.
    """
    t2 = t * t
    t3 = t2 * t
    mt1 = 1 - t
    mt2 = mt1 * mt1
    mt3 = mt2 * mt1

    x = mt3 * p0.x + 3 * mt2 * t * p1.x + 3 * mt1 * t2 * p2.x + t3 * p3.x
    y = mt3 * p0.y + 3 * mt2 * t * p1.y + 3 * mt1 * t2 * p2.y + t3 * p3.y

    return Point(int(x), int(y))


def sample_bezier_path(
    p0: Point,
    p1: Point,
    p2: Point,
    p3: Point,
    steps: int = BEZIER_STEPS,
) -> list[Point]:
    """Sample steps + 1 points along the curve in increasing t order."""
    if steps < 1:
        raise ValueError("steps must be at least 1")

    return [cubic_bezier(p0, p1, p2, p3, i / steps) for i in range(steps + 1)]


@dataclass(frozen=True)
class BezierPath:
    """One motion segment: start, two control points, destination."""

    p0: Point
    p1: Point
    p2: Point
    p3: Point

    @classmethod
    def between(cls, start: Point, end: Point, rng: np.random.Generator) -> "BezierPath":
        """Build a path with random control points between start and end."""
        p1, p2 = control_points_in_bbox(start, end, rng)
        return cls(start, p1, p2, end)

    def points(self, steps: int = BEZIER_STEPS) -> list[Point]:
        """Sampled points from p0 to p3."""
        return sample_bezier_path(self.p0, self.p1, self.p2, self.p3, steps)
