from typing import Literal

Point = tuple[float, float]
Op = tuple[Literal["M", "L", "C", "Z"], tuple]


def dist2(a: Point, b: Point) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def dist(a: Point, b: Point) -> float:
    return dist2(a, b) ** 0.5


def translate(p: Point, dx: float, dy: float) -> Point:
    return p[0] + dx, p[1] + dy


def mirror(p: Point, about: Point) -> Point:
    """Reflect p through `about` (2*about - p)."""
    return 2.0 * about[0] - p[0], 2.0 * about[1] - p[1]


def cubic_eval(p0: Point, c1: Point, c2: Point, p3: Point, t: float) -> Point:
    u = 1.0 - t
    uu = u * u
    tt = t * t
    uuu = uu * u
    ttt = tt * t
    x = uuu * p0[0] + 3.0 * uu * t * c1[0] + 3.0 * u * tt * c2[0] + ttt * p3[0]
    y = uuu * p0[1] + 3.0 * uu * t * c1[1] + 3.0 * u * tt * c2[1] + ttt * p3[1]
    return (x, y)


def cubic_first_derivative(p0: Point, c1: Point, c2: Point, p3: Point, t: float) -> Point:
    u = 1.0 - t
    x = 3.0 * (u * u * (c1[0] - p0[0]) + 2.0 * u * t * (c2[0] - c1[0]) + t * t * (p3[0] - c2[0]))
    y = 3.0 * (u * u * (c1[1] - p0[1]) + 2.0 * u * t * (c2[1] - c1[1]) + t * t * (p3[1] - c2[1]))
    return (x, y)


def cubic_second_derivative(p0: Point, c1: Point, c2: Point, p3: Point, t: float) -> Point:
    u = 1.0 - t
    x = 6.0 * (u * (c2[0] - 2.0 * c1[0] + p0[0]) + t * (p3[0] - 2.0 * c2[0] + c1[0]))
    y = 6.0 * (u * (c2[1] - 2.0 * c1[1] + p0[1]) + t * (p3[1] - 2.0 * c2[1] + c1[1]))
    return (x, y)


def polyline_length(pts: list[Point]) -> float:
    """
    Sum of the distances between consecutive points. For a cubic control
    polygon this is an upper bound of the curve's arc length.
    """
    total = 0.0
    for a, b in zip(pts, pts[1:]):
        total += dist(a, b)
    return total


__all__ = [
    "Point",
    "Op",
    "dist2",
    "dist",
    "translate",
    "mirror",
    "cubic_eval",
    "cubic_first_derivative",
    "cubic_second_derivative",
    "polyline_length",
]
