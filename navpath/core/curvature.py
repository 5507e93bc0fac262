import math
from dataclasses import dataclass, field
from typing import Callable, Iterable

from .math import Point, cubic_first_derivative, cubic_second_derivative
from .math.colors import Color
from .primitives import Segment

Coloring = Callable[[float, Point, Point, Point, Point], Color]

HUE_MIN_CURVATURE = 240.0  # blue
HUE_MAX_CURVATURE = 0.0    # red


class CurvatureRangeError(RuntimeError):
    """Raised when a color mapping is requested before any curvature was accumulated."""


def curvature_at(t: float, p0: Point, p1: Point, p2: Point, p3: Point) -> float:
    """
    Curvature of a cubic Bezier at t:
        k = |x'y'' - y'x''| / (x'^2 + y'^2)^(3/2)
    Zero-velocity points have no defined curvature and report 0.
    """
    d1 = cubic_first_derivative(p0, p1, p2, p3, t)
    d2 = cubic_second_derivative(p0, p1, p2, p3, t)
    num = abs(d1[0] * d2[1] - d1[1] * d2[0])
    denom = (d1[0] * d1[0] + d1[1] * d1[1]) ** 1.5
    return 0.0 if denom == 0.0 else num / denom


def segment_curvature(seg: Segment, t: float) -> float:
    return curvature_at(t, seg.p0, seg.p1, seg.p2, seg.p3)


def normalize(v: float, vmin: float, vmax: float) -> float:
    if vmax <= vmin:
        return 0.0
    return max(0.0, min(1.0, (v - vmin) / (vmax - vmin)))


def value_to_hue(v: float, vmin: float, vmax: float) -> float:
    t = normalize(v, vmin, vmax)
    return HUE_MIN_CURVATURE + (HUE_MAX_CURVATURE - HUE_MIN_CURVATURE) * t


def value_to_color(v: float, vmin: float, vmax: float) -> Color:
    return Color.from_hsl(value_to_hue(v, vmin, vmax), 1.0, 0.5)


def curvature_coloring(kmin: float, kmax: float) -> Coloring:
    def _coloring(t: float, p0: Point, p1: Point, p2: Point, p3: Point) -> Color:
        return value_to_color(curvature_at(t, p0, p1, p2, p3), kmin, kmax)
    return _coloring


@dataclass(frozen=True)
class LegendLabel:
    position: float  # pixels from the left of the bar
    text: str
    align: str       # "left" | "center" | "right"


@dataclass(frozen=True)
class LegendSpec:
    """
    Everything needed to draw the curvature legend; geometry in pixels
    relative to the legend's top-left corner.
    """
    title: str
    length: int
    stops: list[tuple[float, Color]] = field(default_factory=list)
    labels: list[LegendLabel] = field(default_factory=list)
    scale_bar_px: float = 0.0
    scale_bar_label: str = ""
    bar_height: int = 12
    padding: int = 8
    font_size: int = 12
    scale_bar_height: int = 20

    @property
    def title_height(self) -> int:
        return self.font_size + 4

    @property
    def labels_height(self) -> int:
        return self.font_size + 4

    @property
    def width(self) -> int:
        return self.length + 2 * self.padding

    @property
    def height(self) -> int:
        return (self.title_height + self.padding + self.bar_height + self.padding
                + self.labels_height + self.padding + self.scale_bar_height + self.padding)


def _radius(k: float) -> float:
    return math.inf if k == 0.0 else 1.0 / k


def _format_length(value: float, digits: int) -> str:
    if math.isinf(value):
        return "inf m"
    return f"{value:.{digits}f} m"


def curvature_legend(kmin: float, kmax: float, scaling: Callable[[float], float], length: int = 200) -> LegendSpec:
    """
    Legend for a curvature range: color bar from kmin to kmax, curvature
    radius labels (min / mid / max, converted by `scaling`) and a scale bar.
    """
    if length < 2:
        raise ValueError("legend length must be at least 2 pixels")
    stops: list[tuple[float, Color]] = []
    for i in range(length):
        t = i / (length - 1)
        v = kmin + t * (kmax - kmin)
        stops.append((t, value_to_color(v, kmin, kmax)))

    mid = kmin + (kmax - kmin) / 2.0
    values = [scaling(_radius(kmin)), scaling(_radius(mid)), scaling(_radius(kmax))]
    positions = [0.0, length / 2.0, float(length)]
    aligns = ["left", "center", "right"]
    labels = [LegendLabel(pos, _format_length(v, 1), al) for pos, v, al in zip(positions, values, aligns)]

    ideal_px = min(length / 3.0, 100.0)
    return LegendSpec(
        title="Curvature Radius (m)",
        length=length,
        stops=stops,
        labels=labels,
        scale_bar_px=ideal_px,
        scale_bar_label=_format_length(scaling(ideal_px), 0),
    )


class CurvatureColoring:
    """
    Accumulates the curvature range over a set of segments, then maps
    curvature to a blue (flat) to red (tight) hue.
    """

    def __init__(self, sampling: int = 200):
        if sampling < 1:
            raise ValueError("sampling must be >= 1")
        self.sampling = sampling
        self.kmin: float | None = None
        self.kmax: float | None = None

    @classmethod
    def from_segments(cls, segments: Iterable[Segment], sampling: int = 200) -> "CurvatureColoring":
        coloring = cls(sampling)
        for seg in segments:
            coloring.add_segment(seg)
        return coloring

    @property
    def has_range(self) -> bool:
        return self.kmin is not None and self.kmax is not None

    def add_bezier(self, p0: Point, p1: Point, p2: Point, p3: Point) -> None:
        for i in range(self.sampling + 1):
            k = curvature_at(i / self.sampling, p0, p1, p2, p3)
            if self.kmin is None or k < self.kmin:
                self.kmin = k
            if self.kmax is None or k > self.kmax:
                self.kmax = k

    def add_segment(self, seg: Segment) -> None:
        self.add_bezier(seg.p0, seg.p1, seg.p2, seg.p3)

    def get_coloring(self) -> Coloring:
        if not self.has_range:
            raise CurvatureRangeError("No beziers")
        return curvature_coloring(self.kmin, self.kmax)

    def color_for(self, k: float) -> Color:
        if not self.has_range:
            raise CurvatureRangeError("No beziers")
        return value_to_color(k, self.kmin, self.kmax)

    def legend(self, scaling: Callable[[float], float], length: int = 200) -> LegendSpec:
        if not self.has_range:
            raise CurvatureRangeError("No curvature range to draw legend")
        return curvature_legend(self.kmin, self.kmax, scaling, length)
