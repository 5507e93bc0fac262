import math

import pytest

from navpath.core import (
    Color,
    CurvatureColoring,
    CurvatureRangeError,
    Segment,
    curvature_at,
    curvature_legend,
    value_to_color,
    value_to_hue,
)
from navpath.core.curvature import normalize

KAPPA = 0.5522847498307936
QUARTER = Segment((100.0, 0.0), (100.0, 100.0 * KAPPA), (100.0 * KAPPA, 100.0), (0.0, 100.0))
STRAIGHT = Segment((0.0, 0.0), (1.0, 1.0), (2.0, 2.0), (3.0, 3.0))


@pytest.mark.parametrize("t", [0.0, 0.1, 0.25, 0.5, 0.9, 1.0])
def test_straight_segment_has_no_curvature(t):
    assert curvature_at(t, *STRAIGHT) == 0.0


def test_stationary_point_reports_zero():
    p = (4.0, 4.0)
    assert curvature_at(0.5, p, p, p, p) == 0.0


@pytest.mark.parametrize("t", [0.0, 0.5, 1.0])
def test_quarter_circle_curvature(t):
    assert curvature_at(t, *QUARTER) == pytest.approx(1.0 / 100.0, rel=0.05)


def test_curvature_is_unsigned():
    reverse = Segment(QUARTER.p3, QUARTER.p2, QUARTER.p1, QUARTER.p0)
    assert curvature_at(0.3, *reverse) == pytest.approx(curvature_at(0.7, *QUARTER))


def test_normalize():
    assert normalize(5.0, 0.0, 10.0) == 0.5
    assert normalize(-1.0, 0.0, 10.0) == 0.0
    assert normalize(11.0, 0.0, 10.0) == 1.0
    assert normalize(3.0, 2.0, 2.0) == 0.0


def test_hue_runs_blue_to_red():
    assert value_to_hue(0.0, 0.0, 1.0) == 240.0
    assert value_to_hue(1.0, 0.0, 1.0) == 0.0
    assert value_to_hue(0.5, 0.0, 1.0) == 120.0


def test_hue_is_monotonic():
    kmin, kmax = 0.002, 0.3
    values = [kmin + (kmax - kmin) * i / 50 for i in range(51)]
    hues = [value_to_hue(v, kmin, kmax) for v in values]
    assert all(a >= b for a, b in zip(hues, hues[1:]))
    colors = [value_to_color(v, kmin, kmax).h for v in values]
    assert all(a >= b for a, b in zip(colors, colors[1:]))


def test_degenerate_range_is_blue():
    assert value_to_color(0.7, 0.7, 0.7) == Color(240, 255, 255)


def test_color_is_full_saturation_half_lightness():
    assert value_to_color(1.0, 0.0, 1.0) == Color(0, 255, 255)
    assert value_to_color(0.0, 0.0, 1.0) == Color(240, 255, 255)
    assert value_to_color(0.5, 0.0, 1.0) == Color(120, 255, 255)


def test_coloring_needs_a_segment():
    coloring = CurvatureColoring()
    assert not coloring.has_range
    with pytest.raises(CurvatureRangeError):
        coloring.get_coloring()
    with pytest.raises(CurvatureRangeError):
        coloring.legend(lambda v: v)
    with pytest.raises(CurvatureRangeError):
        coloring.color_for(0.1)


def test_coloring_range_covers_samples():
    coloring = CurvatureColoring(sampling=20)
    coloring.add_segment(QUARTER)
    coloring.add_segment(STRAIGHT)
    assert coloring.kmin == 0.0
    assert coloring.kmax >= curvature_at(0.5, *QUARTER)
    fn = coloring.get_coloring()
    # straight pieces are the flattest: blue
    assert fn(0.5, *STRAIGHT).h == 240


def test_coloring_straight_only_is_degenerate():
    coloring = CurvatureColoring.from_segments([STRAIGHT])
    assert coloring.kmin == coloring.kmax == 0.0
    assert coloring.color_for(0.0).h == 240


def test_coloring_rejects_bad_sampling():
    with pytest.raises(ValueError):
        CurvatureColoring(sampling=0)


def test_legend_labels_and_scale_bar():
    spec = curvature_legend(0.5, 1.0, lambda v: v, length=200)
    assert spec.title == "Curvature Radius (m)"
    assert len(spec.stops) == 200
    assert spec.stops[0][0] == 0.0 and spec.stops[-1][0] == 1.0
    assert spec.stops[0][1].h == 240
    assert spec.stops[-1][1].h == 0
    assert [label.text for label in spec.labels] == ["2.0 m", "1.3 m", "1.0 m"]
    assert [label.align for label in spec.labels] == ["left", "center", "right"]
    assert [label.position for label in spec.labels] == [0.0, 100.0, 200.0]
    assert spec.scale_bar_px == pytest.approx(200 / 3)
    assert spec.scale_bar_label == "67 m"


def test_legend_uses_scaling():
    spec = curvature_legend(0.5, 1.0, lambda v: v * 0.05, length=600)
    assert spec.scale_bar_px == 100.0
    assert spec.scale_bar_label == "5 m"
    assert spec.labels[0].text == "0.1 m"


def test_legend_flat_path_has_infinite_radius():
    spec = curvature_legend(0.0, 0.0, lambda v: v)
    assert spec.labels[0].text == "inf m"
    assert all(math.isfinite(pos) for pos, _ in spec.stops)


def test_legend_too_short():
    with pytest.raises(ValueError):
        curvature_legend(0.0, 1.0, lambda v: v, length=1)


def test_legend_box_geometry():
    spec = CurvatureColoring.from_segments([QUARTER]).legend(lambda v: v)
    assert spec.width == 200 + 2 * 8
    assert spec.height == 16 + 8 + 12 + 8 + 16 + 8 + 20 + 8
