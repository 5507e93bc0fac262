from .math import Point, Op, dist2
from .math.colors import Color
from .primitives import PointKind, PathEntry, Segment, kind_for_index
from .registries import point_editor_registry, register_point_editor
from .point_editors import PointEditorComponent, MirroredBezierPE
from .path import PathState
from .curvature import (
    CurvatureColoring,
    CurvatureRangeError,
    LegendSpec,
    curvature_at,
    curvature_legend,
    value_to_color,
    value_to_hue,
)
from .transform import CoordinateTransform, IdentityTransform, MapTransform
from .sampler import PathSample, SampledPath, as_path, sample_distance_for
from .settings import EditorSettings, load_settings, save_settings
from .editing import EditMode, KeyState, Modifiers, PathEditor, Snapshot

__all__ = [
    "Point",
    "Op",
    "dist2",
    "Color",
    "PointKind",
    "PathEntry",
    "Segment",
    "kind_for_index",
    "point_editor_registry",
    "register_point_editor",
    "PointEditorComponent",
    "MirroredBezierPE",
    "PathState",
    "CurvatureColoring",
    "CurvatureRangeError",
    "LegendSpec",
    "curvature_at",
    "curvature_legend",
    "value_to_color",
    "value_to_hue",
    "CoordinateTransform",
    "IdentityTransform",
    "MapTransform",
    "PathSample",
    "SampledPath",
    "as_path",
    "sample_distance_for",
    "EditorSettings",
    "load_settings",
    "save_settings",
    "EditMode",
    "KeyState",
    "Modifiers",
    "PathEditor",
    "Snapshot",
]
