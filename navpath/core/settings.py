import json
import logging
import os
from dataclasses import dataclass, asdict, fields

from .math import Point

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "navpath.json"


@dataclass
class EditorSettings:
    """
    User-tunable editor settings:
      - snap_radius: display units within which a click grabs an existing point
      - curvature_sampling: curvature samples per segment for the color range
      - sample_distance: export spacing, in world units (metres)
      - render_hz: repaint rate of the canvas
      - place_key / undo_modifier / undo_key / loop_key: Qt key names
      - legend_length: color bar width in pixels
      - resolution / origin: map metadata used until a map is configured
    """
    snap_radius: float = 6.0
    curvature_sampling: int = 200
    sample_distance: float = 0.1
    render_hz: int = 60
    place_key: str = "Shift"
    undo_modifier: str = "Control"
    undo_key: str = "Z"
    loop_key: str = "L"
    legend_length: int = 200
    resolution: float = 0.05
    origin: Point = (0.0, 0.0)

    def __post_init__(self):
        if self.snap_radius < 0:
            raise ValueError("snap_radius must be >= 0")
        if self.curvature_sampling < 1:
            raise ValueError("curvature_sampling must be >= 1")
        if self.sample_distance <= 0:
            raise ValueError("sample_distance must be > 0")
        if self.render_hz <= 0:
            raise ValueError("render_hz must be > 0")
        if self.resolution <= 0:
            raise ValueError("resolution must be > 0")
        self.origin = (float(self.origin[0]), float(self.origin[1]))

    @property
    def render_interval_ms(self) -> int:
        return max(1, round(1000 / self.render_hz))

    def to_dict(self) -> dict:
        data = asdict(self)
        data["origin"] = list(self.origin)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "EditorSettings":
        known = {f.name: f for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                logger.warning("Ignoring unknown setting '%s'", key)
                continue
            kwargs[key] = _coerce(key, known[key].default, value)
        return cls(**kwargs)


def _coerce(key: str, default, value):
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise TypeError(f"Setting '{key}' must be a bool")
        return value
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Setting '{key}' must be an int")
        return value
    if isinstance(default, float):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"Setting '{key}' must be a number")
        return float(value)
    if isinstance(default, str):
        if not isinstance(value, str):
            raise TypeError(f"Setting '{key}' must be a string")
        return value
    if isinstance(default, tuple):
        if not isinstance(value, (list, tuple)) or len(value) != len(default):
            raise TypeError(f"Setting '{key}' must be a list of {len(default)} numbers")
        return tuple(float(v) for v in value)
    return value


def load_settings(path: str = SETTINGS_FILENAME) -> EditorSettings:
    """Read settings from a JSON file; a missing file gives the defaults."""
    if not os.path.exists(path):
        logger.info("No settings file at %s, using defaults", path)
        return EditorSettings()
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise TypeError(f"{path}: settings must be a JSON object")
    return EditorSettings.from_dict(data)


def save_settings(settings: EditorSettings, path: str = SETTINGS_FILENAME) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings.to_dict(), f, indent=4)
