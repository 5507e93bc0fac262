import json
import logging
import os
from dataclasses import dataclass

import yaml

from .math import Point
from .registries import point_editor_registry
from .sampler import SampledPath

logger = logging.getLogger(__name__)


def validate_record(data) -> dict:
    """Check the shape of a persisted path record: {loopFinished, points, editor?}."""
    if not isinstance(data, dict):
        raise ValueError("path record must be a JSON object")
    if not isinstance(data.get("loopFinished"), bool):
        raise ValueError("path record needs a boolean 'loopFinished'")
    editor = data.get("editor")
    if editor is not None and (not isinstance(editor, str) or editor not in point_editor_registry):
        raise ValueError(f"unknown point editor {editor!r}")
    points = data.get("points")
    if not isinstance(points, list):
        raise ValueError("path record needs a 'points' list")
    for i, p in enumerate(points):
        if isinstance(p, dict):
            ok = all(isinstance(p.get(k), (int, float)) and not isinstance(p.get(k), bool) for k in ("x", "y"))
        elif isinstance(p, list):
            ok = len(p) == 2 and all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in p)
        else:
            ok = False
        if not ok:
            raise ValueError(f"point {i} is not an {{x, y}} pair: {p!r}")
    return data


def save_path_file(filename: str, record: dict) -> None:
    """Save a path record (world coordinates) to a JSON file."""
    with open(filename, "w", encoding="utf-8") as f:
        json.dump(validate_record(record), f, indent=4)
    logger.info("Saved %d path points to %s", len(record["points"]), filename)


def load_path_file(filename: str) -> dict:
    """Load and validate a path record from a JSON file."""
    with open(filename, "r", encoding="utf-8") as f:
        data = json.load(f)
    record = validate_record(data)
    logger.info("Loaded %d path points from %s", len(record["points"]), filename)
    return record


def export_sampled_path(filename: str, sampled: SampledPath, nav_path: bool = False, frame_id: str = "map") -> None:
    """
    Write the sampled path in world coordinates: a plain list of points with
    curvature, or a nav_msgs/Path shaped object when `nav_path` is set.
    """
    payload = sampled.to_nav_path(frame_id) if nav_path else sampled.to_json()
    with open(filename, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=4)
    logger.info("Exported %d samples to %s", len(sampled), filename)


@dataclass(frozen=True)
class MapMetadata:
    """Contents of a ROS map_server yaml: the image it points to and its placement."""
    image: str
    resolution: float
    origin: Point


def read_map_yaml(filename: str) -> MapMetadata:
    """
    Read a map_server yaml (image, resolution, origin: [x, y, yaw]).
    A relative image path is resolved against the yaml's directory.
    """
    with open(filename, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as err:
            raise ValueError(f"{filename}: {err}") from err

    if not isinstance(data, dict):
        raise ValueError(f"{filename}: map yaml must be a mapping")
    image = data.get("image")
    if not isinstance(image, str) or not image:
        raise ValueError(f"{filename}: map yaml needs an 'image' path")
    resolution = data.get("resolution")
    if isinstance(resolution, bool) or not isinstance(resolution, (int, float)) or resolution <= 0:
        raise ValueError(f"{filename}: map yaml needs a positive 'resolution'")
    origin = data.get("origin", [0.0, 0.0, 0.0])
    if (not isinstance(origin, list) or len(origin) < 2
            or not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in origin[:2])):
        raise ValueError(f"{filename}: map yaml 'origin' must be [x, y, yaw]")

    if not os.path.isabs(image):
        image = os.path.join(os.path.dirname(os.path.abspath(filename)), image)
    meta = MapMetadata(image=image, resolution=float(resolution), origin=(float(origin[0]), float(origin[1])))
    logger.info("Read map metadata from %s (resolution %g, origin %s)", filename, meta.resolution, meta.origin)
    return meta
