import math
from dataclasses import dataclass, field

from .curvature import segment_curvature
from .math import Point, cubic_first_derivative
from .path import PathState
from .transform import CoordinateTransform


@dataclass(frozen=True)
class PathSample:
    x: float
    y: float
    curvature: float = 0.0

    @property
    def point(self) -> Point:
        return self.x, self.y


@dataclass
class SampledPath:
    """
    Dense point sequence of a path, in display and in world coordinates.
    Both lists are parallel: display[i] and world[i] are the same sample.
    Curvature is per display unit on `display` and per metre on `world`.
    """
    display: list[PathSample] = field(default_factory=list)
    world: list[PathSample] = field(default_factory=list)
    headings: list[float] = field(default_factory=list)  # world-frame yaw, radians

    def __len__(self) -> int:
        return len(self.world)

    def display_points(self) -> list[Point]:
        return [s.point for s in self.display]

    def to_json(self, with_curvature: bool = True) -> list[dict]:
        if with_curvature:
            return [{"x": s.x, "y": s.y, "curvature": s.curvature} for s in self.world]
        return [{"x": s.x, "y": s.y} for s in self.world]

    def to_nav_path(self, frame_id: str = "map") -> dict:
        """
        nav_msgs/Path shaped record: one stamped pose per sample, orientation
        is the yaw of the curve tangent.
        """
        poses = []
        for s, yaw in zip(self.world, self.headings):
            poses.append({
                "header": {"frame_id": frame_id},
                "pose": {
                    "position": {"x": s.x, "y": s.y, "z": 0.0},
                    "orientation": {"x": 0.0, "y": 0.0, "z": math.sin(yaw / 2.0), "w": math.cos(yaw / 2.0)},
                },
            })
        return {"header": {"frame_id": frame_id}, "poses": poses}


def sample_distance_for(world_distance: float, transform: CoordinateTransform) -> float:
    """Convert a spacing in world units into display units."""
    return transform.to_display_scalar(world_distance)


def segment_steps(length: float, sample_distance: float) -> int:
    return max(1, math.ceil(length / sample_distance))


def as_path(path: PathState, transform: CoordinateTransform, sample_distance: float) -> SampledPath | None:
    """
    Resample the path every ~`sample_distance` display units.

    Segment length is estimated by its control polygon (an upper bound of the
    arc length), so the real spacing is at most `sample_distance`. Each
    segment contributes samples for t in [0, 1); the end anchor is emitted by
    the following segment.
    """
    if sample_distance <= 0:
        raise ValueError(f"sample_distance must be positive, got {sample_distance}")
    if len(path) < 4:
        return None

    out = SampledPath()
    # world curvature is per metre
    metres_per_unit = transform.to_world_scalar(1.0)
    for seg in path.segments():
        steps = segment_steps(seg.control_length(), sample_distance)
        for i in range(steps):
            t = i / steps
            p = seg.point_at(t)
            k = segment_curvature(seg, t)
            out.display.append(PathSample(p[0], p[1], k))

            wp = transform.to_world(p)
            out.world.append(PathSample(wp[0], wp[1], k / metres_per_unit))

            d = cubic_first_derivative(seg.p0, seg.p1, seg.p2, seg.p3, t)
            ahead = transform.to_world((p[0] + d[0], p[1] + d[1]))
            out.headings.append(math.atan2(ahead[1] - wp[1], ahead[0] - wp[0]))
    return out
