from abc import ABC, abstractmethod
from dataclasses import dataclass

from .math import Point


class CoordinateTransform(ABC):
    """
    Affine mapping between display (widget pixels) and world (map metres)
    coordinates. Implementations are pure: the same input always gives the
    same output for the lifetime of the instance.
    """

    @abstractmethod
    def to_world(self, p: Point, /) -> Point:
        pass

    @abstractmethod
    def to_display(self, p: Point, /) -> Point:
        pass

    @abstractmethod
    def to_world_scalar(self, length: float, /) -> float:
        pass

    @abstractmethod
    def to_display_scalar(self, length: float, /) -> float:
        pass

    def points_to_world(self, points: list[Point]) -> list[Point]:
        return [self.to_world(p) for p in points]


class IdentityTransform(CoordinateTransform):
    def to_world(self, p: Point, /) -> Point:
        return float(p[0]), float(p[1])

    def to_display(self, p: Point, /) -> Point:
        return float(p[0]), float(p[1])

    def to_world_scalar(self, length: float, /) -> float:
        return float(length)

    def to_display_scalar(self, length: float, /) -> float:
        return float(length)


@dataclass(frozen=True)
class MapTransform(CoordinateTransform):
    """
    Occupancy-map convention:
      - scale: display pixels per image pixel
      - resolution: metres per image pixel
      - origin: offset of the map origin, in image pixels
      - image_size: (width, height) of the map image in pixels

        world = (display / scale - image_size / 2 + origin) * resolution
    """
    scale: float = 1.0
    resolution: float = 1.0
    origin: Point = (0.0, 0.0)
    image_size: tuple[int, int] = (0, 0)

    def __post_init__(self):
        if self.scale <= 0.0:
            raise ValueError(f"scale must be positive, got {self.scale}")
        if self.resolution <= 0.0:
            raise ValueError(f"resolution must be positive, got {self.resolution}")

    @classmethod
    def fit(cls,
            image_size: tuple[int, int],
            view_size: tuple[int, int],
            resolution: float = 1.0,
            origin: Point = (0.0, 0.0)) -> "MapTransform":
        """Scale the image uniformly so it fits inside view_size."""
        w, h = image_size
        vw, vh = view_size
        if w <= 0 or h <= 0 or vw <= 0 or vh <= 0:
            scale = 1.0
        else:
            scale = min(vw / w, vh / h)
        return cls(scale=scale, resolution=resolution, origin=origin, image_size=(w, h))

    @property
    def display_size(self) -> tuple[int, int]:
        return round(self.image_size[0] * self.scale), round(self.image_size[1] * self.scale)

    def to_world(self, p: Point, /) -> Point:
        w, h = self.image_size
        return (
            (p[0] / self.scale - w / 2.0 + self.origin[0]) * self.resolution,
            (p[1] / self.scale - h / 2.0 + self.origin[1]) * self.resolution,
        )

    def to_display(self, p: Point, /) -> Point:
        w, h = self.image_size
        return (
            (p[0] / self.resolution - self.origin[0] + w / 2.0) * self.scale,
            (p[1] / self.resolution - self.origin[1] + h / 2.0) * self.scale,
        )

    def to_world_scalar(self, length: float, /) -> float:
        return length / self.scale * self.resolution

    def to_display_scalar(self, length: float, /) -> float:
        return length / self.resolution * self.scale

    def origin_display(self) -> Point:
        """Display position of the world origin (0, 0)."""
        return self.to_display((0.0, 0.0))
