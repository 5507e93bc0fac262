from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from .math import Point, cubic_eval, polyline_length


class PointKind(Enum):
    ANCHOR = "anchor"
    HANDLE = "handle"


def kind_for_index(index: int) -> PointKind:
    """
    Role of the entry appended at `index`:
      - 0 is the path start anchor
      - 1, 2 are the handles of the first segment
      - from 3 on, odd indices are anchors and even indices the stored
        incoming handle of the segment ending at the next anchor
    """
    if index < 0:
        raise IndexError(index)
    if index == 0 or (index >= 3 and index % 2 == 1):
        return PointKind.ANCHOR
    return PointKind.HANDLE


@dataclass(frozen=True)
class PathEntry:
    kind: PointKind
    position: Point

    @property
    def is_anchor(self) -> bool:
        return self.kind is PointKind.ANCHOR

    def moved_to(self, p: Point) -> "PathEntry":
        return PathEntry(self.kind, (float(p[0]), float(p[1])))


@dataclass(frozen=True)
class Segment:
    """One cubic Bezier piece: anchor p0, controls p1/p2, anchor p3."""
    p0: Point
    p1: Point
    p2: Point
    p3: Point

    def __iter__(self) -> Iterator[Point]:
        return iter((self.p0, self.p1, self.p2, self.p3))

    def point_at(self, t: float) -> Point:
        return cubic_eval(self.p0, self.p1, self.p2, self.p3, t)

    def control_length(self) -> float:
        return polyline_length([self.p0, self.p1, self.p2, self.p3])
