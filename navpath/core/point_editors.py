from abc import ABC, abstractmethod

from .math import Op, Point, mirror, translate
from .primitives import PathEntry, Segment, kind_for_index
from .registries import register_point_editor


class PointEditorComponent(ABC):
    """
    Strategy that owns the editing rules of a path: how entries are added,
    removed and moved, and how the stored entries expand into cubic segments.
    Editors are stateless; every method returns a new list.
    """
    min_closable_points: int = 0

    @abstractmethod
    def add_point(self, entries: list[PathEntry], new_point: Point, closed: bool) -> list[PathEntry]:
        """
        Append the new point with the role its position in the list implies.
        """

    @abstractmethod
    def remove_last(self, entries: list[PathEntry], closed: bool) -> list[PathEntry]:
        """
        Drop the most recently added entry (undo).
        """

    @abstractmethod
    def edit_point(self, entries: list[PathEntry], idx: int, edited_point: Point) -> list[PathEntry]:
        """
        Move a selected entry; implementations may move other entries to respect constraints.
        """

    @abstractmethod
    def segments(self, entries: list[PathEntry], closed: bool, /) -> list[Segment]:
        """
        Return the explicit cubic segments described by the stored entries.
        """

    def can_close(self, entries: list[PathEntry]) -> bool:
        return len(entries) >= self.min_closable_points

    def path_ops(self, entries: list[PathEntry], closed: bool, /) -> list[Op]:
        """
        Convert entries to simple drawing ops:
          - ("M", (x,y))       moveTo
          - ("C", (c1,c2,p3))  cubicTo
          - ("Z", ())          closePath
        """
        segs = self.segments(entries, closed)
        if not segs:
            return []
        ops: list[Op] = [("M", segs[0].p0)]
        for seg in segs:
            ops.append(("C", (seg.p1, seg.p2, seg.p3)))
        if closed:
            ops.append(("Z", ()))
        return ops


@register_point_editor("mirrored-bezier")
class MirroredBezierPE(PointEditorComponent):
    """
    Composite cubic Bezier where each interior anchor stores only its incoming
    handle; the outgoing handle is the mirror of it through the anchor:
      - add: append (the role follows from the position in the list).
      - remove: pop the last entry.
      - edit: set point; moving an anchor drags its stored handle along.
    """
    min_closable_points = 4

    def add_point(self, entries: list[PathEntry], new_point: Point, closed: bool) -> list[PathEntry]:
        pts = list(entries)
        if closed:
            return pts
        kind = kind_for_index(len(pts))
        pts.append(PathEntry(kind, (float(new_point[0]), float(new_point[1]))))
        return pts

    def remove_last(self, entries: list[PathEntry], closed: bool) -> list[PathEntry]:
        if closed or not entries:
            return list(entries)
        return list(entries[:-1])

    def edit_point(self, entries: list[PathEntry], idx: int, edited_point: Point) -> list[PathEntry]:
        if idx < 0 or idx >= len(entries):
            return list(entries)
        pts = list(entries)
        old = pts[idx].position
        pts[idx] = pts[idx].moved_to(edited_point)
        if not pts[idx].is_anchor:
            return pts

        # keep the stored handles at the same offset from the moved anchor
        dx = pts[idx].position[0] - old[0]
        dy = pts[idx].position[1] - old[1]
        neighbours = []
        if idx == 0 and len(pts) > 1:
            neighbours.append(1)
        if idx - 1 >= 0:
            neighbours.append(idx - 1)
        for j in neighbours:
            if not pts[j].is_anchor:
                pts[j] = pts[j].moved_to(translate(pts[j].position, dx, dy))
        return pts

    def segments(self, entries: list[PathEntry], closed: bool, /) -> list[Segment]:
        if len(entries) < 4:
            return []
        pts = [e.position for e in entries]

        derived: list[Point] = pts[:4]
        for cp2, anchor in zip(pts[4::2], pts[5::2]):
            cp1 = mirror(derived[-2], derived[-1])
            derived.extend((cp1, cp2, anchor))

        count = (len(derived) - 1) // 3
        segs = [Segment(*derived[3 * k:3 * k + 4]) for k in range(count)]

        if closed:
            last = derived[-1]
            first = derived[0]
            segs.append(Segment(last, mirror(derived[-2], last), mirror(derived[1], first), first))
        return segs

    def tail(self, entries: list[PathEntry]) -> list[Point]:
        """
        Entries placed after the last complete segment, starting with the
        anchor they hang from. Used to preview the segment being built.
        """
        n = len(entries)
        if n == 0:
            return []
        if n < 4:
            return [e.position for e in entries]
        # the last complete anchor is the greatest odd index (or 3)
        last_anchor = n - 1 if (n - 1) % 2 == 1 else n - 2
        return [e.position for e in entries[last_anchor:]]
