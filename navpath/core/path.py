import logging
from dataclasses import dataclass, field
from typing import Sequence, TYPE_CHECKING

from .math import Point, Op, dist2
from .point_editors import PointEditorComponent, MirroredBezierPE
from .primitives import PathEntry, Segment
from .registries import point_editor_registry, point_editor_name

if TYPE_CHECKING:
    from PySide6 import QtGui
    from .transform import CoordinateTransform

logger = logging.getLogger(__name__)


@dataclass()
class PathState:
    """
      - entries: tagged control points (anchor / handle) in display coordinates
      - loop_finished: whether a closing segment joins the last anchor to the first
      - editor: strategy to convert entries -> cubic segments/ops
    """
    entries: list[PathEntry] = field(default_factory=list)
    loop_finished: bool = False
    _editor: PointEditorComponent = field(default_factory=MirroredBezierPE)

    @property
    def editor(self) -> PointEditorComponent:
        return self._editor

    @property
    def points(self) -> list[Point]:
        return [e.position for e in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    def clear(self):
        self.entries = []
        self.loop_finished = False

    def copy(self) -> "PathState":
        return PathState(entries=list(self.entries), loop_finished=self.loop_finished, _editor=self._editor)

    def is_anchor(self, index: int) -> bool:
        return self.entries[index].is_anchor

    def index_at(self, pos: Point, radius: float) -> int | None:
        """First entry (in index order) within `radius` of pos."""
        r2 = radius * radius
        for i, e in enumerate(self.entries):
            if dist2(e.position, pos) <= r2:
                return i
        return None

    # ---- derivation ---------------------------------------------------------
    def segments(self) -> list[Segment]:
        return self._editor.segments(self.entries, self.loop_finished)

    def path_ops(self) -> list[Op]:
        return self._editor.path_ops(self.entries, self.loop_finished)

    def tail(self) -> list[Point]:
        return self._editor.tail(self.entries)

    # ---- editing ------------------------------------------------------------
    def append_point(self, p: Point) -> bool:
        if self.loop_finished:
            return False
        self.entries = self._editor.add_point(self.entries, p, self.loop_finished)
        return True

    def pop_last(self) -> bool:
        if not self.entries or self.loop_finished:
            return False
        self.entries = self._editor.remove_last(self.entries, self.loop_finished)
        return True

    def toggle_loop(self) -> bool:
        if not self.loop_finished and not self._editor.can_close(self.entries):
            logger.debug("Refusing to close a path of %d points", len(self.entries))
            return False
        self.loop_finished = not self.loop_finished
        return True

    def move_point(self, index: int, p: Point) -> bool:
        if not (0 <= index < len(self.entries)):
            return False
        self.entries = self._editor.edit_point(self.entries, index, p)
        return True

    # ---- serialization -------------------------------------------------------
    def to_dict(self, transform: "CoordinateTransform") -> dict:
        """
        Persistence record, points projected into world coordinates.
        """
        world = [transform.to_world(p) for p in self.points]
        return {
            "loopFinished": bool(self.loop_finished),
            "points": [{"x": x, "y": y} for x, y in world],
            "editor": point_editor_name(self._editor),
        }

    @classmethod
    def from_dict(cls, data: dict, transform: "CoordinateTransform") -> "PathState":
        editor_name = data.get("editor") or "mirrored-bezier"
        if editor_name not in point_editor_registry:
            raise ValueError(f"Unknown point editor {editor_name!r}")
        path = cls(_editor=point_editor_registry[editor_name]())
        for raw in data["points"]:
            path.append_point(transform.to_display(_as_point(raw)))
        path.loop_finished = bool(data["loopFinished"])
        return path

    def make_qpath(self) -> "QtGui.QPainterPath":
        from PySide6 import QtCore, QtGui

        qp = QtGui.QPainterPath()
        qpf = lambda t: QtCore.QPointF(t[0], t[1])

        for op, data in self.path_ops():
            if op == "M":
                qp.moveTo(qpf(data))
            elif op == "C":
                c1, c2, p3 = data
                qp.cubicTo(qpf(c1), qpf(c2), qpf(p3))
            elif op == "Z":
                qp.closeSubpath()
        return qp


def _as_point(raw) -> Point:
    if isinstance(raw, dict):
        return float(raw["x"]), float(raw["y"])
    if isinstance(raw, Sequence) and len(raw) == 2:
        return float(raw[0]), float(raw[1])
    raise TypeError(f"Cannot read a point from {raw!r}")
