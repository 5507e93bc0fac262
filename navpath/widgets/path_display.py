from typing import Optional

from PySide6 import QtCore, QtGui

from navpath.core import CoordinateTransform, CurvatureColoring, PathEditor, SampledPath, Segment
from navpath.core.math import mirror
from navpath.widgets.legend import paint_legend
from navpath.widgets.utils import point_to_qpoint


class PathDisplayComponent(QtCore.QObject):
    """
    Renders the edited path: curvature colored curve, the segment being
    built up to the cursor, handles, control points, the sampled preview
    and the curvature legend.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._point_radius = 4.0
        self.show_samples = True
        self.show_legend = True

    # ---------- pieces ----------
    def _draw_colored_segment(self, painter, seg: Segment, coloring, pieces: int):
        pen = QtGui.QPen()
        pen.setWidthF(3.0)
        pen.setCapStyle(QtCore.Qt.PenCapStyle.RoundCap)
        prev = point_to_qpoint(seg.p0)
        for i in range(1, pieces + 1):
            t = i / pieces
            pt = point_to_qpoint(seg.point_at(t))
            pen.setColor(coloring(t, seg.p0, seg.p1, seg.p2, seg.p3).to_QColor())
            painter.setPen(pen)
            painter.drawLine(prev, pt)
            prev = pt

    def _draw_spline(self, painter, editor: PathEditor, coloring: Optional[CurvatureColoring]):
        path = editor.path
        # dark underlay so the colored stroke reads on any map
        painter.setPen(QtGui.QPen(QtGui.QColor(0, 0, 0, 60), 5.0))
        painter.drawPath(path.make_qpath())
        if coloring is None:
            return
        fn = coloring.get_coloring()
        for seg in path.segments():
            self._draw_colored_segment(painter, seg, fn, coloring.sampling)

    def _draw_pending(self, painter, editor: PathEditor):
        path = editor.path
        cursor = editor.cursor
        if cursor is None or path.loop_finished or len(path) == 0:
            return
        pts = path.tail() + [cursor]
        qp = QtGui.QPainterPath(point_to_qpoint(pts[0]))
        if len(path) >= 4 and len(pts) == 3:
            # next segment: mirrored exit of the last segment, stored handle, cursor
            last = path.segments()[-1]
            qp.cubicTo(point_to_qpoint(mirror(last.p2, last.p3)), point_to_qpoint(pts[1]), point_to_qpoint(pts[2]))
        elif len(pts) == 2:
            qp.lineTo(point_to_qpoint(pts[1]))
        elif len(pts) == 3:
            qp.quadTo(point_to_qpoint(pts[1]), point_to_qpoint(pts[2]))
        elif len(pts) == 4:
            qp.cubicTo(point_to_qpoint(pts[1]), point_to_qpoint(pts[2]), point_to_qpoint(pts[3]))
        painter.setPen(QtGui.QPen(QtGui.QColor(211, 211, 211), 1.0))
        painter.setBrush(QtCore.Qt.BrushStyle.NoBrush)
        painter.drawPath(qp)

    def _draw_handles(self, painter, editor: PathEditor):
        painter.setPen(QtGui.QPen(QtGui.QColor(128, 128, 128, 160), 1.0, QtCore.Qt.PenStyle.DashLine))
        for seg in editor.path.segments():
            painter.drawLine(point_to_qpoint(seg.p0), point_to_qpoint(seg.p1))
            painter.drawLine(point_to_qpoint(seg.p3), point_to_qpoint(seg.p2))

    def _draw_control(self, painter, editor: PathEditor):
        r = self._point_radius
        for i, entry in enumerate(editor.path.entries):
            x, y = entry.position
            rect = QtCore.QRectF(x - r, y - r, 2 * r, 2 * r)
            highlight = i == editor.drag_index
            painter.setPen(QtGui.QPen(QtGui.QColor(200, 0, 0) if highlight else QtGui.QColor(128, 128, 128), 1.0))
            if entry.is_anchor:
                painter.setBrush(QtGui.QColor(255, 255, 255, 230))
            else:
                painter.setBrush(QtCore.Qt.BrushStyle.NoBrush)
            painter.drawEllipse(rect)

    def _draw_samples(self, painter, sampled: Optional[SampledPath]):
        if sampled is None or len(sampled) < 2:
            return
        poly = QtGui.QPolygonF([point_to_qpoint(p) for p in sampled.display_points()])
        painter.setPen(QtGui.QPen(QtGui.QColor(0, 0, 255, 160), 1.0))
        painter.drawPolyline(poly)

    # ---------- painting ----------
    def paint_event(self,
                    painter: QtGui.QPainter,
                    editor: PathEditor,
                    transform: CoordinateTransform,
                    sampled: Optional[SampledPath] = None):
        path = editor.path
        if len(path) == 0 and editor.cursor is None:
            return

        segs = path.segments()
        coloring: Optional[CurvatureColoring] = None
        if segs:
            coloring = CurvatureColoring.from_segments(segs, editor.settings.curvature_sampling)

        self._draw_spline(painter, editor, coloring)
        self._draw_pending(painter, editor)
        self._draw_handles(painter, editor)
        if self.show_samples:
            self._draw_samples(painter, sampled)
        self._draw_control(painter, editor)

        if coloring is not None and self.show_legend:
            spec = coloring.legend(transform.to_world_scalar, editor.settings.legend_length)
            paint_legend(painter, spec)
