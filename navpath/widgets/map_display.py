from typing import Optional

from PySide6 import QtCore, QtGui

from navpath.core import MapTransform
from navpath.widgets.utils import point_to_qpoint


class MapDisplayComponent(QtCore.QObject):
    """
    Background map of the canvas: the raster image fitted into the view and
    a small cross on the world origin.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._image = QtGui.QImage()

        # scaled cache
        self._scaled = QtGui.QImage()
        self._scaled_for: Optional[tuple[int, int]] = None

    # ---------- binding ----------
    @property
    def image(self) -> QtGui.QImage:
        return self._image

    def has_image(self) -> bool:
        return not self._image.isNull()

    def image_size(self) -> tuple[int, int]:
        if self._image.isNull():
            return 0, 0
        return self._image.width(), self._image.height()

    def set_image(self, image: QtGui.QImage) -> None:
        self._image = image
        self._invalidate()

    def _invalidate(self):
        self._scaled = QtGui.QImage()
        self._scaled_for = None

    # ---------- cache ----------
    def _ensure_scaled(self, size: tuple[int, int]):
        if self._scaled_for == size and not self._scaled.isNull():
            return
        w, h = max(1, size[0]), max(1, size[1])
        # nearest neighbour keeps occupancy cells crisp
        self._scaled = self._image.scaled(
            w, h,
            QtCore.Qt.AspectRatioMode.IgnoreAspectRatio,
            QtCore.Qt.TransformationMode.FastTransformation,
        )
        self._scaled_for = size

    # ---------- painting ----------
    def paint_event(self, painter: QtGui.QPainter, transform: MapTransform):
        if self._image.isNull():
            return
        size = transform.display_size
        self._ensure_scaled(size)
        painter.drawImage(QtCore.QPointF(0.0, 0.0), self._scaled)

        o = point_to_qpoint(transform.origin_display())
        painter.setPen(QtGui.QPen(QtGui.QColor(0x71, 0, 0, 0x88), 1.0))
        painter.drawLine(o + QtCore.QPointF(-5, 0), o + QtCore.QPointF(5, 0))
        painter.drawLine(o + QtCore.QPointF(0, -5), o + QtCore.QPointF(0, 5))
