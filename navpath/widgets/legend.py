from PySide6 import QtCore, QtGui

from navpath.core import LegendSpec, Point

_ALIGN = {
    "left": QtCore.Qt.AlignmentFlag.AlignLeft,
    "center": QtCore.Qt.AlignmentFlag.AlignHCenter,
    "right": QtCore.Qt.AlignmentFlag.AlignRight,
}


def paint_legend(painter: QtGui.QPainter, spec: LegendSpec, top_left: Point = (5.0, 5.0)) -> None:
    """
    Draw a curvature legend: framed box with title, color bar, radius labels
    and a scale bar.
    """
    x0, y0 = top_left
    pad = spec.padding

    painter.save()
    painter.setBrush(QtGui.QColor(255, 255, 255, 200))
    painter.setPen(QtGui.QPen(QtGui.QColor(0, 0, 0), 1.0))
    painter.drawRect(QtCore.QRectF(x0, y0, spec.width, spec.height))

    font = painter.font()
    font.setPixelSize(spec.font_size)
    painter.setFont(font)

    # title
    painter.translate(x0 + pad, y0 + pad)
    painter.drawText(
        QtCore.QRectF(0, 0, spec.length, spec.title_height),
        QtCore.Qt.AlignmentFlag.AlignCenter,
        spec.title,
    )
    painter.translate(0, spec.title_height)

    # color bar
    painter.setPen(QtCore.Qt.PenStyle.NoPen)
    for i, (_, color) in enumerate(spec.stops):
        painter.fillRect(QtCore.QRectF(i, 0, 1, spec.bar_height), color.to_QColor())

    # radius labels
    painter.setPen(QtGui.QPen(QtGui.QColor(0, 0, 0), 1.0))
    label_w = spec.length / 2.0
    for label in spec.labels:
        if label.align == "left":
            left = label.position
        elif label.align == "right":
            left = label.position - label_w
        else:
            left = label.position - label_w / 2.0
        painter.drawText(
            QtCore.QRectF(left, spec.bar_height + 4, label_w, spec.labels_height),
            _ALIGN[label.align] | QtCore.Qt.AlignmentFlag.AlignTop,
            label.text,
        )

    # scale bar
    painter.translate(0, spec.bar_height + spec.labels_height)
    px = spec.scale_bar_px
    path = QtGui.QPainterPath()
    path.moveTo(0, pad + 5)
    path.lineTo(0, pad)
    path.lineTo(px, pad)
    path.lineTo(px, pad + 5)
    painter.setBrush(QtCore.Qt.BrushStyle.NoBrush)
    painter.drawPath(path)
    painter.drawText(
        QtCore.QRectF(0, pad + 7, px, spec.font_size + 4),
        QtCore.Qt.AlignmentFlag.AlignHCenter | QtCore.Qt.AlignmentFlag.AlignTop,
        spec.scale_bar_label,
    )
    painter.restore()
