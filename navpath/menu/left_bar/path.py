from PySide6 import QtWidgets

from navpath.widgets import MapCanvasWidget


class PathTab(QtWidgets.QWidget):
    """
    Tab listing the stored entries of the path (role + world position) and
    a few figures about the derived curve.
    """

    def __init__(self, canvas: MapCanvasWidget, parent=None):
        super().__init__(parent)
        self._canvas = canvas

        self._list = QtWidgets.QListWidget(self)
        self._list.setUniformItemSizes(True)

        self._stats_box = QtWidgets.QGroupBox("Curve", self)
        self._stats_box.setFlat(True)
        form = QtWidgets.QFormLayout(self._stats_box)
        self._segments_label = QtWidgets.QLabel("0", self._stats_box)
        self._samples_label = QtWidgets.QLabel("0", self._stats_box)
        self._curvature_label = QtWidgets.QLabel("-", self._stats_box)
        self._loop_label = QtWidgets.QLabel("open", self._stats_box)
        form.addRow("Segments", self._segments_label)
        form.addRow("Samples", self._samples_label)
        form.addRow("Curvature", self._curvature_label)
        form.addRow("Loop", self._loop_label)

        hint = QtWidgets.QLabel(
            "Shift+click: add point\nDrag: move point\nCtrl+Z: undo\nL: close / open loop",
            self,
        )
        hint.setWordWrap(True)

        lay = QtWidgets.QVBoxLayout(self)
        lay.setContentsMargins(6, 6, 6, 6)
        lay.addWidget(self._list)
        lay.addWidget(self._stats_box)
        lay.addWidget(hint)

        self._canvas.pathChanged.connect(self.refresh)
        self._canvas.mapChanged.connect(self.refresh)
        self.refresh()

    def refresh(self):
        path = self._canvas.path
        transform = self._canvas.transform

        self._list.clear()
        world = transform.points_to_world(path.points)
        for i, (entry, (x, y)) in enumerate(zip(path.entries, world)):
            self._list.addItem(f"{i:3d}  {entry.kind.value:<6}  ({x:.2f}, {y:.2f}) m")

        self._segments_label.setText(str(len(path.segments())))
        sampled = self._canvas.sampled_path()
        self._samples_label.setText(str(len(sampled)) if sampled is not None else "0")
        krange = self._canvas.curvature_range()
        if krange is None:
            self._curvature_label.setText("-")
        else:
            self._curvature_label.setText(f"{krange[0]:.4f} .. {krange[1]:.4f} px⁻¹")
        self._loop_label.setText("closed" if path.loop_finished else "open")
