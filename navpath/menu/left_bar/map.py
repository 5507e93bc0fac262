from PySide6 import QtWidgets, QtCore

from navpath.widgets import MapCanvasWidget


class MapTab(QtWidgets.QWidget):
    """Map metadata (resolution, origin) and the export spacing."""

    def __init__(self, canvas: MapCanvasWidget, parent=None):
        super().__init__(parent)
        self._canvas = canvas

        self._resolution = self._spin(0.001, 100.0, 4, canvas.resolution)
        self._origin_x = self._spin(-1e6, 1e6, 2, canvas.origin[0])
        self._origin_y = self._spin(-1e6, 1e6, 2, canvas.origin[1])
        self._spacing = self._spin(0.001, 100.0, 3, canvas.settings.sample_distance)

        form = QtWidgets.QFormLayout(self)
        form.setContentsMargins(6, 6, 6, 6)
        form.addRow("Resolution (m/px)", self._resolution)
        form.addRow("Origin x (px)", self._origin_x)
        form.addRow("Origin y (px)", self._origin_y)
        form.addRow("Sample spacing (m)", self._spacing)

        self._resolution.valueChanged.connect(self._apply_metadata)
        self._origin_x.valueChanged.connect(self._apply_metadata)
        self._origin_y.valueChanged.connect(self._apply_metadata)
        self._spacing.valueChanged.connect(self._apply_spacing)
        self._canvas.mapChanged.connect(self._sync)

    def _spin(self, lo: float, hi: float, decimals: int, value: float) -> QtWidgets.QDoubleSpinBox:
        box = QtWidgets.QDoubleSpinBox(self)
        box.setRange(lo, hi)
        box.setDecimals(decimals)
        box.setSingleStep(10 ** -decimals * 10)
        box.setValue(value)
        return box

    @QtCore.Slot()
    def _sync(self):
        # metadata may come from a map yaml
        for box, value in ((self._resolution, self._canvas.resolution),
                           (self._origin_x, self._canvas.origin[0]),
                           (self._origin_y, self._canvas.origin[1])):
            box.blockSignals(True)
            box.setValue(value)
            box.blockSignals(False)

    @QtCore.Slot()
    def _apply_metadata(self):
        self._canvas.set_map_metadata(
            self._resolution.value(),
            (self._origin_x.value(), self._origin_y.value()),
        )

    @QtCore.Slot()
    def _apply_spacing(self):
        self._canvas.set_sample_distance(self._spacing.value())
