import logging

from PySide6 import QtCore, QtWidgets

from navpath.core.storage import export_sampled_path, load_path_file, save_path_file
from navpath.widgets import MapCanvasWidget

logger = logging.getLogger(__name__)

_JSON_FILTER = "JSON files (*.json);;All files (*)"
_IMAGE_FILTER = "Map images (*.pgm *.png *.jpg *.bmp);;All files (*)"
_YAML_FILTER = "Map yaml (*.yaml *.yml);;All files (*)"


class Bar(QtWidgets.QToolBar):
    def __init__(self, canvas: MapCanvasWidget):
        super().__init__()

        self.canvas = canvas
        self.setObjectName("Bar")
        self.setMovable(False)
        self.setFloatable(False)
        self.setIconSize(QtCore.QSize(18, 18))

        self.map_button = QtWidgets.QPushButton("open map")
        self.map_yaml_button = QtWidgets.QPushButton("open map yaml")
        self.load_button = QtWidgets.QPushButton("load path")
        self.save_button = QtWidgets.QPushButton("save path")
        self.export_button = QtWidgets.QPushButton("export samples")
        self.loop_button = QtWidgets.QPushButton("close loop")
        self.reset_button = QtWidgets.QPushButton("reset")
        self.nav_path_box = QtWidgets.QCheckBox("nav_msgs/Path")

        for w in (self.map_button, self.map_yaml_button, self.load_button, self.save_button,
                  self.export_button, self.nav_path_box, self.loop_button, self.reset_button):
            self.addWidget(w)

        self.map_button.clicked.connect(self._open_map)
        self.map_yaml_button.clicked.connect(self._open_map_yaml)
        self.load_button.clicked.connect(self._load_path)
        self.save_button.clicked.connect(self._save_path)
        self.export_button.clicked.connect(self._export_samples)
        self.loop_button.clicked.connect(self._toggle_loop)
        self.reset_button.clicked.connect(self._reset_path)
        self.canvas.pathChanged.connect(self.refresh)

    def refresh(self):
        self.loop_button.setText("open loop" if self.canvas.path.loop_finished else "close loop")

    def _report(self, title: str, err: Exception):
        logger.error("%s: %s", title, err)
        QtWidgets.QMessageBox.warning(self, title, str(err))

    @QtCore.Slot()
    def _open_map(self):
        filename, _ = QtWidgets.QFileDialog.getOpenFileName(self, "Open map", "", _IMAGE_FILTER)
        if not filename:
            return
        if not self.canvas.load_map(filename):
            QtWidgets.QMessageBox.warning(self, "Open map", f"Could not read {filename}")

    @QtCore.Slot()
    def _open_map_yaml(self):
        filename, _ = QtWidgets.QFileDialog.getOpenFileName(self, "Open map yaml", "", _YAML_FILTER)
        if not filename:
            return
        try:
            if not self.canvas.load_map_yaml(filename):
                QtWidgets.QMessageBox.warning(self, "Open map yaml", f"Could not read the image of {filename}")
        except (OSError, ValueError) as err:
            self._report("Open map yaml", err)

    @QtCore.Slot()
    def _load_path(self):
        filename, _ = QtWidgets.QFileDialog.getOpenFileName(self, "Load path", "", _JSON_FILTER)
        if not filename:
            return
        try:
            self.canvas.load_record(load_path_file(filename))
        except (OSError, ValueError) as err:
            self._report("Load path", err)

    @QtCore.Slot()
    def _save_path(self):
        filename, _ = QtWidgets.QFileDialog.getSaveFileName(self, "Save path", "path.json", _JSON_FILTER)
        if not filename:
            return
        try:
            save_path_file(filename, self.canvas.save_record())
        except OSError as err:
            self._report("Save path", err)

    @QtCore.Slot()
    def _export_samples(self):
        sampled = self.canvas.sampled_path()
        if sampled is None:
            QtWidgets.QMessageBox.information(self, "Export samples", "The path needs at least 4 points.")
            return
        filename, _ = QtWidgets.QFileDialog.getSaveFileName(self, "Export samples", "samples.json", _JSON_FILTER)
        if not filename:
            return
        try:
            export_sampled_path(filename, sampled, nav_path=self.nav_path_box.isChecked())
        except OSError as err:
            self._report("Export samples", err)

    @QtCore.Slot()
    def _toggle_loop(self):
        self.canvas.toggle_loop()

    @QtCore.Slot()
    def _reset_path(self):
        self.canvas.reset()
