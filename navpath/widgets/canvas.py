import logging
from typing import Optional

from PySide6 import QtCore, QtGui, QtWidgets

from navpath.core import (
    CurvatureColoring,
    EditorSettings,
    KeyState,
    MapTransform,
    Modifiers,
    PathEditor,
    PathState,
    Point,
    SampledPath,
    as_path,
    sample_distance_for,
)
from navpath.core.storage import read_map_yaml
from navpath.widgets.map_display import MapDisplayComponent
from navpath.widgets.path_display import PathDisplayComponent
from navpath.widgets.utils import key_name, qpoint_to_point

logger = logging.getLogger(__name__)


class MapCanvasWidget(QtWidgets.QWidget):
    """
    View/controller for one path drawn over a map.
    Translates Qt mouse/key events into PathEditor transitions and repaints
    on a fixed-rate tick whenever the editor reports changes.
    """

    pathChanged = QtCore.Signal()   # the path or its sampling changed (not emitted for cursor moves)
    mapChanged = QtCore.Signal()    # emitted when the image or its metadata changes

    def __init__(self, settings: Optional[EditorSettings] = None, parent=None):
        super().__init__(parent)

        # model
        self._settings = settings or EditorSettings()
        self._editor = PathEditor(settings=self._settings)
        self._seen_revision = self._editor.revision
        self._keys = KeyState()
        self._resolution = self._settings.resolution
        self._origin: Point = self._settings.origin

        # display components
        self.map_dc = MapDisplayComponent(self)
        self.path_dc = PathDisplayComponent(self)
        self._transform = self._compute_transform()

        self.setMouseTracking(True)
        self.setFocusPolicy(QtCore.Qt.FocusPolicy.StrongFocus)

        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(self._settings.render_interval_ms)
        self._timer.timeout.connect(self._on_tick)
        self._timer.start()

    # --- public API -------------------------
    @property
    def editor(self) -> PathEditor:
        return self._editor

    @property
    def path(self) -> PathState:
        return self._editor.path

    @property
    def settings(self) -> EditorSettings:
        return self._settings

    @property
    def transform(self) -> MapTransform:
        return self._transform

    @property
    def resolution(self) -> float:
        return self._resolution

    @property
    def origin(self) -> Point:
        return self._origin

    def load_map(self, filename: str) -> bool:
        image = QtGui.QImage(filename)
        if image.isNull():
            logger.error("Could not read map image %s", filename)
            return False
        self._change_mapping(lambda: self.map_dc.set_image(image))
        logger.info("Loaded map %s (%dx%d)", filename, image.width(), image.height())
        return True

    def load_map_yaml(self, filename: str) -> bool:
        """
        Load a map_server yaml: the image it references plus its resolution
        and origin, as one mapping change. Malformed yaml raises ValueError.
        """
        meta = read_map_yaml(filename)
        image = QtGui.QImage(meta.image)
        if image.isNull():
            logger.error("Could not read map image %s referenced by %s", meta.image, filename)
            return False

        def _apply():
            self.map_dc.set_image(image)
            self._resolution = meta.resolution
            self._origin = meta.origin
        self._change_mapping(_apply)
        logger.info("Loaded map %s from %s", meta.image, filename)
        return True

    def set_map_metadata(self, resolution: float, origin: Point) -> None:
        if resolution <= 0:
            raise ValueError(f"resolution must be positive, got {resolution}")

        def _apply():
            self._resolution = float(resolution)
            self._origin = (float(origin[0]), float(origin[1]))
        self._change_mapping(_apply)

    def set_sample_distance(self, distance: float) -> None:
        if distance <= 0:
            raise ValueError(f"sample distance must be positive, got {distance}")
        self._settings.sample_distance = float(distance)
        self._editor.mark_dirty()
        self.pathChanged.emit()

    def save_record(self) -> dict:
        return self._editor.save(self._transform)

    def load_record(self, record: dict) -> bool:
        return self._editor.load(record, self._transform)

    def sampled_path(self) -> Optional[SampledPath]:
        spacing = sample_distance_for(self._settings.sample_distance, self._transform)
        return as_path(self._editor.path, self._transform, spacing)

    def curvature_range(self) -> Optional[tuple[float, float]]:
        segs = self._editor.path.segments()
        if not segs:
            return None
        coloring = CurvatureColoring.from_segments(segs, self._settings.curvature_sampling)
        return coloring.kmin, coloring.kmax

    def toggle_loop(self) -> bool:
        return self._editor.toggle_loop()

    def reset(self) -> None:
        self._editor.clear()

    # --- mapping ----------------------------
    def _compute_transform(self) -> MapTransform:
        return MapTransform.fit(self.map_dc.image_size(), (self.width(), self.height()), self._resolution, self._origin)

    def _change_mapping(self, change) -> None:
        """Apply a change of the display mapping without moving the path in world units."""
        snap = self._editor.snapshot(self._transform)
        try:
            change()
            self._transform = self._compute_transform()
        finally:
            self._editor.restore(snap, self._transform)
        self.mapChanged.emit()

    def _modifiers(self) -> Modifiers:
        return self._keys.modifiers(self._settings)

    # --- ticking ----------------------------
    def _on_tick(self):
        if not self._editor.clear_dirty():
            return
        self.update()
        if self._editor.revision != self._seen_revision:
            self._seen_revision = self._editor.revision
            self.pathChanged.emit()

    # --- Qt events --------------------------
    def sizeHint(self):
        return QtCore.QSize(800, 600)

    def minimumSizeHint(self):
        return QtCore.QSize(200, 200)

    def resizeEvent(self, event: QtGui.QResizeEvent):
        self._change_mapping(lambda: None)
        super().resizeEvent(event)

    def mousePressEvent(self, e: QtGui.QMouseEvent):
        if e.button() != QtCore.Qt.MouseButton.LeftButton:
            return
        self._editor.pointer_down(qpoint_to_point(e.position()), self._modifiers())

    def mouseMoveEvent(self, e: QtGui.QMouseEvent):
        self._editor.pointer_move(qpoint_to_point(e.position()), self._modifiers())

    def mouseReleaseEvent(self, e: QtGui.QMouseEvent):
        if e.button() == QtCore.Qt.MouseButton.LeftButton:
            self._editor.pointer_up()

    def leaveEvent(self, event):
        self._editor.pointer_leave()
        super().leaveEvent(event)

    def keyPressEvent(self, e: QtGui.QKeyEvent):
        name = key_name(e.key())
        self._keys.press(name)
        if e.isAutoRepeat():
            return
        if name == self._settings.undo_key:
            self._editor.undo(self._modifiers())
        elif name == self._settings.loop_key:
            self._editor.toggle_loop()
        self._editor.mark_dirty()

    def keyReleaseEvent(self, e: QtGui.QKeyEvent):
        if e.isAutoRepeat():
            return
        self._keys.release(key_name(e.key()))
        self._editor.mark_dirty()

    def focusOutEvent(self, event):
        self._keys.clear()
        super().focusOutEvent(event)

    # --- painting ---------------------------
    def paintEvent(self, event):
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing, True)

        self.map_dc.paint_event(painter, self._transform)
        self.path_dc.paint_event(painter, self._editor, self._transform, self.sampled_path())
        painter.end()
