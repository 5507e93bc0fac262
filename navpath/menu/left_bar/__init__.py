from PySide6 import QtWidgets

from navpath.menu.left_bar.map import MapTab
from navpath.menu.left_bar.path import PathTab
from navpath.widgets import MapCanvasWidget


class MenuBar(QtWidgets.QTabWidget):
    """
    Simple tabbed side menu:
      - Path: stored points and curve figures.
      - Map: map metadata and export spacing.
    """

    def __init__(self, canvas: MapCanvasWidget, parent=None):
        super().__init__(parent)

        self._canvas = canvas
        self._path_tab = PathTab(self._canvas, self)
        self._map_tab = MapTab(self._canvas, self)

        self.addTab(self._path_tab, "Path")
        self.addTab(self._map_tab, "Map")
        self.setMinimumWidth(260)


__all__ = [
    "MenuBar",
    "MapTab",
    "PathTab",
]
