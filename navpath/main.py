import logging
import os
import sys

from PySide6 import QtCore, QtWidgets

from navpath.core import load_settings
from navpath.menu import Bar, MenuBar
from navpath.widgets import MapCanvasWidget

logger = logging.getLogger(__name__)


class MainWidget(QtWidgets.QWidget):
    def __init__(self, settings_path: str):
        super().__init__()

        self.main_layout = QtWidgets.QHBoxLayout()
        self.layout = QtWidgets.QVBoxLayout(self)

        self.canvas = MapCanvasWidget(settings=load_settings(settings_path), parent=self)
        self.menu_bar = MenuBar(self.canvas, self)
        self.top_bar = Bar(self.canvas)

        self.main_layout.addWidget(self.menu_bar)
        self.main_layout.addWidget(self.canvas, stretch=1)
        self.layout.addWidget(self.top_bar, alignment=QtCore.Qt.AlignmentFlag.AlignTop)
        self.layout.addLayout(self.main_layout)


def main():
    logging.basicConfig(
        level=os.environ.get("NAVPATH_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QtWidgets.QApplication(sys.argv)

    widget = MainWidget(os.environ.get("NAVPATH_SETTINGS", "navpath.json"))
    widget.setWindowTitle("navpath")
    widget.resize(1100, 700)
    widget.show()
    logger.debug("Editor window shown")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
