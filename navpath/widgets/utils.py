from PySide6 import QtCore

from navpath.core import Point

# Qt enums accept any int, so unknown codes are looked up against real members
_KEY_NAMES = {k.value: k.name.removeprefix("Key_") for k in QtCore.Qt.Key}


def qpoint_to_point(p: QtCore.QPointF) -> Point:
    return float(p.x()), float(p.y())


def point_to_qpoint(p: Point) -> QtCore.QPointF:
    return QtCore.QPointF(p[0], p[1])


def key_name(key: int) -> str:
    """Qt key code -> settings key name ("Shift", "Control", "Z", ...); "" for unknown codes."""
    return _KEY_NAMES.get(int(key), "")
