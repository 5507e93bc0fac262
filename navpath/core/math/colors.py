from dataclasses import dataclass
from typing import TYPE_CHECKING

from .utils import hsl_to_hsv_255

if TYPE_CHECKING:
    from PySide6.QtGui import QColor


@dataclass(frozen=True)
class Color:
    """
    Pure-theory color container (HSV + alpha), using the same integer ranges
    as Qt for easy bridging:
      - h: 0..359, or -1 if undefined (achromatic)
      - s, v, a: 0..255
    """
    h: int
    s: int
    v: int
    a: int = 255

    @staticmethod
    def from_hsl(h: float, s: float, l: float, a: int = 255) -> "Color":
        """h in degrees, s and l in [0,1]."""
        hh, ss, vv = hsl_to_hsv_255(h, s, l)
        return Color(h=hh, s=ss, v=vv, a=a)

    def to_QColor(self) -> "QColor":
        from PySide6.QtGui import QColor
        return QColor.fromHsv(self.h, self.s, self.v, self.a)
