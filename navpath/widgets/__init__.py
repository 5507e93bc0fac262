from .canvas import MapCanvasWidget
from .map_display import MapDisplayComponent
from .path_display import PathDisplayComponent

__all__ = [
    "MapCanvasWidget",
    "MapDisplayComponent",
    "PathDisplayComponent",
]
