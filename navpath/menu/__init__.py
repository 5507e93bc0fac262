from .left_bar import MenuBar
from .top_bar import Bar

__all__ = [
    "Bar",
    "MenuBar",
]
