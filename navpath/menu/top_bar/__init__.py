from .bar import Bar

__all__ = ["Bar"]
