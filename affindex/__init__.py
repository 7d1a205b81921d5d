from .parser import AffParser

__all__ = [
    "AffParser"
]
