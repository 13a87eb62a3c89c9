from .normalize import normalize_xy

__all__ = ["normalize_xy"]
