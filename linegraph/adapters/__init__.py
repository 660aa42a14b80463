from .normalize import normalize_points, normalize_values

__all__ = ["normalize_points", "normalize_values"]
