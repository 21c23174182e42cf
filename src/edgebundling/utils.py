from math import pi

FULL_CIRCLE_DEG = 360.0


def deg2rad(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * pi / 180


def rad2deg(radians: float) -> float:
    """Convert radians to degrees."""
    return radians * 180 / pi


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))
