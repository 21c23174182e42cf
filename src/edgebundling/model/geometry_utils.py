from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy import typing as npt

# Uniform cubic B-spline to Bezier conversion weights
BASIS_BEZIER1 = np.array([0.0, 2.0 / 3.0, 1.0 / 3.0, 0.0])
BASIS_BEZIER2 = np.array([0.0, 1.0 / 3.0, 2.0 / 3.0, 0.0])
BASIS_BEZIER3 = np.array([0.0, 1.0 / 6.0, 2.0 / 3.0, 1.0 / 6.0])


def polar_to_cartesian(
    angles: npt.ArrayLike,
    radii: npt.ArrayLike
) -> npt.NDArray[np.float64]:
    """
    Convert polar coordinates to screen coordinates.

    Args:
        angles: Angles in degrees, clockwise from 12 o'clock.
        radii: Distances from the centre.

    Returns:
        Array of shape (n, 2) with (x, y) pairs; y grows downwards (SVG convention).
    """
    a = np.radians(np.asarray(angles, dtype=np.float64))
    r = np.asarray(radii, dtype=np.float64)
    return np.column_stack((r * np.sin(a), -r * np.cos(a)))


def straighten(
    points: npt.ArrayLike,
    tension: float
) -> npt.NDArray[np.float64]:
    """
    Pull a control polygon towards the chord between its end points.

    Each point i of n+1 points is blended with the point at t = i/n on the
    chord: p' = tension * p + (1 - tension) * chord(t). Tension 1 keeps the
    polygon, tension 0 flattens it onto the chord.

    Args:
        points: Control polygon of shape (n+1, 2).
        tension: Blend factor in [0, 1].

    Returns:
        The straightened polygon (a new array).
    """
    pts = np.array(points, dtype=np.float64)
    n = len(pts) - 1
    if n <= 0:
        return pts
    t = np.arange(n + 1, dtype=np.float64)[:, None] / n
    chord = pts[0] + t * (pts[n] - pts[0])
    return tension * pts + (1.0 - tension) * chord


def _line_as_cubic(a: npt.NDArray[np.float64], b: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    return np.array([a, a + (b - a) / 3.0, a + 2.0 * (b - a) / 3.0, b])


def basis_bezier_segments(points: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """
    Cubic Bezier segments of the uniform B-spline through a control polygon.

    The spline is anchored at both end points: it starts with a straight piece
    from the first control point and ends with one into the last control point.
    Polygons of fewer than three points are drawn as straight lines.

    Args:
        points: Control polygon of shape (n, 2).

    Returns:
        Array of shape (k, 4, 2): start, two control points and end of every
        segment, straight pieces included as degenerate cubics.
    """
    pts = np.asarray(points, dtype=np.float64)
    n = len(pts)
    if n == 0:
        return np.empty((0, 4, 2))
    if n == 1:
        return _line_as_cubic(pts[0], pts[0])[None]
    if n == 2:
        return _line_as_cubic(pts[0], pts[1])[None]

    # Triple the first and double the last control point
    padded = np.vstack((pts[:1], pts[:1], pts))
    padded = np.vstack((padded, pts[-1:]))

    windows = np.stack([padded[k:k + 4] for k in range(n)])       # (n, 4, 2)
    ends = np.einsum("j,kjd->kd", BASIS_BEZIER3, windows)           # (n, 2)
    c1 = np.einsum("j,kjd->kd", BASIS_BEZIER1, windows[1:])
    c2 = np.einsum("j,kjd->kd", BASIS_BEZIER2, windows[1:])

    curves = np.stack((ends[:-1], c1, c2, ends[1:]), axis=1)        # (n-1, 4, 2)
    head = _line_as_cubic(pts[0], ends[0])[None]
    tail = _line_as_cubic(ends[-1], pts[-1])[None]
    return np.concatenate((head, curves, tail))


def sample_bezier_segments(
    segments: npt.NDArray[np.float64],
    points_per_segment: int = 8
) -> npt.NDArray[np.float64]:
    """
    Evaluate cubic Bezier segments into a polyline.

    Args:
        segments: Array of shape (k, 4, 2) as returned by `basis_bezier_segments`.
        points_per_segment: Samples per segment, end point included.

    Returns:
        Array of shape (k * points_per_segment + 1, 2); consecutive segments
        share their joint, which appears once.
    """
    if len(segments) == 0:
        return np.empty((0, 2))
    if points_per_segment < 1:
        raise ValueError("points_per_segment must be at least 1.")

    t = np.linspace(0.0, 1.0, points_per_segment + 1)[1:, None]
    mt = 1.0 - t
    samples = [segments[0, 0][None]]
    for p0, p1, p2, p3 in segments:
        samples.append(mt ** 3 * p0 + 3 * mt ** 2 * t * p1 + 3 * mt * t ** 2 * p2 + t ** 3 * p3)
    return np.vstack(samples)


def bezier_path_data(segments: npt.NDArray[np.float64], precision: int = 2) -> str:
    """SVG path data ("M ... C ...") for a chain of cubic segments."""
    if len(segments) == 0:
        return ""

    def fmt(p: npt.NDArray[np.float64]) -> str:
        return f"{p[0]:.{precision}f},{p[1]:.{precision}f}"

    parts = [f"M{fmt(segments[0, 0])}"]
    parts.extend(f"C{fmt(s[1])} {fmt(s[2])} {fmt(s[3])}" for s in segments)
    return "".join(parts)
