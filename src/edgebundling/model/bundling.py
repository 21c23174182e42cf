"""
Bundling Geometry
=================
Routes every link through the tree: from the source leaf up to the lowest
common ancestor and down to the target leaf. The nodes on that route form the
control polygon, which is straightened according to the tension and then
drawn as a uniform cubic B-spline.

Tension 1 pulls the curve fully through the ancestors (maximal bundling),
tension 0 degenerates it to the straight chord between the two leaves.

Classes:
    BundledLink: A link together with its control polygon and curve.
    TensionControl: Maps drag gestures on the tension slider to a tension.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

import numpy as np

from edgebundling.model.geometry_utils import (
    polar_to_cartesian, straighten, basis_bezier_segments, sample_bezier_segments, bezier_path_data
)
from edgebundling.model.hierarchy import Hierarchy
from edgebundling.model.links import Link
from edgebundling.utils import clamp

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def clamp_tension(value: float) -> float:
    """Clamp a tension to [0, 1]; NaN is rejected."""
    value = float(value)
    if math.isnan(value):
        raise ValueError("Tension must be a number, got NaN.")
    return clamp(value, 0.0, 1.0)


def bundle_path(hierarchy: Hierarchy, link: Link) -> list[int]:
    """
    Node indices from the link source up to the lowest common ancestor and
    down to the link target, both ends included.
    """
    up = hierarchy.ancestors(link.source)
    down = hierarchy.ancestors(link.target)
    down_positions = {index: i for i, index in enumerate(down)}

    for i, index in enumerate(up):
        if index in down_positions:
            return up[:i + 1] + down[:down_positions[index]][::-1]

    raise ValueError(f"Nodes {link.source} and {link.target} do not share a root.")


@dataclass
class BundledLink:
    link: Link
    path: tuple[int, ...]
    control_points: npt.NDArray[np.float64]
    segments: npt.NDArray[np.float64]
    polyline: npt.NDArray[np.float64]

    @property
    def source(self) -> int:
        return self.link.source

    @property
    def target(self) -> int:
        return self.link.target

    @property
    def path_data(self) -> str:
        return bezier_path_data(self.segments)


def bundle_link(
    hierarchy: Hierarchy,
    link: Link,
    tension: float,
    points_per_segment: int = 8
) -> BundledLink:
    path = bundle_path(hierarchy, link)
    nodes = [hierarchy.nodes[i] for i in path]
    if any(n.angle is None or n.radius is None for n in nodes):
        raise ValueError("Hierarchy must be laid out before bundling links.")

    polygon = polar_to_cartesian([n.angle for n in nodes], [n.radius for n in nodes])
    control_points = straighten(polygon, tension)
    segments = basis_bezier_segments(control_points)
    return BundledLink(
        link=link,
        path=tuple(path),
        control_points=control_points,
        segments=segments,
        polyline=sample_bezier_segments(segments, points_per_segment),
    )


def bundle_links(
    hierarchy: Hierarchy,
    links: Iterable[Link],
    tension: float,
    points_per_segment: int = 8
) -> list[BundledLink]:
    """
    Bundle every link of a laid-out hierarchy.

    Args:
        hierarchy: Tree with layout angles and radii.
        links: Resolved links.
        tension: Bundling strength; clamped to [0, 1].
        points_per_segment: Polyline resolution of each Bezier segment.

    Returns:
        One BundledLink per input link, in input order.
    """
    tension = clamp_tension(tension)
    bundled = [bundle_link(hierarchy, link, tension, points_per_segment) for link in links]
    logger.debug(f"Bundled {len(bundled)} links with tension {tension:.3f}.")
    return bundled


@dataclass(frozen=True)
class TensionControl:
    """
    Horizontal slider drawn in the top right quadrant of the diagram.

    The track runs from half the outer radius to 20 units short of it; the
    handle position maps linearly onto tension 0..1.
    """
    outer_radius: float

    TRACK_END_MARGIN = 20.0

    @property
    def track_start(self) -> float:
        return self.outer_radius / 2

    @property
    def track_end(self) -> float:
        return self.outer_radius - self.TRACK_END_MARGIN

    def handle_x(self, tension: float) -> float:
        return self.track_start + clamp_tension(tension) * (self.track_end - self.track_start)

    def drag(self, tension: float, dx: float) -> float:
        """Tension after moving the handle by `dx`; the handle never leaves the track."""
        x1, x2 = self.track_start, self.track_end
        if x2 <= x1:
            logger.debug("Tension track is too short to drag on, tension unchanged.")
            return clamp_tension(tension)
        x = clamp(self.handle_x(tension) + dx, x1, x2)
        return clamp_tension((x - x1) / (x2 - x1))
