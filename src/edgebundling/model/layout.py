"""
Radial Layout Engine
====================
Cluster layout of the diagram tree on a circle.

Leaves are spread over [0, 360) degrees in tree order, every category sits at
the mean angle of its leaves and the radius grows linearly with depth: root at
the centre, categories mid-band, leaves on the inner radius. Angles follow the
usual chart convention: 0 degrees at 12 o'clock, increasing clockwise.

Classes:
    Viewport: Drawing surface size and the radii derived from it.
    RadialLayout: Result arrays of one layout pass.
    RadialLayoutEngine: The layout algorithm.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from edgebundling.config import ChartConfig
from edgebundling.model.geometry_utils import polar_to_cartesian
from edgebundling.model.hierarchy import Hierarchy, TreeNode
from edgebundling.utils import FULL_CIRCLE_DEG

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Viewport:
    """
    Size of the drawing surface.

    A zero height means "as tall as wide", like a container whose height is
    not constrained.
    """
    width: float
    height: float = 0.0

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"Viewport {name} must be a non-negative number, got {value}.")

    @property
    def diameter(self) -> float:
        return min(self.width, self.height or self.width)

    @property
    def outer_radius(self) -> float:
        return self.diameter / 2

    def inner_radius(self, config: ChartConfig) -> float:
        """Leaf ring radius: the outer radius minus the band kept for arcs and labels."""
        return max(0.0, self.outer_radius - config.inner_radius_diff)

    def arc_inner_radius(self, config: ChartConfig) -> float:
        return self.inner_radius(config) + config.arc_offset

    def arc_outer_radius(self, config: ChartConfig) -> float:
        return self.inner_radius(config) + config.arc_width + config.arc_offset


@dataclass
class RadialLayout:
    """Polar coordinates of every node, indexed by node index."""
    angles: npt.NDArray[np.float64]
    radii: npt.NDArray[np.float64]
    inner_radius: float
    leaf_slice: float

    def positions(self) -> npt.NDArray[np.float64]:
        """Cartesian (x, y) of every node, shape (n_nodes, 2)."""
        return polar_to_cartesian(self.angles, self.radii)


class RadialLayoutEngine:
    def __init__(self, config: ChartConfig | None = None):
        self.config = config or ChartConfig()

    def _separation(self, a: TreeNode, b: TreeNode) -> float:
        return 1.0 if a.parent == b.parent else self.config.group_separation

    def apply(self, hierarchy: Hierarchy, inner_radius: float) -> RadialLayout:
        """
        Lay out the tree, writing `angle`/`radius` into every node.

        Args:
            hierarchy: The diagram tree.
            inner_radius: Radius of the leaf ring.

        Returns:
            The RadialLayout arrays, in node index order.
        """
        n_nodes = len(hierarchy.nodes)
        angles = np.zeros(n_nodes, dtype=np.float64)
        radii = np.zeros(n_nodes, dtype=np.float64)
        leaves = hierarchy.leaves()

        if not leaves:
            for node in hierarchy.nodes:
                node.angle, node.radius = 0.0, 0.0
            logger.debug("Layout of an empty hierarchy.")
            return RadialLayout(angles=angles, radii=radii, inner_radius=inner_radius, leaf_slice=0.0)

        # Leaf positions in separation units, then normalised to the full circle
        x = 0.0
        previous = None
        for leaf in leaves:
            if previous is not None:
                x += self._separation(leaf, previous)
            angles[leaf.index] = x
            previous = leaf

        first, last = leaves[0], leaves[-1]
        x0 = angles[first.index] - self._separation(first, last) / 2
        x1 = angles[last.index] + self._separation(last, first) / 2
        scale = FULL_CIRCLE_DEG / (x1 - x0)
        for leaf in leaves:
            angles[leaf.index] = (angles[leaf.index] - x0) * scale

        groups = hierarchy.groups()
        for group in groups:
            angles[group.index] = float(np.mean(angles[group.children]))
        angles[hierarchy.ROOT_INDEX] = float(np.mean(angles[hierarchy.root.children]))

        max_depth = hierarchy.max_depth
        for node in hierarchy.nodes:
            radii[node.index] = inner_radius * node.depth / max_depth
            node.angle = float(angles[node.index])
            node.radius = float(radii[node.index])

        logger.debug(f"Laid out {len(leaves)} leaves in {len(groups)} groups on radius {inner_radius:.1f}.")
        return RadialLayout(angles=angles, radii=radii, inner_radius=inner_radius, leaf_slice=scale)
