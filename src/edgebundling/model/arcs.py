"""
Arc Aggregator
==============
One angular band per category group, spanning the angles of its leaves.

The raw span runs from the smallest to the largest child angle. Three
cosmetic corrections follow, in this order:

1. the first group starts a little later (`first_last_inset_deg`),
2. the last group ends a little earlier, so neither touches the seam at
   12 o'clock,
3. a start angle in the right half of the circle moves back and an end angle
   in the left half moves forward by `seam_correction_deg`, which keeps the
   arc labels (drawn along the arc) clear of their neighbours.

The corrections are tuned by eye, not derived from the geometry. They may
push the outermost arcs across the seam or neighbouring arcs into each
other on dense rings. Arcs are therefore kept within one turn and
overlapping neighbours are clamped to the midpoint between their bordering
leaves; a span that ended up inverted collapses to a point.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from edgebundling.config import ChartConfig
from edgebundling.model.hierarchy import Hierarchy
from edgebundling.utils import deg2rad

logger = logging.getLogger(__name__)


@dataclass
class Arc:
    """Angular span of one category group, in radians clockwise from 12 o'clock."""
    start_angle: float
    end_angle: float
    key: str
    color_index: int
    group: int

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle


def aggregate_arcs(hierarchy: Hierarchy, config: ChartConfig | None = None) -> list[Arc]:
    """
    Build the arcs of all depth-1 groups of a laid-out hierarchy.

    Args:
        hierarchy: Tree whose nodes already carry layout angles.
        config: Chart constants (insets, palette size).

    Returns:
        One Arc per group, in group order.
    """
    config = config or ChartConfig()
    groups = [g for g in hierarchy.groups() if g.children]
    if not groups:
        return []

    inset = deg2rad(config.first_last_inset_deg)
    seam = deg2rad(config.seam_correction_deg)
    n_colors = len(config.color_set)

    arcs: list[Arc] = []
    raw_spans: list[tuple[float, float]] = []
    for i, group in enumerate(groups):
        child_angles = [hierarchy.nodes[c].angle for c in group.children]
        if any(a is None for a in child_angles):
            raise ValueError(f"Group '{group.key}' has children without a layout angle.")

        start = deg2rad(min(child_angles))
        end = deg2rad(max(child_angles))
        raw_spans.append((start, end))

        if i == 0:
            start += inset
        if i == len(groups) - 1:
            end -= inset

        if start < math.pi:
            start -= seam
        if end > math.pi:
            end += seam

        arcs.append(Arc(start_angle=start, end_angle=end, key=group.key,
                        color_index=i % n_colors, group=group.index))

    # The seam at 12 o'clock is never crossed
    arcs[0].start_angle = max(arcs[0].start_angle, 0.0)
    arcs[-1].end_angle = min(arcs[-1].end_angle, 2 * math.pi)

    # Neighbours pushed into each other meet halfway between their leaves
    for i in range(len(arcs) - 1):
        left, right = arcs[i], arcs[i + 1]
        if left.end_angle > right.start_angle:
            middle = (raw_spans[i][1] + raw_spans[i + 1][0]) / 2
            logger.debug(f"Arcs '{left.key}' and '{right.key}' overlap, clamped at {middle:.4f} rad.")
            left.end_angle = min(left.end_angle, middle)
            right.start_angle = max(right.start_angle, middle)

    for arc in arcs:
        if arc.start_angle > arc.end_angle:
            arc.start_angle = arc.end_angle = (arc.start_angle + arc.end_angle) / 2

    return arcs
