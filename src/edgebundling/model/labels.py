"""Label placement for leaves and category arcs."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Sequence

from edgebundling.config import ChartConfig
from edgebundling.model.arcs import Arc
from edgebundling.model.geometry_primitives import Point, PolarPoint
from edgebundling.model.hierarchy import Hierarchy
from edgebundling.utils import rad2deg


@dataclass(frozen=True)
class LeafLabel:
    """
    Radial leaf label.

    `rotation` is clockwise in degrees (SVG convention). Labels on the left
    half of the circle are flipped so they read left-to-right and are anchored
    at their end. `dx` is the extra shift along the text baseline that clears
    the arc band; `text_position` is the anchor point with that shift applied.
    """
    leaf: int
    text: str
    angle: float
    rotation: float
    position: Point
    text_position: Point
    flipped: bool
    anchor: str
    dx: float


def leaf_labels(hierarchy: Hierarchy, config: ChartConfig) -> list[LeafLabel]:
    labels = []
    for leaf in hierarchy.leaves():
        if leaf.angle is None or leaf.radius is None:
            raise ValueError("Hierarchy must be laid out before placing labels.")
        flipped = leaf.angle >= 180
        labels.append(LeafLabel(
            leaf=leaf.index,
            text=leaf.key,
            angle=leaf.angle,
            rotation=leaf.angle - 90,
            position=PolarPoint(leaf.angle, leaf.radius + config.label_offset).to_cartesian(),
            text_position=PolarPoint(leaf.angle, leaf.radius + config.label_offset + config.arc_width).to_cartesian(),
            flipped=flipped,
            anchor="end" if flipped else "start",
            dx=-config.arc_width if flipped else config.arc_width,
        ))
    return labels


def arc_label_fits(arc: Arc, inner_radius: float, text_width: float, padding: float) -> bool:
    """True when the arc is longer (measured on the inner radius) than the padded label."""
    arc_length = math.pi * inner_radius / 180 * rad2deg(arc.span)
    return arc_length > text_width + padding * 2


def arc_label_visibility(
    arcs: Sequence[Arc],
    inner_radius: float,
    measure: Callable[[str], float],
    config: ChartConfig
) -> list[bool]:
    """
    Decide which arc labels are shown.

    Args:
        arcs: Arcs of the diagram.
        inner_radius: Leaf ring radius.
        measure: Renderer callback returning the drawn width of a label text.
        config: Supplies the label padding.
    """
    return [arc_label_fits(arc, inner_radius, measure(arc.key), config.arc_labels_padding) for arc in arcs]
