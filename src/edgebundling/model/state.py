"""
Diagram State (Data Model)
==========================
This module defines the authoritative inputs of a diagram and the pure
function deriving everything drawable from them.

Why is this file needed?
------------------------
1. State Management: The records, viewport, tension and focused leaf are kept
   in one immutable DiagramState. Nothing derived from them is cached.
2. Recompute: `build_geometry` runs the whole pipeline (hierarchy, layout,
   links, bundles, arcs, labels, highlight) from scratch, so a resize or a
   tension change can never draw stale geometry.
3. Decoupling: Views only read DiagramGeometry; the app Store writes state.

Classes:
    DiagramState: Inputs of one diagram.
    DiagramGeometry: Everything the rendering boundary needs.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from edgebundling.config import ChartConfig, DEFAULT_TENSION
from edgebundling.model.arcs import Arc, aggregate_arcs
from edgebundling.model.bundling import BundledLink, bundle_links, clamp_tension
from edgebundling.model.hierarchy import Hierarchy, build_hierarchy
from edgebundling.model.highlight import Highlight, HighlightStateMachine
from edgebundling.model.labels import LeafLabel, leaf_labels
from edgebundling.model.layout import RadialLayout, RadialLayoutEngine, Viewport
from edgebundling.model.links import Link, UnresolvedReference, resolve_links
from edgebundling.model.records import Record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiagramState:
    """Inputs of the diagram; every update produces a new instance."""
    records: tuple[Record, ...] = ()
    viewport: Viewport = Viewport(width=0.0, height=0.0)
    tension: float = DEFAULT_TENSION
    config: ChartConfig = field(default_factory=ChartConfig)
    focused_leaf: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "records", tuple(self.records))
        object.__setattr__(self, "tension", clamp_tension(self.tension))

    def with_records(self, records) -> DiagramState:
        return replace(self, records=tuple(records), focused_leaf=None)

    def with_viewport(self, viewport: Viewport) -> DiagramState:
        return replace(self, viewport=viewport)

    def with_tension(self, tension: float) -> DiagramState:
        return replace(self, tension=clamp_tension(tension))

    def with_focus(self, leaf_id: Optional[str]) -> DiagramState:
        return replace(self, focused_leaf=leaf_id)


@dataclass
class DiagramGeometry:
    hierarchy: Hierarchy
    layout: RadialLayout
    links: list[Link]
    bundles: list[BundledLink]
    arcs: list[Arc]
    labels: list[LeafLabel]
    highlight: Highlight
    tension: float
    viewport: Viewport
    config: ChartConfig
    unresolved: list[UnresolvedReference] = field(default_factory=list)

    @property
    def outer_radius(self) -> float:
        return self.viewport.outer_radius

    @property
    def inner_radius(self) -> float:
        return self.layout.inner_radius

    @property
    def arc_inner_radius(self) -> float:
        return self.viewport.arc_inner_radius(self.config)

    @property
    def arc_outer_radius(self) -> float:
        return self.viewport.arc_outer_radius(self.config)

    def arc_color(self, arc: Arc) -> str:
        return self.config.color_set[arc.color_index]

    def leaf_index(self, identifier: str) -> Optional[int]:
        return self.hierarchy.id_index.get(identifier)

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-ready description for renderers outside Python."""
        nodes = self.hierarchy.nodes
        highlighted = self.highlight.highlighted_links
        return {
            "tension": self.tension,
            "viewport": {"width": self.viewport.width, "height": self.viewport.height},
            "radii": {
                "outer": self.outer_radius,
                "inner": self.inner_radius,
                "arc_inner": self.arc_inner_radius,
                "arc_outer": self.arc_outer_radius,
            },
            "nodes": [
                {
                    "index": n.index,
                    "id": n.identifier,
                    "key": n.key,
                    "depth": n.depth,
                    "parent": n.parent,
                    "angle": n.angle,
                    "radius": n.radius,
                }
                for n in nodes
            ],
            "links": [
                {
                    "source": nodes[b.source].identifier,
                    "target": nodes[b.target].identifier,
                    "path": list(b.path),
                    "d": b.path_data,
                    "highlighted": i in highlighted,
                }
                for i, b in enumerate(self.bundles)
            ],
            "render_order": list(self.highlight.render_order),
            "arcs": [
                {
                    "key": a.key,
                    "start_angle": a.start_angle,
                    "end_angle": a.end_angle,
                    "color_index": a.color_index,
                    "color": self.arc_color(a),
                }
                for a in self.arcs
            ],
            "labels": [
                {
                    "leaf": label.leaf,
                    "text": label.text,
                    "rotation": label.rotation,
                    "x": label.position.x,
                    "y": label.position.y,
                    "anchor": label.anchor,
                    "dx": label.dx,
                }
                for label in self.labels
            ],
            "highlight": {
                "leaf": nodes[self.highlight.leaf].identifier if self.highlight.is_active else None,
                "upstream": sorted(nodes[i].identifier for i in self.highlight.upstream_leaves),
                "downstream": sorted(nodes[i].identifier for i in self.highlight.downstream_leaves),
            },
        }


def build_geometry(state: DiagramState) -> DiagramGeometry:
    """
    Derive the complete diagram geometry from its inputs.

    Pure: the same state always yields the same angles, arcs and control
    points. A focused leaf identifier that names no leaf is treated as no focus.
    """
    config = state.config
    hierarchy = build_hierarchy(state.records)
    inner_radius = state.viewport.inner_radius(config)
    layout = RadialLayoutEngine(config).apply(hierarchy, inner_radius)

    unresolved: list[UnresolvedReference] = []
    links = resolve_links(hierarchy, unresolved)
    bundles = bundle_links(hierarchy, links, state.tension)
    arcs = aggregate_arcs(hierarchy, config)
    labels = leaf_labels(hierarchy, config)

    machine = HighlightStateMachine(links)
    if state.focused_leaf is not None:
        leaf = hierarchy.id_index.get(state.focused_leaf)
        if leaf is not None:
            machine.enter(leaf)
        else:
            logger.debug(f"Focused leaf '{state.focused_leaf}' is not in the dataset.")

    return DiagramGeometry(
        hierarchy=hierarchy,
        layout=layout,
        links=links,
        bundles=bundles,
        arcs=arcs,
        labels=labels,
        highlight=machine.highlight,
        tension=state.tension,
        viewport=state.viewport,
        config=config,
        unresolved=unresolved,
    )
