"""
Diagram Renderer (matplotlib)
=============================
Draws a DiagramGeometry onto a matplotlib Axes.

The model works in screen coordinates (y grows downwards, angles clockwise
from 12 o'clock), so the Axes is y-inverted and text rotations are converted
from the clockwise SVG convention to matplotlib's counter-clockwise one.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from matplotlib.figure import Figure
from matplotlib.patches import Patch, PathPatch, Wedge
from matplotlib.path import Path
from matplotlib.textpath import TextPath

from edgebundling.model.geometry_primitives import PolarPoint
from edgebundling.model.labels import arc_label_visibility
from edgebundling.utils import rad2deg

if TYPE_CHECKING:
    import numpy as np
    import numpy.typing as npt
    from matplotlib.axes import Axes
    from matplotlib.text import Text
    from edgebundling.model.arcs import Arc
    from edgebundling.model.highlight import Highlight
    from edgebundling.model.state import DiagramGeometry

logger = logging.getLogger(__name__)

LINK_COLOR = "steelblue"
LINK_ALPHA = 0.4
# Incoming links and their upstream leaves
UPSTREAM_COLOR = "#2ca02c"
# Outgoing links and their downstream leaves
DOWNSTREAM_COLOR = "#d62728"
LABEL_COLOR = "#555555"


def bezier_path(segments: npt.NDArray[np.float64]) -> Path:
    """matplotlib Path of a chain of cubic Bezier segments."""
    vertices = [segments[0, 0]]
    codes = [Path.MOVETO]
    for segment in segments:
        vertices.extend(segment[1:])
        codes.extend([Path.CURVE4] * 3)
    return Path(vertices, codes)


def text_width(text: str, font_size: float) -> float:
    """Approximate drawn width of `text`, in points, at `font_size`."""
    if not text:
        return 0.0
    return float(TextPath((0, 0), text, size=font_size).get_extents().width)


class DiagramRenderer:
    def __init__(self, ax: Axes, font_size: float = 8.0, show_legend: bool = True) -> None:
        self.ax = ax
        self.font_size = font_size
        self.show_legend = show_legend
        self.link_artists: list[PathPatch] = []
        self.label_artists: dict[int, Text] = {}
        self.arc_artists: list[Wedge] = []

    def draw(self, geometry: DiagramGeometry) -> None:
        """Redraw everything from scratch."""
        ax = self.ax
        ax.clear()
        self.link_artists, self.label_artists, self.arc_artists = [], {}, []

        limit = max(geometry.outer_radius, 1.0)
        ax.set_xlim(-limit, limit)
        ax.set_ylim(-limit, limit)
        ax.invert_yaxis()
        ax.set_aspect("equal")
        ax.set_axis_off()

        for bundle in geometry.bundles:
            patch = PathPatch(bezier_path(bundle.segments), facecolor="none",
                              edgecolor=LINK_COLOR, alpha=LINK_ALPHA, linewidth=1.0)
            ax.add_patch(patch)
            self.link_artists.append(patch)

        for label in geometry.labels:
            rotation = -label.rotation + (180 if label.flipped else 0)
            self.label_artists[label.leaf] = ax.text(
                label.text_position.x, label.text_position.y, label.text,
                rotation=rotation, rotation_mode="anchor",
                ha="right" if label.anchor == "end" else "left", va="center",
                fontsize=self.font_size, color=LABEL_COLOR,
            )

        self._draw_arcs(geometry)
        if self.show_legend and geometry.arcs:
            handles = [Patch(facecolor=geometry.arc_color(a), label=a.key) for a in geometry.arcs]
            ax.legend(handles=handles, loc="upper left", fontsize=self.font_size, frameon=False)

        ax.text(limit, -limit, f"tension: {geometry.tension:.2f}", ha="right", va="top",
                fontsize=self.font_size, color=LABEL_COLOR)

        self.apply_highlight(geometry.highlight)
        logger.debug(f"Drew {len(self.link_artists)} links and {len(self.arc_artists)} arcs.")

    def _draw_arcs(self, geometry: DiagramGeometry) -> None:
        inner, outer = geometry.arc_inner_radius, geometry.arc_outer_radius
        visible = arc_label_visibility(
            geometry.arcs, geometry.inner_radius,
            lambda text: text_width(text, self.font_size), geometry.config,
        )
        for arc, show_label in zip(geometry.arcs, visible):
            # Wedge angles are counter-clockwise from +x in data space
            wedge = Wedge((0.0, 0.0), outer, rad2deg(arc.start_angle) - 90, rad2deg(arc.end_angle) - 90,
                          width=outer - inner, facecolor=geometry.arc_color(arc), edgecolor="none")
            self.ax.add_patch(wedge)
            self.arc_artists.append(wedge)
            if show_label:
                self._draw_arc_label(arc, (inner + outer) / 2)

    def _draw_arc_label(self, arc: Arc, radius: float) -> None:
        middle = rad2deg((arc.start_angle + arc.end_angle) / 2)
        point = PolarPoint(middle, radius).to_cartesian()
        # Tangent to the ring, kept upright on the lower half
        rotation = 180 - middle if 90 < middle < 270 else -middle
        self.ax.text(point.x, point.y, arc.key, rotation=rotation, rotation_mode="anchor",
                     ha="center", va="center", fontsize=self.font_size * 0.9, color="white")

    def apply_highlight(self, highlight: Highlight) -> None:
        """Recolour links and labels and move highlighted links to the front."""
        for z, link in enumerate(highlight.render_order):
            if link >= len(self.link_artists):
                continue
            patch = self.link_artists[link]
            color, alpha, width = LINK_COLOR, LINK_ALPHA, 1.0
            if link in highlight.incoming_links:
                color, alpha, width = UPSTREAM_COLOR, 1.0, 2.0
            elif link in highlight.outgoing_links:
                color, alpha, width = DOWNSTREAM_COLOR, 1.0, 2.0
            patch.set_edgecolor(color)
            patch.set_alpha(alpha)
            patch.set_linewidth(width)
            patch.set_zorder(1 + z / max(len(self.link_artists), 1))

        for leaf, text in self.label_artists.items():
            text.set_color(self.label_color(highlight, leaf))
            text.set_fontweight("bold" if leaf == highlight.leaf else "normal")

    @staticmethod
    def label_color(highlight: Highlight, leaf: int) -> str:
        if leaf in highlight.upstream_leaves:
            return UPSTREAM_COLOR
        if leaf in highlight.downstream_leaves:
            return DOWNSTREAM_COLOR
        return LABEL_COLOR


def render_to_file(geometry: DiagramGeometry, filepath: str, dpi: int = 100,
                   font_size: float = 8.0, size_inches: Optional[float] = None) -> None:
    """Render a diagram into an image file (format from the extension)."""
    size = size_inches or max(geometry.viewport.diameter / dpi, 4.0)
    fig = Figure(figsize=(size, size), dpi=dpi)
    ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
    DiagramRenderer(ax, font_size=font_size).draw(geometry)
    logger.info(f"Saving diagram to: {filepath}")
    fig.savefig(filepath)
