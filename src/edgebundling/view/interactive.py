"""
Interactive Window
==================
Connects a matplotlib figure to the DiagramStore.

Pointer movement over the leaf ring focuses the leaf under the cursor, the
slider below the diagram sets the tension and resizing the window re-lays the
diagram out. The window never mutates geometry itself: it dispatches commands
and redraws when the store signals a change.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import numpy as np
from matplotlib.widgets import Slider

from edgebundling.app.commands import LeafFocused, LeafUnfocused, Resize, TensionChanged
from edgebundling.model.geometry_primitives import Point
from edgebundling.view.diagram import DiagramRenderer

if TYPE_CHECKING:
    from matplotlib.figure import Figure
    from edgebundling.app.state import DiagramStore
    from edgebundling.model.highlight import Highlight
    from edgebundling.model.state import DiagramGeometry

logger = logging.getLogger(__name__)


def leaf_at(geometry: DiagramGeometry, x: float, y: float) -> Optional[int]:
    """
    Leaf whose slot contains the point (x, y), if any.

    A hit requires the point to lie between the leaf ring and the outer radius
    (where the labels and arcs are) and within half a slot of a leaf angle.
    """
    leaves = geometry.hierarchy.leaves()
    if not leaves or geometry.layout.leaf_slice <= 0:
        return None

    polar = Point(x, y).to_polar()
    if not geometry.inner_radius <= polar.radius <= geometry.outer_radius:
        return None

    angles = np.array([leaf.angle for leaf in leaves])
    distance = np.abs((angles - polar.angle + 180.0) % 360.0 - 180.0)
    nearest = int(np.argmin(distance))
    if distance[nearest] > geometry.layout.leaf_slice / 2:
        return None
    return leaves[nearest].index


class InteractiveDiagram:
    def __init__(self, store: DiagramStore, figure: Optional[Figure] = None, font_size: float = 8.0) -> None:
        if figure is None:
            import matplotlib.pyplot as plt
            figure = plt.figure(figsize=(9, 9))
        self.store = store
        self.figure = figure
        self.ax = figure.add_axes((0.0, 0.06, 1.0, 0.94))
        self.slider = Slider(figure.add_axes((0.25, 0.015, 0.5, 0.03)), "tension", 0.0, 1.0,
                             valinit=store.state.tension)
        self.renderer = DiagramRenderer(self.ax, font_size=font_size)
        self._hovered: Optional[int] = None

        store.geometry_changed.connect(self._on_geometry)
        store.highlight_changed.connect(self._on_highlight)
        store.tension_changed.connect(self._on_tension)
        self.slider.on_changed(self._on_slider)
        figure.canvas.mpl_connect("motion_notify_event", self._on_motion)
        figure.canvas.mpl_connect("resize_event", self._on_resize)

        self.renderer.draw(store.geometry)

    def _on_geometry(self, geometry: DiagramGeometry) -> None:
        self._hovered = geometry.highlight.leaf
        self.renderer.draw(geometry)
        self.figure.canvas.draw_idle()

    def _on_highlight(self, highlight: Highlight) -> None:
        self.renderer.apply_highlight(highlight)
        self.figure.canvas.draw_idle()

    def _on_tension(self, tension: float) -> None:
        # Drags arrive from the store; keep the widget in sync without re-dispatching
        if self.slider.val != tension:
            self.slider.set_val(tension)

    def _on_slider(self, value: float) -> None:
        if value != self.store.state.tension:
            self.store.dispatch(TensionChanged(value))

    def _on_motion(self, event: Any) -> None:
        leaf = None
        if event.inaxes is self.ax and event.xdata is not None and event.ydata is not None:
            leaf = leaf_at(self.store.geometry, event.xdata, event.ydata)
        if leaf == self._hovered:
            return
        self._hovered = leaf
        if leaf is None:
            self.store.dispatch(LeafUnfocused())
        else:
            self.store.dispatch(LeafFocused(self.store.geometry.hierarchy.nodes[leaf].identifier))

    def _on_resize(self, event: Any = None) -> None:
        bbox = self.ax.bbox
        logger.debug(f"Resize to {bbox.width:.0f}x{bbox.height:.0f}")
        self.store.dispatch(Resize(width=bbox.width, height=bbox.height))

    def show(self) -> None:
        import matplotlib.pyplot as plt
        plt.show()
