from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Optional

from PySide6.QtCore import QObject, Signal

from edgebundling.app.commands import (
    Command, DataLoaded, Resize, TensionChanged, TensionDragged, LeafFocused, LeafUnfocused
)
from edgebundling.config import ChartConfig
from edgebundling.model.bundling import TensionControl
from edgebundling.model.highlight import Highlight, HighlightStateMachine
from edgebundling.model.layout import Viewport
from edgebundling.model.state import DiagramState, DiagramGeometry, build_geometry

logger = logging.getLogger(__name__)


class DiagramStore(QObject):
    """
    Central state store with signals for view sync.

    `dispatch` is the only way to change the diagram. Data, resize and tension
    commands rebuild the whole geometry before `geometry_changed` is emitted;
    focus commands only re-run the highlight on the current geometry.
    """
    geometry_changed = Signal(object)
    highlight_changed = Signal(object)
    tension_changed = Signal(float)

    def __init__(self, config: Optional[ChartConfig] = None, viewport: Optional[Viewport] = None) -> None:
        super().__init__()
        config = config or ChartConfig()
        self._state = DiagramState(
            viewport=viewport or Viewport(width=0.0, height=0.0),
            tension=config.tension,
            config=config,
        )
        self._machine = HighlightStateMachine()
        self._geometry: DiagramGeometry = build_geometry(self._state)

    @property
    def state(self) -> DiagramState:
        return self._state

    @property
    def geometry(self) -> DiagramGeometry:
        return self._geometry

    @property
    def highlight(self) -> Highlight:
        return self._machine.highlight

    @property
    def tension_control(self) -> TensionControl:
        return TensionControl(outer_radius=self._state.viewport.outer_radius)

    def dispatch(self, command: Command) -> None:
        match command:
            case DataLoaded(records=records):
                logger.info(f"Data loaded: {len(records)} records.")
                self._machine.leave()
                self._rebuild(self._state.with_records(records))
            case Resize(width=width, height=height):
                self._rebuild(self._state.with_viewport(Viewport(width=width, height=height)))
            case TensionChanged(value=value):
                self._set_tension(value)
            case TensionDragged(dx=dx):
                if math.isnan(dx):
                    logger.warning("Ignoring tension drag with NaN delta.")
                    return
                self._set_tension(self.tension_control.drag(self._state.tension, dx))
            case LeafFocused(leaf_id=leaf_id):
                self._focus(leaf_id)
            case LeafUnfocused():
                self._unfocus()
            case _:
                raise TypeError(f"Unknown command: {command!r}")

    def _set_tension(self, value: float) -> None:
        previous = self._state.tension
        self._rebuild(self._state.with_tension(value))
        if self._state.tension != previous:
            self.tension_changed.emit(self._state.tension)

    def _rebuild(self, state: DiagramState) -> None:
        self._state = state
        geometry = build_geometry(state)
        highlight = self._machine.set_links(geometry.links)
        self._geometry = replace(geometry, highlight=highlight)
        self.geometry_changed.emit(self._geometry)

    def _focus(self, leaf_id: str) -> None:
        leaf = self._geometry.leaf_index(leaf_id)
        if leaf is None:
            logger.debug(f"Focus on unknown leaf '{leaf_id}' ignored.")
            return
        self._state = self._state.with_focus(leaf_id)
        self._publish_highlight(self._machine.enter(leaf))

    def _unfocus(self) -> None:
        self._state = self._state.with_focus(None)
        self._publish_highlight(self._machine.leave())

    def _publish_highlight(self, highlight: Highlight) -> None:
        self._geometry = replace(self._geometry, highlight=highlight)
        self.highlight_changed.emit(highlight)
