"""
Highlight State Machine
=======================
Hover highlighting of a single leaf.

States are IDLE (nothing focused) and FOCUSED(leaf). Entering a leaf always
moves to FOCUSED(leaf), also straight from another focused leaf; leaving
always returns to IDLE and drops every highlight. The highlight itself is a
pure function of the links and the focused leaf.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from edgebundling.model.links import Link

logger = logging.getLogger(__name__)


class HighlightMode(Enum):
    IDLE = "idle"
    FOCUSED = "focused"


@dataclass(frozen=True)
class Highlight:
    """
    Highlight tags for one focused leaf.

    Upstream leaves reference the focused leaf (they are sources of its
    incoming links); downstream leaves are referenced by it.
    """
    leaf: Optional[int] = None
    upstream_leaves: frozenset[int] = frozenset()
    downstream_leaves: frozenset[int] = frozenset()
    incoming_links: frozenset[int] = frozenset()
    outgoing_links: frozenset[int] = frozenset()
    render_order: tuple[int, ...] = field(default=())

    @property
    def highlighted_links(self) -> frozenset[int]:
        return self.incoming_links | self.outgoing_links

    @property
    def is_active(self) -> bool:
        return self.leaf is not None


def idle_highlight(n_links: int) -> Highlight:
    return Highlight(render_order=tuple(range(n_links)))


def compute_highlight(links: Sequence[Link], leaf: int) -> Highlight:
    """
    Tag the links touching `leaf` and the leaves at their other ends.

    The render order lists link indices back to front: untouched links keep
    their relative order and the highlighted ones are moved to the end, so they
    are drawn on top.
    """
    incoming = frozenset(i for i, link in enumerate(links) if link.target == leaf)
    outgoing = frozenset(i for i, link in enumerate(links) if link.source == leaf)
    touched = incoming | outgoing

    order = [i for i in range(len(links)) if i not in touched] + sorted(touched)
    return Highlight(
        leaf=leaf,
        upstream_leaves=frozenset(links[i].source for i in incoming),
        downstream_leaves=frozenset(links[i].target for i in outgoing),
        incoming_links=incoming,
        outgoing_links=outgoing,
        render_order=tuple(order),
    )


class HighlightStateMachine:
    """Holds the current focus; every transition recomputes from the links."""

    def __init__(self, links: Sequence[Link] = ()):
        self._links: tuple[Link, ...] = tuple(links)
        self._focused: Optional[int] = None
        self._highlight = idle_highlight(len(self._links))

    @property
    def mode(self) -> HighlightMode:
        return HighlightMode.IDLE if self._focused is None else HighlightMode.FOCUSED

    @property
    def focused(self) -> Optional[int]:
        return self._focused

    @property
    def highlight(self) -> Highlight:
        return self._highlight

    def set_links(self, links: Sequence[Link]) -> Highlight:
        """Replace the link list (data reload), keeping the focus if any."""
        self._links = tuple(links)
        if self._focused is None:
            self._highlight = idle_highlight(len(self._links))
            return self._highlight
        return self.enter(self._focused)

    def enter(self, leaf: int) -> Highlight:
        logger.debug(f"Highlight: {self.mode.value} -> focused({leaf})")
        self._focused = leaf
        self._highlight = compute_highlight(self._links, leaf)
        return self._highlight

    def leave(self) -> Highlight:
        logger.debug(f"Highlight: {self.mode.value} -> idle")
        self._focused = None
        self._highlight = idle_highlight(len(self._links))
        return self._highlight
