"""
Tests for the Highlight State Machine.
"""
import pytest

from edgebundling.model.highlight import (
    Highlight, HighlightMode, HighlightStateMachine, compute_highlight, idle_highlight
)
from edgebundling.model.links import Link

# Leaves 1..4; 1 -> 2, 3 -> 2, 2 -> 4, 3 -> 4
LINKS = [Link(1, 2), Link(3, 2), Link(2, 4), Link(3, 4)]


class TestComputeHighlight:

    def test_incoming_and_outgoing(self):
        highlight = compute_highlight(LINKS, 2)
        assert highlight.leaf == 2
        assert highlight.incoming_links == {0, 1}
        assert highlight.outgoing_links == {2}
        assert highlight.upstream_leaves == {1, 3}
        assert highlight.downstream_leaves == {4}

    def test_untouched_links_not_highlighted(self):
        highlight = compute_highlight(LINKS, 1)
        assert highlight.highlighted_links == {0}
        assert 3 not in highlight.highlighted_links

    def test_render_order_puts_highlighted_last(self):
        highlight = compute_highlight(LINKS, 4)
        assert highlight.render_order == (0, 1, 2, 3)
        highlight = compute_highlight(LINKS, 1)
        assert highlight.render_order == (1, 2, 3, 0)

    def test_render_order_is_permutation(self):
        for leaf in (1, 2, 3, 4, 99):
            assert sorted(compute_highlight(LINKS, leaf).render_order) == [0, 1, 2, 3]

    def test_leaf_without_links(self):
        highlight = compute_highlight(LINKS, 99)
        assert highlight.is_active
        assert highlight.highlighted_links == frozenset()
        assert highlight.upstream_leaves == frozenset()

    def test_self_link_is_both_directions(self):
        highlight = compute_highlight([Link(5, 5)], 5)
        assert highlight.incoming_links == {0}
        assert highlight.outgoing_links == {0}
        assert highlight.upstream_leaves == {5}
        assert highlight.downstream_leaves == {5}

    def test_idle(self):
        highlight = idle_highlight(3)
        assert not highlight.is_active
        assert highlight.render_order == (0, 1, 2)
        assert highlight == Highlight(render_order=(0, 1, 2))


class TestHighlightStateMachine:

    @pytest.fixture
    def machine(self):
        return HighlightStateMachine(LINKS)

    def test_starts_idle(self, machine):
        assert machine.mode is HighlightMode.IDLE
        assert machine.focused is None
        assert not machine.highlight.is_active

    def test_enter_focuses(self, machine):
        machine.enter(2)
        assert machine.mode is HighlightMode.FOCUSED
        assert machine.focused == 2
        assert machine.highlight == compute_highlight(LINKS, 2)

    def test_enter_is_idempotent(self, machine):
        first = machine.enter(2)
        second = machine.enter(2)
        assert first == second

    def test_direct_switch_between_leaves(self, machine):
        """FOCUSED(a) -> FOCUSED(b) leaves no trace of a."""
        machine.enter(1)
        highlight = machine.enter(4)
        assert highlight == compute_highlight(LINKS, 4)
        assert 1 not in highlight.upstream_leaves | highlight.downstream_leaves

    def test_leave_clears_everything(self, machine):
        machine.enter(2)
        highlight = machine.leave()
        assert machine.mode is HighlightMode.IDLE
        assert highlight == idle_highlight(len(LINKS))

    def test_leave_twice(self, machine):
        machine.leave()
        assert machine.leave() == idle_highlight(len(LINKS))

    def test_set_links_keeps_focus(self, machine):
        machine.enter(2)
        highlight = machine.set_links(LINKS[:1])
        assert machine.focused == 2
        assert highlight.incoming_links == {0}
        assert highlight.outgoing_links == frozenset()

    def test_set_links_while_idle(self, machine):
        assert machine.set_links(LINKS[:2]) == idle_highlight(2)
