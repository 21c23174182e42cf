"""
Tests for the Radial Layout Engine and the Viewport.
"""
import numpy as np
import pytest

from edgebundling.config import ChartConfig
from edgebundling.model.hierarchy import build_hierarchy
from edgebundling.model.layout import RadialLayoutEngine, Viewport
from tests.conftest import make_records


# ============================================================
# Viewport
# ============================================================

class TestViewport:

    def test_radii(self, viewport, config):
        assert viewport.outer_radius == 300.0
        assert viewport.inner_radius(config) == 180.0
        assert viewport.arc_inner_radius(config) == 185.0
        assert viewport.arc_outer_radius(config) == 215.0

    def test_smaller_side_wins(self):
        assert Viewport(width=800.0, height=500.0).diameter == 500.0

    def test_zero_height_means_square(self):
        assert Viewport(width=640.0).diameter == 640.0

    def test_inner_radius_never_negative(self, config):
        assert Viewport(width=100.0, height=100.0).inner_radius(config) == 0.0

    @pytest.mark.parametrize("width, height", [(-1.0, 10.0), (10.0, float("nan")), (float("inf"), 1.0)])
    def test_invalid_sizes_rejected(self, width, height):
        with pytest.raises(ValueError):
            Viewport(width=width, height=height)


# ============================================================
# Layout
# ============================================================

class TestRadialLayout:

    def test_six_equal_slices(self, laid_out):
        """{2, 3, 1} leaves: every leaf owns 60 degrees, centred in its slice."""
        angles = [leaf.angle for leaf in laid_out.leaves()]
        assert angles == pytest.approx([30.0, 90.0, 150.0, 210.0, 270.0, 330.0])

    def test_group_angle_is_mean_of_children(self, laid_out):
        assert [g.angle for g in laid_out.groups()] == pytest.approx([60.0, 210.0, 330.0])
        assert laid_out.root.angle == pytest.approx(200.0)

    def test_radius_grows_with_depth(self, laid_out):
        assert laid_out.root.radius == 0.0
        assert all(g.radius == pytest.approx(90.0) for g in laid_out.groups())
        assert all(leaf.radius == pytest.approx(180.0) for leaf in laid_out.leaves())

    def test_leaf_angles_strictly_increasing_in_range(self, linked_records, config):
        hierarchy = build_hierarchy(linked_records)
        RadialLayoutEngine(config).apply(hierarchy, 100.0)
        angles = [leaf.angle for leaf in hierarchy.leaves()]
        assert all(0.0 <= a < 360.0 for a in angles)
        assert all(b > a for a, b in zip(angles, angles[1:]))

    def test_result_arrays_match_nodes(self, scenario_records, config):
        hierarchy = build_hierarchy(scenario_records)
        layout = RadialLayoutEngine(config).apply(hierarchy, 180.0)
        assert layout.angles.shape == (len(hierarchy.nodes),)
        assert layout.leaf_slice == pytest.approx(60.0)
        assert [n.angle for n in hierarchy.nodes] == pytest.approx(layout.angles.tolist())

    def test_positions_are_screen_coordinates(self, config):
        """0 degrees is 12 o'clock (negative y), 90 degrees is 3 o'clock."""
        hierarchy = build_hierarchy(make_records([("1", "x", "A", []), ("2", "y", "A", []),
                                                  ("3", "z", "A", []), ("4", "w", "A", [])]))
        positions = RadialLayoutEngine(config).apply(hierarchy, 100.0).positions()
        leaves = [leaf.index for leaf in hierarchy.leaves()]
        # 4 leaves sit at 45, 135, 225 and 315 degrees
        np.testing.assert_allclose(positions[leaves[0]], [70.7106781, -70.7106781], rtol=1e-6)
        np.testing.assert_allclose(positions[leaves[1]], [70.7106781, 70.7106781], rtol=1e-6)

    def test_group_separation_widens_group_gaps(self, scenario_records):
        config = ChartConfig(group_separation=2.0)
        hierarchy = build_hierarchy(scenario_records)
        RadialLayoutEngine(config).apply(hierarchy, 180.0)
        angles = [leaf.angle for leaf in hierarchy.leaves()]
        within = angles[1] - angles[0]
        across = angles[2] - angles[1]
        assert across == pytest.approx(2 * within)

    def test_deterministic(self, scenario_records, config):
        a = RadialLayoutEngine(config).apply(build_hierarchy(scenario_records), 180.0)
        b = RadialLayoutEngine(config).apply(build_hierarchy(scenario_records), 180.0)
        np.testing.assert_array_equal(a.angles, b.angles)
        np.testing.assert_array_equal(a.radii, b.radii)


class TestDegenerateLayouts:

    def test_empty_hierarchy(self, config):
        hierarchy = build_hierarchy([])
        layout = RadialLayoutEngine(config).apply(hierarchy, 180.0)
        assert hierarchy.root.angle == 0.0
        assert hierarchy.root.radius == 0.0
        assert layout.leaf_slice == 0.0

    def test_single_leaf(self, config):
        hierarchy = build_hierarchy(make_records([("1", "only", "A", [])]))
        layout = RadialLayoutEngine(config).apply(hierarchy, 180.0)
        leaf = hierarchy.leaves()[0]
        assert leaf.angle == pytest.approx(180.0)
        assert leaf.radius == pytest.approx(180.0)
        assert layout.leaf_slice == pytest.approx(360.0)

    def test_zero_inner_radius_collapses_to_centre(self, scenario_records, config):
        hierarchy = build_hierarchy(scenario_records)
        RadialLayoutEngine(config).apply(hierarchy, 0.0)
        assert all(n.radius == 0.0 for n in hierarchy.nodes)
