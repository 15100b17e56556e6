"""Unit tests for the placement module."""

import inspect

import pytest

from hierflow.config import Gap, GraphConfig, TuningConfig
from hierflow.models import Coordinate, HierarchyNode, LayoutError
from hierflow.placement import NodePlacer
from hierflow.registry import SizeRegistry, iter_preorder
from hierflow.tracer import LayoutTrace


def placer_for(root, config=None, size=(100, 50), sizes=None, trace=None):
    registry = SizeRegistry()
    sizes = sizes or {}
    for node in iter_preorder(root):
        registry.register(node.id, sizes.get(node.id, size))
    return NodePlacer(config or GraphConfig(gap=Gap(20, 60)), registry, trace=trace)


def positions(placed):
    return {p.id: p.position for p in placed}


class TestRootPlacement:
    """Tests for root positioning."""

    def test_root_at_origin(self, single_node):
        """Test the root is placed at the origin."""
        placed = placer_for(single_node).place_nodes(single_node)
        assert len(placed) == 1
        assert placed[0].position == Coordinate(0, 0)
        assert placed[0].depth == 0

    def test_root_ignores_anchor(self, single_node):
        """Test a supplied anchor does not move the root."""
        placed = placer_for(single_node).place_nodes(
            single_node, 0, Coordinate(500, 500)
        )
        assert placed[0].position == Coordinate(0, 0)

    def test_missing_size_raises(self, two_children):
        """Test placement fails when a child has no size."""
        registry = SizeRegistry()
        registry.register("r", (100, 50))
        registry.register("a", (100, 50))
        placer = NodePlacer(GraphConfig(gap=Gap(20, 60)), registry)
        with pytest.raises(LayoutError, match="b"):
            placer.place_nodes(two_children)


class TestHorizontalPlacement:
    """Tests for children spread beside each other."""

    def test_two_children_centered(self, two_children):
        """Test two 100x50 children sit at -60 and +60."""
        pos = positions(placer_for(two_children).place_nodes(two_children))
        assert pos["a"] == Coordinate(-60, 110)
        assert pos["b"] == Coordinate(60, 110)

    def test_single_child_centered_exactly(self):
        """Test a lone child shares its parent's X."""
        root = HierarchyNode.from_dict(
            {"id": "r", "children": [{"id": "a", "children": [{"id": "c"}]}]}
        )
        pos = positions(
            placer_for(root, sizes={"a": (37, 50), "c": (300, 20)}).place_nodes(root)
        )
        assert pos["a"].x == pos["r"].x
        assert pos["c"].x == pos["a"].x
        assert pos["c"].y == 110 + 25 + 60 + 10

    def test_subtree_widths_spread_siblings(self):
        """Test siblings make room for their measured subtrees."""
        root = HierarchyNode.from_dict(
            {
                "id": "r",
                "children": [
                    {"id": "a", "children": [{"id": "a1"}, {"id": "a2"}]},
                    {"id": "b"},
                ],
            }
        )
        pos = positions(placer_for(root).place_nodes(root))
        # widths: a -> 220, b -> 100; total 340
        assert pos["a"].x == -170 + 110
        assert pos["b"].x == -170 + 220 + 20 + 50
        assert pos["a1"] == Coordinate(pos["a"].x - 60, 220)
        assert pos["a2"] == Coordinate(pos["a"].x + 60, 220)

    def test_child_y_uses_own_height(self, two_children):
        """Test child Y is parent bottom + gap + half the child's height."""
        pos = positions(
            placer_for(two_children, sizes={"a": (100, 10)}).place_nodes(two_children)
        )
        assert pos["a"].y == 25 + 60 + 5
        assert pos["b"].y == 25 + 60 + 25


class TestVerticalPlacement:
    """Tests for children stacked below the parent."""

    def test_single_vertical_child(self, vertical_config):
        """Test one stacked child lands at parent bottom + gap."""
        root = HierarchyNode.from_dict({"id": "r", "children": [{"id": "c"}]})
        pos = positions(placer_for(root, config=vertical_config).place_nodes(root))
        assert pos["c"].y == 25 + 60
        assert pos["c"].x == -50 + 50 + 60

    def test_indent_uses_child_width(self, vertical_config):
        """Test the indent steps from the parent's left edge."""
        root = HierarchyNode.from_dict({"id": "r", "children": [{"id": "c"}]})
        pos = positions(
            placer_for(root, config=vertical_config, sizes={"c": (40, 50)}).place_nodes(
                root
            )
        )
        assert pos["c"].x == -50 + 20 + 60

    @pytest.mark.parametrize(
        "heights,gap_y",
        [
            ((30, 70, 40), 60),
            ((50, 50, 50), 10),
            ((10, 200, 5, 80), 35),
        ],
    )
    def test_sibling_gaps(self, heights, gap_y):
        """Test consecutive centers differ by half heights plus scaled gap."""
        children = [{"id": f"c{i}"} for i in range(len(heights))]
        root = HierarchyNode.from_dict(
            {"id": "r", "direction": "vertical", "children": children}
        )
        sizes = {f"c{i}": (100, h) for i, h in enumerate(heights)}
        config = GraphConfig(gap=Gap(20, gap_y))
        pos = positions(placer_for(root, config=config, sizes=sizes).place_nodes(root))

        for i in range(len(heights) - 1):
            delta = pos[f"c{i + 1}"].y - pos[f"c{i}"].y
            expected = heights[i] / 2 + gap_y * 0.833 + heights[i + 1] / 2
            assert delta == pytest.approx(expected)

    def test_vertical_shift_applied(self):
        """Test the vertical shift offsets stacked children."""
        root = HierarchyNode.from_dict(
            {"id": "r", "direction": "vertical", "children": [{"id": "c"}]}
        )
        config = GraphConfig(gap=Gap(20, 60), tuning=TuningConfig(vertical_shift=0))
        pos = positions(placer_for(root, config=config).place_nodes(root))
        assert pos["c"].y == 25 + 60 + 25


class TestPlacementOrder:
    """Tests for the returned list."""

    def test_preorder_and_depths(self, mixed_tree):
        """Test results are preorder with depths from the root."""
        placed = placer_for(mixed_tree).place_nodes(mixed_tree)
        assert [p.id for p in placed] == [n.id for n in iter_preorder(mixed_tree)]
        depths = {p.id: p.depth for p in placed}
        assert depths["root"] == 0
        assert depths["docs"] == 1
        assert depths["g1"] == 3

    def test_trace_records_each_node(self, mixed_tree):
        """Test a trace receives one record per node."""
        trace = LayoutTrace()
        placer_for(mixed_tree, trace=trace).place_nodes(mixed_tree)
        assert len(trace.placements) == 11
        assert trace.get_placement("root").flow == "root"
        assert trace.get_placement("intro").flow == "vertical"
        assert trace.get_placement("docs").flow == "horizontal"
        assert trace.get_placement("guide").extent == 160

    def test_trace_details_stay_internal(self):
        """Test place_nodes only exposes the node, depth and anchor."""
        params = list(inspect.signature(NodePlacer.place_nodes).parameters)
        assert params == ["self", "node", "depth", "anchor"]

    def test_subtree_placed_from_anchor(self, mixed_tree):
        """Test a non-root subtree is placed relative to the given anchor."""
        docs = mixed_tree.children[0]
        trace = LayoutTrace()
        placed = placer_for(mixed_tree, trace=trace).place_nodes(
            docs, 1, Coordinate(10, 20)
        )
        assert placed[0].position == Coordinate(10, 20)
        assert [p.depth for p in placed][:2] == [1, 2]
        assert trace.get_placement("docs").flow == "root"
        assert trace.get_placement("intro").flow == "vertical"


class TestDeepTrees:
    """Tests for trees deeper than the interpreter recursion limit."""

    def test_deep_chain_placed(self, deep_chain):
        """Test every node of a long chain sits directly below its parent."""
        placed = placer_for(deep_chain, size=(10, 10)).place_nodes(deep_chain)
        assert len(placed) == 1000
        assert all(p.position == Coordinate(0, p.depth * 70) for p in placed)
