"""Integration tests for the complete layout pipeline.

These tests run trees through registration, compute, routing, path
building, overrides and export the way a rendering front end would.
"""

import pytest

from hierflow import (
    Coordinate,
    GraphConfig,
    HierarchyGraph,
    HierarchyNode,
    LayoutError,
    apply_overrides,
    build_edge_path,
    export_layout,
    move_subtree,
)


class TestDocumentedScenarios:
    """End-to-end checks of the reference scenarios."""

    def test_two_horizontal_children(self, make_graph):
        """Test two 100x50 children at -60/+60 below the root."""
        root = HierarchyNode.from_dict({"id": "r", "children": [{"id": "a"}, {"id": "b"}]})
        graph = make_graph(root, sizes={"r": (140, 30)})
        pos = {p.id: p.position for p in graph.compute(root).nodes}

        assert pos["r"] == Coordinate(0, 0)
        assert pos["a"] == Coordinate(-60, 15 + 60 + 25)
        assert pos["b"] == Coordinate(60, 15 + 60 + 25)

    def test_single_vertical_child(self, make_graph):
        """Test one stacked child of height 50 lands at rootH/2 + gap.y."""
        root = HierarchyNode.from_dict(
            {"id": "r", "direction": "vertical", "children": [{"id": "c"}]}
        )
        graph = make_graph(root, sizes={"r": (100, 80)})
        pos = {p.id: p.position for p in graph.compute(root).nodes}

        assert pos["c"].y == 40 + 60


class TestFileTreeLayout:
    """Layout of a realistic mixed-direction tree."""

    @pytest.fixture
    def project(self):
        return HierarchyNode.from_dict(
            {
                "id": "project",
                "kind": "directory",
                "children": [
                    {
                        "id": "src",
                        "direction": "vertical",
                        "children": [
                            {"id": "main.py", "kind": "file"},
                            {"id": "util.py", "kind": "file"},
                            {
                                "id": "pkg",
                                "children": [{"id": "a.py"}, {"id": "b.py"}],
                            },
                        ],
                    },
                    {"id": "docs", "children": [{"id": "index.md"}]},
                    {"id": "README.md", "kind": "file"},
                ],
            }
        )

    @pytest.fixture
    def graph(self, project):
        graph = HierarchyGraph(GraphConfig.from_dict({"gap": {"x": 24, "y": 48}}))
        for node in graph.traverse(project):
            width = 160 if node.data.get("kind") == "directory" else 120
            graph.register_size(node.id, {"width": width, "height": 40})
        return graph

    def test_every_edge_compiles(self, graph, project):
        """Test each routed edge builds a valid SVG path."""
        result = graph.compute(project)
        assert len(result.edges) == len(result.nodes) - 1

        for edge in result.edges:
            d = build_edge_path(edge.waypoints)
            assert d.startswith("M ")
            assert len(edge.waypoints) == 4

    def test_stacked_children_step_right(self, graph, project):
        """Test stacked children are indented right of their parent."""
        pos = {p.id: p.position for p in graph.compute(project).nodes}
        assert pos["main.py"].x > pos["src"].x
        assert pos["main.py"].x == pos["util.py"].x
        assert pos["main.py"].y < pos["util.py"].y < pos["pkg"].y

    def test_drag_subtree_and_reroute(self, graph, project):
        """Test moving a subtree keeps its shape and re-routes its edges."""
        result = graph.compute(project)
        src = project.children[0]
        overrides = move_subtree(result.nodes, src, Coordinate(0, 300))
        moved = apply_overrides(result.nodes, overrides)
        edges = graph.regenerate_edges(moved)

        before = {p.id: p.position for p in result.nodes}
        after = {p.id: p.position for p in moved}
        assert after["a.py"].y - after["pkg"].y == before["a.py"].y - before["pkg"].y
        assert after["docs"] == before["docs"]

        project_to_src = next(e for e in edges if e.target.id == "src")
        assert project_to_src.waypoints[-1].y < after["src"].y

    def test_export(self, graph, project):
        """Test exported data carries caller fields and bounds."""
        result = graph.compute(project)
        data = export_layout(result, graph.sizes)

        assert data["nodes"][0]["data"] == {"kind": "directory"}
        assert data["bounds"]["minY"] == -20
        assert data["bounds"]["maxX"] > data["bounds"]["minX"]

    def test_missing_size_aborts(self, graph, project):
        """Test a single missing size aborts the whole layout."""
        project.children[1].children.append(HierarchyNode(id="new.md"))
        with pytest.raises(LayoutError, match="Missing sizes for 1 nodes"):
            graph.compute(project)
