"""Pytest configuration and shared fixtures for hierflow tests."""

import pytest

from hierflow import Gap, GraphConfig, HierarchyGraph, HierarchyNode


def sized_graph(root, config=None, size=(100, 50), sizes=None):
    """HierarchyGraph with every node of root registered at a default size."""
    graph = HierarchyGraph(config or GraphConfig(gap=Gap(20, 60)))
    sizes = sizes or {}
    for node in graph.traverse(root):
        graph.register_size(node.id, sizes.get(node.id, size))
    return graph


@pytest.fixture
def config():
    """Default config with a 20x60 gap."""
    return GraphConfig(gap=Gap(20, 60))


@pytest.fixture
def vertical_config():
    """Config with vertical flow as the default."""
    return GraphConfig(gap=Gap(20, 60), direction="vertical")


@pytest.fixture
def single_node():
    """Tree with only a root."""
    return HierarchyNode(id="r")


@pytest.fixture
def two_children():
    """Root with two leaf children."""
    return HierarchyNode.from_dict({"id": "r", "children": [{"id": "a"}, {"id": "b"}]})


@pytest.fixture
def mixed_tree():
    """Tree mixing horizontal and vertical flow overrides."""
    return HierarchyNode.from_dict(
        {
            "id": "root",
            "children": [
                {
                    "id": "docs",
                    "direction": "vertical",
                    "children": [
                        {"id": "intro"},
                        {"id": "guide", "children": [{"id": "g1"}, {"id": "g2"}]},
                        {"id": "faq"},
                    ],
                },
                {"id": "src", "children": [{"id": "core"}, {"id": "util"}]},
                {"id": "tests", "label": "Test suite"},
            ],
        }
    )


@pytest.fixture
def mixed_graph(mixed_tree):
    """HierarchyGraph with every mixed_tree node sized 100x50."""
    return sized_graph(mixed_tree)


@pytest.fixture
def make_graph():
    """Factory building a HierarchyGraph with sizes registered for a tree."""
    return sized_graph


@pytest.fixture
def deep_chain():
    """Single-child chain n0 -> n1 -> ... -> n999, deeper than the recursion limit."""
    root = HierarchyNode(id="n0")
    node = root
    for depth in range(1, 1000):
        child = HierarchyNode(id=f"n{depth}")
        node.children.append(child)
        node = child
    return root
