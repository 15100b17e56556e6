"""
hierflow - Layout and edge routing for tree-shaped hierarchies

A Python library that places the nodes of a rooted tree in 2D and routes
orthogonal connectors with rounded corners between parents and children.

Example:
    >>> from hierflow import GraphConfig, Gap, HierarchyGraph, HierarchyNode
    >>> root = HierarchyNode.from_dict({
    ...     "id": "root",
    ...     "children": [{"id": "a"}, {"id": "b"}],
    ... })
    >>> graph = HierarchyGraph(GraphConfig(gap=Gap(20, 60)))
    >>> for node in graph.traverse(root):
    ...     graph.register_size(node.id, (100, 50))
    >>> result = graph.compute(root)
    >>> [p.position.x for p in result.nodes]
    [0, -60.0, 60.0]

Debug Mode Example:
    >>> result = graph.compute(root, debug=True)
    >>> print(graph.get_trace().summary())
"""

from .config import (
    ConfigError,
    EdgeConfig,
    Gap,
    GraphConfig,
    TuningConfig,
    VerticalEdgeConfig,
)
from .export import compute_bounds, export_layout, save_json
from .graph import HierarchyGraph, build_digraph
from .measure import SubtreeMeasurer, resolve_direction
from .models import (
    Bounds,
    Coordinate,
    Dimensions,
    Edge,
    FlowDirection,
    GraphResult,
    HierarchyNode,
    LayoutError,
    PlacedNode,
)
from .overrides import PositionOverrides, apply_overrides, move_node, move_subtree
from .path import (
    CurveCommand,
    DrawCommand,
    LineCommand,
    MoveCommand,
    PathError,
    build_edge_path,
    compile_path,
    curve_to,
    line_to,
    move_to,
)
from .placement import NodePlacer
from .registry import SizeRegistry
from .router import EdgeRouter, PortSide
from .tracer import LayoutTrace, PipelineStage, PlacementRecord

__version__ = "0.1.0"

__all__ = [
    # Main API
    "HierarchyGraph",
    "build_digraph",
    # Models
    "FlowDirection",
    "Coordinate",
    "Dimensions",
    "Bounds",
    "HierarchyNode",
    "PlacedNode",
    "Edge",
    "GraphResult",
    "LayoutError",
    # Config
    "GraphConfig",
    "Gap",
    "TuningConfig",
    "EdgeConfig",
    "VerticalEdgeConfig",
    "ConfigError",
    # Layout stages
    "SizeRegistry",
    "SubtreeMeasurer",
    "resolve_direction",
    "NodePlacer",
    "EdgeRouter",
    "PortSide",
    # Paths
    "MoveCommand",
    "LineCommand",
    "CurveCommand",
    "DrawCommand",
    "PathError",
    "move_to",
    "line_to",
    "curve_to",
    "compile_path",
    "build_edge_path",
    # Overrides
    "PositionOverrides",
    "apply_overrides",
    "move_node",
    "move_subtree",
    # Export
    "export_layout",
    "compute_bounds",
    "save_json",
    # Debug/Tracing
    "LayoutTrace",
    "PipelineStage",
    "PlacementRecord",
]
