"""
Hierarchy graph layout.

HierarchyGraph is the public entry point: register node sizes, compute a
layout for a tree, and re-route edges after positions change.

Example:
    >>> graph = HierarchyGraph(GraphConfig(gap=Gap(20, 60)))
    >>> for node in graph.traverse(root):
    ...     graph.register_size(node.id, (100, 50))
    >>> result = graph.compute(root)
    >>> [p.position for p in result.nodes]
"""

import logging
from collections import Counter
from typing import List, Optional, Tuple

import networkx as nx

from .config import GraphConfig
from .models import Edge, GraphResult, HierarchyNode, LayoutError, PlacedNode
from .placement import NodePlacer
from .registry import SizeLike, SizeRegistry, iter_preorder
from .router import EdgeRouter
from .tracer import LayoutTrace

logger = logging.getLogger(__name__)


def _walk(root: HierarchyNode) -> Tuple[List[HierarchyNode], List[Tuple[str, str]]]:
    """
    Distinct node objects reachable from root and every parent -> child link.

    A node object reached a second time is linked but not descended into,
    so shared or cyclic structure shows up in the links without looping.
    """
    seen = {id(root)}
    nodes = [root]
    links = []
    stack = [root]
    while stack:
        node = stack.pop()
        for child in reversed(node.children):
            links.append((node.id, child.id))
            if id(child) not in seen:
                seen.add(id(child))
                nodes.append(child)
                stack.append(child)
    return nodes, links


def build_digraph(root: HierarchyNode) -> nx.DiGraph:
    """Directed parent -> child graph of a hierarchy, keyed by node id."""
    nodes, links = _walk(root)
    graph = nx.DiGraph()
    graph.add_nodes_from(node.id for node in nodes)
    graph.add_edges_from(links)
    return graph


class HierarchyGraph:
    """
    Layout engine for a rooted tree.

    Each instance owns its size registry. Registry updates and compute
    calls are not synchronized, so concurrent callers need separate
    instances.

    Attributes:
        config: Layout configuration.
        sizes: Registered node sizes.
    """

    def __init__(self, config: GraphConfig):
        config.validate()
        self.config = config
        self.sizes = SizeRegistry()
        self._trace: Optional[LayoutTrace] = None

    def register_size(self, node_id: str, size: SizeLike) -> None:
        """Store or overwrite the size of a node."""
        self.sizes.register(node_id, size)

    def is_ready(self, root: HierarchyNode) -> bool:
        """True if every node in the tree has a registered size."""
        return self.sizes.is_ready(root)

    def traverse(self, root: HierarchyNode) -> List[HierarchyNode]:
        """All nodes of the tree in depth-first preorder."""
        return list(iter_preorder(root))

    def get_subtree_ids(self, node: HierarchyNode) -> List[str]:
        """Ids of a node and its descendants in depth-first preorder."""
        return [n.id for n in iter_preorder(node)]

    def validate_tree(self, root: HierarchyNode) -> None:
        """
        Check that node ids are unique and form a single rooted tree.

        Raises:
            LayoutError: If two distinct nodes share an id, or a node is
                reachable from more than one parent or from itself.
        """
        nodes, _ = _walk(root)
        counts = Counter(n.id for n in nodes)
        duplicates = sorted(node_id for node_id, count in counts.items() if count > 1)
        if duplicates:
            raise LayoutError(f"Duplicate node ids: {', '.join(duplicates)}")

        graph = build_digraph(root)
        if nx.is_arborescence(graph):
            return

        try:
            cycle = nx.find_cycle(graph, source=root.id)
        except nx.NetworkXNoCycle:
            shared = sorted(n for n, degree in graph.in_degree() if degree > 1)
            raise LayoutError(
                f"Nodes under {root.id} do not form a tree: "
                f"{', '.join(shared)} reached from more than one parent"
            ) from None
        path = " -> ".join([cycle[0][0]] + [target for _, target in cycle])
        raise LayoutError(f"Nodes under {root.id} do not form a tree: cycle {path}")

    def compute(self, root: HierarchyNode, debug: bool = False) -> GraphResult:
        """
        Compute positions for every node and route every edge.

        Args:
            root: Root of the tree. It is placed at the origin.
            debug: Record a LayoutTrace, available from get_trace().

        Returns:
            GraphResult with one PlacedNode per tree node (preorder) and
            one Edge per parent -> child pair.

        Raises:
            LayoutError: If the nodes do not form a tree with unique ids,
                or any node has no registered size.
        """
        self.validate_tree(root)
        missing = self.sizes.missing(root)
        if missing:
            raise LayoutError(
                f"Missing sizes for {len(missing)} nodes. "
                f"Have {len(self.sizes)} sizes."
            )

        trace = None
        if debug:
            trace = LayoutTrace(root_id=root.id, direction=self.config.direction.value)
            trace.add_stage(
                "validate",
                {"node_count": len(self.traverse(root)), "sizes": len(self.sizes)},
            )
        self._trace = trace

        placer = NodePlacer(self.config, self.sizes, trace=trace)
        placed = placer.place_nodes(root)
        if trace is not None:
            trace.add_stage(
                "place",
                {
                    "placed": len(placed),
                    "max_depth": max(p.depth for p in placed),
                },
            )

        edges = self._generate_edges(placed)
        if trace is not None:
            trace.add_stage("route", {"edges": len(edges)})

        logger.debug(
            "Computed layout for %s: %d nodes, %d edges",
            root.id,
            len(placed),
            len(edges),
        )
        return GraphResult(nodes=placed, edges=edges)

    def regenerate_edges(self, placed: List[PlacedNode]) -> List[Edge]:
        """
        Re-route edges for already placed nodes without measuring or placing.

        Args:
            placed: Placed nodes, typically with position overrides applied.
        """
        return self._generate_edges(placed)

    def get_trace(self) -> Optional[LayoutTrace]:
        """Trace of the last compute call made with debug=True, else None."""
        return self._trace

    def _generate_edges(self, placed: List[PlacedNode]) -> List[Edge]:
        return EdgeRouter(self.sizes).route_edges(placed)
