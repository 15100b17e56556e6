"""
Edge routing module for hierarchy layout.

Routes each parent -> child connector as an orthogonal path with:
- Port sides picked from the geometry of the two placed nodes
- A single bend segment at the midpoint of the gap between the boxes

Routing looks only at where the nodes ended up, not at the flow
direction that put them there, so connectors stay readable when a node
is moved by a position override into an unexpected quadrant.
"""

import logging
from enum import Enum
from typing import Dict, Iterable, List

from .models import Bounds, Coordinate, Edge, LayoutError, PlacedNode
from .registry import SizeRegistry

logger = logging.getLogger(__name__)

# A displacement counts as vertical once |dy| exceeds this share of |dx|.
VERTICAL_BIAS = 0.5


class PortSide(Enum):
    """Which side of the parent box a connector leaves from."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


def classify(source: Coordinate, target: Coordinate) -> PortSide:
    """Pick the parent's exit side from the displacement between centers."""
    dx = target.x - source.x
    dy = target.y - source.y

    if abs(dy) > abs(dx) * VERTICAL_BIAS:
        return PortSide.BOTTOM if dy > 0 else PortSide.TOP
    return PortSide.RIGHT if dx > 0 else PortSide.LEFT


def route_waypoints(
    src_pos: Coordinate,
    src_bounds: Bounds,
    tgt_pos: Coordinate,
    tgt_bounds: Bounds,
) -> List[Coordinate]:
    """
    Four waypoints from the parent box to the child box.

    The path leaves the parent on the side facing the child, bends once
    halfway across the gap, and enters the child on the opposite side.
    """
    side = classify(src_pos, tgt_pos)

    if side == PortSide.BOTTOM:
        mid_y = src_bounds.bottom + (tgt_bounds.top - src_bounds.bottom) / 2
        return [
            Coordinate(src_pos.x, src_bounds.bottom),
            Coordinate(src_pos.x, mid_y),
            Coordinate(tgt_pos.x, mid_y),
            Coordinate(tgt_pos.x, tgt_bounds.top),
        ]

    if side == PortSide.TOP:
        mid_y = src_bounds.top + (tgt_bounds.bottom - src_bounds.top) / 2
        return [
            Coordinate(src_pos.x, src_bounds.top),
            Coordinate(src_pos.x, mid_y),
            Coordinate(tgt_pos.x, mid_y),
            Coordinate(tgt_pos.x, tgt_bounds.bottom),
        ]

    if side == PortSide.RIGHT:
        mid_x = src_bounds.right + (tgt_bounds.left - src_bounds.right) / 2
        return [
            Coordinate(src_bounds.right, src_pos.y),
            Coordinate(mid_x, src_pos.y),
            Coordinate(mid_x, tgt_pos.y),
            Coordinate(tgt_bounds.left, tgt_pos.y),
        ]

    mid_x = src_bounds.left + (tgt_bounds.right - src_bounds.left) / 2
    return [
        Coordinate(src_bounds.left, src_pos.y),
        Coordinate(mid_x, src_pos.y),
        Coordinate(mid_x, tgt_pos.y),
        Coordinate(tgt_bounds.right, tgt_pos.y),
    ]


class EdgeRouter:
    """
    Routes edges between placed nodes using orthogonal paths.
    """

    def __init__(self, sizes: SizeRegistry):
        self.sizes = sizes

    def route_edges(self, placed: Iterable[PlacedNode]) -> List[Edge]:
        """
        Route one edge per parent -> child pair.

        Args:
            placed: Placed nodes, possibly with overridden positions. Every
                child of a placed node must itself be in the list.

        Returns:
            Edges in parent order, then child order.

        Raises:
            LayoutError: If a child has no placed node or a size is missing.
        """
        placed = list(placed)
        by_id: Dict[str, PlacedNode] = {p.id: p for p in placed}
        edges: List[Edge] = []

        for parent in placed:
            if parent.node.is_leaf:
                continue

            src_bounds = Bounds.around(parent.position, self.sizes.get(parent.id))

            for child in parent.node.children:
                child_placed = by_id.get(child.id)
                if child_placed is None:
                    raise LayoutError(f"Cannot find placed node for {child.id}")

                tgt_bounds = Bounds.around(
                    child_placed.position, self.sizes.get(child.id)
                )
                waypoints = route_waypoints(
                    parent.position, src_bounds, child_placed.position, tgt_bounds
                )
                edges.append(
                    Edge(source=parent.node, target=child_placed.node, waypoints=waypoints)
                )

        logger.debug("Routed %d edges across %d placed nodes", len(edges), len(placed))
        return edges
