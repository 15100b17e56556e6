"""
Position overrides.

Interactive callers (dragging, manual nudges) keep a sparse mapping from
node id to replacement position. The mapping is applied as an overlay
when reading a layout; the placement result itself is never modified.

Example:
    >>> overrides = move_subtree(result.nodes, root.children[0], Coordinate(40, 0))
    >>> moved = apply_overrides(result.nodes, overrides)
    >>> edges = graph.regenerate_edges(moved)
"""

from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from .models import Coordinate, HierarchyNode, LayoutError, PlacedNode
from .registry import iter_preorder

PositionOverrides = Dict[str, Coordinate]


def apply_overrides(
    placed: Iterable[PlacedNode], overrides: Optional[PositionOverrides]
) -> List[PlacedNode]:
    """Copy of the placed list with overridden ids at their new positions."""
    if not overrides:
        return list(placed)
    return [
        replace(p, position=overrides[p.id]) if p.id in overrides else p
        for p in placed
    ]


def _current_position(
    by_id: Dict[str, PlacedNode], overrides: PositionOverrides, node_id: str
) -> Coordinate:
    if node_id in overrides:
        return overrides[node_id]
    try:
        return by_id[node_id].position
    except KeyError:
        raise LayoutError(f"Cannot find placed node for {node_id}") from None


def _move(
    placed: Iterable[PlacedNode],
    node_ids: List[str],
    delta: Coordinate,
    overrides: Optional[PositionOverrides],
) -> PositionOverrides:
    by_id = {p.id: p for p in placed}
    result = dict(overrides or {})
    for node_id in node_ids:
        current = _current_position(by_id, result, node_id)
        result[node_id] = current.offset(delta.x, delta.y)
    return result


def move_node(
    placed: Iterable[PlacedNode],
    node_id: str,
    delta: Coordinate,
    overrides: Optional[PositionOverrides] = None,
) -> PositionOverrides:
    """
    New override mapping with one node moved by delta.

    Existing overrides are kept; the input mapping is not modified.
    """
    return _move(placed, [node_id], delta, overrides)


def move_subtree(
    placed: Iterable[PlacedNode],
    node: HierarchyNode,
    delta: Coordinate,
    overrides: Optional[PositionOverrides] = None,
) -> PositionOverrides:
    """New override mapping with a node and all its descendants moved by delta."""
    ids = [n.id for n in iter_preorder(node)]
    return _move(placed, ids, delta, overrides)
