"""
Layout export.

Turns a GraphResult into plain dictionaries and lists that serialize
directly with ``json.dumps``: node positions and sizes, edge waypoints
and the bounding box of all nodes.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable

from .models import Bounds, GraphResult, PlacedNode
from .registry import SizeRegistry


def compute_bounds(placed: Iterable[PlacedNode], sizes: SizeRegistry) -> Bounds:
    """
    Bounding box of all node boxes.

    An empty node list gives a zero-sized box at the origin.
    """
    min_x = min_y = float("inf")
    max_x = max_y = float("-inf")
    seen = False

    for p in placed:
        box = Bounds.around(p.position, sizes.get(p.id))
        min_x = min(min_x, box.left)
        max_x = max(max_x, box.right)
        min_y = min(min_y, box.top)
        max_y = max(max_y, box.bottom)
        seen = True

    if not seen:
        return Bounds(0, 0, 0, 0)
    return Bounds(left=min_x, right=max_x, top=min_y, bottom=max_y)


def _point(c) -> Dict[str, float]:
    return {"x": c.x, "y": c.y}


def export_layout(result: GraphResult, sizes: SizeRegistry) -> Dict[str, Any]:
    """
    Export graph data to a JSON-ready dictionary.

    Returns:
        Dictionary with ``nodes`` (id, data, position, size), ``edges``
        (sourceId, targetId, waypoints) and ``bounds`` (minX, maxX, minY,
        maxY).
    """
    nodes = []
    for p in result.nodes:
        size = sizes.get(p.id)
        nodes.append(
            {
                "id": p.id,
                "data": dict(p.node.data),
                "position": _point(p.position),
                "size": {"width": size.width, "height": size.height},
            }
        )

    edges = [
        {
            "sourceId": edge.source.id,
            "targetId": edge.target.id,
            "waypoints": [_point(w) for w in edge.waypoints],
        }
        for edge in result.edges
    ]

    bounds = compute_bounds(result.nodes, sizes)
    return {
        "nodes": nodes,
        "edges": edges,
        "bounds": {
            "minX": bounds.left,
            "maxX": bounds.right,
            "minY": bounds.top,
            "maxY": bounds.bottom,
        },
    }


def save_json(result: GraphResult, sizes: SizeRegistry, filename: str) -> None:
    """Write the exported layout to a JSON file."""
    output_path = Path(filename)
    output_path.write_text(
        json.dumps(export_layout(result, sizes), indent=2), encoding="utf-8"
    )
