"""
Data models for hierarchy layout.

This module contains the dataclasses passed between the layout stages:
the input tree, node sizes, the placement output and routed edges.

Classes:
    FlowDirection: How a node's children are arranged.
    Coordinate: A point in 2D space.
    Dimensions: Width and height of a node's box.
    Bounds: Edges of an axis-aligned box.
    HierarchyNode: A node of the input tree.
    PlacedNode: A node with its computed center position.
    Edge: A routed connector between a parent and one of its children.
    GraphResult: Placed nodes and edges for a whole tree.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import Any, Dict, List, Mapping, Optional, Union


class LayoutError(Exception):
    """Raised when a layout precondition is violated."""

    pass


class FlowDirection(str, Enum):
    """Whether a node's children are stacked or spread."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"

    @classmethod
    def parse(cls, value: Union[str, "FlowDirection"]) -> "FlowDirection":
        """Convert a string or enum member into a FlowDirection."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise LayoutError(
                f"Unknown flow direction {value!r}: "
                "expected 'vertical' or 'horizontal'"
            ) from None


@dataclass(frozen=True)
class Coordinate:
    """A point in 2D space."""

    x: float
    y: float

    def offset(self, dx: float, dy: float) -> "Coordinate":
        return Coordinate(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Dimensions:
    """Width and height of a node's box. Both must be non-negative."""

    width: float
    height: float

    def __post_init__(self):
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise LayoutError(f"Dimensions {name} must be a number, got {value!r}")
            if math.isnan(value):
                raise LayoutError(f"Dimensions {name} must not be NaN")
        if self.width < 0 or self.height < 0:
            raise LayoutError(
                f"Dimensions must be non-negative, got "
                f"width={self.width}, height={self.height}"
            )


@dataclass(frozen=True)
class Bounds:
    """Edges of an axis-aligned box."""

    left: float
    right: float
    top: float
    bottom: float

    @classmethod
    def around(cls, center: Coordinate, size: Dimensions) -> "Bounds":
        """Bounds of a box of the given size centered on a point."""
        return cls(
            left=center.x - size.width / 2,
            right=center.x + size.width / 2,
            top=center.y - size.height / 2,
            bottom=center.y + size.height / 2,
        )


@dataclass
class HierarchyNode:
    """
    A node of the input tree.

    Attributes:
        id: Identifier, unique within the tree.
        direction: Flow direction for this node's children. Overrides the
            inherited default; None means inherit.
        children: Ordered child nodes.
        data: Caller-defined fields. Never read by the layout engine.
    """

    id: str
    direction: Optional[FlowDirection] = None
    children: List["HierarchyNode"] = field(default_factory=list)
    data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.direction is not None:
            self.direction = FlowDirection.parse(self.direction)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "HierarchyNode":
        """
        Build a tree from nested mappings.

        Keys other than ``id``, ``direction`` and ``children`` are kept in
        ``data``.

        Example:
            >>> root = HierarchyNode.from_dict({
            ...     "id": "root",
            ...     "direction": "vertical",
            ...     "children": [{"id": "a", "label": "First"}],
            ... })
            >>> root.children[0].data
            {'label': 'First'}
        """
        if "id" not in raw:
            raise LayoutError(f"Node mapping has no 'id': {dict(raw)!r}")

        extra = {
            key: value
            for key, value in raw.items()
            if key not in ("id", "direction", "children")
        }
        return cls(
            id=str(raw["id"]),
            direction=raw.get("direction"),
            children=[cls.from_dict(child) for child in raw.get("children") or []],
            data=extra,
        )


@dataclass(frozen=True)
class PlacedNode:
    """
    A node with its calculated position after layout.

    Attributes:
        node: The input node.
        position: Center of the node's box.
        depth: Distance from the root (root is 0).
    """

    node: HierarchyNode
    position: Coordinate
    depth: int

    @property
    def id(self) -> str:
        return self.node.id


@dataclass
class Edge:
    """A routed connector between a parent and one of its children."""

    source: HierarchyNode
    target: HierarchyNode
    waypoints: List[Coordinate] = field(default_factory=list)


@dataclass
class GraphResult:
    """Result of running the layout algorithm."""

    nodes: List[PlacedNode] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)

    def node_map(self) -> Dict[str, PlacedNode]:
        """Placed nodes keyed by node id."""
        return {placed.id: placed for placed in self.nodes}
