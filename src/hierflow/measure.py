"""
Subtree measurement.

Computes how much room a node's whole subtree needs. The placer uses
these sizes to spread or stack siblings without overlap.

Horizontal flow lays children side by side, so widths add up and the
tallest child decides the height. Vertical flow stacks children, so
heights add up and the subtree only reports a compressed share of its
widest child: stacked children are indented rather than spread, and
should not claim full sibling spacing from an ancestor.
"""

from typing import Callable, Dict, List

from .config import GraphConfig
from .models import FlowDirection, HierarchyNode
from .registry import SizeRegistry


def resolve_direction(node: HierarchyNode, default: FlowDirection) -> FlowDirection:
    """Flow direction for a node's children: its own override, else default."""
    if node.direction is not None:
        return node.direction
    return default


class SubtreeMeasurer:
    """
    Measures subtree footprints from registered node sizes.

    Attributes:
        config: Layout configuration (gap, default direction, tuning).
        sizes: Registry holding each node's own dimensions.
    """

    def __init__(self, config: GraphConfig, sizes: SizeRegistry):
        self.config = config
        self.sizes = sizes

    def direction_of(self, node: HierarchyNode) -> FlowDirection:
        return resolve_direction(node, self.config.direction)

    def measure_width(self, node: HierarchyNode) -> float:
        """Width needed to draw the node and all of its descendants."""
        return self._measure(node, self._width_of)

    def measure_height(self, node: HierarchyNode) -> float:
        """Height needed to draw the node and all of its descendants."""
        return self._measure(node, self._height_of)

    def _measure(
        self,
        node: HierarchyNode,
        combine: Callable[[HierarchyNode, List[float]], float],
    ) -> float:
        """Fold child measurements up the subtree, children before parents."""
        measured: Dict[int, float] = {}
        stack = [(node, False)]

        while stack:
            current, expanded = stack.pop()
            if expanded or current.is_leaf:
                child_values = [measured[id(child)] for child in current.children]
                measured[id(current)] = combine(current, child_values)
            else:
                stack.append((current, True))
                stack.extend((child, False) for child in current.children)

        return measured[id(node)]

    def _width_of(self, node: HierarchyNode, child_widths: List[float]) -> float:
        size = self.sizes.get(node.id)
        if not child_widths:
            return size.width

        if self.direction_of(node) == FlowDirection.HORIZONTAL:
            gaps = (len(child_widths) - 1) * self.config.gap.x
            return max(size.width, sum(child_widths) + gaps)

        return (
            size.width
            + self.config.gap.x
            + max(child_widths) * self.config.tuning.compression
        )

    def _height_of(self, node: HierarchyNode, child_heights: List[float]) -> float:
        size = self.sizes.get(node.id)
        if not child_heights:
            return size.height

        if self.direction_of(node) == FlowDirection.VERTICAL:
            gaps = (len(child_heights) - 1) * self.config.gap.y
            return max(size.height, sum(child_heights) + gaps)

        return size.height + self.config.gap.y + max(child_heights)
