"""
Node placement.

Positions every node of a tree relative to the root, which always sits
at the origin. Each node's resolved flow direction decides how its
children are arranged:

- horizontal: children spread side by side below the parent, centered
  under it, each taking the width of its measured subtree.
- vertical: children stacked below the parent and indented to the right,
  each taking the height of its measured subtree.
"""

from typing import List, Optional, Tuple

from .config import GraphConfig
from .measure import SubtreeMeasurer
from .models import Coordinate, FlowDirection, HierarchyNode, PlacedNode
from .registry import SizeRegistry
from .tracer import LayoutTrace

ORIGIN = Coordinate(0, 0)


class NodePlacer:
    """
    Depth-first placement of a tree's nodes.

    Attributes:
        config: Layout configuration.
        sizes: Registry holding each node's own dimensions.
        measurer: Subtree measurer sharing the same config and sizes.
        trace: Optional trace receiving a record per placed node.
    """

    def __init__(
        self,
        config: GraphConfig,
        sizes: SizeRegistry,
        trace: Optional[LayoutTrace] = None,
    ):
        self.config = config
        self.sizes = sizes
        self.measurer = SubtreeMeasurer(config, sizes)
        self.trace = trace

    def place_nodes(
        self,
        node: HierarchyNode,
        depth: int = 0,
        anchor: Coordinate = ORIGIN,
    ) -> List[PlacedNode]:
        """
        Place a node and its whole subtree.

        Args:
            node: Node to place.
            depth: Depth of the node; depth 0 is placed at the origin.
            anchor: Center position chosen by the parent.

        Returns:
            PlacedNode list for the subtree in depth-first preorder.
        """
        placed: List[PlacedNode] = []
        # (node, depth, anchor, parent flow, parent-measured extent)
        stack: List[Tuple[HierarchyNode, int, Coordinate, str, Optional[float]]] = [
            (node, depth, anchor, "root", None)
        ]

        while stack:
            current, level, target, flow, extent = stack.pop()
            pos = ORIGIN if level == 0 else target
            placed.append(PlacedNode(node=current, position=pos, depth=level))

            if self.trace is not None:
                self.trace.add_placement(current.id, level, pos.x, pos.y, flow, extent)

            children = self._place_children(current, pos)
            stack.extend(
                (child, level + 1, child_anchor, child_flow, child_extent)
                for child, child_anchor, child_flow, child_extent in reversed(children)
            )

        return placed

    def _place_children(
        self, node: HierarchyNode, pos: Coordinate
    ) -> List[Tuple[HierarchyNode, Coordinate, str, float]]:
        """Anchor, flow and measured extent for each child of a placed node."""
        size = self.sizes.get(node.id)
        if node.is_leaf:
            return []

        direction = self.measurer.direction_of(node)
        gap = self.config.gap
        tuning = self.config.tuning
        anchors = []

        if direction == FlowDirection.VERTICAL:
            heights = [self.measurer.measure_height(c) for c in node.children]
            left = pos.x - size.width / 2
            start_y = pos.y + size.height / 2 + gap.y

            for idx, child in enumerate(node.children):
                child_size = self.sizes.get(child.id)
                cy = self._stack_y(start_y, idx, heights)
                child_anchor = Coordinate(
                    left + child_size.width / 2 + tuning.indent,
                    cy + tuning.vertical_shift,
                )
                anchors.append((child, child_anchor, direction.value, heights[idx]))
        else:
            widths = [self.measurer.measure_width(c) for c in node.children]
            top_y = pos.y + size.height / 2 + gap.y

            for idx, child in enumerate(node.children):
                child_size = self.sizes.get(child.id)
                child_anchor = Coordinate(
                    self._spread_x(pos.x, idx, widths),
                    top_y + child_size.height / 2,
                )
                anchors.append((child, child_anchor, direction.value, widths[idx]))

        return anchors

    def _spread_x(self, parent_x: float, idx: int, widths: List[float]) -> float:
        """Center X of child idx when children are spread under the parent."""
        if len(widths) == 1:
            return parent_x

        gap_x = self.config.gap.x
        full_width = sum(widths) + (len(widths) - 1) * gap_x

        x = parent_x - full_width / 2
        for i in range(idx):
            x += widths[i] + gap_x
        return x + widths[idx] / 2

    def _stack_y(self, start_y: float, idx: int, heights: List[float]) -> float:
        """Center Y of child idx when children are stacked below the parent."""
        sibling_gap = self.config.gap.y * self.config.tuning.sibling_factor

        y = start_y + heights[0] / 2
        for i in range(idx):
            y += heights[i] / 2 + sibling_gap + heights[i + 1] / 2
        return y
