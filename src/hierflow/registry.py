"""
Size registry.

Node sizes are measured by the caller (text, images, whatever a node
renders) and registered here before layout runs. The layout engine never
measures content itself.
"""

from typing import Dict, Iterator, List, Mapping, Sequence, Union

from .models import Dimensions, HierarchyNode, LayoutError

SizeLike = Union[Dimensions, Sequence[float], Mapping[str, float]]


def iter_preorder(root: HierarchyNode) -> Iterator[HierarchyNode]:
    """Yield a node and its descendants depth-first, parents first."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def as_dimensions(size: SizeLike) -> Dimensions:
    """Coerce a Dimensions, (width, height) pair or mapping to Dimensions."""
    if isinstance(size, Dimensions):
        return size
    if isinstance(size, Mapping):
        try:
            return Dimensions(width=size["width"], height=size["height"])
        except KeyError as e:
            raise LayoutError(f"Size mapping is missing {e.args[0]!r}") from None
    try:
        width, height = size
    except (TypeError, ValueError):
        raise LayoutError(
            f"Size must be a (width, height) pair or mapping, got {size!r}"
        ) from None
    return Dimensions(width=width, height=height)


class SizeRegistry:
    """
    Mapping from node id to measured dimensions.

    Not synchronized: concurrent callers each need their own registry.
    """

    def __init__(self):
        self._sizes: Dict[str, Dimensions] = {}

    def __len__(self) -> int:
        return len(self._sizes)

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._sizes

    def register(self, node_id: str, size: SizeLike) -> None:
        """Store or overwrite the size of a node."""
        self._sizes[node_id] = as_dimensions(size)

    def get(self, node_id: str) -> Dimensions:
        """
        Return the registered size of a node.

        Raises:
            LayoutError: If no size was registered for the id.
        """
        try:
            return self._sizes[node_id]
        except KeyError:
            raise LayoutError(f"Missing size for node {node_id}") from None

    def missing(self, root: HierarchyNode) -> List[str]:
        """Ids in the tree that have no registered size, in preorder."""
        return [node.id for node in iter_preorder(root) if node.id not in self._sizes]

    def is_ready(self, root: HierarchyNode) -> bool:
        """True if every node in the tree has a registered size."""
        return all(node.id in self._sizes for node in iter_preorder(root))

    def clear(self) -> None:
        self._sizes.clear()
