"""
Region quadtree for point-like entities.

Nodes live in a flat arena owned by the tree and point at their parent and
children by index. A leaf holds up to ``capacity`` entities; inserting past
that splits it into four quadrants, and removals collapse branches back into
leaves once their subtree fits in a single node again.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .entity import Entity
from .geometry import Rectangle

logger = logging.getLogger(__name__)

# Quadrants narrower or shorter than this are never created.
DEFAULT_MIN_SIZE = 4


@dataclass
class QuadNode:
    """One arena slot: a leaf when children is None, else a branch."""

    bounds: Rectangle
    depth: int
    capacity: int
    parent: Optional[int] = None
    children: Optional[Tuple[int, int, int, int]] = None
    objects: List[Entity] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    def holds(self, obj: Entity) -> bool:
        return any(o is obj for o in self.objects)

    def __repr__(self) -> str:
        kind = "leaf" if self.is_leaf else "branch"
        return (
            f"QuadNode({kind}, bounds={self.bounds!r}, "
            f"objects={len(self.objects)}, depth={self.depth})"
        )


class QuadTree:
    """
    Spatial index over entity positions.

    Parameters:
        x, y, width, height: Region covered by the root node
        depth: How many times the root may be subdivided along any path
        capacity: Entities a leaf holds before it tries to subdivide
        min_size: Smallest half-width or half-height a subdivision may produce
    """

    ROOT = 0

    def __init__(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        depth: int,
        capacity: int,
        min_size: int = DEFAULT_MIN_SIZE,
    ) -> None:
        if depth < 0:
            raise ValueError(f"depth must be >= 0, got {depth}")
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.min_size: int = min_size
        self._nodes: List[Optional[QuadNode]] = [
            QuadNode(Rectangle(x, y, width, height), depth, capacity)
        ]
        self._free: List[int] = []

    @classmethod
    def covering(
        cls, bounds: Rectangle, depth: int, capacity: int, min_size: int = DEFAULT_MIN_SIZE
    ) -> "QuadTree":
        """Tree whose root covers bounds."""
        return cls(bounds.x, bounds.y, bounds.width, bounds.height, depth, capacity, min_size)

    def __repr__(self) -> str:
        return (
            f"QuadTree(bounds={self.bounds!r}, nodes={self.total_nodes()}, "
            f"objects={self.total_objects()})"
        )

    @property
    def bounds(self) -> Rectangle:
        return self._node(self.ROOT).bounds.copy()

    @property
    def arena_size(self) -> int:
        """Slots ever allocated, live or free."""
        return len(self._nodes)

    def node(self, index: int) -> QuadNode:
        """Arena lookup, for diagnostics and tests."""
        return self._node(index)

    def find(self, obj: Entity, index: int = ROOT) -> Optional[int]:
        """Index of the node holding obj, searching the whole subtree."""
        node = self._node(index)
        if node.holds(obj):
            return index
        if node.children is not None:
            for child in node.children:
                found = self.find(obj, child)
                if found is not None:
                    return found
        return None

    def insert(self, obj: Entity) -> bool:
        """
        Store obj in the leaf covering its position.

        Returns False if the position is outside the tree or obj is already
        stored somewhere in it.
        """
        if not self._node(self.ROOT).bounds.contains(obj.x, obj.y):
            return False
        if self.find(obj) is not None:
            return False
        return self._insert(self.ROOT, obj)

    def remove(self, obj: Entity) -> bool:
        """
        Remove obj, then collapse ancestors that no longer need to be split.

        The leaf is located from obj's current position, so an entity whose
        position was changed behind the tree's back will not be found.
        """
        index = self._leaf_for(obj.x, obj.y)
        if index is None:
            return False
        node = self._node(index)
        for i, o in enumerate(node.objects):
            if o is obj:
                del node.objects[i]
                break
        else:
            return False

        self._merge_upward(node.parent)
        return True

    def move(self, obj: Entity, x: int, y: int) -> bool:
        """
        Reposition obj and re-index it.

        Returns False without touching obj if it is not currently indexed. If
        the new position is outside the tree, obj is moved but left out of the
        index and False is returned.
        """
        if not self.remove(obj):
            return False
        obj.set_xy(x, y)
        return self.insert(obj)

    def query(self, region: Rectangle, cull: bool = False) -> List[Entity]:
        """
        Entities in the leaves overlapping region.

        Without cull, every entity of an overlapping leaf is returned, which
        may include entities outside region. With cull, only entities whose
        position lies inside region are returned.
        """
        found: List[Entity] = []
        self._query(self.ROOT, region, cull, found)
        return found

    def total_nodes(self, index: int = ROOT) -> int:
        node = self._node(index)
        total = 1
        if node.children is not None:
            total += sum(self.total_nodes(child) for child in node.children)
        return total

    def total_objects(self, index: int = ROOT) -> int:
        node = self._node(index)
        total = len(node.objects)
        if node.children is not None:
            total += sum(self.total_objects(child) for child in node.children)
        return total

    def is_border(self, x: int, y: int) -> bool:
        """True if (x, y) is one of the outermost cells of the root region."""
        bounds = self._node(self.ROOT).bounds
        if not bounds.contains(x, y):
            return False
        return (
            x == bounds.left
            or x == bounds.right - 1
            or y == bounds.top
            or y == bounds.bottom - 1
        )

    def leaves(self, index: int = ROOT) -> Iterator[QuadNode]:
        node = self._node(index)
        if node.children is None:
            yield node
            return
        for child in node.children:
            yield from self.leaves(child)

    def max_depth(self, index: int = ROOT) -> int:
        """Number of branch levels below index."""
        node = self._node(index)
        if node.children is None:
            return 0
        return 1 + max(self.max_depth(child) for child in node.children)

    # Private /////////////////////////////////////////////////////////////

    def _node(self, index: int) -> QuadNode:
        node = self._nodes[index]
        if node is None:
            raise IndexError(f"quadtree node {index} has been freed")
        return node

    def _allocate(self, node: QuadNode) -> int:
        if self._free:
            index = self._free.pop()
            self._nodes[index] = node
            return index
        self._nodes.append(node)
        return len(self._nodes) - 1

    def _release(self, index: int) -> None:
        node = self._node(index)
        if node.children is not None:
            for child in node.children:
                self._release(child)
        self._nodes[index] = None
        self._free.append(index)

    def _insert(self, index: int, obj: Entity) -> bool:
        node = self._node(index)
        if not node.bounds.contains(obj.x, obj.y):
            return False
        if node.is_leaf:
            if (
                node.depth == 0
                or len(node.objects) < node.capacity
                or not self._subdivide(index)
            ):
                node.objects.append(obj)
                return True
        for child in node.children:
            if self._insert(child, obj):
                return True
        return False

    def _subdivide(self, index: int) -> bool:
        node = self._node(index)
        b = node.bounds
        hw, hh = b.width >> 1, b.height >> 1
        if hw < self.min_size or hh < self.min_size:
            node.depth = 0
            return False

        # Odd remainders go to the east and south quadrants.
        ow, oh = b.width & 1, b.height & 1
        quadrants = (
            Rectangle(b.x, b.y, hw, hh),
            Rectangle(b.x + hw, b.y, hw + ow, hh),
            Rectangle(b.x, b.y + hh, hw, hh + oh),
            Rectangle(b.x + hw, b.y + hh, hw + ow, hh + oh),
        )
        children = tuple(
            self._allocate(QuadNode(rect, node.depth - 1, node.capacity, parent=index))
            for rect in quadrants
        )
        node.children = children

        objects, node.objects = node.objects, []
        for obj in objects:
            for child in children:
                if self._insert(child, obj):
                    break
        logger.debug("Subdivided node %d %r into %r", index, b, children)
        return True

    def _merge_upward(self, index: Optional[int]) -> None:
        """
        Collapse branches from index toward the root.

        Stops at the first branch that still holds more than its capacity:
        every ancestor holds at least as many entities with the same capacity.
        """
        while index is not None:
            node = self._node(index)
            if node.children is None:
                index = node.parent
                continue
            if self.total_objects(index) > node.capacity:
                return
            collected: List[Entity] = []
            for child in node.children:
                self._collect(child, collected)
                self._release(child)
            node.children = None
            node.objects = collected
            logger.debug("Merged node %d back into a leaf with %d objects", index, len(collected))
            index = node.parent

    def _collect(self, index: int, found: List[Entity]) -> None:
        node = self._node(index)
        found.extend(node.objects)
        if node.children is not None:
            for child in node.children:
                self._collect(child, found)

    def _leaf_for(self, x: int, y: int) -> Optional[int]:
        index = self.ROOT
        node = self._node(index)
        if not node.bounds.contains(x, y):
            return None
        while node.children is not None:
            for child in node.children:
                if self._node(child).bounds.contains(x, y):
                    index = child
                    break
            else:
                return None
            node = self._node(index)
        return index

    def _query(self, index: int, region: Rectangle, cull: bool, found: List[Entity]) -> None:
        node = self._node(index)
        if not node.bounds.overlaps(region):
            return
        if node.children is not None:
            for child in node.children:
                self._query(child, region, cull, found)
            return
        for obj in node.objects:
            if cull and not region.contains(obj.x, obj.y):
                continue
            found.append(obj)
