"""Quadtree implementation for efficient spatial partitioning and querying."""
from typing import Dict, Generic, List, Optional, TypeVar

from citygrowth.citygen.dataclass import Bounds

T = TypeVar('T')


class QuadTree(Generic[T]):
    """Quadtree data structure for efficient spatial partitioning and querying.

    A quadtree recursively divides space into four quadrants to efficiently store and
    query spatial data. Items straddling a split line are stored in every quadrant
    they touch; queries return each item once.

    Attributes:
        bounds: The spatial bounds of this quadtree node.
        max_objects: Maximum number of objects before splitting.
        max_levels: Maximum depth of the quadtree.
        level: Current depth level of this node.
        objects: List of object bounds in this node.
        items: List of items corresponding to the bounds.
        nodes: Child nodes of this quadtree.
    """

    def __init__(self, bounds: Bounds, max_objects=10, max_levels=4, level=0):
        """Initialize a new quadtree node.

        Args:
            bounds: The spatial bounds of this quadtree node.
            max_objects: Maximum number of objects before splitting.
            max_levels: Maximum depth of the quadtree.
            level: Current depth level of this node.
        """
        self.bounds = bounds
        self.max_objects = max_objects
        self.max_levels = max_levels
        self.level = level
        self.objects: List[Bounds] = []
        self.items: List[T] = []
        self.nodes: List[Optional[QuadTree]] = [None] * 4

    def split(self):
        """Split this node into four child nodes.

        Divides the current node into four equal quadrants and moves the
        contained objects down into them.
        """
        width = self.bounds.width / 2
        height = self.bounds.height / 2
        x = self.bounds.x
        y = self.bounds.y

        self.nodes[0] = QuadTree(Bounds(x + width, y, width, height), self.max_objects, self.max_levels, self.level + 1)
        self.nodes[1] = QuadTree(Bounds(x, y, width, height), self.max_objects, self.max_levels, self.level + 1)
        self.nodes[2] = QuadTree(Bounds(x, y + height, width, height), self.max_objects, self.max_levels, self.level + 1)
        self.nodes[3] = QuadTree(Bounds(x + width, y + height, width, height), self.max_objects, self.max_levels, self.level + 1)

        objects, items = self.objects, self.items
        self.objects, self.items = [], []
        for rect, item in zip(objects, items):
            for node in self.get_relevant_nodes(rect):
                node.insert(rect, item)

    def get_relevant_nodes(self, rect: Bounds) -> List['QuadTree[T]']:
        """Get the child nodes that intersect with the given rectangle.

        Args:
            rect: The bounding rectangle to test intersection with.

        Returns:
            List of child nodes that intersect with the rectangle.
        """
        nodes = []
        mid_x = self.bounds.x + self.bounds.width / 2
        mid_y = self.bounds.y + self.bounds.height / 2

        top = rect.y <= mid_y
        bottom = rect.y + rect.height > mid_y

        if rect.x <= mid_x:
            if top:
                nodes.append(self.nodes[1])
            if bottom:
                nodes.append(self.nodes[2])
        if rect.x + rect.width > mid_x:
            if top:
                nodes.append(self.nodes[0])
            if bottom:
                nodes.append(self.nodes[3])
        return [n for n in nodes if n is not None]

    def insert(self, rect: Bounds, item: T = None):
        """Insert an item with its bounds into the quadtree.

        Args:
            rect: The bounding rectangle of the item.
            item: The item to insert. Defaults to the owner of the rectangle.
        """
        if item is None:
            item = rect.owner
        if any(self.nodes):
            for node in self.get_relevant_nodes(rect):
                node.insert(rect, item)
            return
        self.objects.append(rect)
        self.items.append(item)

        if len(self.objects) > self.max_objects and self.level < self.max_levels:
            self.split()

    def retrieve(self, rect: Bounds) -> List[T]:
        """Retrieve every item whose stored bounds overlap the given rectangle.

        Args:
            rect: The bounding rectangle to query.

        Returns:
            Overlapping items, each once, in insertion-traversal order.
        """
        found: Dict[int, T] = {}
        self._collect(rect, found)
        return list(found.values())

    def _collect(self, rect: Bounds, found: Dict[int, T]):
        if any(self.nodes):
            for node in self.get_relevant_nodes(rect):
                node._collect(rect, found)
            return
        for item_rect, item in zip(self.objects, self.items):
            if id(item) not in found and rect.intersects(item_rect):
                found[id(item)] = item

    def __len__(self):
        """Count the distinct items stored in the tree."""
        return len(self._all_items())

    def _all_items(self) -> Dict[int, T]:
        found: Dict[int, T] = {}
        stack = [self]
        while stack:
            node = stack.pop()
            if any(node.nodes):
                stack.extend(n for n in node.nodes if n is not None)
            else:
                for item in node.items:
                    found.setdefault(id(item), item)
        return found
