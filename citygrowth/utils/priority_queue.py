"""Priority queue implementation for growth frontiers and path searches.

Items are dequeued by ascending priority. Items of equal priority leave the
queue in the order they entered it.
"""
import heapq
import itertools
from typing import Generic, List, Optional, Tuple, TypeVar

T = TypeVar('T')


class PriorityQueue(Generic[T]):
    """A stable min-priority queue.

    Entries are heap-ordered on (priority, insertion sequence), so ties are
    broken by insertion order and the items themselves are never compared.
    """

    def __init__(self):
        """Initialize an empty priority queue."""
        self.elements: List[Tuple[float, int, T]] = []
        self._counter = itertools.count()

    def enqueue(self, item: T, priority: float):
        """Add an item to the queue.

        Args:
            item: The item to add to the queue.
            priority: Numeric priority, lower values are dequeued first.
        """
        heapq.heappush(self.elements, (priority, next(self._counter), item))

    def dequeue(self) -> Optional[T]:
        """Remove and return the item with the lowest priority.

        Returns:
            The item with the lowest priority, or None if the queue is empty.
        """
        if not self.elements:
            return None
        return heapq.heappop(self.elements)[2]

    def empty(self) -> bool:
        """Check if the queue is empty.

        Returns:
            True if the queue is empty, False otherwise.
        """
        return len(self.elements) == 0

    def __len__(self):
        """Get the number of elements in the queue.

        Returns:
            The number of elements in the queue.
        """
        return len(self.elements)
