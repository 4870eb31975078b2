"""Tests for the stable priority queue."""
from citygrowth.utils.priority_queue import PriorityQueue


def test_dequeues_lowest_priority_first():
    queue = PriorityQueue()
    queue.enqueue('late', 3)
    queue.enqueue('early', 1)
    queue.enqueue('middle', 2)

    assert [queue.dequeue() for _ in range(3)] == ['early', 'middle', 'late']


def test_equal_priorities_keep_insertion_order():
    queue = PriorityQueue()
    for name in ('a', 'b', 'c'):
        queue.enqueue(name, 0)

    assert [queue.dequeue() for _ in range(3)] == ['a', 'b', 'c']


def test_items_are_never_compared():
    queue = PriorityQueue()
    queue.enqueue({'x': 1}, 1)
    queue.enqueue({'x': 2}, 1)

    assert queue.dequeue() == {'x': 1}


def test_empty_queue():
    queue = PriorityQueue()

    assert queue.empty()
    assert len(queue) == 0
    assert queue.dequeue() is None

    queue.enqueue('item', 0.5)
    assert not queue.empty()
    assert len(queue) == 1
