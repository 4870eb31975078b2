"""Tests for the quadtree spatial index."""
from citygrowth.citygen.dataclass import Bounds
from citygrowth.utils.quadtree import QuadTree


class Box:
    def __init__(self, name, x, y, size):
        self.name = name
        self.bounds = Bounds(x, y, size, size, self)


def build_tree():
    tree = QuadTree(Bounds(0, 0, 100, 100), max_objects=2, max_levels=4)
    boxes = [
        Box('top_left', 1, 1, 5),
        Box('top_right', 80, 5, 5),
        Box('bottom_left', 5, 80, 5),
        Box('bottom_right', 80, 80, 5),
        Box('centre', 45, 45, 10),
    ]
    for box in boxes:
        tree.insert(box.bounds)
    return tree, {box.name: box for box in boxes}


def test_insert_defaults_item_to_owner():
    tree, boxes = build_tree()

    assert boxes['top_left'] in tree.retrieve(Bounds(0, 0, 10, 10))


def test_retrieve_filters_by_overlap():
    tree, boxes = build_tree()

    found = tree.retrieve(Bounds(0, 0, 10, 10))

    assert found == [boxes['top_left']]


def test_straddling_item_is_returned_once():
    tree, boxes = build_tree()

    found = tree.retrieve(Bounds(40, 40, 20, 20))

    assert found == [boxes['centre']]


def test_tree_splits_and_counts_distinct_items():
    tree, _ = build_tree()

    assert any(tree.nodes)
    assert tree.objects == []
    assert len(tree) == 5


def test_query_spanning_everything_returns_all_items():
    tree, boxes = build_tree()

    found = tree.retrieve(Bounds(0, 0, 100, 100))

    assert sorted(box.name for box in found) == sorted(boxes)


def test_explicit_item_overrides_owner():
    tree = QuadTree(Bounds(0, 0, 100, 100))
    tree.insert(Bounds(10, 10, 5, 5, owner='owner'), 'item')

    assert tree.retrieve(Bounds(0, 0, 50, 50)) == ['item']
