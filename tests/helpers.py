"""Segment builders shared by the graph tests."""
from citygrowth.citygen.dataclass import HIGHWAY, NORMAL_ROAD, MetaInfo, Point
from citygrowth.citygen.road.segment import Segment


def make_segment(start, end, highway=False):
    """Build an unregistered segment between two coordinate pairs."""
    road_class = HIGHWAY if highway else NORMAL_ROAD
    return Segment(Point(*start), Point(*end), MetaInfo(highway=highway), road_class)


def accept(manager, start, end, highway=False):
    """Build a segment and accept it into the manager."""
    segment = make_segment(start, end, highway)
    manager.add_segment(segment)
    return segment


def link(back, front):
    """Link front's backward end to back's forward end."""
    back.links_f.append(front.id)
    front.links_b.append(back.id)
