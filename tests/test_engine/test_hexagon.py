"""Tests for the Hexagon cell."""

from __future__ import annotations

import math

import pytest

from anigrid.engine.hexagon import Hexagon
from anigrid.utils.geometry import Point

# Neighbor centers are snapped to integer pixels, so distances can be off by
# up to half a pixel diagonal.
_SNAP_TOLERANCE = math.sqrt(2) / 2


def test_new_hexagon():
    h = Hexagon.create(0, 0, 10, 0)
    assert h.center == Point(0, 0)
    assert h.radius == 10
    assert len(h.vertices) == 6
    assert h.vertices[0] == Point(10, 0)


def test_vertices_lie_on_circumcircle():
    h = Hexagon.create(500, 500, 100, 0)
    for v in h.vertices:
        assert v.distance(h.center) == pytest.approx(100, abs=_SNAP_TOLERANCE)


def test_side_matches_radius():
    h = Hexagon.create(0, 0, 10, 0)
    assert h.side() == pytest.approx(10, abs=1.0)

    big = Hexagon.create(1000, 1000, 100, 0)
    assert big.side() == pytest.approx(100, abs=1.0)


@pytest.mark.parametrize("radius", [10, 37, 100])
def test_neighbors(radius):
    h = Hexagon.create(0, 0, radius, 0)
    neighbors = h.neighbors()

    assert len(neighbors) == 6
    expected = radius * math.sqrt(3)
    for p in neighbors:
        assert h.center.distance(p) == pytest.approx(expected, abs=_SNAP_TOLERANCE)


def test_neighbors_are_integral_and_distinct():
    neighbors = Hexagon.create(250, 250, 100, 0).neighbors()
    assert len(set(neighbors)) == 6
    for p in neighbors:
        assert p.x.is_integer() and p.y.is_integer()


def test_neighbor_directions_follow_edge_normals():
    h = Hexagon.create(0, 0, 100, 0)
    first = h.neighbors()[0]
    # angle 0 hexagon: first neighbor sits at 30°
    assert math.degrees(math.atan2(first.y, first.x)) == pytest.approx(30, abs=0.5)
    # straight above (90°) is the second
    assert h.neighbors()[1] == Point(0, 173)


def test_box_bounds_vertices():
    h = Hexagon.create(100, 100, 50, 0)
    box = h.box()
    assert box.start() == (50, 57)
    assert box.end() == (150, 143)
    assert box.size() == (100, 86)


def test_path_is_closed():
    h = Hexagon.create(0, 0, 10, 0)
    path = h.path()
    assert len(path) == 7
    assert path[0] == path[-1]
    assert path[:6] == [v.value() for v in h.vertices]


def test_polygon_area():
    h = Hexagon.create(0, 0, 100, 0)
    # 3√3/2·r²
    assert h.polygon.area == pytest.approx(3 * math.sqrt(3) / 2 * 100**2, rel=0.02)


def test_draw_emits_path():
    class Recorder:
        def __init__(self):
            self.paths = []

        def clip_to_polygon(self, points):
            self.paths.append(list(points))

    rec = Recorder()
    h = Hexagon.create(0, 0, 10, 0)
    h.draw(rec)
    assert rec.paths == [h.path()]
