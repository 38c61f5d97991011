import pytest

from urbangen.path import Path
from urbangen.road import SECONDARY_ROAD
from urbangen.streetgraph import StreetGraph


def _square(graph):
    graph.add_road(Path((-100, 100), (100, 100)))
    graph.add_road(Path((100, 100), (100, -100)))
    graph.add_road(Path((100, -100), (-100, -100)))
    graph.add_road(Path((-100, -100), (-100, 100)))


def test_empty_graph():
    graph = StreetGraph()
    assert len(graph) == 0
    assert graph.intersections() == []
    assert list(graph) == []


def test_single_road_creates_two_intersections():
    graph = StreetGraph()
    graph.add_road(Path((0, 0), (10, 0)))
    assert len(graph) == 1
    assert len(graph.intersections()) == 2
    assert graph.is_intersection_at_position((0, 0))
    assert graph.is_intersection_at_position((10, 0, 0))
    assert not graph.is_intersection_at_position((5, 0))


def test_road_type_is_kept():
    graph = StreetGraph()
    graph.add_road(Path((0, 0), (10, 0)), SECONDARY_ROAD)
    assert graph.roads()[0].road_type == SECONDARY_ROAD


def test_crossing_roads_are_split():
    graph = StreetGraph()
    graph.add_road(Path((-10, 0), (10, 0)))
    graph.add_road(Path((0, -10), (0, 10)))
    assert len(graph) == 4
    assert len(graph.intersections()) == 5
    centre = graph.intersection_at_position((0, 0))
    assert centre.number_of_ways() == 4


def test_t_junction_splits_existing_road():
    graph = StreetGraph()
    graph.add_road(Path((0, 0), (10, 0)))
    graph.add_road(Path((5, 0), (5, 5)))
    assert len(graph) == 3
    assert len(graph.intersections()) == 4
    assert graph.intersection_at_position((5, 0)).number_of_ways() == 3
    assert graph.intersection_at_position((0, 0)).number_of_ways() == 1


def test_intersection_at_missing_position_is_none():
    graph = StreetGraph()
    graph.add_road(Path((0, 0), (10, 0)))
    assert graph.intersection_at_position((3, 3)) is None


def test_remove_road_removes_unused_intersections():
    graph = StreetGraph()
    graph.add_road(Path((0, 0), (10, 0)))
    graph.add_road(Path((10, 0), (10, 10)))
    first = graph.road_between(
        graph.intersection_at_position((0, 0)), graph.intersection_at_position((10, 0))
    )
    graph.remove_road(first)
    assert len(graph) == 1
    assert not graph.is_intersection_at_position((0, 0))
    assert graph.intersection_at_position((10, 0)).number_of_ways() == 1


def test_road_between():
    graph = StreetGraph()
    _square(graph)
    a = graph.intersection_at_position((-100, 100))
    b = graph.intersection_at_position((100, 100))
    c = graph.intersection_at_position((100, -100))
    road = graph.road_between(b, a)
    assert road is not None
    assert {road.beginning, road.end} == {a, b}
    assert graph.road_between(a, c) is None


def test_remove_filament_roads():
    graph = StreetGraph()
    _square(graph)
    graph.add_road(Path((100, -100), (100, -200)))
    assert len(graph) == 5
    graph.remove_filament_roads()
    assert len(graph) == 4
    assert not graph.is_intersection_at_position((100, -200))
    assert graph.intersection_at_position((100, -100)).number_of_ways() == 2


def test_iteration_matches_roads():
    graph = StreetGraph()
    _square(graph)
    assert list(graph) == graph.roads()
    assert len(graph) == 4


def test_check_consistence_detects_duplicate_road():
    graph = StreetGraph()
    graph.add_road(Path((0, 0), (10, 0)))
    graph.add_road(Path((0, 0), (10, 0)))
    assert len(graph) == 2
    with pytest.raises(ValueError):
        graph.check_consistence()


def test_str_lists_roads_and_intersections():
    graph = StreetGraph()
    graph.add_road(Path((0, 0), (10, 0)))
    text = str(graph)
    assert text.startswith("Roads:\n")
    assert "Intersections:" in text
    assert "at Point(0, 0, 0)" in text
    assert "at Point(10, 0, 0)" in text


def test_find_zones_of_square():
    graph = StreetGraph()
    _square(graph)
    assert len(graph.find_zones()) == 1


def test_find_zones_of_single_road():
    graph = StreetGraph()
    graph.add_road(Path((-100, 100), (100, 100)))
    assert len(graph.find_zones()) == 0