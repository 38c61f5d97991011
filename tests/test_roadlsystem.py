import pytest
from shapely.geometry import box

from urbangen.path import Path, same_point
from urbangen.road import define_new_road_type
from urbangen.roadlsystem import MINIMAL_ROAD_LENGTH, RoadLSystem
from urbangen.streetgraph import StreetGraph


def _make(axiom, length=200.0, half=1000.0, snap=10.0, start=(0, 0)):
    graph = StreetGraph()
    system = RoadLSystem()
    system.set_target(graph)
    system.set_area_constraints(
        [(-half, -half), (half, -half), (half, half), (-half, half)]
    )
    system.set_road_length(length, length)
    system.set_turn_angle(90, 90)
    system.set_snap_distance(snap)
    system.set_initial_position(start)
    system.set_initial_direction((1, 0))
    system.set_axiom(axiom)
    return system, graph


def test_initial_state():
    system = RoadLSystem()
    assert system.produced_string() == "E"
    assert system.is_in_alphabet("-+E[]._")
    assert MINIMAL_ROAD_LENGTH == 100


def test_draws_single_road():
    system, graph = _make("_")
    system.generate()
    roads = graph.roads()
    assert len(roads) == 1
    assert same_point(roads[0].path.beginning, (0, 0, 0))
    assert same_point(roads[0].path.end, (200, 0, 0))
    assert system.generated_roads == 1


@pytest.mark.parametrize("axiom, expected", [("+_", (0, 200, 0)), ("-_", (0, -200, 0))])
def test_turns_before_drawing(axiom, expected):
    system, graph = _make(axiom)
    system.generate()
    roads = graph.roads()
    assert len(roads) == 1
    assert same_point(roads[0].path.end, expected)


def test_short_road_is_rejected_and_branch_cancelled():
    system, graph = _make("_", length=50)
    system.generate()
    assert len(graph) == 0
    assert system.produced_string() == ""


def test_cancel_stops_at_closing_bracket():
    system, graph = _make("[_]E", length=50)
    system.generate()
    assert system.produced_string() == "[]E"
    assert len(graph) == 0


def test_road_is_clipped_to_area():
    system, graph = _make("_", length=300, half=150)
    system.generate()
    roads = graph.roads()
    assert len(roads) == 1
    assert same_point(roads[0].path.end, (150, 0, 0))


def test_shapely_polygon_as_constraints():
    system, graph = _make("_", length=300)
    system.set_area_constraints(box(-150, -150, 150, 150))
    system.generate()
    roads = graph.roads()
    assert len(roads) == 1
    assert same_point(roads[0].path.end, (150, 0, 0))


def test_constraints_need_three_vertices():
    system = RoadLSystem()
    with pytest.raises(ValueError):
        system.set_area_constraints([(0, 0), (1, 1)])


def test_road_outside_area_is_rejected():
    system, graph = _make("_", half=150, start=(500, 500))
    system.generate()
    assert len(graph) == 0


def test_snaps_to_existing_road():
    system, graph = _make("_", length=195)
    graph.add_road(Path((200, -200), (200, 200)))
    system.generate()
    assert len(graph) == 3
    junction = graph.intersection_at_position((200, 0))
    assert junction is not None
    assert junction.number_of_ways() == 3
    assert same_point(system.cursor.position, (200, 0, 0))


def test_road_too_close_to_parallel_road_is_rejected():
    system, graph = _make("_")
    graph.add_road(Path((0, 5), (300, 5)))
    system.generate()
    assert len(graph) == 1
    assert graph.intersection_at_position((200, 0)) is None


def test_generate_roads_counts_roads():
    system, graph = _make("__")
    assert system.generate_roads(1) is True
    assert len(graph) == 1
    assert system.generate_roads(1) is True
    assert len(graph) == 2
    assert system.generate_roads(1) is False
    assert system.generated_roads == 2


def test_road_type_is_applied():
    road_type = define_new_road_type()
    system, graph = _make("_")
    system.set_road_type(road_type)
    system.generate()
    assert [road.road_type for road in graph] == [road_type]


def test_missing_target_raises():
    system = RoadLSystem()
    system.set_road_length(200, 200)
    system.set_axiom("_")
    with pytest.raises(RuntimeError):
        system.generate()