"""L-system that grows roads into a street graph."""

from __future__ import annotations

import math
from collections.abc import Iterable

from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.base import BaseGeometry

from urbangen.graphic import GraphicLSystem
from urbangen.path import Crossing, Path, Point, _to_point, same_point
from urbangen.rng import Random
from urbangen.road import PRIMARY_ROAD, Intersection, Road
from urbangen.streetgraph import StreetGraph

MINIMAL_ROAD_LENGTH = 100.0

_OVERLAPS = frozenset(
    {Crossing.IDENTICAL, Crossing.CONTAINED, Crossing.CONTAINING, Crossing.OVERLAPPING}
)


class RoadLSystem(GraphicLSystem):
    """Graphic L-system whose ``_`` symbol draws a road into a target graph.

    Alphabet additions: ``-`` turns left, ``+`` turns right and ``E`` is a
    growth control symbol with no drawing effect.
    """

    def __init__(self) -> None:
        super().__init__()
        self._generated_roads = 0
        self._target: StreetGraph | None = None
        self._area: ShapelyPolygon | None = None
        self._area_vertices: list[Point] = []
        self._snap_distance = 0.0

        self.add_to_alphabet("-+E")
        self.set_axiom("E")

        self._road_type = PRIMARY_ROAD
        self._min_length = 0.0
        self._max_length = 0.0
        self._min_angle = 0.0
        self._max_angle = 0.0

    @property
    def generated_roads(self) -> int:
        """Number of roads drawn so far."""
        return self._generated_roads

    def set_target(self, target: StreetGraph) -> None:
        self._target = target

    def set_area_constraints(
        self, polygon: BaseGeometry | Iterable[Iterable[float]] | None
    ) -> None:
        """Limit growth to a polygon; None removes the limit."""
        if polygon is None:
            self._area = None
            self._area_vertices = []
            return
        if isinstance(polygon, BaseGeometry):
            exterior = getattr(polygon, "exterior", None)
            if exterior is None:
                raise TypeError("area constraints must be a polygon")
            vertices = [_to_point(coords) for coords in list(exterior.coords)[:-1]]
        else:
            vertices = [_to_point(vertex) for vertex in polygon]
        if len(vertices) < 3:
            raise ValueError("area constraints need at least three vertices")
        self._area_vertices = vertices
        self._area = ShapelyPolygon([vertex[:2] for vertex in vertices])

    def set_road_type(self, road_type: int) -> None:
        self._road_type = road_type

    def set_road_length(self, minimum: float, maximum: float) -> None:
        self._min_length = float(minimum)
        self._max_length = float(maximum)

    def set_turn_angle(self, minimum: float, maximum: float) -> None:
        self._min_angle = float(minimum)
        self._max_angle = float(maximum)

    def set_snap_distance(self, distance: float) -> None:
        self._snap_distance = float(distance)

    def generate(self) -> None:
        """Read symbols until the system stops producing new ones."""
        while self.read_next_symbol() is not None:
            pass

    def generate_roads(self, number: int) -> bool:
        """Draw ``number`` more roads; False when the system ran out of symbols."""
        target_count = self._generated_roads + number
        still_going = True
        while self._generated_roads < target_count:
            still_going = self.read_next_symbol() is not None
            if not still_going:
                break
        return still_going

    def _interpret_symbol(self, char: str) -> None:
        if char == "-":
            self._turn_left()
        elif char == "+":
            self._turn_right()
        elif char == "_":
            self._draw_road()
        elif char == "E":
            pass
        else:
            super()._interpret_symbol(char)

    def _road_segment_length(self) -> float:
        return Random().generate_double(self._min_length, self._max_length)

    def _turn_angle(self) -> float:
        return Random().generate_double(self._min_angle, self._max_angle)

    def _turn_left(self) -> None:
        self.cursor.turn(-self._turn_angle())

    def _turn_right(self) -> None:
        self.cursor.turn(self._turn_angle())

    def _require_target(self) -> StreetGraph:
        if self._target is None:
            raise RuntimeError("no target street graph set")
        return self._target

    def _draw_road(self) -> None:
        target = self._require_target()
        previous = self.cursor.position
        self.cursor.move(self._road_segment_length())
        proposed = Path(previous, self.cursor.position)

        if not self._inside_area_constraints(proposed):
            self._cancel_branch()
            return
        if not self._local_constraints(proposed):
            self._cancel_branch()
            return
        if target.is_intersection_at_position(proposed.end):
            # Do not branch further from an existing intersection.
            self._cancel_branch()

        self.cursor.position = proposed.end
        target.add_road(proposed, self._road_type)
        self._generated_roads += 1

    def _cancel_branch(self) -> None:
        """Drop the current symbol and what follows it up to the closing bracket."""
        start = self._current_index
        if start is None:
            return
        stop = next(
            (
                start + offset
                for offset, symbol in enumerate(self._produced[start:])
                if symbol.char == "]"
            ),
            len(self._produced),
        )
        for symbol in self._produced[start:stop]:
            self._discard_symbol(symbol)
        del self._produced[start:stop]

    def _covers(self, point: Point) -> bool:
        return self._area.covers(ShapelyPoint(point[0], point[1]))

    def _inside_area_constraints(self, proposed: Path) -> bool:
        """Clip the path to the area; False when it lies outside or only touches it."""
        if self._area is None:
            return True
        if not self._covers(proposed.beginning) and not self._covers(proposed.end):
            return False

        vertices = self._area_vertices
        touching = False
        for start, stop in zip(vertices, vertices[1:] + vertices[:1]):
            edge = Path(start, stop)
            if edge.goes_through(proposed.beginning) or edge.goes_through(proposed.end):
                touching = True
                continue
            crossing, point = proposed.crosses(edge)
            if crossing is Crossing.INTERSECTING:
                if not self._covers(proposed.beginning):
                    proposed.beginning = point
                else:
                    proposed.end = point
                break

        return not touching

    def _cut_at_crossings(self, proposed: Path, road: Road) -> None:
        crossing, point = proposed.crosses(road.path)
        if crossing is Crossing.INTERSECTING and not (
            same_point(point, proposed.beginning) or same_point(point, proposed.end)
        ):
            proposed.end = point

    def _local_constraints(self, proposed: Path) -> bool:
        """Adjust the path to the existing roads; False when it must be dropped."""
        target = self._require_target()
        snap = self._snap_distance
        nearest_intersection: Intersection | None = None
        nearest_road: Road | None = None
        limit = snap + 1
        is_close = False

        for road in target:
            self._cut_at_crossings(proposed, road)

            for node in (road.beginning, road.end):
                distance = math.dist(proposed.end, node.position)
                if distance < snap and distance < limit:
                    is_close = True
                    if self._snap_to_intersection_possible(proposed, node):
                        nearest_intersection = node

            nearest = road.path.nearest_point(proposed.end)
            distance = math.dist(proposed.end, nearest)
            if distance < snap and distance < limit:
                is_close = True
                if self._snap_to_road_possible(proposed, road):
                    nearest_road = road

            if (
                proposed.distance(road.end.position) < snap
                and proposed.distance(road.beginning.position) < snap
            ):
                return False
            if (
                road.path.distance(proposed.beginning) < snap
                and road.path.distance(proposed.end) < snap
            ):
                return False

        snapped = False
        if nearest_intersection is not None:
            snapped = True
            proposed.end = nearest_intersection.position
        elif nearest_road is not None:
            snapped = True
            proposed.end = nearest_road.path.nearest_point(proposed.end)

        if is_close and not snapped:
            return False
        if proposed.length() < MINIMAL_ROAD_LENGTH:
            return False

        existing = target.intersection_at_position(proposed.end)
        if existing is not None and existing.number_of_ways() >= 4:
            return False

        for road in target:
            self._cut_at_crossings(proposed, road)
        return True

    def _snap_to_road_possible(self, proposed: Path, road: Road) -> bool:
        nearest = road.path.nearest_point(proposed.end)
        if math.dist(proposed.end, nearest) >= self._snap_distance:
            return False
        if (
            math.dist(road.path.beginning, nearest) < MINIMAL_ROAD_LENGTH
            or math.dist(road.path.end, nearest) < MINIMAL_ROAD_LENGTH
        ):
            return False
        snapped = proposed.copy()
        snapped.end = nearest
        crossing, _ = snapped.crosses(road.path)
        return crossing not in _OVERLAPS

    def _snap_to_intersection_possible(
        self, proposed: Path, intersection: Intersection
    ) -> bool:
        if math.dist(proposed.end, intersection.position) >= self._snap_distance:
            return False
        existing = self._require_target().intersection_at_position(intersection.position)
        if existing is None or existing.number_of_ways() >= 4:
            return False
        snapped = proposed.copy()
        snapped.end = intersection.position
        return all(
            snapped.crosses(road.path)[0] not in _OVERLAPS
            for road in intersection.roads()
        )