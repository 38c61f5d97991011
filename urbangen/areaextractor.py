"""Extraction of closed areas between the roads of a street graph.

The graph is copied into an adjacency structure and its minimal cycles are
found with Eberly's algorithm for planar graphs.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence

from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.base import BaseGeometry

from urbangen.path import EPSILON, Point
from urbangen.road import Intersection
from urbangen.streetgraph import StreetGraph

Area = list[Point]
Vector2 = tuple[float, float]


def _difference(target: Sequence[float], origin: Sequence[float]) -> Vector2:
    """The 2D vector going from ``origin`` to ``target``."""
    return (target[0] - origin[0], target[1] - origin[1])


def _perp_dot(first: Vector2, second: Vector2) -> float:
    return first[0] * second[1] - first[1] * second[0]


def _is_parallel(first: Vector2, second: Vector2) -> bool:
    lengths = math.hypot(*first) * math.hypot(*second)
    if lengths == 0:
        return True
    return abs(_perp_dot(first, second)) / lengths <= EPSILON


def _signed_area(vertices: Sequence[Point]) -> float:
    count = len(vertices)
    return sum(
        _perp_dot(vertices[i][:2], vertices[(i + 1) % count][:2]) for i in range(count)
    ) / 2.0


def _inward_normal(vertices: Sequence[Point], index: int, counterclockwise: bool) -> Vector2:
    start = vertices[index]
    stop = vertices[(index + 1) % len(vertices)]
    dx, dy = _difference(stop, start)
    normal = (-dy, dx) if counterclockwise else (dy, -dx)
    length = math.hypot(*normal)
    if length == 0:
        return (0.0, 0.0)
    return (normal[0] / length, normal[1] / length)


def _offset(point: Point, normal: Vector2, distance: float) -> Point:
    return (point[0] + normal[0] * distance, point[1] + normal[1] * distance, point[2])


def _line_intersection(
    first: tuple[Point, Point], second: tuple[Point, Point]
) -> Point | None:
    """Intersection of two infinite lines in 2D, or None when they are parallel."""
    (a0, a1), (b0, b1) = first, second
    d1 = _difference(a1, a0)
    d2 = _difference(b1, b0)
    denominator = _perp_dot(d1, d2)
    scale = math.hypot(*d1) * math.hypot(*d2)
    if scale == 0 or abs(denominator) <= 1e-12 * scale:
        return None
    t = _perp_dot(_difference(b0, a0), d2) / denominator
    return (a0[0] + d1[0] * t, a0[1] + d1[1] * t, a0[2] + (a1[2] - a0[2]) * t)


def _as_area(constraints: BaseGeometry | Iterable[Iterable[float]]) -> BaseGeometry:
    if isinstance(constraints, BaseGeometry):
        return constraints
    return ShapelyPolygon([tuple(vertex)[:2] for vertex in constraints])


class AreaExtractor:
    """Finds zones and blocks enclosed by the roads of a street graph."""

    def __init__(self) -> None:
        self._road_widths: dict[int, float] = {}
        self._reset()
        self._graph: StreetGraph | None = None

    def _reset(self) -> None:
        self._vertices: list[Intersection] = []
        self._adjacent: dict[Intersection, list[Intersection]] = {}
        self._cycle_edges: set[tuple[Intersection, Intersection]] = set()
        self._cycles: list[Area] = []
        self._subtract_road_widths = False

    def set_road_width(self, road_type: int, width: float) -> None:
        self._road_widths[road_type] = float(width)

    def set_road_widths(self, widths: Mapping[int, float]) -> None:
        self._road_widths = {key: float(value) for key, value in widths.items()}

    def extract_zones(
        self,
        street_graph: StreetGraph,
        constraints: BaseGeometry | Iterable[Iterable[float]] | None = None,
    ) -> list[Area]:
        """Polygons of all minimal cycles, limited to ``constraints`` if given."""
        self._prepare(street_graph, constraints)
        self._subtract_road_widths = False
        self._find_minimal_cycles()
        return list(self._cycles)

    def extract_blocks(
        self,
        street_graph: StreetGraph,
        constraints: BaseGeometry | Iterable[Iterable[float]] | None = None,
    ) -> list[Area]:
        """Like extract_zones, with each area shrunk by the widths of its roads.

        Areas that do not stay inside their original boundary are discarded.
        """
        self._prepare(street_graph, constraints)
        self._subtract_road_widths = True
        self._find_minimal_cycles()
        return list(self._cycles)

    def _prepare(
        self,
        street_graph: StreetGraph,
        constraints: BaseGeometry | Iterable[Iterable[float]] | None,
    ) -> None:
        self._reset()
        self._graph = street_graph
        area = _as_area(constraints) if constraints is not None else None
        for node in street_graph.intersections():
            self._add_vertex(node, area)

    @staticmethod
    def _inside(area: BaseGeometry, node: Intersection) -> bool:
        x, y, _ = node.position
        return area.covers(ShapelyPoint(x, y))

    def _add_vertex(self, node: Intersection, area: BaseGeometry | None) -> None:
        adjacent = node.adjacent_intersections()
        if area is not None:
            if not self._inside(area, node):
                return
            adjacent = [other for other in adjacent if self._inside(area, other)]

        self._adjacent.setdefault(node, adjacent)

        x, y = node.position[0], node.position[1]
        index = len(self._vertices)
        for position, existing in enumerate(self._vertices):
            ex, ey = existing.position[0], existing.position[1]
            if x < ex:
                index = position
                break
            if x == ex:
                index = position if y < ey else position + 1
                break
        self._vertices.insert(index, node)

    def _remove_vertex(self, node: Intersection) -> None:
        self._vertices = [vertex for vertex in self._vertices if vertex is not node]
        for other in list(self._adjacent.get(node, [])):
            self._remove_edge(node, other)
        self._adjacent.pop(node, None)

    def _remove_edge(self, beginning: Intersection, end: Intersection) -> None:
        for first, second in ((beginning, end), (end, beginning)):
            neighbours = self._adjacent.get(first)
            if neighbours is None:
                continue
            for position, other in enumerate(neighbours):
                if other is second:
                    del neighbours[position]
                    break
        self._cycle_edges.discard((beginning, end))
        self._cycle_edges.discard((end, beginning))

    def _is_cycle_edge(self, beginning: Intersection, end: Intersection) -> bool:
        return (beginning, end) in self._cycle_edges or (end, beginning) in self._cycle_edges

    def _neighbours(self, node: Intersection) -> list[Intersection]:
        return list(self._adjacent.get(node, []))

    def _degree(self, node: Intersection) -> int:
        return len(self._adjacent.get(node, []))

    def _first_neighbour(self, node: Intersection) -> Intersection:
        neighbours = self._adjacent.get(node)
        if not neighbours:
            raise ValueError("node has no adjacent nodes")
        return neighbours[0]

    def _find_minimal_cycles(self) -> None:
        while self._vertices:
            current = self._vertices[0]
            neighbours = self._neighbours(current)
            if not neighbours:
                self._remove_vertex(current)
            elif len(neighbours) == 1:
                self._extract_filament(current, neighbours[0])
            else:
                self._extract_minimal_cycle(current)

    def _extract_filament(self, v0: Intersection, v1: Intersection) -> None:
        if self._is_cycle_edge(v0, v1):
            if self._degree(v0) >= 3:
                self._remove_edge(v0, v1)
                v0 = v1
                if self._degree(v0) == 1:
                    v1 = self._first_neighbour(v0)
            while self._degree(v0) == 1:
                v1 = self._first_neighbour(v0)
                if not self._is_cycle_edge(v0, v1):
                    break
                self._remove_edge(v0, v1)
                self._remove_vertex(v0)
                v0 = v1
            if self._degree(v0) == 0:
                self._remove_vertex(v0)
        else:
            if self._degree(v0) >= 3:
                self._remove_edge(v0, v1)
                v0 = v1
                if self._degree(v0) == 1:
                    v1 = self._first_neighbour(v0)
            while self._degree(v0) == 1:
                v1 = self._first_neighbour(v0)
                self._remove_edge(v0, v1)
                self._remove_vertex(v0)
                v0 = v1
            if self._degree(v0) == 0:
                self._remove_edge(v0, v1)
                self._remove_vertex(v0)

    def _extract_minimal_cycle(self, start: Intersection) -> None:
        visited: set[Intersection] = set()
        sequence = [start]
        following = self._clockwise_most(None, start)

        previous = start
        current = following
        while current is not None and current is not start and current not in visited:
            sequence.append(current)
            visited.add(current)
            upcoming = self._counterclockwise_most(previous, current)
            previous, current = current, upcoming

        if current is None:
            self._extract_filament(previous, self._first_neighbour(previous))
        elif current is start:
            self._store_cycle(sequence)
            self._remove_edge(start, following)
            if self._degree(start) == 1:
                self._extract_filament(start, self._first_neighbour(start))
            if self._degree(following) == 1:
                self._extract_filament(following, self._first_neighbour(following))
        else:
            node, other = start, following
            while self._degree(node) == 2:
                neighbours = self._neighbours(node)
                if neighbours[0] is not other:
                    other, node = node, neighbours[0]
                else:
                    other, node = node, neighbours[-1]
            self._extract_filament(node, other)

    def _store_cycle(self, sequence: list[Intersection]) -> None:
        for position, node in enumerate(sequence):
            self._cycle_edges.add((node, sequence[(position + 1) % len(sequence)]))

        polygon = [node.position for node in sequence]
        if not self._subtract_road_widths:
            self._cycles.append(polygon)
            return

        distances = self._subtract_distances(sequence)
        boundaries = list(polygon)
        self._minimalize_cycle(polygon, distances)
        shrunk = self._subtract_widths(polygon, distances)
        if self._is_sub_area(shrunk, boundaries):
            self._cycles.append(shrunk)

    def _subtract_distances(self, sequence: list[Intersection]) -> list[float]:
        widths = []
        for position, node in enumerate(sequence):
            following = sequence[(position + 1) % len(sequence)]
            road = self._graph.road_between(node, following) if self._graph else None
            if road is None:
                raise ValueError("no road between consecutive cycle nodes")
            if road.road_type not in self._road_widths:
                raise KeyError(f"no width set for road type {road.road_type}")
            widths.append(self._road_widths[road.road_type])
        return widths

    @staticmethod
    def _minimalize_cycle(polygon: list[Point], distances: list[float]) -> None:
        """Drop vertices lying on a straight line between their neighbours."""
        changed = True
        while changed:
            changed = False
            count = len(polygon)
            for current in range(count):
                previous = current - 1 if current > 0 else count - 1
                following = (current + 1) % count
                if previous == following:
                    break
                first = _difference(polygon[previous], polygon[current])
                second = _difference(polygon[following], polygon[current])
                if _is_parallel(first, second):
                    del polygon[current]
                    del distances[current]
                    changed = True
                    break

    @staticmethod
    def _subtract_widths(polygon: list[Point], distances: list[float]) -> list[Point]:
        if len(polygon) != len(distances):
            raise ValueError("one distance is needed for every edge")
        count = len(polygon)
        counterclockwise = _signed_area(polygon) >= 0
        result = []
        for current in range(count):
            previous = current - 1 if current > 0 else count - 1
            following = (current + 1) % count
            previous_normal = _inward_normal(polygon, previous, counterclockwise)
            current_normal = _inward_normal(polygon, current, counterclockwise)

            previous_edge = (
                _offset(polygon[current], previous_normal, distances[previous]),
                _offset(polygon[previous], previous_normal, distances[previous]),
            )
            current_edge = (
                _offset(polygon[current], current_normal, distances[current]),
                _offset(polygon[following], current_normal, distances[current]),
            )
            vertex = _line_intersection(current_edge, previous_edge)
            if vertex is None:
                distance = max(distances[previous], distances[current])
                vertex = _offset(polygon[current], current_normal, distance)
            result.append(vertex)
        return result

    @staticmethod
    def _is_sub_area(inner: Sequence[Point], outer: Sequence[Point]) -> bool:
        if len(inner) < 3 or len(outer) < 3:
            return False
        inner_shape = ShapelyPolygon([vertex[:2] for vertex in inner])
        outer_shape = ShapelyPolygon([vertex[:2] for vertex in outer])
        if not inner_shape.is_valid or not outer_shape.is_valid:
            return False
        return outer_shape.buffer(EPSILON).covers(inner_shape)

    def _clockwise_most(
        self, previous: Intersection | None, current: Intersection
    ) -> Intersection | None:
        return self._most(previous, current, clockwise=True)

    def _counterclockwise_most(
        self, previous: Intersection | None, current: Intersection
    ) -> Intersection | None:
        return self._most(previous, current, clockwise=False)

    def _most(
        self, previous: Intersection | None, current: Intersection, clockwise: bool
    ) -> Intersection | None:
        if previous is not None:
            v_current = _difference(previous.position, current.position)
        else:
            v_current = (0.0, -1.0)
        chosen: Intersection | None = None
        v_next: Vector2 = (0.0, 0.0)
        convex = False

        for adjacent in self._neighbours(current):
            if adjacent is previous:
                continue
            v_adjacent = _difference(current.position, adjacent.position)
            if chosen is None:
                chosen, v_next = adjacent, v_adjacent
                convex = _perp_dot(v_next, v_current) <= -EPSILON
                continue

            a = _perp_dot(v_current, v_adjacent)
            b = _perp_dot(v_next, v_adjacent)
            if clockwise:
                take = (a < 0 or b < 0) if convex else (a < 0 and b < 0)
            else:
                take = (a > 0 and b > 0) if convex else (a > 0 or b > 0)
            if take:
                chosen, v_next = adjacent, v_adjacent
                convex = _perp_dot(v_next, v_current) <= -EPSILON
        return chosen