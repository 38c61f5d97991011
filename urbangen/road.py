"""Topological elements of a street graph: roads and intersections."""

from __future__ import annotations

import itertools
from collections.abc import Iterable

from urbangen.path import Path, Point, _to_point, same_point

PRIMARY_ROAD = 0
SECONDARY_ROAD = 1

_road_type_counter = itertools.count(1001)


def define_new_road_type() -> int:
    """Return a fresh road type value, distinct from the built-in ones."""
    return next(_road_type_counter) & 0xFFFF


class Intersection:
    """A point where roads meet."""

    def __init__(self, position: Iterable[float]) -> None:
        self._position = _to_point(position)
        self._roads: list[Road] = []

    @property
    def position(self) -> Point:
        return self._position

    @position.setter
    def position(self, value: Iterable[float]) -> None:
        self._position = _to_point(value)

    def adjacent_intersections(self) -> list[Intersection]:
        """The intersection at the other end of every connected road."""
        return [
            road.beginning if road.beginning is not self else road.end
            for road in self._roads
        ]

    def number_of_ways(self) -> int:
        return len(self._roads)

    def connect_road(self, road: Road) -> None:
        """Attach a road that begins or ends at this intersection."""
        ends = [node for node in (road.beginning, road.end) if node is not None]
        if not any(same_point(node.position, self._position) for node in ends):
            raise ValueError("road does not start or end at this intersection")
        self._roads.append(road)

    def disconnect_road(self, road: Road) -> None:
        self._roads = [existing for existing in self._roads if existing is not road]

    def has_road(self, road: Road) -> bool:
        return any(existing is road for existing in self._roads)

    def roads(self) -> list[Road]:
        return list(self._roads)

    def __repr__(self) -> str:
        return f"Intersection({self._position!r})"


class Road:
    """A road between two intersections, with the path it takes."""

    def __init__(
        self,
        beginning: Intersection | None = None,
        end: Intersection | None = None,
        road_type: int = PRIMARY_ROAD,
    ) -> None:
        self._beginning = beginning
        self._end = end
        self.road_type = road_type
        origin = (0.0, 0.0, 0.0)
        self._path = Path(
            beginning.position if beginning is not None else origin,
            end.position if end is not None else origin,
        )

    @property
    def beginning(self) -> Intersection | None:
        return self._beginning

    @property
    def end(self) -> Intersection | None:
        return self._end

    @property
    def path(self) -> Path:
        return self._path

    def set_beginning(self, intersection: Intersection) -> None:
        self._beginning = intersection
        self._path.beginning = intersection.position

    def set_end(self, intersection: Intersection) -> None:
        self._end = intersection
        self._path.end = intersection.position

    def set_path(self, path: Path) -> None:
        self._path = path.copy()

    def __str__(self) -> str:
        return f"Road({id(self):#x}, {self._path})"