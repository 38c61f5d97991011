"""Planar graph of roads and intersections."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from urbangen.path import Crossing, Path, Point, _to_point, same_point
from urbangen.road import PRIMARY_ROAD, Intersection, Road

_OVERLAPS = (
    Crossing.CONTAINED,
    Crossing.CONTAINING,
    Crossing.IDENTICAL,
    Crossing.OVERLAPPING,
)


def _format_point(point: Point) -> str:
    return "Point({:g}, {:g}, {:g})".format(*point)


class StreetGraph:
    """Roads and intersections forming an undirected planar graph.

    Topologically, a road leads from one intersection to another; geometrically,
    each intersection has a position and each road a path.
    """

    def __init__(self) -> None:
        self._roads: list[Road] = []
        self._intersections: list[Intersection] = []

    def __iter__(self) -> Iterator[Road]:
        return iter(list(self._roads))

    def __len__(self) -> int:
        return len(self._roads)

    def intersections(self) -> list[Intersection]:
        return list(self._intersections)

    def roads(self) -> list[Road]:
        return list(self._roads)

    def find_zones(self) -> list:
        """Closed loops of the graph, found as its minimal cycle basis."""
        from urbangen.areaextractor import AreaExtractor

        return AreaExtractor().extract_zones(self, None)

    def road_between(self, first: Intersection, second: Intersection) -> Road | None:
        """The road connecting the two intersections, or None."""
        for road in first.roads():
            if (road.beginning is first and road.end is second) or (
                road.beginning is second and road.end is first
            ):
                return road
        return None

    def add_road(self, path: Path, road_type: int = PRIMARY_ROAD) -> None:
        """Add a road along ``path``, splitting it where it crosses existing roads."""
        road_path = path.copy()
        for existing in self._roads:
            crossing, point = road_path.crosses(existing.path)
            if crossing is not Crossing.INTERSECTING or point is None:
                continue
            if same_point(point, road_path.beginning) or same_point(point, road_path.end):
                continue
            self.add_road(Path(road_path.beginning, point), road_type)
            self.add_road(Path(point, road_path.end), road_type)
            return

        beginning = self._add_intersection(road_path.beginning)
        end = self._add_intersection(road_path.end)

        road = Road(beginning, end, road_type)
        beginning.connect_road(road)
        end.connect_road(road)
        self._roads.append(road)

    def _remove_intersection(self, intersection: Intersection) -> None:
        self._intersections = [
            node for node in self._intersections if node is not intersection
        ]

    def remove_road(self, road: Road) -> None:
        """Remove a road and any intersection left without roads."""
        for node in (road.beginning, road.end):
            if node is None:
                continue
            node.disconnect_road(road)
            if node.number_of_ways() == 0:
                self._remove_intersection(node)
        self._roads = [existing for existing in self._roads if existing is not road]

    def _add_intersection(self, position: Iterable[float]) -> Intersection:
        """Existing intersection at ``position``, or a new one.

        A new intersection lying on an existing road splits that road in two.
        """
        position = _to_point(position)
        existing = self.intersection_at_position(position)
        if existing is not None:
            return existing

        new = Intersection(position)
        self._intersections.append(new)

        for road in self._roads:
            if road.path.goes_through(position):
                end = road.end
                end.disconnect_road(road)
                road.set_end(new)
                new.connect_road(road)

                second = Road(new, end, road.road_type)
                self._roads.append(second)
                new.connect_road(second)
                end.connect_road(second)
                break

        return new

    def is_intersection_at_position(self, position: Iterable[float]) -> bool:
        return self.intersection_at_position(position) is not None

    def intersection_at_position(self, position: Iterable[float]) -> Intersection | None:
        position = _to_point(position)
        for node in self._intersections:
            if same_point(node.position, position):
                return node
        return None

    def remove_filament_roads(self) -> None:
        """Remove every road with an end that no other road reaches."""
        filaments = [
            road
            for road in self._roads
            if road.beginning.number_of_ways() <= 1 or road.end.number_of_ways() <= 1
        ]
        for road in filaments:
            self.remove_road(road)

    def check_consistence(self) -> None:
        """Raise ValueError if two roads cross or overlap other than at their ends."""
        for current in self._roads:
            for other in self._roads:
                if other is current:
                    continue
                crossing, point = current.path.crosses(other.path)
                if crossing is Crossing.INTERSECTING:
                    if same_point(point, current.path.beginning) or same_point(
                        point, current.path.end
                    ):
                        continue
                    raise ValueError(f"{current} crosses {other}")
                if crossing in _OVERLAPS:
                    raise ValueError(f"{current} overlaps {other}")

    def __str__(self) -> str:
        lines = ["Roads:"]
        for road in self._roads:
            lines.append(f"  {id(road):#x}")
            lines.append(f"    from {id(road.beginning):#x} to {id(road.end):#x}")
            lines.append(f"    {road.path}")
        lines.append("Intersections:")
        for node in self._intersections:
            lines.append(f"  {id(node):#x}")
            lines.append(f"    at {_format_point(node.position)}")
            lines.extend(f"    {id(road):#x}" for road in node.roads())
        return "\n".join(lines) + "\n"