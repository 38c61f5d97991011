"""Geometric path of a road: a straight segment between two points."""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable, Sequence

from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.base import BaseGeometry

EPSILON = 1e-6

Point = tuple[float, float, float]

_ORIGIN: Point = (0.0, 0.0, 0.0)


def _to_point(values: Iterable[float]) -> Point:
    coords = tuple(float(value) for value in values)
    if len(coords) == 2:
        coords += (0.0,)
    if len(coords) != 3:
        raise ValueError(f"expected 2 or 3 coordinates, got {len(coords)}")
    return coords  # type: ignore[return-value]


def _normalized(vector: Point) -> Point:
    length = math.hypot(*vector)
    if length == 0:
        return vector
    return (vector[0] / length, vector[1] / length, vector[2] / length)


def _interpolate(start: Point, stop: Point, t: float) -> Point:
    return tuple(a + (b - a) * t for a, b in zip(start, stop))  # type: ignore[return-value]


def _cross2d(first: Sequence[float], second: Sequence[float]) -> float:
    return first[0] * second[1] - first[1] * second[0]


def same_point(first: Iterable[float], second: Iterable[float]) -> bool:
    """True when the two points coincide within EPSILON in every coordinate."""
    return all(abs(a - b) <= EPSILON for a, b in zip(_to_point(first), _to_point(second)))


class Crossing(enum.Enum):
    """How two paths relate to each other in the plane."""

    INTERSECTING = enum.auto()
    NONINTERSECTING = enum.auto()
    CONTAINED = enum.auto()
    CONTAINING = enum.auto()
    IDENTICAL = enum.auto()
    OVERLAPPING = enum.auto()


class Path:
    """A straight path going from ``beginning`` to ``end``."""

    def __init__(
        self,
        beginning: Iterable[float] = _ORIGIN,
        end: Iterable[float] = _ORIGIN,
    ) -> None:
        self._beginning = _to_point(beginning)
        self._end = _to_point(end)

    @property
    def beginning(self) -> Point:
        return self._beginning

    @beginning.setter
    def beginning(self, value: Iterable[float]) -> None:
        self._beginning = _to_point(value)

    @property
    def end(self) -> Point:
        return self._end

    @end.setter
    def end(self, value: Iterable[float]) -> None:
        self._end = _to_point(value)

    def copy(self) -> Path:
        return Path(self._beginning, self._end)

    def crosses(self, other: Path) -> tuple[Crossing, Point | None]:
        """Relate this path to ``other`` in 2D.

        The point is given only for INTERSECTING, otherwise it is None.
        """
        a0, a1 = self._beginning, self._end
        b0, b1 = other._beginning, other._end
        d1 = (a1[0] - a0[0], a1[1] - a0[1])
        d2 = (b1[0] - b0[0], b1[1] - b0[1])
        len1 = math.hypot(*d1)
        len2 = math.hypot(*d2)

        if len1 < EPSILON:
            if other.goes_through(a0):
                return Crossing.INTERSECTING, a0
            return Crossing.NONINTERSECTING, None
        if len2 < EPSILON:
            if self.goes_through(b0):
                return Crossing.INTERSECTING, b0
            return Crossing.NONINTERSECTING, None

        offset = (b0[0] - a0[0], b0[1] - a0[1])
        denominator = _cross2d(d1, d2)

        if abs(denominator) > 1e-9 * len1 * len2:
            t = _cross2d(offset, d2) / denominator
            u = _cross2d(offset, d1) / denominator
            tol_t = EPSILON / len1
            tol_u = EPSILON / len2
            if -tol_t <= t <= 1 + tol_t and -tol_u <= u <= 1 + tol_u:
                return Crossing.INTERSECTING, _interpolate(a0, a1, min(max(t, 0.0), 1.0))
            return Crossing.NONINTERSECTING, None

        if abs(_cross2d(d1, offset)) / len1 > EPSILON:
            return Crossing.NONINTERSECTING, None

        squared = len1 * len1
        t0 = (offset[0] * d1[0] + offset[1] * d1[1]) / squared
        t1 = ((b1[0] - a0[0]) * d1[0] + (b1[1] - a0[1]) * d1[1]) / squared
        low, high = sorted((t0, t1))
        tol = EPSILON / len1

        start = max(0.0, low)
        stop = min(1.0, high)
        if stop < start - tol:
            return Crossing.NONINTERSECTING, None
        if stop - start <= tol:
            return Crossing.INTERSECTING, _interpolate(a0, a1, (start + stop) / 2)

        if abs(low) <= tol and abs(high - 1) <= tol:
            return Crossing.IDENTICAL, None
        if low >= -tol and high <= 1 + tol:
            return Crossing.CONTAINING, None
        if low <= tol and high >= 1 - tol:
            return Crossing.CONTAINED, None
        return Crossing.OVERLAPPING, None

    def goes_through(self, point: Iterable[float]) -> bool:
        """True when the point lies on the path in 2D."""
        px, py, _ = _to_point(point)
        flat = Path(
            (self._beginning[0], self._beginning[1]), (self._end[0], self._end[1])
        )
        return flat.distance((px, py)) <= EPSILON

    def is_inside(self, polygon: BaseGeometry | Iterable[Iterable[float]]) -> bool:
        """True when either end of the path lies in the polygon (border included)."""
        if isinstance(polygon, BaseGeometry):
            area = polygon
        else:
            area = ShapelyPolygon([tuple(_to_point(vertex))[:2] for vertex in polygon])
        return any(
            area.covers(ShapelyPoint(point[0], point[1]))
            for point in (self._beginning, self._end)
        )

    def nearest_point(self, point: Iterable[float]) -> Point:
        """The point of the path closest to ``point``."""
        target = _to_point(point)
        direction = tuple(e - b for b, e in zip(self._beginning, self._end))
        squared = sum(c * c for c in direction)
        if squared == 0:
            return self._beginning
        t = sum((p - b) * d for p, b, d in zip(target, self._beginning, direction)) / squared
        return _interpolate(self._beginning, self._end, min(max(t, 0.0), 1.0))

    def distance(self, point: Iterable[float]) -> float:
        target = _to_point(point)
        return math.dist(target, self.nearest_point(target))

    def length(self) -> float:
        return math.dist(self._beginning, self._end)

    def shorten(self, new_beginning: Iterable[float], new_end: Iterable[float]) -> None:
        """Move both ends to points that lie on the path."""
        new_beginning = _to_point(new_beginning)
        new_end = _to_point(new_end)
        if not (self.goes_through(new_beginning) and self.goes_through(new_end)):
            raise ValueError("new end points must lie on the path")
        self._beginning = new_beginning
        self._end = new_end

    def beginning_direction(self) -> Point:
        """Unit vector pointing backwards, away from the beginning."""
        return _normalized(tuple(b - e for b, e in zip(self._beginning, self._end)))  # type: ignore[arg-type]

    def end_direction(self) -> Point:
        """Unit vector pointing forwards, away from the end."""
        return _normalized(tuple(e - b for b, e in zip(self._beginning, self._end)))  # type: ignore[arg-type]

    def __str__(self) -> str:
        def fmt(point: Point) -> str:
            return "Point({:g}, {:g}, {:g})".format(*point)

        return f"Path(LineSegment({fmt(self._beginning)}, {fmt(self._end)}))"

    def __repr__(self) -> str:
        return f"Path({self._beginning!r}, {self._end!r})"