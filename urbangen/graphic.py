"""L-system with a drawing cursor and a cursor stack."""

from __future__ import annotations

import math
from collections.abc import Iterable

from urbangen.lsystem import LSystem, Symbol

Coordinates = tuple[float, float, float]


def _as_coordinates(values: Iterable[float]) -> Coordinates:
    coords = tuple(float(value) for value in values)
    if len(coords) == 2:
        coords += (0.0,)
    if len(coords) != 3:
        raise ValueError(f"expected 2 or 3 coordinates, got {len(coords)}")
    return coords  # type: ignore[return-value]


def _normalized(vector: Coordinates) -> Coordinates:
    length = math.hypot(*vector)
    if length == 0:
        return vector
    return (vector[0] / length, vector[1] / length, vector[2] / length)


class Cursor:
    """A position and a heading; headings set through the property are normalized."""

    def __init__(
        self,
        position: Iterable[float] = (0.0, 0.0, 0.0),
        direction: Iterable[float] = (0.0, 0.0, 0.0),
    ) -> None:
        self._position = _as_coordinates(position)
        self._direction = _as_coordinates(direction)

    @property
    def position(self) -> Coordinates:
        return self._position

    @position.setter
    def position(self, value: Iterable[float]) -> None:
        self._position = _as_coordinates(value)

    @property
    def direction(self) -> Coordinates:
        return self._direction

    @direction.setter
    def direction(self, value: Iterable[float]) -> None:
        self._direction = _normalized(_as_coordinates(value))

    def copy(self) -> Cursor:
        return Cursor(self._position, self._direction)

    def move(self, distance: float) -> None:
        """Advance along the heading by ``distance``."""
        self._direction = _normalized(self._direction)
        self._position = tuple(
            p + d * distance for p, d in zip(self._position, self._direction)
        )  # type: ignore[assignment]

    def turn(self, angle: float) -> None:
        """Rotate the heading around the z axis by ``angle`` degrees."""
        radians = math.radians(angle)
        cos, sin = math.cos(radians), math.sin(radians)
        x, y, z = self._direction
        self._direction = _normalized((x * cos - y * sin, x * sin + y * cos, z))

    def __repr__(self) -> str:
        return f"Cursor(position={self._position}, direction={self._direction})"


class GraphicLSystem(LSystem):
    """L-system read symbol by symbol, each read moving a drawing cursor.

    Alphabet: ``[`` pushes the cursor, ``]`` pops it, ``.`` and ``_`` are
    left for subclasses to draw.
    """

    def __init__(self) -> None:
        super().__init__()
        self.cursor = Cursor()
        self._cursor_stack: list[Cursor] = []
        self._cursors: dict[Symbol, Cursor] = {}
        self._current_index: int | None = None
        self.set_alphabet("[]._")
        self.set_axiom(".")

    def _discard_symbol(self, symbol: Symbol) -> None:
        self._cursors.pop(symbol, None)

    def _push_cursor(self) -> None:
        self._cursor_stack.append(self.cursor.copy())

    def _pop_cursor(self) -> None:
        if self._cursor_stack:
            self.cursor = self._cursor_stack.pop()

    def _load_cursor(self, symbol: Symbol) -> None:
        self.cursor = self._cursors.setdefault(symbol, Cursor()).copy()

    def _save_cursor(self, symbol: Symbol) -> None:
        self._cursors[symbol] = self.cursor.copy()

    def _interpret_symbol(self, char: str) -> None:
        if char == "[":
            self._push_cursor()
        elif char == "]":
            self._pop_cursor()

    def set_initial_position(self, position: Iterable[float]) -> None:
        self.cursor.position = position

    def set_initial_direction(self, direction: Iterable[float]) -> None:
        self.cursor.direction = direction

    def read_next_symbol(self) -> str | None:
        """Interpret the first unread symbol and return it.

        When every symbol has been read, one more rewriting pass is made;
        None is returned when that produces nothing new.
        """
        while True:
            if not self._produced:
                return None
            for index, symbol in enumerate(self._produced):
                if not symbol.read:
                    break
                self._load_cursor(symbol)
            else:
                if self.do_iterations(1) > 0:
                    continue
                return None

            self._current_index = index
            self._interpret_symbol(symbol.char)
            symbol.read = True
            self._save_cursor(symbol)
            return symbol.char