"""Linear congruential pseudo-random generator with a shared default stream."""

from __future__ import annotations

import enum

RANDOM_SEED = 5

_MODULUS = 2**32
_MULTIPLIER = 1103515245
_INCREMENT = 12345


class _Mode(enum.Enum):
    NONE = enum.auto()
    DOUBLE = enum.auto()
    INTEGER = enum.auto()
    BOOL = enum.auto()


class Random:
    """Deterministic 32-bit LCG.

    Generators created without a seed share one global stream: every value
    they draw advances the shared seed. Generators with their own seed run
    independently.
    """

    _seed: int = RANDOM_SEED

    def __init__(self, own_seed: float | None = None) -> None:
        self._own_seed = own_seed is not None
        if self._own_seed:
            self._state = int(own_seed) % _MODULUS
        else:
            self._state = Random._seed
        self._mode = _Mode.NONE
        self._lower = 0.0
        self._higher = 0.0
        self._probability = 0.0

    @classmethod
    def set_seed(cls, new_seed: int) -> None:
        """Set the seed of the shared stream."""
        Random._seed = int(new_seed) % _MODULUS

    @classmethod
    def double_value(cls, lower: float, higher: float) -> Random:
        """A generator whose generate() yields floats in [lower, higher)."""
        generator = cls()
        generator._mode = _Mode.DOUBLE
        generator._lower = float(lower)
        generator._higher = float(higher)
        return generator

    @classmethod
    def integer_value(cls, lower: int, higher: int) -> Random:
        """A generator whose generate() yields integers in [lower, higher]."""
        generator = cls()
        generator._mode = _Mode.INTEGER
        generator._lower = int(lower)
        generator._higher = int(higher)
        return generator

    @classmethod
    def bool_value(cls, chance: float) -> Random:
        """A generator whose generate() yields True with the given chance."""
        generator = cls()
        generator._mode = _Mode.BOOL
        generator._probability = float(chance)
        return generator

    def _base(self) -> float:
        self._state = (_MULTIPLIER * self._state + _INCREMENT) % _MODULUS
        if not self._own_seed:
            Random._seed = self._state
        return self._state / _MODULUS

    def generate_double(self, lower: float, higher: float) -> float:
        """A float between the two bounds; their order does not matter."""
        if lower > higher:
            lower, higher = higher, lower
        return self._base() * (higher - lower) + lower

    def generate_integer(self, lower: int, higher: int) -> int:
        """An integer between the two bounds inclusive; order does not matter."""
        if lower > higher:
            lower, higher = higher, lower
        return int(self._base() * (higher + 1 - lower) + lower)

    def generate_bool(self, chance: float) -> bool:
        """True with probability ``chance``."""
        return self.generate_double(0, 1) < chance

    def generate(self) -> float | int | bool:
        """A value of the kind this generator was configured for."""
        if self._mode is _Mode.DOUBLE:
            return self.generate_double(self._lower, self._higher)
        if self._mode is _Mode.INTEGER:
            return self.generate_integer(int(self._lower), int(self._higher))
        if self._mode is _Mode.BOOL:
            return self.generate_bool(self._probability)
        raise ValueError("generator has no configured value kind")