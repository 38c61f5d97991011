"""Context-free string rewriting L-system with optional stochastic rules."""

from __future__ import annotations

from dataclasses import dataclass

from urbangen.rng import Random


@dataclass(eq=False)
class Symbol:
    """One character of the produced string, with a read mark."""

    char: str
    read: bool = False


class ProductionRule:
    """A rule with one or more successors, chosen with equal probability."""

    def __init__(self, predecessor: str, successor: str) -> None:
        self.predecessor = predecessor
        self.successors: list[str] = [successor]

    def add_successor(self, successor: str) -> None:
        self.successors.append(successor)

    def choose(self) -> str:
        """Pick one successor using the shared random stream."""
        generator = Random()
        return self.successors[generator.generate_integer(0, len(self.successors) - 1)]


class LSystem:
    """Rewrites a string of symbols by production rules, one pass at a time."""

    def __init__(self) -> None:
        self.alphabet: set[str] = set()
        self.axiom = ""
        self.rules: dict[str, ProductionRule] = {}
        self._produced: list[Symbol] = []

    def _discard_symbol(self, symbol: Symbol) -> None:
        """Retire a symbol removed from the produced string so it is never read again."""
        symbol.read = True

    def _clear_produced(self) -> None:
        for symbol in reversed(self._produced):
            self._discard_symbol(symbol)
        self._produced = []

    def _reset(self) -> None:
        self._clear_produced()
        self._produced = [Symbol(char) for char in self.axiom]

    def set_alphabet(self, characters: str) -> None:
        """Replace the alphabet; also drops the axiom, rules and produced string."""
        self._clear_produced()
        self.axiom = ""
        self.rules = {}
        self.alphabet = set(characters)

    def add_to_alphabet(self, characters: str) -> None:
        self.alphabet.update(characters)

    def set_axiom(self, axiom: str) -> None:
        """Set the starting string and reset the produced string to it."""
        self.axiom = axiom
        self._reset()

    def is_in_alphabet(self, text: str) -> bool:
        return all(char in self.alphabet for char in text)

    def is_terminal(self, character: str) -> bool:
        return character not in self.rules

    def add_rule(self, predecessor: str, successor: str) -> None:
        """Add a rule; a second rule for the same symbol makes it stochastic."""
        existing = self.rules.get(predecessor)
        if existing is not None:
            existing.add_successor(successor)
        else:
            self.rules[predecessor] = ProductionRule(predecessor, successor)

    def do_iteration(self) -> int:
        """Rewrite every non-terminal symbol once; return the number of rewrites."""
        rewritten: list[Symbol] = []
        rewrites = 0
        for symbol in self._produced:
            rule = self.rules.get(symbol.char)
            if rule is None:
                rewritten.append(symbol)
                continue
            rewrites += 1
            rewritten.extend(Symbol(char) for char in rule.choose())
            self._discard_symbol(symbol)
        self._produced = rewritten
        return rewrites

    def do_iterations(self, count: int) -> int:
        return sum(self.do_iteration() for _ in range(count))

    def produced_string(self) -> str:
        return "".join(symbol.char for symbol in self._produced)