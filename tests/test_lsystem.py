import pytest

from urbangen.lsystem import LSystem, ProductionRule
from urbangen.rng import RANDOM_SEED, Random


@pytest.fixture(autouse=True)
def _reset_seed():
    Random.set_seed(RANDOM_SEED)


def test_algae():
    lsystem = LSystem()
    lsystem.set_alphabet("AB")
    lsystem.set_axiom("A")
    lsystem.add_rule("A", "AB")
    lsystem.add_rule("B", "A")

    expected = [
        "AB",
        "ABA",
        "ABAAB",
        "ABAABABA",
        "ABAABABAABAAB",
        "ABAABABAABAABABAABABA",
        "ABAABABAABAABABAABABAABAABABAABAAB",
    ]
    for value in expected:
        lsystem.do_iterations(1)
        assert lsystem.produced_string() == value


def test_fibonacci():
    lsystem = LSystem()
    lsystem.set_alphabet("AB")
    lsystem.set_axiom("A")
    lsystem.add_rule("A", "B")
    lsystem.add_rule("B", "AB")

    lsystem.do_iterations(7)
    assert lsystem.produced_string() == "BABABBABABBABBABABBAB"


def test_misc():
    lsystem = LSystem()
    assert lsystem.produced_string() == ""

    lsystem.add_to_alphabet("AB")
    lsystem.set_axiom("A")
    assert lsystem.produced_string() == "A"

    lsystem.add_to_alphabet("A")

    lsystem.set_axiom("AB")
    assert lsystem.do_iterations(10) == 0
    assert lsystem.produced_string() == "AB"


def test_rewrite_count():
    lsystem = LSystem()
    lsystem.set_alphabet("AB")
    lsystem.set_axiom("AAB")
    lsystem.add_rule("A", "B")
    assert lsystem.do_iteration() == 2
    assert lsystem.produced_string() == "BBB"
    assert lsystem.do_iteration() == 0


def test_set_alphabet_clears_rules_and_axiom():
    lsystem = LSystem()
    lsystem.set_alphabet("AB")
    lsystem.set_axiom("A")
    lsystem.add_rule("A", "B")
    lsystem.set_alphabet("XY")
    assert lsystem.produced_string() == ""
    assert lsystem.axiom == ""
    assert lsystem.rules == {}
    assert lsystem.is_terminal("A")


def test_alphabet_membership():
    lsystem = LSystem()
    lsystem.set_alphabet("AB")
    assert lsystem.is_in_alphabet("ABBA")
    assert not lsystem.is_in_alphabet("ABC")
    assert lsystem.is_in_alphabet("")


def test_terminal():
    lsystem = LSystem()
    lsystem.set_alphabet("AB")
    lsystem.add_rule("A", "B")
    assert not lsystem.is_terminal("A")
    assert lsystem.is_terminal("B")


def test_stochastic_rule():
    lsystem = LSystem()
    lsystem.set_alphabet("ABC")
    lsystem.set_axiom("A")
    lsystem.add_rule("A", "B")
    lsystem.add_rule("A", "C")
    assert lsystem.rules["A"].successors == ["B", "C"]
    lsystem.do_iteration()
    assert lsystem.produced_string() in {"B", "C"}


def test_production_rule_choose():
    rule = ProductionRule("A", "xy")
    assert rule.predecessor == "A"
    assert rule.choose() == "xy"
    rule.add_successor("z")
    choices = {rule.choose() for _ in range(100)}
    assert choices <= {"xy", "z"}
    assert choices == {"xy", "z"}