import pytest

from urbangen.rng import RANDOM_SEED, Random


@pytest.fixture(autouse=True)
def _reset_seed():
    Random.set_seed(RANDOM_SEED)
    yield
    Random.set_seed(RANDOM_SEED)


def test_own_seed_generators_agree():
    g1 = Random(RANDOM_SEED)
    g2 = Random(RANDOM_SEED)
    first = [g1.generate_double(0, 100) for _ in range(5)]
    second = [g2.generate_double(0, 100) for _ in range(5)]
    assert first == second


def test_own_seed_follows_shared_stream_from_same_start():
    shared = [Random().generate_double(0, 1) for _ in range(3)]
    own = Random(RANDOM_SEED)
    assert [own.generate_double(0, 1) for _ in range(3)] == shared


def test_own_seed_does_not_advance_shared_stream():
    expected = Random().generate_double(0, 1)
    Random.set_seed(RANDOM_SEED)
    Random(123).generate_double(0, 1)
    assert Random().generate_double(0, 1) == expected


def test_shared_stream_advances_between_generators():
    first = Random().generate_double(0, 1)
    second = Random().generate_double(0, 1)
    assert first != second
    Random.set_seed(RANDOM_SEED)
    assert Random().generate_double(0, 1) == first


def test_generate_double_bounds():
    generator = Random()
    for _ in range(50):
        assert 0 <= generator.generate_double(0, 1) <= 1
        assert 0 <= generator.generate_double(1, 0) <= 1
    assert generator.generate_double(2, 2) == 2


def test_generate_integer_bounds():
    generator = Random()
    values = {generator.generate_integer(3, 1) for _ in range(200)}
    assert values <= {1, 2, 3}
    assert generator.generate_integer(0, 0) == 0


def test_generate_bool():
    generator = Random()
    generator.generate_bool(0.5)
    for _ in range(18):
        assert generator.generate_bool(1) is True
    for _ in range(18):
        assert generator.generate_bool(0) is False


def test_double_value_factory():
    generator = Random.double_value(5, 10)
    for _ in range(20):
        assert 5 <= generator.generate() < 10


def test_integer_value_factory():
    generator = Random.integer_value(2, 4)
    values = {generator.generate() for _ in range(100)}
    assert values <= {2, 3, 4}
    assert all(isinstance(value, int) for value in values)


def test_bool_value_factory():
    assert Random.bool_value(1).generate() is True
    assert Random.bool_value(0).generate() is False


def test_unconfigured_generate_raises():
    with pytest.raises(ValueError):
        Random().generate()