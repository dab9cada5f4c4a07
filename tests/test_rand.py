import math

import pytest

from ramos.rand import UniformRandom, inv_sqrt


def test_same_seed_same_sequence():
    first = UniformRandom()
    second = UniformRandom()
    assert [first.get_uint() for _ in range(20)] == [second.get_uint() for _ in range(20)]


def test_explicit_default_seed_matches_default():
    first = UniformRandom(362436069, 521288629)
    second = UniformRandom()
    assert [first.get_uniform(1000) for _ in range(10)] == [
        second.get_uniform(1000) for _ in range(10)
    ]


def test_get_uint_is_32_bit():
    rng = UniformRandom()
    values = [rng.get_uint() for _ in range(500)]
    assert all(0 <= v <= 0xFFFFFFFF for v in values)
    assert len(set(values)) > 1


@pytest.mark.parametrize("maximum", [1, 2, 100, 1000, 26214400])
def test_get_uniform_in_range(maximum):
    rng = UniformRandom()
    values = [rng.get_uniform(maximum) for _ in range(300)]
    assert all(0 <= v < maximum for v in values)


def test_get_uniform_zero():
    rng = UniformRandom()
    assert all(rng.get_uniform(0) == 0 for _ in range(10))


def test_get_uniform_negative_rejected():
    with pytest.raises(ValueError):
        UniformRandom().get_uniform(-1)


def test_get_uniform_spreads_across_range():
    rng = UniformRandom()
    values = {rng.get_uniform(2) for _ in range(200)}
    assert values == {0, 1}


@pytest.mark.parametrize("number", [0.25, 1.0, 2.0, 4.0, 100.0, 12345.0])
def test_inv_sqrt_close_to_exact(number):
    approx = inv_sqrt(number)
    assert approx * math.sqrt(number) == pytest.approx(1.0, rel=0.01)


def test_inv_sqrt_decreasing():
    assert inv_sqrt(9.0) < inv_sqrt(4.0) < inv_sqrt(1.0)