from __future__ import annotations

import pytest

from devil_roulette.core.rng import DeterministicRNG


def test_same_seed_produces_identical_stream() -> None:
    rng_a = DeterministicRNG.from_seed(42)
    rng_b = DeterministicRNG.from_seed(42)
    assert [rng_a.next_float() for _ in range(50)] == [rng_b.next_float() for _ in range(50)]


def test_different_seeds_diverge() -> None:
    rng_a = DeterministicRNG.from_seed(1)
    rng_b = DeterministicRNG.from_seed(2)
    assert [rng_a.next_float() for _ in range(10)] != [rng_b.next_float() for _ in range(10)]


def test_floats_are_in_unit_interval_and_calls_are_counted() -> None:
    rng = DeterministicRNG.from_seed("balance")
    values = [rng.next_float() for _ in range(1000)]
    assert all(0.0 <= value < 1.0 for value in values)
    assert rng.calls == 1000
    assert len(set(values)) > 990


def test_reseed_restarts_stream_and_reports_seed() -> None:
    rng = DeterministicRNG.from_seed(7)
    first = [rng.next_float() for _ in range(5)]
    rng.reseed(7)
    assert rng.calls == 0
    assert [rng.next_float() for _ in range(5)] == first
    rng.reseed(8)
    assert rng.current_seed == 8


def test_unseeded_stream_reports_no_seed() -> None:
    rng = DeterministicRNG.unseeded()
    assert rng.current_seed is None
    assert 0.0 <= rng.next_float() < 1.0


def test_next_int_stays_in_range_and_rejects_empty_range() -> None:
    rng = DeterministicRNG.from_seed(99)
    rolls = {rng.next_int(1, 7) for _ in range(500)}
    assert rolls == {1, 2, 3, 4, 5, 6}
    with pytest.raises(ValueError):
        rng.next_int(3, 3)


def test_choice_requires_values() -> None:
    rng = DeterministicRNG.from_seed(5)
    assert rng.choice(["only"]) == "only"
    with pytest.raises(ValueError):
        rng.choice([])
