from __future__ import annotations

import pytest

from devil_roulette.core.chamber import Chamber, Shell
from devil_roulette.core.errors import InvalidActionError
from devil_roulette.core.rng import DeterministicRNG


@pytest.mark.parametrize("live,blank", [(0, 0), (1, 0), (0, 3), (2, 2), (4, 4), (3, 1)])
def test_counts_match_remaining_while_drawing(live: int, blank: int) -> None:
    chamber = Chamber(live, blank, DeterministicRNG.from_seed(live * 10 + blank))
    assert chamber.live_count == live
    assert chamber.blank_count == blank
    assert chamber.total_remaining == live + blank

    for drawn in range(1, live + blank + 1):
        chamber.draw()
        assert chamber.total_remaining == live + blank - drawn
        assert chamber.live_count + chamber.blank_count == chamber.total_remaining
    assert chamber.is_empty


def test_shuffle_consumes_one_draw_per_swap() -> None:
    rng = DeterministicRNG.from_seed(3)
    Chamber(3, 4, rng)
    assert rng.calls == 6

    rng = DeterministicRNG.from_seed(3)
    Chamber(1, 0, rng)
    assert rng.calls == 0


def test_shuffle_is_reproducible_from_seed() -> None:
    first = Chamber(4, 4, DeterministicRNG.from_seed(11)).snapshot()
    second = Chamber(4, 4, DeterministicRNG.from_seed(11)).snapshot()
    assert first == second


def test_from_sequence_keeps_order() -> None:
    chamber = Chamber.from_sequence([Shell.LIVE, "blank", Shell.BLANK])
    assert chamber.peek() is Shell.LIVE
    assert chamber.peek_at(1) is Shell.BLANK
    assert chamber.draw() is Shell.LIVE
    assert chamber.eject_current() is Shell.BLANK
    assert chamber.total_remaining == 1


def test_invert_only_flips_head() -> None:
    chamber = Chamber.from_sequence([Shell.BLANK, Shell.BLANK])
    assert chamber.invert_current() is Shell.LIVE
    assert chamber.snapshot() == ["live", "blank"]


def test_empty_chamber_rejects_head_operations() -> None:
    chamber = Chamber.from_sequence([])
    for operation in (chamber.draw, chamber.eject_current, chamber.invert_current, chamber.peek):
        with pytest.raises(InvalidActionError):
            operation()
    with pytest.raises(InvalidActionError):
        Chamber.from_sequence([Shell.LIVE]).peek_at(1)


def test_negative_counts_are_rejected() -> None:
    with pytest.raises(ValueError):
        Chamber(-1, 2, DeterministicRNG.from_seed(1))
