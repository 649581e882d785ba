from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, get_args

from .rng import DeterministicRNG

DealerType = Literal["degen", "coward", "maniac", "mimic", "paranoid"]
DealerAction = Literal["shoot_opponent", "shoot_self"]

ALL_DEALER_TYPES: tuple[DealerType, ...] = get_args(DealerType)
DEGEN_LIVE_THRESHOLD = 0.40


@dataclass(frozen=True, slots=True)
class DealerInfo:
    type: DealerType
    name: str
    description: str


DEALERS: dict[str, DealerInfo] = {
    info.type: info
    for info in (
        DealerInfo("degen", "The Degenerate", "Shoots you whenever the odds of live are above 40%."),
        DealerInfo("coward", "The Coward", "Only shoots you when the next shell is certainly live."),
        DealerInfo("maniac", "The Maniac", "Flips a coin."),
        DealerInfo("mimic", "The Mimic", "Copies your last move."),
        DealerInfo("paranoid", "The Paranoid", "Always shoots you."),
    )
}


def get_dealer_action(
    dealer_type: DealerType,
    live_count: int,
    blank_count: int,
    player_last_action: DealerAction | None,
    rng: DeterministicRNG,
) -> DealerAction:
    """Pick the dealer's shot. Reads counts only; never touches the chamber.

    Only the maniac draws from ``rng``.
    """
    total = live_count + blank_count
    p_live = live_count / total if total > 0 else 0.0

    if dealer_type == "degen":
        return "shoot_opponent" if p_live > DEGEN_LIVE_THRESHOLD else "shoot_self"
    if dealer_type == "coward":
        return "shoot_opponent" if blank_count == 0 else "shoot_self"
    if dealer_type == "maniac":
        return "shoot_opponent" if rng.chance(0.5) else "shoot_self"
    if dealer_type == "mimic":
        return player_last_action or "shoot_opponent"
    if dealer_type == "paranoid":
        return "shoot_opponent"
    raise ValueError(f"Unknown dealer type '{dealer_type}'.")
