from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

from .dealer import ALL_DEALER_TYPES, DealerType
from .rng import DeterministicRNG

NodeType = Literal["combat", "shop", "gamble", "rest"]

START_LAYER = 7
BOSS_LAYERS: frozenset[int] = frozenset({5, 1})
ALL_NODE_TYPES: tuple[NodeType, ...] = ("combat", "shop", "gamble", "rest")
PATH_OPTION_COUNT = 3
ADVANCED_ITEM_LAYER = 5
FINAL_BOSS_LAYER = 1
MIMIC_BOSS_LAYER = 5
FINAL_BOSS_HP = 6
DEALER_HP_RANGE = (2, 4)
SHELLS_PER_KIND = (2, 4)
CHIP_REWARD_RANGE = (2, 5)

BOSS_DEALERS: dict[int, DealerType] = {
    MIMIC_BOSS_LAYER: "mimic",
    FINAL_BOSS_LAYER: "paranoid",
}


@dataclass(frozen=True, slots=True)
class LayerSnapshot:
    layer: int
    is_boss: bool
    includes_advanced_items: bool
    forced_dealer: DealerType | None


def is_boss_layer(layer: int) -> bool:
    return layer in BOSS_LAYERS


def includes_advanced_items(layer: int) -> bool:
    return layer <= ADVANCED_ITEM_LAYER


def path_options(layer: int, rng: DeterministicRNG) -> list[NodeType]:
    if is_boss_layer(layer):
        return ["combat"]
    return [rng.choice(ALL_NODE_TYPES) for _ in range(PATH_OPTION_COUNT)]


def dealer_hp_for_layer(layer: int, player_hp: int) -> int:
    if layer == FINAL_BOSS_LAYER:
        return FINAL_BOSS_HP
    if layer == MIMIC_BOSS_LAYER:
        return player_hp
    low, high = DEALER_HP_RANGE
    hp = math.ceil((START_LAYER + 1 - layer) / 2) + 1
    return max(low, min(high, hp))


def dealer_type_for_layer(layer: int, rng: DeterministicRNG) -> DealerType:
    forced = BOSS_DEALERS.get(layer)
    if forced is not None:
        return forced
    return rng.choice(ALL_DEALER_TYPES)


def roll_shell_counts(rng: DeterministicRNG) -> tuple[int, int]:
    low, high = SHELLS_PER_KIND
    live = rng.next_int(low, high + 1)
    blank = rng.next_int(low, high + 1)
    return live, blank


def roll_chip_reward(rng: DeterministicRNG) -> int:
    low, high = CHIP_REWARD_RANGE
    return rng.next_int(low, high + 1)


def snapshot(layer: int) -> LayerSnapshot:
    return LayerSnapshot(
        layer=layer,
        is_boss=is_boss_layer(layer),
        includes_advanced_items=includes_advanced_items(layer),
        forced_dealer=BOSS_DEALERS.get(layer),
    )
