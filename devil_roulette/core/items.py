from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, get_args

from .rng import DeterministicRNG

ItemType = Literal[
    "magnifying_glass",
    "handsaw",
    "beer",
    "cigarette",
    "handcuffs",
    "inverter",
    "burner_phone",
    "expired_medicine",
    "adrenaline",
]

ALL_ITEMS: tuple[ItemType, ...] = get_args(ItemType)
MIN_ITEMS_PER_ROUND = 2
MAX_ITEMS_PER_ROUND = 4


@dataclass(frozen=True, slots=True)
class ItemDefinition:
    id: ItemType
    name: str
    description: str
    advanced: bool = False


ITEM_DEFINITIONS: dict[str, ItemDefinition] = {
    item.id: item
    for item in (
        ItemDefinition("magnifying_glass", "Magnifying Glass", "Look at the current shell."),
        ItemDefinition("handsaw", "Handsaw", "The next live shell deals double damage."),
        ItemDefinition("beer", "Beer", "Rack the current shell out and see what it was."),
        ItemDefinition("cigarette", "Cigarette", "Heal 1 HP."),
        ItemDefinition("handcuffs", "Handcuffs", "Your opponent skips their next turn."),
        ItemDefinition("inverter", "Inverter", "Flip the current shell between live and blank.", advanced=True),
        ItemDefinition("burner_phone", "Burner Phone", "Learn the type of a random future shell.", advanced=True),
        ItemDefinition("expired_medicine", "Expired Medicine", "50%: heal 2 HP. 50%: lose 1 HP.", advanced=True),
        ItemDefinition("adrenaline", "Adrenaline", "Steal a random item from your opponent.", advanced=True),
    )
}

BASIC_ITEMS: tuple[ItemType, ...] = tuple(item for item in ALL_ITEMS if not ITEM_DEFINITIONS[item].advanced)
ADVANCED_ITEMS: tuple[ItemType, ...] = tuple(item for item in ALL_ITEMS if ITEM_DEFINITIONS[item].advanced)


def distribute_items(include_advanced: bool, rng: DeterministicRNG) -> list[ItemType]:
    """Roll a fresh per-round hand of 2-4 items, duplicates allowed."""
    pool = BASIC_ITEMS + ADVANCED_ITEMS if include_advanced else BASIC_ITEMS
    count = rng.next_int(MIN_ITEMS_PER_ROUND, MAX_ITEMS_PER_ROUND + 1)
    return [rng.choice(pool) for _ in range(count)]
