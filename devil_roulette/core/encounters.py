from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .items import ALL_ITEMS, ITEM_DEFINITIONS, ItemType
from .models import RunState
from .relics import ALL_RELICS, RELIC_DEFINITIONS, RelicType
from .rng import DeterministicRNG

OfferKind = Literal["item", "relic", "heal"]

CONSUMABLE_OFFERS = (1, 2)
CONSUMABLE_PRICE = (1, 3)
RELIC_OFFER_CHANCE = 0.6
RELIC_PRICE = (5, 8)
HEAL_PRICE = 3
HEAL_AMOUNT = 1
REST_HEAL = 1
GAMBLE_ENTRY_COST = 3
GAMBLE_WIN_THRESHOLD = 7
GAMBLE_PROFIT = 4


@dataclass(slots=True)
class ShopOffer:
    kind: OfferKind
    name: str
    description: str
    price: int
    item: ItemType | None = None
    relic: RelicType | None = None
    sold: bool = False


@dataclass(frozen=True, slots=True)
class GambleResult:
    die1: int
    die2: int
    won: bool
    chips_delta: int

    @property
    def total(self) -> int:
        return self.die1 + self.die2


def _roll(rng: DeterministicRNG, bounds: tuple[int, int]) -> int:
    low, high = bounds
    return rng.next_int(low, high + 1)


def generate_shop_offers(rng: DeterministicRNG) -> list[ShopOffer]:
    offers: list[ShopOffer] = []
    for _ in range(_roll(rng, CONSUMABLE_OFFERS)):
        item = rng.choice(ALL_ITEMS)
        definition = ITEM_DEFINITIONS[item]
        offers.append(
            ShopOffer(
                kind="item",
                name=definition.name,
                description=definition.description,
                price=_roll(rng, CONSUMABLE_PRICE),
                item=item,
            )
        )

    if rng.chance(RELIC_OFFER_CHANCE):
        relic = rng.choice(ALL_RELICS)
        definition = RELIC_DEFINITIONS[relic]
        offers.append(
            ShopOffer(
                kind="relic",
                name=definition.name,
                description=definition.description,
                price=_roll(rng, RELIC_PRICE),
                relic=relic,
            )
        )

    offers.append(
        ShopOffer(
            kind="heal",
            name=f"Heal {HEAL_AMOUNT} HP",
            description=f"Restore {HEAL_AMOUNT} HP.",
            price=HEAL_PRICE,
        )
    )
    return offers


def can_buy(run: RunState, offer: ShopOffer) -> bool:
    if offer.sold or run.chips < offer.price:
        return False
    if offer.kind == "relic" and (run.relics.is_full or run.relics.has(offer.relic)):
        return False
    return True


def buy_offer(run: RunState, offer: ShopOffer) -> bool:
    """Pay for ``offer`` and apply it. Returns False without side effects when it cannot be bought."""
    if not can_buy(run, offer) or not run.spend_chips(offer.price):
        return False
    offer.sold = True
    if offer.kind == "item":
        run.purchased_items.append(offer.item)
    elif offer.kind == "relic":
        run.relics.add(offer.relic)
    else:
        run.heal(HEAL_AMOUNT)
    return True


def gamble(run: RunState, rng: DeterministicRNG) -> GambleResult | None:
    """Devil dice: pay the entry, roll 2d6, a total above 7 pays entry plus profit.

    Returns None (and draws nothing) when the player cannot afford the entry.
    """
    if not run.spend_chips(GAMBLE_ENTRY_COST):
        return None
    die1 = rng.next_int(1, 7)
    die2 = rng.next_int(1, 7)
    won = die1 + die2 > GAMBLE_WIN_THRESHOLD
    if won:
        run.add_chips(GAMBLE_ENTRY_COST + GAMBLE_PROFIT)
    return GambleResult(
        die1=die1,
        die2=die2,
        won=won,
        chips_delta=GAMBLE_PROFIT if won else -GAMBLE_ENTRY_COST,
    )


def rest(run: RunState) -> int:
    return run.heal(REST_HEAL)
