from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .battle import Turn, other_side
from .chamber import Shell
from .errors import InvalidActionError
from .items import ITEM_DEFINITIONS, ItemType

if TYPE_CHECKING:
    from .duel import Duel

CIGARETTE_HEAL = 1
MEDICINE_HEAL = 2
MEDICINE_DAMAGE = 1


@dataclass(slots=True)
class ItemUseResult:
    actor: Turn
    item: ItemType
    consumed: bool = True
    revealed: Shell | None = None
    revealed_index: int | None = None
    ejected: Shell | None = None
    healed: int = 0
    damage: int = 0
    stolen: ItemType | None = None
    note: str = ""

    def describe(self) -> str:
        name = ITEM_DEFINITIONS[self.item].name
        return f"{self.actor} used {name}: {self.note}" if self.note else f"{self.actor} used {name}."


def apply_item(duel: Duel, actor: Turn, item: ItemType) -> ItemUseResult:
    """Resolve one item for ``actor``. Never changes whose turn it is.

    Reloading after a beer empties the chamber and the win check are left to the
    duel, which runs them after every action.
    """
    battle = duel.battle
    chamber = duel.chamber
    if chamber is None or chamber.is_empty:
        raise InvalidActionError("Items need a loaded chamber.")
    knowledge = duel.knowledge[actor]
    result = ItemUseResult(actor=actor, item=item)

    if item == "magnifying_glass":
        result.revealed = chamber.peek()
        result.revealed_index = 0
        knowledge.current = result.revealed
        result.note = f"the current shell is {result.revealed.value}"
        if actor == "player" and duel.claim_broken_lens():
            result.consumed = False
            result.note += " (Broken Lens kept the glass)"

    elif item == "handsaw":
        battle.arm_sawed_off()
        result.note = "the next live shell deals double damage"

    elif item == "beer":
        result.ejected = chamber.eject_current()
        result.revealed = result.ejected
        duel.forget_shells()
        result.note = f"racked out a {result.ejected.value} shell"

    elif item == "cigarette":
        result.healed = battle.heal(actor, CIGARETTE_HEAL, cap=duel.max_hp(actor))
        result.note = f"healed {result.healed} HP"

    elif item == "handcuffs":
        battle.arm_handcuffs()
        result.note = f"{other_side(actor)} is cuffed"

    elif item == "inverter":
        flipped = chamber.invert_current()
        for side_knowledge in duel.knowledge.values():
            if side_knowledge.current is not None:
                side_knowledge.current = flipped
        result.note = "the current shell was inverted"

    elif item == "burner_phone":
        remaining = chamber.total_remaining
        if remaining >= 2:
            index = duel.rng.next_int(1, remaining)
            result.revealed = chamber.peek_at(index)
            result.revealed_index = index
            knowledge.future[index] = result.revealed
            result.note = f"shell #{index + 1} is {result.revealed.value}"
        else:
            result.note = "only one shell left, nothing to see"

    elif item == "expired_medicine":
        if duel.rng.chance(0.5):
            result.healed = battle.heal(actor, MEDICINE_HEAL, cap=duel.max_hp(actor))
            result.note = f"lucky, healed {result.healed} HP"
        else:
            battle.damage(actor, MEDICINE_DAMAGE)
            result.damage = MEDICINE_DAMAGE
            result.note = f"unlucky, lost {MEDICINE_DAMAGE} HP"

    elif item == "adrenaline":
        victim_hand = duel.items[other_side(actor)]
        if victim_hand:
            stolen = victim_hand.pop(duel.rng.next_int(0, len(victim_hand)))
            duel.items[actor].append(stolen)
            result.stolen = stolen
            result.note = f"stole {ITEM_DEFINITIONS[stolen].name}"
        else:
            result.note = "the opponent has nothing to steal"

    else:
        raise ValueError(f"Unknown item '{item}'.")

    return result
