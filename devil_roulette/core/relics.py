from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

RelicType = Literal[
    "demons_eye",
    "blood_pact",
    "cursed_shell",
    "black_handcuffs",
    "lucky_coin",
    "soul_steal",
    "hell_cigarettes",
    "broken_lens",
]
RelicTrigger = Literal["round_start", "battle_won", "live_shot", "self_shot", "magnifying_glass"]

ALL_RELICS: tuple[RelicType, ...] = get_args(RelicType)
MAX_RELICS = 4


@dataclass(frozen=True, slots=True)
class RelicDefinition:
    id: RelicType
    name: str
    description: str
    trigger: RelicTrigger
    chance: float = 1.0


RELIC_DEFINITIONS: dict[str, RelicDefinition] = {
    relic.id: relic
    for relic in (
        RelicDefinition(
            id="demons_eye",
            name="Demon's Eye",
            description="Reveals the first shell at the start of every round.",
            trigger="round_start",
        ),
        RelicDefinition(
            id="blood_pact",
            name="Blood Pact",
            description="Heal 1 HP after every battle won.",
            trigger="battle_won",
        ),
        RelicDefinition(
            id="cursed_shell",
            name="Cursed Shell",
            description="Your live shells have a 20% chance to deal double damage.",
            trigger="live_shot",
            chance=0.20,
        ),
        RelicDefinition(
            id="black_handcuffs",
            name="Black Iron Cuffs",
            description="Every reload arms the cuffs for whoever is about to shoot.",
            trigger="round_start",
        ),
        RelicDefinition(
            id="lucky_coin",
            name="Lucky Coin",
            description="30% chance to take no damage when you shoot yourself with a live shell.",
            trigger="self_shot",
            chance=0.30,
        ),
        RelicDefinition(
            id="soul_steal",
            name="Soul Steal",
            description="Heal 2 HP when you kill a dealer.",
            trigger="battle_won",
        ),
        RelicDefinition(
            id="hell_cigarettes",
            name="Hell's Cigarette Case",
            description="One extra cigarette every round.",
            trigger="round_start",
        ),
        RelicDefinition(
            id="broken_lens",
            name="Broken Lens",
            description="The first magnifying glass used each round is not consumed.",
            trigger="magnifying_glass",
        ),
    )
}


class RelicInventory(BaseModel):
    model_config = ConfigDict(extra="forbid")

    relics: list[RelicType] = Field(default_factory=list, max_length=MAX_RELICS)

    @property
    def count(self) -> int:
        return len(self.relics)

    @property
    def is_full(self) -> bool:
        return len(self.relics) >= MAX_RELICS

    def has(self, relic: str) -> bool:
        return relic in self.relics

    def add(self, relic: RelicType) -> bool:
        if relic not in RELIC_DEFINITIONS:
            raise ValueError(f"Unknown relic '{relic}'.")
        if self.is_full or relic in self.relics:
            return False
        self.relics.append(relic)
        return True

    def remove(self, relic: str) -> bool:
        if relic not in self.relics:
            return False
        self.relics.remove(relic)
        return True

    def as_list(self) -> list[RelicType]:
        return list(self.relics)
