from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from . import run_director
from .dealer import DealerType
from .items import ItemType
from .relics import RelicInventory
from .rng import DeterministicRNG
from .run_director import NodeType


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class RunState(StrictModel):
    current_layer: int = run_director.START_LAYER
    player_hp: int = Field(default=4, ge=0)
    max_hp: int = Field(default=6, ge=1)
    chips: int = Field(default=0, ge=0)
    relics: RelicInventory = Field(default_factory=RelicInventory)
    purchased_items: list[ItemType] = Field(default_factory=list)

    @property
    def is_boss_layer(self) -> bool:
        return run_director.is_boss_layer(self.current_layer)

    @property
    def is_dead(self) -> bool:
        return self.player_hp <= 0

    @property
    def is_victory(self) -> bool:
        return self.current_layer <= 0

    def ascend(self) -> None:
        self.current_layer -= 1

    def get_path_options(self, rng: DeterministicRNG) -> list[NodeType]:
        return run_director.path_options(self.current_layer, rng)

    def get_dealer_hp(self) -> int:
        return run_director.dealer_hp_for_layer(self.current_layer, self.player_hp)

    def get_random_dealer_type(self, rng: DeterministicRNG) -> DealerType:
        return run_director.dealer_type_for_layer(self.current_layer, rng)

    def take_damage(self, amount: int) -> None:
        self.player_hp = max(0, self.player_hp - amount)

    def heal(self, amount: int) -> int:
        before = self.player_hp
        self.player_hp = max(0, min(self.max_hp, self.player_hp + amount))
        return self.player_hp - before

    def add_chips(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("add_chips requires a non-negative amount; use spend_chips to pay.")
        self.chips += amount

    def spend_chips(self, amount: int) -> bool:
        if amount < 0 or self.chips < amount:
            return False
        self.chips -= amount
        return True

    def take_purchased_items(self) -> list[ItemType]:
        items = list(self.purchased_items)
        self.purchased_items.clear()
        return items


@dataclass(slots=True)
class LogEntry:
    layer: int
    round: int
    type: str
    line: str
    data: dict[str, Any] | None = None

    def format(self) -> str:
        return f"[L{self.layer} r={self.round:02d}] [{self.type.upper()}] {self.line}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "layer": self.layer,
            "round": self.round,
            "type": self.type,
            "line": self.line,
            "data": self.data or {},
        }
