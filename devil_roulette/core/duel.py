from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from . import run_director
from .battle import Battle, ShotResult, Turn, Winner
from .chamber import Chamber, Shell
from .dealer import DEALERS, DealerAction, DealerType, get_dealer_action
from .effects import ItemUseResult, apply_item
from .errors import InvalidActionError
from .items import ITEM_DEFINITIONS, ItemType, distribute_items
from .models import LogEntry, RunState
from .rng import DeterministicRNG

BLOOD_PACT_HEAL = 1
SOUL_STEAL_HEAL = 2


@dataclass(slots=True)
class Knowledge:
    current: Shell | None = None
    future: dict[int, Shell] = field(default_factory=dict)

    def clear(self) -> None:
        self.current = None
        self.future.clear()


@dataclass(frozen=True, slots=True)
class BattleOutcome:
    winner: Winner
    chips_earned: int
    dealer_type: DealerType
    rounds: int
    healed: int = 0


@dataclass(slots=True)
class DealerTurn:
    items_used: list[ItemUseResult]
    action: DealerAction | None
    shot: ShotResult | None


class Duel:
    """One combat encounter: a Battle plus the hands, knowledge and relic hooks around it.

    Callers drive it with ``player_shoot``, ``player_use_item`` and
    ``dealer_take_turn`` and read ``outcome`` once ``is_over`` is true.
    """

    def __init__(
        self,
        run: RunState,
        dealer_type: DealerType,
        dealer_hp: int,
        rng: DeterministicRNG,
    ) -> None:
        if dealer_type not in DEALERS:
            raise ValueError(f"Unknown dealer type '{dealer_type}'.")
        self.run = run
        self.dealer_type = dealer_type
        self.dealer_max_hp = dealer_hp
        self.rng = rng
        self.battle = Battle(run.player_hp, dealer_hp, relics=run.relics, rng=rng)
        self.items: dict[Turn, list[ItemType]] = {"player": [], "dealer": []}
        self.knowledge: dict[Turn, Knowledge] = {"player": Knowledge(), "dealer": Knowledge()}
        self.player_last_action: DealerAction | None = None
        self.round = 0
        self.log: list[LogEntry] = []
        self.outcome: BattleOutcome | None = None
        self._broken_lens_used = False

        self._log("battle", f"{DEALERS[dealer_type].name} sits down with {dealer_hp} HP.", {"dealer": dealer_type})
        self.load_round()
        bonus = run.take_purchased_items()
        if bonus:
            self.items["player"].extend(bonus)
            self._log("items", f"Brought from the shop: {', '.join(bonus)}.")

    @property
    def chamber(self) -> Chamber | None:
        return self.battle.chamber

    @property
    def is_over(self) -> bool:
        return self.outcome is not None

    def max_hp(self, side: Turn) -> int:
        return self.run.max_hp if side == "player" else self.dealer_max_hp

    def _log(self, entry_type: str, line: str, data: dict[str, Any] | None = None) -> None:
        self.log.append(LogEntry(layer=self.run.current_layer, round=self.round, type=entry_type, line=line, data=data))

    def load_round(self) -> None:
        live, blank = run_director.roll_shell_counts(self.rng)
        self.load_chamber(Chamber(live, blank, self.rng))

        include_advanced = run_director.includes_advanced_items(self.run.current_layer)
        self.items["player"] = distribute_items(include_advanced, self.rng)
        self.items["dealer"] = distribute_items(include_advanced, self.rng)
        self._broken_lens_used = False
        self.round += 1
        self._log("round", f"Loaded {live} live and {blank} blank.", {"live": live, "blank": blank})

        relics = self.run.relics
        if relics.has("hell_cigarettes"):
            self.items["player"].append("cigarette")
            self._log("relic", "Hell's Cigarette Case adds a cigarette.")
        if relics.has("black_handcuffs"):
            self.battle.arm_handcuffs()
            self._log("relic", "Black Iron Cuffs arm the handcuffs.")
        if relics.has("demons_eye"):
            first = self.chamber.peek()
            self.knowledge["player"].current = first
            self._log("relic", f"Demon's Eye: the first shell is {first.value}.")

    def load_chamber(self, chamber: Chamber) -> None:
        self.battle.load_chamber(chamber)
        self.forget_shells()

    def forget_shells(self) -> None:
        for knowledge in self.knowledge.values():
            knowledge.clear()

    def claim_broken_lens(self) -> bool:
        if self._broken_lens_used or not self.run.relics.has("broken_lens"):
            return False
        self._broken_lens_used = True
        return True

    def _require_turn(self, actor: Turn) -> None:
        if self.is_over:
            raise InvalidActionError("The duel is already over.")
        if self.battle.current_turn != actor:
            raise InvalidActionError(f"It is not the {actor}'s turn.")

    def player_shoot(self, action: DealerAction) -> ShotResult:
        self._require_turn("player")
        self.player_last_action = action
        return self._fire(action)

    def player_use_item(self, index: int) -> ItemUseResult:
        return self.use_item("player", index)

    def use_item(self, actor: Turn, index: int) -> ItemUseResult:
        self._require_turn(actor)
        hand = self.items[actor]
        if index < 0 or index >= len(hand):
            raise InvalidActionError(f"No item at index {index} (hand size {len(hand)}).")

        item = hand.pop(index)
        try:
            result = apply_item(self, actor, item)
        except InvalidActionError:
            hand.insert(index, item)
            raise
        if not result.consumed:
            hand.insert(index, item)

        self._log("item", result.describe(), {"actor": actor, "item": item})
        self._settle()
        return result

    def dealer_take_turn(self) -> DealerTurn:
        self._require_turn("dealer")
        used: list[ItemUseResult] = []
        while not self.is_over:
            index = self._pick_dealer_item()
            if index is None:
                break
            used.append(self.use_item("dealer", index))
        if self.is_over:
            return DealerTurn(items_used=used, action=None, shot=None)

        chamber = self.chamber
        action = get_dealer_action(
            self.dealer_type,
            chamber.live_count,
            chamber.blank_count,
            self.player_last_action,
            self.rng,
        )
        return DealerTurn(items_used=used, action=action, shot=self._fire(action))

    def _pick_dealer_item(self) -> int | None:
        hand = self.items["dealer"]
        knows = self.knowledge["dealer"].current
        if "magnifying_glass" in hand and knows is None:
            return hand.index("magnifying_glass")
        if "handsaw" in hand and knows is Shell.LIVE and not self.battle.sawed_off:
            return hand.index("handsaw")
        if "handcuffs" in hand and not self.battle.handcuffed:
            return hand.index("handcuffs")
        if "cigarette" in hand and self.battle.dealer_hp < self.dealer_max_hp:
            return hand.index("cigarette")
        if "beer" in hand:
            return hand.index("beer")
        return None

    def _fire(self, action: DealerAction) -> ShotResult:
        self.forget_shells()
        if action == "shoot_opponent":
            result = self.battle.shoot_opponent()
        elif action == "shoot_self":
            result = self.battle.shoot_self()
        else:
            raise ValueError(f"Unknown action '{action}'.")

        line = f"{result.shooter} shot {result.victim}: {result.shell.value}"
        if result.damage:
            line += f", -{result.damage} HP"
        if result.lucky_coin:
            line += " (Lucky Coin negated the hit)"
        if result.cursed_shell:
            line += " (Cursed Shell doubled the hit)"
        if result.turn_kept:
            line += f", {result.shooter} keeps the turn"
        self._log("shot", line, {"action": action, "shell": result.shell.value, "damage": result.damage})
        self._settle()
        return result

    def _settle(self) -> None:
        self.run.player_hp = self.battle.player_hp
        if self.battle.winner is not None:
            self._finish()
        elif self.battle.needs_reload:
            self._log("round", "The chamber is empty, reloading.")
            self.load_round()

    def _finish(self) -> None:
        winner = self.battle.winner
        chips = 0
        healed = 0
        if winner == "player":
            chips = run_director.roll_chip_reward(self.rng)
            self.run.add_chips(chips)
            if self.run.relics.has("blood_pact"):
                healed += self.battle.heal("player", BLOOD_PACT_HEAL, cap=self.run.max_hp)
            if self.run.relics.has("soul_steal"):
                healed += self.battle.heal("player", SOUL_STEAL_HEAL, cap=self.run.max_hp)
            self.run.player_hp = self.battle.player_hp
            self._log("battle", f"The dealer is dead. +{chips} chips.", {"chips": chips, "healed": healed})
        else:
            self._log("battle", "You died at the table.")
        self.outcome = BattleOutcome(
            winner=winner,
            chips_earned=chips,
            dealer_type=self.dealer_type,
            rounds=self.round,
            healed=healed,
        )

    def snapshot(self) -> dict[str, Any]:
        chamber = self.chamber
        player_knowledge = self.knowledge["player"]
        return {
            "dealer_type": self.dealer_type,
            "dealer_max_hp": self.dealer_max_hp,
            "round": self.round,
            "battle": self.battle.snapshot(),
            "live_count": chamber.live_count if chamber else 0,
            "blank_count": chamber.blank_count if chamber else 0,
            "player_items": [ITEM_DEFINITIONS[item].name for item in self.items["player"]],
            "dealer_items": [ITEM_DEFINITIONS[item].name for item in self.items["dealer"]],
            "known_current": player_knowledge.current.value if player_knowledge.current else None,
            "known_future": {index: shell.value for index, shell in sorted(player_knowledge.future.items())},
            "relics": self.run.relics.as_list(),
            "outcome": None if self.outcome is None else self.outcome.winner,
        }
