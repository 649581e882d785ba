from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

from .chamber import Shell
from .duel import BattleOutcome, Duel
from .encounters import GambleResult, ShopOffer, buy_offer, can_buy, gamble, generate_shop_offers, rest
from .errors import InvalidActionError
from .models import LogEntry, RunState
from .rng import DeterministicRNG
from .run_director import NodeType, snapshot as layer_snapshot

AutopickPolicy = Literal["aggressive", "cautious", "random"]
MAX_BATTLE_ACTIONS = 500


@dataclass(slots=True)
class RunReport:
    seed: int | str | None
    policy: AutopickPolicy
    won: bool
    final_layer: int
    final_hp: int
    chips: int
    battles: int
    relics: list[str]
    rng_calls: int
    cause_of_death: str | None = None
    timeline: list[LogEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "seed": self.seed,
            "policy": self.policy,
            "won": self.won,
            "final_layer": self.final_layer,
            "final_hp": self.final_hp,
            "chips": self.chips,
            "battles": self.battles,
            "relics": list(self.relics),
            "rng_calls": self.rng_calls,
            "cause_of_death": self.cause_of_death,
            "timeline": [entry.to_dict() for entry in self.timeline],
        }


class GameSession:
    """One run: the single RNG stream plus the RunState it drives."""

    def __init__(self, seed: int | str | None = None, rng: DeterministicRNG | None = None) -> None:
        if rng is None:
            rng = DeterministicRNG.from_seed(seed) if seed is not None else DeterministicRNG.unseeded()
        self.rng = rng
        self.run = RunState()
        self.timeline: list[LogEntry] = []
        self.battles = 0
        self.duel: Duel | None = None
        self.last_dealer: str | None = None

    @property
    def seed(self) -> int | str | None:
        return self.rng.current_seed

    @property
    def is_over(self) -> bool:
        return self.run.is_dead or self.run.is_victory

    def _log(self, entry_type: str, line: str, data: dict[str, Any] | None = None) -> None:
        self.timeline.append(LogEntry(layer=self.run.current_layer, round=0, type=entry_type, line=line, data=data))

    def _require_idle(self) -> None:
        if self.is_over:
            raise InvalidActionError("The run is over.")
        if self.duel is not None:
            raise InvalidActionError("Finish the current duel first.")

    def path_options(self) -> list[NodeType]:
        self._require_idle()
        options = self.run.get_path_options(self.rng)
        self._log("map", f"Paths: {', '.join(options)}.", {"options": list(options)})
        return options

    def start_combat(self) -> Duel:
        self._require_idle()
        dealer_type = self.run.get_random_dealer_type(self.rng)
        dealer_hp = self.run.get_dealer_hp()
        self.duel = Duel(self.run, dealer_type, dealer_hp, self.rng)
        self.last_dealer = dealer_type
        return self.duel

    def finish_combat(self) -> BattleOutcome:
        duel = self.duel
        if duel is None or duel.outcome is None:
            raise InvalidActionError("No finished duel to close.")
        self.timeline.extend(duel.log)
        self.duel = None
        self.battles += 1
        if duel.outcome.winner == "player":
            self.run.ascend()
            self._log("ascend", f"Ascended to layer {self.run.current_layer}.")
        return duel.outcome

    def open_shop(self) -> list[ShopOffer]:
        self._require_idle()
        offers = generate_shop_offers(self.rng)
        self._log("shop", ", ".join(f"{offer.name} ({offer.price})" for offer in offers))
        return offers

    def buy(self, offer: ShopOffer) -> bool:
        self._require_idle()
        bought = buy_offer(self.run, offer)
        if bought:
            self._log("shop", f"Bought {offer.name} for {offer.price} chips.")
        return bought

    def gamble(self) -> GambleResult | None:
        self._require_idle()
        result = gamble(self.run, self.rng)
        if result is None:
            self._log("gamble", "Not enough chips for the devil's dice.")
        else:
            self._log("gamble", f"Rolled {result.die1}+{result.die2}={result.total}, {'won' if result.won else 'lost'}.")
        return result

    def rest(self) -> int:
        self._require_idle()
        healed = rest(self.run)
        self._log("rest", f"Rested, healed {healed} HP.")
        return healed

    def snapshot(self) -> dict[str, Any]:
        return {
            "seed": self.seed,
            "run": self.run.model_dump(mode="python"),
            "layer": asdict(layer_snapshot(self.run.current_layer)),
            "battles": self.battles,
            "rng_calls": self.rng.calls,
            "duel": None if self.duel is None else self.duel.snapshot(),
        }


def _cautious_item(duel: Duel) -> int | None:
    hand = duel.items["player"]
    battle = duel.battle
    known = duel.knowledge["player"].current

    def first(item: str) -> int | None:
        return hand.index(item) if item in hand else None

    if known is None and first("magnifying_glass") is not None:
        return first("magnifying_glass")
    if battle.player_hp < duel.run.max_hp and first("cigarette") is not None:
        return first("cigarette")
    if known is Shell.BLANK and first("inverter") is not None:
        return first("inverter")
    if known is Shell.BLANK and first("beer") is not None:
        return first("beer")
    if known is Shell.LIVE and not battle.sawed_off and first("handsaw") is not None:
        return first("handsaw")
    if not battle.handcuffed and first("handcuffs") is not None:
        return first("handcuffs")
    if duel.items["dealer"] and first("adrenaline") is not None:
        return first("adrenaline")
    return None


def play_player_move(duel: Duel, policy: AutopickPolicy) -> None:
    if policy == "aggressive":
        duel.player_shoot("shoot_opponent")
        return
    if policy == "random":
        duel.player_shoot("shoot_opponent" if duel.rng.chance(0.5) else "shoot_self")
        return

    index = _cautious_item(duel)
    if index is not None:
        duel.player_use_item(index)
        return
    known = duel.knowledge["player"].current
    if known is None:
        known = Shell.LIVE if duel.chamber.live_probability >= 0.5 else Shell.BLANK
    duel.player_shoot("shoot_opponent" if known is Shell.LIVE else "shoot_self")


def _shop_autopick(session: GameSession, policy: AutopickPolicy) -> None:
    offers = session.open_shop()
    if policy != "cautious":
        return
    for offer in offers:
        if offer.kind == "heal" and session.run.player_hp >= session.run.max_hp:
            continue
        if can_buy(session.run, offer):
            session.buy(offer)


def play_duel(session: GameSession, policy: AutopickPolicy) -> BattleOutcome:
    duel = session.start_combat()
    actions = 0
    while not duel.is_over:
        actions += 1
        if actions > MAX_BATTLE_ACTIONS:
            raise RuntimeError(f"Duel exceeded {MAX_BATTLE_ACTIONS} actions without a winner.")
        if duel.battle.current_turn == "player":
            play_player_move(duel, policy)
        else:
            duel.dealer_take_turn()
    return session.finish_combat()


def step(session: GameSession, policy: AutopickPolicy = "aggressive") -> NodeType:
    """Visit the first offered node of the current layer."""
    node = session.path_options()[0]
    if node == "combat":
        play_duel(session, policy)
    elif node == "shop":
        _shop_autopick(session, policy)
    elif node == "gamble":
        session.gamble()
    else:
        session.rest()
    return node


def run_simulation(
    seed: int | str,
    policy: AutopickPolicy = "aggressive",
    max_steps: int = 200,
) -> RunReport:
    session = GameSession(seed)
    for _ in range(max_steps):
        if session.is_over:
            break
        step(session, policy)

    cause = None
    if session.run.is_dead:
        cause = f"Killed by {session.last_dealer} on layer {session.run.current_layer}"
    return RunReport(
        seed=session.seed,
        policy=policy,
        won=session.run.is_victory,
        final_layer=session.run.current_layer,
        final_hp=session.run.player_hp,
        chips=session.run.chips,
        battles=session.battles,
        relics=session.run.relics.as_list(),
        rng_calls=session.rng.calls,
        cause_of_death=cause,
        timeline=session.timeline,
    )
