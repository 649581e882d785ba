"""Core deterministic rules engine."""

from .battle import Battle, ShotResult
from .chamber import Chamber, Shell
from .dealer import DEALERS, get_dealer_action
from .duel import BattleOutcome, DealerTurn, Duel
from .effects import ItemUseResult
from .encounters import GambleResult, ShopOffer, buy_offer, gamble, generate_shop_offers, rest
from .engine import GameSession, RunReport, run_simulation, step
from .errors import InvalidActionError
from .items import ITEM_DEFINITIONS, distribute_items
from .models import LogEntry, RunState
from .relics import RELIC_DEFINITIONS, RelicInventory
from .rng import DeterministicRNG

__all__ = [
    "Battle",
    "BattleOutcome",
    "Chamber",
    "DEALERS",
    "DealerTurn",
    "DeterministicRNG",
    "Duel",
    "GambleResult",
    "GameSession",
    "ITEM_DEFINITIONS",
    "InvalidActionError",
    "ItemUseResult",
    "LogEntry",
    "RELIC_DEFINITIONS",
    "RelicInventory",
    "RunReport",
    "RunState",
    "Shell",
    "ShopOffer",
    "ShotResult",
    "buy_offer",
    "distribute_items",
    "gamble",
    "generate_shop_offers",
    "get_dealer_action",
    "rest",
    "run_simulation",
    "step",
]
