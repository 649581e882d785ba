from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from .chamber import Chamber, Shell
from .errors import InvalidActionError
from .relics import RELIC_DEFINITIONS

if TYPE_CHECKING:
    from .relics import RelicInventory
    from .rng import DeterministicRNG

Turn = Literal["player", "dealer"]
Winner = Literal["player", "dealer"]
ShotTarget = Literal["opponent", "self"]


def other_side(turn: Turn) -> Turn:
    return "dealer" if turn == "player" else "player"


@dataclass(frozen=True, slots=True)
class ShotResult:
    shooter: Turn
    victim: Turn
    target: ShotTarget
    shell: Shell
    damage: int
    winner: Winner | None
    turn_kept: bool
    lucky_coin: bool = False
    cursed_shell: bool = False


class Battle:
    """Duel state machine between the player and one dealer.

    ``relics`` and ``rng`` are only needed when the player carries relics that
    roll during shot resolution (lucky_coin, cursed_shell).
    """

    def __init__(
        self,
        player_hp: int,
        dealer_hp: int,
        relics: RelicInventory | None = None,
        rng: DeterministicRNG | None = None,
    ) -> None:
        self.player_hp = max(0, player_hp)
        self.dealer_hp = max(0, dealer_hp)
        self.current_turn: Turn = "player"
        self.relics = relics
        self.rng = rng
        self._chamber: Chamber | None = None
        self._sawed_off = False
        self._handcuffed = False

    def load_chamber(self, chamber: Chamber) -> None:
        self._chamber = chamber

    @property
    def chamber(self) -> Chamber | None:
        return self._chamber

    @property
    def winner(self) -> Winner | None:
        if self.dealer_hp <= 0:
            return "player"
        if self.player_hp <= 0:
            return "dealer"
        return None

    @property
    def needs_reload(self) -> bool:
        return self.winner is None and (self._chamber is None or self._chamber.is_empty)

    @property
    def sawed_off(self) -> bool:
        return self._sawed_off

    @property
    def handcuffed(self) -> bool:
        return self._handcuffed

    def arm_sawed_off(self) -> None:
        self._sawed_off = True

    def arm_handcuffs(self) -> None:
        self._handcuffed = True

    def hp_of(self, side: Turn) -> int:
        return self.player_hp if side == "player" else self.dealer_hp

    def set_hp(self, side: Turn, value: int) -> None:
        if side == "player":
            self.player_hp = max(0, value)
        else:
            self.dealer_hp = max(0, value)

    def damage(self, side: Turn, amount: int) -> None:
        self.set_hp(side, self.hp_of(side) - amount)

    def heal(self, side: Turn, amount: int, cap: int) -> int:
        before = self.hp_of(side)
        self.set_hp(side, min(cap, before + amount))
        return self.hp_of(side) - before

    def shoot_opponent(self) -> ShotResult:
        shooter = self.current_turn
        victim = other_side(shooter)
        shell = self._draw()
        damage, cursed = self._roll_damage(shell, shooter)
        self.damage(victim, damage)

        turn_kept = self._handcuffed
        if not self._handcuffed:
            self._switch_turn()
        self._handcuffed = False
        return ShotResult(
            shooter=shooter,
            victim=victim,
            target="opponent",
            shell=shell,
            damage=damage,
            winner=self.winner,
            turn_kept=turn_kept,
            cursed_shell=cursed,
        )

    def shoot_self(self) -> ShotResult:
        shooter = self.current_turn
        shell = self._draw()
        damage, cursed = self._roll_damage(shell, shooter)
        negated = False
        if damage > 0 and shooter == "player" and self._relic_roll("lucky_coin"):
            damage = 0
            negated = True
        self.damage(shooter, damage)

        # A blank keeps the turn and leaves any pending handcuffs armed.
        turn_kept = shell is Shell.BLANK
        if not turn_kept:
            self._handcuffed = False
            self._switch_turn()
        return ShotResult(
            shooter=shooter,
            victim=shooter,
            target="self",
            shell=shell,
            damage=damage,
            winner=self.winner,
            turn_kept=turn_kept,
            lucky_coin=negated,
            cursed_shell=cursed,
        )

    def _draw(self) -> Shell:
        if self.winner is not None:
            raise InvalidActionError(f"Battle is already over ({self.winner} won).")
        if self._chamber is None or self._chamber.is_empty:
            raise InvalidActionError("Chamber needs a reload before the next shot.")
        return self._chamber.draw()

    def _roll_damage(self, shell: Shell, shooter: Turn) -> tuple[int, bool]:
        sawed_off = self._sawed_off
        self._sawed_off = False
        if shell is not Shell.LIVE:
            return 0, False
        if sawed_off:
            return 2, False
        if shooter == "player" and self._relic_roll("cursed_shell"):
            return 2, True
        return 1, False

    def _relic_roll(self, relic_id: str) -> bool:
        if self.relics is None or self.rng is None or not self.relics.has(relic_id):
            return False
        return self.rng.chance(RELIC_DEFINITIONS[relic_id].chance)

    def _switch_turn(self) -> None:
        self.current_turn = other_side(self.current_turn)

    def snapshot(self) -> dict[str, object]:
        return {
            "player_hp": self.player_hp,
            "dealer_hp": self.dealer_hp,
            "current_turn": self.current_turn,
            "sawed_off": self._sawed_off,
            "handcuffed": self._handcuffed,
            "winner": self.winner,
            "needs_reload": self.needs_reload,
            "chamber": None if self._chamber is None else self._chamber.snapshot(),
        }
