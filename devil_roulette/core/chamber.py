from __future__ import annotations

from enum import Enum
from typing import Iterable

from .errors import InvalidActionError
from .rng import DeterministicRNG


class Shell(str, Enum):
    LIVE = "live"
    BLANK = "blank"

    def inverted(self) -> "Shell":
        return Shell.BLANK if self is Shell.LIVE else Shell.LIVE


class Chamber:
    """Ordered queue of undrawn shells. Index 0 is the next shell to fire."""

    __slots__ = ("_shells",)

    def __init__(self, live_count: int, blank_count: int, rng: DeterministicRNG) -> None:
        if live_count < 0 or blank_count < 0:
            raise ValueError(f"Shell counts cannot be negative (live={live_count}, blank={blank_count}).")
        self._shells: list[Shell] = [Shell.LIVE] * live_count + [Shell.BLANK] * blank_count
        self._shuffle(rng)

    @classmethod
    def from_sequence(cls, shells: Iterable[Shell | str]) -> "Chamber":
        chamber = cls.__new__(cls)
        chamber._shells = [Shell(shell) for shell in shells]
        return chamber

    def _shuffle(self, rng: DeterministicRNG) -> None:
        # Fisher-Yates, one draw per swap index.
        for i in range(len(self._shells) - 1, 0, -1):
            j = rng.next_int(0, i + 1)
            self._shells[i], self._shells[j] = self._shells[j], self._shells[i]

    @property
    def live_count(self) -> int:
        return sum(1 for shell in self._shells if shell is Shell.LIVE)

    @property
    def blank_count(self) -> int:
        return sum(1 for shell in self._shells if shell is Shell.BLANK)

    @property
    def total_remaining(self) -> int:
        return len(self._shells)

    @property
    def is_empty(self) -> bool:
        return not self._shells

    @property
    def live_probability(self) -> float:
        total = self.total_remaining
        return self.live_count / total if total > 0 else 0.0

    def _require_head(self, operation: str) -> None:
        if not self._shells:
            raise InvalidActionError(f"Cannot {operation} from an empty chamber.")

    def peek(self) -> Shell:
        self._require_head("peek")
        return self._shells[0]

    def peek_at(self, index: int) -> Shell:
        if index < 0 or index >= len(self._shells):
            raise InvalidActionError(f"Shell index {index} is outside the chamber (size {len(self._shells)}).")
        return self._shells[index]

    def draw(self) -> Shell:
        self._require_head("draw")
        return self._shells.pop(0)

    def eject_current(self) -> Shell:
        self._require_head("eject")
        return self._shells.pop(0)

    def invert_current(self) -> Shell:
        self._require_head("invert")
        self._shells[0] = self._shells[0].inverted()
        return self._shells[0]

    def snapshot(self) -> list[str]:
        return [shell.value for shell in self._shells]

    def __len__(self) -> int:
        return len(self._shells)

    def __repr__(self) -> str:
        return f"Chamber(live={self.live_count}, blank={self.blank_count})"
