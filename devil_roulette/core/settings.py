from __future__ import annotations

import json
import secrets
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class GameplaySettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    seeded_mode: bool = True
    base_seed: int = 1337
    autopick: Literal["aggressive", "cautious", "random"] = "aggressive"
    max_steps: int = Field(default=200, ge=1, le=10_000)


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    level: LogLevel = "INFO"
    keep_archives: int = Field(default=5, ge=0, le=50)
    gameplay_log: bool = True


class AppSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    gameplay: GameplaySettings = Field(default_factory=GameplaySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def as_dict(self) -> dict[str, Any]:
        return json.loads(self.model_dump_json(by_alias=True))


def merge_settings(payload: dict[str, Any] | None) -> dict[str, Any]:
    if not isinstance(payload, dict):
        payload = {}
    return AppSettings.model_validate(payload).as_dict()


def default_settings() -> dict[str, Any]:
    return AppSettings().as_dict()


def resolve_seed(settings: dict[str, Any], override: int | str | None = None) -> int | str:
    if override is not None:
        return override
    gameplay = AppSettings.model_validate(settings).gameplay
    if gameplay.seeded_mode:
        return gameplay.base_seed
    return secrets.randbits(31)
