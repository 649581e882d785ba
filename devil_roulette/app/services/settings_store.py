from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from devil_roulette.core.settings import default_settings, merge_settings

log = logging.getLogger("devil_roulette.settings")


class SettingsStore:
    def __init__(self, settings_path: Path) -> None:
        self.settings_path = settings_path

    def load(self) -> dict[str, Any]:
        if not self.settings_path.exists():
            settings = default_settings()
            self.save(settings)
            return settings
        try:
            payload = json.loads(self.settings_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            log.warning("Settings file %s is not valid JSON, using defaults.", self.settings_path)
            payload = {}
        try:
            settings = merge_settings(payload)
        except ValidationError as exc:
            log.warning("Settings file %s failed validation (%d errors), using defaults.", self.settings_path, exc.error_count())
            settings = default_settings()
        self.save(settings)
        return settings

    def save(self, settings: dict[str, Any]) -> None:
        self.settings_path.parent.mkdir(parents=True, exist_ok=True)
        self.settings_path.write_text(json.dumps(settings, indent=2), encoding="utf-8")
