from __future__ import annotations

import json
from pathlib import Path

from devil_roulette.app.services.settings_store import SettingsStore
from devil_roulette.core.settings import default_settings, merge_settings, resolve_seed


def test_settings_store_read_write(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    store = SettingsStore(path)
    loaded = store.load()
    assert path.exists()
    assert loaded["gameplay"]["base_seed"] == 1337
    assert loaded["gameplay"]["seeded_mode"] is True

    loaded["gameplay"]["base_seed"] = 93
    loaded["gameplay"]["autopick"] = "cautious"
    loaded["logging"]["level"] = "DEBUG"
    store.save(loaded)

    reloaded = store.load()
    assert reloaded["gameplay"]["base_seed"] == 93
    assert reloaded["gameplay"]["autopick"] == "cautious"
    assert reloaded["logging"]["level"] == "DEBUG"


def test_corrupt_or_invalid_settings_fall_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    assert SettingsStore(path).load() == default_settings()

    path.write_text(json.dumps({"gameplay": {"autopick": "reckless"}}), encoding="utf-8")
    assert SettingsStore(path).load() == default_settings()


def test_merge_ignores_unknown_keys() -> None:
    merged = merge_settings({"gameplay": {"base_seed": 5, "volume": 3}, "video": {}})
    assert merged["gameplay"]["base_seed"] == 5
    assert "volume" not in merged["gameplay"]
    assert "video" not in merged


def test_resolve_seed_prefers_override_then_seeded_mode() -> None:
    settings = default_settings()
    assert resolve_seed(settings, 12) == 12
    assert resolve_seed(settings) == 1337
    settings["gameplay"]["seeded_mode"] = False
    assert isinstance(resolve_seed(settings), int)
