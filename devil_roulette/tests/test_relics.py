from __future__ import annotations

import pytest

from devil_roulette.core.relics import ALL_RELICS, MAX_RELICS, RELIC_DEFINITIONS, RelicInventory


def test_catalog_defines_eight_relics_with_odds() -> None:
    assert len(RELIC_DEFINITIONS) == 8
    assert RELIC_DEFINITIONS["lucky_coin"].chance == pytest.approx(0.30)
    assert RELIC_DEFINITIONS["cursed_shell"].chance == pytest.approx(0.20)


def test_inventory_add_has_remove() -> None:
    inventory = RelicInventory()
    assert inventory.count == 0
    assert inventory.add("demons_eye") is True
    assert inventory.has("demons_eye")
    assert inventory.remove("demons_eye") is True
    assert inventory.remove("demons_eye") is False
    assert inventory.count == 0


def test_fifth_relic_is_rejected_without_side_effects() -> None:
    inventory = RelicInventory()
    for relic in ALL_RELICS[:MAX_RELICS]:
        assert inventory.add(relic) is True
    before = inventory.as_list()
    assert inventory.add(ALL_RELICS[MAX_RELICS]) is False
    assert inventory.as_list() == before
    assert inventory.is_full


def test_duplicates_are_rejected_and_order_is_kept() -> None:
    inventory = RelicInventory()
    inventory.add("blood_pact")
    inventory.add("demons_eye")
    assert inventory.add("blood_pact") is False
    assert inventory.as_list() == ["blood_pact", "demons_eye"]


def test_removing_frees_a_slot() -> None:
    inventory = RelicInventory()
    for relic in ALL_RELICS[:MAX_RELICS]:
        inventory.add(relic)
    inventory.remove(ALL_RELICS[1])
    assert inventory.add("lucky_coin") is True
    assert inventory.count == MAX_RELICS


def test_unknown_relic_raises() -> None:
    with pytest.raises(ValueError):
        RelicInventory().add("golden_gun")  # type: ignore[arg-type]
