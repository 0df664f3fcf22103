"""Integration tests for Game against the built-in catnip village."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import pytest
from tick_idle import Game, MemorySlot, default_catalog
from tick_idle.signals import BUILDINGS, RESOURCES, UPGRADES

_T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


class _Now:
    def __init__(self, value: datetime = _T0) -> None:
        self.value = value

    def __call__(self) -> datetime:
        return self.value


def _game(slot: MemorySlot | None = None, now: _Now | None = None) -> Game:
    return Game(default_catalog(), slot=slot, seed=1, now=now or _Now())


def _ids(items) -> list[str]:
    return [item.id for item in items]


class TestNewGame:
    def test_initial_visibility(self) -> None:
        game = _game()
        assert _ids(game.visible_resources()) == ["catnip", "kittens"]
        assert _ids(game.visible_buildings()) == ["catnip_field"]
        assert game.visible_upgrades() == []

    def test_nothing_affordable_at_start(self) -> None:
        game = _game()
        assert not game.can_construct("catnip_field")
        assert not game.construct("catnip_field")


class TestActions:
    def test_gather(self) -> None:
        game = _game()
        received = []
        game.subscribe(RESOURCES, lambda name, data: received.append(data))
        assert game.gather("catnip", 10.0)
        assert not game.gather("wood")
        assert not game.gather("unobtainium")
        assert not game.gather("catnip", 0.0)
        assert not game.gather("catnip", -5.0)
        assert game.economy.ledger.amount("catnip") == 10.0
        assert received == [{"gathered": "catnip"}]

    def test_construct_flushes_refresh_signals(self) -> None:
        game = _game()
        received = []
        game.subscribe(BUILDINGS, lambda name, data: received.append(name))
        game.subscribe(RESOURCES, lambda name, data: received.append(name))
        game.gather("catnip", 10.0)
        received.clear()
        assert game.construct("catnip_field")
        assert received == [BUILDINGS, RESOURCES]
        assert game.economy.ledger.amount("catnip") == 0.0

    def test_field_produces_seasonal_catnip(self) -> None:
        game = _game()
        game.gather("catnip", 10.0)
        game.construct("catnip_field")
        assert game.update(1.0) == 5
        # Spring, average weather: 0.63 * 1.5
        assert game.economy.ledger.amount("catnip") == pytest.approx(0.945)

    def test_progression_unlocks_wood(self) -> None:
        game = _game()
        game.gather("catnip", 500.0)
        assert game.construct("catnip_field")
        assert game.construct("catnip_field")
        assert game.economy.ledger.amount("catnip") == 478.0
        assert _ids(game.visible_upgrades()) == ["calendar"]

        received = []
        game.subscribe(UPGRADES, lambda name, data: received.append(data))
        assert game.purchase("calendar")
        assert {"purchased": "calendar"} in received
        assert "wood" in _ids(game.visible_resources())
        assert "woodcutter" in _ids(game.visible_buildings())
        assert _ids(game.visible_upgrades()) == ["agriculture"]
        assert not game.purchase("calendar")


class TestPersistence:
    def test_save_and_load_with_offline_progress(self) -> None:
        slot = MemorySlot()
        game = _game(slot)
        game.gather("catnip", 10.0)
        game.construct("catnip_field")
        assert game.save()

        later = _game(slot, now=_Now(_T0 + timedelta(seconds=60)))
        refreshed = []
        later.subscribe(RESOURCES, lambda name, data: refreshed.append(name))
        assert later.load()
        assert later.economy.buildings.count("catnip_field") == 1
        assert later.engine.clock.tick_number == 300
        assert later.economy.ledger.amount("catnip") == pytest.approx(0.945 * 60)
        assert refreshed

    def test_load_without_offline(self) -> None:
        slot = MemorySlot()
        _game(slot).save()
        later = _game(slot, now=_Now(_T0 + timedelta(hours=1)))
        assert later.load(offline=False)
        assert later.engine.clock.tick_number == 0

    def test_no_slot(self, caplog) -> None:
        game = _game()
        with caplog.at_level(logging.ERROR, logger="tick_idle.game"):
            assert not game.save()
            assert not game.load()
        assert "no save slot configured" in caplog.text

    def test_autosave_from_update(self) -> None:
        slot = MemorySlot()
        game = _game(slot)
        game.update(30.0)
        assert slot.blob is None
        game.update(30.0)
        assert slot.blob is not None

    def test_reset_clears_progress_and_save(self) -> None:
        slot = MemorySlot()
        game = _game(slot)
        game.gather("catnip", 10.0)
        game.construct("catnip_field")
        game.save()
        game.reset()
        assert slot.blob is None
        assert game.economy.buildings.count("catnip_field") == 0
        assert game.economy.ledger.amount("catnip") == 0.0
        assert game.engine.clock.tick_number == 0
