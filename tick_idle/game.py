"""Game: composition root wiring catalog, economy, engine and saves."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable

from tick_idle.buildings import Building
from tick_idle.catalog import Catalog
from tick_idle.config import EconomyConfig
from tick_idle.economy import Economy
from tick_idle.engine import Engine
from tick_idle.ledger import Resource
from tick_idle.persistence import SaveSlot, SaveSystem, utcnow
from tick_idle.signals import BUILDINGS, RESOURCES, UPGRADES, SignalBus
from tick_idle.systems import default_systems
from tick_idle.upgrades import Upgrade

logger = logging.getLogger(__name__)


class Game:
    """One player session: the presentation layer's only entry point.

    Collaborators are built here once and passed down explicitly. Player
    actions flush pending refresh signals immediately; tick-driven changes
    flush at the end of each tick.
    """

    def __init__(
        self,
        catalog: Catalog,
        config: EconomyConfig | None = None,
        slot: SaveSlot | None = None,
        seed: int | None = None,
        now: Callable[[], datetime] = utcnow,
    ) -> None:
        self.config = config or EconomyConfig()
        self.bus = SignalBus()
        self.economy = Economy(catalog, self.config, self.bus)
        self.engine = Engine(self.economy, seed=seed)
        for system in default_systems(self.bus):
            self.engine.add_system(system)
        self.saves = SaveSystem(self.engine, slot, now) if slot is not None else None

    # -- Loop --

    def update(self, real_dt: float) -> int:
        """Advance by real elapsed seconds; autosaves on its interval."""
        ticks = self.engine.update(real_dt)
        if self.saves is not None:
            self.saves.autosave(real_dt)
        return ticks

    # -- Presentation queries --

    def visible_resources(self) -> list[Resource]:
        return self.economy.ledger.visible_resources()

    def visible_buildings(self) -> list[Building]:
        return self.economy.buildings.visible_buildings()

    def visible_upgrades(self) -> list[Upgrade]:
        return self.economy.upgrades.visible_upgrades()

    def can_construct(self, building_id: str) -> bool:
        return self.economy.buildings.can_construct(building_id)

    def can_purchase(self, upgrade_id: str) -> bool:
        return self.economy.upgrades.can_purchase(upgrade_id)

    def subscribe(self, signal_name: str,
                  handler: Callable[[str, dict[str, Any]], None]) -> None:
        self.bus.subscribe(signal_name, handler)

    # -- Player actions --

    def construct(self, building_id: str) -> bool:
        ok = self.economy.construct(building_id)
        if ok:
            self.bus.publish(RESOURCES)
            self.bus.flush()
        return ok

    def purchase(self, upgrade_id: str) -> bool:
        ok = self.economy.purchase(upgrade_id)
        if ok:
            self.bus.publish(RESOURCES)
            self.bus.flush()
        return ok

    def gather(self, resource_id: str, amount: float = 1.0) -> bool:
        """Manual click income. Only positive amounts of unlocked resources."""
        if amount <= 0 or not self.economy.ledger.is_unlocked(resource_id):
            return False
        self.economy.ledger.add(resource_id, amount)
        self.bus.publish(RESOURCES, gathered=resource_id)
        self.bus.flush()
        return True

    # -- Persistence --

    def save(self) -> bool:
        if self.saves is None:
            logger.error("cannot save game: no save slot configured")
            return False
        return self.saves.save()

    def load(self, offline: bool = True) -> bool:
        if self.saves is None:
            logger.error("cannot load game: no save slot configured")
            return False
        ok = self.saves.load(offline=offline)
        if ok:
            for name in (RESOURCES, BUILDINGS, UPGRADES):
                self.bus.publish(name)
            self.bus.flush()
        return ok

    def reset(self) -> None:
        """Back to a new game. Also clears the stored save."""
        self.engine.reset()
        if self.saves is not None:
            self.saves.clear()
        for name in (RESOURCES, BUILDINGS, UPGRADES):
            self.bus.publish(name)
        self.bus.flush()
        logger.info("game reset")
