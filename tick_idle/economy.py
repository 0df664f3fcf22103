"""Economy: the four simulation tables wired together."""
from __future__ import annotations

from typing import Any

from tick_idle.buildings import BuildingRegistry
from tick_idle.calendar import Calendar
from tick_idle.catalog import Catalog
from tick_idle.config import EconomyConfig
from tick_idle.ledger import ResourceLedger
from tick_idle.rates import RateCalculator
from tick_idle.signals import SignalBus
from tick_idle.upgrades import UpgradeRegistry


class Economy:
    """Owns the ledger, building and upgrade registries, calendar and rates.

    Built once from a validated catalog; later catalog edits are not seen.
    Systems receive the economy as their first argument.
    """

    def __init__(self, catalog: Catalog, config: EconomyConfig | None = None,
                 bus: SignalBus | None = None) -> None:
        catalog.validate()
        self.catalog = catalog
        self.config = config or EconomyConfig()
        self.bus = bus
        self.ledger = ResourceLedger(catalog, bus)
        self.buildings = BuildingRegistry(catalog, self.ledger, bus)
        self.upgrades = UpgradeRegistry(catalog, self.ledger, self.buildings, bus)
        self.calendar = Calendar(self.config)
        self.rates = RateCalculator(self.ledger, self.buildings, self.upgrades,
                                    self.calendar)

    def refresh_capacities(self) -> None:
        """Recompute every capacity-bearing resource from buildings and upgrades."""
        for res in self.ledger.resources():
            if res.definition.has_capacity:
                self.ledger.set_capacity(res.id, self.rates.capacity(res.id))

    def construct(self, building_id: str) -> bool:
        if not self.buildings.construct(building_id):
            return False
        self.refresh_capacities()
        return True

    def purchase(self, upgrade_id: str) -> bool:
        if not self.upgrades.purchase(upgrade_id):
            return False
        self.refresh_capacities()
        return True

    def reset(self) -> None:
        self.ledger.reset()
        self.buildings.reset()
        self.upgrades.reset()
        self.calendar.reset()

    def snapshot(self) -> dict[str, Any]:
        return {
            "resources": self.ledger.snapshot(),
            "buildings": self.buildings.snapshot(),
            "upgrades": self.upgrades.snapshot(),
            "time": self.calendar.snapshot(),
        }

    def restore(self, data: dict[str, Any]) -> None:
        self.ledger.restore(data.get("resources", []))
        self.buildings.restore(data.get("buildings", []))
        self.upgrades.restore(data.get("upgrades", []))
        self.calendar.restore(data.get("time", {}))
