"""RateCalculator: production, consumption and capacity from scratch."""
from __future__ import annotations

from tick_idle.buildings import BuildingRegistry
from tick_idle.calendar import Calendar
from tick_idle.defs import (
    BuildingProductionMultiplier,
    CapacityMultiplier,
    ConsumptionReduction,
    ProductionMultiplier,
)
from tick_idle.ledger import ResourceLedger
from tick_idle.upgrades import UpgradeRegistry


class RateCalculator:
    """Stateless per-second rates derived from current counts and upgrades.

    Nothing is cached: every call scans all buildings and all purchased
    upgrades, so results always reflect the current state.
    """

    def __init__(self, ledger: ResourceLedger, buildings: BuildingRegistry,
                 upgrades: UpgradeRegistry, calendar: Calendar) -> None:
        self._ledger = ledger
        self._buildings = buildings
        self._upgrades = upgrades
        self._calendar = calendar

    # -- Multipliers --

    def building_multiplier(self, building_id: str) -> float:
        multiplier = 1.0
        for effect in self._upgrades.active_effects(BuildingProductionMultiplier):
            if effect.building == building_id:
                multiplier *= effect.factor
        return multiplier

    def production_multiplier(self, resource_id: str) -> float:
        multiplier = 1.0
        for effect in self._upgrades.active_effects(ProductionMultiplier):
            if effect.resource == resource_id:
                multiplier *= effect.factor
        return multiplier

    def consumption_multiplier(self, resource_id: str) -> float:
        multiplier = 1.0
        for effect in self._upgrades.active_effects(ConsumptionReduction):
            if effect.resource == resource_id:
                multiplier *= effect.factor
        return multiplier

    def capacity_multiplier(self, resource_id: str) -> float:
        multiplier = 1.0
        for effect in self._upgrades.active_effects(CapacityMultiplier):
            if effect.resource == resource_id:
                multiplier *= effect.factor
        return multiplier

    def seasonal_modifier(self, resource_id: str) -> float:
        res = self._ledger.get(resource_id)
        if res is None:
            return 1.0
        return self._calendar.seasonal_modifier(res.definition.seasonal)

    # -- Rates --

    def base_production(self, resource_id: str) -> float:
        total = 0.0
        for b in self._buildings.buildings():
            if b.count <= 0:
                continue
            per_unit = b.definition.production.get(resource_id)
            if per_unit is None:
                continue
            total += per_unit * b.count * self.building_multiplier(b.id)
        return total

    def base_consumption(self, resource_id: str) -> float:
        total = 0.0
        for b in self._buildings.buildings():
            if b.count <= 0:
                continue
            per_unit = b.definition.consumption.get(resource_id)
            if per_unit is not None:
                total += per_unit * b.count
        return total

    def production_rate(self, resource_id: str) -> float:
        """Per-second production including upgrades and the seasonal modifier."""
        return (
            self.base_production(resource_id)
            * self.production_multiplier(resource_id)
            * self.seasonal_modifier(resource_id)
        )

    def consumption_rate(self, resource_id: str) -> float:
        return self.base_consumption(resource_id) * self.consumption_multiplier(resource_id)

    def net_rate(self, resource_id: str) -> float:
        return self.production_rate(resource_id) - self.consumption_rate(resource_id)

    def capacity(self, resource_id: str) -> float:
        """(initial capacity + building storage) * capacity multipliers."""
        res = self._ledger.get(resource_id)
        if res is None:
            return 0.0
        base = res.definition.initial_capacity
        for b in self._buildings.buildings():
            if b.count > 0:
                base += b.definition.capacity.get(resource_id, 0.0) * b.count
        return base * self.capacity_multiplier(resource_id)

    # -- Projections --

    def time_until_full(self, resource_id: str) -> float | None:
        """Seconds until capacity is reached, or None if it never will be."""
        if not self._ledger.has_capacity(resource_id):
            return None
        rate = self.net_rate(resource_id)
        current = self._ledger.amount(resource_id)
        cap = self._ledger.capacity(resource_id)
        if current >= cap:
            return 0.0
        if rate <= 0:
            return None
        return (cap - current) / rate

    def time_until_empty(self, resource_id: str) -> float | None:
        """Seconds until the amount hits zero, or None if it never will."""
        if self._ledger.get(resource_id) is None:
            return None
        current = self._ledger.amount(resource_id)
        if current <= 0:
            return 0.0
        rate = self.net_rate(resource_id)
        if rate >= 0:
            return None
        return current / -rate
