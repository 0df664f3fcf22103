"""Upgrade runtime state and the UpgradeRegistry."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, TypeVar, assert_never

from tick_idle.buildings import BuildingRegistry
from tick_idle.catalog import Arena, Catalog, Handle
from tick_idle.defs import (
    BuildingProductionMultiplier,
    CapacityMultiplier,
    ConsumptionReduction,
    Effect,
    ProductionMultiplier,
    UnlockBuilding,
    UnlockResource,
    UnlockUpgrade,
    UpgradeDef,
)
from tick_idle.ledger import ResourceLedger
from tick_idle.signals import UPGRADES, SignalBus

logger = logging.getLogger(__name__)

E = TypeVar("E")


@dataclass
class Upgrade:
    """Mutable runtime state for one upgrade definition."""

    definition: UpgradeDef
    purchased: bool = False
    unlocked: bool = False

    @property
    def id(self) -> str:
        return self.definition.id

    @classmethod
    def fresh(cls, definition: UpgradeDef) -> Upgrade:
        return cls(definition=definition, purchased=False,
                   unlocked=definition.visible_by_default)

    def reset(self) -> None:
        self.purchased = False
        self.unlocked = self.definition.visible_by_default


class UpgradeRegistry:
    """One-shot upgrades: visibility, purchase and effect application."""

    def __init__(self, catalog: Catalog, ledger: ResourceLedger,
                 buildings: BuildingRegistry,
                 bus: SignalBus | None = None) -> None:
        self._ledger = ledger
        self._buildings = buildings
        self._bus = bus
        self._upgrades: Arena[Upgrade] = Arena()
        for defn in catalog.upgrades:
            self._upgrades.put(defn.id, Upgrade.fresh(defn))

    # -- Queries --

    def handle(self, upgrade_id: str) -> Handle | None:
        return self._upgrades.handle(upgrade_id)

    def get(self, upgrade_id: str) -> Upgrade | None:
        return self._upgrades.get(upgrade_id)

    def is_purchased(self, upgrade_id: str) -> bool:
        u = self._upgrades.get(upgrade_id)
        return u is not None and u.purchased

    def is_unlocked(self, upgrade_id: str) -> bool:
        u = self._upgrades.get(upgrade_id)
        return u is not None and u.unlocked

    def cost(self, upgrade_id: str) -> dict[str, float]:
        u = self._upgrades.get(upgrade_id)
        if u is None:
            return {}
        return dict(u.definition.cost)

    def requirements_met(self, upgrade: Upgrade) -> bool:
        defn = upgrade.definition
        for building_id, minimum in defn.required_buildings.items():
            if self._buildings.count(building_id) < minimum:
                return False
        for upgrade_id in defn.required_upgrades:
            if not self.is_purchased(upgrade_id):
                return False
        return True

    def is_visible(self, upgrade_id: str) -> bool:
        u = self._upgrades.get(upgrade_id)
        return u is not None and u.unlocked and self.requirements_met(u)

    def upgrades(self) -> Iterator[Upgrade]:
        return iter(self._upgrades)

    def visible_upgrades(self) -> list[Upgrade]:
        """Upgrades the player can currently see and has not bought yet."""
        return [
            u for u in self._upgrades
            if not u.purchased and u.unlocked and self.requirements_met(u)
        ]

    def purchased_upgrades(self) -> list[Upgrade]:
        return [u for u in self._upgrades if u.purchased]

    def active_effects(self, kind: type[E]) -> Iterator[E]:
        """Effects of the given kind across all purchased upgrades."""
        for u in self._upgrades:
            if not u.purchased:
                continue
            for effect in u.definition.effects:
                if isinstance(effect, kind):
                    yield effect

    # -- Actions --

    def can_purchase(self, upgrade_id: str) -> bool:
        u = self._upgrades.get(upgrade_id)
        if u is None or u.purchased:
            return False
        if not (u.unlocked and self.requirements_met(u)):
            return False
        return self._ledger.can_afford(u.definition.cost)

    def purchase(self, upgrade_id: str) -> bool:
        """Buy once. A second call after success is a no-op returning False."""
        if not self.can_purchase(upgrade_id):
            return False
        u = self._upgrades.get(upgrade_id)
        assert u is not None
        self._ledger.spend(u.definition.cost)
        u.purchased = True
        for effect in u.definition.effects:
            self._apply(effect)
        self._unlock_dependents()
        logger.debug("purchased upgrade %s", upgrade_id)
        if self._bus is not None:
            self._bus.publish(UPGRADES, purchased=upgrade_id)
        return True

    def unlock(self, upgrade_id: str) -> bool:
        """One-way unlock. Returns True if the flag changed."""
        u = self._upgrades.get(upgrade_id)
        if u is None:
            logger.debug("unlock ignored for unknown upgrade %r", upgrade_id)
            return False
        if u.unlocked:
            return False
        u.unlocked = True
        if self._bus is not None:
            self._bus.publish(UPGRADES, unlocked=upgrade_id)
        return True

    def _apply(self, effect: Effect) -> None:
        if isinstance(effect, UnlockBuilding):
            self._buildings.unlock(effect.building)
        elif isinstance(effect, UnlockUpgrade):
            self.unlock(effect.upgrade)
        elif isinstance(effect, UnlockResource):
            self._ledger.unlock(effect.resource)
        elif isinstance(effect, (ProductionMultiplier, BuildingProductionMultiplier,
                                 ConsumptionReduction, CapacityMultiplier)):
            # Read back by the rate calculator every tick.
            pass
        else:
            assert_never(effect)

    def _unlock_dependents(self) -> None:
        for u in self._upgrades:
            reqs = u.definition.required_upgrades
            if u.unlocked or not reqs:
                continue
            if all(self.is_purchased(req) for req in reqs):
                self.unlock(u.id)

    def reset(self) -> None:
        for u in self._upgrades:
            u.reset()

    # -- Serialization --

    def snapshot(self) -> list[dict[str, Any]]:
        return [
            {"id": u.id, "purchased": u.purchased, "unlocked": u.unlocked}
            for u in self._upgrades
        ]

    def restore(self, data: list[dict[str, Any]]) -> None:
        """Reset, then apply saved values for known ids. Unknown ids are skipped."""
        self.reset()
        for entry in data:
            u = self._upgrades.get(entry.get("id", ""))
            if u is None:
                logger.debug("skipping saved state for unknown upgrade %r", entry.get("id"))
                continue
            u.purchased = bool(entry.get("purchased", False))
            u.unlocked = bool(entry.get("unlocked", u.unlocked))
