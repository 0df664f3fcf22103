"""Building runtime state and the BuildingRegistry."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterator

from tick_idle.catalog import Arena, Catalog, Handle
from tick_idle.defs import BuildingDef
from tick_idle.ledger import ResourceLedger
from tick_idle.signals import BUILDINGS, SignalBus

logger = logging.getLogger(__name__)

# Float products such as 10 * 1.2 can land a hair above an integer; rounding
# first keeps those from ceiling up to the next unit.
_COST_PRECISION = 9


def scaled_cost(base_amount: float, scaling: float, owned: int) -> float:
    """Cost of the next unit when ``owned`` are already built."""
    return float(math.ceil(round(base_amount * scaling ** owned, _COST_PRECISION)))


@dataclass
class Building:
    """Mutable runtime state for one building definition."""

    definition: BuildingDef
    count: int = 0
    unlocked: bool = False

    @property
    def id(self) -> str:
        return self.definition.id

    @classmethod
    def fresh(cls, definition: BuildingDef) -> Building:
        return cls(definition=definition, count=0,
                   unlocked=definition.visible_by_default)

    def next_cost(self) -> dict[str, float]:
        return {
            c.resource: scaled_cost(c.base_amount, c.scaling, self.count)
            for c in self.definition.costs
        }

    def reset(self) -> None:
        self.count = 0
        self.unlocked = self.definition.visible_by_default


class BuildingRegistry:
    """Owned building counts, unlock flags, construction and storage."""

    def __init__(self, catalog: Catalog, ledger: ResourceLedger,
                 bus: SignalBus | None = None) -> None:
        self._ledger = ledger
        self._bus = bus
        self._buildings: Arena[Building] = Arena()
        for defn in catalog.buildings:
            self._buildings.put(defn.id, Building.fresh(defn))

    # -- Queries --

    def handle(self, building_id: str) -> Handle | None:
        return self._buildings.handle(building_id)

    def get(self, building_id: str) -> Building | None:
        return self._buildings.get(building_id)

    def count(self, building_id: str) -> int:
        b = self._buildings.get(building_id)
        return b.count if b is not None else 0

    def is_unlocked(self, building_id: str) -> bool:
        b = self._buildings.get(building_id)
        return b is not None and b.unlocked

    def cost(self, building_id: str) -> dict[str, float]:
        """Cost of the next unit: ceil(base * scaling ** count) per resource."""
        b = self._buildings.get(building_id)
        if b is None:
            return {}
        return b.next_cost()

    def requirements_met(self, building: Building) -> bool:
        for req_id, minimum in building.definition.required_buildings.items():
            if self.count(req_id) < minimum:
                return False
        return True

    def is_visible(self, building_id: str) -> bool:
        b = self._buildings.get(building_id)
        return b is not None and b.unlocked and self.requirements_met(b)

    def buildings(self) -> Iterator[Building]:
        return iter(self._buildings)

    def visible_buildings(self) -> list[Building]:
        return [b for b in self._buildings if b.unlocked and self.requirements_met(b)]

    def capacity_contributions(self) -> dict[str, float]:
        """Storage added by all owned buildings, summed per resource."""
        totals: dict[str, float] = {}
        for b in self._buildings:
            if b.count <= 0:
                continue
            for resource_id, amount in b.definition.capacity.items():
                totals[resource_id] = totals.get(resource_id, 0.0) + amount * b.count
        return totals

    # -- Actions --

    def can_construct(self, building_id: str) -> bool:
        if not self.is_visible(building_id):
            return False
        return self._ledger.can_afford(self.cost(building_id))

    def construct(self, building_id: str) -> bool:
        """Build one unit. Debits the exact cost or does nothing."""
        if not self.can_construct(building_id):
            return False
        b = self._buildings.get(building_id)
        assert b is not None
        self._ledger.spend(b.next_cost())
        b.count += 1
        logger.debug("constructed %s (now %d)", building_id, b.count)
        if self._bus is not None:
            self._bus.publish(BUILDINGS, constructed=building_id, count=b.count)
        return True

    def unlock(self, building_id: str) -> bool:
        """One-way unlock. Returns True if the flag changed."""
        b = self._buildings.get(building_id)
        if b is None:
            logger.debug("unlock ignored for unknown building %r", building_id)
            return False
        if b.unlocked:
            return False
        b.unlocked = True
        if self._bus is not None:
            self._bus.publish(BUILDINGS, unlocked=building_id)
        return True

    def reset(self) -> None:
        for b in self._buildings:
            b.reset()

    # -- Serialization --

    def snapshot(self) -> list[dict[str, Any]]:
        return [
            {"id": b.id, "count": b.count, "unlocked": b.unlocked}
            for b in self._buildings
        ]

    def restore(self, data: list[dict[str, Any]]) -> None:
        """Reset, then apply saved values for known ids. Unknown ids are skipped."""
        self.reset()
        for entry in data:
            b = self._buildings.get(entry.get("id", ""))
            if b is None:
                logger.debug("skipping saved state for unknown building %r", entry.get("id"))
                continue
            b.count = max(0, int(entry.get("count", 0)))
            b.unlocked = bool(entry.get("unlocked", b.unlocked))
