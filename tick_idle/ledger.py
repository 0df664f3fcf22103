"""Resource runtime state and the ResourceLedger."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator

from tick_idle.catalog import Arena, Catalog, Handle
from tick_idle.defs import ResourceDef
from tick_idle.signals import RESOURCES, SignalBus
from tick_idle.types import Amounts

logger = logging.getLogger(__name__)


@dataclass
class Resource:
    """Mutable runtime state for one resource definition."""

    definition: ResourceDef
    amount: float
    capacity: float
    unlocked: bool

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def visible(self) -> bool:
        return self.unlocked

    @classmethod
    def fresh(cls, definition: ResourceDef) -> Resource:
        return cls(
            definition=definition,
            amount=definition.initial_amount,
            capacity=definition.initial_capacity,
            unlocked=definition.visible_by_default,
        )

    def reset(self) -> None:
        self.amount = self.definition.initial_amount
        self.capacity = self.definition.initial_capacity
        self.unlocked = self.definition.visible_by_default


class ResourceLedger:
    """Amounts, capacities and unlock flags for every defined resource.

    Unknown resource ids read as zero and writes to them are ignored.
    """

    def __init__(self, catalog: Catalog, bus: SignalBus | None = None) -> None:
        self._bus = bus
        self._resources: Arena[Resource] = Arena()
        for defn in catalog.resources:
            self._resources.put(defn.id, Resource.fresh(defn))

    # -- Queries --

    def handle(self, resource_id: str) -> Handle | None:
        return self._resources.handle(resource_id)

    def get(self, resource_id: str) -> Resource | None:
        return self._resources.get(resource_id)

    def amount(self, resource_id: str) -> float:
        res = self._resources.get(resource_id)
        return res.amount if res is not None else 0.0

    def capacity(self, resource_id: str) -> float:
        res = self._resources.get(resource_id)
        return res.capacity if res is not None else 0.0

    def has_capacity(self, resource_id: str) -> bool:
        res = self._resources.get(resource_id)
        return res is not None and res.definition.has_capacity

    def is_unlocked(self, resource_id: str) -> bool:
        res = self._resources.get(resource_id)
        return res is not None and res.unlocked

    def resources(self) -> Iterator[Resource]:
        return iter(self._resources)

    def visible_resources(self) -> list[Resource]:
        return [res for res in self._resources if res.visible]

    def can_afford(self, costs: Amounts) -> bool:
        """True only if every cost is covered. Unknown resources count as 0."""
        for resource_id, needed in costs.items():
            if self.amount(resource_id) < needed:
                return False
        return True

    # -- Mutation --

    def add(self, resource_id: str, delta: float) -> float:
        """Add a signed amount, clamped to [0, capacity]. Returns the change applied."""
        res = self._resources.get(resource_id)
        if res is None:
            return 0.0
        before = res.amount
        after = max(0.0, before + delta)
        if res.definition.has_capacity:
            after = min(after, res.capacity)
        res.amount = after
        return after - before

    def set_capacity(self, resource_id: str, capacity: float) -> None:
        res = self._resources.get(resource_id)
        if res is None:
            return
        res.capacity = max(0.0, capacity)
        if res.definition.has_capacity and res.amount > res.capacity:
            res.amount = res.capacity

    def spend(self, costs: Amounts) -> None:
        """Debit every cost. Callers check ``can_afford`` first; nothing is re-validated."""
        for resource_id, amount in costs.items():
            self.add(resource_id, -amount)

    def unlock(self, resource_id: str) -> bool:
        """One-way unlock. Returns True if the flag changed."""
        res = self._resources.get(resource_id)
        if res is None:
            logger.debug("unlock ignored for unknown resource %r", resource_id)
            return False
        if res.unlocked:
            return False
        res.unlocked = True
        if self._bus is not None:
            self._bus.publish(RESOURCES, unlocked=resource_id)
        return True

    def reset(self) -> None:
        for res in self._resources:
            res.reset()

    # -- Serialization --

    def snapshot(self) -> list[dict[str, Any]]:
        return [
            {
                "id": res.id,
                "amount": res.amount,
                "capacity": res.capacity,
                "unlocked": res.unlocked,
            }
            for res in self._resources
        ]

    def restore(self, data: list[dict[str, Any]]) -> None:
        """Reset, then apply saved values for known ids. Unknown ids are skipped."""
        self.reset()
        for entry in data:
            res = self._resources.get(entry.get("id", ""))
            if res is None:
                logger.debug("skipping saved state for unknown resource %r", entry.get("id"))
                continue
            res.capacity = max(0.0, float(entry.get("capacity", res.capacity)))
            amount = max(0.0, float(entry.get("amount", res.amount)))
            if res.definition.has_capacity:
                amount = min(amount, res.capacity)
            res.amount = amount
            res.unlocked = bool(entry.get("unlocked", res.unlocked))
