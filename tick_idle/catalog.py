"""Arena storage and the Catalog of static definitions."""
from __future__ import annotations

from typing import Generic, Iterator, TypeVar

from tick_idle.defs import (
    BuildingDef,
    BuildingProductionMultiplier,
    CapacityMultiplier,
    ConsumptionReduction,
    Effect,
    ProductionMultiplier,
    ResourceDef,
    UnlockBuilding,
    UnlockResource,
    UnlockUpgrade,
    UpgradeDef,
)

T = TypeVar("T")

Handle = int


class Arena(Generic[T]):
    """Insertion-ordered items addressed by interned string id.

    ``handle(id)`` resolves an id to a stable integer index once; items are
    then reached by index without further string lookups.
    """

    def __init__(self) -> None:
        self._items: list[T] = []
        self._ids: list[str] = []
        self._index: dict[str, Handle] = {}

    def put(self, item_id: str, item: T) -> Handle:
        """Insert or replace. Replacing keeps the existing handle."""
        handle = self._index.get(item_id)
        if handle is None:
            handle = len(self._items)
            self._index[item_id] = handle
            self._items.append(item)
            self._ids.append(item_id)
        else:
            self._items[handle] = item
        return handle

    def handle(self, item_id: str) -> Handle | None:
        return self._index.get(item_id)

    def get(self, item_id: str) -> T | None:
        handle = self._index.get(item_id)
        if handle is None:
            return None
        return self._items[handle]

    def id_of(self, handle: Handle) -> str:
        return self._ids[handle]

    def ids(self) -> list[str]:
        return list(self._ids)

    def __getitem__(self, handle: Handle) -> T:
        return self._items[handle]

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._index

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


class Catalog:
    """Static definitions for one game: resources, buildings and upgrades."""

    def __init__(self) -> None:
        self.resources: Arena[ResourceDef] = Arena()
        self.buildings: Arena[BuildingDef] = Arena()
        self.upgrades: Arena[UpgradeDef] = Arena()

    def define_resource(self, resource_def: ResourceDef) -> Handle:
        """Register a resource. Overwrites if id exists."""
        return self.resources.put(resource_def.id, resource_def)

    def define_building(self, building_def: BuildingDef) -> Handle:
        """Register a building. Overwrites if id exists."""
        return self.buildings.put(building_def.id, building_def)

    def define_upgrade(self, upgrade_def: UpgradeDef) -> Handle:
        """Register an upgrade. Overwrites if id exists."""
        return self.upgrades.put(upgrade_def.id, upgrade_def)

    def resource(self, resource_id: str) -> ResourceDef | None:
        return self.resources.get(resource_id)

    def building(self, building_id: str) -> BuildingDef | None:
        return self.buildings.get(building_id)

    def upgrade(self, upgrade_id: str) -> UpgradeDef | None:
        return self.upgrades.get(upgrade_id)

    def validate(self) -> None:
        """Check cross references. Raises ValueError on the first dangling id."""
        for bdef in self.buildings:
            for cost in bdef.costs:
                self._need_resource(bdef.id, cost.resource)
            for table in (bdef.production, bdef.consumption, bdef.capacity):
                for rid in table:
                    self._need_resource(bdef.id, rid)
            for req in bdef.required_buildings:
                self._need_building(bdef.id, req)
        for udef in self.upgrades:
            for rid in udef.cost:
                self._need_resource(udef.id, rid)
            for req in udef.required_buildings:
                self._need_building(udef.id, req)
            for req in udef.required_upgrades:
                if req not in self.upgrades:
                    raise ValueError(f"{udef.id}: unknown upgrade {req!r}")
            for effect in udef.effects:
                self._check_effect(udef.id, effect)

    def _check_effect(self, owner: str, effect: Effect) -> None:
        if isinstance(effect, (ProductionMultiplier, ConsumptionReduction,
                               CapacityMultiplier, UnlockResource)):
            self._need_resource(owner, effect.resource)
        elif isinstance(effect, (BuildingProductionMultiplier, UnlockBuilding)):
            self._need_building(owner, effect.building)
        elif isinstance(effect, UnlockUpgrade):
            if effect.upgrade not in self.upgrades:
                raise ValueError(f"{owner}: unknown upgrade {effect.upgrade!r}")

    def _need_resource(self, owner: str, resource_id: str) -> None:
        if resource_id not in self.resources:
            raise ValueError(f"{owner}: unknown resource {resource_id!r}")

    def _need_building(self, owner: str, building_id: str) -> None:
        if building_id not in self.buildings:
            raise ValueError(f"{owner}: unknown building {building_id!r}")
