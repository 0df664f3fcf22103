"""Immutable definitions for resources, buildings, upgrades and effects."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

SEASON_COUNT = 4
WEATHER_COUNT = 3

# seasonal[season][weather] -> additive production offset (1 + offset).
SeasonalTable = tuple[tuple[float, ...], ...]


def _check_amounts(owner: str, label: str, amounts: dict[str, float]) -> None:
    for key, value in amounts.items():
        if not key:
            raise ValueError(f"{owner}: {label} has an empty resource id")
        if value < 0:
            raise ValueError(f"{owner}: {label}[{key!r}] must be >= 0, got {value}")


def _check_requirements(owner: str, required: dict[str, int]) -> None:
    for key, minimum in required.items():
        if not key:
            raise ValueError(f"{owner}: required_buildings has an empty id")
        if minimum < 1:
            raise ValueError(
                f"{owner}: required_buildings[{key!r}] must be >= 1, got {minimum}"
            )


@dataclass(frozen=True)
class ResourceDef:
    """Immutable resource type definition.

    Attributes:
        id: Unique identifier for this resource.
        name: Display name (defaults to the id).
        description: Free text for the presentation layer.
        has_capacity: Whether amounts are clamped to a storage capacity.
        initial_amount: Amount on a new game.
        initial_capacity: Storage before buildings and upgrades.
        visible_by_default: Whether the resource starts unlocked.
        seasonal: Optional 4x3 table of production offsets by season/weather.
    """

    id: str
    name: str = ""
    description: str = ""
    has_capacity: bool = False
    initial_amount: float = 0.0
    initial_capacity: float = 100.0
    visible_by_default: bool = False
    seasonal: SeasonalTable | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ResourceDef id must be non-empty")
        if not self.name:
            object.__setattr__(self, "name", self.id)
        if self.initial_amount < 0:
            raise ValueError(
                f"initial_amount must be >= 0, got {self.initial_amount}"
            )
        if self.initial_capacity < 0:
            raise ValueError(
                f"initial_capacity must be >= 0, got {self.initial_capacity}"
            )
        if self.seasonal is not None:
            table = tuple(tuple(float(v) for v in row) for row in self.seasonal)
            if len(table) != SEASON_COUNT or any(
                len(row) != WEATHER_COUNT for row in table
            ):
                raise ValueError(
                    f"{self.id}: seasonal table must be "
                    f"{SEASON_COUNT}x{WEATHER_COUNT}"
                )
            object.__setattr__(self, "seasonal", table)


@dataclass(frozen=True)
class BuildingCost:
    """Cost of one resource for a building: base * scaling ** owned."""

    resource: str
    base_amount: float
    scaling: float = 1.15

    def __post_init__(self) -> None:
        if not self.resource:
            raise ValueError("BuildingCost resource must be non-empty")
        if self.base_amount < 0:
            raise ValueError(f"base_amount must be >= 0, got {self.base_amount}")
        if self.scaling < 1.0:
            raise ValueError(f"scaling must be >= 1, got {self.scaling}")


@dataclass(frozen=True)
class BuildingDef:
    """Immutable building definition.

    Attributes:
        id: Unique identifier.
        costs: Scaled construction costs.
        production: Resource produced per second per building.
        consumption: Resource consumed per second per building.
        capacity: Storage added per building.
        required_buildings: Building id -> minimum count for visibility.
        visible_by_default: Whether the building starts unlocked.
    """

    id: str
    name: str = ""
    description: str = ""
    costs: tuple[BuildingCost, ...] = ()
    production: dict[str, float] = field(default_factory=dict)
    consumption: dict[str, float] = field(default_factory=dict)
    capacity: dict[str, float] = field(default_factory=dict)
    required_buildings: dict[str, int] = field(default_factory=dict)
    visible_by_default: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("BuildingDef id must be non-empty")
        if not self.name:
            object.__setattr__(self, "name", self.id)
        object.__setattr__(self, "costs", tuple(self.costs))
        _check_amounts(self.id, "production", self.production)
        _check_amounts(self.id, "consumption", self.consumption)
        _check_amounts(self.id, "capacity", self.capacity)
        _check_requirements(self.id, self.required_buildings)


# -- Upgrade effects --
#
# One class per effect kind. Multipliers are read back every tick by the
# rate calculator; unlocks are applied once at purchase time.


@dataclass(frozen=True)
class ProductionMultiplier:
    resource: str
    factor: float


@dataclass(frozen=True)
class BuildingProductionMultiplier:
    building: str
    factor: float


@dataclass(frozen=True)
class ConsumptionReduction:
    """Multiplies consumption of a resource; factors below 1 reduce it."""

    resource: str
    factor: float


@dataclass(frozen=True)
class CapacityMultiplier:
    resource: str
    factor: float


@dataclass(frozen=True)
class UnlockBuilding:
    building: str


@dataclass(frozen=True)
class UnlockUpgrade:
    upgrade: str


@dataclass(frozen=True)
class UnlockResource:
    resource: str


Effect = Union[
    ProductionMultiplier,
    BuildingProductionMultiplier,
    ConsumptionReduction,
    CapacityMultiplier,
    UnlockBuilding,
    UnlockUpgrade,
    UnlockResource,
]

MULTIPLIER_EFFECTS = (
    ProductionMultiplier,
    BuildingProductionMultiplier,
    ConsumptionReduction,
    CapacityMultiplier,
)


@dataclass(frozen=True)
class UpgradeDef:
    """Immutable one-shot upgrade definition.

    Attributes:
        id: Unique identifier.
        cost: Flat purchase cost.
        effects: Effects applied by the purchase.
        required_buildings: Building id -> minimum count for visibility.
        required_upgrades: Upgrades that must be purchased for visibility.
        visible_by_default: Whether the upgrade starts unlocked.
    """

    id: str
    name: str = ""
    description: str = ""
    cost: dict[str, float] = field(default_factory=dict)
    effects: tuple[Effect, ...] = ()
    required_buildings: dict[str, int] = field(default_factory=dict)
    required_upgrades: tuple[str, ...] = ()
    visible_by_default: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("UpgradeDef id must be non-empty")
        if not self.name:
            object.__setattr__(self, "name", self.id)
        object.__setattr__(self, "effects", tuple(self.effects))
        object.__setattr__(self, "required_upgrades", tuple(self.required_upgrades))
        _check_amounts(self.id, "cost", self.cost)
        _check_requirements(self.id, self.required_buildings)
        if self.id in self.required_upgrades:
            raise ValueError(f"{self.id}: upgrade cannot require itself")
        for effect in self.effects:
            if isinstance(effect, MULTIPLIER_EFFECTS) and effect.factor < 0:
                raise ValueError(
                    f"{self.id}: effect factor must be >= 0, got {effect.factor}"
                )
