"""tick-idle - Tick-driven resource/building/upgrade economy for idle games."""

from tick_idle.buildings import Building, BuildingRegistry, scaled_cost
from tick_idle.calendar import Calendar, Season, TimeState, Weather
from tick_idle.catalog import Arena, Catalog
from tick_idle.clock import Clock
from tick_idle.config import EconomyConfig
from tick_idle.content import default_catalog, load_catalog, load_catalog_file
from tick_idle.defs import (
    BuildingCost,
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
from tick_idle.economy import Economy
from tick_idle.engine import Engine
from tick_idle.game import Game
from tick_idle.ledger import Resource, ResourceLedger
from tick_idle.persistence import FileSlot, MemorySlot, SaveSystem
from tick_idle.rates import RateCalculator
from tick_idle.signals import SignalBus
from tick_idle.systems import (
    default_systems,
    make_calendar_system,
    make_capacity_system,
    make_production_system,
    make_signal_system,
    make_visibility_system,
)
from tick_idle.types import SnapshotError, TickContext
from tick_idle.upgrades import Upgrade, UpgradeRegistry

__all__ = [
    "Arena",
    "Building",
    "BuildingCost",
    "BuildingDef",
    "BuildingProductionMultiplier",
    "BuildingRegistry",
    "Calendar",
    "CapacityMultiplier",
    "Catalog",
    "Clock",
    "ConsumptionReduction",
    "Economy",
    "EconomyConfig",
    "Effect",
    "Engine",
    "FileSlot",
    "Game",
    "MemorySlot",
    "ProductionMultiplier",
    "RateCalculator",
    "Resource",
    "ResourceDef",
    "ResourceLedger",
    "SaveSystem",
    "Season",
    "SignalBus",
    "SnapshotError",
    "TickContext",
    "TimeState",
    "UnlockBuilding",
    "UnlockResource",
    "UnlockUpgrade",
    "Upgrade",
    "UpgradeDef",
    "UpgradeRegistry",
    "Weather",
    "default_catalog",
    "default_systems",
    "load_catalog",
    "load_catalog_file",
    "make_calendar_system",
    "make_capacity_system",
    "make_production_system",
    "make_signal_system",
    "make_visibility_system",
    "scaled_cost",
]
