"""Text helpers for presenting amounts, durations, costs and effects."""
from __future__ import annotations

import math
from typing import assert_never

from tick_idle.calendar import Calendar
from tick_idle.catalog import Catalog
from tick_idle.defs import (
    BuildingProductionMultiplier,
    CapacityMultiplier,
    ConsumptionReduction,
    Effect,
    ProductionMultiplier,
    UnlockBuilding,
    UnlockResource,
    UnlockUpgrade,
)
from tick_idle.types import Amounts


def format_time(seconds: float | None) -> str:
    """Compact duration: ``42s``, ``03m:05s``, ``02h:10m``, ``3d 4h``.

    Non-positive and missing durations format as an empty string.
    """
    if seconds is None or seconds <= 0:
        return ""
    total = int(seconds)
    days, rem = divmod(total, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)
    if seconds < 60:
        return f"{total}s"
    if seconds < 3600:
        return f"{minutes:02d}m:{secs:02d}s"
    if seconds < 86400:
        return f"{hours:02d}h:{minutes:02d}m"
    return f"{days}d {hours}h"


def format_amount(amount: float, decimals: bool = False) -> str:
    if decimals:
        return f"{amount:.1f}"
    return str(math.floor(amount))


def format_rate(rate: float) -> str:
    sign = "+" if rate >= 0 else "-"
    return f"{sign}{abs(rate):.2f}/s"


def _resource_name(catalog: Catalog, resource_id: str) -> str:
    defn = catalog.resource(resource_id)
    return defn.name if defn is not None else resource_id


def _building_name(catalog: Catalog, building_id: str) -> str:
    defn = catalog.building(building_id)
    return defn.name if defn is not None else building_id


def _upgrade_name(catalog: Catalog, upgrade_id: str) -> str:
    defn = catalog.upgrade(upgrade_id)
    return defn.name if defn is not None else upgrade_id


def cost_lines(cost: Amounts, catalog: Catalog) -> list[str]:
    return [
        f"{_resource_name(catalog, rid)}: {format_amount(amount)}"
        for rid, amount in cost.items()
    ]


def describe_effect(effect: Effect, catalog: Catalog) -> str:
    if isinstance(effect, ProductionMultiplier):
        return (f"+{(effect.factor - 1) * 100:.0f}% "
                f"{_resource_name(catalog, effect.resource)} production")
    if isinstance(effect, BuildingProductionMultiplier):
        return (f"+{(effect.factor - 1) * 100:.0f}% "
                f"{_building_name(catalog, effect.building)} production")
    if isinstance(effect, CapacityMultiplier):
        return (f"+{(effect.factor - 1) * 100:.0f}% "
                f"{_resource_name(catalog, effect.resource)} capacity")
    if isinstance(effect, ConsumptionReduction):
        return (f"-{(1 - effect.factor) * 100:.0f}% "
                f"{_resource_name(catalog, effect.resource)} consumption")
    if isinstance(effect, UnlockBuilding):
        return f"Unlocks {_building_name(catalog, effect.building)}"
    if isinstance(effect, UnlockUpgrade):
        return f"Unlocks {_upgrade_name(catalog, effect.upgrade)}"
    if isinstance(effect, UnlockResource):
        return f"Unlocks {_resource_name(catalog, effect.resource)}"
    assert_never(effect)


def date_string(calendar: Calendar) -> str:
    return f"Year {calendar.year}, {calendar.season.label}, Day {calendar.day_of_season}"


def weather_string(calendar: Calendar) -> str:
    return calendar.weather.label
