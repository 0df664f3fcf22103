"""Catalog loading from plain data, plus the built-in catnip village."""
from __future__ import annotations

import json
from typing import Any, Callable, Mapping

from tick_idle.catalog import Catalog
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

# Offsets by season (spring..winter) and weather (warm, average, cold).
CATNIP_SEASONAL = (
    (0.65, 0.5, 0.35),
    (0.15, 0.0, -0.15),
    (0.15, 0.0, -0.15),
    (-0.6, -0.75, -0.9),
)

_EFFECT_PARSERS: dict[str, Callable[[Mapping[str, Any]], Effect]] = {
    "production_multiplier": lambda d: ProductionMultiplier(d["target"], float(d["value"])),
    "building_production_multiplier": lambda d: BuildingProductionMultiplier(
        d["target"], float(d["value"])
    ),
    "consumption_reduction": lambda d: ConsumptionReduction(d["target"], float(d["value"])),
    "capacity_multiplier": lambda d: CapacityMultiplier(d["target"], float(d["value"])),
    "unlock_building": lambda d: UnlockBuilding(d["target"]),
    "unlock_upgrade": lambda d: UnlockUpgrade(d["target"]),
    "unlock_resource": lambda d: UnlockResource(d["target"]),
}


def _requirements(value: Any) -> dict[str, int]:
    """Accept either a list of ids (minimum 1 each) or an id -> count mapping."""
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return {str(k): int(v) for k, v in value.items()}
    return {str(v): 1 for v in value}


def parse_effect(data: Mapping[str, Any]) -> Effect:
    kind = data.get("type")
    parser = _EFFECT_PARSERS.get(str(kind))
    if parser is None:
        raise ValueError(f"Unknown effect type: {kind!r}")
    try:
        return parser(data)
    except KeyError as exc:
        raise ValueError(f"Effect {kind!r} is missing field {exc.args[0]!r}") from None


def parse_resource(data: Mapping[str, Any]) -> ResourceDef:
    seasonal = data.get("seasonal")
    return ResourceDef(
        id=data["id"],
        name=data.get("name", ""),
        description=data.get("description", ""),
        has_capacity=bool(data.get("has_capacity", False)),
        initial_amount=float(data.get("initial_amount", 0.0)),
        initial_capacity=float(data.get("initial_capacity", 100.0)),
        visible_by_default=bool(data.get("visible_by_default", False)),
        seasonal=tuple(tuple(row) for row in seasonal) if seasonal is not None else None,
    )


def parse_building(data: Mapping[str, Any]) -> BuildingDef:
    costs = tuple(
        BuildingCost(
            resource=c["resource"],
            base_amount=float(c["base_amount"]),
            scaling=float(c.get("scaling", 1.15)),
        )
        for c in data.get("costs", [])
    )
    return BuildingDef(
        id=data["id"],
        name=data.get("name", ""),
        description=data.get("description", ""),
        costs=costs,
        production={k: float(v) for k, v in data.get("production", {}).items()},
        consumption={k: float(v) for k, v in data.get("consumption", {}).items()},
        capacity={k: float(v) for k, v in data.get("capacity", {}).items()},
        required_buildings=_requirements(data.get("required_buildings")),
        visible_by_default=bool(data.get("visible_by_default", False)),
    )


def parse_upgrade(data: Mapping[str, Any]) -> UpgradeDef:
    return UpgradeDef(
        id=data["id"],
        name=data.get("name", ""),
        description=data.get("description", ""),
        cost={k: float(v) for k, v in data.get("cost", {}).items()},
        effects=tuple(parse_effect(e) for e in data.get("effects", [])),
        required_buildings=_requirements(data.get("required_buildings")),
        required_upgrades=tuple(data.get("required_upgrades", ())),
        visible_by_default=bool(data.get("visible_by_default", False)),
    )


def load_catalog(data: Mapping[str, Any]) -> Catalog:
    """Build and validate a catalog from ``{"resources", "buildings", "upgrades"}``."""
    catalog = Catalog()
    try:
        for entry in data.get("resources", []):
            catalog.define_resource(parse_resource(entry))
        for entry in data.get("buildings", []):
            catalog.define_building(parse_building(entry))
        for entry in data.get("upgrades", []):
            catalog.define_upgrade(parse_upgrade(entry))
    except KeyError as exc:
        raise ValueError(f"Content entry is missing field {exc.args[0]!r}") from None
    catalog.validate()
    return catalog


def load_catalog_file(path: str) -> Catalog:
    with open(path, "r", encoding="utf-8") as f:
        return load_catalog(json.load(f))


DEFAULT_CONTENT: dict[str, Any] = {
    "resources": [
        {
            "id": "catnip",
            "name": "Catnip",
            "description": "Grows in fields. Harvest is seasonal.",
            "has_capacity": True,
            "initial_capacity": 5000.0,
            "visible_by_default": True,
            "seasonal": CATNIP_SEASONAL,
        },
        {
            "id": "wood",
            "name": "Wood",
            "has_capacity": True,
            "initial_capacity": 200.0,
        },
        {
            "id": "kittens",
            "name": "Kittens",
            "visible_by_default": True,
        },
    ],
    "buildings": [
        {
            "id": "catnip_field",
            "name": "Catnip Field",
            "description": "Plant some catnip to grow in the village.",
            "costs": [{"resource": "catnip", "base_amount": 10, "scaling": 1.12}],
            "production": {"catnip": 0.63},
            "visible_by_default": True,
        },
        {
            "id": "hut",
            "name": "Hut",
            "description": "Houses kittens, who eat catnip.",
            "costs": [{"resource": "wood", "base_amount": 5, "scaling": 2.5}],
            "production": {"kittens": 0.02},
            "consumption": {"catnip": 0.85},
            "required_buildings": ["catnip_field"],
        },
        {
            "id": "woodcutter",
            "name": "Woodcutter",
            "costs": [{"resource": "catnip", "base_amount": 50, "scaling": 1.15}],
            "production": {"wood": 0.09},
            "consumption": {"catnip": 0.2},
            "required_buildings": {"catnip_field": 2},
        },
        {
            "id": "barn",
            "name": "Barn",
            "description": "Stores catnip and wood.",
            "costs": [{"resource": "wood", "base_amount": 50, "scaling": 1.75}],
            "capacity": {"catnip": 5000.0, "wood": 200.0},
            "required_buildings": ["woodcutter"],
        },
    ],
    "upgrades": [
        {
            "id": "calendar",
            "name": "Calendar",
            "description": "Begin felling trees.",
            "cost": {"catnip": 100},
            "effects": [
                {"type": "unlock_resource", "target": "wood"},
                {"type": "unlock_building", "target": "woodcutter"},
            ],
            "required_buildings": {"catnip_field": 2},
            "visible_by_default": True,
        },
        {
            "id": "agriculture",
            "name": "Agriculture",
            "cost": {"catnip": 300, "wood": 20},
            "effects": [
                {"type": "unlock_building", "target": "hut"},
                {"type": "unlock_building", "target": "barn"},
            ],
            "required_upgrades": ["calendar"],
        },
        {
            "id": "mineral_hoes",
            "name": "Mineral Hoes",
            "cost": {"wood": 100},
            "effects": [
                {"type": "building_production_multiplier",
                 "target": "catnip_field", "value": 1.5},
            ],
            "required_upgrades": ["agriculture"],
        },
        {
            "id": "pottery",
            "name": "Pottery",
            "cost": {"catnip": 1000, "wood": 150},
            "effects": [
                {"type": "capacity_multiplier", "target": "catnip", "value": 1.25},
                {"type": "consumption_reduction", "target": "catnip", "value": 0.9},
            ],
            "required_buildings": ["barn"],
            "required_upgrades": ["agriculture"],
        },
    ],
}


def default_catalog() -> Catalog:
    return load_catalog(DEFAULT_CONTENT)
