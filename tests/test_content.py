"""Tests for catalog loading from plain data and the built-in village."""
from __future__ import annotations

import json

import pytest
from tick_idle import (
    BuildingProductionMultiplier,
    CapacityMultiplier,
    ConsumptionReduction,
    ProductionMultiplier,
    UnlockBuilding,
    UnlockResource,
    UnlockUpgrade,
    default_catalog,
    load_catalog,
    load_catalog_file,
)
from tick_idle.content import CATNIP_SEASONAL, parse_building, parse_effect


class TestParseEffect:
    @pytest.mark.parametrize(
        "data, expected",
        [
            ({"type": "production_multiplier", "target": "wood", "value": 2},
             ProductionMultiplier("wood", 2.0)),
            ({"type": "building_production_multiplier", "target": "camp", "value": 1.5},
             BuildingProductionMultiplier("camp", 1.5)),
            ({"type": "consumption_reduction", "target": "wood", "value": 0.5},
             ConsumptionReduction("wood", 0.5)),
            ({"type": "capacity_multiplier", "target": "wood", "value": 3},
             CapacityMultiplier("wood", 3.0)),
            ({"type": "unlock_building", "target": "camp"}, UnlockBuilding("camp")),
            ({"type": "unlock_upgrade", "target": "axes"}, UnlockUpgrade("axes")),
            ({"type": "unlock_resource", "target": "wood"}, UnlockResource("wood")),
        ],
    )
    def test_known_types(self, data, expected) -> None:
        assert parse_effect(data) == expected

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown effect type: 'teleport'"):
            parse_effect({"type": "teleport", "target": "x"})

    def test_missing_field(self) -> None:
        with pytest.raises(ValueError, match="missing field 'value'"):
            parse_effect({"type": "production_multiplier", "target": "wood"})


class TestParseBuilding:
    def test_requirements_list_means_one_each(self) -> None:
        b = parse_building({"id": "hut", "required_buildings": ["field", "well"]})
        assert b.required_buildings == {"field": 1, "well": 1}

    def test_requirements_mapping(self) -> None:
        b = parse_building({"id": "hut", "required_buildings": {"field": 3}})
        assert b.required_buildings == {"field": 3}

    def test_default_scaling(self) -> None:
        b = parse_building({"id": "hut", "costs": [{"resource": "wood", "base_amount": 5}]})
        assert b.costs[0].scaling == 1.15


class TestLoadCatalog:
    def test_minimal(self) -> None:
        catalog = load_catalog({
            "resources": [{"id": "wood", "visible_by_default": True}],
            "buildings": [{"id": "camp", "production": {"wood": 1}}],
        })
        assert catalog.resource("wood").visible_by_default
        assert catalog.building("camp").production == {"wood": 1.0}

    def test_missing_id(self) -> None:
        with pytest.raises(ValueError, match="missing field 'id'"):
            load_catalog({"resources": [{"name": "Wood"}]})

    def test_dangling_reference(self) -> None:
        with pytest.raises(ValueError, match="unknown resource 'stone'"):
            load_catalog({"buildings": [{"id": "camp", "production": {"stone": 1}}]})

    def test_from_file(self, tmp_path) -> None:
        path = tmp_path / "content.json"
        path.write_text(json.dumps({"resources": [{"id": "wood"}]}), encoding="utf-8")
        catalog = load_catalog_file(str(path))
        assert catalog.resources.ids() == ["wood"]


class TestDefaultCatalog:
    def test_loads_and_validates(self) -> None:
        catalog = default_catalog()
        assert catalog.resources.ids() == ["catnip", "wood", "kittens"]
        assert catalog.buildings.ids() == ["catnip_field", "hut", "woodcutter", "barn"]
        assert catalog.upgrades.ids() == ["calendar", "agriculture", "mineral_hoes", "pottery"]

    def test_catnip_is_seasonal(self) -> None:
        assert default_catalog().resource("catnip").seasonal == CATNIP_SEASONAL
