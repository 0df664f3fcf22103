"""Tests for ResourceLedger amounts, capacity clamping and snapshots."""
from __future__ import annotations

from tick_idle import Catalog, ResourceDef, ResourceLedger, SignalBus
from tick_idle.signals import RESOURCES


def _catalog() -> Catalog:
    catalog = Catalog()
    catalog.define_resource(ResourceDef(
        id="wood", has_capacity=True, initial_capacity=100.0, initial_amount=10.0,
        visible_by_default=True,
    ))
    catalog.define_resource(ResourceDef(id="kittens"))
    return catalog


class TestQueries:
    def test_fresh_state_from_definitions(self) -> None:
        ledger = ResourceLedger(_catalog())
        assert ledger.amount("wood") == 10.0
        assert ledger.capacity("wood") == 100.0
        assert ledger.is_unlocked("wood")
        assert not ledger.is_unlocked("kittens")

    def test_unknown_resource_reads_zero(self) -> None:
        ledger = ResourceLedger(_catalog())
        assert ledger.amount("gold") == 0.0
        assert ledger.capacity("gold") == 0.0
        assert not ledger.has_capacity("gold")
        assert ledger.get("gold") is None

    def test_visible_resources_are_unlocked_ones(self) -> None:
        ledger = ResourceLedger(_catalog())
        assert [r.id for r in ledger.visible_resources()] == ["wood"]

    def test_can_afford(self) -> None:
        ledger = ResourceLedger(_catalog())
        assert ledger.can_afford({"wood": 10.0})
        assert not ledger.can_afford({"wood": 10.5})
        assert not ledger.can_afford({"gold": 1.0})
        assert ledger.can_afford({})


class TestMutation:
    def test_add_clamps_to_capacity(self) -> None:
        ledger = ResourceLedger(_catalog())
        applied = ledger.add("wood", 500.0)
        assert ledger.amount("wood") == 100.0
        assert applied == 90.0

    def test_add_clamps_at_zero(self) -> None:
        ledger = ResourceLedger(_catalog())
        applied = ledger.add("wood", -25.0)
        assert ledger.amount("wood") == 0.0
        assert applied == -10.0

    def test_uncapped_resource_grows_freely(self) -> None:
        ledger = ResourceLedger(_catalog())
        ledger.add("kittens", 1_000_000.0)
        assert ledger.amount("kittens") == 1_000_000.0

    def test_add_to_unknown_is_ignored(self) -> None:
        ledger = ResourceLedger(_catalog())
        assert ledger.add("gold", 5.0) == 0.0

    def test_lowering_capacity_clamps_amount(self) -> None:
        ledger = ResourceLedger(_catalog())
        ledger.add("wood", 80.0)
        ledger.set_capacity("wood", 50.0)
        assert ledger.capacity("wood") == 50.0
        assert ledger.amount("wood") == 50.0

    def test_negative_capacity_floors_at_zero(self) -> None:
        ledger = ResourceLedger(_catalog())
        ledger.set_capacity("wood", -5.0)
        assert ledger.capacity("wood") == 0.0
        assert ledger.amount("wood") == 0.0

    def test_spend_debits_each_cost(self) -> None:
        ledger = ResourceLedger(_catalog())
        ledger.add("kittens", 3.0)
        ledger.spend({"wood": 4.0, "kittens": 1.0})
        assert ledger.amount("wood") == 6.0
        assert ledger.amount("kittens") == 2.0

    def test_unlock_is_one_way_and_publishes_once(self) -> None:
        bus = SignalBus()
        ledger = ResourceLedger(_catalog(), bus)
        assert ledger.unlock("kittens")
        assert not ledger.unlock("kittens")
        assert not ledger.unlock("gold")
        assert bus.pending() == [RESOURCES]

    def test_reset_restores_initial_values(self) -> None:
        ledger = ResourceLedger(_catalog())
        ledger.add("wood", 50.0)
        ledger.unlock("kittens")
        ledger.reset()
        assert ledger.amount("wood") == 10.0
        assert not ledger.is_unlocked("kittens")


class TestSnapshot:
    def test_snapshot_restore_round_trip(self) -> None:
        ledger = ResourceLedger(_catalog())
        ledger.add("wood", 33.5)
        ledger.unlock("kittens")
        data = ledger.snapshot()

        other = ResourceLedger(_catalog())
        other.restore(data)
        assert other.amount("wood") == 43.5
        assert other.is_unlocked("kittens")

    def test_restore_skips_unknown_ids(self) -> None:
        ledger = ResourceLedger(_catalog())
        ledger.restore([
            {"id": "gold", "amount": 99.0},
            {"id": "wood", "amount": 7.0},
        ])
        assert ledger.amount("wood") == 7.0
        assert ledger.get("gold") is None

    def test_restore_clamps_amounts_into_range(self) -> None:
        ledger = ResourceLedger(_catalog())
        ledger.restore([
            {"id": "wood", "amount": 250.0, "capacity": 100.0},
            {"id": "kittens", "amount": -5.0},
        ])
        assert ledger.amount("wood") == 100.0
        assert ledger.amount("kittens") == 0.0

    def test_restore_resets_missing_entries(self) -> None:
        ledger = ResourceLedger(_catalog())
        ledger.add("kittens", 5.0)
        ledger.restore([])
        assert ledger.amount("kittens") == 0.0
