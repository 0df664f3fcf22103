"""System factories for the per-tick economy pipeline."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from tick_idle.signals import (
    BUILDINGS,
    NEW_DAY,
    NEW_YEAR,
    RESOURCES,
    SEASON,
    UPGRADES,
    WEATHER,
    SignalBus,
)

if TYPE_CHECKING:
    from tick_idle.economy import Economy
    from tick_idle.types import System, TickContext


def make_capacity_system() -> Callable[[Economy, TickContext], None]:
    """Push freshly summed building storage into the ledger every tick."""

    def capacity_system(economy: Economy, ctx: TickContext) -> None:
        economy.refresh_capacities()

    return capacity_system


def make_production_system() -> Callable[[Economy, TickContext], None]:
    """Apply ``net_rate * dt`` to every unlocked resource."""

    def production_system(economy: Economy, ctx: TickContext) -> None:
        for res in economy.ledger.resources():
            if not res.unlocked:
                continue
            net = economy.rates.net_rate(res.id)
            if net != 0.0:
                economy.ledger.add(res.id, net * ctx.dt)

    return production_system


def make_visibility_system() -> Callable[[Economy, TickContext], None]:
    """Re-evaluate visibility predicates and publish refreshes on change."""
    seen: dict[str, frozenset[str]] = {}

    def visibility_system(economy: Economy, ctx: TickContext) -> None:
        current = {
            RESOURCES: frozenset(r.id for r in economy.ledger.visible_resources()),
            BUILDINGS: frozenset(b.id for b in economy.buildings.visible_buildings()),
            UPGRADES: frozenset(u.id for u in economy.upgrades.visible_upgrades()),
        }
        for signal_name, ids in current.items():
            previous = seen.get(signal_name)
            if previous is not None and previous != ids and economy.bus is not None:
                economy.bus.publish(
                    signal_name,
                    shown=sorted(ids - previous),
                    hidden=sorted(previous - ids),
                )
            seen[signal_name] = ids

    return visibility_system


def make_calendar_system() -> Callable[[Economy, TickContext], None]:
    """Advance the calendar one tick and publish day/season/year changes."""

    def calendar_system(economy: Economy, ctx: TickContext) -> None:
        cal = economy.calendar
        change = cal.advance(ctx.random)
        bus = economy.bus
        if bus is None:
            return
        if change.new_day:
            bus.publish(NEW_DAY, day=cal.day)
        if change.new_season:
            bus.publish(SEASON, season=int(cal.season))
        if change.weather_changed:
            bus.publish(WEATHER, weather=int(cal.weather))
        if change.new_year:
            bus.publish(NEW_YEAR, year=cal.year)

    return calendar_system


def make_signal_system(bus: SignalBus) -> Callable[[Economy, TickContext], None]:
    def signal_system(economy: Economy, ctx: TickContext) -> None:
        bus.flush()

    return signal_system


def default_systems(bus: SignalBus | None = None) -> list[System]:
    """The standard tick order: storage, production, visibility, calendar, refresh."""
    systems: list[System] = [
        make_capacity_system(),
        make_production_system(),
        make_visibility_system(),
        make_calendar_system(),
    ]
    if bus is not None:
        systems.append(make_signal_system(bus))
    return systems
