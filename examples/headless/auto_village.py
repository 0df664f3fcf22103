"""Auto Village: headless run of the catnip village with a greedy bot.

Every simulated second the bot buys the first affordable upgrade, else the
first affordable building, else gathers a handful of catnip. At the end a
summary of the economy is printed, then the run is saved, reloaded with a
simulated hour away, and the offline progress is reported.

Run:
    python auto_village.py
    python auto_village.py --seconds 3600 --seed 7
"""
from __future__ import annotations

import argparse
import logging
from datetime import datetime, timedelta, timezone

from tick_idle import Game, MemorySlot, default_catalog
from tick_idle.formatting import date_string, format_amount, format_rate, weather_string


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Headless idle village run")
    p.add_argument("--seconds", type=int, default=1800, help="Simulated seconds (default: 1800)")
    p.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    p.add_argument("--gather", type=float, default=5.0,
                   help="Catnip gathered when nothing is affordable (default: 5)")
    return p.parse_args()


def act(game: Game, gather: float) -> str | None:
    """One bot decision. Returns a log line, or None after gathering."""
    for u in game.visible_upgrades():
        if game.purchase(u.id):
            return f"researched {u.definition.name}"
    for b in game.visible_buildings():
        if game.construct(b.id):
            return f"built {b.definition.name} (now {b.count})"
    game.gather("catnip", gather)
    return None


def report(game: Game) -> None:
    cal = game.economy.calendar
    print(f"  {date_string(cal)} - {weather_string(cal)}")
    for res in game.visible_resources():
        net = game.economy.rates.net_rate(res.id)
        print(f"  {res.definition.name:<10} {format_amount(res.amount):>8}  {format_rate(net)}")
    for b in game.visible_buildings():
        print(f"  {b.definition.name:<14} x{b.count}")


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    now = [start]
    slot = MemorySlot()
    game = Game(default_catalog(), slot=slot, seed=args.seed, now=lambda: now[0])

    for second in range(args.seconds):
        line = act(game, args.gather)
        if line:
            print(f"[{second:>5}s] {line}")
        game.update(1.0)

    print("\nAfter play:")
    report(game)

    now[0] = start + timedelta(seconds=args.seconds)
    game.save()
    now[0] += timedelta(hours=1)
    returning = Game(default_catalog(), slot=slot, now=lambda: now[0])
    returning.load()

    print("\nAfter an hour away:")
    report(returning)


if __name__ == "__main__":
    main()
