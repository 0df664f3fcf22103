"""Idle Village: a catnip economy on the tick-idle engine.

Gather catnip, plant fields, research the calendar and grow a village.
Progress is saved to disk on an interval and on quit; time spent away is
replayed on the next launch.

Controls:
  Left-click  Gather / build / buy
  Space       Pause / Resume
  S           Save now
  R           Reset (new game, deletes the save)
  Escape      Quit
"""
from __future__ import annotations

import argparse
import logging
import sys

import pygame

from tick_idle import EconomyConfig, FileSlot, Game, default_catalog, load_catalog_file
from tick_idle.calendar import Season, Weather
from tick_idle.formatting import format_time
from tick_idle.signals import BUILDINGS, NEW_YEAR, OFFLINE, SEASON, UPGRADES, WEATHER
from ui.constants import COLUMN_W, FPS, HEADER_H, LOG_H, SCREEN_H, SCREEN_W
from ui.log_panel import EventLogPanel
from ui.panels import draw_buildings, draw_header, draw_resources, draw_upgrades


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Idle Village: tick-idle visual demo")
    p.add_argument("--seed", type=int, default=None, help="Random seed (default: random)")
    p.add_argument("--save-dir", type=str, default=".saves",
                   help="Directory for the save file (default: .saves)")
    p.add_argument("--content", type=str, default=None, metavar="FILE",
                   help="JSON content file (default: built-in village)")
    p.add_argument("--speed", type=float, default=1.0,
                   help="Real-time multiplier (default: 1.0)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    catalog = load_catalog_file(args.content) if args.content else default_catalog()
    config = EconomyConfig()
    game = Game(catalog, config, slot=FileSlot(args.save_dir, config.save_key),
                seed=args.seed)

    log_panel = EventLogPanel()

    def log(text: str, category: str = "default") -> None:
        cal = game.economy.calendar
        stamp = f"Y{cal.year} {cal.season.label} d{cal.day_of_season}"
        log_panel.add(text, category, stamp)

    def _on_season(signal: str, data: dict) -> None:
        log(f"Season: {Season(data['season']).label}", "season")

    def _on_weather(signal: str, data: dict) -> None:
        log(f"Weather turned {Weather(data['weather']).label.lower()}", "weather")

    def _on_year(signal: str, data: dict) -> None:
        log(f"Year {data['year']} begins", "season")

    def _on_buildings(signal: str, data: dict) -> None:
        if "constructed" in data:
            log(f"Built {data['constructed']} (now {data['count']})", "build")
        for bid in data.get("shown", []):
            log(f"New building available: {bid}", "unlock")

    def _on_upgrades(signal: str, data: dict) -> None:
        if "purchased" in data:
            log(f"Researched {data['purchased']}", "upgrade")
        for uid in data.get("shown", []):
            log(f"New upgrade available: {uid}", "unlock")

    def _on_offline(signal: str, data: dict) -> None:
        log(f"While you were away ({format_time(data['seconds'])}): "
                      f"{data['ticks']} ticks", "save")

    game.subscribe(SEASON, _on_season)
    game.subscribe(WEATHER, _on_weather)
    game.subscribe(NEW_YEAR, _on_year)
    game.subscribe(BUILDINGS, _on_buildings)
    game.subscribe(UPGRADES, _on_upgrades)
    game.subscribe(OFFLINE, _on_offline)

    if game.load():
        log("Save loaded", "save")
    else:
        log("New village founded", "save")

    # Pygame init
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Idle Village: tick-idle demo")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 12)
    small_font = pygame.font.SysFont("monospace", 10)

    body_y = HEADER_H + 1
    body_h = SCREEN_H - LOG_H - body_y
    hitboxes: dict[str, list[tuple[pygame.Rect, str]]] = {
        "gather": [], "build": [], "buy": [],
    }
    paused = False
    running = True

    while running:
        dt = clock.tick(FPS) / 1000.0

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    paused = not paused
                elif event.key == pygame.K_s:
                    if game.save():
                        log("Game saved", "save")
                elif event.key == pygame.K_r:
                    game.reset()
                    log("Village reset", "save")

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                _handle_click(game, hitboxes, event.pos)

        # --- Tick ---
        if not paused:
            game.update(dt * args.speed)

        # --- Render ---
        screen.fill((20, 20, 30))
        hitboxes["gather"] = draw_header(screen, font, game, paused)
        draw_resources(screen, font, game, 0, body_y, body_h)
        hitboxes["build"] = draw_buildings(screen, small_font, game, COLUMN_W, body_y, body_h)
        hitboxes["buy"] = draw_upgrades(screen, small_font, game, COLUMN_W * 2, body_y, body_h)
        log_panel.draw(screen, small_font, 0, SCREEN_H - LOG_H, SCREEN_W, LOG_H)

        pygame.display.flip()

    game.save()
    pygame.quit()
    sys.exit()


def _handle_click(game: Game, hitboxes, pos) -> None:
    """Route a left-click to gather, construct or purchase."""
    for rect, rid in hitboxes["gather"]:
        if rect.collidepoint(pos):
            game.gather(rid)
            return
    for rect, bid in hitboxes["build"]:
        if rect.collidepoint(pos):
            game.construct(bid)
            return
    for rect, uid in hitboxes["buy"]:
        if rect.collidepoint(pos):
            game.purchase(uid)
            return


if __name__ == "__main__":
    main()
