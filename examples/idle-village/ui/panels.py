"""Header, resource, building and upgrade panels.

Each draw function returns the clickable rects it rendered so main.py can
route mouse clicks back to player actions.
"""
from __future__ import annotations

import pygame

from tick_idle import Game
from tick_idle.formatting import (
    cost_lines,
    date_string,
    describe_effect,
    format_amount,
    format_rate,
    format_time,
    weather_string,
)
from ui.constants import (
    COLOR_BUTTON,
    COLOR_DIVIDER,
    COLOR_PANEL_BG,
    COLOR_ROW,
    COLOR_ROW_READY,
    COLOR_TEXT,
    COLOR_TEXT_DIM,
    COLUMN_W,
    HEADER_H,
    ROW_H,
    WEATHER_COLORS,
)

Hitbox = tuple[pygame.Rect, str]


def _draw_text(surface, font, text, x, y, color) -> None:
    surface.blit(font.render(text, True, color), (x, y))


def draw_header(
    surface: pygame.Surface,
    font: pygame.font.Font,
    game: Game,
    paused: bool,
) -> list[Hitbox]:
    """Date, weather and the gather button."""
    w = surface.get_width()
    pygame.draw.rect(surface, COLOR_PANEL_BG, (0, 0, w, HEADER_H))
    pygame.draw.line(surface, COLOR_DIVIDER, (0, HEADER_H), (w, HEADER_H))

    cal = game.economy.calendar
    _draw_text(surface, font, date_string(cal), 10, 8, COLOR_TEXT)
    weather = weather_string(cal)
    _draw_text(surface, font, f"Weather: {weather}", 10, 26,
               WEATHER_COLORS.get(weather, COLOR_TEXT))
    if paused:
        _draw_text(surface, font, "PAUSED", w // 2 - 24, 16, (255, 255, 255))

    button = pygame.Rect(w - 170, 8, 160, 32)
    pygame.draw.rect(surface, COLOR_BUTTON, button, border_radius=4)
    _draw_text(surface, font, "Gather catnip", button.x + 22, button.y + 9, COLOR_TEXT)
    return [(button, "catnip")]


def draw_resources(
    surface: pygame.Surface,
    font: pygame.font.Font,
    game: Game,
    x: int, y: int, h: int,
) -> None:
    pygame.draw.rect(surface, COLOR_PANEL_BG, (x, y, COLUMN_W, h))
    _draw_text(surface, font, "Resources", x + 8, y + 6, COLOR_TEXT)
    ty = y + 28
    rates = game.economy.rates
    for res in game.visible_resources():
        name = res.definition.name
        amount = format_amount(res.amount)
        if res.definition.has_capacity:
            amount = f"{amount}/{format_amount(res.capacity)}"
        _draw_text(surface, font, f"{name}: {amount}", x + 8, ty, COLOR_TEXT)
        net = rates.net_rate(res.id)
        eta = format_time(rates.time_until_full(res.id) if net >= 0
                          else rates.time_until_empty(res.id))
        detail = format_rate(net) + (f"  ({eta})" if eta else "")
        _draw_text(surface, font, detail, x + 16, ty + 14, COLOR_TEXT_DIM)
        ty += 34


def draw_buildings(
    surface: pygame.Surface,
    font: pygame.font.Font,
    game: Game,
    x: int, y: int, h: int,
) -> list[Hitbox]:
    pygame.draw.rect(surface, COLOR_PANEL_BG, (x, y, COLUMN_W, h))
    pygame.draw.line(surface, COLOR_DIVIDER, (x, y), (x, y + h))
    _draw_text(surface, font, "Buildings (click to build)", x + 8, y + 6, COLOR_TEXT)
    catalog = game.economy.catalog
    hitboxes: list[Hitbox] = []
    ty = y + 28
    for b in game.visible_buildings():
        rect = pygame.Rect(x + 6, ty, COLUMN_W - 12, ROW_H - 4)
        color = COLOR_ROW_READY if game.can_construct(b.id) else COLOR_ROW
        pygame.draw.rect(surface, color, rect, border_radius=3)
        _draw_text(surface, font, f"{b.definition.name} ({b.count})",
                   rect.x + 6, rect.y + 4, COLOR_TEXT)
        cost = ", ".join(cost_lines(game.economy.buildings.cost(b.id), catalog))
        _draw_text(surface, font, cost, rect.x + 6, rect.y + 20, COLOR_TEXT_DIM)
        hitboxes.append((rect, b.id))
        ty += ROW_H
    return hitboxes


def draw_upgrades(
    surface: pygame.Surface,
    font: pygame.font.Font,
    game: Game,
    x: int, y: int, h: int,
) -> list[Hitbox]:
    pygame.draw.rect(surface, COLOR_PANEL_BG, (x, y, COLUMN_W, h))
    pygame.draw.line(surface, COLOR_DIVIDER, (x, y), (x, y + h))
    _draw_text(surface, font, "Upgrades (click to buy)", x + 8, y + 6, COLOR_TEXT)
    catalog = game.economy.catalog
    hitboxes: list[Hitbox] = []
    ty = y + 28
    for u in game.visible_upgrades():
        rect = pygame.Rect(x + 6, ty, COLUMN_W - 12, ROW_H - 4)
        color = COLOR_ROW_READY if game.can_purchase(u.id) else COLOR_ROW
        pygame.draw.rect(surface, color, rect, border_radius=3)
        effects = "; ".join(describe_effect(e, catalog) for e in u.definition.effects)
        _draw_text(surface, font, u.definition.name, rect.x + 6, rect.y + 4, COLOR_TEXT)
        cost = ", ".join(cost_lines(u.definition.cost, catalog))
        _draw_text(surface, font, f"{cost} | {effects}", rect.x + 6, rect.y + 20,
                   COLOR_TEXT_DIM)
        hitboxes.append((rect, u.id))
        ty += ROW_H
    return hitboxes
