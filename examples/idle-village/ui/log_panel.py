"""Village chronicle: dated event lines at the bottom of the screen."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass

import pygame

from ui.constants import COLOR_DIVIDER, COLOR_LOG_BG, COLOR_TEXT_DIM, LOG_COLORS


@dataclass
class LogEntry:
    text: str
    category: str
    stamp: str = ""
    repeats: int = 1

    def label(self) -> str:
        suffix = f" (x{self.repeats})" if self.repeats > 1 else ""
        return self.text + suffix


class EventLogPanel:
    """Newest entries at the bottom.

    An entry identical to the previous one bumps its repeat counter instead
    of taking another line, so a burst of the same unlock or save message
    reads as one row.
    """

    STAMP_W = 120
    LINE_H = 14

    def __init__(self, max_entries: int = 50) -> None:
        self.entries: deque[LogEntry] = deque(maxlen=max_entries)

    def add(self, text: str, category: str = "default", stamp: str = "") -> None:
        last = self.entries[-1] if self.entries else None
        if last is not None and last.text == text and last.category == category:
            last.repeats += 1
            last.stamp = stamp
            return
        self.entries.append(LogEntry(text, category, stamp))

    def draw(
        self,
        surface: pygame.Surface,
        font: pygame.font.Font,
        x: int, y: int, w: int, h: int,
    ) -> None:
        pygame.draw.rect(surface, COLOR_LOG_BG, (x, y, w, h))
        pygame.draw.line(surface, COLOR_DIVIDER, (x, y), (x + w, y))

        rows = max(1, (h - 8) // self.LINE_H)
        ty = y + 4
        for entry in list(self.entries)[-rows:]:
            color = LOG_COLORS.get(entry.category, LOG_COLORS["default"])
            if entry.stamp:
                surface.blit(font.render(entry.stamp, True, COLOR_TEXT_DIM), (x + 6, ty))
            surface.blit(font.render(entry.label(), True, color),
                         (x + 6 + self.STAMP_W, ty))
            ty += self.LINE_H
