"""Shared type aliases and protocols for the idle economy engine."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Mapping

ResourceId = str
BuildingId = str
UpgradeId = str

# Resource id -> amount. Used for costs, production lists and capacity lists.
Amounts = Mapping[str, float]


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt: float
    elapsed: float
    random: _random.Random


class SnapshotError(Exception):
    """Raised on restore failures (version or tick-rate mismatch)."""


if TYPE_CHECKING:
    from tick_idle.economy import Economy

System = Callable[["Economy", TickContext], None]
