"""Engine - fixed-step loop, real-time pacing and offline catch-up."""

import logging
import math
import os
import random
from typing import Any

from tick_idle.clock import Clock
from tick_idle.config import EconomyConfig
from tick_idle.economy import Economy
from tick_idle.types import SnapshotError, System

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1

# floor(seconds * tps) with a little slack so 0.6 s at 5 tps is 3 ticks.
_TICK_EPSILON = 1e-9


class Engine:
    """Runs the economy's systems once per tick, in registration order.

    Online play (``update``) and offline replay (``catch_up``) both go
    through ``step``, and the RNG is part of the snapshot, so a restored
    engine continues exactly where the saved one left off.
    """

    def __init__(self, economy: Economy, seed: int | None = None) -> None:
        self._economy = economy
        self._config: EconomyConfig = economy.config
        self._clock = Clock(self._config.tps)
        self._pipeline: list[System] = []
        self._seed = seed if seed is not None else int.from_bytes(os.urandom(8))
        self._rng = random.Random(self._seed)

    @property
    def economy(self) -> Economy:
        return self._economy

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def seed(self) -> int:
        return self._seed

    def add_system(self, system: System) -> None:
        self._pipeline.append(system)

    def step(self) -> None:
        """Advance one tick and run every system against the economy."""
        self._clock.advance()
        ctx = self._clock.context(self._rng)
        for system in self._pipeline:
            system(self._economy, ctx)

    def run(self, n: int) -> None:
        for _ in range(n):
            self.step()

    def update(self, real_dt: float) -> int:
        """Feed real elapsed seconds; runs every tick that came due. Returns ticks run."""
        due = self._clock.accumulate(real_dt)
        self.run(due)
        return due

    def offline_ticks(self, elapsed_seconds: float) -> int:
        """Ticks owed for an offline gap, after the minimum and cap are applied."""
        if elapsed_seconds < self._config.min_offline_seconds:
            return 0
        capped = min(elapsed_seconds, self._config.max_offline_seconds)
        return math.floor(capped * self._clock.tps + _TICK_EPSILON)

    def catch_up(self, elapsed_seconds: float) -> int:
        """Replay offline time through the same ``step`` used online. Returns ticks run."""
        ticks = self.offline_ticks(elapsed_seconds)
        if ticks <= 0:
            return 0
        self.run(ticks)
        logger.info(
            "processed offline progress for %.0f seconds (%d ticks)",
            min(elapsed_seconds, self._config.max_offline_seconds), ticks,
        )
        return ticks

    def reset(self) -> None:
        self._economy.reset()
        self._clock.reset()

    # -- Serialization --

    def snapshot(self) -> dict[str, Any]:
        version, internal, gauss_next = self._rng.getstate()
        data: dict[str, Any] = {
            "version": SNAPSHOT_VERSION,
            "tick_number": self._clock.tick_number,
            "tps": self._clock.tps,
            "seed": self._seed,
            # CPython Mersenne Twister state, JSON friendly.
            "rng_state": [version, list(internal), gauss_next],
        }
        data.update(self._economy.snapshot())
        return data

    def restore(self, data: dict[str, Any]) -> None:
        """Load a snapshot. Raises SnapshotError on a version or tick-rate mismatch."""
        if data.get("version") != SNAPSHOT_VERSION:
            raise SnapshotError(
                f"Unsupported snapshot version {data.get('version')!r}, "
                f"expected {SNAPSHOT_VERSION}"
            )
        if data.get("tps") != self._clock.tps:
            raise SnapshotError(
                f"TPS mismatch: save runs at {data.get('tps')}, "
                f"engine at {self._clock.tps}"
            )

        version, internal, gauss_next = data["rng_state"]
        self._rng.setstate((version, tuple(internal), gauss_next))
        self._seed = data["seed"]
        self._clock.reset(data["tick_number"])
        self._economy.restore(data)
