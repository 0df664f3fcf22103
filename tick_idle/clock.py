"""Clock and TickContext for the fixed-timestep economy loop."""

import random

from tick_idle.types import TickContext

# Float slack so frame times that sum to a whole tick fire it on time.
_CARRY_EPSILON = 1e-9


class Clock:
    """Counts ticks and converts real elapsed time into due ticks."""

    def __init__(self, tps: int) -> None:
        if tps <= 0:
            raise ValueError(f"tps must be positive, got {tps}")
        self._tps = tps
        self._dt = 1.0 / tps
        self._ticks = 0
        self._carry = 0.0

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def tick_number(self) -> int:
        return self._ticks

    @property
    def pending(self) -> float:
        """Real seconds accumulated toward the next tick."""
        return self._carry

    def advance(self) -> int:
        self._ticks += 1
        return self._ticks

    def accumulate(self, real_dt: float) -> int:
        """Add real time and return how many whole ticks are now due.

        The due ticks are consumed from the accumulator; the remainder
        carries over to the next call.
        """
        if real_dt < 0:
            raise ValueError(f"real_dt must be >= 0, got {real_dt}")
        self._carry += real_dt
        due = 0
        while self._carry + _CARRY_EPSILON >= self._dt:
            self._carry = max(0.0, self._carry - self._dt)
            due += 1
        return due

    def context(self, rng: random.Random) -> TickContext:
        """Frozen view of the current tick handed to every system."""
        return TickContext(
            tick_number=self._ticks,
            dt=self._dt,
            elapsed=self._ticks / self._tps,
            random=rng,
        )

    def reset(self, tick_number: int = 0) -> None:
        self._ticks = tick_number
        self._carry = 0.0
