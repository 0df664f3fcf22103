"""Calendar: tick/day/season/year counters and seasonal weather."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from tick_idle.config import EconomyConfig
from tick_idle.defs import SEASON_COUNT, SeasonalTable

logger = logging.getLogger(__name__)


class Season(IntEnum):
    SPRING = 0
    SUMMER = 1
    AUTUMN = 2
    WINTER = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Weather(IntEnum):
    WARM = 0
    AVERAGE = 1
    COLD = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass
class TimeState:
    """Serializable calendar counters. ``weather`` is the stored roll."""

    tick: int = 0
    day: int = 0
    season: int = Season.SPRING
    year: int = 0
    weather: int = Weather.AVERAGE


@dataclass
class CalendarChange:
    """What a single ``advance`` crossed."""

    new_day: bool = False
    new_season: bool = False
    new_year: bool = False
    weather_changed: bool = False
    rolled: list[Weather] = field(default_factory=list)


class Calendar:
    """Fixed-threshold time state machine.

    Weather is re-rolled on every season change and always stored, but
    ``weather`` reports AVERAGE until ``year`` reaches the configured
    visibility year. Consumers (production modifiers, UI) read ``weather``.
    """

    def __init__(self, config: EconomyConfig | None = None) -> None:
        self._config = config or EconomyConfig()
        self._state = TimeState()

    @property
    def state(self) -> TimeState:
        return self._state

    @property
    def tick(self) -> int:
        return self._state.tick

    @property
    def day(self) -> int:
        return self._state.day

    @property
    def day_of_season(self) -> int:
        return self._state.day % self._config.days_per_season

    @property
    def season(self) -> Season:
        return Season(self._state.season)

    @property
    def year(self) -> int:
        return self._state.year

    @property
    def weather_visible(self) -> bool:
        return self._state.year >= self._config.weather_visible_year

    @property
    def raw_weather(self) -> Weather:
        """The stored roll, regardless of visibility."""
        return Weather(self._state.weather)

    @property
    def weather(self) -> Weather:
        if not self.weather_visible:
            return Weather.AVERAGE
        return Weather(self._state.weather)

    def seasonal_modifier(self, table: SeasonalTable | None) -> float:
        """Production multiplier for a resource's seasonal table."""
        if table is None:
            return 1.0
        return 1.0 + table[self._state.season][self.weather]

    def roll_weather(self, rng: random.Random) -> Weather:
        roll = rng.random()
        abnormal = self._config.abnormal_weather_chance
        if roll < abnormal * self._config.warm_weather_share:
            return Weather.WARM
        if roll < abnormal:
            return Weather.COLD
        return Weather.AVERAGE

    def advance(self, rng: random.Random) -> CalendarChange:
        """Advance one tick, rolling over day, season and year thresholds."""
        st = self._state
        change = CalendarChange()
        st.tick += 1
        if st.tick % self._config.ticks_per_day != 0:
            return change

        st.day += 1
        change.new_day = True
        if st.day % self._config.days_per_season != 0:
            return change

        before = self.weather
        st.season = (st.season + 1) % SEASON_COUNT
        change.new_season = True
        if st.season == Season.SPRING:
            st.year += 1
            change.new_year = True

        rolled = self.roll_weather(rng)
        st.weather = rolled
        change.rolled.append(rolled)
        change.weather_changed = self.weather != before
        logger.debug(
            "season -> %s (year %d), weather rolled %s",
            self.season.label, st.year, rolled.label,
        )
        return change

    def reset(self) -> None:
        self._state = TimeState()

    # -- Serialization --

    def snapshot(self) -> dict[str, Any]:
        st = self._state
        return {
            "tick_count": st.tick,
            "day": st.day,
            "season": int(st.season),
            "weather": int(st.weather),
            "year": st.year,
        }

    def restore(self, data: dict[str, Any]) -> None:
        self._state = TimeState(
            tick=int(data.get("tick_count", 0)),
            day=int(data.get("day", 0)),
            season=int(data.get("season", Season.SPRING)) % SEASON_COUNT,
            year=int(data.get("year", 0)),
            weather=int(Weather(int(data.get("weather", Weather.AVERAGE)))),
        )
