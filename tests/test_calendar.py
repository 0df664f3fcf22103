"""Tests for the Calendar time state machine and seasonal weather."""
from __future__ import annotations

import random

import pytest
from tick_idle import Calendar, EconomyConfig, Season, Weather


class _FixedRandom(random.Random):
    """Returns queued values from random(), repeating the last one."""

    def __init__(self, *values: float) -> None:
        super().__init__(0)
        self._values = list(values)

    def random(self) -> float:
        if len(self._values) > 1:
            return self._values.pop(0)
        return self._values[0]


def _calendar(**overrides) -> Calendar:
    config = {"ticks_per_day": 2, "days_per_season": 3}
    config.update(overrides)
    return Calendar(EconomyConfig(**config))


def _advance(cal: Calendar, ticks: int, rng: random.Random):
    return [cal.advance(rng) for _ in range(ticks)]


class TestThresholds:
    def test_day_rolls_every_ticks_per_day(self) -> None:
        cal = _calendar()
        rng = _FixedRandom(0.9)
        first, second = _advance(cal, 2, rng)
        assert not first.new_day
        assert second.new_day
        assert cal.tick == 2
        assert cal.day == 1

    def test_season_rolls_after_days_per_season(self) -> None:
        cal = _calendar()
        changes = _advance(cal, 6, _FixedRandom(0.9))
        assert [c.new_season for c in changes] == [False] * 5 + [True]
        assert cal.season is Season.SUMMER
        assert cal.day_of_season == 0
        assert cal.year == 0

    def test_year_increments_when_winter_ends(self) -> None:
        cal = _calendar()
        changes = _advance(cal, 24, _FixedRandom(0.9))
        assert sum(c.new_year for c in changes) == 1
        assert changes[-1].new_year
        assert cal.year == 1
        assert cal.season is Season.SPRING

    def test_day_keeps_counting_across_seasons(self) -> None:
        cal = _calendar()
        _advance(cal, 14, _FixedRandom(0.9))
        assert cal.day == 7
        assert cal.day_of_season == 1


class TestWeather:
    @pytest.mark.parametrize(
        "roll, expected",
        [
            (0.0, Weather.WARM),
            (0.174, Weather.WARM),
            (0.2, Weather.COLD),
            (0.349, Weather.COLD),
            (0.35, Weather.AVERAGE),
            (0.99, Weather.AVERAGE),
        ],
    )
    def test_roll_weather_buckets(self, roll: float, expected: Weather) -> None:
        assert _calendar().roll_weather(_FixedRandom(roll)) is expected

    def test_rolled_once_per_season_change(self) -> None:
        cal = _calendar()
        changes = _advance(cal, 24, _FixedRandom(0.9))
        rolls = [c.rolled for c in changes if c.rolled]
        assert len(rolls) == 4
        assert all(len(r) == 1 for r in rolls)

    def test_roll_stored_but_hidden_before_visible_year(self) -> None:
        cal = _calendar(weather_visible_year=2)
        changes = _advance(cal, 6, _FixedRandom(0.0))
        assert cal.raw_weather is Weather.WARM
        assert cal.weather is Weather.AVERAGE
        assert not changes[-1].weather_changed

    def test_weather_exposed_from_visible_year(self) -> None:
        cal = _calendar(weather_visible_year=1)
        changes = _advance(cal, 24, _FixedRandom(0.0))
        assert cal.weather_visible
        assert cal.weather is Weather.WARM
        assert changes[-1].weather_changed

    def test_labels(self) -> None:
        assert Season.AUTUMN.label == "Autumn"
        assert Weather.COLD.label == "Cold"


class TestSeasonalModifier:
    _TABLE = (
        (0.65, 0.5, 0.35),
        (0.15, 0.0, -0.15),
        (0.15, 0.0, -0.15),
        (-0.6, -0.75, -0.9),
    )

    def test_none_table(self) -> None:
        assert _calendar().seasonal_modifier(None) == 1.0

    def test_spring_average(self) -> None:
        assert _calendar().seasonal_modifier(self._TABLE) == 1.5

    def test_uses_visible_weather(self) -> None:
        cal = _calendar(weather_visible_year=0)
        cal.restore({"season": 3, "weather": int(Weather.COLD)})
        assert cal.seasonal_modifier(self._TABLE) == pytest.approx(0.1)


class TestSnapshot:
    def test_snapshot_keys(self) -> None:
        cal = _calendar()
        _advance(cal, 7, _FixedRandom(0.0))
        assert cal.snapshot() == {
            "tick_count": 7,
            "day": 3,
            "season": 1,
            "weather": 0,
            "year": 0,
        }

    def test_restore_round_trip(self) -> None:
        cal = _calendar()
        _advance(cal, 30, _FixedRandom(0.3))
        other = _calendar()
        other.restore(cal.snapshot())
        assert other.state == cal.state

    def test_restore_defaults(self) -> None:
        cal = _calendar()
        cal.restore({})
        assert cal.tick == 0
        assert cal.season is Season.SPRING
        assert cal.raw_weather is Weather.AVERAGE

    def test_reset(self) -> None:
        cal = _calendar()
        _advance(cal, 10, _FixedRandom(0.0))
        cal.reset()
        assert cal.tick == 0
        assert cal.day == 0
