"""Tests for EconomyConfig defaults, validation and from_dict."""
from __future__ import annotations

import dataclasses

import pytest
from tick_idle import EconomyConfig


class TestDefaults:
    def test_defaults(self) -> None:
        cfg = EconomyConfig()
        assert cfg.tps == 5
        assert cfg.ticks_per_day == 10
        assert cfg.days_per_season == 100
        assert cfg.weather_visible_year == 4
        assert cfg.abnormal_weather_chance == 0.35
        assert cfg.warm_weather_share == 0.5
        assert cfg.max_offline_seconds == 86400.0
        assert cfg.min_offline_seconds == 1.0
        assert cfg.save_interval == 60.0
        assert cfg.save_key == "SaveData"

    def test_dt(self) -> None:
        assert abs(EconomyConfig(tps=5).dt - 0.2) < 1e-9

    def test_frozen(self) -> None:
        cfg = EconomyConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.tps = 10  # type: ignore[misc]


class TestValidation:
    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"tps": 0}, "tps must be > 0"),
            ({"ticks_per_day": 0}, "ticks_per_day must be > 0"),
            ({"days_per_season": -1}, "days_per_season must be > 0"),
            ({"weather_visible_year": -1}, "weather_visible_year must be >= 0"),
            ({"abnormal_weather_chance": 1.5}, "abnormal_weather_chance"),
            ({"warm_weather_share": -0.1}, "warm_weather_share"),
            ({"max_offline_seconds": -1}, "max_offline_seconds"),
            ({"min_offline_seconds": -1}, "min_offline_seconds"),
            ({"save_interval": 0}, "save_interval must be > 0"),
            ({"save_key": ""}, "save_key must be non-empty"),
        ],
    )
    def test_invalid_values(self, kwargs: dict, message: str) -> None:
        with pytest.raises(ValueError, match=message):
            EconomyConfig(**kwargs)


class TestFromDict:
    def test_overrides(self) -> None:
        cfg = EconomyConfig.from_dict({"tps": 10, "days_per_season": 3})
        assert cfg.tps == 10
        assert cfg.days_per_season == 3
        assert cfg.ticks_per_day == 10

    def test_unknown_keys_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown config keys: bogus"):
            EconomyConfig.from_dict({"bogus": 1})
