"""Economy configuration dataclass."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class EconomyConfig:
    """Immutable configuration for the economy loop, calendar and saves.

    Attributes:
        tps: Simulation ticks per real second.
        ticks_per_day: Ticks in one in-game day.
        days_per_season: Days in one season. Four seasons make a year.
        weather_visible_year: First year in which rolled weather is exposed.
            Earlier years report AVERAGE weather regardless of the roll.
        abnormal_weather_chance: Probability that a season roll is not AVERAGE.
        warm_weather_share: Fraction of abnormal rolls that come out WARM
            (the rest are COLD).
        max_offline_seconds: Cap on replayed offline time.
        min_offline_seconds: Offline gaps shorter than this are ignored.
        save_interval: Real seconds between autosaves.
        save_key: Storage slot name for the save blob.
    """

    tps: int = 5
    ticks_per_day: int = 10
    days_per_season: int = 100
    weather_visible_year: int = 4
    abnormal_weather_chance: float = 0.35
    warm_weather_share: float = 0.5
    max_offline_seconds: float = 86400.0
    min_offline_seconds: float = 1.0
    save_interval: float = 60.0
    save_key: str = "SaveData"

    def __post_init__(self) -> None:
        if self.tps <= 0:
            raise ValueError(f"tps must be > 0, got {self.tps}")
        if self.ticks_per_day <= 0:
            raise ValueError(f"ticks_per_day must be > 0, got {self.ticks_per_day}")
        if self.days_per_season <= 0:
            raise ValueError(
                f"days_per_season must be > 0, got {self.days_per_season}"
            )
        if self.weather_visible_year < 0:
            raise ValueError(
                f"weather_visible_year must be >= 0, got {self.weather_visible_year}"
            )
        if not 0.0 <= self.abnormal_weather_chance <= 1.0:
            raise ValueError(
                "abnormal_weather_chance must be in [0, 1], "
                f"got {self.abnormal_weather_chance}"
            )
        if not 0.0 <= self.warm_weather_share <= 1.0:
            raise ValueError(
                f"warm_weather_share must be in [0, 1], got {self.warm_weather_share}"
            )
        if self.max_offline_seconds < 0:
            raise ValueError(
                f"max_offline_seconds must be >= 0, got {self.max_offline_seconds}"
            )
        if self.min_offline_seconds < 0:
            raise ValueError(
                f"min_offline_seconds must be >= 0, got {self.min_offline_seconds}"
            )
        if self.save_interval <= 0:
            raise ValueError(f"save_interval must be > 0, got {self.save_interval}")
        if not self.save_key:
            raise ValueError("save_key must be non-empty")

    @property
    def dt(self) -> float:
        return 1.0 / self.tps

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EconomyConfig:
        """Build a config from a mapping. Raises ValueError on unknown keys."""
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**dict(data))
