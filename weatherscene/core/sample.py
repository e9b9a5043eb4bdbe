from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

NO_DATA_CODE = 0
NO_DATA_DESCRIPTION = "No weather data available"


@dataclass(frozen=True)
class WeatherSample:
    """One current-weather report for a city, as consumed by the scene pipeline."""
    temperature_c: float
    condition_code: int
    description: str
    city_name: str

    @classmethod
    def unavailable(cls, city_name: str) -> "WeatherSample":
        return cls(
            temperature_c=0.0,
            condition_code=NO_DATA_CODE,
            description=NO_DATA_DESCRIPTION,
            city_name=city_name,
        )

    @property
    def has_data(self) -> bool:
        return self.condition_code != NO_DATA_CODE


@dataclass(frozen=True)
class FetchOutcome:
    sample: WeatherSample
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None
