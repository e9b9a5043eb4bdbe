from __future__ import annotations
from typing import Any, Dict, Optional, Protocol

import requests

from weatherscene.core.sample import FetchOutcome, WeatherSample

CURRENT_WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"


class FetchError(Exception):
    """Weather for a city could not be retrieved."""

    def __init__(self, city: str, reason: str):
        super().__init__(f"{city!r}: {reason}")
        self.city = city
        self.reason = reason


class CityNotFound(FetchError):
    pass


class WeatherFetcher(Protocol):
    def fetch(self, city: str) -> WeatherSample:
        ...


class OpenWeatherClient:
    def __init__(
        self,
        api_key: str,
        user_agent: str = "WeatherScene/0.1",
        timeout: float = 15.0,
        base_url: str = CURRENT_WEATHER_URL,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.ua = user_agent
        self.timeout = timeout
        self.base_url = base_url
        self.session = session or requests.Session()

    def _get(self, city: str) -> Dict[str, Any]:
        try:
            r = self.session.get(
                self.base_url,
                params={"q": city, "appid": self.api_key, "units": "metric"},
                headers={"User-Agent": self.ua, "Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise FetchError(city, f"request failed: {e}") from e
        if r.status_code == 404:
            raise CityNotFound(city, "city not found")
        if not r.ok:
            raise FetchError(city, f"HTTP {r.status_code}")
        try:
            data = r.json()
        except ValueError as e:
            raise FetchError(city, "response is not JSON") from e
        if not isinstance(data, dict):
            raise FetchError(city, "unexpected response body")
        # OWM sometimes reports errors in-band with HTTP 200
        if str(data.get("cod", "200")) == "404":
            raise CityNotFound(city, data.get("message") or "city not found")
        return data

    def fetch(self, city: str) -> WeatherSample:
        city = (city or "").strip()
        if not city:
            raise CityNotFound(city, "empty city name")
        data = self._get(city)
        return parse_current(city, data)


def parse_current(city: str, data: Dict[str, Any]) -> WeatherSample:
    try:
        main = data["main"]
        weather = (data.get("weather") or [])[0]
        temperature = float(main["temp"])
        code = int(weather["id"])
        description = str(weather["description"])
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise FetchError(city, f"malformed payload ({e!r})") from e
    return WeatherSample(
        temperature_c=temperature,
        condition_code=code,
        description=description,
        city_name=str(data.get("name") or city),
    )


def fetch_outcome(fetcher: WeatherFetcher, city: str) -> FetchOutcome:
    """Fetch, substituting the no-data sample on failure."""
    try:
        return FetchOutcome(sample=fetcher.fetch(city))
    except FetchError as e:
        print(f"[weather] fetch failed for {e.city!r}: {e.reason}", flush=True)
        return FetchOutcome(sample=WeatherSample.unavailable(city), error=e)
