"""Shared test fixtures."""

import queue
import threading

import numpy as np
import pytest

from weatherscene.core.composer import SceneComposer
from weatherscene.core.sample import WeatherSample
from weatherscene.data.cities import CityImageResolver
from weatherscene.owm import CityNotFound, FetchError


class ScriptedConsole:
    """Console double: read_line() blocks until a line is fed; writes are recorded."""

    def __init__(self, lines=()):
        self._lines = queue.Queue()
        self.written = []
        self.reads = 0
        self._lock = threading.Lock()
        for line in lines:
            self.feed(line)

    def feed(self, line):
        self._lines.put(line if line.endswith("\n") else line + "\n")

    def close(self):
        self._lines.put("")

    def read_line(self):
        with self._lock:
            self.reads += 1
        try:
            return self._lines.get(timeout=5)
        except queue.Empty:
            return ""

    def write(self, text=""):
        self.written.append(text)

    def output(self):
        return "\n".join(self.written)


class FakeFetcher:
    """In-memory WeatherFetcher keyed by lowercase city name."""

    def __init__(self, samples=None, errors=None, on_fetch=None):
        self.samples = {k.lower(): v for k, v in (samples or {}).items()}
        self.errors = {k.lower(): v for k, v in (errors or {}).items()}
        self.on_fetch = on_fetch
        self.calls = []

    def fetch(self, city):
        self.calls.append(city)
        if self.on_fetch:
            self.on_fetch(city)
        key = city.strip().lower()
        if key in self.errors:
            raise self.errors[key]
        if key in self.samples:
            return self.samples[key]
        raise CityNotFound(city, "city not found")


@pytest.fixture
def london_sample():
    return WeatherSample(
        temperature_c=20.0,
        condition_code=800,
        description="clear sky",
        city_name="London",
    )


@pytest.fixture
def fake_fetcher(london_sample):
    return FakeFetcher(
        samples={
            "london": london_sample,
            "kyoto": WeatherSample(3.5, 501, "moderate rain", "Kyoto"),
        },
        errors={"offline": FetchError("offline", "request failed")},
    )


@pytest.fixture
def resolver(tmp_path):
    return CityImageResolver(assets_dir=tmp_path)


@pytest.fixture
def composer(resolver):
    return SceneComposer(width=1024, height=512, resolver=resolver, rng=np.random.default_rng(7))


def sample_for(code, temp=20.0, city="London", description="test weather"):
    return WeatherSample(temperature_c=temp, condition_code=code, description=description, city_name=city)
