from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

from weatherscene.core.drawops import ImageHandle

# Cities with a reference image: normalized name -> file under assets/cities/
SUPPORTED_CITIES: Dict[str, str] = {
    "kyoto": "kyoto.png",
    "tokyo": "tokyo.png",
    "london": "london.png",
    "madrid": "madrid.png",
    "nashville": "nashville.png",
    "new york": "newyork.png",
}

EMPTY_IMAGE_FILE = "Empty.png"


def canonical_city_key(city: str | None) -> str:
    return " ".join((city or "").split()).lower()


@lru_cache(maxsize=8)
def find_assets_dir() -> Path | None:
    """
    Looks upward from this file for assets/cities/
    """
    here = Path(__file__).resolve()
    for parent in list(here.parents)[:6]:
        p = parent / "assets" / "cities"
        if p.is_dir():
            return p
    return None


class CityImageResolver:
    """Resolves a city name to the reference image drawn behind its scene."""

    def __init__(self, assets_dir: str | Path | None = None):
        self.assets_dir = Path(assets_dir) if assets_dir else find_assets_dir()

    def _path(self, filename: str) -> Optional[str]:
        if not self.assets_dir:
            return None
        p = self.assets_dir / filename
        return str(p) if p.exists() else None

    @property
    def empty(self) -> ImageHandle:
        return ImageHandle(name="empty", path=self._path(EMPTY_IMAGE_FILE))

    def is_supported(self, city: str | None) -> bool:
        return canonical_city_key(city) in SUPPORTED_CITIES

    def resolve(self, city: str | None) -> ImageHandle:
        key = canonical_city_key(city)
        filename = SUPPORTED_CITIES.get(key)
        if filename is None:
            return self.empty
        return ImageHandle(name=key, path=self._path(filename))


def supported_city_names() -> list[str]:
    return [name.title() for name in SUPPORTED_CITIES]
