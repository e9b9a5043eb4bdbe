from __future__ import annotations
import numbers
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple, Union


@dataclass(frozen=True)
class Thunderstorm:
    intensity: int


@dataclass(frozen=True)
class Rain:
    intensity: int


@dataclass(frozen=True)
class Snow:
    pass


@dataclass(frozen=True)
class Sleet:
    pass


@dataclass(frozen=True)
class AtmosphericParticles:
    tint: str  # CSS color name


@dataclass(frozen=True)
class Squalls:
    pass


@dataclass(frozen=True)
class Tornado:
    pass


@dataclass(frozen=True)
class ClearSky:
    pass


@dataclass(frozen=True)
class Overcast:
    coverage: int
    rain_layer: bool = False


@dataclass(frozen=True)
class NoEffect:
    """Unknown or missing condition code: base frame only."""


EffectVariant = Union[
    Thunderstorm, Rain, Snow, Sleet, AtmosphericParticles,
    Squalls, Tornado, ClearSky, Overcast, NoEffect,
]

# Particle tints
LIGHT_GRAY = "lightgray"
DARK_GRAY = "darkgray"
TAN = "burlywood"
SANDY = "sandybrown"
GRAY = "gray"


def _codes(*items: Union[int, range]) -> Tuple[int, ...]:
    out: list[int] = []
    for item in items:
        if isinstance(item, range):
            out.extend(item)
        else:
            out.append(item)
    return tuple(out)


# OpenWeatherMap condition groups. Order matters: a code listed twice keeps its first row.
CONDITION_ROWS: Tuple[Tuple[Tuple[int, ...], EffectVariant], ...] = (
    # thunderstorm
    (_codes(200, 201, 210, 230, 231, 232), Thunderstorm(intensity=50)),
    (_codes(202, 211, 212, 221), Thunderstorm(intensity=100)),
    # drizzle
    (_codes(300, 301, 302, range(310, 315), 321), Rain(intensity=10)),
    # rain
    (_codes(500, 501, 511, 520, 521, 531), Rain(intensity=50)),
    (_codes(502, 503, 504, 522), Rain(intensity=100)),
    # snow
    (_codes(600, 601, 612, 615, 616, range(620, 623)), Snow()),
    (_codes(602, 622), Snow()),
    (_codes(611, 612, 613), Sleet()),
    # atmosphere
    (_codes(701, 721), AtmosphericParticles(tint=LIGHT_GRAY)),
    (_codes(711), AtmosphericParticles(tint=DARK_GRAY)),
    (_codes(731, 761), AtmosphericParticles(tint=TAN)),
    (_codes(751), AtmosphericParticles(tint=SANDY)),
    (_codes(762), AtmosphericParticles(tint=GRAY)),
    (_codes(771), Squalls()),
    (_codes(781), Tornado()),
    # clear / clouds
    (_codes(800), ClearSky()),
    (_codes(801), Overcast(coverage=10)),
    (_codes(802), Overcast(coverage=50)),
    (_codes(803), Overcast(coverage=75)),
    (_codes(804), Overcast(coverage=100)),
)

NO_EFFECT = NoEffect()


def build_table(rows: Iterable[Tuple[Tuple[int, ...], EffectVariant]]) -> Dict[int, EffectVariant]:
    table: Dict[int, EffectVariant] = {}
    for codes, variant in rows:
        for code in codes:
            table.setdefault(code, variant)
    return table


_TABLE = build_table(CONDITION_ROWS)


def known_codes() -> Tuple[int, ...]:
    return tuple(sorted(_TABLE))


def classify(condition_code: int) -> EffectVariant:
    """Total mapping from a weather condition code to its effect variant."""
    if isinstance(condition_code, bool) or not isinstance(condition_code, numbers.Integral):
        return NO_EFFECT
    return _TABLE.get(int(condition_code), NO_EFFECT)
