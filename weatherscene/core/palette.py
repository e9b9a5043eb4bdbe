from __future__ import annotations
import math
from enum import Enum
from functools import lru_cache
from typing import Tuple

from PIL import ImageColor

RGB = Tuple[int, int, int]


@lru_cache(maxsize=64)
def rgb(name: str) -> RGB:
    """CSS color name -> (r, g, b) via Pillow's color table."""
    return ImageColor.getrgb(name)[:3]


class ColorBucket(Enum):
    BLACK = "black"
    DARK_RED = "darkred"
    CRIMSON = "crimson"
    ORANGE_RED = "orangered"
    ORANGE = "orange"
    GOLD = "gold"
    LIGHT_YELLOW = "lightyellow"
    PALE_GREEN = "palegreen"
    POWDER_BLUE = "powderblue"
    ROYAL_BLUE = "royalblue"
    SLATE_BLUE = "slateblue"
    REBECCA_PURPLE = "rebeccapurple"
    INDIGO = "indigo"

    @property
    def rgb(self) -> RGB:
        return rgb(self.value)


# Descending ladder; a bucket applies when temp > threshold.
_LADDER: tuple[tuple[float, ColorBucket], ...] = (
    (46.0, ColorBucket.BLACK),
    (38.0, ColorBucket.DARK_RED),
    (29.0, ColorBucket.CRIMSON),
    (24.0, ColorBucket.ORANGE_RED),
    (16.0, ColorBucket.ORANGE),
    (10.0, ColorBucket.GOLD),
    (4.0, ColorBucket.LIGHT_YELLOW),
    (-1.0, ColorBucket.PALE_GREEN),
    (-9.0, ColorBucket.POWDER_BLUE),
    (-18.0, ColorBucket.ROYAL_BLUE),
    (-23.0, ColorBucket.SLATE_BLUE),
)
_LOWEST_THRESHOLD = -29.0  # inclusive


def color_for(temp_c: float) -> ColorBucket:
    """Map a temperature in Celsius to its background color bucket.

    NaN falls through to the coldest bucket.
    """
    t = float(temp_c)
    if math.isnan(t):
        return ColorBucket.INDIGO
    for threshold, bucket in _LADDER:
        if t > threshold:
            return bucket
    if t >= _LOWEST_THRESHOLD:
        return ColorBucket.REBECCA_PURPLE
    return ColorBucket.INDIGO


# Effect colors
BLUE = rgb("blue")
YELLOW = rgb("yellow")
WHITE = rgb("white")
BLACK = rgb("black")
DIM_GRAY = rgb("dimgray")
LIGHT_GRAY = rgb("lightgray")
GAINSBORO = rgb("gainsboro")
