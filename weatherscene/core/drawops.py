from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple, Union

RGB = Tuple[int, int, int]
Point = Tuple[float, float]  # x, y in frame pixels, origin top-left


@dataclass(frozen=True)
class ImageHandle:
    name: str
    path: Optional[str] = None


@dataclass(frozen=True)
class Stroke:
    color: RGB
    weight: float = 1.0


@dataclass(frozen=True)
class SetBackground:
    color: RGB


@dataclass(frozen=True)
class DrawTexture:
    handle: ImageHandle


@dataclass(frozen=True)
class DrawText:
    content: str
    position: Point
    size: int
    color: RGB


@dataclass(frozen=True)
class DrawEllipse:
    center: Point
    radii: Tuple[float, float]
    color: RGB
    stroke: Optional[Stroke] = None


@dataclass(frozen=True)
class DrawLine:
    start: Point
    end: Point
    weight: float
    color: RGB


DrawOp = Union[SetBackground, DrawTexture, DrawText, DrawEllipse, DrawLine]
