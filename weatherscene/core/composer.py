from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List

import numpy as np

from weatherscene.core.drawops import (
    DrawEllipse,
    DrawLine,
    DrawOp,
    DrawText,
    DrawTexture,
    ImageHandle,
    RGB,
    SetBackground,
    Stroke,
)
from weatherscene.core.effects import (
    AtmosphericParticles,
    ClearSky,
    EffectVariant,
    NoEffect,
    Overcast,
    Rain,
    Sleet,
    Snow,
    Squalls,
    Thunderstorm,
    Tornado,
    classify,
)
from weatherscene.core.palette import (
    BLACK,
    BLUE,
    DIM_GRAY,
    GAINSBORO,
    LIGHT_GRAY,
    WHITE,
    YELLOW,
    ColorBucket,
    color_for,
    rgb,
)
from weatherscene.core.sample import WeatherSample
from weatherscene.data.cities import CityImageResolver

LABEL_SIZE = 24
LABEL_X_OFFSET = -300
LABEL_FORECAST_Y = 400
LABEL_TEMPERATURE_Y = 460

SUN_RADIUS = 50.0
SUN_TOP_MARGIN = 50.0
SUN_RAYS = 20
SUN_RAY_LENGTH = 100.0

CLOUD_PUFF_W, CLOUD_PUFF_H = 90.0, 60.0
CLOUD_PUFF_OFFSETS = ((0, 0), (0, -50), (-50, 0), (0, -25), (50, -25))
CLOUD_BAND_BOTTOM_MARGIN = 300.0

DROP_RADIUS = 10.0
DROP_TOP_MARGIN = 200.0
LIGHTNING_BOLTS = 10
LIGHTNING_WEIGHT = 2.0
SNOW_FLAKES = 5
SLEET_RAIN_INTENSITY = 10
SLEET_PELLETS = 100
PARTICLE_COUNT = 2000
PARTICLE_RADIUS = 1.0

SQUALL_LINES = 50
SQUALL_WEIGHT = 2.0
SQUALL_DX = (50.0, 150.0)
SQUALL_DY = (-20.0, 20.0)

FUNNEL_TOP_MARGIN = 100.0
FUNNEL_HEIGHT = 300.0
FUNNEL_WIDTH = 200.0
FUNNEL_STEPS = 50


def format_temperature(temp_c: float) -> str:
    return f"{temp_c:g}"


@dataclass
class Scene:
    variant: EffectVariant
    bucket: ColorBucket
    ops: List[DrawOp] = field(default_factory=list)


@dataclass
class _Pass:
    """Per-composition state shared by every nested effect pass."""
    sample: WeatherSample
    background: RGB
    texture: ImageHandle
    ops: List[DrawOp]


class SceneComposer:
    """
    Turns a WeatherSample into an ordered list of draw-ops.

    Effect passes nest (a thunderstorm draws an overcast pass and a rain pass
    before its lightning), and every pass starts by re-establishing the base
    layer, so a renderer that clears on SetBackground keeps only the last pass's
    base plus whatever was drawn after it.
    """

    def __init__(
        self,
        width: int = 1024,
        height: int = 512,
        resolver: CityImageResolver | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.w, self.h = int(width), int(height)
        self.resolver = resolver or CityImageResolver()
        self.rng = rng if rng is not None else np.random.default_rng()
        self._passes: Dict[type, Callable[[_Pass, EffectVariant], None]] = {
            Thunderstorm: self._thunderstorm,
            Rain: self._rain,
            Snow: self._snow,
            Sleet: self._sleet,
            AtmosphericParticles: self._atmospheric_particles,
            Squalls: self._squalls,
            Tornado: self._tornado,
            ClearSky: self._clear_sky,
            Overcast: self._overcast,
            NoEffect: self._no_effect,
        }

    @property
    def center_x(self) -> float:
        return self.w / 2.0

    def compose_scene(self, sample: WeatherSample, variant: EffectVariant | None = None) -> Scene:
        if variant is None:
            variant = classify(sample.condition_code)
        bucket = color_for(sample.temperature_c)
        ctx = _Pass(
            sample=sample,
            background=bucket.rgb,
            texture=self.resolver.resolve(sample.city_name),
            ops=[],
        )
        self._draw(ctx, variant)
        return Scene(variant=variant, bucket=bucket, ops=ctx.ops)

    def compose(self, sample: WeatherSample) -> List[DrawOp]:
        return self.compose_scene(sample).ops

    # ---------- shared layers ----------
    def _draw(self, ctx: _Pass, variant: EffectVariant) -> None:
        self._passes[type(variant)](ctx, variant)

    def _base(self, ctx: _Pass) -> None:
        ctx.ops.append(SetBackground(ctx.background))
        ctx.ops.append(DrawTexture(ctx.texture))

    def _label(self, ctx: _Pass) -> None:
        x = self.center_x + LABEL_X_OFFSET
        ctx.ops.append(DrawText(
            f"Forecast: {ctx.sample.description}", (x, LABEL_FORECAST_Y), LABEL_SIZE, BLACK,
        ))
        ctx.ops.append(DrawText(
            f"Temperature: {format_temperature(ctx.sample.temperature_c)} °C",
            (x, LABEL_TEMPERATURE_Y), LABEL_SIZE, BLACK,
        ))

    def _uniform(self, low: float, high: float, n: int) -> list[float]:
        return self.rng.uniform(low, high, size=n).tolist()

    def _dots(self, ctx: _Pass, n: int, radius: float, color: RGB, y_low: float = 0.0) -> None:
        xs = self._uniform(0.0, self.w, n)
        ys = self._uniform(y_low, self.h, n)
        for x, y in zip(xs, ys):
            ctx.ops.append(DrawEllipse((x, y), (radius, radius), color))

    # ---------- effect passes ----------
    def _no_effect(self, ctx: _Pass, variant: NoEffect) -> None:
        self._base(ctx)
        self._label(ctx)

    def _clear_sky(self, ctx: _Pass, variant: ClearSky) -> None:
        self._base(ctx)
        self._label(ctx)

        cx, cy = self.center_x, SUN_TOP_MARGIN + SUN_RADIUS
        ctx.ops.append(DrawEllipse((cx, cy), (SUN_RADIUS, SUN_RADIUS), YELLOW))
        for i in range(SUN_RAYS):
            angle = math.radians(i * (360.0 / SUN_RAYS))
            c, s = math.cos(angle), math.sin(angle)
            ctx.ops.append(DrawLine(
                (cx + c * SUN_RADIUS, cy - s * SUN_RADIUS),
                (cx + c * (SUN_RADIUS + SUN_RAY_LENGTH), cy - s * (SUN_RADIUS + SUN_RAY_LENGTH)),
                2.0,
                YELLOW,
            ))

    def _overcast(self, ctx: _Pass, variant: Overcast) -> None:
        self._base(ctx)
        self._label(ctx)

        if variant.rain_layer:
            cloud_color = DIM_GRAY
        else:
            cloud_color = LIGHT_GRAY
            if variant.coverage < 50:
                # few clouds: sun behind light clouds
                self._clear_sky(ctx, ClearSky())

        n = max(0, int(variant.coverage))
        xs = self._uniform(0.0, self.w, n)
        ys = self._uniform(0.0, max(0.0, self.h - CLOUD_BAND_BOTTOM_MARGIN), n)
        radii = (CLOUD_PUFF_W / 2.0, CLOUD_PUFF_H / 2.0)
        for x, y in zip(xs, ys):
            for dx, dy in CLOUD_PUFF_OFFSETS:
                ctx.ops.append(DrawEllipse((x + dx, y + dy), radii, cloud_color))

    def _rain(self, ctx: _Pass, variant: Rain) -> None:
        self._base(ctx)
        self._overcast(ctx, Overcast(coverage=variant.intensity, rain_layer=True))
        self._dots(ctx, max(0, int(variant.intensity)), DROP_RADIUS, BLUE, y_low=DROP_TOP_MARGIN)

    def _thunderstorm(self, ctx: _Pass, variant: Thunderstorm) -> None:
        self._base(ctx)
        self._overcast(ctx, Overcast(coverage=variant.intensity, rain_layer=True))
        self._rain(ctx, Rain(intensity=variant.intensity))

        n = LIGHTNING_BOLTS
        x0, y0 = self._uniform(0.0, self.w, n), self._uniform(0.0, self.h, n)
        x1, y1 = self._uniform(0.0, self.w, n), self._uniform(0.0, self.h, n)
        for i in range(n):
            ctx.ops.append(DrawLine((x0[i], y0[i]), (x1[i], y1[i]), LIGHTNING_WEIGHT, YELLOW))

    def _snow(self, ctx: _Pass, variant: Snow) -> None:
        self._base(ctx)
        self._label(ctx)
        self._dots(ctx, SNOW_FLAKES, DROP_RADIUS, WHITE, y_low=DROP_TOP_MARGIN)

    def _sleet(self, ctx: _Pass, variant: Sleet) -> None:
        self._base(ctx)
        self._rain(ctx, Rain(intensity=SLEET_RAIN_INTENSITY))
        self._dots(ctx, SLEET_PELLETS, DROP_RADIUS, WHITE, y_low=DROP_TOP_MARGIN)

    def _atmospheric_particles(self, ctx: _Pass, variant: AtmosphericParticles) -> None:
        self._base(ctx)
        self._label(ctx)
        self._dots(ctx, PARTICLE_COUNT, PARTICLE_RADIUS, rgb(variant.tint))

    def _squalls(self, ctx: _Pass, variant: Squalls) -> None:
        self._base(ctx)
        self._label(ctx)

        n = SQUALL_LINES
        xs, ys = self._uniform(0.0, self.w, n), self._uniform(0.0, self.h, n)
        dxs, dys = self._uniform(*SQUALL_DX, n), self._uniform(*SQUALL_DY, n)
        for x, y, dx, dy in zip(xs, ys, dxs, dys):
            ctx.ops.append(DrawLine((x, y), (x + dx, y + dy), SQUALL_WEIGHT, GAINSBORO))

    def _tornado(self, ctx: _Pass, variant: Tornado) -> None:
        self._base(ctx)
        self._squalls(ctx, Squalls())

        step_h = FUNNEL_HEIGHT / FUNNEL_STEPS
        step_w = FUNNEL_WIDTH / FUNNEL_STEPS
        outline = Stroke(BLACK, 1.0)
        for i in range(FUNNEL_STEPS):
            y = FUNNEL_TOP_MARGIN + i * step_h
            width = FUNNEL_WIDTH - i * step_w
            ctx.ops.append(DrawEllipse(
                (self.center_x, y), (width / 2.0, step_h / 2.0), DIM_GRAY, stroke=outline,
            ))
