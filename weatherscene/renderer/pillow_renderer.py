from __future__ import annotations
from PIL import Image, ImageDraw, ImageFont
from pathlib import Path
from functools import lru_cache
from typing import Iterable

from weatherscene.core.drawops import (
    DrawEllipse,
    DrawLine,
    DrawOp,
    DrawText,
    DrawTexture,
    ImageHandle,
    SetBackground,
)

# ---------- font helpers ----------
@lru_cache(maxsize=16)
def _load_font(preferred: str | None, size: int):
    candidates: list[Path] = []
    if preferred:
        candidates.append(Path(preferred))

    here = Path(__file__).resolve()
    # Try repo assets
    for parent in list(here.parents)[:6]:
        candidates.append(parent / "assets" / "fonts" / "Inter-Regular.ttf")

    # Common system fonts
    candidates += [
        Path("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"),
        Path("/Library/Fonts/Arial.ttf"),
        Path("/System/Library/Fonts/Supplemental/Arial.ttf"),
    ]

    for p in candidates:
        try:
            if p.exists():
                return ImageFont.truetype(str(p), size=size)
        except OSError:
            continue

    print("[WeatherScene] WARNING: No TTF font found; using ImageFont.load_default()")
    return ImageFont.load_default()

# ---------- texture helpers ----------
@lru_cache(maxsize=16)
def _open_texture(path_str: str, width: int, height: int) -> Image.Image:
    im = Image.open(path_str).convert("RGBA")
    if im.size != (width, height):
        im = im.resize((width, height), Image.LANCZOS)
    return im

# ---------- canvas ----------
class PillowRenderer:
    """Executes draw-ops, in order, onto one RGBA surface."""

    def __init__(self, width: int, height: int, font_path: str | None = None):
        self.width = width
        self.height = height
        self.font_path = font_path
        self.img = Image.new("RGBA", (width, height), (0, 0, 0, 255))
        self.draw = ImageDraw.Draw(self.img, "RGBA")

    def reset(self, color=(0, 0, 0)) -> None:
        """Clear the surface WITHOUT reallocating."""
        self.img.paste((*color, 255), (0, 0, self.width, self.height))
        self.draw = ImageDraw.Draw(self.img, "RGBA")

    def execute(self, ops: Iterable[DrawOp]) -> Image.Image:
        for op in ops:
            if isinstance(op, SetBackground):
                self.reset(op.color)
            elif isinstance(op, DrawTexture):
                self.paste_texture(op.handle)
            elif isinstance(op, DrawText):
                self.text(op)
            elif isinstance(op, DrawEllipse):
                self.ellipse(op)
            elif isinstance(op, DrawLine):
                self.line(op)
            else:
                raise TypeError(f"unsupported draw-op {op!r}")
        return self.img

    def paste_texture(self, handle: ImageHandle) -> None:
        if not handle.path:
            return
        try:
            im = _open_texture(handle.path, self.width, self.height)
        except OSError:
            return
        self.img.alpha_composite(im)
        self.draw = ImageDraw.Draw(self.img, "RGBA")

    def text(self, op: DrawText) -> None:
        # Position is the text's center
        font = _load_font(self.font_path, op.size)
        left, top, right, bottom = self.draw.textbbox((0, 0), op.content, font=font)
        x = op.position[0] - (right - left) / 2.0
        y = op.position[1] - (bottom - top) / 2.0
        self.draw.text((x, y), op.content, font=font, fill=(*op.color, 255))

    def ellipse(self, op: DrawEllipse) -> None:
        (x, y), (rx, ry) = op.center, op.radii
        box = (x - rx, y - ry, x + rx, y + ry)
        outline, width = None, 0
        if op.stroke is not None:
            outline = (*op.stroke.color, 255)
            width = max(1, int(round(op.stroke.weight)))
        self.draw.ellipse(box, fill=(*op.color, 255), outline=outline, width=width)

    def line(self, op: DrawLine) -> None:
        self.draw.line((op.start, op.end), fill=(*op.color, 255), width=max(1, int(round(op.weight))))

    def to_bytes(self) -> bytes:
        return self.img.tobytes()
