from __future__ import annotations
from typing import Iterable
from PIL import Image

from weatherscene.core.drawops import DrawOp
from weatherscene.renderer.pillow_renderer import PillowRenderer


class Compositor:
    def __init__(self, w: int, h: int, font_path: str | None = None):
        self.w, self.h = w, h
        self.front = Image.new("RGBA", (w, h), (0, 0, 0, 255))
        self.renderer = PillowRenderer(w, h, font_path=font_path)

    def compose(self, ops: Iterable[DrawOp]) -> None:
        """Rebuild the back buffer from one scene's draw-ops."""
        self.renderer.reset()
        self.renderer.execute(ops)

    def present(self) -> Image.Image:
        self.front = self.renderer.img.copy()
        return self.front
