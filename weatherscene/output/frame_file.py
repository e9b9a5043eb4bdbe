from __future__ import annotations
import os
import tempfile
from pathlib import Path

from PIL import Image


class FrameFileSink:
    """Rewrites one image file with the latest presented frame."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()
        self.frames_written = 0

    def send(self, image: Image.Image) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fmt = Image.registered_extensions().get(self.path.suffix.lower(), "PNG")
        # Write beside the target then swap, so viewers never see a half-written file.
        fd, tmp = tempfile.mkstemp(prefix=".frame-", suffix=self.path.suffix, dir=self.path.parent)
        try:
            with os.fdopen(fd, "wb") as fh:
                out = image if fmt in ("PNG", "WEBP", "TIFF") else image.convert("RGB")
                out.save(fh, format=fmt)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        self.frames_written += 1
