"""Image reducer: decode once, area-average down to the grid resolution.

Each output pixel is the mean of the source pixels it covers (Pillow's BOX
filter), not a point sample, so thin features blend into the cell colour
instead of aliasing when the palette match runs.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import IO, Union

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from gridgen.engine.color import Color, ColorLike
from gridgen.engine.config import GeneratorConfig
from gridgen.engine.errors import ConfigurationError, ImageLoadError

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, IO[bytes], Image.Image]

# Exit status used when a debug-mode load fails
_DEBUG_EXIT_STATUS = -1


class ReducedImage:
    """Read-only W×H colour buffer, one colour per grid cell.

    Stored row-major as an (H, W, 3) uint8 array.
    """

    def __init__(self, pixels: NDArray[np.uint8]) -> None:
        arr = np.array(pixels, dtype=np.uint8)
        if arr.ndim != 3 or arr.shape[2] != 3:
            if arr.size == 0:
                arr = arr.reshape(0, 0, 3)
            else:
                raise ConfigurationError(f"expected an (H, W, 3) buffer, got shape {arr.shape}")
        arr.flags.writeable = False
        self._pixels = arr

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[ColorLike]]) -> ReducedImage:
        """Build from ``rows[y][x]`` colour triples."""
        data = [[tuple(Color.coerce(c)) for c in row] for row in rows]
        if not data:
            return cls(np.zeros((0, 0, 3), dtype=np.uint8))
        width = len(data[0])
        if any(len(row) != width for row in data):
            raise ConfigurationError("rows must all have the same length")
        return cls(np.asarray(data, dtype=np.uint8).reshape(len(data), width, 3))

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def pixels(self) -> NDArray[np.uint8]:
        return self._pixels

    def color_at(self, x: int, y: int) -> Color:
        """Colour of grid cell (x, y); 0 <= x < width, 0 <= y < height."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}×{self.height} grid")
        r, g, b = self._pixels[y, x]
        return Color(int(r), int(g), int(b))

    def to_image(self) -> Image.Image:
        return Image.fromarray(np.ascontiguousarray(self._pixels))


def area_average(img: Image.Image, width: int, height: int) -> NDArray[np.uint8]:
    """Downsample ``img`` to exactly width×height by box (area) averaging."""
    rgb = img.convert("RGB")
    scaled = rgb.resize((width, height), resample=Image.Resampling.BOX)
    return np.asarray(scaled, dtype=np.uint8)


def _validate_size(width: int, height: int) -> None:
    for name, v in (("width", width), ("height", height)):
        if isinstance(v, bool) or not isinstance(v, int) or v <= 0:
            raise ConfigurationError(f"grid {name} must be a positive integer, got {v!r}")


def _open(source: ImageSource) -> Image.Image:
    if isinstance(source, Image.Image):
        source.load()
        return source
    img = Image.open(source)
    # Image.open is lazy; force the decode so truncated files fail here
    img.load()
    return img


class ImageReducer:
    """Loads an image and reduces it to a ``ReducedImage`` of the grid size.

    In debug mode a load failure terminates the process, and the reduced
    image is written to ``config.debug_artifact_path``.
    """

    def __init__(
        self,
        source: ImageSource,
        width: int,
        height: int,
        debug: bool = False,
        config: GeneratorConfig | None = None,
    ) -> None:
        _validate_size(width, height)
        self.config = config or GeneratorConfig()
        self.debug = debug

        try:
            img = _open(source)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            if debug:
                logger.error("Could not load map image %r: %s", source, e)
                sys.exit(_DEBUG_EXIT_STATUS)
            raise ImageLoadError(f"could not load image {source!r}: {e}") from e

        logger.debug("Reducing %dx%d image to %dx%d grid", img.width, img.height, width, height)
        self.reduced = ReducedImage(area_average(img, width, height))

        if debug:
            self._write_debug_artifact()

    def color_at(self, x: int, y: int) -> Color:
        return self.reduced.color_at(x, y)

    def _write_debug_artifact(self) -> None:
        path = self.config.debug_artifact_path
        try:
            self.reduced.to_image().save(path, format="PNG")
            logger.debug("Wrote reduced image to %s", path)
        except (OSError, ValueError) as e:
            logger.warning("Could not write reduced image to %s: %s", path, e)
