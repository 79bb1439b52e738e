"""Shared test fixtures."""

from __future__ import annotations

import base64
import io
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from gridgen.engine.containers import DictHashMap
from gridgen.engine.generator import BackgroundGenerator
from gridgen.engine.reducer import ReducedImage


BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
BW_COLORS = [BLACK, WHITE]
BW_LABELS = ["black", "white"]

# Road-map palette from the sample france-road-map image
WATER = (172, 220, 242)
ROAD = (193, 161, 156)
GRASS = (199, 207, 190)
MOUNTAIN = (149, 181, 145)


def solid_image(color: tuple[int, int, int], width: int, height: int) -> Image.Image:
    return Image.new("RGB", (width, height), color)


def quadrant_image(size: int = 40) -> Image.Image:
    """Water top-left, road top-right, grass bottom-left, mountain bottom-right."""
    half = size // 2
    arr = np.zeros((size, size, 3), dtype=np.uint8)
    arr[:half, :half] = WATER
    arr[:half, half:] = ROAD
    arr[half:, :half] = GRASS
    arr[half:, half:] = MOUNTAIN
    return Image.fromarray(arr)


def png_bytes(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def png_b64(img: Image.Image) -> str:
    return base64.b64encode(png_bytes(img)).decode("ascii")


def bound_generator(rows, colors=BW_COLORS, labels=BW_LABELS, map_factory=DictHashMap):
    gen = BackgroundGenerator.from_reduced(ReducedImage.from_rows(rows))
    gen.bind_color_table(map_factory, colors, labels)
    return gen


@pytest.fixture
def quadrant_png(tmp_path: Path) -> Path:
    path = tmp_path / "quadrants.png"
    quadrant_image().save(path)
    return path


@pytest.fixture
def garbage_file(tmp_path: Path) -> Path:
    path = tmp_path / "not-an-image.png"
    path.write_bytes(b"this is not a png")
    return path
