"""Rendering utilities: labelled grid to rows, text and a PNG of coloured cells.

All functions work on a completed grid; none of them touch the generator.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence

from PIL import Image, ImageDraw

from gridgen.models.grid import Location, MapObject

# Characters for labels whose first letter is already taken
_CHAR_PALETTE = "#@%&*+=-~:;!?/\\|<>^vXOQWMBZS0123456789"

# Pixel size of one grid cell in the rendered image
_DEFAULT_CELL_SIZE = 20

# Background for cells whose label has no display colour
_BLANK = (255, 255, 255)


def collect_rows(
    grid: Mapping[Location, MapObject],
    width: int,
    height: int,
) -> list[list[str]]:
    """Row-major label names, ``rows[y][x]``."""
    return [
        [grid[Location(x, y, height)].name for x in range(width)]
        for y in range(height)
    ]


def build_legend(labels: Iterable[str]) -> dict[str, str]:
    """One distinct display character per label.

    Labels get their upper-cased first letter when it is free; the rest take
    the next unused character from ``_CHAR_PALETTE``, wrapping around when
    there are more labels than characters.
    """
    legend: dict[str, str] = {}
    used: set[str] = set()
    pending: list[str] = []
    for label in labels:
        if label in legend or label in pending:
            continue
        ch = label[:1].upper()
        if ch and ch not in used:
            legend[label] = ch
            used.add(ch)
        else:
            pending.append(label)
    spare = [c for c in _CHAR_PALETTE if c not in used] or list(_CHAR_PALETTE)
    for i, label in enumerate(pending):
        legend[label] = spare[i % len(spare)]
    return legend


def grid_to_text(rows: Sequence[Sequence[str]], legend: Mapping[str, str] | None = None) -> str:
    """Convert label rows to a text grid, one character per cell."""
    if legend is None:
        legend = build_legend(label for row in rows for label in row)
    return "\n".join(" ".join(legend[label] for label in row) for row in rows)


def label_counts(rows: Sequence[Sequence[str]]) -> dict[str, int]:
    """Number of cells per label."""
    return dict(Counter(label for row in rows for label in row))


def render_grid(
    grid: Mapping[Location, MapObject],
    width: int,
    height: int,
    cell_width: int = _DEFAULT_CELL_SIZE,
    cell_height: int = _DEFAULT_CELL_SIZE,
) -> Image.Image:
    """Paint every cell as a ``cell_width``×``cell_height`` rectangle."""
    img = Image.new("RGB", (width * cell_width, height * cell_height), _BLANK)
    draw = ImageDraw.Draw(img)
    for x in range(width):
        for y in range(height):
            grid[Location(x, y, height)].draw_me(
                draw, x * cell_width, y * cell_height, cell_width, cell_height
            )
    return img
