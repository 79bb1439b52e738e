"""Grid cell and map object types handed to the generator as constructors."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from typing import Callable

from PIL import ImageDraw

from gridgen.engine.palettes import DISPLAY_COLORS


@dataclass(frozen=True)
class Location:
    """A grid cell. Equality is on (x, y); ``height`` only feeds the hash."""

    x: int
    y: int
    height: int = field(default=0, compare=False, repr=False)

    def __hash__(self) -> int:
        # Unique per cell for 0 <= y < height
        return self.x * self.height + self.y

    @classmethod
    def factory(cls, height: int) -> Callable[[int, int], Location]:
        """``(x, y) -> Location`` bound to a grid height."""
        return partial(cls, height=height)


class MapObject:
    """A classified cell, built from a palette label."""

    def __init__(self, name: str) -> None:
        self.name = name.lower()

    @property
    def fill(self) -> tuple[int, int, int] | None:
        return DISPLAY_COLORS.get(self.name)

    def draw_me(self, draw: ImageDraw.ImageDraw, x: int, y: int, width: int, height: int) -> None:
        """Paint this cell; labels without a display colour are left blank."""
        if self.fill is None:
            return
        draw.rectangle([x, y, x + width - 1, y + height - 1], fill=self.fill)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MapObject):
            return self.name == other.name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"MapObject({self.name!r})"

    def __str__(self) -> str:
        return self.name
