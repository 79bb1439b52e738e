"""BackgroundGenerator: classify every grid cell by nearest palette colour.

Usage:
    grid: dict[Location, MapObject] = {}
    gen = BackgroundGenerator("france-road-map.jpg", 50, 50)
    gen.bind_color_table(
        DictHashMap,
        [(172, 220, 242), (193, 161, 156), (199, 207, 190), (149, 181, 145)],
        ["water", "road", "grass", "mountain"],
    )
    gen.generate(grid.__setitem__, Location.factory(50), MapObject)

The output container, its key type and its value type all belong to the
caller: the generator only sees a sink and two constructors. Colours are
chosen per image (what a road looks like in the source), labels decide what
gets drawn.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

from gridgen.engine.color import ColorKey, ColorLike, closest_color
from gridgen.engine.config import GeneratorConfig
from gridgen.engine.containers import HashMapLike, MapFactory
from gridgen.engine.errors import ImplementationError, StateError
from gridgen.engine.palette import bind_color_table
from gridgen.engine.reducer import ImageReducer, ImageSource, ReducedImage

logger = logging.getLogger(__name__)

P = TypeVar("P")  # position type, e.g. Location
V = TypeVar("V")  # value type, e.g. MapObject


class BackgroundGenerator(Generic[P, V]):
    """Reduces an image once, then emits one classified value per cell."""

    def __init__(
        self,
        source: ImageSource,
        width: int,
        height: int,
        debug: bool = False,
        config: GeneratorConfig | None = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        reducer = ImageReducer(source, width, height, debug=debug, config=self.config)
        self._reduced = reducer.reduced
        self._palette: HashMapLike[ColorKey, str] | None = None

    @classmethod
    def from_reduced(
        cls,
        reduced: ReducedImage,
        config: GeneratorConfig | None = None,
    ) -> BackgroundGenerator[P, V]:
        """Wrap an already reduced image; no decoding happens."""
        gen = cls.__new__(cls)
        gen.config = config or GeneratorConfig()
        gen._reduced = reduced
        gen._palette = None
        return gen

    @property
    def width(self) -> int:
        return self._reduced.width

    @property
    def height(self) -> int:
        return self._reduced.height

    @property
    def reduced(self) -> ReducedImage:
        return self._reduced

    @property
    def is_bound(self) -> bool:
        return self._palette is not None

    @property
    def palette(self) -> HashMapLike[ColorKey, str] | None:
        return self._palette

    def bind_color_table(
        self,
        map_factory: MapFactory,
        colors: Sequence[ColorLike],
        labels: Sequence[str],
    ) -> None:
        """Bind colour → label pairs into a map built by ``map_factory``.

        Colours are stored as ``ColorKey`` so hash codes are never negative.
        """
        self._palette = bind_color_table(
            map_factory, colors, labels, capacity=self.config.palette_capacity
        )

    def closest_label(self, color: ColorLike) -> str:
        """Label of the palette colour nearest to ``color``.

        Ties resolve to the first key in the palette's key-set order.
        """
        palette = self._require_palette()
        return self._lookup(palette, color)

    def generate(
        self,
        sink: Callable[[P, V], object],
        location_gen: Callable[[int, int], P],
        background_gen: Callable[[str], V],
    ) -> None:
        """Push ``(location_gen(x, y), background_gen(label))`` for every cell.

        Args:
            sink: receives each pair, e.g. ``grid.__setitem__``.
            location_gen: builds the position object from x and y.
            background_gen: builds the value object from a palette label.

        Raises:
            StateError: no colour table has been bound yet.
        """
        palette = self._require_palette()
        start = time.perf_counter()

        for x in range(self.width):
            for y in range(self.height):
                label = self._lookup(palette, self._reduced.color_at(x, y))
                sink(location_gen(x, y), background_gen(label))

        logger.debug(
            "Generated %dx%d grid in %.1fms",
            self.width,
            self.height,
            (time.perf_counter() - start) * 1000,
        )

    def _require_palette(self) -> HashMapLike[ColorKey, str]:
        if self._palette is None:
            raise StateError("must bind a color table before generating")
        return self._palette

    @staticmethod
    def _lookup(palette: HashMapLike[ColorKey, str], color: ColorLike) -> str:
        best = closest_color(color, palette.key_set())
        label = palette.get(best)
        if label is None:
            raise ImplementationError(f"palette map has no label for its own key {best!r}")
        return label
