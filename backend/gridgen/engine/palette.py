"""Palette binder: colour/label pairs into a caller-supplied map."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from gridgen.engine.color import Color, ColorKey, ColorLike
from gridgen.engine.config import GeneratorConfig
from gridgen.engine.containers import HashMapLike, MapFactory
from gridgen.engine.errors import ConfigurationError

logger = logging.getLogger(__name__)


def canonicalize(color: ColorLike) -> ColorKey:
    """The key a colour is stored under in a bound palette."""
    return ColorKey(color)


def bind_color_table(
    map_factory: MapFactory,
    colors: Sequence[ColorLike],
    labels: Sequence[str],
    capacity: int = GeneratorConfig.palette_capacity,
) -> HashMapLike[ColorKey, str]:
    """Build a ColorKey → label map from parallel ``colors`` / ``labels``.

    All validation happens before ``map_factory`` is called, so a bad
    configuration never touches the caller's container.

    Args:
        map_factory: constructor of the map type, called with ``capacity``.
        colors: RGB triples, each channel in [0, 255].
        labels: label for ``colors[i]`` at ``labels[i]``.
        capacity: initial capacity hint for the factory.

    Raises:
        ConfigurationError: length mismatch, empty palette, a bad or duplicate colour.
    """
    if len(colors) != len(labels):
        raise ConfigurationError(
            f"array length mismatch: {len(colors)} colors but {len(labels)} labels"
        )
    if not colors:
        raise ConfigurationError("palette must contain at least one color")
    keys = [ColorKey(Color.coerce(c)) for c in colors]
    seen: set[ColorKey] = set()
    for i, key in enumerate(keys):
        if key in seen:
            raise ConfigurationError(f"duplicate palette color {tuple(key)} at index {i}")
        seen.add(key)

    table = map_factory(capacity)
    for key, label in zip(keys, labels):
        table.put(key, label)

    logger.debug("Bound %d palette colors into %s", len(keys), type(table).__name__)
    return table
