"""GridGen engine: image to labelled grid by nearest palette colour."""

from gridgen.engine.color import Color, ColorKey, closest_color, color_distance
from gridgen.engine.config import GeneratorConfig
from gridgen.engine.containers import ChainedHashMap, DictHashMap, HashMapLike, KeySet
from gridgen.engine.errors import (
    ConfigurationError,
    GridGenError,
    ImageLoadError,
    ImplementationError,
    StateError,
)
from gridgen.engine.generator import BackgroundGenerator
from gridgen.engine.palette import bind_color_table, canonicalize
from gridgen.engine.reducer import ImageReducer, ReducedImage

__all__ = [
    "Color",
    "ColorKey",
    "closest_color",
    "color_distance",
    "GeneratorConfig",
    "ChainedHashMap",
    "DictHashMap",
    "HashMapLike",
    "KeySet",
    "ConfigurationError",
    "GridGenError",
    "ImageLoadError",
    "ImplementationError",
    "StateError",
    "BackgroundGenerator",
    "bind_color_table",
    "canonicalize",
    "ImageReducer",
    "ReducedImage",
]
