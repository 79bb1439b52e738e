"""RGB colours, their canonical map key, and the nearest-colour search."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import NamedTuple, Union

from gridgen.engine.errors import ConfigurationError, ImplementationError

# 8-bit channel bounds
_CHANNEL_MIN = 0
_CHANNEL_MAX = 255


class Color(NamedTuple):
    """An RGB triple. Equality is component-wise."""

    r: int
    g: int
    b: int

    @classmethod
    def from_rgb_int(cls, rgb: int) -> Color:
        """Unpack a 0xRRGGBB integer. Any alpha byte above bit 24 is ignored."""
        return cls((rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF)

    @classmethod
    def coerce(cls, value: ColorLike) -> Color:
        """Validate and convert an RGB-like value.

        Raises:
            ConfigurationError: wrong arity or a channel outside [0, 255].
        """
        if isinstance(value, ColorKey):
            return value.color
        try:
            channels = tuple(int(c) for c in value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"not an RGB triple: {value!r}") from e
        if len(channels) != 3:
            raise ConfigurationError(f"expected 3 channels, got {len(channels)}: {value!r}")
        for c in channels:
            if not _CHANNEL_MIN <= c <= _CHANNEL_MAX:
                raise ConfigurationError(f"channel out of range [0, 255]: {value!r}")
        return cls(*channels)

    def to_rgb_int(self) -> int:
        return (self.r << 16) | (self.g << 8) | self.b


class ColorKey:
    """Canonical map key for a colour.

    Identity is the packed unsigned 24-bit value, so ``hash()`` is never
    negative no matter how the container hashes it.
    """

    __slots__ = ("_value",)

    def __init__(self, color: ColorLike) -> None:
        self._value = Color.coerce(color).to_rgb_int()

    @property
    def value(self) -> int:
        return self._value

    @property
    def color(self) -> Color:
        return Color.from_rgb_int(self._value)

    @property
    def r(self) -> int:
        return (self._value >> 16) & 0xFF

    @property
    def g(self) -> int:
        return (self._value >> 8) & 0xFF

    @property
    def b(self) -> int:
        return self._value & 0xFF

    def __iter__(self):
        return iter((self.r, self.g, self.b))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ColorKey):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"ColorKey(#{self._value:06x})"


ColorLike = Union[Color, ColorKey, Sequence[int]]


def color_distance(a: ColorLike, b: ColorLike) -> int:
    """Squared Euclidean distance in RGB space.

    The square root is skipped; only relative ordering matters.
    """
    ar, ag, ab = a
    br, bg, bb = b
    dr = int(ar) - int(br)
    dg = int(ag) - int(bg)
    db = int(ab) - int(bb)
    return dr * dr + dg * dg + db * db


def closest_color(target: ColorLike, candidates: Iterable[ColorKey]) -> ColorKey:
    """Argmin of ``color_distance`` over ``candidates``.

    Ties go to the first candidate in iteration order.

    Raises:
        ImplementationError: ``candidates`` yielded nothing.
    """
    best: ColorKey | None = None
    best_dist = 0
    for key in candidates:
        dist = color_distance(target, key)
        if best is None or dist < best_dist:
            best = key
            best_dist = dist
    if best is None:
        raise ImplementationError("palette key set is empty")
    return best
