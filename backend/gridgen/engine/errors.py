"""Error taxonomy for the grid generator.

Every error is raised synchronously to the immediate caller; nothing retries.
"""

from __future__ import annotations


class GridGenError(Exception):
    """Base class for all generator errors."""


class ConfigurationError(GridGenError, ValueError):
    """Palette or grid configuration is invalid (e.g. array length mismatch)."""


class ImageLoadError(GridGenError, OSError):
    """The source image is missing or cannot be decoded."""


class StateError(GridGenError, RuntimeError):
    """An operation was requested before the generator was ready for it."""


class ImplementationError(GridGenError, RuntimeError):
    """A caller-supplied container broke its contract."""
