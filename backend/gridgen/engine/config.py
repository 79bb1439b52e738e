"""Generator configuration: knobs that are not part of the palette itself."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class GeneratorConfig:
    """Controls side effects and container sizing for a generator instance."""

    # Debug mode writes the downsampled image here for inspection
    debug_artifact_path: str = "temp.png"

    # Capacity hint handed to the caller's map factory.
    # 0x00FFFFFF = every representable 24-bit RGB key.
    palette_capacity: int = 0x00FFFFFF
