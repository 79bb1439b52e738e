"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    env: str = "development"


class PaletteEntry(BaseModel):
    color: tuple[int, int, int]
    label: str
    display_color: tuple[int, int, int] | None = None


class PaletteResponse(BaseModel):
    entries: list[PaletteEntry] = Field(default_factory=list)


class GenerateResponse(BaseModel):
    width: int
    height: int
    labels: list[list[str]] = Field(default_factory=list, description="Row-major: labels[y][x]")
    ascii_grid: str = ""
    legend: dict[str, str] = Field(default_factory=dict)
    label_counts: dict[str, int] = Field(default_factory=dict)
    processing_time_ms: float = 0.0
