"""GET /api/palettes/*: built-in palette data."""

from __future__ import annotations

from fastapi import APIRouter

from gridgen.engine.palettes import DISPLAY_COLORS, ROAD_MAP_COLORS, ROAD_MAP_LABELS
from gridgen.models.responses import PaletteEntry, PaletteResponse

router = APIRouter(prefix="/palettes")


@router.get("/default", response_model=PaletteResponse)
async def default_palette() -> PaletteResponse:
    return PaletteResponse(
        entries=[
            PaletteEntry(color=color, label=label, display_color=DISPLAY_COLORS.get(label))
            for color, label in zip(ROAD_MAP_COLORS, ROAD_MAP_LABELS)
        ]
    )
