"""POST /api/generate: image to labelled grid."""

from __future__ import annotations

import io
import logging
import time

from fastapi import APIRouter, HTTPException

from gridgen.engine.containers import DictHashMap
from gridgen.engine.errors import ConfigurationError, ImageLoadError
from gridgen.engine.generator import BackgroundGenerator
from gridgen.models.grid import Location, MapObject
from gridgen.models.requests import GenerateRequest
from gridgen.models.responses import GenerateResponse
from gridgen.utils.rasterizer import build_legend, collect_rows, grid_to_text, label_counts

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate", response_model=GenerateResponse)
async def generate(req: GenerateRequest) -> GenerateResponse:
    start = time.perf_counter()

    # Debug mode exits the process on a bad image, so it is never used here
    try:
        gen: BackgroundGenerator[Location, MapObject] = BackgroundGenerator(
            io.BytesIO(req.image_bytes()), req.width, req.height
        )
        gen.bind_color_table(DictHashMap, req.colors, req.labels)
    except ImageLoadError as e:
        logger.warning("generate: image load failed: %s", e)
        raise HTTPException(status_code=400, detail=str(e)) from e
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    grid: dict[Location, MapObject] = {}
    gen.generate(grid.__setitem__, Location.factory(gen.height), MapObject)

    rows = collect_rows(grid, gen.width, gen.height)
    legend = build_legend(label.lower() for label in req.labels)
    elapsed = (time.perf_counter() - start) * 1000

    logger.info("Generated %dx%d grid in %.0fms", gen.width, gen.height, elapsed)

    return GenerateResponse(
        width=gen.width,
        height=gen.height,
        labels=rows,
        ascii_grid=grid_to_text(rows, legend),
        legend=legend,
        label_counts=label_counts(rows),
        processing_time_ms=round(elapsed, 1),
    )
