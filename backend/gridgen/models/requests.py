"""API request models."""

from __future__ import annotations

import base64
import binascii

from pydantic import BaseModel, Field, field_validator, model_validator

# Largest grid side accepted over HTTP; 1000x1000 cells keeps the reduced
# buffer around 3MB per request.
_MAX_GRID_SIDE = 1000


class GenerateRequest(BaseModel):
    image: str = Field(..., description="Base64-encoded image bytes (PNG, JPEG, ...)")
    width: int = Field(..., gt=0, le=_MAX_GRID_SIDE, description="Grid width in cells")
    height: int = Field(..., gt=0, le=_MAX_GRID_SIDE, description="Grid height in cells")
    colors: list[tuple[int, int, int]] = Field(
        ..., min_length=1, description="Palette RGB triples, each channel 0-255"
    )
    labels: list[str] = Field(..., min_length=1, description="Label for colors[i] at labels[i]")

    @field_validator("image")
    @classmethod
    def _check_base64(cls, v: str) -> str:
        try:
            base64.b64decode(v, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("image must be base64-encoded") from e
        return v

    @model_validator(mode="after")
    def _check_palette(self) -> GenerateRequest:
        if len(self.colors) != len(self.labels):
            raise ValueError(
                f"array length mismatch: {len(self.colors)} colors but {len(self.labels)} labels"
            )
        return self

    def image_bytes(self) -> bytes:
        return base64.b64decode(self.image)
