from __future__ import annotations

from pathlib import Path
from typing import Literal

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field


class ImageAsset(BaseModel):
    """A captured or picked image: a local file, an opaque locator, or both."""

    source: Literal["camera", "library"]
    path: Path | None = None
    locator: str | None = None  # e.g. "content://media/external/images/42"
    temporary: bool = False  # True for files created by us for a camera capture
    width: int | None = Field(default=None, ge=1)
    height: int | None = Field(default=None, ge=1)

    @property
    def exists(self) -> bool:
        return self.path is not None and self.path.is_file()

    @property
    def display_name(self) -> str:
        if self.path is not None:
            return self.path.name
        return self.locator or "(no image)"


class ScaledImage(BaseModel):
    """A bounded bitmap decoded for preview or display."""

    image: Image.Image
    source_width: int = Field(..., ge=1)
    source_height: int = Field(..., ge=1)
    in_sample_size: int = Field(..., ge=1)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size
