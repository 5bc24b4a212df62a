from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from .image_asset import ImageAsset

UPLOAD_FIELD_NAME = "file"
GENERIC_CONTENT_TYPE = "application/octet-stream"

_CONTENT_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
}


def content_type_for(path: Path) -> str:
    """Infer the part content type from the file extension."""

    return _CONTENT_TYPES.get(path.suffix.lstrip(".").lower(), GENERIC_CONTENT_TYPE)


class UploadRequest(BaseModel):
    """One image upload. Created once per confirmed image, never resent."""

    model_config = ConfigDict(frozen=True)

    path: Path
    filename: str
    content_type: str
    field_name: str = UPLOAD_FIELD_NAME

    @classmethod
    def from_asset(cls, asset: ImageAsset) -> "UploadRequest":
        if asset.path is None:
            raise ValueError("Upload requires a local file; got locator %r" % asset.locator)
        return cls(
            path=asset.path,
            filename=asset.path.name,
            content_type=content_type_for(asset.path),
        )
