"""Bounded image decoding for preview and display.

Photos are never decoded at full resolution just to be shown. The header
is probed first (no pixel data is read), a power-of-two sample size is
chosen so the result fits the bounding box, and the image is decoded at
that scale. JPEG sources are scaled inside the decoder (Pillow draft
mode), which keeps decode memory near ``1 / sample_size**2`` of the
full image; other formats are decoded and then reduced by an integer
factor.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Tuple, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from wheatscan.models import ScaledImage

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, BinaryIO]

DEFAULT_MAX_DIM = 1024

# Pillow reports malformed EXIF and TIFF blocks as SyntaxError
_DECODE_ERRORS = (
    UnidentifiedImageError,
    OSError,
    ValueError,
    SyntaxError,
    Image.DecompressionBombError,
)

# Modes Image.reduce() works on directly; anything else is converted first
_REDUCIBLE_MODES = frozenset({"L", "LA", "I", "F", "RGB", "RGBA", "RGBX", "CMYK", "YCbCr"})


class ImageDecodeError(Exception):
    """Raised when an image cannot be probed or decoded."""


def calculate_in_sample_size(width: int, height: int, req_width: int, req_height: int) -> int:
    """Return the smallest power of two that brings both dimensions inside the box.

    >>> calculate_in_sample_size(2048, 4096, 1024, 1024)
    4
    >>> calculate_in_sample_size(800, 600, 1024, 1024)
    1
    """

    if req_width < 1 or req_height < 1:
        raise ValueError("Bounding box must be positive, got %sx%s" % (req_width, req_height))

    in_sample_size = 1
    while width > req_width * in_sample_size or height > req_height * in_sample_size:
        in_sample_size *= 2
    return in_sample_size


def _rewind(source: ImageSource) -> None:
    if hasattr(source, "seek"):
        source.seek(0)


def probe_dimensions(source: ImageSource) -> Tuple[int, int]:
    """Read ``(width, height)`` from the image header only."""

    _rewind(source)
    try:
        with Image.open(source) as img:
            return img.size
    except _DECODE_ERRORS as exc:
        raise ImageDecodeError(f"Cannot read image bounds: {exc}") from exc


def _reducible(img: Image.Image) -> Image.Image:
    if img.mode in _REDUCIBLE_MODES:
        return img
    if img.mode.startswith("I;16"):
        return img.convert("I")
    if img.mode == "1":
        return img.convert("L")
    if img.mode in ("PA", "La", "RGBa") or "transparency" in img.info:
        return img.convert("RGBA")
    return img.convert("RGB")


def decode_scaled(source: ImageSource, req_width: int, req_height: int) -> ScaledImage:
    """Decode *source* so that neither output dimension exceeds the box."""

    _rewind(source)
    try:
        with Image.open(source) as img:
            width, height = img.size
            sample = calculate_in_sample_size(width, height, req_width, req_height)
            if sample > 1:
                target = (-(-width // sample), -(-height // sample))
                # Only JPEG honours the draft request; other formats ignore it
                img.draft(img.mode, target)
            img.load()

            drafted = max(1, round(width / img.width))
            remaining = sample // drafted
            scaled = _reducible(img).reduce(remaining) if remaining > 1 else img.copy()
        scaled = ImageOps.exif_transpose(scaled)
    except _DECODE_ERRORS as exc:
        raise ImageDecodeError(f"Failed to decode image: {exc}") from exc

    logger.debug(
        "Decoded %sx%s at 1/%s -> %sx%s", width, height, sample, scaled.width, scaled.height
    )
    return ScaledImage(image=scaled, source_width=width, source_height=height, in_sample_size=sample)


class ImageScaler:  # pylint: disable=too-few-public-methods
    """Decodes preview/display bitmaps bounded to a square box."""

    def __init__(self, max_dim: int = DEFAULT_MAX_DIM) -> None:
        self._max_dim = max_dim

    @property
    def max_dim(self) -> int:
        return self._max_dim

    def load(self, source: ImageSource) -> ScaledImage:
        return decode_scaled(source, self._max_dim, self._max_dim)
