"""Image acquisition: camera capture and photo-library pick."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from urllib.parse import unquote, urlsplit

from wheatscan.models import ImageAsset
from wheatscan.services.platform import (
    Capability,
    IntentOutcome,
    PermissionStatus,
    Platform,
)
from wheatscan.utils.image_files import create_image_file, delete_temp_file

logger = logging.getLogger(__name__)


class AcquisitionError(Exception):
    """Getting an image failed; ``str(exc)`` is the user-visible text."""


class SourceUnavailableError(AcquisitionError):
    """No camera/picker program can serve the request, or it failed to start."""


class PermissionDeniedError(AcquisitionError):
    """The host refused access; the user should be sent to the settings screen."""


class ImageSourceSelector:
    def __init__(self, platform: Platform, capture_dir: Path) -> None:
        self._platform = platform
        self._capture_dir = capture_dir

    async def capture(self) -> ImageAsset | None:
        """Take a photo into a new temporary file. None if the user backed out."""

        await self._require(Capability.CAMERA, unavailable="No camera app found")

        try:
            photo_file = create_image_file(self._capture_dir)
        except OSError as exc:
            logger.error("Error creating image file: %s", exc)
            raise AcquisitionError("Error creating image file") from exc

        outcome = await self._platform.capture_photo(photo_file)
        if outcome is not IntentOutcome.OK:
            delete_temp_file(photo_file)
            if outcome is IntentOutcome.CANCELLED:
                logger.info("Camera capture cancelled")
                return None
            if outcome is IntentOutcome.UNAVAILABLE:
                raise SourceUnavailableError("No camera app found")
            raise SourceUnavailableError("Error starting camera activity")

        if not photo_file.is_file() or photo_file.stat().st_size == 0:
            delete_temp_file(photo_file)
            raise AcquisitionError("Image file does not exist")

        logger.info("Captured photo %s", photo_file)
        return ImageAsset(source="camera", path=photo_file, temporary=True)

    async def pick(self) -> ImageAsset | None:
        """Let the user choose a library image. None if the user backed out."""

        await self._require(Capability.STORAGE, unavailable="No gallery app found")

        result = await self._platform.pick_photo()
        if result.outcome is IntentOutcome.CANCELLED:
            logger.info("Gallery pick cancelled")
            return None
        if result.outcome is IntentOutcome.UNAVAILABLE:
            raise SourceUnavailableError("No gallery app found")
        if result.outcome is not IntentOutcome.OK or not result.value:
            raise SourceUnavailableError("Error opening gallery")

        path = _as_local_path(result.value)
        if path is None:
            logger.info("Picked content locator %s", result.value)
            return ImageAsset(source="library", locator=result.value)

        if not path.is_file() or not os.access(path, os.R_OK):
            raise PermissionDeniedError("Cannot access this file. Additional permissions may be needed.")
        logger.info("Picked file %s", path)
        return ImageAsset(source="library", path=path)

    async def _require(self, capability: Capability, *, unavailable: str) -> None:
        status = await self._platform.request_capability(capability)
        if status is PermissionStatus.DENIED:
            raise PermissionDeniedError("Permissions are required to continue")
        if status is PermissionStatus.UNAVAILABLE:
            raise SourceUnavailableError(unavailable)


def _as_local_path(value: str) -> Path | None:
    """Map a picker answer to a local path; None for opaque locators."""

    parts = urlsplit(value)
    if parts.scheme == "file":
        return Path(unquote(parts.path))
    # Single-letter schemes are Windows drive letters, not URIs
    if len(parts.scheme) > 1:
        return None
    return Path(value).expanduser()
