"""Capture/pick screen: acquire an image, preview it, confirm or discard."""
from __future__ import annotations

import asyncio
import logging
from typing import Literal

import httpx

from wheatscan.models import ImageAsset, ScaledImage
from wheatscan.services.image_scaler import ImageDecodeError, ImageScaler
from wheatscan.services.image_source import (
    AcquisitionError,
    ImageSourceSelector,
    PermissionDeniedError,
)
from wheatscan.services.platform import Dialog, Platform, Screen, SettingsPanel
from wheatscan.utils.image_files import delete_temp_file

logger = logging.getLogger(__name__)

ImageSourceKind = Literal["camera", "library"]

RATIONALE_DIALOG = Dialog(
    title="Permissions Required",
    message=(
        "This app needs camera and storage access to take or select photos. "
        "Without these permissions, you won't be able to diagnose your wheat plants."
    ),
    cancelable=False,
)

PREVIEW_ERROR = "Error accessing image. Please check app permissions."
NO_IMAGE_TO_PROCEED = "No image to proceed"


class CaptureHandler:
    def __init__(
        self,
        selector: ImageSourceSelector,
        scaler: ImageScaler,
        platform: Platform,
        screen: Screen,
    ) -> None:
        self._selector = selector
        self._scaler = scaler
        self._platform = platform
        self._screen = screen

    async def acquire(self, source: ImageSourceKind) -> ImageAsset | None:
        """Run one acquisition; returns the confirmed asset or None."""

        try:
            if source == "camera":
                asset = await self._selector.capture()
            else:
                asset = await self._selector.pick()
        except PermissionDeniedError as exc:
            self._screen.show_message(str(exc))
            if await self._screen.confirm_permission_rationale(RATIONALE_DIALOG):
                self._platform.open_settings(SettingsPanel.APP_DETAILS)
            return None
        except AcquisitionError as exc:
            self._screen.show_message(str(exc))
            return None

        if asset is None:
            return None
        return await self.preview(asset)

    async def preview(self, asset: ImageAsset) -> ImageAsset | None:
        try:
            scaled = await asyncio.to_thread(self._load_preview, asset)
        except (ImageDecodeError, OSError, httpx.HTTPError) as exc:
            logger.warning("Error loading preview for %s: %s", asset.display_name, exc)
            self._screen.show_message(PREVIEW_ERROR)
            return None

        if not await self._screen.confirm_preview(scaled.image, name=asset.display_name):
            if asset.temporary:
                delete_temp_file(asset.path)
            return None

        if asset.path is None:
            self._screen.show_message(NO_IMAGE_TO_PROCEED)
            return None

        logger.info("Moving to detection with %s", asset.path)
        return asset.model_copy(update={"width": scaled.source_width, "height": scaled.source_height})

    def _load_preview(self, asset: ImageAsset) -> ScaledImage:
        if asset.path is not None:
            return self._scaler.load(asset.path)
        with self._platform.open_stream(asset.locator) as stream:
            return self._scaler.load(stream)
