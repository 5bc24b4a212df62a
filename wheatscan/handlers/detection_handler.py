"""Detection screen: show the image and, in parallel, upload it and show the diagnosis."""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from wheatscan.models import ImageAsset, ResultView, UploadRequest
from wheatscan.services.connectivity import ConnectivityGuard
from wheatscan.services.image_scaler import ImageDecodeError, ImageScaler
from wheatscan.services.inference import InferenceClient
from wheatscan.services.presenter import ResultPresenter
from wheatscan.services.platform import Screen

logger = logging.getLogger(__name__)


class DetectionHandler:
    def __init__(
        self,
        *,
        scaler: ImageScaler,
        client: InferenceClient,
        guard: ConnectivityGuard,
        presenter: ResultPresenter,
        screen: Screen,
    ) -> None:
        self._scaler = scaler
        self._client = client
        self._guard = guard
        self._presenter = presenter
        self._screen = screen

    async def run(self, asset: ImageAsset) -> ResultView | None:
        """Returns the rendered result, or None when nothing was uploaded."""

        if asset.path is None:
            self._screen.show_error_state("No image path provided")
            return None
        if not asset.exists:
            self._screen.show_error_state("Image file not found")
            return None

        _, view = await asyncio.gather(self._display(asset.path), self._upload(asset))
        return view

    async def _display(self, path: Path) -> None:
        try:
            scaled = await asyncio.to_thread(self._scaler.load, path)
        except ImageDecodeError as exc:
            logger.warning("Failed to decode %s: %s", path, exc)
            self._screen.show_error_state("Failed to decode image")
            return
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Error loading image %s", path)
            self._screen.show_error_state(f"Error loading image: {exc}")
            return
        self._screen.show_image(scaled.image)

    async def _upload(self, asset: ImageAsset) -> ResultView | None:
        if not await self._guard.ensure_online():
            return None

        request = UploadRequest.from_asset(asset)
        self._screen.show_progress(True)
        try:
            result = await self._client.upload(request)
        finally:
            self._screen.show_progress(False)

        view = self._presenter.render(result)
        self._screen.show_result(view)
        return view
