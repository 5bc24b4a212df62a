from __future__ import annotations

import logging

from wheatscan.config import Settings
from wheatscan.models import ResultView
from wheatscan.services.connectivity import ConnectivityGuard, NetworkMonitor
from wheatscan.services.image_scaler import ImageScaler
from wheatscan.services.image_source import ImageSourceSelector
from wheatscan.services.inference import InferenceClient
from wheatscan.services.presenter import ResultPresenter
from wheatscan.services.platform import Platform, Screen

from .capture_handler import CaptureHandler, ImageSourceKind
from .detection_handler import DetectionHandler

logger = logging.getLogger(__name__)


class DiagnosisSession:
    """One user action: acquire an image, then diagnose it."""

    def __init__(self, capture: CaptureHandler, detection: DetectionHandler, presenter: ResultPresenter) -> None:
        self.capture = capture
        self.detection = detection
        self.presenter = presenter

    @classmethod
    def build(
        cls,
        settings: Settings,
        *,
        platform: Platform,
        screen: Screen,
        client: InferenceClient,
        monitor: NetworkMonitor,
    ) -> "DiagnosisSession":
        scaler = ImageScaler(settings.preview_max_dim)
        presenter = ResultPresenter(platform, search_url_template=settings.search_url_template)
        capture = CaptureHandler(ImageSourceSelector(platform, settings.capture_dir), scaler, platform, screen)
        detection = DetectionHandler(
            scaler=scaler,
            client=client,
            guard=ConnectivityGuard(monitor, platform, screen),
            presenter=presenter,
            screen=screen,
        )
        return cls(capture, detection, presenter)

    async def run(self, source: ImageSourceKind) -> ResultView | None:
        asset = await self.capture.acquire(source)
        if asset is None:
            logger.info("No image confirmed, nothing to diagnose")
            return None
        return await self.detection.run(asset)
