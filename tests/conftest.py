from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest
from PIL import Image

from wheatscan.models import ResultView
from wheatscan.services.connectivity import NetworkMonitor
from wheatscan.services.inference import InferenceClient
from wheatscan.services.platform import (
    Capability,
    Dialog,
    IntentOutcome,
    OfflineAction,
    PermissionStatus,
    PickResult,
    Platform,
    Screen,
    SettingsPanel,
)

LEAF_GREEN = (96, 150, 60)
BASE_URL = "https://wheat.test/"


def write_image(path: Path, size: tuple[int, int] = (640, 480), fmt: str | None = None) -> Path:
    Image.new("RGB", size, LEAF_GREEN).save(path, format=fmt)
    return path


@pytest.fixture
def image_factory(tmp_path: Path) -> Callable[..., Path]:
    def _make(name: str = "leaf.jpg", size: tuple[int, int] = (640, 480), fmt: str | None = None) -> Path:
        return write_image(tmp_path / name, size, fmt)

    return _make


class FakePlatform(Platform):
    name = "fake"

    def __init__(
        self,
        *,
        camera: IntentOutcome = IntentOutcome.OK,
        photo_size: tuple[int, int] = (2048, 1536),
        pick: PickResult | None = None,
        permissions: dict[Capability, PermissionStatus] | None = None,
        streams: dict[str, bytes] | None = None,
    ) -> None:
        self.camera = camera
        self.photo_size = photo_size
        self.pick = pick or PickResult(outcome=IntentOutcome.CANCELLED)
        self.permissions = permissions or {}
        self.streams = streams or {}
        self.capture_calls: list[Path] = []
        self.opened_urls: list[str] = []
        self.opened_settings: list[SettingsPanel] = []

    async def request_capability(self, capability: Capability) -> PermissionStatus:
        return self.permissions.get(capability, PermissionStatus.GRANTED)

    async def capture_photo(self, destination: Path) -> IntentOutcome:
        self.capture_calls.append(destination)
        if self.camera is IntentOutcome.OK:
            write_image(destination, self.photo_size, "JPEG")
        return self.camera

    async def pick_photo(self) -> PickResult:
        return self.pick

    def open_stream(self, locator: str):
        if locator not in self.streams:
            raise FileNotFoundError(locator)
        return io.BytesIO(self.streams[locator])

    def open_url(self, url: str) -> bool:
        self.opened_urls.append(url)
        return True

    def open_settings(self, panel: SettingsPanel) -> bool:
        self.opened_settings.append(panel)
        return True


class FakeScreen(Screen):
    def __init__(
        self,
        *,
        confirm: bool = True,
        offline_action: OfflineAction = OfflineAction.CANCEL,
        open_settings_from_rationale: bool = False,
    ) -> None:
        self.confirm = confirm
        self.offline_action = offline_action
        self.open_settings_from_rationale = open_settings_from_rationale
        self.messages: list[str] = []
        self.previews: list[tuple[Any, str]] = []
        self.dialogs: list[Dialog] = []
        self.progress: list[bool] = []
        self.images: list[Any] = []
        self.errors: list[str] = []
        self.results: list[ResultView] = []

    def show_message(self, text: str) -> None:
        self.messages.append(text)

    async def confirm_preview(self, image: Any, *, name: str) -> bool:
        self.previews.append((image, name))
        return self.confirm

    async def choose_offline_action(self, dialog: Dialog) -> OfflineAction:
        self.dialogs.append(dialog)
        return self.offline_action

    async def confirm_permission_rationale(self, dialog: Dialog) -> bool:
        self.dialogs.append(dialog)
        return self.open_settings_from_rationale

    def show_progress(self, visible: bool) -> None:
        self.progress.append(visible)

    def show_image(self, image: Any) -> None:
        self.images.append(image)

    def show_error_state(self, message: str) -> None:
        self.errors.append(message)

    def show_result(self, view: ResultView) -> None:
        self.results.append(view)


class FakeMonitor(NetworkMonitor):
    def __init__(self, online: bool = True) -> None:
        self.online = online
        self.calls = 0

    def has_internet(self) -> bool:
        self.calls += 1
        return self.online


class RecordingAPI:
    """MockTransport wrapper that remembers every request it answered."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def client(self, **kwargs: Any) -> InferenceClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(self))
        return InferenceClient(base_url=BASE_URL, client=http, **kwargs)


def json_response(payload: Any, status: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status, json=payload)


@pytest.fixture
def platform() -> FakePlatform:
    return FakePlatform()


@pytest.fixture
def screen() -> FakeScreen:
    return FakeScreen()
