"""Host ports: what the workflow needs from the OS and from the UI.

Every OS interaction (camera, picker, permissions, intents) is modelled as
"request; suspend until the host answers; resume". Implementations decide
how the answer is produced.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, BinaryIO

from pydantic import BaseModel

from wheatscan.models import ResultView


class Capability(str, Enum):
    CAMERA = "camera"
    STORAGE = "storage"


class PermissionStatus(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"
    UNAVAILABLE = "unavailable"


class IntentOutcome(str, Enum):
    OK = "ok"
    CANCELLED = "cancelled"
    UNAVAILABLE = "unavailable"  # no app can handle the request
    FAILED = "failed"


class SettingsPanel(str, Enum):
    WIFI = "wifi"
    MOBILE_DATA = "mobile_data"
    APP_DETAILS = "app_details"


class OfflineAction(str, Enum):
    WIFI_SETTINGS = "wifi"
    MOBILE_DATA = "mobile_data"
    CANCEL = "cancel"


class PickResult(BaseModel):
    outcome: IntentOutcome
    value: str | None = None  # a filesystem path or a URI, as returned by the picker


class Dialog(BaseModel):
    title: str
    message: str
    cancelable: bool = True


class Platform(ABC):
    """Abstract interface to the host operating system."""

    name: str = "abstract"

    @abstractmethod
    async def request_capability(self, capability: Capability) -> PermissionStatus:
        """Ask for access to *capability*; resolves once the host has decided."""

    @abstractmethod
    async def capture_photo(self, destination: Path) -> IntentOutcome:
        """Have the camera write a full-resolution photo into *destination*."""

    @abstractmethod
    async def pick_photo(self) -> PickResult:
        """Let the user choose an image from the photo library."""

    @abstractmethod
    def open_stream(self, locator: str) -> BinaryIO:
        """Open a readable binary stream for an opaque content locator."""

    @abstractmethod
    def open_url(self, url: str) -> bool:
        """Fire-and-forget: show *url* in the browser. Returns False if nothing handled it."""

    @abstractmethod
    def open_settings(self, panel: SettingsPanel) -> bool:
        """Fire-and-forget: open a system settings screen."""


class Screen(ABC):
    """Abstract interface to whatever renders the workflow to the user."""

    @abstractmethod
    def show_message(self, text: str) -> None:
        """Transient, non-blocking notice."""

    @abstractmethod
    async def confirm_preview(self, image: Any, *, name: str) -> bool:
        """Show the preview dialog; True for OK, False for Cancel."""

    @abstractmethod
    async def choose_offline_action(self, dialog: Dialog) -> OfflineAction:
        ...

    @abstractmethod
    async def confirm_permission_rationale(self, dialog: Dialog) -> bool:
        ...

    @abstractmethod
    def show_progress(self, visible: bool) -> None:
        ...

    @abstractmethod
    def show_image(self, image: Any) -> None:
        ...

    @abstractmethod
    def show_error_state(self, message: str) -> None:
        """Placeholder icon plus *message* in place of the image/result."""

    @abstractmethod
    def show_result(self, view: ResultView) -> None:
        ...
