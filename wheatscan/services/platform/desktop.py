"""Desktop host: external programs stand in for the camera, picker and settings apps."""
from __future__ import annotations

import asyncio
import io
import logging
import os
import shlex
import subprocess
import webbrowser
from pathlib import Path
from typing import BinaryIO, Mapping, Optional
from urllib.parse import urlsplit

import httpx

from wheatscan.config import Settings

from .base import (
    Capability,
    IntentOutcome,
    PermissionStatus,
    PickResult,
    Platform,
    SettingsPanel,
)

logger = logging.getLogger(__name__)


def command_argv(command: Optional[str], **placeholders: str) -> list[str]:
    """Split *command* and substitute ``{name}`` placeholders in each token.

    A placeholder that the command does not mention is appended as a final
    argument, so ``"fswebcam"`` and ``"fswebcam {output}"`` behave the same.
    """

    if not command:
        return []
    argv = shlex.split(command)
    for name, value in placeholders.items():
        marker = "{%s}" % name
        if any(marker in token for token in argv):
            argv = [token.replace(marker, value) for token in argv]
        else:
            argv.append(value)
    return argv


class DesktopPlatform(Platform):
    name = "desktop"

    def __init__(
        self,
        *,
        capture_dir: Path,
        camera_command: str | None = None,
        picker_command: str | None = None,
        settings_commands: Mapping[SettingsPanel, Optional[str]] | None = None,
        selection: str | None = None,
        http_timeout: float = 10.0,
    ) -> None:
        self._capture_dir = capture_dir
        self._camera_command = camera_command
        self._picker_command = picker_command
        self._settings_commands = dict(settings_commands or {})
        # A path handed over on the command line short-circuits the picker once
        self._selection = selection
        self._http_timeout = http_timeout

    @classmethod
    def from_settings(cls, settings: Settings, *, selection: str | None = None) -> "DesktopPlatform":
        return cls(
            capture_dir=settings.capture_dir,
            camera_command=settings.camera_command,
            picker_command=settings.picker_command,
            settings_commands={
                SettingsPanel.WIFI: settings.wifi_settings_command,
                SettingsPanel.MOBILE_DATA: settings.mobile_data_settings_command,
                SettingsPanel.APP_DETAILS: settings.app_settings_command,
            },
            selection=selection,
            http_timeout=settings.request_timeout,
        )

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    async def request_capability(self, capability: Capability) -> PermissionStatus:
        if capability is Capability.CAMERA:
            try:
                self._capture_dir.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                logger.warning("Cannot create capture directory %s: %s", self._capture_dir, exc)
                return PermissionStatus.DENIED
            if not os.access(self._capture_dir, os.W_OK):
                return PermissionStatus.DENIED
            return PermissionStatus.GRANTED

        if self._selection is not None or self._picker_command:
            return PermissionStatus.GRANTED
        return PermissionStatus.UNAVAILABLE

    # ------------------------------------------------------------------
    # Intents with a result
    # ------------------------------------------------------------------

    async def capture_photo(self, destination: Path) -> IntentOutcome:
        argv = command_argv(self._camera_command, output=str(destination))
        if not argv:
            return IntentOutcome.UNAVAILABLE
        logger.debug("Running camera command %s", argv)
        try:
            proc = await asyncio.create_subprocess_exec(*argv)
        except FileNotFoundError:
            return IntentOutcome.UNAVAILABLE
        except OSError as exc:
            logger.warning("Error starting camera program: %s", exc)
            return IntentOutcome.FAILED
        returncode = await proc.wait()
        if returncode != 0:
            logger.info("Camera program exited with status %s", returncode)
            return IntentOutcome.CANCELLED
        return IntentOutcome.OK

    async def pick_photo(self) -> PickResult:
        if self._selection is not None:
            value, self._selection = self._selection, None
            return PickResult(outcome=IntentOutcome.OK, value=value)

        argv = command_argv(self._picker_command)
        if not argv:
            return PickResult(outcome=IntentOutcome.UNAVAILABLE)
        logger.debug("Running picker command %s", argv)
        try:
            proc = await asyncio.create_subprocess_exec(*argv, stdout=asyncio.subprocess.PIPE)
        except FileNotFoundError:
            return PickResult(outcome=IntentOutcome.UNAVAILABLE)
        except OSError as exc:
            logger.warning("Error starting picker program: %s", exc)
            return PickResult(outcome=IntentOutcome.FAILED)
        stdout, _ = await proc.communicate()
        value = stdout.decode(errors="replace").strip()
        if proc.returncode != 0 or not value:
            return PickResult(outcome=IntentOutcome.CANCELLED)
        return PickResult(outcome=IntentOutcome.OK, value=value)

    def open_stream(self, locator: str) -> BinaryIO:
        scheme = urlsplit(locator).scheme.lower()
        if scheme in {"http", "https"}:
            resp = httpx.get(locator, timeout=self._http_timeout, follow_redirects=True)
            resp.raise_for_status()
            return io.BytesIO(resp.content)
        raise FileNotFoundError(f"Unsupported content locator: {locator}")

    # ------------------------------------------------------------------
    # Fire-and-forget intents
    # ------------------------------------------------------------------

    def open_url(self, url: str) -> bool:
        logger.debug("Opening %s in browser", url)
        try:
            return webbrowser.open(url, new=2)
        except webbrowser.Error as exc:
            logger.warning("No browser available for %s: %s", url, exc)
            return False

    def open_settings(self, panel: SettingsPanel) -> bool:
        argv = command_argv(self._settings_commands.get(panel))
        if not argv:
            logger.warning("No settings program configured for %s", panel.value)
            return False
        try:
            subprocess.Popen(argv, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)  # pylint: disable=consider-using-with
        except OSError as exc:
            logger.warning("Failed to open %s settings: %s", panel.value, exc)
            return False
        return True
