from __future__ import annotations

import asyncio
import logging
import socket
from abc import ABC, abstractmethod

from wheatscan.config import Settings
from wheatscan.services.platform import Dialog, OfflineAction, Platform, Screen, SettingsPanel

logger = logging.getLogger(__name__)

OFFLINE_DIALOG = Dialog(
    title="No Internet Connection",
    message="Please turn on your Internet connection.",
    cancelable=False,
)

_SETTINGS_FOR_ACTION = {
    OfflineAction.WIFI_SETTINGS: SettingsPanel.WIFI,
    OfflineAction.MOBILE_DATA: SettingsPanel.MOBILE_DATA,
}


class NetworkMonitor(ABC):
    @abstractmethod
    def has_internet(self) -> bool:
        """True when an active network with internet capability exists."""


class SocketNetworkMonitor(NetworkMonitor):
    """Reports internet capability by opening a TCP connection to a well-known host."""

    def __init__(self, host: str = "1.1.1.1", port: int = 53, timeout: float = 3.0) -> None:
        self._address = (host, port)
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SocketNetworkMonitor":
        return cls(
            host=settings.connectivity_probe_host,
            port=settings.connectivity_probe_port,
            timeout=settings.connectivity_probe_timeout,
        )

    def has_internet(self) -> bool:
        try:
            with socket.create_connection(self._address, timeout=self._timeout):
                return True
        except OSError as exc:
            logger.debug("Connectivity probe to %s:%s failed: %s", *self._address, exc)
            return False


class ConnectivityGuard:
    """Gate in front of the upload: offline means prompt, never a request."""

    def __init__(self, monitor: NetworkMonitor, platform: Platform, screen: Screen) -> None:
        self._monitor = monitor
        self._platform = platform
        self._screen = screen

    async def ensure_online(self) -> bool:
        if await asyncio.to_thread(self._monitor.has_internet):
            return True

        logger.info("No active internet connection, upload skipped")
        action = await self._screen.choose_offline_action(OFFLINE_DIALOG)
        panel = _SETTINGS_FOR_ACTION.get(action)
        if panel is not None:
            self._platform.open_settings(panel)
        return False
