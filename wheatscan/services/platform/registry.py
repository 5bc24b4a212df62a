from __future__ import annotations

from wheatscan.config import Settings

from .base import Platform
from .desktop import DesktopPlatform

_PLATFORMS: dict[str, type[DesktopPlatform]] = {
    "desktop": DesktopPlatform,
}


def get_platform(settings: Settings, *, selection: str | None = None) -> Platform:
    platform_key = settings.platform.lower()
    if platform_key not in _PLATFORMS:
        raise ValueError(f"Unsupported platform: {platform_key}")
    return _PLATFORMS[platform_key].from_settings(settings, selection=selection)
