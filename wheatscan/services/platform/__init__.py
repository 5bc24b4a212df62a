from .base import (
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
from .registry import get_platform

__all__ = [
    "Capability",
    "Dialog",
    "IntentOutcome",
    "OfflineAction",
    "PermissionStatus",
    "PickResult",
    "Platform",
    "Screen",
    "SettingsPanel",
    "get_platform",
]
