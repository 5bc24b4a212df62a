"""Text rendering of the workflow screens."""
from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any, Callable, TextIO

from wheatscan.models import ResultView

from .base import Dialog, OfflineAction, Screen

logger = logging.getLogger(__name__)

_OFFLINE_CHOICES = {
    "w": OfflineAction.WIFI_SETTINGS,
    "m": OfflineAction.MOBILE_DATA,
    "c": OfflineAction.CANCEL,
}


class ConsoleScreen(Screen):
    def __init__(
        self,
        *,
        auto_confirm: bool = False,
        show_previews: bool = False,
        stream: TextIO | None = None,
        input_func: Callable[[str], str] = input,
    ) -> None:
        self._auto_confirm = auto_confirm
        self._show_previews = show_previews
        self._stream = stream or sys.stdout
        self._input = input_func

    def _print(self, text: str) -> None:
        print(text, file=self._stream, flush=True)

    async def _ask(self, prompt: str) -> str | None:
        # stdin blocks, keep it off the event loop
        try:
            answer = await asyncio.to_thread(self._input, prompt)
        except EOFError:
            return None
        return answer.strip().lower()

    def show_message(self, text: str) -> None:
        self._print(f"! {text}")

    async def confirm_preview(self, image: Any, *, name: str) -> bool:
        width, height = image.size
        self._print(f"Preview: {name} ({width}x{height})")
        if self._show_previews:
            image.show(title=name)
        if self._auto_confirm:
            return True
        while True:
            answer = await self._ask("Use this photo? [o]k / [c]ancel: ")
            if answer is None or answer in {"c", "cancel"}:
                return False
            if answer in {"o", "ok", "y", "yes"}:
                return True

    async def choose_offline_action(self, dialog: Dialog) -> OfflineAction:
        self._print(dialog.title)
        self._print(dialog.message)
        while True:
            answer = await self._ask("[w] Wi-Fi Settings / [m] Mobile Data / [c] Cancel: ")
            if answer is None:
                return OfflineAction.CANCEL
            if answer[:1] in _OFFLINE_CHOICES:
                return _OFFLINE_CHOICES[answer[:1]]
            if not answer and dialog.cancelable:
                return OfflineAction.CANCEL

    async def confirm_permission_rationale(self, dialog: Dialog) -> bool:
        self._print(dialog.title)
        self._print(dialog.message)
        answer = await self._ask("[s] Settings / [c] Cancel: ")
        return answer is not None and answer.startswith("s")

    def show_progress(self, visible: bool) -> None:
        if visible:
            self._print("Analyzing image...")

    def show_image(self, image: Any) -> None:
        width, height = image.size
        self._print(f"Image: {width}x{height}")

    def show_error_state(self, message: str) -> None:
        self._print(f"[x] {message}")

    def show_result(self, view: ResultView) -> None:
        self._print(view.header)
        if view.description:
            self._print("")
            self._print(view.description)
