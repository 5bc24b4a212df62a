from __future__ import annotations

from pydantic import BaseModel


class ResultView(BaseModel):
    """What the result screen shows after an upload completes."""

    header: str
    description: str | None = None
    search_label: str | None = None  # set only for successful diagnoses
    is_error: bool = False

    @property
    def search_available(self) -> bool:
        return self.search_label is not None
