from __future__ import annotations

import logging
from urllib.parse import quote_plus

from wheatscan.models import (
    DISEASE_TABLE,
    UNKNOWN_CONDITION,
    DiagnosisSuccess,
    ResultView,
)
from wheatscan.models.diagnosis import DiagnosisResult
from wheatscan.services.platform import Platform

logger = logging.getLogger(__name__)

HEALTHY_LABEL = "healthy"
DEFAULT_SEARCH_URL = "https://www.google.com/search?q={query}"


def normalize_label(label: str | None) -> str:
    return label.lower() if label is not None else "unknown"


def describe_condition(label: str) -> str:
    """Return the two-line description for *label*, or the unknown fallback."""

    return DISEASE_TABLE.get(label.lower(), UNKNOWN_CONDITION).description


def build_search_url(label: str, template: str = DEFAULT_SEARCH_URL) -> str | None:
    """URL for a web search on ``"<label> wheat plant"``; None if it cannot be encoded."""

    try:
        query = quote_plus(f"{label} wheat plant", encoding="utf-8")
    except UnicodeError as exc:
        logger.warning("Could not encode search query for %r: %s", label, exc)
        return None
    return template.format(query=query)


class ResultPresenter:
    """Turns a diagnosis into screen state and serves the search action."""

    def __init__(self, platform: Platform, *, search_url_template: str = DEFAULT_SEARCH_URL) -> None:
        self._platform = platform
        self._search_url_template = search_url_template

    def render(self, result: DiagnosisResult) -> ResultView:
        if isinstance(result, DiagnosisSuccess):
            label = normalize_label(result.label)
            header = "Healthy" if label == HEALTHY_LABEL else f"Disease: {label}"
            return ResultView(header=header, description=describe_condition(label), search_label=label)

        if result.category == "api":
            return ResultView(header=f"API request failed: {result.message}", is_error=True)
        return ResultView(header=result.message, is_error=True)

    def open_search(self, view: ResultView) -> bool:
        if not view.search_available:
            return False
        url = build_search_url(view.search_label, self._search_url_template)
        if url is None:
            return False
        return self._platform.open_url(url)
