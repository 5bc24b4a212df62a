"""Client for the remote wheat disease classification endpoint.

One multipart POST per confirmed image, no retries. Every outcome,
including transport failures, comes back as a ``DiagnosisResult`` so
callers never have to handle exceptions from this module.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import httpx

from wheatscan.config import Settings
from wheatscan.models import DiagnosisFailure, DiagnosisSuccess, UploadRequest
from wheatscan.models.diagnosis import DiagnosisResult

logger = logging.getLogger(__name__)

CONNECTION_FAILED = "Connection failed. Check your internet"
REQUEST_TIMED_OUT = "Request timed out"


class InferenceAPIError(Exception):
    """Raised when the classification service returns a non-2xx status."""

    def __init__(self, status: int, message: str):
        super().__init__(f"Inference API error {status}: {message}")
        self.status = status
        self.message = message


class InferenceClient:
    """Minimal async client for the ``predict`` endpoint."""

    def __init__(
        self,
        *,
        base_url: str,
        predict_path: str = "predict",
        label_field: str = "prediction",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._predict_url = f"{base_url.rstrip('/')}/{predict_path.lstrip('/')}"
        self._label_field = label_field
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings, *, client: Optional[httpx.AsyncClient] = None) -> "InferenceClient":
        return cls(
            base_url=settings.api_base_url,
            predict_path=settings.api_predict_path,
            label_field=settings.api_label_field,
            timeout=settings.request_timeout,
            client=client,
        )

    @property
    def predict_url(self) -> str:
        return self._predict_url

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def upload(self, request: UploadRequest) -> DiagnosisResult:
        try:
            payload = await self._post_image(request)
            result = DiagnosisSuccess(label=self._extract_label(payload))
        except InferenceAPIError as exc:
            logger.warning("Prediction request rejected: %s", exc)
            return DiagnosisFailure(message=exc.message, category="api")
        except httpx.ConnectError as exc:
            logger.warning("Connection to %s failed: %s", self._predict_url, exc)
            return DiagnosisFailure(message=CONNECTION_FAILED, category="transport")
        except httpx.TimeoutException as exc:
            logger.warning("Prediction request timed out: %s", exc)
            return DiagnosisFailure(message=REQUEST_TIMED_OUT, category="transport")
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Prediction request failed: %s", exc)
            return DiagnosisFailure(message=f"Error: {exc}", category="transport")

        logger.info("Prediction for %s: %s", request.filename, result.label)
        return result

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "InferenceClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _extract_label(self, payload: Any) -> str | None:
        label = payload.get(self._label_field) if isinstance(payload, dict) else None
        if not isinstance(label, str):
            logger.warning("Response has no string %r field: %s", self._label_field, payload)
            return None
        return label

    async def _post_image(self, request: UploadRequest) -> Any:
        data = await asyncio.to_thread(request.path.read_bytes)
        files = {request.field_name: (request.filename, data, request.content_type)}
        logger.debug("POST %s (%s, %d bytes)", self._predict_url, request.content_type, len(data))
        resp = await self._client.post(self._predict_url, files=files)
        if not resp.is_success:
            message = resp.text or f"{resp.status_code} {resp.reason_phrase}".strip()
            raise InferenceAPIError(resp.status_code, message)
        return resp.json()
