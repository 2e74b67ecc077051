"""HTTP transport for the OCR backend.

Wire contract:
    GET  {base_url}/api/health   any 2xx means reachable
    POST {base_url}/api/ocr      multipart field ``image`` -> SubmissionResult JSON

Every failure leaves this module as an ``OCRClientError`` subclass, so callers
branch on the exception type rather than on message text:

    BackendUnreachableError   connection refused, DNS, offline, connect timeout,
                              connection dropped before any response
    BackendTimeoutError       connected, but no answer within the timeout
    BackendApplicationError   non-2xx status
    MalformedResponseError    2xx with a body that is not a SubmissionResult
    TransportFailureError     malformed URL, protocol or proxy errors
"""
from __future__ import annotations

import asyncio
import logging
import mimetypes
from typing import BinaryIO

import httpx
from pydantic import ValidationError

from shiplabel_ocr.core.exceptions import (
    BackendApplicationError,
    BackendTimeoutError,
    BackendUnreachableError,
    MalformedResponseError,
    TransportFailureError,
)
from shiplabel_ocr.schemas import SubmissionResult

logger = logging.getLogger(__name__)

HEALTH_PATH = "/api/health"
OCR_PATH = "/api/ocr"
IMAGE_FIELD = "image"

_BODY_EXCERPT = 500


def build_url(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}{path}"


def _classify(exc: Exception, url: str, timeout_s: float) -> Exception:
    if isinstance(exc, httpx.ConnectTimeout):
        return BackendUnreachableError(url, "connect timeout")
    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError)):
        return BackendTimeoutError(timeout_s)
    if isinstance(exc, (httpx.NetworkError, httpx.RemoteProtocolError)):
        return BackendUnreachableError(url, str(exc) or type(exc).__name__)
    return TransportFailureError(str(exc) or type(exc).__name__)


class OCRTransport:
    """Thin wrapper over ``httpx.AsyncClient`` that speaks the backend contract."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def check_health(self, base_url: str, *, timeout_s: float) -> None:
        """Raise unless ``GET /api/health`` answers 2xx within *timeout_s* seconds overall."""
        url = build_url(base_url, HEALTH_PATH)
        try:
            response = await asyncio.wait_for(
                self._client.get(url, timeout=timeout_s),
                timeout=timeout_s,
            )
        except (httpx.TransportError, httpx.InvalidURL, asyncio.TimeoutError) as exc:
            raise _classify(exc, url, timeout_s) from exc

        if not response.is_success:
            raise BackendApplicationError(response.status_code, response.text[:_BODY_EXCERPT])

    async def post_image(
        self,
        base_url: str,
        file: bytes | BinaryIO,
        filename: str,
        *,
        timeout_s: float,
    ) -> SubmissionResult:
        """Send the whole file in one multipart request and parse the answer."""
        url = build_url(base_url, OCR_PATH)
        content = bytes(file) if isinstance(file, (bytes, bytearray)) else file.read()
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"

        try:
            response = await self._client.post(
                url,
                files={IMAGE_FIELD: (filename, content, content_type)},
                timeout=timeout_s,
            )
        except (httpx.TransportError, httpx.InvalidURL) as exc:
            raise _classify(exc, url, timeout_s) from exc

        logger.debug(
            "ocr_response_received",
            extra={"status": response.status_code, "upload_bytes": len(content)},
        )

        if not response.is_success:
            raise BackendApplicationError(response.status_code, response.text[:_BODY_EXCERPT])

        return parse_submission_result(response)


def parse_submission_result(response: httpx.Response) -> SubmissionResult:
    body = response.text[:_BODY_EXCERPT]
    try:
        payload = response.json()
    except ValueError as exc:
        raise MalformedResponseError("body is not valid JSON", body) from exc

    if not isinstance(payload, dict):
        raise MalformedResponseError(f"expected a JSON object, got {type(payload).__name__}", body)

    # Strict: no "yes" -> True or "0.5" -> 0.5 coercion of backend values
    try:
        return SubmissionResult.model_validate_json(response.content, strict=True)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise MalformedResponseError(f"invalid fields: {fields}", body) from exc
