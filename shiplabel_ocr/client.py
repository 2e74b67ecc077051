"""OCRClient: the surface a presentation layer talks to.

Bundles a submission controller and a connectivity prober over one shared
``httpx.AsyncClient``, and keeps the connected/disconnected indicator that the
prober itself deliberately does not own.

    async with OCRClient("http://localhost:8000") as ocr:
        await ocr.test_connection()
        result = await ocr.submit(path.read_bytes(), path.name)
"""
from __future__ import annotations

import logging
from typing import BinaryIO

import httpx

from shiplabel_ocr.core.config import settings
from shiplabel_ocr.ocr.prober import ConnectivityProber
from shiplabel_ocr.ocr.transport import OCRTransport
from shiplabel_ocr.pipeline.controller import SubmissionController, SubmissionState
from shiplabel_ocr.schemas import SubmissionResult

logger = logging.getLogger(__name__)


class OCRClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        probe_timeout_s: float | None = None,
        submit_timeout_s: float | None = None,
        demo_fallback: bool | None = None,
    ) -> None:
        # A caller-supplied client stays the caller's to close
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(transport=transport)
        ocr_transport = OCRTransport(self._http_client)

        self._prober = ConnectivityProber(
            ocr_transport,
            timeout_s=probe_timeout_s if probe_timeout_s is not None else settings.probe_timeout_s,
        )
        self._controller = SubmissionController(
            ocr_transport,
            base_url or settings.ocr_api_url,
            submit_timeout_s=submit_timeout_s if submit_timeout_s is not None else settings.submit_timeout_s,
            demo_fallback=demo_fallback if demo_fallback is not None else settings.demo_fallback_enabled,
        )
        self._is_connected = False

    @property
    def base_url(self) -> str:
        return self._controller.base_url

    @base_url.setter
    def base_url(self, value: str) -> None:
        self._controller.base_url = value
        # The last probe said nothing about the new endpoint
        self._is_connected = False

    @property
    def is_connected(self) -> bool:
        return self._is_connected

    @property
    def is_processing(self) -> bool:
        return self._controller.is_processing

    @property
    def state(self) -> SubmissionState:
        return self._controller.state

    @property
    def result(self) -> SubmissionResult | None:
        return self._controller.result

    @property
    def error(self) -> str | None:
        return self._controller.error

    async def test_connection(self) -> bool:
        """Probe the configured backend and update ``is_connected``."""
        self._is_connected = await self._prober.probe(self.base_url)
        logger.info(
            "connection_tested",
            extra={"base_url": self.base_url, "connected": self._is_connected},
        )
        return self._is_connected

    async def submit(self, file: bytes | BinaryIO, filename: str = "upload") -> SubmissionResult | None:
        return await self._controller.submit(file, filename)

    def reset(self) -> None:
        self._controller.reset()

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> OCRClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
