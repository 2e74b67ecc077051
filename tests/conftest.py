"""Shared pytest configuration and fixtures for the OCR client tests."""
from __future__ import annotations

import copy
import os

# Provide env vars before any shiplabel_ocr module is imported
os.environ.setdefault("OCR_API_URL", "http://ocr.test")
os.environ.setdefault("DEMO_FALLBACK_ENABLED", "true")

from collections.abc import Awaitable, Callable
from typing import Any

import pytest
from fastapi import FastAPI, File, Response, UploadFile
from fastapi.responses import JSONResponse

TRACKING_BODY: dict[str, Any] = {
    "success": True,
    "target_match": {
        "matched_text": "TRACKING: 163233702292313922_1_lWV SHIP TO: X",
        "score": 91.2,
        "pattern_found": "163233702292313922_1_lWV",
    },
    "ocr_results": [
        {"text": "TRACKING:", "confidence": 0.97, "engine": "tesseract", "bbox": [10.0, 12.0, 120.0, 40.0]},
        {"text": "163233702292313922_1_lWV", "confidence": 0.912, "engine": "easyocr"},
        {"text": "SHIP", "confidence": 0.88, "engine": "paddleocr"},
    ],
    "full_text": "TRACKING: 163233702292313922_1_lWV SHIP TO: X",
    "preprocessing_steps": ["grayscale", "denoise"],
}


def _make_backend(
    *,
    status: int = 200,
    body: Any = None,
    health_status: int = 200,
    on_ocr: Callable[[], Awaitable[None]] | None = None,
) -> FastAPI:
    """Fake OCR backend speaking the /api/health + /api/ocr contract.

    *body* may be a JSON-compatible value or a raw ``str``; uploads received
    by /api/ocr are recorded on ``app.state.uploads``.
    """
    app = FastAPI()
    app.state.uploads = []

    @app.get("/api/health")
    async def health() -> Response:
        return JSONResponse({"status": "ok"}, status_code=health_status)

    @app.post("/api/ocr")
    async def ocr(image: UploadFile = File(...)) -> Response:
        content = await image.read()
        app.state.uploads.append(
            {"filename": image.filename, "content_type": image.content_type, "size": len(content)}
        )
        if on_ocr is not None:
            await on_ocr()
        if isinstance(body, str):
            return Response(content=body, status_code=status, media_type="text/plain")
        return JSONResponse(TRACKING_BODY if body is None else body, status_code=status)

    return app


@pytest.fixture
def make_backend() -> Callable[..., FastAPI]:
    return _make_backend


@pytest.fixture
def tracking_body() -> dict[str, Any]:
    return copy.deepcopy(TRACKING_BODY)


@pytest.fixture
def jpeg_bytes() -> bytes:
    """10 KB payload with a JPEG SOI/APP0 header."""
    header = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00"
    return header + b"\x00" * (10 * 1024 - len(header))
