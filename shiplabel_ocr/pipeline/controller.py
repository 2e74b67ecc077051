"""Submission controller: one image in, one lifecycle transition out.

    idle -> processing -> completed   result stored (success true or false)
                       -> failed      error stored, no result

Outcome per transport error:
- backend unreachable      simulated result + demo-mode notice
- non-2xx status           error "Server error: <status>", no result
- malformed 2xx body       error, no result
- timeout / other          error, no result

The simulator never runs when the backend answered, whatever it answered.
"""
from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO

from shiplabel_ocr.core.exceptions import (
    BackendUnreachableError,
    OCRClientError,
    SubmissionInProgressError,
)
from shiplabel_ocr.ocr.simulator import simulate
from shiplabel_ocr.ocr.transport import OCRTransport
from shiplabel_ocr.schemas import SubmissionResult

logger = logging.getLogger(__name__)

DEMO_MODE_NOTICE = "Demo mode: Using simulated results (backend not connected)"
BACKEND_FAILURE_FALLBACK = "Backend reported failure"
DEFAULT_SUBMIT_TIMEOUT_S = 30.0


class SubmissionState(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class Snapshot:
    """Lifecycle fields, replaced as a whole so readers never see a mix."""
    state: SubmissionState
    result: SubmissionResult | None = None
    error: str | None = None


_IDLE = Snapshot(SubmissionState.IDLE)
_PROCESSING = Snapshot(SubmissionState.PROCESSING)


class SubmissionController:
    def __init__(
        self,
        transport: OCRTransport,
        base_url: str,
        *,
        submit_timeout_s: float = DEFAULT_SUBMIT_TIMEOUT_S,
        demo_fallback: bool = True,
        simulator: Callable[[str], SubmissionResult] = simulate,
    ) -> None:
        self._transport = transport
        self.base_url = base_url
        self._submit_timeout_s = submit_timeout_s
        self._demo_fallback = demo_fallback
        self._simulator = simulator
        self._snapshot = _IDLE

    # ------------------------------------------------------------------ #
    #  Read-only lifecycle view                                            #
    # ------------------------------------------------------------------ #

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def state(self) -> SubmissionState:
        return self._snapshot.state

    @property
    def is_processing(self) -> bool:
        return self._snapshot.state is SubmissionState.PROCESSING

    @property
    def result(self) -> SubmissionResult | None:
        return self._snapshot.result

    @property
    def error(self) -> str | None:
        return self._snapshot.error

    # ------------------------------------------------------------------ #
    #  Operations                                                          #
    # ------------------------------------------------------------------ #

    def reset(self) -> None:
        """Return to idle. Not allowed while a submission is in flight."""
        if self.is_processing:
            raise SubmissionInProgressError()
        self._snapshot = _IDLE

    async def submit(self, file: bytes | BinaryIO, filename: str = "upload") -> SubmissionResult | None:
        """Run one submission and return its result (``None`` when it failed).

        Raises ``SubmissionInProgressError`` if another submission has not
        finished yet; the in-flight one is left untouched.
        """
        if self.is_processing:
            raise SubmissionInProgressError()

        self._snapshot = _PROCESSING
        # Replaced by every handled branch; only an unexpected exception keeps it
        outcome = Snapshot(SubmissionState.FAILED, error="Failed to process image")
        t0 = time.monotonic()

        try:
            result = await self._transport.post_image(
                self.base_url, file, filename, timeout_s=self._submit_timeout_s
            )
            error = None if result.success else (result.error or BACKEND_FAILURE_FALLBACK)
            outcome = Snapshot(SubmissionState.COMPLETED, result=result, error=error)
            logger.info(
                "submission_completed",
                extra={
                    "upload_filename": filename,
                    "success": result.success,
                    "pattern": result.target_match.pattern_found if result.target_match else None,
                    "duration_ms": int((time.monotonic() - t0) * 1000),
                },
            )
            return result

        except BackendUnreachableError as exc:
            if not self._demo_fallback:
                outcome = Snapshot(SubmissionState.FAILED, error=exc.message)
                logger.warning("submission_unreachable", extra={"reason": exc.reason})
                return None
            result = self._simulator(filename)
            outcome = Snapshot(SubmissionState.COMPLETED, result=result, error=DEMO_MODE_NOTICE)
            logger.warning(
                "submission_simulated",
                extra={"upload_filename": filename, "reason": exc.reason},
            )
            return result

        except OCRClientError as exc:
            outcome = Snapshot(SubmissionState.FAILED, error=exc.message)
            logger.warning(
                "submission_failed",
                extra={
                    "upload_filename": filename,
                    "error_type": type(exc).__name__,
                    "error": exc.message,
                },
            )
            return None

        except Exception:
            logger.exception("submission_crashed", extra={"upload_filename": filename})
            raise

        finally:
            self._snapshot = outcome
