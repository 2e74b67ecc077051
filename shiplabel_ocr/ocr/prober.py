from __future__ import annotations

import logging

from shiplabel_ocr.core.exceptions import OCRClientError
from shiplabel_ocr.ocr.transport import OCRTransport

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT_S = 5.0


class ConnectivityProber:
    """Single bounded health check; every failure collapses to ``False``.

    No retries and no shared state: the caller decides when to re-probe and
    what to do with the answer.
    """

    def __init__(self, transport: OCRTransport, timeout_s: float = DEFAULT_PROBE_TIMEOUT_S) -> None:
        self._transport = transport
        self._timeout_s = timeout_s

    async def probe(self, base_url: str) -> bool:
        try:
            await self._transport.check_health(base_url, timeout_s=self._timeout_s)
        except OCRClientError as exc:
            logger.warning(
                "probe_failed",
                extra={"base_url": base_url, "reason": exc.message},
            )
            return False

        logger.debug("probe_ok", extra={"base_url": base_url})
        return True
