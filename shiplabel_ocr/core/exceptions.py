from __future__ import annotations


class OCRClientError(Exception):
    """Base exception for all OCR client errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BackendUnreachableError(OCRClientError):
    """The request could not be dispatched or was never answered."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Backend unreachable at {url}: {reason}")


class BackendApplicationError(OCRClientError):
    """The backend answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Server error: {status_code}")


class MalformedResponseError(OCRClientError):
    """The backend answered 2xx with a body that is not a SubmissionResult."""

    def __init__(self, reason: str, body: str = ""):
        self.reason = reason
        self.body = body
        super().__init__(f"Malformed response from backend: {reason}")


class BackendTimeoutError(OCRClientError):
    """The backend accepted the connection but did not answer in time."""

    def __init__(self, timeout_s: float):
        self.timeout_s = timeout_s
        super().__init__(f"Backend did not respond within {timeout_s:g}s")


class TransportFailureError(OCRClientError):
    """Any other transport problem (bad URL, protocol violation, proxy)."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Request failed: {reason}")


class SubmissionInProgressError(OCRClientError):
    """A submission was started while another one is still in flight."""

    def __init__(self) -> None:
        super().__init__("A submission is already in progress")
