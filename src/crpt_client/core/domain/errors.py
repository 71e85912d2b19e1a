from __future__ import annotations

from typing import Optional


class CrptApiError(Exception):
    """Base class for every error raised or reported by crpt_client."""


class InvalidArgumentError(CrptApiError, ValueError):
    """Raised when a client or permit gate is constructed with invalid limits."""


class PermitAcquireInterrupted(CrptApiError):
    """Raised when a caller waiting for a permit is cancelled.

    No permit is consumed. The cancellation token passed to ``acquire`` stays
    set so the caller can still observe that it was interrupted.
    """


class PermitGateClosedError(CrptApiError, RuntimeError):
    """Raised by ``acquire`` once the gate has been closed."""


class TransportError(CrptApiError):
    """Network or I/O failure while sending a request."""

    def __init__(self, message: str, *, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class HttpStatusError(CrptApiError):
    """A response other than 200 was received.

    The submission facade reports it inside a SubmissionResult rather than
    raising it.
    """

    def __init__(self, status_code: int, body: Optional[str] = None) -> None:
        super().__init__(f"Unexpected response status: {status_code}")
        self.status_code = status_code
        self.body = body


class SerializationError(CrptApiError):
    """The document could not be encoded to (or decoded from) JSON."""
