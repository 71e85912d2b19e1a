from __future__ import annotations

import math
import threading
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .enums import SubmissionStatus, TimeUnit
from .errors import CrptApiError, HttpStatusError, InvalidArgumentError, TransportError


@dataclass(frozen=True)
class QuotaWindow:
    """At most ``request_limit`` admissions per ``duration`` ``unit``s."""

    unit: TimeUnit
    request_limit: int
    duration: float = 1.0

    def __post_init__(self) -> None:
        if isinstance(self.request_limit, bool) or not isinstance(self.request_limit, int):
            raise InvalidArgumentError(f"request_limit must be an integer, got {self.request_limit!r}")
        if self.request_limit <= 0:
            raise InvalidArgumentError(f"request_limit must be positive, got {self.request_limit}")
        if not math.isfinite(self.duration) or self.duration <= 0:
            raise InvalidArgumentError(f"duration must be a positive finite number, got {self.duration}")
        if not isinstance(self.unit, TimeUnit):
            object.__setattr__(self, "unit", TimeUnit(self.unit))
        # Longer waits overflow the platform timer used by the replenisher.
        if self.seconds > threading.TIMEOUT_MAX:
            raise InvalidArgumentError(f"window of {self.seconds}s exceeds the platform timer limit")

    @property
    def seconds(self) -> float:
        return self.unit.to_seconds(self.duration)

    @property
    def min_interval(self) -> float:
        """Spacing between admissions when calls are paced evenly."""
        return self.seconds / self.request_limit


@dataclass(frozen=True)
class HttpRequest:
    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    body: str = ""


@dataclass(frozen=True)
class SubmissionResult:
    status: SubmissionStatus
    status_code: Optional[int] = None
    body: Optional[str] = None
    error: Optional[CrptApiError] = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.status is SubmissionStatus.SUCCESS

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error

    @staticmethod
    def success(response: HttpResponse) -> "SubmissionResult":
        return SubmissionResult(
            status=SubmissionStatus.SUCCESS,
            status_code=response.status_code,
            body=response.body,
        )

    @staticmethod
    def http_failure(response: HttpResponse) -> "SubmissionResult":
        return SubmissionResult(
            status=SubmissionStatus.HTTP_ERROR,
            status_code=response.status_code,
            body=response.body,
            error=HttpStatusError(response.status_code, response.body),
        )

    @staticmethod
    def transport_failure(error: TransportError) -> "SubmissionResult":
        return SubmissionResult(status=SubmissionStatus.TRANSPORT_ERROR, error=error)
