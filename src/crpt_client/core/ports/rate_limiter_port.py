from __future__ import annotations

import threading
from typing import Optional, Protocol


class PermitGatePort(Protocol):
    def acquire(self, cancel: Optional[threading.Event] = None) -> None:
        """Block until a permit is available according to the configured window.

        Raises PermitAcquireInterrupted if ``cancel`` is set before a permit
        is obtained; no permit is consumed in that case.
        """

    def close(self) -> None:
        """Release background resources and wake any blocked callers."""
