from __future__ import annotations

import logging
import threading
import time
from typing import Optional

from ..core.domain.enums import GateStrategy
from ..core.domain.errors import PermitAcquireInterrupted, PermitGateClosedError
from ..core.domain.models import QuotaWindow
from ..core.ports.rate_limiter_port import PermitGatePort

logger = logging.getLogger(__name__)

# How often a waiter holding a cancellation token re-checks it.
CANCEL_POLL_INTERVAL = 0.05


class FixedWindowPermitGate(PermitGatePort):
    """Fixed-window limiter: at most ``request_limit`` admissions per window.

    A background thread resets the available permits to full capacity every
    window, on a fixed cadence counted from construction. Acquisitions never
    trigger replenishment and permits are never released after use, so the
    gate limits calls per window, not concurrent calls. Up to 2N calls may be
    admitted in a short span straddling a window boundary.

    Example:
        # 5 documents per second
        window = QuotaWindow(unit=TimeUnit.SECONDS, duration=1, request_limit=5)
        with FixedWindowPermitGate(window) as gate:
            gate.acquire()
    """

    def __init__(self, window: QuotaWindow) -> None:
        self._window = window
        self._capacity = window.request_limit
        self._period = window.seconds
        self._available = self._capacity
        self._cond = threading.Condition(threading.Lock())
        self._stopped = threading.Event()
        self._closed = False
        self._thread = threading.Thread(
            target=self._run,
            name="permit-gate-replenisher",
            daemon=True,
        )
        self._thread.start()
        logger.debug(
            "Permit gate started: %d permits every %.3fs", self._capacity, self._period
        )

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def available_permits(self) -> int:
        with self._cond:
            return self._available

    @property
    def closed(self) -> bool:
        return self._closed

    def acquire(self, cancel: Optional[threading.Event] = None) -> None:
        """Consume one permit, blocking until the next window if none is left.

        Raises:
            PermitAcquireInterrupted: ``cancel`` was set before a permit was
                obtained. Nothing is consumed and ``cancel`` stays set.
            PermitGateClosedError: the gate was closed.
        """
        with self._cond:
            while True:
                if cancel is not None and cancel.is_set():
                    raise PermitAcquireInterrupted("Interrupted while waiting for a permit")
                if self._closed:
                    raise PermitGateClosedError("Permit gate is closed")
                if self._available > 0:
                    self._available -= 1
                    return
                # Without a token only replenish() or close() can wake us.
                self._cond.wait(CANCEL_POLL_INTERVAL if cancel is not None else None)

    def close(self) -> None:
        with self._cond:
            if self._closed:
                return
            self._closed = True
            self._cond.notify_all()
        self._stopped.set()
        if self._thread is not threading.current_thread():
            self._thread.join()
        logger.debug("Permit gate closed")

    def _replenish(self) -> None:
        with self._cond:
            self._available = self._capacity
            self._cond.notify_all()
        logger.debug("Permits replenished to %d", self._capacity)

    def _run(self) -> None:
        next_fire = time.monotonic()
        while True:
            next_fire += self._period
            if self._stopped.wait(max(0.0, next_fire - time.monotonic())):
                return
            self._replenish()

    def __enter__(self) -> FixedWindowPermitGate:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class PacedPermitGate(PermitGatePort):
    """Simpler variant: admissions are spaced ``window / request_limit`` apart.

    Trades burst tolerance for uniform pacing. The first call is admitted
    immediately; every later call waits until the interval since the previous
    admission has passed. No background thread is involved.
    """

    def __init__(self, window: QuotaWindow) -> None:
        self._interval = window.min_interval
        self._cond = threading.Condition(threading.Lock())
        self._last: Optional[float] = None
        self._closed = False

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def closed(self) -> bool:
        return self._closed

    def acquire(self, cancel: Optional[threading.Event] = None) -> None:
        with self._cond:
            while True:
                if cancel is not None and cancel.is_set():
                    raise PermitAcquireInterrupted("Interrupted while waiting for a permit")
                if self._closed:
                    raise PermitGateClosedError("Permit gate is closed")
                now = time.monotonic()
                if self._last is None or now >= self._last + self._interval:
                    self._last = now
                    return
                wait = self._last + self._interval - now
                if cancel is not None:
                    wait = min(wait, CANCEL_POLL_INTERVAL)
                self._cond.wait(wait)

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def __enter__(self) -> PacedPermitGate:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def build_permit_gate(
    window: QuotaWindow, strategy: GateStrategy = GateStrategy.FIXED_WINDOW
) -> PermitGatePort:
    strategy = GateStrategy(strategy)
    if strategy is GateStrategy.PACED:
        return PacedPermitGate(window)
    return FixedWindowPermitGate(window)
