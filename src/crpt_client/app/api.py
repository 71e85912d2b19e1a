from __future__ import annotations

import threading
from typing import Any, Mapping, Optional, Union

from dependency_injector import providers

from .container import Container
from ..config.settings import AppConfig
from ..core.domain.document import Document
from ..core.domain.enums import GateStrategy, TimeUnit
from ..core.domain.errors import PermitGateClosedError
from ..core.domain.models import SubmissionResult
from ..core.ports.transport_port import HttpTransportPort


class CrptApiClient:
    """Rate-limited client for the document creation API.

    Each client owns its own permit gate. Calls from any number of threads are
    admitted at most ``request_limit`` times per window; callers beyond that
    block until the next window starts.

    Example:
        # 5 documents per second, settings not given here come from CRPT_API_* variables
        with CrptApiClient(time_unit=TimeUnit.SECONDS, request_limit=5) as client:
            result = client.submit(json_text, signature)
            if not result.ok:
                print(result.status, result.status_code)

        # Serialize and send in one step
        with CrptApiClient(request_limit=100, time_unit="minutes") as client:
            client.send_document(document, signature)
    """

    def __init__(
        self,
        *,
        time_unit: Union[TimeUnit, str, None] = None,
        window_duration: Optional[float] = None,
        request_limit: Optional[int] = None,
        gate_strategy: Union[GateStrategy, str, None] = None,
        signature_header: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[HttpTransportPort] = None,
    ) -> None:
        """Initialize the client and start its permit gate.

        Args:
            time_unit: Unit of the rate-limit window (default: seconds).
            window_duration: Window length in time_unit (default: 1).
            request_limit: Submissions admitted per window. Must be positive.
            gate_strategy: "fixed_window" (default) or "paced".
            signature_header: Name of the signature header, e.g. "X-Signature".
            endpoint_url: Override the document creation endpoint.
            timeout_seconds: HTTP timeout per request.
            transport: Custom HTTP transport used instead of the httpx client.

        Raises:
            InvalidArgumentError: If request_limit or window_duration is not positive.
                Nothing is started in that case.
        """
        self._container = Container()
        self._closed = False

        overrides: dict[str, Any] = {
            "time_unit": time_unit,
            "window_duration": window_duration,
            "request_limit": request_limit,
            "gate_strategy": gate_strategy,
            "signature_header": signature_header,
            "endpoint_url": endpoint_url,
            "timeout_seconds": timeout_seconds,
        }
        config = AppConfig(**{k: v for k, v in overrides.items() if v is not None})
        # Fail fast before the replenisher thread exists.
        config.quota_window()
        self._container.config.from_pydantic(config)

        if transport is not None:
            self._container.http_client.override(providers.Object(transport))

        self._container.init_resources()
        # Resolved once: resolving after shutdown would re-create the gate.
        self._submit_uc = self._container.submit_uc()

    def submit(
        self,
        payload: Union[bytes, str],
        signature: str,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> SubmissionResult:
        """Submit an already serialized document.

        Blocks until the permit gate admits the call.

        Args:
            payload: JSON document, as bytes or text.
            signature: Precomputed document signature.
            cancel: Optional event; setting it interrupts the wait for a permit.

        Returns:
            SubmissionResult. Non-200 responses and network failures are
            reported here, not raised.

        Raises:
            PermitAcquireInterrupted: ``cancel`` was set while waiting.
            PermitGateClosedError: The client was closed.
        """
        if self._closed:
            raise PermitGateClosedError("Client is closed")
        return self._submit_uc.execute(payload, signature, cancel=cancel)

    def create_json_document(self, document: Union[Document, Mapping[str, Any]]) -> str:
        """Return the JSON representation of ``document``.

        Raises:
            SerializationError: If the document is invalid or cannot be encoded.
        """
        return self._container.serializer().to_json(document)

    def send_document(
        self,
        document: Union[Document, Mapping[str, Any]],
        signature: str,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> SubmissionResult:
        """Serialize ``document`` and submit it.

        SerializationError is raised before any permit is consumed.
        """
        payload = self.create_json_document(document)
        return self.submit(payload, signature, cancel=cancel)

    def close(self) -> None:
        """Stop the permit gate's replenisher and close the HTTP client."""
        if self._closed:
            return
        self._closed = True
        self._container.shutdown_resources()

    def __enter__(self) -> CrptApiClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = [
    "CrptApiClient",
    "AppConfig",
]
