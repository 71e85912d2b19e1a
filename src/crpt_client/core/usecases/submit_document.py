from __future__ import annotations

import logging
import threading
from typing import Optional, Union

from ..domain.errors import TransportError
from ..domain.models import HttpRequest, SubmissionResult
from ..ports.rate_limiter_port import PermitGatePort
from ..ports.transport_port import HttpTransportPort
from ...shared.utils import mask_secret

logger = logging.getLogger(__name__)


class SubmitDocumentUseCase:
    def __init__(
        self,
        gate: PermitGatePort,
        transport: HttpTransportPort,
        endpoint_url: str,
        signature_header: str = "Signature",
    ) -> None:
        self._gate = gate
        self._transport = transport
        self._endpoint_url = endpoint_url
        self._signature_header = signature_header

    def execute(
        self,
        payload: Union[bytes, str],
        signature: str,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> SubmissionResult:
        """Wait for a permit, POST the payload and interpret the response.

        Non-200 responses and transport failures are logged and returned as
        failed results. Interruption while waiting for a permit propagates.
        """
        self._gate.acquire(cancel)
        logger.info("Acquired a permit, proceeding with the request")

        body = payload.encode("utf-8") if isinstance(payload, str) else payload
        request = HttpRequest(
            method="POST",
            url=self._endpoint_url,
            headers={
                "Content-Type": "application/json",
                self._signature_header: signature,
            },
            body=body,
        )
        logger.info(
            "Sending document to %s (%s: %s)",
            self._endpoint_url, self._signature_header, mask_secret(signature),
        )
        try:
            response = self._transport.send(request)
        except TransportError as e:
            logger.error("Transport failure while sending document: %s", e)
            return SubmissionResult.transport_failure(e)

        if response.status_code == 200:
            logger.info("Response received successfully")
            return SubmissionResult.success(response)
        logger.warning("Response with status code: %d", response.status_code)
        return SubmissionResult.http_failure(response)
