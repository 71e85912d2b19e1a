from __future__ import annotations

import logging

import httpx

from ..core.domain.errors import TransportError
from ..core.domain.models import HttpRequest, HttpResponse
from ..core.ports.transport_port import HttpTransportPort

logger = logging.getLogger(__name__)


class HttpClient(HttpTransportPort):
    def __init__(self, timeout_seconds: float = 20.0) -> None:
        self._client = httpx.Client(
            timeout=timeout_seconds,
            follow_redirects=True,
            max_redirects=10
        )

    def send(self, request: HttpRequest) -> HttpResponse:
        try:
            resp = self._client.request(
                request.method,
                request.url,
                headers=dict(request.headers),
                content=request.body,
            )
        except httpx.HTTPError as e:
            logger.debug("%s %s failed: %r", request.method, request.url, e)
            raise TransportError(f"{type(e).__name__}: {e}", url=request.url) from e
        return HttpResponse(status_code=resp.status_code, body=resp.text)

    def close(self) -> None:
        self._client.close()
