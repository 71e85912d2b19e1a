from __future__ import annotations

from typing import Protocol

from ..domain.models import HttpRequest, HttpResponse


class HttpTransportPort(Protocol):
    def send(self, request: HttpRequest) -> HttpResponse:
        """Send ``request`` and return status code and body.

        Non-200 responses are returned, not raised. Network failures raise
        TransportError.
        """
        ...
