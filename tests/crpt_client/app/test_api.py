from __future__ import annotations

import threading
import time

import pytest

from crpt_client import CrptApiClient
from crpt_client.config.urls import DOCUMENTS_CREATE_URL
from crpt_client.core.domain.enums import SubmissionStatus, TimeUnit
from crpt_client.core.domain.errors import (
    InvalidArgumentError,
    PermitAcquireInterrupted,
    PermitGateClosedError,
    SerializationError,
    TransportError,
)
from crpt_client.core.domain.models import HttpRequest, HttpResponse


class _InstantTransport:
    def __init__(self, status_code: int = 200) -> None:
        self.status_code = status_code
        self.requests: list[HttpRequest] = []
        self._lock = threading.Lock()

    def send(self, request: HttpRequest) -> HttpResponse:
        with self._lock:
            self.requests.append(request)
        return HttpResponse(self.status_code, "{}")


class _RefusingTransport:
    def send(self, request: HttpRequest) -> HttpResponse:
        raise TransportError("Connection refused", url=request.url)


def _replenisher_threads() -> int:
    return sum(1 for t in threading.enumerate() if t.name == "permit-gate-replenisher")


def test_five_per_second_then_sixth_waits_for_next_window():
    transport = _InstantTransport()
    start = time.monotonic()
    with CrptApiClient(time_unit=TimeUnit.SECONDS, window_duration=1, request_limit=5, transport=transport) as client:
        first = time.monotonic()
        results = [client.submit(b"{}", "sig") for _ in range(5)]
        assert time.monotonic() - first < 0.05
        assert all(r.ok for r in results)

        sixth = client.submit(b"{}", "sig")
        elapsed = time.monotonic() - start

    assert sixth.ok
    assert elapsed >= 0.95
    assert len(transport.requests) == 6


def test_concurrent_submitters_share_one_quota():
    transport = _InstantTransport()
    cancel = threading.Event()
    results = []
    interrupted = []
    lock = threading.Lock()

    with CrptApiClient(time_unit="minutes", request_limit=3, transport=transport) as client:

        def worker():
            try:
                r = client.submit(b"{}", "sig", cancel=cancel)
            except PermitAcquireInterrupted:
                with lock:
                    interrupted.append(1)
                return
            with lock:
                results.append(r)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        time.sleep(0.3)
        cancel.set()
        for t in threads:
            t.join(timeout=1.0)

    assert len(results) == 3
    assert len(interrupted) == 5
    assert len(transport.requests) == 3


@pytest.mark.parametrize("limit", [0, -3])
def test_non_positive_limit_fails_before_starting_anything(limit):
    before = _replenisher_threads()
    with pytest.raises(InvalidArgumentError):
        CrptApiClient(request_limit=limit, transport=_InstantTransport())
    assert _replenisher_threads() == before


def test_http_500_is_reported_and_client_keeps_serving():
    transport = _InstantTransport(status_code=500)
    with CrptApiClient(request_limit=10, transport=transport) as client:
        failed = client.submit(b"{}", "sig")
        transport.status_code = 200
        ok = client.submit(b"{}", "sig")

    assert failed.status is SubmissionStatus.HTTP_ERROR
    assert failed.error.status_code == 500
    assert ok.ok


def test_connection_failure_is_reported_as_transport_error():
    with CrptApiClient(request_limit=10, transport=_RefusingTransport()) as client:
        result = client.submit(b"{}", "sig")

    assert result.status is SubmissionStatus.TRANSPORT_ERROR
    assert isinstance(result.error, TransportError)


def test_default_endpoint_and_configurable_signature_header():
    transport = _InstantTransport()
    with CrptApiClient(request_limit=10, signature_header="X-Signature", transport=transport) as client:
        client.submit(b"{}", "sig")

    req = transport.requests[0]
    assert req.url == DOCUMENTS_CREATE_URL == "https://ismp.crpt.ru/api/v3/lk/documents/create"
    assert req.headers["X-Signature"] == "sig"


def test_send_document_serializes_then_submits(document_payload):
    transport = _InstantTransport()
    with CrptApiClient(request_limit=10, transport=transport) as client:
        result = client.send_document(document_payload, "sig")

    assert result.ok
    assert b'"participantInn":"7701234567"' in transport.requests[0].body


def test_send_document_invalid_raises_before_sending(document_payload):
    del document_payload["products"]
    transport = _InstantTransport()
    with CrptApiClient(request_limit=10, transport=transport) as client:
        with pytest.raises(SerializationError):
            client.send_document(document_payload, "sig")

    assert transport.requests == []


def test_create_json_document(document_payload):
    with CrptApiClient(request_limit=10, transport=_InstantTransport()) as client:
        text = client.create_json_document(document_payload)
    assert '"docId":"doc-0001"' in text


def test_close_stops_replenisher_and_rejects_submissions():
    before = _replenisher_threads()
    client = CrptApiClient(request_limit=10, transport=_InstantTransport())
    assert _replenisher_threads() == before + 1

    client.close()
    client.close()

    assert _replenisher_threads() == before
    with pytest.raises(PermitGateClosedError):
        client.submit(b"{}", "sig")


def test_submit_racing_close_does_not_restart_replenisher():
    """A submit that passed the closed check before close() must not revive the gate."""
    before = _replenisher_threads()
    client = CrptApiClient(request_limit=10, transport=_InstantTransport())
    client.close()
    client._closed = False  # state seen by a submit that checked just before close()

    with pytest.raises(PermitGateClosedError):
        client.submit(b"{}", "sig")

    assert _replenisher_threads() == before


def test_paced_strategy_spaces_calls():
    transport = _InstantTransport()
    with CrptApiClient(request_limit=10, gate_strategy="paced", transport=transport) as client:
        start = time.monotonic()
        client.submit(b"{}", "sig")
        client.submit(b"{}", "sig")
        elapsed = time.monotonic() - start

    assert elapsed >= 0.09


def test_httpx_transport_used_by_default(mock_httpx_client):
    mock_httpx_client(DOCUMENTS_CREATE_URL, status_code=200, json_payload={"value": "ok"})
    with CrptApiClient(request_limit=10) as client:
        result = client.submit('{"docId": "1"}', "sig")

    assert result.ok
    assert result.body == '{"value": "ok"}'
    request = mock_httpx_client.calls[0]
    assert request.method == "POST"
    assert request.headers["Signature"] == "sig"
