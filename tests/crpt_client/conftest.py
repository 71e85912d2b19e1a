"""tests/conftest.py

Common fixtures for the entire test suite.
"""

import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner


@pytest.fixture(scope="session")
def runner() -> CliRunner:
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture
def document_payload() -> dict:
    """A valid document in its camelCase wire form."""
    return {
        "description": {"participantInn": "7701234567"},
        "docId": "doc-0001",
        "docStatus": "DRAFT",
        "docType": "LP_INTRODUCE_GOODS",
        "importRequest": True,
        "ownerInn": "7701234567",
        "producerInn": "7709876543",
        "productionDate": "2024-01-15",
        "productionType": "OWN_PRODUCTION",
        "products": [
            {
                "certificateDocument": "CONFORMITY_CERTIFICATE",
                "certificateDocumentDate": "2024-01-10",
                "certificateDocumentNumber": "RU-123",
                "tnvedCode": "6401100000",
                "uitCode": "010460043993125621JgXJ5.T",
                "uituCode": None,
            }
        ],
        "regDate": "2024-01-16",
        "regNumber": "REG-42",
    }


@pytest.fixture
def document_file(tmp_path: Path, document_payload: dict) -> Path:
    path = tmp_path / "document.json"
    path.write_text(json.dumps(document_payload), encoding="utf-8")
    return path


@pytest.fixture
def mock_httpx_client(monkeypatch):
    """
    Replaces httpx.Client with a mock that uses a MockTransport.

    Returns a handler function that tests can use to register mock responses.
    """
    responses = {}
    calls_log: list[httpx.Request] = []
    original_client = httpx.Client

    def add_response(
        url: str,
        method: str = "POST",
        status_code: int = 200,
        json_payload: dict | None = None,
        content: bytes | None = None,
    ):
        """Register a mock response for a given URL and method."""
        if json_payload is not None:
            body = json.dumps(json_payload).encode("utf-8")
        else:
            body = content if content is not None else b""
        responses[(method.upper(), url)] = (status_code, body)

    def mock_transport(request: httpx.Request) -> httpx.Response:
        """The transport logic that returns registered responses or a 404."""
        key = (request.method, str(request.url))
        calls_log.append(request)
        if key in responses:
            status, body = responses[key]
            headers = {"Content-Length": str(len(body))}
            return httpx.Response(status, content=body, headers=headers)

        return httpx.Response(404, text=f"Mock URL not found: {request.method} {request.url}")

    def patched_client(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(mock_transport)
        return original_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "Client", patched_client)
    add_response.calls = calls_log  # type: ignore[attr-defined]
    return add_response
