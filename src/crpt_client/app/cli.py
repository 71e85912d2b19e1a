from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer

from .container import Container
from ..config.settings import AppConfig
from ..core.domain.enums import TimeUnit
from ..core.domain.errors import SerializationError
from ..core.domain.models import SubmissionResult


app = typer.Typer(help="Rate-limited client for the CRPT document creation API")


@contextmanager
def provide_container(config: Optional[AppConfig] = None) -> Iterator[Container]:
    container = Container()
    if config is not None:
        container.config.from_pydantic(config)
    container.init_resources()
    try:
        yield container
    finally:
        container.shutdown_resources()


def _read_document_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"Cannot read {path}: {e}", err=True)
        raise typer.Exit(code=1)


@app.command("submit", help="Validate DOCUMENT (a JSON file) and submit it, waiting for the rate limiter between calls.")
def submit(
    document: Path = typer.Argument(..., help="Path to the document JSON file"),
    signature: str = typer.Option(..., "--signature", "-s", help="Precomputed document signature"),
    repeat: int = typer.Option(1, "--repeat", "-n", min=1, help="Number of times to submit the document"),
    request_limit: Optional[int] = typer.Option(None, "--limit", help="Requests per window (default: CRPT_API_REQUEST_LIMIT or 10)"),
    time_unit: Optional[str] = typer.Option(None, "--unit", help="Window unit: ms, s, min, h, d"),
    window_duration: Optional[float] = typer.Option(None, "--window", help="Window length in --unit"),
    signature_header: Optional[str] = typer.Option(None, "--signature-header", help="Signature header name (Signature or X-Signature)"),
) -> None:
    text = _read_document_text(document)
    try:
        overrides = {
            "request_limit": request_limit,
            "time_unit": TimeUnit.from_str(time_unit) if time_unit else None,
            "window_duration": window_duration,
            "signature_header": signature_header,
        }
        config = AppConfig(**{k: v for k, v in overrides.items() if v is not None})
        config.quota_window()
    except ValueError as e:
        typer.echo(f"Invalid rate limit settings: {e}", err=True)
        raise typer.Exit(code=2)

    with provide_container(config) as container:
        try:
            payload = container.serializer().to_json(container.serializer().from_json(text))
        except SerializationError as e:
            typer.echo(f"Invalid document: {e}", err=True)
            raise typer.Exit(code=1)

        uc = container.submit_uc()
        failures = 0
        for i in range(1, repeat + 1):
            result = uc.execute(payload, signature)
            typer.echo(f"[{i}/{repeat}] {_format_result(result)}")
            if not result.ok:
                failures += 1
    if failures:
        raise typer.Exit(code=1)


@app.command("create-json", help="Validate DOCUMENT (a JSON file) and print it in canonical camelCase JSON.")
def create_json(
    document: Path = typer.Argument(..., help="Path to the document JSON file"),
) -> None:
    text = _read_document_text(document)
    with provide_container() as container:
        serializer = container.serializer()
        try:
            print(serializer.to_json(serializer.from_json(text)))
        except SerializationError as e:
            typer.echo(f"Invalid document: {e}", err=True)
            raise typer.Exit(code=1)


def _format_result(result: SubmissionResult) -> str:
    if result.ok:
        return "OK 200"
    if result.status_code is not None:
        return f"{result.status.value} {result.status_code}"
    return f"{result.status.value} {result.error}"


if __name__ == "__main__":  # pragma: no cover
    app()
