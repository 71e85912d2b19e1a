from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.domain.enums import GateStrategy, TimeUnit
from ..core.domain.models import QuotaWindow
from .urls import DOCUMENTS_CREATE_URL


class AppConfig(BaseSettings):
    """Application configuration with automatic environment variable loading.

    All settings can be overridden via environment variables with the CRPT_API_ prefix.
    For example:
        - CRPT_API_REQUEST_LIMIT=100
        - CRPT_API_TIME_UNIT=minutes
        - CRPT_API_WINDOW_DURATION=1
        - CRPT_API_SIGNATURE_HEADER=X-Signature

    Alternatively, settings can be provided programmatically when creating the client:
        client = CrptApiClient(time_unit=TimeUnit.MINUTES, request_limit=100)
    """

    model_config = SettingsConfigDict(
        env_prefix="CRPT_API_",
        case_sensitive=False,
        extra="forbid",
    )

    time_unit: TimeUnit = Field(
        default=TimeUnit.SECONDS,
        description="Unit in which window_duration is expressed",
    )

    window_duration: float = Field(
        default=1.0,
        allow_inf_nan=False,
        description="Length of one rate-limit window, in time_unit",
    )

    # Not constrained here: QuotaWindow raises InvalidArgumentError instead.
    request_limit: int = Field(
        default=10,
        description="Maximum number of submissions admitted per window",
    )

    gate_strategy: GateStrategy = Field(
        default=GateStrategy.FIXED_WINDOW,
        description="fixed_window (burst up to the limit, top-up every window) or paced (evenly spaced calls)",
    )

    endpoint_url: str = Field(
        default=DOCUMENTS_CREATE_URL,
        description="Document creation endpoint",
    )

    signature_header: str = Field(
        default="Signature",
        min_length=1,
        description="Header carrying the document signature (Signature or X-Signature depending on deployment)",
    )

    timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="HTTP timeout for a single submission",
    )

    def quota_window(self) -> QuotaWindow:
        return QuotaWindow(
            unit=self.time_unit,
            duration=self.window_duration,
            request_limit=self.request_limit,
        )
