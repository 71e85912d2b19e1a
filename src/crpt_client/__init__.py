"""crpt_client package: app/core/infra/shared.

Expose library-friendly API client at the package level.
"""

from .app.api import AppConfig, CrptApiClient
from .core.domain.document import Description, Document, Product
from .core.domain.enums import GateStrategy, SubmissionStatus, TimeUnit
from .core.domain.errors import (
    CrptApiError,
    HttpStatusError,
    InvalidArgumentError,
    PermitAcquireInterrupted,
    PermitGateClosedError,
    SerializationError,
    TransportError,
)
from .core.domain.models import QuotaWindow, SubmissionResult

import logging

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "CrptApiClient",
    "AppConfig",
    "Document",
    "Description",
    "Product",
    "TimeUnit",
    "GateStrategy",
    "SubmissionStatus",
    "QuotaWindow",
    "SubmissionResult",
    "CrptApiError",
    "InvalidArgumentError",
    "PermitAcquireInterrupted",
    "PermitGateClosedError",
    "TransportError",
    "HttpStatusError",
    "SerializationError",
]
