from __future__ import annotations

import logging

from dependency_injector import containers, providers

from ..core.domain.enums import GateStrategy, TimeUnit
from ..core.domain.models import QuotaWindow
from ..core.usecases.submit_document import SubmitDocumentUseCase
from ..infra.http_client import HttpClient
from ..infra.rate_limiter import build_permit_gate
from ..infra.serializer import DocumentSerializer
from ..config.settings import AppConfig

logger = logging.getLogger(__name__)


def permit_gate_resource(time_unit, window_duration, request_limit, gate_strategy):
	"""Create the client's permit gate and stop its replenisher on shutdown."""
	window = QuotaWindow(
		unit=TimeUnit(time_unit),
		duration=window_duration,
		request_limit=request_limit,
	)
	strategy = GateStrategy(gate_strategy)
	logger.info(
		"Initializing %s permit gate: %d requests per %s %s",
		strategy.value, window.request_limit, window.duration, window.unit.value,
	)
	gate = build_permit_gate(window, strategy)
	try:
		yield gate
	finally:
		logger.debug("Closing permit gate")
		gate.close()


def http_client_resource(timeout_seconds):
	client = HttpClient(timeout_seconds=timeout_seconds)
	try:
		yield client
	finally:
		logger.debug("Closing HTTP client")
		client.close()


class Container(containers.DeclarativeContainer):
	config = providers.Configuration(pydantic_settings=[AppConfig()])

	permit_gate = providers.Resource(
		permit_gate_resource,
		time_unit=config.time_unit,
		window_duration=config.window_duration,
		request_limit=config.request_limit,
		gate_strategy=config.gate_strategy,
	)

	http_client = providers.Resource(
		http_client_resource,
		timeout_seconds=config.timeout_seconds,
	)

	serializer = providers.Singleton(DocumentSerializer)

	submit_uc = providers.Factory(
		SubmitDocumentUseCase,
		gate=permit_gate,
		transport=http_client,
		endpoint_url=config.endpoint_url,
		signature_header=config.signature_header,
	)
