"""Optional shipping of crawl events to PostHog over OTLP logs.

Nothing here is required for a crawl to succeed: with no project key, or with
``POSTHOG_DISABLED`` set, every call is a no-op.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from opentelemetry import _logs as logs
from opentelemetry.exporter.otlp.proto.http._log_exporter import OTLPLogExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor

from ..config import settings

POSTHOG_LOG_ENDPOINTS = {
    "us": "https://us.i.posthog.com/i/v1/logs",
    "eu": "https://eu.i.posthog.com/i/v1/logs",
}
DEFAULT_POSTHOG_ENDPOINT = POSTHOG_LOG_ENDPOINTS["us"]

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

_provider: LoggerProvider | None = None
_event_logger: logging.Logger | None = None

logger = logging.getLogger("job_board_scraper.telemetry")


def _resolve_endpoint() -> str:
    if settings.posthog_logs_endpoint:
        return settings.posthog_logs_endpoint.rstrip("/")
    region = (settings.posthog_region or "us").strip().lower()[:2]
    return POSTHOG_LOG_ENDPOINTS.get(region, DEFAULT_POSTHOG_ENDPOINT)


def is_enabled() -> bool:
    return bool(settings.posthog_project_api_key) and not settings.posthog_disabled


def _event_sink() -> logging.Logger:
    """Logger whose records are exported over OTLP; built once per process."""

    global _provider, _event_logger

    if _event_logger is not None:
        return _event_logger

    token = settings.posthog_project_api_key
    if not token:
        raise RuntimeError("POSTHOG_PROJECT_API_KEY is not configured")

    provider = LoggerProvider()
    exporter = OTLPLogExporter(
        endpoint=_resolve_endpoint(),
        headers={"Authorization": f"Bearer {token}"},
    )
    provider.add_log_record_processor(BatchLogRecordProcessor(exporter))
    logs.set_logger_provider(provider)

    event_logger = logging.getLogger("job_board_scraper.events")
    event_logger.setLevel(logging.DEBUG)
    event_logger.propagate = False
    event_logger.handlers = [h for h in event_logger.handlers if not isinstance(h, LoggingHandler)]
    event_logger.addHandler(LoggingHandler(level=logging.DEBUG, logger_provider=provider))

    _provider, _event_logger = provider, event_logger
    return event_logger


def _normalize_log_level(level: Any) -> int:
    if isinstance(level, int):
        return level
    return _LEVELS.get(str(level or "").strip().lower(), logging.INFO)


def ship_event(payload: Dict[str, Any]) -> None:
    """Export one structured event. ``data`` entries become ``data.<key>`` attributes."""

    event = str(payload.get("event") or "crawl")
    run_id = payload.get("runId")
    message = f"{event} | run_id={run_id}" if run_id else event

    attributes = {key: value for key, value in payload.items() if key != "data"}
    for key, value in (payload.get("data") or {}).items():
        attributes[f"data.{key}"] = value

    level = _normalize_log_level(payload.get("level"))
    _event_sink().log(level, message, extra=attributes, stacklevel=2)


def emit_crawl_event(
    event: str,
    *,
    level: str = "info",
    run_id: str | None = None,
    data: Dict[str, Any] | None = None,
) -> bool:
    """Ship one crawl event when telemetry is configured; returns True when emitted."""

    if not is_enabled():
        return False
    payload: Dict[str, Any] = {"event": event, "level": level, "data": dict(data or {})}
    if run_id:
        payload["runId"] = run_id
    try:
        ship_event(payload)
    except Exception as exc:  # noqa: BLE001
        logger.debug("PostHog emit failed event=%s error=%s", event, exc)
        return False
    return True


def flush(timeout_ms: int = 30000) -> bool:
    if _provider is None:
        return True
    return _provider.force_flush(timeout_ms)
