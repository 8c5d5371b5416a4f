"""
Structured Logging Setup
========================
structlog configuration shared by the ingestion services.

Production: JSON lines for log aggregation.
Development: colored console output.

Usage:
    from ingest_core.logging_config import setup_logging

    setup_logging(service_name="ingest-webhooks")
"""

import logging
import os
import sys
from typing import Any, Dict, Optional

import structlog

REDACTED = "[REDACTED]"

# Keys whose values never reach a log line
SENSITIVE_KEYS = frozenset({
    "secret",
    "webhook_secret",
    "x-webhook-secret",
    "x-webhook-signature",
    "signature",
    "expected_signature",
    "authorization",
    "cookie",
    "password",
    "token",
    "api_key",
    "apikey",
})


def redact_sensitive(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """structlog processor that masks sensitive values, including nested headers."""
    for key, value in list(event_dict.items()):
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = REDACTED
        elif isinstance(value, dict):
            event_dict[key] = {
                k: REDACTED if str(k).lower() in SENSITIVE_KEYS else v
                for k, v in value.items()
            }
    return event_dict


def setup_logging(
    service_name: str,
    level: Optional[str] = None,
    json_output: Optional[bool] = None,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        service_name: Name bound to every log line
        level: Logging level (defaults to LOG_LEVEL, then INFO or DEBUG)
        json_output: JSON renderer; defaults to True in production
    """
    is_production = os.getenv("APP_ENV", os.getenv("NODE_ENV", "")).lower() == "production"
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO" if is_production else "DEBUG")
    if json_output is None:
        json_output = is_production

    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            redact_sensitive,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(sys.stdout),
    )

    structlog.contextvars.bind_contextvars(service=service_name)
    structlog.get_logger(__name__).info(
        "logging_configured",
        level=logging.getLevelName(log_level),
        json_output=json_output,
    )
