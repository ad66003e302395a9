import logging
import sys
from typing import Any

import orjson
import structlog


def _json_serializer(obj: Any, default: Any) -> str:
    return orjson.dumps(obj, default=default).decode("utf-8")


def configure_logging(*, level: str = "INFO") -> None:
    """
    Configure structured logging for the whole app.

    Call once at process startup.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    processors: list = [
        # run_id and friends bound per worker thread
        structlog.contextvars.merge_contextvars,

        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),

        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,

        structlog.processors.JSONRenderer(serializer=_json_serializer),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )

    # werkzeug / flask log through stdlib; keep them on the same stream
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def bind_context(**values: Any) -> None:
    """Bind key/values to every later log entry in this thread / context."""
    structlog.contextvars.bind_contextvars(**values)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
