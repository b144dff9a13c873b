from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

import structlog

__all__ = ["get_logger", "redact_token", "setup_logging"]

_TOKEN_RE = re.compile(r"bot\d+:[A-Za-z0-9_-]+")
_REDACTED = "bot[REDACTED]"


def redact_token(value: str) -> str:
    return _TOKEN_RE.sub(_REDACTED, value)


def _redact(value: Any) -> Any:
    if isinstance(value, str):
        return redact_token(value)
    if isinstance(value, Mapping):
        return {key: _redact(item) for key, item in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return [_redact(item) for item in value]
    return value


def _redact_processor(
    _logger: Any, _method: str, event_dict: structlog.typing.EventDict
) -> structlog.typing.EventDict:
    return {key: _redact(value) for key, value in event_dict.items()}


def setup_logging(*, debug: bool = False, json: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    renderer: structlog.typing.Processor = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            _redact_processor,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(name)
