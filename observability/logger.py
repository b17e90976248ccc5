"""
observability/logger.py — Structured Logger

structlog routed through stdlib logging:
  - a rotating JSON file, always on
  - stderr output (pretty or JSON), off by default so it can't interleave with the REPL
  - session_id bound per turn via contextvars
  - anything that looks like a `key=` query parameter is masked before rendering

Usage:
    from observability.logger import get_logger, setup_logging

    setup_logging(level="INFO", log_dir="./data/logs")
    log = get_logger(__name__)
    log.info("orchestrator.turn_start", route="conversation")
"""

from __future__ import annotations

import logging
import logging.handlers
import re
import sys
from pathlib import Path
from typing import Any

import structlog

LOG_FILE_NAME = "shim-agent.log"

# Loggers that log full request URLs (and so the API key) at INFO
_NOISY_LOGGERS = ("httpx", "httpcore")

_KEY_PARAM_RE = re.compile(r"([?&]key=)[^&\s\"']+")


def redact_api_key(_logger: Any, _method: str, event_dict: dict) -> dict:
    """structlog processor: mask `key=<secret>` inside any string value."""
    for k, v in event_dict.items():
        if isinstance(v, str) and "key=" in v:
            event_dict[k] = _KEY_PARAM_RE.sub(r"\1***", v)
    return event_dict


def _shared_processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        redact_api_key,
    ]


def _formatter(renderer: Any, pre_chain: list[Any]) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        foreign_pre_chain=pre_chain,
    )


def setup_logging(
    level: str = "INFO",
    log_dir: str | Path = "./data/logs",
    json_format: bool = True,
    console_output: bool = False,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """
    Configure structlog and stdlib logging. Call once, from main.bootstrap().

    Args:
        level:          DEBUG | INFO | WARNING | ERROR | CRITICAL
        log_dir:        Directory for shim-agent.log and its rotations.
        json_format:    Console renderer: JSON if True, coloured key=value if False.
                        The file is always JSON.
        console_output: Also log to stderr.
        max_bytes:      Rotate the file past this size.
        backup_count:   Rotated files to keep.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    pre_chain = _shared_processors()

    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_dir / LOG_FILE_NAME,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(_formatter(structlog.processors.JSONRenderer(), pre_chain))
    handlers: list[logging.Handler] = [file_handler]

    if console_output:
        console_renderer = (
            structlog.processors.JSONRenderer()
            if json_format
            else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(_formatter(console_renderer, pre_chain))
        handlers.append(stderr_handler)

    for handler in handlers:
        handler.setLevel(numeric_level)
    logging.basicConfig(level=numeric_level, handlers=handlers, force=True)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = "shim_agent", **initial_values: Any) -> structlog.stdlib.BoundLogger:
    """Module logger, optionally with values bound to every line it emits."""
    logger = structlog.get_logger(name)
    return logger.bind(**initial_values) if initial_values else logger


def bind_session(session_id: str) -> None:
    """Attach session_id to every log line in this thread until clear_session()."""
    structlog.contextvars.bind_contextvars(session_id=session_id)


def clear_session() -> None:
    structlog.contextvars.clear_contextvars()
