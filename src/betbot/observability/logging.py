"""
Structured logging setup.

Console output for interactive runs, JSON lines for anything that ships
logs elsewhere. Both go to stderr; stdout belongs to the CLI tables.
"""

import logging
import sys
import uuid
from contextlib import contextmanager
from typing import Iterator, Optional

import structlog

# Libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(
    level: Optional[str] = None,
    format: Optional[str] = None,
) -> None:
    """
    Configure structlog and the stdlib logging bridge.

    Args:
        level: Log level name (default from settings)
        format: 'json' or 'console' (default from settings)
    """
    if level is None or format is None:
        from betbot.config import get_settings

        settings = get_settings()
        level = level or settings.log_level
        format = format or settings.log_format

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if format == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper()),
        force=True,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@contextmanager
def run_context(**fields) -> Iterator[str]:
    """
    Tag every log line inside the block with a fresh ``run_id`` plus
    ``fields``. Yields the run id.
    """
    run_id = uuid.uuid4().hex[:8]
    with structlog.contextvars.bound_contextvars(run_id=run_id, **fields):
        yield run_id
