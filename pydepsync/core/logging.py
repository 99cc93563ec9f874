"""Logging for the pydepsync command.

Everything goes to stderr through one structlog-formatted handler, so the
patch report on stdout can be piped. ``PYDEPSYNC_LOG_LEVEL`` and
``PYDEPSYNC_LOG_FORMAT`` (``console`` or ``json``) tune it; ``--verbose``
wins over the level variable.
"""

from __future__ import annotations

import logging
import logging.config
import os

import structlog

# Third-party loggers that are chatty at INFO during index queries.
_QUIET_LOGGERS = ("httpx", "httpcore")


def _processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(fmt: str) -> structlog.types.Processor:
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(verbose: bool = False) -> None:
    level = "DEBUG" if verbose else os.environ.get("PYDEPSYNC_LOG_LEVEL", "INFO").upper()
    fmt = os.environ.get("PYDEPSYNC_LOG_FORMAT", "console").lower()
    processors = _processors()

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "pydepsync": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": processors,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        _renderer(fmt),
                    ],
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "pydepsync",
                },
            },
            "root": {"handlers": ["stderr"], "level": level},
            "loggers": {
                "pydepsync": {"level": level},
                **{name: {"level": "WARNING"} for name in _QUIET_LOGGERS},
            },
        }
    )
