"""
FILE: taskproc/log.py
PURPOSE: Logging setup for the taskproc CLI
EXPORTS:
  - configure_logging(verbose, log_json) -> None
DEPENDENCIES:
  - logging, sys (stdlib)
  - structlog (rendering of stdlib and structlog records)
NOTES:
  - Called once per invocation from the CLI callback (--verbose, --log-json)
  - Core modules log through logging.getLogger(__name__) and never configure handlers
  - All log output goes to stderr; stdout carries only command output (tables, JSON)
  - Without --verbose only warnings reach the user: skipped source records,
    replay entries that no longer parse, ledger read/write failures
  - --log-json emits one JSON object per line (event, level, logger, timestamp)
"""

import logging
import sys
from typing import List

import structlog


def configure_logging(verbose: bool = False, log_json: bool = False) -> None:
    """Install one stderr handler on the root logger and set the taskproc level.

    Args:
        verbose: Enable DEBUG-level output for taskproc. When False, only WARNING+.
        log_json: Use the JSON renderer instead of the console renderer.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: List[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("taskproc").setLevel(level)
