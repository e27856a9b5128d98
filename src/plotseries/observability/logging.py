"""
Structured logging setup for plotseries.

Extractors and the series loader log through ``structlog.get_logger``;
configuration modules use the standard library ``logging`` module. Both end
up in the same handler: a JSON lines file when ``MonitoringConfig.log_file``
is set, plain console output on stderr otherwise.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, List

import structlog

if TYPE_CHECKING:
    from plotseries.config.config import MonitoringConfig


def _pre_chain() -> List[Any]:
    # build_number comes in through contextvars, bound by SeriesLoader.load
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _build_handler(config: MonitoringConfig) -> logging.Handler:
    """Create the single root handler and its structlog formatter."""
    renderers: List[Any]
    if config.log_file:
        handler: logging.Handler = logging.FileHandler(config.log_file, encoding="utf-8")
        renderers = [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        handler = logging.StreamHandler(sys.stderr)
        renderers = [structlog.dev.ConsoleRenderer(colors=False)]

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderers],
        )
    )
    return handler


def configure_logging(config: MonitoringConfig) -> None:
    """
    Route structlog and standard library logging through one handler.

    Calling it again replaces the previous handler.
    """
    logging.basicConfig(
        format="%(message)s",
        level=config.log_level.upper(),
        handlers=[_build_handler(config)],
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_pre_chain(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    structlog.get_logger("plotseries.logging").info(
        "Logging configured",
        level=config.log_level,
        output=config.log_file or "console",
    )
