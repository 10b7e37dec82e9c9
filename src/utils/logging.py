"""structlog integration for ipcountry.

ipcountry runs inside someone else's process, so importing it never touches
logging configuration.  Module loggers come from :func:`get_logger` and stay
lazy: until the host configures structlog they use structlog's defaults, and
afterwards they follow whatever the host set up.

Hosts without their own structlog setup, and the lookup CLI, can call
:func:`configure_logging`.  It routes structlog through the standard
``logging`` module so ipcountry events, httpx and the host's stdlib loggers
share one handler and one renderer (console in development, JSON when
``APP_ENV=production``).  Handlers already on the root logger are left alone.
"""

import logging
import os
import sys
from typing import TextIO

import structlog

# Name of the root handler installed by configure_logging().  A repeat call
# swaps this handler instead of stacking a second one.
HANDLER_NAME = "ipcountry"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> structlog.stdlib.BoundLogger:
    """Route structlog through stdlib logging and attach one stream handler.

    Args:
        log_level: Root logging level (DEBUG, INFO, WARNING, ERROR).
        json_output: Force JSON lines.  Otherwise JSON is used only when
                     ``APP_ENV=production``.
        stream: Destination for the handler; defaults to ``sys.stderr``.

    Returns:
        A logger bound to this module.
    """
    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"
    stream = stream or sys.stderr

    if use_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_shared_processors(),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    # httpx logs every request at INFO; one line per provider call is noise.
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return get_logger(__name__)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a lazy structlog logger named *name*.

    Never configures anything; see :func:`configure_logging`.
    """
    return structlog.get_logger(name)
