"""structlog setup for harsnip.

Log events go to stderr so that snippets printed on stdout can be piped
straight into a shell or a file. Modules log through ``get_logger`` with
event-style names (``request_dropped``, ``json_body_parse_failed``) and
keyword context.
"""

import logging as stdlib_logging
import sys
from typing import Any

import structlog

# -v / -vv on the command line step through these
_VERBOSITY_LEVELS = ("INFO", "DEBUG")


def level_for_verbosity(verbosity: int, default: str = "WARNING") -> str:
    """Map a ``-v`` count to a level name; zero keeps ``default``."""
    if verbosity <= 0:
        return default
    return _VERBOSITY_LEVELS[min(verbosity, len(_VERBOSITY_LEVELS)) - 1]


def configure_logging(level: str = "WARNING", json_output: bool = False) -> None:
    """Configure structlog for harsnip.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unknown
            names fall back to INFO.
        json_output: Render one JSON object per event instead of the
            human-readable console format.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(stdlib_logging, level.upper(), stdlib_logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    """Return a lazy structlog logger.

    The logger resolves the current configuration on first use, so module
    level ``LOG = get_logger(__name__)`` picks up a later ``configure_logging``.

    Args:
        name: Module name, attached to every event as ``logger``.
    """
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(logger=name)
