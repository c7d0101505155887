import logging
from typing import Callable, Dict

import structlog
from structlog.stdlib import add_log_level, add_logger_name
from structlog.typing import Processor

# Final processor per output format.
RENDERERS: Dict[str, Callable[[], Processor]] = {
    "console": lambda: structlog.dev.ConsoleRenderer(colors=False),
    "json": lambda: structlog.processors.JSONRenderer(sort_keys=True),
}


def setup_logging(level: int = logging.INFO, fmt: str = "console") -> None:
    """Configure structlog over standard logging at ``level``.

    ``fmt`` picks the renderer from :data:`RENDERERS`. JSON output renders
    tracebacks into the event dict, and debug runs also record the call
    site so per-tick FOV timings can be traced back to their caller.
    """
    if fmt not in RENDERERS:
        raise ValueError(f"Unknown log format '{fmt}'")

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_logger_name,
        add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=fmt == "json"),
    ]
    if level <= logging.DEBUG:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                {
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.LINENO,
                }
            )
        )
    if fmt == "json":
        processors.append(structlog.processors.format_exc_info)
    processors.append(RENDERERS[fmt]())

    logging.basicConfig(level=level, format="%(message)s")
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def parse_level(name: str) -> int:
    """Translate a level name such as ``"debug"`` into a logging constant."""
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level '{name}'")
    return level
