"""structlog setup for the HTTP service.

Library code only calls ``structlog.get_logger()``; the service configures
rendering and level filtering once at startup.
"""

import logging

import structlog

_NOISY_LIBRARIES = ("httpx", "httpcore", "openai")


def configure_logging(level: str = "INFO", log_format: str = "console") -> None:
    """Configure structlog output.

    Args:
        level: Minimum level name ("DEBUG", "INFO", ...).
        log_format: "json" for machine-readable lines, "console" otherwise.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            (
                structlog.processors.JSONRenderer()
                if log_format == "json"
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )

    for lib in _NOISY_LIBRARIES:
        logging.getLogger(lib).setLevel(logging.WARNING)
