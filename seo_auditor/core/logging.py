"""
Logging configuration for the FastAPI application.
"""
import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def _normalise_level(level: str | int | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        value = level.strip().upper()
        if value.isdigit():
            return int(value)
        resolved = logging.getLevelName(value)
        if isinstance(resolved, int):
            return resolved
    return logging.INFO


def configure_logging(level: str | int | None = None) -> int:
    """Configure root logging to stream to the console.

    Existing root handlers are replaced so repeated calls (reloads, tests)
    don't duplicate output. Returns the effective level.
    """
    log_level = _normalise_level(level)

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=[logging.StreamHandler()])
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))

    logging.getLogger(__name__).info(f"Logging configured at {logging.getLevelName(log_level)}")
    return log_level
