"""Logging configuration helpers."""

import logging

# Per-request lines from the HTTP clients drown out the rotation debug output.
_NOISY_LOGGERS = ("httpx", "httpcore", "hpack")


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure the inspirat logger with a single stream handler.

    ``level`` may be a number or a level name such as ``"debug"``.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    logger = logging.getLogger("inspirat")
    logger.setLevel(level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
