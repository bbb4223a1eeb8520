import sys
from typing import Optional

from loguru import logger


LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "{message}"
)


def configure_logging(level: Optional[str] = None) -> int:
    """Configure a shared Loguru sink for applications embedding funcache.

    Records from funcache are disabled on import; this turns them back on.

    Returns:
        The Loguru handler id of the stderr sink.
    """
    if level is None:
        from funcache.settings import get_settings

        level = get_settings().log_level

    logger.remove()
    logger.enable("funcache")
    return logger.add(
        sys.stderr,
        level=level,
        format=LOG_FORMAT,
        backtrace=False,
        diagnose=False,
    )


def get_logger(name: Optional[str] = None, **kwargs):
    """Return a logger bound with an optional module/component name."""
    if name:
        return logger.bind(module=name, **kwargs)
    return logger.bind(**kwargs)
