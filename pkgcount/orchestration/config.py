"""
Run settings from the environment: worker pool size and log level.
"""

import logging
import os

from pkgcount.aggregation import default_workers

WORKERS_ENV = "PKGCOUNT_WORKERS"
LOG_LEVEL_ENV = "PKGCOUNT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def get_max_workers(explicit: int | None = None) -> int:
    """
    Worker pool size. Order: explicit value, PKGCOUNT_WORKERS env, CPU count.
    Invalid env values are ignored with a warning.
    """
    if explicit is not None and explicit > 0:
        return explicit
    raw = os.environ.get(WORKERS_ENV, "").strip()
    if raw:
        try:
            value = int(raw)
        except ValueError:
            value = 0
        if value > 0:
            return value
        logger.warning("Ignoring %s=%r: expected a positive integer", WORKERS_ENV, raw)
    return default_workers()


def get_log_level(verbose: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else logging.WARNING
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(verbose: bool = False) -> None:
    """Configure logging once for the whole process (stderr)."""
    logging.basicConfig(level=get_log_level(verbose), format=LOG_FORMAT)
