"""
Logging setup for processes embedding the scoring engine.
"""

import logging
from typing import Optional

from scorecard.config import Settings, get_settings


def configure_logging(config: Optional[Settings] = None) -> None:
    """
    Configure root logging from settings.

    The engine itself never calls this; it only emits through module-level
    loggers. Host processes (batch jobs, workers) call it once at startup.

    Args:
        config: Settings to use (defaults to the cached instance)
    """
    config = config or get_settings()

    logging.basicConfig(
        level=config.effective_log_level,
        format=config.log_format,
        datefmt=config.log_datefmt,
        force=True,
    )

    logging.getLogger(__name__).debug(
        "Logging configured for %s v%s (%s)",
        config.app_name,
        config.app_version,
        config.environment,
    )
