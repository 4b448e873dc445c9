"""Logging setup driven by :data:`~musclemap.core.config.settings`."""

import logging

from musclemap.core.config import settings

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once for scripts and embedding apps."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=_LOG_FORMAT,
    )
