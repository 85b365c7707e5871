"""Logging setup."""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install the stderr handler and set the root level.

    ``basicConfig`` leaves existing handlers alone, so calling this again only
    changes the level.
    """
    logging.basicConfig(format=_FORMAT)
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))
