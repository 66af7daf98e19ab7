"""Logging setup for hosts and scripts that embed the engine."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from layout_units.config import settings

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Load .env and configure the root logger; level defaults to LAYOUT_UNITS_LOG_LEVEL."""
    load_dotenv()
    name = (level or settings.layout_units_log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format=LOG_FORMAT,
    )
