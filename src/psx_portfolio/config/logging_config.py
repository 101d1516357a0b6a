"""Logging setup for the API server and in-process use."""

import logging
import sys
from typing import Optional

from psx_portfolio.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PACKAGE_LOGGER = "psx_portfolio"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Send ledger logs to stdout.

    ``level`` overrides ``PSX_LOG_LEVEL``. SQL statements are only logged
    at DEBUG.
    """
    level_name = (level or get_settings().log_level).upper()
    numeric_level = getattr(logging, level_name)

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(numeric_level)

    sql_level = logging.INFO if numeric_level <= logging.DEBUG else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(sql_level)
