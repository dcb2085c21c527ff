"""Logging configuration."""
import logging
import sys
from typing import Optional

from foodies.core.config import settings


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure storefront logging.

    The level applies to the ``foodies`` loggers only. A stdout handler is
    added to the root logger unless the host application already set one up.
    """
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )
    logging.getLogger("foodies").setLevel((level or settings.log_level).upper())

    # Set third-party loggers to WARNING
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
