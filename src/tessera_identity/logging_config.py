"""Logging setup for the command-line entry points."""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    - Console output with timestamps and module names
    - Configurable log level for tessera modules
    - WARNING level for noisy AWS client libraries
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    for name in ("tessera_store", "tessera_auth", "tessera_identity"):
        logging.getLogger(name).setLevel(log_level)

    # Quiet down noisy third-party loggers
    for name in ("botocore", "aiobotocore", "aioboto3"):
        logging.getLogger(name).setLevel(logging.WARNING)
