import logging
import sys
from typing import Union


LOGGER_NAME = "permit_signer"
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

logger = logging.getLogger(LOGGER_NAME)


def setup_logger(level: Union[str, int] = "WARNING") -> logging.Logger:
    """
    Attach a stderr handler to the package logger.

    stdout is kept for the signing result, so log records always go to
    stderr.  Calling this again replaces the handler, so it always writes
    to the current ``sys.stderr``.
    """
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger


def int_to_hex32(value: int) -> str:
    """0x-prefixed, zero-padded 32-byte hex for a signature scalar."""
    return "0x" + value.to_bytes(32, "big").hex()
