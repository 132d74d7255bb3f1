"""Loggers for the mdgen package and the reporter that collects render warnings"""

import logging
from typing import Optional

ROOT_LOGGER = "mdgen"
CONSOLE_FORMAT = "[mdgen] %(levelname)s %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for one mdgen component, e.g. get_logger("cache") -> 'mdgen.cache'."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Send mdgen records to stderr; called once per CLI invocation.

    Any handler left by an earlier call is replaced, so running several
    commands in one process never duplicates lines.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)
    return logger


class LoggingReporter:
    """Non-fatal render diagnostics: logged as they happen and kept for the summary."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_logger("render")
        self.warnings: list[str] = []

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)
        self.logger.warning(message)
