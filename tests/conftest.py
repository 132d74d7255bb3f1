"""Root test configuration: isolate tests from MDGEN_* environment and CLI logging setup"""

import logging
import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop MDGEN_* env vars so a developer's shell settings never leak into load_config."""
    for name in list(os.environ):
        if name.startswith("MDGEN_"):
            monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo configure_logging() calls made by CLI tests (handlers bound to captured streams)."""
    yield
    logger = logging.getLogger("mdgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
