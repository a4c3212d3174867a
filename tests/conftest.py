from __future__ import annotations

import logging

import pytest

from syncbus.bus import Bus
from syncbus.settings import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep SYNCBUS_* variables from the host out of the tests."""
    for name in ("SYNCBUS_CAPACITY", "SYNCBUS_COPY_VALUES", "SYNCBUS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    logger = logging.getLogger("syncbus")
    level = logger.level
    yield
    logger.setLevel(level)


@pytest.fixture
def bus():
    """A bus with a small capacity hint and default settings."""
    return Bus(5, settings=Settings())
