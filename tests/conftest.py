import logging

import pytest

from subnet.config import SubnetConfig, set_config


@pytest.fixture(autouse=True)
def default_config():
    """Run every test against default limits, ignoring the caller's environment."""
    set_config(SubnetConfig())
    yield
    set_config(None)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("subnet")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
