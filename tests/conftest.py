import logging

import pytest


@pytest.fixture(autouse=True)
def reset_binview_logger():
    """The CLI detaches the binview logger from the root logger; undo that per test."""
    yield
    logger = logging.getLogger("binview")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
