import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_stockroom_logger():
    """Undo configure_logging() calls made by the CLI between tests."""
    logger = logging.getLogger("stockroom")
    level = logger.level
    yield
    for handler in [h for h in logger.handlers if h.get_name() == "stockroom-console"]:
        logger.removeHandler(handler)
    logger.setLevel(level)
