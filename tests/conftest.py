import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_md2adf_logging():
    """Drop handlers installed by setup_logging so they don't leak across tests."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if getattr(handler, "_md2adf", False):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
