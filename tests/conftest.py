"""Shared pytest fixtures."""

import logging

import pytest

from atlas.utils import logging as atlas_logging


@pytest.fixture(autouse=True)
def _detach_log_handlers():
    """Remove handlers a CLI command attached to the root logger."""
    yield
    root = logging.getLogger()
    for handler in atlas_logging._installed_handlers:
        root.removeHandler(handler)
        handler.close()
    atlas_logging._installed_handlers.clear()
