import logging

import pytest

from classrepo.logging import configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_sets_level_and_handler(restore_root_logger) -> None:
    configure_logging("DEBUG", json_output=True)
    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1


def test_configure_logging_unknown_level_falls_back(restore_root_logger) -> None:
    configure_logging("nonsense", json_output=False)
    assert restore_root_logger.level == logging.INFO
