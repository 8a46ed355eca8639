# tests/test_logging_config.py
"""
LOGGING SETUP TESTS
"""

import logging

import pytest

from goalmech.logging_config import setup_logging


@pytest.fixture
def package_logger():
    yield
    logger = logging.getLogger("goalmech")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def test_repeated_setup_keeps_one_console_handler(package_logger):
    setup_logging()
    logger = setup_logging(logging.DEBUG)
    assert logger.name == "goalmech"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_module_records_reach_log_file(package_logger, tmp_path):
    path = tmp_path / "run.log"
    logger = setup_logging(logging.INFO, str(path))
    assert len(logger.handlers) == 2

    logging.getLogger("goalmech.kernel.buckling").warning("equilibrium cap reached")
    logging.getLogger("goalmech.kernel.solver").debug("not at INFO")
    for handler in logger.handlers:
        handler.flush()

    text = path.read_text(encoding="utf-8")
    assert "WARNING goalmech.kernel.buckling: equilibrium cap reached" in text
    assert "not at INFO" not in text
    print("✓ Package records written to the log file")
