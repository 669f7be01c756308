import logging
import os

from utils.logger import LOG_FILE, get_logger, resolve_level


def test_resolve_level():
    assert resolve_level(logging.WARNING) == logging.WARNING
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level("not-a-level") == logging.INFO


def test_get_logger_configures_once():
    logger = get_logger("tests.logger", level="warning")
    again = get_logger("tests.logger")

    assert logger is again
    assert len(logger.handlers) == 2
    assert logger.propagate is False


def test_loggers_share_one_file():
    first = get_logger("tests.logger.first")
    second = get_logger("tests.logger.second")

    file_handlers = [
        h for h in first.handlers + second.handlers if isinstance(h, logging.FileHandler)
    ]
    assert len(file_handlers) == 2
    assert file_handlers[0] is file_handlers[1]
    assert file_handlers[0].baseFilename.endswith(os.path.basename(LOG_FILE))
