import logging
from logging.handlers import RotatingFileHandler

from logging_config import LOGGER_NAME, setup_logging


def test_console_only_when_no_file():
    logger = setup_logging("WARNING", None)

    assert logger.name == LOGGER_NAME
    assert len(logger.handlers) == 1
    assert logger.handlers[0].level == logging.WARNING


def test_file_handler_writes_debug(tmp_path):
    log_file = tmp_path / "app.log"
    logger = setup_logging("INFO", str(log_file))

    logging.getLogger(f"{LOGGER_NAME}.tests").debug("debug goes to the file")
    for handler in logger.handlers:
        handler.flush()

    assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)
    assert "debug goes to the file" in log_file.read_text(encoding="utf-8")
    setup_logging("INFO", None)


def test_repeated_setup_does_not_stack_handlers():
    setup_logging("INFO", None)
    logger = setup_logging("INFO", None)

    assert len(logger.handlers) == 1
