import logging

from config import setup_logging


def test_repeated_setup_does_not_stack_handlers(tmp_path):
    foreign = logging.NullHandler()
    logger = logging.getLogger("ledger.config_test")
    logger.addHandler(foreign)

    setup_logging(str(tmp_path / "logs" / "first.log"), logger_name="ledger.config_test")
    setup_logging(str(tmp_path / "logs" / "second.log"), logger_name="ledger.config_test")

    handlers = list(logger.handlers)
    assert len(handlers) == 3
    assert foreign in handlers
    assert [h.baseFilename for h in handlers if isinstance(h, logging.FileHandler)] == [
        str(tmp_path / "logs" / "second.log")
    ]

    setup_logging(logger_name="ledger.config_test")
    assert len(logger.handlers) == 2

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_console_level(tmp_path):
    logger = setup_logging(level="warning", logger_name="ledger.config_level")
    console = [h for h in logger.handlers if type(h) is logging.StreamHandler]
    assert console[0].level == logging.WARNING
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
