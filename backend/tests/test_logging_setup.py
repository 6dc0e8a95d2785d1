import logging

import pytest

from dailytasks.core.logging_setup import setup_logging


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


def test_console_only(restore_root_logging) -> None:
    setup_logging(level="warning")

    (handler,) = restore_root_logging.handlers
    assert isinstance(handler, logging.StreamHandler)
    assert handler.level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.WARNING


def test_file_handler_and_console_filter(restore_root_logging, tmp_path) -> None:
    setup_logging(level=logging.INFO, log_dir=tmp_path / "logs")

    console, file_handler = restore_root_logging.handlers
    assert isinstance(file_handler, logging.FileHandler)
    assert (tmp_path / "logs" / "dailytasks.log").exists()

    (noise_filter,) = console.filters

    def record(name, level):
        return logging.LogRecord(name, level, __file__, 1, "msg", None, None)

    assert noise_filter.filter(record("dailytasks.services.board", logging.DEBUG))
    assert not noise_filter.filter(record("httpx", logging.INFO))
    assert noise_filter.filter(record("httpx", logging.WARNING))
