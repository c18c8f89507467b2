import logging

import pytest

from tabular_records.core import logging as tabular_logging
from tabular_records.core.logging import LOG_FORMAT, configure_logging


@pytest.fixture()
def root_logger():
    root = logging.getLogger()
    prev_level = root.level
    prev_handlers = list(root.handlers)
    touched = [logging.getLogger(name) for name in ("tabular", "sqlalchemy.engine")]
    prev_levels = [logger.level for logger in touched]
    try:
        yield root
    finally:
        root.handlers[:] = prev_handlers
        root.setLevel(prev_level)
        for logger, level in zip(touched, prev_levels):
            logger.setLevel(level)


def test_updates_existing_handlers(root_logger):
    handler = logging.StreamHandler()
    root_logger.handlers[:] = [handler]
    assert configure_logging("debug") == logging.DEBUG
    assert root_logger.level == logging.DEBUG
    assert handler.level == logging.DEBUG
    assert logging.getLogger("tabular").level == logging.DEBUG


def test_installs_canonical_format_without_handlers(root_logger, monkeypatch):
    calls = []
    monkeypatch.setattr(tabular_logging.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    root_logger.handlers[:] = []
    configure_logging("WARNING")
    assert calls == [{"level": logging.WARNING, "format": LOG_FORMAT}]
    assert LOG_FORMAT == "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def test_numeric_levels_are_accepted(root_logger):
    root_logger.handlers[:] = [logging.NullHandler()]
    assert configure_logging(logging.ERROR) == logging.ERROR
    assert root_logger.level == logging.ERROR


def test_unknown_level_falls_back_to_info(root_logger, caplog):
    with caplog.at_level(logging.WARNING, logger="tabular"):
        assert configure_logging("nonsense") == logging.INFO
    assert root_logger.level == logging.INFO
    assert "Unknown log level 'nonsense'" in caplog.text


def test_engine_echo_is_quieted_unless_debugging(root_logger):
    engine_logger = logging.getLogger("sqlalchemy.engine")
    root_logger.handlers[:] = [logging.NullHandler()]

    engine_logger.setLevel(logging.NOTSET)
    configure_logging("DEBUG")
    assert engine_logger.level == logging.NOTSET

    configure_logging("INFO")
    assert engine_logger.level == logging.WARNING


def test_explicit_engine_level_is_respected(root_logger):
    engine_logger = logging.getLogger("sqlalchemy.engine")
    engine_logger.setLevel(logging.INFO)
    root_logger.handlers[:] = [logging.NullHandler()]
    configure_logging("WARNING")
    assert engine_logger.level == logging.INFO
