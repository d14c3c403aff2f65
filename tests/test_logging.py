import logging

from cargo_next.logging import get_logger, init_logging, parse_level


def test_parse_level_reads_env_when_no_level_given(monkeypatch):
    monkeypatch.setenv("CARGO_NEXT_LOG_LEVEL", "DEBUG")
    assert parse_level(None) == logging.DEBUG


def test_parse_level_default_without_env(monkeypatch):
    monkeypatch.delenv("CARGO_NEXT_LOG_LEVEL", raising=False)
    assert parse_level(None) == logging.WARNING


def test_parse_level_falls_back_to_warning_for_unknown_names():
    assert parse_level("notalevel") == logging.WARNING


def test_parse_level_is_case_insensitive():
    assert parse_level("info") == logging.INFO


def test_init_logging_installs_handler_on_bare_root():
    root = logging.getLogger()
    # start from a bare root logger
    for h in list(root.handlers):
        root.removeHandler(h)
    init_logging("DEBUG")
    assert root.handlers, "a bare root logger gets a stderr handler"
    assert root.level == logging.DEBUG


def test_init_logging_only_updates_level_when_configured():
    root = logging.getLogger()
    init_logging("DEBUG")
    handlers = list(root.handlers)
    init_logging("ERROR")
    assert root.handlers == handlers
    assert root.level == logging.ERROR


def test_get_logger_configures_root_on_first_use(monkeypatch):
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    monkeypatch.delenv("CARGO_NEXT_LOG_LEVEL", raising=False)
    logger = get_logger("unit.test")
    assert logger.name == "unit.test"
    assert logging.getLogger().handlers, "first logger request configures the root"
