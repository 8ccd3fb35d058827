import logging

from pythonjsonlogger.json import JsonFormatter

from sluggable.core import observability


def test_setup_logging_uses_json_and_env_level(monkeypatch):
    root = logging.getLogger()
    previous_handlers, previous_level = root.handlers[:], root.level
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("SLUGGABLE_LOG_LEVEL", "ERROR")
    try:
        observability.setup_logging()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.DEBUG
        assert logging.getLogger("sluggable").level == logging.ERROR
    finally:
        root.handlers = previous_handlers
        root.setLevel(previous_level)
        logging.getLogger("sluggable").setLevel(logging.NOTSET)
