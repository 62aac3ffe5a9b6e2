import json
import logging
import sys

import pytest

from journal_app.core.config import settings
from journal_app.core.logging_config import JSONFormatter, setup_logging


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_output_writes_one_object_per_line(restore_root_logger, capsys):
    setup_logging(level="DEBUG", json_output=True, service_name="journal-tests")

    logging.getLogger("journal_app.services.journal_store").info("Created entry %s", 7)

    lines = capsys.readouterr().out.strip().splitlines()
    record = json.loads(lines[-1])
    assert record["level"] == "INFO"
    assert record["logger"] == "journal_app.services.journal_store"
    assert record["message"] == "Created entry 7"
    assert record["service"] == "journal-tests"
    assert "timestamp" in record


def test_plain_output_is_not_json(restore_root_logger, capsys):
    setup_logging(level="INFO")

    logging.getLogger("journal_app").warning("Entry 3 not found")

    line = capsys.readouterr().out.strip().splitlines()[-1]
    assert "[WARNING] journal_app: Entry 3 not found" in line
    with pytest.raises(ValueError):
        json.loads(line)


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("disk full")
    except RuntimeError:
        record = logging.getLogger("journal_app").makeRecord(
            "journal_app", logging.ERROR, __file__, 1, "Could not save entry", (), sys.exc_info()
        )

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "Could not save entry"
    assert "RuntimeError: disk full" in payload["exception"]


def test_json_logging_is_off_by_default():
    assert settings.LOG_JSON is False