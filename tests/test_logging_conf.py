import json
import logging
import sys

from pixqr.logging_conf import JsonFormatter


def test_json_formatter_merges_extra_fields():
    record = logging.LogRecord("pixqr.encoder", logging.INFO, __file__, 1, "pix payload %s", ("rejected",), None)
    record.code = "ERR_FIELD_LENGTH"
    line = json.loads(JsonFormatter().format(record))
    assert line == {
        "level": "INFO",
        "logger": "pixqr.encoder",
        "message": "pix payload rejected",
        "code": "ERR_FIELD_LENGTH",
    }


def test_json_formatter_includes_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord("pixqr.api", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
    line = json.loads(JsonFormatter().format(record))
    assert "ValueError: boom" in line["exc_info"]
