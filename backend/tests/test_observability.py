"""Structured logging - JSON formatter surfaces game context fields."""

import json
import logging

from punchlines.infrastructure.observability import JSONFormatter


def _record(**extra):
    record = logging.LogRecord(
        "punchlines.test", logging.INFO, __file__, 1, "committed", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_game_fields():
    line = JSONFormatter().format(
        _record(game_code="123456", round_number=2, operation="start_game"),
    )
    log = json.loads(line)
    assert log["message"] == "committed"
    assert log["game_code"] == "123456"
    assert log["round_number"] == 2
    assert log["operation"] == "start_game"


def test_json_formatter_skips_missing_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert "player_id" not in log
    assert log["level"] == "INFO"
