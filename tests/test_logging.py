"""Tests for structlog configuration."""

import json

import structlog

from beacon.logging_config import configure_logging


def test_json_logging(capsys):
    """Test JSON output carries the event, level and context."""
    configure_logging(use_json=True)
    try:
        structlog.get_logger().info("password_reset_issued", user_id="u1")
        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "password_reset_issued"
        assert record["level"] == "info"
        assert record["user_id"] == "u1"
        assert "timestamp" in record
    finally:
        structlog.reset_defaults()
