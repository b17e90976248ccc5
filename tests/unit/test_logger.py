"""
tests/unit/test_logger.py — Structured Logging Unit Tests
"""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from observability.logger import (
    bind_session,
    clear_session,
    get_logger,
    redact_api_key,
    setup_logging,
)


@pytest.fixture
def restore_logging():
    yield
    clear_session()
    root = logging.getLogger()
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)
    structlog.reset_defaults()


def _read_events(log_dir):
    lines = (log_dir / "shim-agent.log").read_text(encoding="utf-8").splitlines()
    return [json.loads(line) for line in lines if line.strip()]


class TestSetupLogging:
    def test_writes_json_file_with_session(self, tmp_path, restore_logging):
        setup_logging(level="DEBUG", log_dir=tmp_path, console_output=False)
        log = get_logger("test.logger", component="unit")

        bind_session("sess-42")
        log.info("unit.event", answer=42)
        clear_session()
        log.info("unit.after_clear")

        for handler in logging.getLogger().handlers:
            handler.flush()

        events = _read_events(tmp_path)
        first = next(e for e in events if e["event"] == "unit.event")
        assert first["answer"] == 42
        assert first["session_id"] == "sess-42"
        assert first["component"] == "unit"
        assert first["level"] == "info"

        second = next(e for e in events if e["event"] == "unit.after_clear")
        assert "session_id" not in second

    def test_level_filters(self, tmp_path, restore_logging):
        setup_logging(level="WARNING", log_dir=tmp_path, console_output=False)
        log = get_logger("test.level")
        log.info("unit.quiet")
        log.warning("unit.loud")

        for handler in logging.getLogger().handlers:
            handler.flush()

        names = [e["event"] for e in _read_events(tmp_path)]
        assert "unit.loud" in names
        assert "unit.quiet" not in names

    def test_httpx_logger_quieted(self, tmp_path, restore_logging):
        setup_logging(level="DEBUG", log_dir=tmp_path, console_output=False)
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_creates_log_dir(self, tmp_path, restore_logging):
        target = tmp_path / "nested" / "logs"
        setup_logging(log_dir=target, console_output=False)
        assert target.is_dir()


class TestRedaction:
    def test_key_query_param_masked(self):
        event = {"event": "x", "url": "https://g.test/v1/models/m:generateContent?key=SECRET&alt=json"}
        out = redact_api_key(None, "info", event)
        assert "SECRET" not in out["url"]
        assert "?key=***&alt=json" in out["url"]

    def test_other_values_untouched(self):
        event = {"event": "x", "count": 3, "note": "monkey business"}
        assert redact_api_key(None, "info", dict(event)) == event

    def test_redacted_in_file(self, tmp_path, restore_logging):
        setup_logging(log_dir=tmp_path, console_output=False)
        get_logger("test.redact").warning("unit.url", url="https://x.test/?key=abc123")
        for handler in logging.getLogger().handlers:
            handler.flush()
        text = (tmp_path / "shim-agent.log").read_text(encoding="utf-8")
        assert "abc123" not in text
