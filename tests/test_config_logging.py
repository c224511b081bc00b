"""Tests for loguru sink configuration."""

import io
import json

from verification_system.config.logging import configure_logging, get_logger


def test_json_sink_carries_component_and_level_filter():
    stream = io.StringIO()
    configure_logging(log_level="WARNING", log_format="json", sink=stream)
    try:
        log = get_logger("orchestrator")
        log.info("dropped below threshold")
        log.warning("Verification failed", analyzer_id="scam")

        lines = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert len(lines) == 1
        record = lines[0]["record"]
        assert record["message"] == "Verification failed"
        assert record["extra"]["component"] == "orchestrator"
        assert record["extra"]["analyzer_id"] == "scam"
    finally:
        configure_logging()


def test_console_format_falls_back_to_json_off_tty(monkeypatch):
    monkeypatch.setattr("sys.stderr", io.StringIO())
    stream = io.StringIO()
    configure_logging(log_level="DEBUG", log_format="console", sink=stream)
    try:
        get_logger("cli").debug("hello")
        assert json.loads(stream.getvalue().splitlines()[0])["record"]["extra"]["component"] == "cli"
    finally:
        configure_logging()
