"""Tests for the verification CLI."""

from typer.testing import CliRunner

from verification_system.cli import main as cli_main
from verification_system.cli.main import app
from verification_system.screening import RequestRateLimiter

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "Version" in result.output


def test_agents_lists_catalogue():
    result = runner.invoke(app, ["agents"])
    assert result.exit_code == 0
    for analyzer_id in ["news", "fact", "scam", "phishing", "image", "video"]:
        assert analyzer_id in result.output


def test_scenarios():
    result = runner.invoke(app, ["scenarios"])
    assert result.exit_code == 0
    assert "Medical Misinformation" in result.output


def test_verify_demo_scenario():
    result = runner.invoke(
        app,
        ["verify", "NASA announces new Mars mission scheduled for 2026", "--fast", "--seed", "3"],
    )
    assert result.exit_code == 0
    assert "VERIFIED" in result.output


def test_verify_rejects_hostile_input():
    result = runner.invoke(app, ["verify", "<script>alert(1)</script>", "--fast"])
    assert result.exit_code == 2


def test_screen_reports_risk():
    result = runner.invoke(app, ["screen", "Urgent action required: wire transfer now"])
    assert result.exit_code == 0
    assert "Risk:" in result.output


def test_status():
    result = runner.invoke(app, ["status"])
    assert result.exit_code == 0
    assert "Analyzers" in result.output


def test_verify_rate_limited_per_requester(monkeypatch):
    monkeypatch.setattr(cli_main, "rate_limiter", RequestRateLimiter(max_requests=1, window_seconds=60))
    args = ["verify", "NASA announces new Mars mission scheduled for 2026", "--fast", "--requester", "tg:7"]

    assert runner.invoke(app, args).exit_code == 0

    result = runner.invoke(app, args)
    assert result.exit_code == 1
    assert "Too many requests" in result.output

    other = runner.invoke(app, args[:-1] + ["tg:8"])
    assert other.exit_code == 0
