"""Tests for the speedy-proxy CLI."""

import os
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from speedy_proxy.cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate from the developer's environment and config files."""
    for key in ("SPEEDY_USERNAME", "SPEEDY_PASSWORD", "PORT", "SPEEDY_PROXY_CONFIG_PATH"):
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


class TestConfigShow:
    """Tests for `speedy-proxy config show`."""

    def test_secrets_redacted(self, monkeypatch):
        monkeypatch.setenv("SPEEDY_USERNAME", "acme")
        monkeypatch.setenv("SPEEDY_PASSWORD", "hunter2")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "hunter2" not in result.output
        assert "acme" not in result.output
        assert "***REDACTED***" in result.output
        assert "https://api.speedy.bg/v1" in result.output

    def test_missing_config_file(self):
        result = runner.invoke(app, ["config", "show", "--config", "/nonexistent.yaml"])
        assert result.exit_code == 1


class TestServe:
    """Tests for `speedy-proxy serve`."""

    def test_runs_uvicorn_with_factory(self):
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, ["serve", "--port", "4000"])

        assert result.exit_code == 0
        args, kwargs = mock_run.call_args
        assert args[0] == "speedy_proxy.api.main:create_app"
        assert kwargs["factory"] is True
        assert kwargs["port"] == 4000
        assert kwargs["host"] == "0.0.0.0"

    def test_port_from_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "5050")
        with patch("uvicorn.run") as mock_run:
            runner.invoke(app, ["serve"])

        assert mock_run.call_args.kwargs["port"] == 5050

    def test_config_path_propagated(self, monkeypatch, tmp_path):
        path = tmp_path / "proxy.yaml"
        path.write_text("server:\n  port: 7000\n")
        with patch("uvicorn.run") as mock_run:
            runner.invoke(app, ["serve", "--config", str(path)])

        assert mock_run.call_args.kwargs["port"] == 7000
        assert os.environ["SPEEDY_PROXY_CONFIG_PATH"] == str(path)
