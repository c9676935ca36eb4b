"""Tests for the Typer command-line entry point."""

from __future__ import annotations

from typer.testing import CliRunner

from cms_publisher import cli
from cms_publisher.core.types import PublishStats
from cms_publisher.runner import PublishResult


runner = CliRunner()


def _clear_env(monkeypatch):
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    for name in ("SERVICE_ID", "API_KEY", "ENDPOINT"):
        monkeypatch.delenv(name, raising=False)


def _set_env(monkeypatch):
    monkeypatch.setenv("SERVICE_ID", "svc")
    monkeypatch.setenv("API_KEY", "key")
    monkeypatch.setenv("ENDPOINT", "articles")


def test_missing_environment_exits_nonzero(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    called = False

    def fake_run_publish(*args, **kwargs):
        nonlocal called
        called = True

    monkeypatch.setattr(cli, "run_publish", fake_run_publish)

    result = runner.invoke(cli.app, ["-f", "a.md", "-w", str(tmp_path)])

    assert result.exit_code == 1
    assert "SERVICE_ID, API_KEY, ENDPOINT is not set" in result.output
    assert called is False


def test_cli_passes_parsed_files_and_overrides(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    _set_env(monkeypatch)
    captured = {}

    def fake_run_publish(files, workspace, cfg, credentials, **kwargs):
        captured.update(files=files, workspace=workspace, cfg=cfg, credentials=credentials)
        return PublishResult(stats=PublishStats(total=len(files), created=len(files)))

    monkeypatch.setattr(cli, "run_publish", fake_run_publish)

    result = runner.invoke(
        cli.app,
        ["-f", "public/a.md, public/b.md", "-w", str(tmp_path), "--timeout", "30", "--no-log-file"],
    )

    assert result.exit_code == 0, result.output
    assert captured["files"] == ["public/a.md", "public/b.md"]
    assert captured["workspace"] == tmp_path
    assert captured["cfg"].cms.timeout_seconds == 30.0
    assert captured["credentials"].service_id == "svc"


def test_malformed_config_file_exits_nonzero(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    _set_env(monkeypatch)
    config_path = tmp_path / "config.yaml"
    config_path.write_text("cms: [unclosed\n", encoding="utf-8")

    result = runner.invoke(cli.app, ["-f", "a.md", "-w", str(tmp_path), "-c", str(config_path)])

    assert result.exit_code == 1
    assert "Invalid config file" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)


def test_strict_mode_fails_on_failed_articles(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    _set_env(monkeypatch)

    def fake_run_publish(files, workspace, cfg, credentials, **kwargs):
        return PublishResult(stats=PublishStats(total=1, failed=1))

    monkeypatch.setattr(cli, "run_publish", fake_run_publish)

    relaxed = runner.invoke(cli.app, ["-f", "a.md", "-w", str(tmp_path)])
    strict = runner.invoke(cli.app, ["-f", "a.md", "-w", str(tmp_path), "--strict"])

    assert relaxed.exit_code == 0
    assert strict.exit_code == 1
