from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

import fleetboard.cli as cli
import fleetboard.tui as tui
from fleetboard.repositories import fetch_workers
from fleetboard.settings import Settings
from fleetboard.store import Store

runner = CliRunner()


@pytest.fixture
def settings(tmp_path: Path, monkeypatch) -> Settings:
    s = Settings(
        FLEETBOARD_DB_PATH=tmp_path / "data.db",
        FLEETBOARD_LOG_DIR=tmp_path / "_logs",
    )
    monkeypatch.setattr(cli, "load_settings", lambda: s)
    return s


def test_seed_writes_both_buckets(settings: Settings):
    result = runner.invoke(cli.app, ["seed"])

    assert result.exit_code == 0, result.output
    assert "workers: 3 rows written" in result.output
    assert "devices: 3 rows written" in result.output

    with Store.open(settings.FLEETBOARD_DB_PATH) as store:
        assert len(fetch_workers(store)) == 3


def test_list_prints_records(settings: Settings):
    runner.invoke(cli.app, ["seed"])

    result = runner.invoke(cli.app, ["list", "devices"])

    assert result.exit_code == 0, result.output
    assert "Host 2" in result.output
    assert "Device 3" in result.output


def test_list_unseeded_bucket_is_fatal(settings: Settings):
    result = runner.invoke(cli.app, ["list", "workers"])

    assert result.exit_code == 1
    assert "bucket not found: workers" in result.output


def test_fatal_errors_are_logged_with_traceback(settings: Settings):
    runner.invoke(cli.app, ["list", "workers"])

    log_text = (settings.FLEETBOARD_LOG_DIR / "fleetboard.log").read_text(encoding="utf-8")
    assert "fatal: bucket not found: workers" in log_text
    assert "Traceback (most recent call last)" in log_text
    assert "BucketNotFoundError" in log_text


def test_list_rejects_unknown_bucket(settings: Settings):
    result = runner.invoke(cli.app, ["list", "sensors"])
    assert result.exit_code != 0


def test_status_shows_counts(settings: Settings):
    runner.invoke(cli.app, ["seed"])

    result = runner.invoke(cli.app, ["status"])

    assert result.exit_code == 0, result.output
    assert "Buckets" in result.output
    assert "workers" in result.output
    assert "devices" in result.output


def test_status_without_store_file_creates_nothing(settings: Settings):
    result = runner.invoke(cli.app, ["status"])

    assert result.exit_code == 0, result.output
    assert "Store is empty" in result.output
    assert not settings.FLEETBOARD_DB_PATH.exists()


def test_status_on_store_without_buckets(settings: Settings):
    Store.open(settings.FLEETBOARD_DB_PATH).close()

    result = runner.invoke(cli.app, ["status"])

    assert result.exit_code == 0, result.output
    assert "Store is empty" in result.output


def test_no_command_seeds_and_launches_dashboard(settings: Settings, monkeypatch):
    calls = []

    def fake_run_tui(ctx):
        calls.append(ctx)
        return 0

    monkeypatch.setattr(tui, "run_tui", fake_run_tui)

    result = runner.invoke(cli.app, [])

    assert result.exit_code == 0, result.output
    assert len(calls) == 1
    assert calls[0].settings is settings
    with Store.open(settings.FLEETBOARD_DB_PATH) as store:
        assert [w.name for w in fetch_workers(store)] == ["Worker 1", "Worker 2", "Worker 3"]


def test_dashboard_fatal_error_exits_nonzero(settings: Settings, monkeypatch):
    def fake_run_tui(ctx):
        ctx.state.fatal_error = "bucket not found: devices"
        return 1

    monkeypatch.setattr(tui, "run_tui", fake_run_tui)

    result = runner.invoke(cli.app, ["tui"])

    assert result.exit_code == 1
    assert "bucket not found: devices" in result.output


def test_unopenable_store_is_fatal(settings: Settings, tmp_path: Path):
    settings.FLEETBOARD_DB_PATH = tmp_path  # a directory

    result = runner.invoke(cli.app, ["seed"])

    assert result.exit_code == 1
    assert "cannot open" in result.output
