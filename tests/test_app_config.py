"""Configuration, structured logging, bootstrap and CLI tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from main import main
from tools.observability import instrument_operation
from tools.snapshot_store import InMemorySnapshotStore, JSONSnapshotStore, SQLiteSnapshotStore
from wardrobe_app.app import WardrobeApp
from wardrobe_app.config import DEFAULT_STORAGE_SLOT, AppConfig
from wardrobe_app.logging_config import JsonFormatter, correlation_context, operation_context, redact_for_log

_CONFIG_ENV = (
    "APP_ENV",
    "APP_CONFIG_PATH",
    "APP_CONFIG_DIR",
    "SNAPSHOT_BACKEND",
    "SNAPSHOT_PATH",
    "STORAGE_SLOT",
    "SEED_ON_FIRST_RUN",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _CONFIG_ENV:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_environment() -> None:
    config = AppConfig.from_env()

    assert config.snapshot_backend == "json"
    assert config.snapshot_path is None
    assert config.storage_slot == DEFAULT_STORAGE_SLOT
    assert config.seed_on_first_run is True
    assert config.environment is None


def test_environment_variables_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SNAPSHOT_BACKEND", "SQLite")
    monkeypatch.setenv("SNAPSHOT_PATH", "/tmp/closet.db")
    monkeypatch.setenv("SEED_ON_FIRST_RUN", "no")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = AppConfig.from_env()

    assert config.snapshot_backend == "sqlite"
    assert config.snapshot_path == "/tmp/closet.db"
    assert config.seed_on_first_run is False
    assert config.log_level == "debug"


def test_environment_yaml_is_merged(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / "staging.yaml").write_text(
        "# staging wardrobe\nsnapshot_backend: memory\nstorage_slot: 'closet'\nseed_on_first_run: \"false\"\n"
    )
    monkeypatch.setenv("APP_ENV", "staging")
    monkeypatch.setenv("APP_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("STORAGE_SLOT", "override")

    config = AppConfig.from_env()

    assert config.environment == "staging"
    assert config.snapshot_backend == "memory"
    assert config.storage_slot == "override"
    assert config.seed_on_first_run is False


def test_json_formatter_redacts_image_locations() -> None:
    record = logging.LogRecord("wardrobe", logging.INFO, __file__, 1, "item_added", None, None)
    record.event = "item_added"
    record.image_uri = "https://images.example.com/tee.jpg"
    record.details = {"notes": "gift from Sam", "category": "tops"}

    with correlation_context("abc123"):
        payload = json.loads(JsonFormatter().format(record))

    assert payload["event"] == "item_added"
    assert payload["correlation_id"] == "abc123"
    assert payload["image_uri"] == "[redacted-url]"
    assert payload["details"] == {"notes": "[redacted]", "category": "tops"}


def test_redact_for_log_handles_nested_values() -> None:
    scrubbed = redact_for_log({"uri": "file:///a.jpg", "photos": ["file:///b.jpg"], "count": 2})

    assert scrubbed == {"uri": "[redacted]", "photos": ["[redacted-url]"], "count": 2}


def test_operation_context_logs_operation_name(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG)

    with operation_context("app:suggest", correlation_id="op-1") as correlation_id:
        assert correlation_id == "op-1"

    entered = [record for record in caplog.records if record.getMessage() == "operation_scope_entered"]
    assert len(entered) == 1
    assert entered[0].operation == "app:suggest"
    assert entered[0].correlation_id == "op-1"


def test_instrumented_operation_logs_lifecycle(caplog: pytest.LogCaptureFixture) -> None:
    @instrument_operation("double")
    def double(value: int) -> int:
        if value < 0:
            raise ValueError("negative")
        return value * 2

    caplog.set_level(logging.DEBUG)

    assert double(4) == 8
    with pytest.raises(ValueError):
        double(-1)

    events = [getattr(record, "event", None) for record in caplog.records]
    assert events == [
        "operation_started",
        "operation_completed",
        "operation_started",
        "operation_failed",
    ]
    assert all(record.operation == "double" for record in caplog.records)

def test_app_selects_snapshot_backend(tmp_path: Path) -> None:
    memory = WardrobeApp(config=AppConfig(snapshot_backend="memory"))
    sqlite = WardrobeApp(config=AppConfig(snapshot_backend="sqlite", snapshot_path=str(tmp_path / "w.db")))
    json_app = WardrobeApp(config=AppConfig(snapshot_backend="json", snapshot_path=str(tmp_path / "snaps")))

    assert isinstance(memory.store, InMemorySnapshotStore)
    assert isinstance(sqlite.store, SQLiteSnapshotStore)
    assert isinstance(json_app.store, JSONSnapshotStore)
    assert (tmp_path / "snaps" / f"{DEFAULT_STORAGE_SLOT}.json").exists()


def test_app_state_survives_restart(tmp_path: Path) -> None:
    config = AppConfig(snapshot_backend="json", snapshot_path=str(tmp_path))
    first = WardrobeApp(config=config)
    first.repository.increment_outfit_worn("3")

    second = WardrobeApp(config=config)

    assert second.repository.get_outfit_by_id("3").times_worn == 2
    assert second.repository.get_item_by_id("4").times_worn == 4


def test_app_suggest_defaults_to_current_season() -> None:
    app = WardrobeApp(config=AppConfig(snapshot_backend="memory"))

    suggestion = app.suggest({"occasion": "casual"}, current_season=True)

    season_filters = [step for step in suggestion.diagnostics["applied_filters"] if step["type"] == "season"]
    assert len(season_filters) == 1


@pytest.fixture()
def memory_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SNAPSHOT_BACKEND", "memory")


def test_cli_stats(memory_backend: None, capsys: pytest.CaptureFixture[str]) -> None:
    main(["stats"])

    assert json.loads(capsys.readouterr().out)["item_count"] == 8


def test_cli_plan_lists_outfits_for_date(memory_backend: None, capsys: pytest.CaptureFixture[str]) -> None:
    main(["plan", "2025-05-27"])

    out = capsys.readouterr().out
    assert "Business Meeting" in out
    assert "Work Presentation" in out


def test_cli_suggest_reports_unusable_result(memory_backend: None, capsys: pytest.CaptureFixture[str]) -> None:
    main(["suggest", "--occasion", "formal", "--season", "summer"])

    assert "No usable suggestion" in capsys.readouterr().out


def test_cli_suggest_can_save(memory_backend: None, capsys: pytest.CaptureFixture[str]) -> None:
    main(["suggest", "--occasion", "casual", "--season", "summer", "--save"])

    out = capsys.readouterr().out
    assert "(shoes)" in out
    assert "Saved as 'Casual Outfit'" in out
