from pathlib import Path

import pytest

from taskorganizer.config import Config


def test_defaults_and_first_run_file(isolated: Path) -> None:
    config = Config()

    global_dir = isolated / "xdg" / "taskorganizer"
    assert config.store_path == global_dir / "tasks.json"
    assert config.store_key == "todo_tasks"
    assert config.log_file == global_dir / "logs" / "events.log"
    assert config.default_filter == "all"
    assert (global_dir / "config.toml").exists()

    # The generated file parses back to the same values
    again = Config()
    assert again.store_path == config.store_path


def test_global_file_overrides_defaults(isolated: Path) -> None:
    global_dir = isolated / "xdg" / "taskorganizer"
    global_dir.mkdir(parents=True)
    (global_dir / "config.toml").write_text(
        '[ui]\ndefault_filter = "active"\n\n[logging]\nenabled = false\n',
        encoding="utf-8",
    )

    config = Config()

    assert config.default_filter == "active"
    assert config.log_file is None
    assert config.store_key == "todo_tasks"


def test_project_dir_relocates_store(isolated: Path) -> None:
    project = isolated / "work" / ".taskorganizer"
    project.mkdir()
    (project / "config.toml").write_text('[storage]\nkey = "project_tasks"\n', encoding="utf-8")

    config = Config()

    assert config.store_path == project / "tasks.json"
    assert config.store_key == "project_tasks"


def test_env_overrides(isolated: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKORGANIZER_STORAGE_PATH", str(isolated / "elsewhere.json"))
    monkeypatch.setenv("TASKORGANIZER_UI_DEFAULT_FILTER", "completed")
    monkeypatch.setenv("TASKORGANIZER_LOGGING_ENABLED", "false")

    config = Config()

    assert config.store_path == isolated / "elsewhere.json"
    assert config.default_filter == "completed"
    assert config.log_file is None


def test_get_dotted_keys(isolated: Path) -> None:
    config = Config(create_defaults=False)

    assert config.get("storage.key") == "todo_tasks"
    assert config.get("storage.missing", "fallback") == "fallback"
    assert config.get("storage.key.deeper", "fallback") == "fallback"
    assert not (isolated / "xdg" / "taskorganizer" / "config.toml").exists()
