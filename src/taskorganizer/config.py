"""Configuration loader for Task Organizer (global + project with TOML-based defaults)."""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import Any, Dict, Optional

import tomllib

PROJECT_DIR_NAME = ".taskorganizer"


class ConfigLoader:
    """
    Handles configuration loading from multiple sources with priority resolution.

    Priority (highest → lowest):
    1. Command-line arguments (not handled here)
    2. Environment variables (TASKORGANIZER_<SECTION>_<KEY>)
    3. Project config (.taskorganizer/config.toml)
    4. Global config (~/.config/taskorganizer/config.toml)
    5. Built-in defaults
    """

    ENV_PREFIX = "TASKORGANIZER_"

    def __init__(self, create_defaults: bool = True) -> None:
        self.global_dir = self.get_global_config_dir()
        self.project_dir = self.get_project_config_dir()
        self.create_defaults = create_defaults

        self.config: Dict[str, Any] = {}

        self._load_all()

    # ------------------------------------------------------------------ #
    # Public getters
    # ------------------------------------------------------------------ #
    def get(self, key: str, default: Any = None) -> Any:
        """Get config value by dot-separated key."""
        keys = key.split(".")
        value: Any = self.config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
        return value if value is not None else default

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get a boolean, accepting the string forms environment variables carry."""
        value = self.get(key, default)
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)

    @property
    def store_path(self) -> Path:
        return Path(str(self.get("storage.path"))).expanduser()

    @property
    def store_key(self) -> str:
        return str(self.get("storage.key", "todo_tasks"))

    @property
    def log_file(self) -> Optional[Path]:
        if not self.get_bool("logging.enabled", True):
            return None
        return Path(str(self.get("logging.file"))).expanduser()

    @property
    def default_filter(self) -> str:
        return str(self.get("ui.default_filter", "all"))

    # ------------------------------------------------------------------ #
    # Load/merge helpers
    # ------------------------------------------------------------------ #
    def _load_all(self) -> None:
        """Load all configuration files with proper priority."""
        self._load_global_config()

        if self.project_dir:
            self._load_project_config()

        self._apply_env_overrides()

    def _load_global_config(self) -> None:
        """Load global configuration on top of the defaults."""
        self.config = self._get_default_config()
        config_file = self.global_dir / "config.toml"
        if config_file.exists():
            with open(config_file, "rb") as f:
                self._deep_merge(self.config, tomllib.load(f))
        elif self.create_defaults:
            self._create_default_config()

    def _load_project_config(self) -> None:
        """Load project-specific config and merge with global."""
        # A project directory keeps its own task list unless told otherwise.
        self.config["storage"]["path"] = str(self.project_dir / "tasks.json")
        config_file = self.project_dir / "config.toml"
        if config_file.exists():
            with open(config_file, "rb") as f:
                project_config = tomllib.load(f)
                self._deep_merge(self.config, project_config)

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides (TASKORGANIZER_SECTION_KEY)."""
        for key, value in os.environ.items():
            if not key.startswith(self.ENV_PREFIX):
                continue
            section, _, name = key[len(self.ENV_PREFIX) :].lower().partition("_")
            if not name:
                continue
            self._set_nested(self.config, f"{section}.{name}", value)

    # ------------------------------------------------------------------ #
    # Static paths/helpers
    # ------------------------------------------------------------------ #
    @staticmethod
    def get_global_config_dir() -> Path:
        """Get platform-specific global config directory following XDG spec."""
        system = platform.system()
        if system == "Windows":
            base = Path(os.environ.get("APPDATA", "~\\AppData\\Roaming")).expanduser()
        elif system == "Darwin":
            xdg = os.environ.get("XDG_CONFIG_HOME")
            base = Path(xdg) if xdg else Path.home() / ".config"
        else:
            base = Path(os.environ.get("XDG_CONFIG_HOME", "~/.config")).expanduser()
        return base / "taskorganizer"

    @staticmethod
    def get_project_config_dir() -> Path | None:
        """Find .taskorganizer directory in current or parent directories."""
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_dir = parent / PROJECT_DIR_NAME
            if config_dir.is_dir():
                return config_dir
        return None

    # ------------------------------------------------------------------ #
    # Persistence helpers
    # ------------------------------------------------------------------ #
    def _create_default_config(self) -> None:
        self.global_dir.mkdir(parents=True, exist_ok=True)
        config_file = self.global_dir / "config.toml"
        with open(config_file, "w", encoding="utf-8") as f:
            f.write(self._get_default_config_toml())

    # ------------------------------------------------------------------ #
    # Default content
    # ------------------------------------------------------------------ #
    def _get_default_config(self) -> Dict[str, Any]:
        """Built-in defaults."""
        return {
            "storage": {
                "path": str(self.global_dir / "tasks.json"),
                "key": "todo_tasks",
            },
            "logging": {
                "enabled": True,
                "file": str(self.global_dir / "logs" / "events.log"),
            },
            "ui": {
                "default_filter": "all",
            },
        }

    def _get_default_config_toml(self) -> str:
        """Default config TOML text for first-run creation."""
        default = self._get_default_config()
        return "\n".join(
            [
                "[storage]",
                f'path = "{Path(default["storage"]["path"]).as_posix()}"',
                f'key = "{default["storage"]["key"]}"',
                "",
                "[logging]",
                "enabled = true",
                f'file = "{Path(default["logging"]["file"]).as_posix()}"',
                "",
                "[ui]",
                f'default_filter = "{default["ui"]["default_filter"]}"',
                "",
            ]
        )

    # ------------------------------------------------------------------ #
    # Utility helpers
    # ------------------------------------------------------------------ #
    def _deep_merge(self, base: dict, override: dict) -> None:
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _set_nested(self, d: dict, path: str, value: Any) -> None:
        keys = path.split(".")
        for key in keys[:-1]:
            d = d.setdefault(key, {})
        d[keys[-1]] = value


Config = ConfigLoader

__all__ = ["ConfigLoader", "Config", "PROJECT_DIR_NAME"]
