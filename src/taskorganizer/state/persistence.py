"""Durable key-value stores and atomic JSON file helpers."""

from __future__ import annotations

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Protocol


class Persistence:
    """Handles atomic JSON file operations."""

    @staticmethod
    def read_json(file_path: Path) -> Dict[str, Any]:
        """Read a JSON object from file; ValueError if it is not one."""
        if not file_path.exists():
            return {}

        try:
            with file_path.open("r", encoding="utf-8") as fp:
                data = json.load(fp)
        except RecursionError as exc:
            raise ValueError(f"{file_path} is nested too deeply to decode") from exc
        # UnicodeDecodeError and JSONDecodeError are both ValueErrors.
        if not isinstance(data, dict):
            raise ValueError(f"{file_path} does not hold a JSON object")
        return data

    @staticmethod
    def load_json(file_path: Path) -> Dict[str, Any]:
        """Load JSON from file, return {} if not found or invalid."""
        try:
            return Persistence.read_json(file_path)
        except (OSError, ValueError):
            return {}

    @staticmethod
    def save_json(file_path: Path, data: Dict[str, Any]) -> None:
        """Atomically save JSON to file."""
        Persistence.ensure_dir(file_path.parent)
        tmp_fd, tmp_path = tempfile.mkstemp(dir=file_path.parent, suffix=".tmp")
        try:
            with os.fdopen(tmp_fd, "w", encoding="utf-8") as fp:
                json.dump(data, fp, indent=2, ensure_ascii=False)
                fp.flush()
                os.fsync(fp.fileno())
            shutil.move(tmp_path, file_path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    @staticmethod
    def ensure_dir(dir_path: Path) -> None:
        """Create directory if it doesn't exist."""
        dir_path.mkdir(parents=True, exist_ok=True)


class KeyValueStore(Protocol):
    """Synchronous string store the task collection is saved into."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """Dict-backed store, used in tests and for throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


class JsonFileStore:
    """
    Key-value store kept in a single JSON object file.

    Every ``set`` rewrites the whole file atomically, so the file on disk
    always reflects the last completed write. ``get`` raises ValueError when
    the file or the value under ``key`` is damaged; ``set`` moves a damaged
    file aside to ``<name>.corrupt`` before writing a fresh one.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path).expanduser()

    @property
    def corrupt_path(self) -> Path:
        return self.path.with_name(self.path.name + ".corrupt")

    def get(self, key: str) -> Optional[str]:
        value = Persistence.read_json(self.path).get(key)
        if value is not None and not isinstance(value, str):
            raise ValueError(f"{self.path}: value for {key!r} is not a string")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            data = Persistence.read_json(self.path)
        except ValueError:
            shutil.move(str(self.path), str(self.corrupt_path))
            data = {}
        data[key] = value
        Persistence.save_json(self.path, data)
