"""Snapshot persistence adapters for repository state."""
from __future__ import annotations

import json
import os
import sqlite3
import time
from pathlib import Path
from typing import Any, Dict, Optional


class SnapshotStoreError(RuntimeError):
    """The storage medium could not be read or written."""


class SnapshotCorruptError(SnapshotStoreError):
    """A stored snapshot exists but cannot be decoded."""


class SnapshotStore:
    """Persistence interface: one serialized snapshot per named slot."""

    def read(self, slot: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def write(self, slot: str, payload: Dict[str, Any]) -> None:
        raise NotImplementedError

    def clear(self, slot: str) -> bool:
        raise NotImplementedError


def _encode(slot: str, payload: Dict[str, Any], **dumps_kwargs: Any) -> str:
    try:
        return json.dumps(payload, **dumps_kwargs)
    except (TypeError, ValueError) as exc:
        raise SnapshotStoreError(f"Snapshot '{slot}' could not be encoded: {exc}") from exc


def _decode(slot: str, raw: str) -> Dict[str, Any]:
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SnapshotCorruptError(f"Snapshot '{slot}' is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise SnapshotCorruptError(f"Snapshot '{slot}' must be a JSON object")
    return payload


class InMemorySnapshotStore(SnapshotStore):
    """Keeps encoded snapshots in a dict; state is lost with the process."""

    def __init__(self) -> None:
        self._slots: Dict[str, str] = {}

    def read(self, slot: str) -> Optional[Dict[str, Any]]:
        raw = self._slots.get(slot)
        return _decode(slot, raw) if raw is not None else None

    def write(self, slot: str, payload: Dict[str, Any]) -> None:
        self._slots[slot] = _encode(slot, payload)

    def clear(self, slot: str) -> bool:
        return self._slots.pop(slot, None) is not None


class JSONSnapshotStore(SnapshotStore):
    """JSON-file-backed SnapshotStore suitable for local runs."""

    def __init__(self, base_dir: str | Path = "data/snapshots") -> None:
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, slot: str) -> Path:
        return self.base_dir / f"{slot}.json"

    def read(self, slot: str) -> Optional[Dict[str, Any]]:
        path = self._path(slot)
        if not path.exists():
            return None
        try:
            raw = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise SnapshotCorruptError(f"Snapshot '{slot}' is not valid UTF-8: {exc}") from exc
        except OSError as exc:
            raise SnapshotStoreError(f"Could not read snapshot '{slot}': {exc}") from exc
        return _decode(slot, raw)

    def write(self, slot: str, payload: Dict[str, Any]) -> None:
        path = self._path(slot)
        tmp_path = path.with_suffix(".json.tmp")
        encoded = _encode(slot, payload, indent=2)
        try:
            tmp_path.write_text(encoded, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as exc:
            raise SnapshotStoreError(f"Could not write snapshot '{slot}': {exc}") from exc

    def clear(self, slot: str) -> bool:
        path = self._path(slot)
        if not path.exists():
            return False
        path.unlink()
        return True


class SQLiteSnapshotStore(SnapshotStore):
    """SQLite-backed snapshot store, one row per slot."""

    def __init__(self, db_path: str | Path = "data/wardrobe.db") -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS snapshots (
                        slot TEXT PRIMARY KEY,
                        payload TEXT NOT NULL,
                        updated_at REAL
                    );
                    """
                )
        except sqlite3.Error as exc:
            raise SnapshotStoreError(f"Could not initialise snapshot database: {exc}") from exc

    def read(self, slot: str) -> Optional[Dict[str, Any]]:
        try:
            with self._connect() as conn:
                row = conn.execute("SELECT payload FROM snapshots WHERE slot = ?", (slot,)).fetchone()
        except sqlite3.Error as exc:
            raise SnapshotStoreError(f"Could not read snapshot '{slot}': {exc}") from exc
        return _decode(slot, row["payload"]) if row else None

    def write(self, slot: str, payload: Dict[str, Any]) -> None:
        encoded = _encode(slot, payload)
        try:
            with self._connect() as conn:
                conn.execute(
                    "INSERT OR REPLACE INTO snapshots(slot, payload, updated_at) VALUES (?, ?, ?)",
                    (slot, encoded, time.time()),
                )
        except sqlite3.Error as exc:
            raise SnapshotStoreError(f"Could not write snapshot '{slot}': {exc}") from exc

    def clear(self, slot: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM snapshots WHERE slot = ?", (slot,))
            return cursor.rowcount > 0


__all__ = [
    "SnapshotStore",
    "SnapshotStoreError",
    "SnapshotCorruptError",
    "InMemorySnapshotStore",
    "JSONSnapshotStore",
    "SQLiteSnapshotStore",
]
