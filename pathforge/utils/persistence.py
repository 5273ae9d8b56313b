"""
Snapshot persistence for paths, profiles and session history.

The engine flushes its three tables through a narrow adapter after every
mutation; an adapter only has to load and save one snapshot dictionary.
"""

from __future__ import annotations

import json
import os
import tempfile
from abc import ABC, abstractmethod
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import config

TABLES = ("paths", "profiles", "sessions")


def empty_snapshot() -> Dict[str, Dict[str, Any]]:
    """Snapshot with every table present and empty."""
    return {table: {} for table in TABLES}


class PersistenceAdapter(ABC):
    """
    Durable key-value storage for the engine tables.

    ``load`` is called once at startup and ``save`` after every mutating
    operation. Atomicity of a single ``save`` is the adapter's job.
    """

    @abstractmethod
    def load(self) -> Dict[str, Dict[str, Any]]:
        """Return ``{"paths": {...}, "profiles": {...}, "sessions": {...}}``."""

    @abstractmethod
    def save(self, snapshot: Dict[str, Dict[str, Any]]) -> None:
        """Persist a full snapshot."""


class InMemoryPersistence(PersistenceAdapter):
    """Keeps the last saved snapshot in memory (tests, ephemeral runs)."""

    def __init__(self, initial: Optional[Dict[str, Dict[str, Any]]] = None):
        self.snapshot = deepcopy(initial) if initial else empty_snapshot()
        self.save_count = 0

    def load(self) -> Dict[str, Dict[str, Any]]:
        return deepcopy(self.snapshot)

    def save(self, snapshot: Dict[str, Dict[str, Any]]) -> None:
        self.snapshot = deepcopy(snapshot)
        self.save_count += 1


class JsonFilePersistence(PersistenceAdapter):
    """
    Stores the snapshot as one JSON document.

    Features:
    - Missing file loads as empty tables
    - Writes go to a temp file in the same directory, then replace the target
    """

    def __init__(self, filepath: Optional[Path | str] = None):
        """
        Initialize file persistence.

        Args:
            filepath: Target JSON file (defaults to config.paths.store_file;
                parent directory is created on save)
        """
        self.filepath = Path(filepath) if filepath is not None else config.paths.store_file

    def load(self) -> Dict[str, Dict[str, Any]]:
        if not self.filepath.exists():
            return empty_snapshot()

        with open(self.filepath, "r", encoding="utf-8") as f:
            data = json.load(f)

        snapshot = empty_snapshot()
        for table in TABLES:
            snapshot[table] = data.get(table) or {}
        return snapshot

    def save(self, snapshot: Dict[str, Dict[str, Any]]) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.filepath.name}.", suffix=".tmp", dir=self.filepath.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(snapshot, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.filepath)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def __repr__(self) -> str:
        return f"JsonFilePersistence({self.filepath})"
