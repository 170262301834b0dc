"""YAML Persistence — loads and saves store snapshots to a single file on disk.

Invariants:
    - load() returns None when the file does not exist yet
    - save() writes to a uniquely named temp file and renames it, so a crash
      never leaves a half-written snapshot behind
    - Saves are serialized per store; a snapshot whose generation is not newer
      than the last one written is dropped, so the file only moves forward
    - All IO and YAML failures are mapped to PersistenceError

Design Decisions:
    - yaml.safe_load / safe_dump only: snapshots hold plain dicts, lists, ints, strs
    - save_in_background never raises: a failed write is logged and the next
      successful request writes a fresh snapshot anyway
    - restore_snapshot never raises: an unreadable or malformed snapshot is
      logged and the server starts with an empty store
"""

import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Protocol

import yaml

from newsboard.core.entity_store import EntityStore
from newsboard.core.errors import PersistenceError
from newsboard.core.store_snapshot import merge_snapshot

logger = logging.getLogger(__name__)


class PersistenceStore(Protocol):
    """Contract for snapshot persistence — implemented by YamlPersistenceStore."""
    def load(self) -> dict | None: ...
    def save(self, snapshot: dict, generation: int | None = None) -> bool: ...


class YamlPersistenceStore:
    """Reads and writes the store snapshot as one YAML document."""

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._written_generation = 0

    def load(self) -> dict | None:
        if not self.path.exists():
            logger.info(f"No snapshot at {self.path}, starting empty")
            return None
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as e:
            raise PersistenceError(str(e), "load")
        if data is not None and not isinstance(data, dict):
            raise PersistenceError("snapshot root is not a mapping", "load")
        return data

    def save(self, snapshot: dict, generation: int | None = None) -> bool:
        """Write snapshot. Returns False when a newer generation is already on disk."""
        with self._lock:
            if generation is not None and generation <= self._written_generation:
                logger.debug(
                    f"Dropped stale snapshot {generation} "
                    f"(written: {self._written_generation})",
                    extra={"operation": "save"},
                )
                return False
            self._write(snapshot)
            if generation is not None:
                self._written_generation = generation
            return True

    def _write(self, snapshot: dict) -> None:
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.path.parent,
                prefix=self.path.name + ".", suffix=".tmp", delete=False,
            ) as fh:
                tmp_name = fh.name
                yaml.safe_dump(snapshot, fh, sort_keys=False, allow_unicode=True)
            os.replace(tmp_name, self.path)
        except (OSError, yaml.YAMLError) as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(str(e), "save")


def restore_snapshot(store: EntityStore, persistence: PersistenceStore) -> EntityStore:
    """Startup entry point: load and merge, resetting store on any failure."""
    try:
        return merge_snapshot(store, persistence.load())
    except PersistenceError as e:
        logger.error(
            f"{e.message}; starting with an empty store",
            extra={"error_code": e.code, "operation": e.operation},
        )
        store.reset()
        return store


def save_in_background(
    persistence: PersistenceStore, snapshot: dict, generation: int | None = None,
) -> None:
    """Background-task entry point: save and swallow PersistenceError after logging it."""
    try:
        persistence.save(snapshot, generation)
    except PersistenceError as e:
        logger.error(e.message, extra={"error_code": e.code, "operation": e.operation})
