# app/storage.py
"""
Persistence for the book collection.

The whole collection is stored as one JSON array. Every request loads
it fresh and mutations write it back in full, so the store has no
cache. Writers hold ``store.lock`` across their load/modify/save
sequence; the lock only serialises threads of the current process.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import stat
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


_UMASK = _current_umask()


class StorageUnavailable(RuntimeError):
    """The collection could not be read or written."""


class JsonFileStore:
    """Collection persisted as a pretty-printed JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.lock = threading.RLock()

    def load(self) -> List[Dict[str, Any]]:
        """Return every record in the file.

        A missing or empty file is an empty collection. Unreadable or
        undecodable content raises ``StorageUnavailable`` rather than
        being treated as empty, so that a later save cannot wipe it.
        """
        if not self.path.exists():
            return []
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("Cannot read %s: %s", self.path, exc)
            raise StorageUnavailable(f"cannot read {self.path}") from exc
        except UnicodeDecodeError as exc:
            logger.error("Data file %s is not valid UTF-8: %s", self.path, exc)
            raise StorageUnavailable(f"undecodable content in {self.path}") from exc
        if not raw.strip():
            return []
        try:
            data = json.loads(raw)
        except ValueError as exc:
            logger.error("Malformed JSON in %s: %s", self.path, exc)
            raise StorageUnavailable(f"malformed JSON in {self.path}") from exc
        if not isinstance(data, list):
            logger.error("Expected a JSON array in %s, got %s", self.path, type(data).__name__)
            raise StorageUnavailable(f"{self.path} does not hold a JSON array")
        logger.debug("Loaded %d records from %s", len(data), self.path)
        return data

    def _file_mode(self) -> int:
        """Permission bits for the saved file.

        An existing file keeps its mode; a new one gets the usual
        ``0o666`` less the process umask.
        """
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            return 0o666 & ~_UMASK

    def save(self, records: List[Dict[str, Any]]) -> None:
        """Replace the file contents with ``records``.

        The JSON is written to a temporary file in the same directory
        and moved over the target, so readers see either the old or the
        new collection, never a partial one. The file keeps its
        permission bits across saves.
        """
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, ensure_ascii=False, indent=4)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, self._file_mode())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            logger.error("Cannot write %s: %s", self.path, exc)
            raise StorageUnavailable(f"cannot write {self.path}") from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
        logger.debug("Saved %d records to %s", len(records), self.path)


class MemoryStore:
    """In-memory store with the same contract as ``JsonFileStore``.

    Records are deep-copied on the way in and out, so callers never
    share state with the stored collection.
    """

    def __init__(self, records: Optional[List[Dict[str, Any]]] = None) -> None:
        self._records: List[Dict[str, Any]] = copy.deepcopy(records or [])
        self.lock = threading.RLock()

    def load(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._records)

    def save(self, records: List[Dict[str, Any]]) -> None:
        self._records = copy.deepcopy(list(records))
