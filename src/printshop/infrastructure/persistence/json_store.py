"""Shared plumbing for the JSON-file stores.

Every read-modify-write runs under a per-file lock and ends with an
atomic ``os.replace`` of a temporary file, so a reader never sees a
half-written document and two writers in this process never interleave.
Separate processes sharing one data directory are not coordinated.
"""

from __future__ import annotations

import json
import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _locks_guard:
        lock = _locks.get(path)
        if lock is None:
            lock = _locks[path] = threading.RLock()
        return lock


class JsonFile:

    def __init__(self, file_path: Path, empty: Any) -> None:
        self._file_path = file_path.resolve()
        self._empty = empty
        self._lock = _lock_for(self._file_path)
        self._ensure_file()

    def read(self) -> Any:
        with self._lock:
            return json.loads(self._file_path.read_text(encoding="utf-8"))

    @contextmanager
    def update(self) -> Iterator[Any]:
        """Yield the parsed document; write it back if the block succeeds."""
        with self._lock:
            data = json.loads(self._file_path.read_text(encoding="utf-8"))
            yield data
            self._write(data)

    # --- File helpers ---------------------------------------------------------

    def _write(self, data: Any) -> None:
        tmp = self._file_path.with_name(self._file_path.name + ".tmp")
        tmp.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp, self._file_path)

    def _ensure_file(self) -> None:
        with self._lock:
            if not self._file_path.exists():
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._write(self._empty)
