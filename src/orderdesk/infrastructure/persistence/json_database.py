"""JSON-file-backed Database.

The whole database is one JSON document.  A commit renders the next
state, writes it to a temporary file next to the target and renames it
over the target with ``os.replace``.  The in-memory tables are swapped
only after the rename succeeded, so a failed write leaves both the file
and the running process on the previous state.

Several processes may share one file (every CLI command is its own
process).  The outermost ``locked()`` block therefore also holds a
``filelock`` lock on ``<file>.lock`` and reloads the tables from disk
before anything is read, so a transaction always starts from the last
committed state of any process.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog
from filelock import FileLock, Timeout

from orderdesk.domain.exceptions import DeadlineExceeded, StorageError
from orderdesk.domain.model.deadline import Deadline
from orderdesk.infrastructure.persistence.database import TABLES, Database, Tables
from orderdesk.infrastructure.persistence.mapper import CODECS

logger = structlog.get_logger(__name__)


class JsonDatabase(Database):

    def __init__(self, file_path: Path) -> None:
        super().__init__()
        self._file_path = Path(file_path)
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_lock = FileLock(str(self._file_path) + ".lock")
        self._depth = 0
        if self._file_path.exists():
            self._tables = self._load()

    @property
    def file_path(self) -> Path:
        return self._file_path

    # --- Locking --------------------------------------------------------------

    @contextmanager
    def locked(self, deadline: Deadline | None = None) -> Iterator[None]:
        with super().locked(deadline):
            outermost = self._depth == 0
            if outermost:
                self._acquire_file_lock(deadline)
            self._depth += 1
            try:
                if outermost and self._file_path.exists():
                    self._tables = self._load()
                yield
            finally:
                self._depth -= 1
                if outermost:
                    self._file_lock.release()

    def _acquire_file_lock(self, deadline: Deadline | None) -> None:
        timeout = deadline.remaining() if deadline is not None else None
        try:
            self._file_lock.acquire(timeout=-1 if timeout is None else timeout)
        except Timeout as exc:
            raise DeadlineExceeded(
                f"Timed out waiting for the lock on {self._file_path}"
            ) from exc

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(tables: Tables) -> dict[str, list[dict]]:
        document: dict[str, list[dict]] = {}
        for name in TABLES:
            to_raw, _, _ = CODECS[name]
            document[name] = [to_raw(row) for row in tables[name].values()]
        return document

    @staticmethod
    def _to_domain(document: dict[str, list[dict]]) -> Tables:
        tables: Tables = {}
        for name in TABLES:
            _, to_domain, key_of = CODECS[name]
            rows = [to_domain(raw) for raw in document.get(name, [])]
            tables[name] = {key_of(row): row for row in rows}
        return tables

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> Tables:
        try:
            document = json.loads(self._file_path.read_text(encoding="utf-8"))
            return self._to_domain(document)
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise StorageError(f"Cannot read database file {self._file_path}: {exc}") from exc

    def _persist(self, tables: Tables) -> None:
        payload = json.dumps(self._to_raw(tables), indent=2) + "\n"
        fd, tmp_name = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=f".{self._file_path.name}.", suffix=".tmp"
        )
        try:
            self._write(fd, payload)
            os.replace(tmp_name, self._file_path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Cannot write database file {self._file_path}: {exc}") from exc
        logger.debug("database_flushed", path=str(self._file_path))

    @staticmethod
    def _write(fd: int, payload: str) -> None:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
            fh.flush()
            os.fsync(fh.fileno())
