"""JSON-array storage for named record collections with atomic writes."""

from __future__ import annotations

import fcntl
import logging
import os
import re
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

import orjson

from civicfix.errors import PersistenceError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)

_COLLECTION_NAME_RE = re.compile(r"^[a-z][a-z0-9_-]*$")


class RecordStore:
    """Whole-collection load/save for named collections of JSON records.

    Each collection lives in its own file, ``<data_dir>/<name>.json``, holding
    a single JSON array.  ``load`` and ``save`` do not lock; callers that
    load, mutate and save a collection wrap the cycle in ``lock(name)``.
    """

    def __init__(self, data_dir: str | Path, create_dir: bool = False) -> None:
        """Initialize the store.

        Args:
            data_dir: Directory holding the collection files.
            create_dir: If True, create the directory if it doesn't exist.
                       If False (default), raise an error if it doesn't exist.
        """
        self.data_dir = Path(data_dir)

        if create_dir:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        elif not self.data_dir.is_dir():
            msg = (
                f"Directory '{self.data_dir}' does not exist. "
                f"Run 'cfix init' first to initialize the data directory."
            )
            raise ValueError(msg)

    @staticmethod
    def _check_name(name: str) -> None:
        if not _COLLECTION_NAME_RE.match(name):
            msg = f"Invalid collection name: {name!r}"
            raise ValueError(msg)

    def path_for(self, name: str) -> Path:
        """Return the file backing collection *name*."""
        self._check_name(name)
        return self.data_dir / f"{name}.json"

    def exists(self, name: str) -> bool:
        """Check whether collection *name* has been written."""
        return self.path_for(name).exists()

    @contextmanager
    def lock(self, name: str) -> Iterator[None]:
        """Acquire an advisory file lock for exclusive access to *name*.

        Every acquisition opens its own file description, so the lock
        serializes threads in this process as well as other processes.
        """
        self._check_name(name)
        lock_fd = (self.data_dir / f".{name}.lock").open("w")
        try:
            fcntl.flock(lock_fd, fcntl.LOCK_EX)
            yield
        finally:
            fcntl.flock(lock_fd, fcntl.LOCK_UN)
            lock_fd.close()

    def load(self, name: str) -> list[dict[str, Any]]:
        """Load every record of collection *name*.

        A missing, unreadable or malformed file yields an empty list; the
        problem is logged rather than raised.
        """
        path = self.path_for(name)
        if not path.exists():
            return []

        try:
            data = orjson.loads(path.read_bytes())
        except OSError as e:
            logger.warning("Failed to read %s: %s", path, e)
            return []
        except orjson.JSONDecodeError as e:
            logger.warning("Malformed JSON in %s: %s", path, e)
            return []

        if not isinstance(data, list):
            logger.warning(
                "Expected a JSON array in %s, got %s",
                path,
                type(data).__name__,
            )
            return []

        records: list[dict[str, Any]] = []
        for idx, item in enumerate(data):
            if isinstance(item, dict):
                records.append(item)
            else:
                logger.warning("Skipping non-object record %d in %s", idx, path)
        return records

    def save(self, name: str, records: Iterable[dict[str, Any]]) -> None:
        """Overwrite collection *name* with *records*.

        Writes to a temporary file in the same directory, fsyncs it and
        renames it over the target, so readers see either the old or the
        new content.

        Raises:
            PersistenceError: If the records could not be written.
        """
        path = self.path_for(name)
        payload = orjson.dumps(list(records), option=orjson.OPT_INDENT_2)

        try:
            tmp_file = tempfile.NamedTemporaryFile(
                mode="wb",
                dir=self.data_dir,
                prefix=f".{name}.",
                delete=False,
                suffix=".json",
            )
        except OSError as e:
            msg = f"Failed to write {path}: {e}"
            raise PersistenceError(msg) from e

        with tmp_file:
            tmp_path = Path(tmp_file.name)
            try:
                tmp_file.write(payload)
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            except OSError as e:
                tmp_path.unlink(missing_ok=True)
                msg = f"Failed to write temporary file for {path}: {e}"
                raise PersistenceError(msg) from e

        try:
            tmp_path.replace(path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            msg = f"Failed to write {path}: {e}"
            raise PersistenceError(msg) from e

    def ensure_initialized(
        self,
        name: str,
        default_records: Iterable[dict[str, Any]] = (),
    ) -> bool:
        """Create collection *name* with *default_records* if it is absent.

        Returns:
            True if the collection was created, False if it already existed.
        """
        with self.lock(name):
            if self.exists(name):
                return False
            self.save(name, [dict(r) for r in default_records])
        logger.info("Initialized collection %s", name)
        return True
