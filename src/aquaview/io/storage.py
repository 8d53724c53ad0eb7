"""
Durable key-value storage backends for the fixture store.

Responsibilities
- Define the Storage protocol the store depends on: read() returns the persisted text
  (or None when nothing was ever written) and write(text) replaces it.
- Provide a file-backed implementation (one JSON document per key) and an in-memory one.

Notes
- JsonFileStorage writes tmp → fsync → os.replace; OS failures surface as PersistenceError.
- Reads are not cached; the store reads once per session in FixtureStore.load().
"""

from __future__ import annotations

import os
from typing import Protocol, runtime_checkable

from .config import Settings
from .errors import DeserializationError, PersistenceError
from .fs import makedirs, write_atomic

__all__ = [
    "Storage",
    "JsonFileStorage",
    "MemoryStorage",
    "open_storage",
]


@runtime_checkable
class Storage(Protocol):
    """Single-key durable storage."""

    def read(self) -> str | None: ...

    def write(self, text: str) -> None: ...


class JsonFileStorage:
    """
    Persist a single document at ``<root_dir>/<key>.json``.

    Args:
        root_dir (str | os.PathLike[str]): Directory for the document (created on first write).
        key (str): Storage key; used as the file stem.
    """

    def __init__(self, root_dir: str | os.PathLike[str], key: str) -> None:
        self.root_dir = os.fspath(root_dir)
        self.key = key

    @property
    def path(self) -> str:
        return os.path.join(self.root_dir, f"{self.key}.json")

    def read(self) -> str | None:
        """
        Return the stored document, or None if it was never written.

        Raises:
            DeserializationError: If the file exists but cannot be read or is not UTF-8.
        """
        try:
            with open(self.path, "rb") as fh:
                raw = fh.read()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise DeserializationError(f"failed to read {self.path}: {exc}") from exc
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DeserializationError(f"{self.path} is not valid UTF-8: {exc}") from exc

    def write(self, text: str) -> None:
        """
        Replace the stored document atomically.

        Raises:
            PersistenceError: If the directory cannot be created, the text is not encodable
                as UTF-8, or the write/rename fails.
        """
        try:
            makedirs(self.root_dir)
            write_atomic(self.path, text.encode("utf-8"))
        except OSError as exc:
            raise PersistenceError(f"failed to write {self.path}: {exc}") from exc
        except UnicodeEncodeError as exc:
            raise PersistenceError(
                f"{self.path}: document is not encodable as UTF-8: {exc}"
            ) from exc

    def __repr__(self) -> str:
        return f"JsonFileStorage({self.path!r})"


class MemoryStorage:
    """
    In-process storage for tests and throwaway sessions.

    Args:
        initial (str | None): Pre-seeded document (None means never written).
        fail_writes (bool): When True every write raises PersistenceError, simulating
            a full or disabled storage area.
    """

    def __init__(self, initial: str | None = None, *, fail_writes: bool = False) -> None:
        self.value = initial
        self.fail_writes = fail_writes
        self.writes = 0

    def read(self) -> str | None:
        return self.value

    def write(self, text: str) -> None:
        if self.fail_writes:
            raise PersistenceError("storage quota exceeded")
        self.value = text
        self.writes += 1


def open_storage(settings: Settings) -> JsonFileStorage:
    """Build the file-backed storage described by settings."""
    s = settings.validated()
    return JsonFileStorage(s.store_dir, s.storage_key.strip())
