"""
aquaview.io — configuration, durable storage and storage-layer errors.

## Responsibilities
- Load Settings with precedence env > TOML > defaults.
- Persist the fixture collection as one JSON document per storage key with atomic writes.
- Raise StorageError subclasses for persistence/config/dataset failures.

## Public API
- Settings — runtime configuration.
- Storage — protocol the store depends on (read/write).
- JsonFileStorage, MemoryStorage — backends.
- open_storage — build the configured backend.

## Import DAG discipline
- Depends only on stdlib and aquaview.core.*.
- MUST NOT import higher layers: store, usage, or app.
"""

from __future__ import annotations

from .config import Settings
from .storage import JsonFileStorage, MemoryStorage, Storage, open_storage

__all__ = [
    "Settings",
    "Storage",
    "JsonFileStorage",
    "MemoryStorage",
    "open_storage",
]
