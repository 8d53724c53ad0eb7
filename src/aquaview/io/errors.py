"""
Custom exceptions for the aquaview.io module.

Purpose
- Provide storage-layer error types that map cleanly to responsibilities in aquaview.io.
- Keep aquaview.core as the source of truth for domain errors (see aquaview.core.errors).

Source of truth and boundaries
- aquaview.core.errors.ValidationError and NotFoundError are raised by the store for
  bad payloads and missing ids.
- aquaview.io raises StorageError subclasses for persistence/config/dataset concerns:
  - ConfigError: invalid or unsupported configuration.
  - PersistenceError: the durable write failed (tmp write/fsync/rename, quota, disabled storage).
  - DeserializationError: persisted data is not valid JSON or not the expected shape.
  - UsageDataError: a usage CSV lacks the required columns.

Notes
- These exceptions do not perform any IO and are stdlib-only.
"""

from __future__ import annotations


class StorageError(Exception):
    """
    Base class for storage-related errors in aquaview.io.

    Notes:
        Use this as a catch-all for storage-layer failures, distinct from aquaview.core errors.
    """


class ConfigError(StorageError):
    """
    Raised when configuration is invalid or unsupported.

    Examples:
        - Empty storage key
        - Negative cache TTL
    """


class PersistenceError(StorageError):
    """
    Raised when writing the persisted document fails.

    Notes:
        The store rolls back its in-memory collection before re-raising, so a
        PersistenceError means nothing changed, in memory or on disk.
    """


class DeserializationError(StorageError):
    """
    Raised (or recorded as a warning) when persisted data cannot be decoded.

    Notes:
        FixtureStore.load() never propagates this; it falls back to an empty
        collection and appends the error to FixtureStore.load_warnings.
    """


class UsageDataError(StorageError):
    """
    Raised when a usage CSV is missing required columns or has unparseable values.
    """
