"""
Core exception types raised by fixture validation and store lookups.

Provides typed exceptions for core-domain failures:
- ValidationError for empty or unknown field values on a fixture payload.
- NotFoundError for operations targeting an id that is not in the collection.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Storage-level failures (write errors, unreadable persisted data) live in
      aquaview.io.errors.
    - Deleting a missing id is not an error and never raises NotFoundError.

Examples:
    Catch a validation failure.

    >>> from aquaview.core.errors import ValidationError
    >>> def require(s: str) -> str:
    ...     if not s.strip():
    ...         raise ValidationError("name must be non-empty")
    ...     return s
    >>> try:
    ...     require("  ")
    ... except ValidationError as e:
    ...     msg = str(e)
    >>> "non-empty" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "ValidationError",
    "NotFoundError",
]


class ValidationError(ValueError):
    """A fixture payload has an empty field or a type outside the enumeration."""


class NotFoundError(LookupError):
    """No fixture with the requested id exists in the collection.

    Attributes:
        fixture_id (str): The id that was looked up.
    """

    def __init__(self, fixture_id: str) -> None:
        super().__init__(f"no fixture with id {fixture_id!r}")
        self.fixture_id = fixture_id
