"""
Lightweight JSON serialization/deserialization utilities.

Provides a single JSON policy for persisted documents. This module is zero-IO.

Notes:
    - Keys are NOT sorted: fixture records keep their field order and the
      collection keeps insertion order, so a dump/load round trip is exact.
    - ensure_ascii=False keeps user-entered names and locations readable on disk.
"""

from __future__ import annotations

import json
from typing import Any

__all__ = [
    "json_dumps",
    "json_loads",
]


def json_dumps(obj: Any) -> str:
    """
    Serialize an object to the compact JSON form used for persistence.

    Args:
        obj (Any): JSON-serializable object.

    Returns:
        str: JSON string with compact separators and ensure_ascii=False.
    """
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


def json_loads(s: str) -> Any:
    """
    Deserialize a JSON string to Python objects using the stdlib json module.

    Args:
        s (str): JSON string to parse.

    Returns:
        Any: Decoded Python object.

    Raises:
        json.JSONDecodeError: If s is not valid JSON.
    """
    return json.loads(s)
