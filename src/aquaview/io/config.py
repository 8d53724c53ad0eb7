"""
Configuration for aquaview.

Defines Settings, a frozen dataclass carrying runtime configuration for storage and
the dashboard. Defaults are sourced from aquaview.core.constants (the single source of
truth) and align with a local file-based layout.

Precedence
- environment (AQUAVIEW_*) > TOML (aquaview.toml or [tool.aquaview] in pyproject.toml) > defaults

Import DAG discipline
- Depends only on stdlib and aquaview.core.constants.
- Does not import higher layers (store, usage, app).
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from aquaview.core.constants import CACHE_TTL as CORE_CACHE_TTL
from aquaview.core.constants import DATA_DIR as CORE_DATA_DIR
from aquaview.core.constants import STORAGE_KEY as CORE_STORAGE_KEY
from aquaview.core.constants import STORE_DIR as CORE_STORE_DIR

from .errors import ConfigError


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings for aquaview.

    Attributes:
        store_dir (str): Directory holding persisted documents (e.g., ".aquaview").
        storage_key (str): Key of the fixture collection; file stem for file storage.
        data_dir (str): Directory holding Current.csv, Forecast.csv and Anomaly.csv.
        cache_ttl (int): Streamlit cache TTL for dataset loaders in seconds (0 disables).

    Examples:
        >>> from aquaview.io.config import Settings
        >>> Settings(store_dir="tmp", storage_key="fixtures")  # doctest: +ELLIPSIS
        Settings(...)
    """

    store_dir: str = CORE_STORE_DIR
    storage_key: str = CORE_STORAGE_KEY
    data_dir: str = CORE_DATA_DIR
    cache_ttl: int = CORE_CACHE_TTL

    @classmethod
    def _apply_mapping(cls, base: Settings, cfg: dict[str, Any] | None) -> Settings:
        """Apply a loose config mapping onto Settings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base
        for key in ("store_dir", "storage_key", "data_dir"):
            if key in cfg and isinstance(cfg[key], str):
                s = replace(s, **{key: cfg[key]})

        if "cache_ttl" in cfg:
            try:
                s = replace(s, cache_ttl=int(cfg["cache_ttl"]))
            except (TypeError, ValueError):
                pass

        return s

    @classmethod
    def from_env(cls, base: Settings | None = None, prefix: str = "AQUAVIEW_") -> Settings:
        """
        Build Settings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - AQUAVIEW_STORE_DIR
            - AQUAVIEW_STORAGE_KEY
            - AQUAVIEW_DATA_DIR
            - AQUAVIEW_CACHE_TTL
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for key in ("store_dir", "storage_key", "data_dir", "cache_ttl"):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> Settings:
        """
        Build Settings from a TOML file.

        Search order when `path` is None:
            1) ./aquaview.toml (with either a top-level [aquaview] table or direct keys)
            2) ./pyproject.toml under [tool.aquaview]

        Returns defaults if no file is present or the file cannot be parsed.
        """
        s = cls()

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "aquaview.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("aquaview") if isinstance(tool, dict) else None
            elif isinstance(data.get("aquaview"), dict):
                cfg = data["aquaview"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> Settings:
        """
        Load Settings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (aquaview.toml, pyproject.toml).

        Returns:
            Settings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s

    def validated(self) -> Settings:
        """
        Return self after checking values that would break storage or caching.

        Raises:
            ConfigError: If storage_key is empty or contains a path separator, or cache_ttl < 0.
        """
        key = self.storage_key.strip()
        if not key or os.sep in key or (os.altsep and os.altsep in key):
            raise ConfigError(f"storage_key must be a non-empty file stem, got {self.storage_key!r}")
        if self.cache_ttl < 0:
            raise ConfigError(f"cache_ttl must be >= 0, got {self.cache_ttl}")
        return self
