from __future__ import annotations

from pathlib import Path

import pytest

from aquaview.io.config import Settings
from aquaview.io.errors import ConfigError

_ENV_KEYS = [
    "AQUAVIEW_STORE_DIR",
    "AQUAVIEW_STORAGE_KEY",
    "AQUAVIEW_DATA_DIR",
    "AQUAVIEW_CACHE_TTL",
]


def _clear_env(monkeypatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write_toml(tmp: Path, name: str, content: str) -> Path:
    p = tmp / name
    p.write_text(content)
    return p


def test_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    _write_toml(
        tmp_path,
        "aquaview.toml",
        """
        [aquaview]
        store_dir = "store_toml"
        data_dir = "data_toml"
        cache_ttl = 30
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    monkeypatch.setenv("AQUAVIEW_STORE_DIR", "store_env")
    monkeypatch.setenv("AQUAVIEW_CACHE_TTL", "5")

    s = Settings.load()

    assert s.store_dir == "store_env"
    assert s.cache_ttl == 5
    assert s.data_dir == "data_toml"


def test_settings_from_pyproject_tool_table(tmp_path: Path, monkeypatch) -> None:
    _write_toml(
        tmp_path,
        "pyproject.toml",
        """
        [project]
        name = "x"

        [tool.aquaview]
        storage_key = "my_fixtures"
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = Settings.load()

    assert s.storage_key == "my_fixtures"
    assert s.store_dir == ".aquaview"


def test_settings_top_level_keys_and_bad_values_ignored(tmp_path: Path, monkeypatch) -> None:
    _write_toml(tmp_path, "aquaview.toml", 'data_dir = "d"\ncache_ttl = "soon"\n')
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = Settings.load()

    assert s.data_dir == "d"
    assert s.cache_ttl == 600


def test_settings_defaults_when_no_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = Settings.load()

    assert s == Settings()
    assert s.storage_key == "fixtures"


def test_settings_unparseable_toml_falls_back_to_defaults(tmp_path: Path, monkeypatch) -> None:
    _write_toml(tmp_path, "aquaview.toml", "store_dir = [unterminated")
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    assert Settings.load() == Settings()


@pytest.mark.parametrize(
    "kwargs", [{"storage_key": ""}, {"storage_key": "a/b"}, {"cache_ttl": -1}]
)
def test_settings_validated_rejects_bad_values(kwargs: dict) -> None:
    with pytest.raises(ConfigError):
        Settings(**kwargs).validated()
