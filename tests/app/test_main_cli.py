from __future__ import annotations

import os
from pathlib import Path

import pytest

from app import main as app_main


def test_main_renders_inline(monkeypatch, tmp_path) -> None:
    called = {}

    def fake_streamlit_app(*, data_dir=None, store_dir=None):
        called["data_dir"] = data_dir
        called["store_dir"] = store_dir

    monkeypatch.setenv("STREAMLIT_SERVER_PORT", "1")
    # Patch the imported symbol used inside app.main (not the package attribute)
    monkeypatch.setattr(app_main, "streamlit_app", fake_streamlit_app, raising=True)

    app_main.main(["--data-dir", str(tmp_path), "--store-dir", "s"])

    assert called == {"data_dir": str(tmp_path), "store_dir": "s"}


def test_main_execs_streamlit(monkeypatch, tmp_path) -> None:
    # Ensure not in Streamlit context
    monkeypatch.delenv("STREAMLIT_SERVER_PORT", raising=False)

    captured = {}

    def fake_execv(exe: str, cmd: list[str]) -> None:
        captured["exe"] = exe
        captured["cmd"] = cmd
        # Prevent process handoff
        raise SystemExit

    monkeypatch.setattr(os, "execv", fake_execv, raising=True)

    with pytest.raises(SystemExit):
        app_main.main(["--data-dir", str(tmp_path)])

    assert captured["cmd"][0] == captured["exe"]
    assert captured["cmd"][1:4] == ["-m", "streamlit", "run"]
    expected_main_path = str(Path(app_main.__file__).resolve())
    assert captured["cmd"][4] == expected_main_path
    dashdash_idx = captured["cmd"].index("--")
    assert captured["cmd"][dashdash_idx + 1 :] == ["--data-dir", str(tmp_path)]


def test_main_without_overrides_passes_no_args(monkeypatch) -> None:
    monkeypatch.delenv("STREAMLIT_SERVER_PORT", raising=False)
    captured = {}

    def fake_execv(exe: str, cmd: list[str]) -> None:
        captured["cmd"] = cmd
        raise SystemExit

    monkeypatch.setattr(os, "execv", fake_execv, raising=True)
    with pytest.raises(SystemExit):
        app_main.main([])
    assert "--" not in captured["cmd"]


def test_passthrough_round_trips_through_parser(tmp_path) -> None:
    ns = app_main._build_parser().parse_args(["--store-dir", "s", "--data-dir", str(tmp_path)])
    forwarded = app_main._passthrough(ns)
    assert forwarded == ["--data-dir", str(tmp_path), "--store-dir", "s"]
    again = app_main._build_parser(add_help=False).parse_args(forwarded)
    assert app_main._app_kwargs(again) == {"data_dir": str(tmp_path), "store_dir": "s"}
