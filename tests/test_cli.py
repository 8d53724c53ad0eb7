from __future__ import annotations

import json
from pathlib import Path

import pytest

from aquaview.cli import run


@pytest.fixture
def store_args(tmp_path: Path, monkeypatch) -> list[str]:
    monkeypatch.chdir(tmp_path)
    return ["--store-dir", str(tmp_path / "store")]


def _add(store_args: list[str], name: str = "Sink") -> None:
    code = run(
        ["add", "--name", name, "--type", "Kitchen Sink", "--location", "Kitchen", *store_args]
    )
    assert code == 0


def _only_id(tmp_path: Path) -> str:
    data = json.loads((tmp_path / "store" / "fixtures.json").read_text(encoding="utf-8"))
    assert len(data) == 1
    return data[0]["id"]


def test_add_then_list(store_args, capsys) -> None:
    _add(store_args)
    assert run(["list", *store_args]) == 0
    out = capsys.readouterr().out
    assert "Added fixture" in out
    assert "Kitchen Sink" in out


def test_list_empty(store_args, capsys) -> None:
    assert run(["list", *store_args]) == 0
    assert "No fixtures." in capsys.readouterr().out


def test_update_keeps_omitted_fields(store_args, tmp_path, capsys) -> None:
    _add(store_args)
    fid = _only_id(tmp_path)
    assert run(["update", fid, "--location", "Pantry", *store_args]) == 0
    capsys.readouterr()
    run(["list", *store_args])
    out = capsys.readouterr().out
    assert "Pantry" in out and "Sink" in out


def test_update_unknown_id_is_domain_error(store_args, capsys) -> None:
    assert run(["update", "missing", "--name", "x", *store_args]) == 1
    assert "[ERROR]" in capsys.readouterr().err


def test_blank_name_is_domain_error(store_args) -> None:
    code = run(["add", "--name", "  ", "--type", "Toilet", "--location", "Hall", *store_args])
    assert code == 1


def test_delete_with_prompt(store_args, tmp_path, monkeypatch, capsys) -> None:
    _add(store_args)
    fid = _only_id(tmp_path)

    monkeypatch.setattr("builtins.input", lambda _prompt: "n")
    assert run(["delete", fid, *store_args]) == 0
    assert "Cancelled" in capsys.readouterr().out

    assert run(["delete", fid, "--yes", *store_args]) == 0
    assert run(["delete", fid, "--yes", *store_args]) == 0
    assert "nothing to delete" in capsys.readouterr().out


def test_usage_errors_exit_2(store_args, capsys) -> None:
    assert run([]) == 2
    assert run(["explode"]) == 2
    with pytest.raises(SystemExit) as exc:
        run(["add", "--name", "x", "--type", "Bathtub", "--location", "y", *store_args])
    assert exc.value.code == 2


def test_malformed_store_warns_and_starts_empty(store_args, tmp_path, capsys) -> None:
    (tmp_path / "store").mkdir()
    (tmp_path / "store" / "fixtures.json").write_text("{oops", encoding="utf-8")
    assert run(["list", *store_args]) == 0
    captured = capsys.readouterr()
    assert "[WARN]" in captured.err
    assert "No fixtures." in captured.out


def test_demo_data_writes_csvs(tmp_path, capsys) -> None:
    out = tmp_path / "data"
    assert run(["demo-data", "--data-dir", str(out), "--days", "3"]) == 0
    assert {p.name for p in out.iterdir()} == {"Current.csv", "Forecast.csv", "Anomaly.csv"}
