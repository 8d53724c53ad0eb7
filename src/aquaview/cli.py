from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import polars as pl

from aquaview.core.errors import NotFoundError, ValidationError
from aquaview.core.schema import FIXTURE_TYPES
from aquaview.io.config import Settings
from aquaview.io.errors import ConfigError, PersistenceError
from aquaview.io.storage import JsonFileStorage
from aquaview.store.fixtures import FixtureStore
from aquaview.usage.demo import create_demo_datasets


def _common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--store-dir",
        type=str,
        default=None,
        help="Directory holding the fixtures document (default from config).",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log store activity.")


def _open_store(args: argparse.Namespace) -> FixtureStore:
    """Resolve settings (CLI flag > env > TOML > defaults) and load the store."""
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    settings = Settings.load()
    store_dir = args.store_dir or settings.store_dir
    storage = JsonFileStorage(store_dir, settings.validated().storage_key)
    store = FixtureStore.open(storage)
    for warn in store.load_warnings:
        print(f"[WARN] {warn} (starting with an empty collection)", file=sys.stderr)
    return store


def _print_fixtures(store: FixtureStore) -> None:
    if not len(store):
        print("No fixtures.")
        return
    df = pl.DataFrame(
        [f.to_record() for f in store.list()],
        schema={"id": pl.Utf8, "name": pl.Utf8, "type": pl.Utf8, "location": pl.Utf8},
    )
    with pl.Config(tbl_rows=-1, fmt_str_lengths=64):
        print(df)


def _cmd_list(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="list", description="List fixtures in insertion order.")
    _common_args(p)
    args = p.parse_args(argv)

    _print_fixtures(_open_store(args))
    return 0


def _fields_args(p: argparse.ArgumentParser, *, required: bool) -> None:
    p.add_argument("--name", type=str, required=required, help="Fixture name.")
    p.add_argument(
        "--type",
        dest="fixture_type",
        type=str,
        required=required,
        choices=FIXTURE_TYPES,
        help="Fixture type.",
    )
    p.add_argument("--location", type=str, required=required, help="Fixture location.")


def _cmd_add(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="add", description="Add a fixture.")
    _fields_args(p, required=True)
    _common_args(p)
    args = p.parse_args(argv)

    store = _open_store(args)
    fixture = store.add({"name": args.name, "type": args.fixture_type, "location": args.location})
    print(f"[INFO] Added fixture {fixture.id}")
    return 0


def _cmd_update(argv: list[str]) -> int:
    p = argparse.ArgumentParser(
        prog="update", description="Update a fixture; omitted fields keep their value."
    )
    p.add_argument("id", type=str, help="Fixture id.")
    _fields_args(p, required=False)
    _common_args(p)
    args = p.parse_args(argv)

    store = _open_store(args)
    current = store.get(args.id)
    store.update(
        args.id,
        {
            "name": args.name if args.name is not None else current.name,
            "type": args.fixture_type if args.fixture_type is not None else current.type,
            "location": args.location if args.location is not None else current.location,
        },
    )
    print(f"[INFO] Updated fixture {args.id}")
    return 0


def _cmd_delete(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="delete", description="Delete a fixture by id.")
    p.add_argument("id", type=str, help="Fixture id.")
    p.add_argument("--yes", action="store_true", help="Skip the confirmation prompt.")
    _common_args(p)
    args = p.parse_args(argv)

    store = _open_store(args)
    if args.id not in store:
        print(f"[INFO] No fixture {args.id}; nothing to delete")
        return 0
    if not args.yes:
        answer = input(f"Delete fixture {store.get(args.id).name!r}? [y/N] ")
        if answer.strip().lower() not in {"y", "yes"}:
            print("[INFO] Cancelled")
            return 0
    store.delete(args.id)
    print(f"[INFO] Deleted fixture {args.id}")
    return 0


def _cmd_demo_data(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="demo-data", description="Write demo usage CSVs.")
    p.add_argument("--data-dir", type=str, default=None, help="Target directory.")
    p.add_argument("--days", type=int, default=90, help="Days of history and forecast.")
    p.add_argument("--seed", type=int, default=7, help="Random seed.")
    args = p.parse_args(argv)

    data_dir = Path(args.data_dir or Settings.load().data_dir)
    paths = create_demo_datasets(data_dir, days=args.days, seed=args.seed)
    for name, path in paths.items():
        print(f"[INFO] Wrote {name} dataset to {path}")
    return 0


_COMMANDS = {
    "list": _cmd_list,
    "add": _cmd_add,
    "update": _cmd_update,
    "delete": _cmd_delete,
    "demo-data": _cmd_demo_data,
}


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="aquaview", description="Household water fixture utilities.")
    sub = p.add_subparsers(dest="cmd", required=True)
    for name in _COMMANDS:
        sub.add_parser(name)
    return p


def run(argv: list[str]) -> int:
    """Dispatch a subcommand and map domain errors to exit codes (1 domain, 2 usage)."""
    if not argv:
        build_argparser().print_help()
        return 2
    cmd, rest = argv[0], argv[1:]
    handler = _COMMANDS.get(cmd)
    if handler is None:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        return 2
    try:
        return handler(rest)
    except (ValidationError, NotFoundError, PersistenceError, ConfigError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1


def main(argv: list[str] | None = None) -> None:
    raise SystemExit(run(list(sys.argv[1:] if argv is None else argv)))


if __name__ == "__main__":
    main()
