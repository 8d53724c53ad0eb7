"""
Water dashboard entrypoint.

This module provides the CLI entrypoint to launch the Streamlit UI. It defers
all UI composition to the app.ui package and exists solely to start Streamlit
programmatically or render directly when already running under Streamlit.

Usage:
    - Python execution (hands process to Streamlit):
        python -m app.main --data-dir data --store-dir .aquaview

    - Streamlit direct:
        streamlit run src/app/main.py -- --data-dir data --store-dir .aquaview
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path

from app.ui import streamlit_app


# (flag, dest, help) for options forwarded to the dashboard.
_OPTIONS: tuple[tuple[str, str, str], ...] = (
    ("--data-dir", "data_dir", "Directory with Current/Forecast/Anomaly CSVs."),
    ("--store-dir", "store_dir", "Directory holding the persisted fixtures."),
)


def _build_parser(*, add_help: bool = True) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Water usage dashboard", add_help=add_help)
    for flag, dest, help_text in _OPTIONS:
        parser.add_argument(flag, dest=dest, default=None, help=help_text)
    return parser


def _app_kwargs(ns: argparse.Namespace) -> dict[str, str | None]:
    return {dest: getattr(ns, dest) for _, dest, _ in _OPTIONS}


def _passthrough(ns: argparse.Namespace) -> list[str]:
    """Re-serialize the options that were set, for `streamlit run ... -- <args>`."""
    out: list[str] = []
    for flag, dest, _ in _OPTIONS:
        value = getattr(ns, dest)
        if value:
            out += [flag, value]
    return out


def main(argv: list[str] | None = None) -> None:
    """Console entrypoint that launches Streamlit with the dashboard UI.

    If already executing within a Streamlit server (environment variable
    STREAMLIT_SERVER_PORT is set), this function renders the app directly.
    Otherwise, it execs "python -m streamlit run <this_module>" to leverage
    Streamlit's reloader and argument parsing, passing through any supported
    options after "--".

    Args:
        argv (list[str] | None): Optional list of CLI arguments. If None,
            sys.argv[1:] is used.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    ns = _build_parser().parse_args(args)

    # If invoked within Streamlit, just render
    if os.environ.get("STREAMLIT_SERVER_PORT"):
        streamlit_app(**_app_kwargs(ns))
        return

    # Otherwise, exec streamlit run on this module to take over the process
    app_path = Path(__file__).resolve()
    cmd = [sys.executable, "-m", "streamlit", "run", str(app_path)]

    passthrough = _passthrough(ns)
    if passthrough:
        cmd += ["--"] + passthrough

    try:
        os.execv(sys.executable, cmd)
    except OSError:
        subprocess.run(cmd, check=False)


if __name__ == "__main__":
    # Support: --data-dir, --store-dir after '--' when using `streamlit run`
    try:
        ns, _ = _build_parser(add_help=False).parse_known_args(sys.argv[1:])
        streamlit_app(**_app_kwargs(ns))
    except SystemExit:
        # Fallback to no-arg render
        streamlit_app()
