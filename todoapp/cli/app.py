from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from todoapp.config.settings import parse_log_level, settings
from todoapp.logging_config import configure_logging


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Local to-do list")
    p.add_argument("--db", type=Path, metavar="PATH", help="SQLite database file")
    p.add_argument("--log-level", metavar="LEVEL", help="Console log level (e.g. DEBUG)")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    from todoapp.gui import app as gui_app  # tkinter loads only when the window opens

    overrides: dict[str, object] = {}
    if args.db is not None:
        overrides["db_path"] = args.db
    if args.log_level is not None:
        try:
            overrides["log_level"] = parse_log_level(args.log_level)
        except RuntimeError as exc:
            parser.error(str(exc))
    effective = settings.model_copy(update=overrides)

    configure_logging(log_file=effective.log_file, console_level=effective.log_level)
    gui_app.run_app(effective)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
