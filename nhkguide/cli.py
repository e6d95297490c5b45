"""Command-line access to the NHK Program Guide API.

Usage:

    NHK_API_KEY=... nhkguide list g1
    NHK_API_KEY=... nhkguide genre e1 0000 2024-04-01
    NHK_API_KEY=... nhkguide info g1 2024040112345
    NHK_API_KEY=... nhkguide now g1
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, datetime
from typing import Iterable, Sequence

from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from nhkguide.client import NhkClient
from nhkguide.config import Settings, get_settings
from nhkguide.errors import NhkError
from nhkguide.models import Program

console = Console()


class _LoguruInterceptHandler(logging.Handler):
    """Bridge standard-library logging records (httpx, httpcore) into Loguru."""

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - thin wrapper
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(exception=record.exc_info).log(level, record.getMessage())


def _configure_logging(level: str) -> None:
    level = (level or "INFO").upper()
    logger.remove()
    logger.add(sys.stderr, level=level, backtrace=False, diagnose=False)

    handler: logging.Handler = _LoguruInterceptHandler()
    for name in ("httpx", "httpcore"):
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = [handler]
        stdlib_logger.setLevel(level)
        stdlib_logger.propagate = False


def _build_arg_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nhkguide",
        description="Query the NHK Program Guide API.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--api-version", default=settings.api_version, help="API version path segment.")
    parser.add_argument("--area", default=settings.default_area, help="Area code (e.g. 130 for Tokyo).")
    parser.add_argument("--log-level", default=settings.log_level, help="Loguru log level.")

    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="Programs of a service on a day.")
    list_cmd.add_argument("service", help="Service code (e.g. g1, e1).")
    list_cmd.add_argument("date", nargs="?", default=None, help="YYYY-MM-DD, defaults to today.")

    genre_cmd = sub.add_parser("genre", help="Programs of a genre on a day.")
    genre_cmd.add_argument("service", help="Service code (e.g. g1, e1).")
    genre_cmd.add_argument("genre", help="Genre code (e.g. 0000).")
    genre_cmd.add_argument("date", nargs="?", default=None, help="YYYY-MM-DD, defaults to today.")

    info_cmd = sub.add_parser("info", help="Description of a single program.")
    info_cmd.add_argument("service", help="Service code (e.g. g1, e1).")
    info_cmd.add_argument("program_id", help="Program id as returned by list/genre.")

    now_cmd = sub.add_parser("now", help="Previous, present and following programs.")
    now_cmd.add_argument("service", help="Service code (e.g. g1, e1).")
    return parser


def _build_client(settings: Settings) -> NhkClient:
    return NhkClient.from_settings(settings)


def _fmt_time(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value is not None else "-"


def _program_table(title: str, rows: Iterable[tuple[str, Program]]) -> Table:
    table = Table(title=title)
    table.add_column("Slot")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Title")
    for slot, program in rows:
        table.add_row(
            escape(slot),
            _fmt_time(program.start_time),
            _fmt_time(program.end_time),
            escape(program.title),
        )
    return table


def _run(client: NhkClient, args: argparse.Namespace) -> Table:
    day = args.date if getattr(args, "date", None) else date.today()
    if args.command == "list":
        result = client.program_list(args.api_version, args.area, args.service, day)
        rows = [(key, p) for key, programs in result.programs.items() for p in programs]
        return _program_table(f"{args.service} {day}", rows)
    if args.command == "genre":
        result = client.program_genre(args.api_version, args.area, args.service, args.genre, day)
        rows = [(key, p) for key, programs in result.programs.items() for p in programs]
        return _program_table(f"{args.service} genre={args.genre} {day}", rows)
    if args.command == "info":
        info = client.program_info(args.api_version, args.area, args.service, args.program_id)
        rows = [(key, d) for key, descriptions in info.descriptions.items() for d in descriptions]
        return _program_table(f"{args.service} {args.program_id}", rows)

    now = client.now_on_air(args.api_version, args.area, args.service)
    rows = []
    for key, triple in now.now_on_air.items():
        rows.append((f"{key} previous", triple.previous))
        rows.append((f"{key} present", triple.present))
        rows.append((f"{key} following", triple.following))
    return _program_table(f"{args.service} now on air", rows)


def main(argv: Sequence[str] | None = None) -> int:
    try:
        settings = get_settings()
    except ValidationError as exc:
        console.print(f"[bold red]Configuration error[/] {escape(str(exc))}", soft_wrap=True)
        return 1

    args = _build_arg_parser(settings).parse_args(list(argv) if argv is not None else None)
    _configure_logging(args.log_level)

    try:
        client = _build_client(settings)
    except ValueError as exc:
        console.print(f"[bold red]Configuration error[/] {escape(str(exc))}", soft_wrap=True)
        return 1

    try:
        table = _run(client, args)
    except NhkError as exc:
        console.print(f"[bold red]{type(exc).__name__}[/] {escape(str(exc))}", soft_wrap=True)
        return 1

    console.print(table)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
