"""Command-line front end for inspecting preprocessing results.

Subcommands:

- ``texprep dimen 2pt 1in`` converts dimension literals to ems,
- ``texprep expand '#1-#2' X Y`` expands a macro body,
- ``texprep scan 'a $b$ c'`` splits mixed content and prints the tree.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from texprep import __version__
from texprep.config import get_settings
from texprep.context import ParseContext
from texprep.dimensions import dimen2em, format_em, match_dimen
from texprep.errors import TexError
from texprep.macros import substitute_args
from texprep.notation import LarkNotationParser
from texprep.scanner import NotationSegment, build_mixed_content, scan_mixed_content
from texprep.tree import NodeFactory

if TYPE_CHECKING:
    from collections.abc import Sequence

    from texprep.config import LoggingConfig, Settings

console = Console()

logger = logging.getLogger(__name__)


def _setup_logging(config: LoggingConfig) -> None:
    """Configure logging to the console and, optionally, a rotating file."""
    root_logger = logging.getLogger()
    if root_logger.handlers:
        # Host application (or pytest) already owns logging
        return
    root_logger.setLevel(logging.DEBUG)

    # Console handler - less verbose
    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    if config.dir is None:
        return

    # File handler - detailed logging with rotation (10MB, keep 5 backups)
    config.dir.mkdir(parents=True, exist_ok=True)
    log_file = config.dir / f"texprep.{os.getpid()}.log"
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(file_handler)
    logger.info("Logging configured. Log file: %s", log_file.absolute())


def _cmd_dimen(args: argparse.Namespace, settings: Settings) -> None:
    table = Table(title="Dimensions")
    table.add_column("Literal")
    table.add_column("Numeral")
    table.add_column("Unit")
    table.add_column("Ems", justify="right")
    for literal in args.literals:
        match = match_dimen(literal)
        em = dimen2em(
            literal,
            em_per_inch=settings.units.em_per_inch,
            px_per_inch=settings.units.px_per_inch,
        )
        if match is None:
            table.add_row(escape(literal), "-", "-", "[yellow]not a dimension[/]")
        else:
            table.add_row(escape(literal), match.numeral, match.unit, format_em(em))
    console.print(table)


def _cmd_expand(args: argparse.Namespace, settings: Settings) -> None:
    expanded = substitute_args(
        args.args, args.body, max_buffer=settings.macros.max_buffer
    )
    console.print(expanded, markup=False, highlight=False)


def _cmd_scan(args: argparse.Namespace, settings: Settings) -> None:
    builder = NodeFactory()
    parser = LarkNotationParser(builder)
    context = ParseContext(font=args.font)

    for segment in scan_mixed_content(args.text, parser, context):
        if isinstance(segment, NotationSegment):
            console.print(
                f"[cyan]{segment.mode.name}[/] {escape(repr(segment.source))}",
                highlight=False,
            )
        else:
            console.print(
                f"[green]TEXT[/] {escape(repr(segment.text))}", highlight=False
            )

    for node in build_mixed_content(
        args.text, parser, builder, level=args.level, context=context
    ):
        console.print(node.to_sexpr(), markup=False, highlight=False)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="texprep",
        description="Inspect TeX text-mode preprocessing.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    subparsers = parser.add_subparsers(dest="command", required=True)

    dimen = subparsers.add_parser("dimen", help="convert dimension literals to ems")
    dimen.add_argument("literals", nargs="+")
    dimen.set_defaults(handler=_cmd_dimen)

    expand = subparsers.add_parser("expand", help="expand #1..#9 in a macro body")
    expand.add_argument("body")
    expand.add_argument("args", nargs="*")
    expand.set_defaults(handler=_cmd_expand)

    scan = subparsers.add_parser("scan", help="split text into text and notation")
    scan.add_argument("text")
    scan.add_argument("--level", type=int, default=None, help="script level")
    scan.add_argument("--font", default=None, help="math variant for text")
    scan.set_defaults(handler=_cmd_scan)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``texprep`` command."""
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    _setup_logging(settings.log)

    try:
        args.handler(args, settings)
    except TexError as exc:
        console.print(f"[red]{exc.key}:[/] {escape(str(exc))}", highlight=False)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
