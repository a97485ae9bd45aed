# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""CLI verification harness for name and membership inference."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.style import Style
from rich.table import Table

from docinfer.dump import DumpParser, DumpWalker, record_to_dict
from docinfer.model import DocRecord
from docinfer.pipeline import DocGenerationError, generate_docs

logger = logging.getLogger(__name__)

TABLE_COLUMN_RATIOS: dict[str, int] = {
    "name": 2,
    "memberof": 2,
    "scope": 1,
    "context": 2,
    "tags": 4,
}


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="docinfer")
    subparsers = parser.add_subparsers(dest="command", required=True)
    infer_parser = subparsers.add_parser("infer")
    infer_parser.add_argument(
        "--path",
        required=True,
        action="append",
        help="Entry record dump. Repeat for several entries.",
    )
    infer_parser.add_argument(
        "--format",
        choices=("table", "json"),
        default="table",
        help="Output format.",
    )
    infer_parser.add_argument(
        "--output",
        required=False,
        help="Optional output file path for raw JSON when --format json is used.",
    )
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run CLI command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2
    if args.command == "infer":
        return _run_infer(args=args, stdout=stdout, stderr=stderr)

    logger.warning(f"Unsupported command (command={args.command})")
    stderr.write(f"Unsupported command: {args.command}\n")
    return 2


def _run_infer(args: argparse.Namespace, stdout: TextIO, stderr: TextIO) -> int:
    """Run infer command.

    Records produced before a generation error are still written.

    Args:
        args: Parsed CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    entry_paths = [Path(path) for path in args.path]
    for entry_path in entry_paths:
        if not entry_path.exists():
            logger.warning(f"Path does not exist (path={entry_path})")
            stderr.write(f"Path does not exist: {entry_path}\n")
            return 2

    records: list[DocRecord] = []
    error: str | None = None
    try:
        for record in generate_docs(
            entry_paths, walker=DumpWalker(), parser=DumpParser()
        ):
            records.append(record)
    except DocGenerationError as exc:
        error = str(exc)
        stderr.write(f"generation_error: {error}\n")

    logger.info(
        f"Inference completed (entries={len(entry_paths)} records={len(records)} failed={error is not None})"
    )
    if args.format == "json":
        payload = _build_payload(records=records, error=error)
        if args.output:
            try:
                _write_json_file(payload=payload, output_path=Path(args.output))
            except OSError as exc:
                logger.warning(
                    f"Failed to write JSON output file (output_path={args.output} error={exc})"
                )
                stderr.write(f"Failed to write JSON output file: {args.output}\n")
                return 2
        else:
            _write_json(payload=payload, stdout=stdout)
    else:
        _write_table(records=records, stdout=stdout)
    return 1 if error is not None else 0


def _build_payload(records: list[DocRecord], error: str | None) -> dict[str, Any]:
    return {
        "records": [record_to_dict(record) for record in records],
        "error": error,
    }


def _write_json(payload: dict[str, Any], stdout: TextIO) -> None:
    """Write the payload in JSON format.

    Args:
        payload: Records and error summary.
        stdout: Standard output stream.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    console.print(
        json.dumps(payload, indent=2, sort_keys=True),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def _write_json_file(payload: dict[str, Any], output_path: Path) -> None:
    """Write raw JSON payload to an output file.

    Raises:
        OSError: If directory creation or file writing fails.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8"
    )


def _write_table(records: list[DocRecord], stdout: TextIO) -> None:
    """Write records as one table per source file, in stream order.

    Args:
        records: Enriched records.
        stdout: Standard output stream.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    records_by_file: dict[str, list[DocRecord]] = {}
    for record in records:
        records_by_file.setdefault(record.file, []).append(record)

    for file in records_by_file:
        console.rule(file, style=Style(color="cyan"), characters="-")
        table = Table(show_header=True, show_lines=True, expand=True)
        for column, ratio in TABLE_COLUMN_RATIOS.items():
            table.add_column(column, ratio=ratio, overflow="fold")
        for record in records_by_file[file]:
            table.add_row(
                str(record.name),
                str(record.memberof),
                str(record.scope),
                type(record.context).__name__,
                json.dumps(dict(record.tags), sort_keys=True),
            )
        console.print(table)


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
