import argparse
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import colorlog
import yaml

from csvql import __version__
from csvql.config import load_settings
from csvql.core.errors import CsvqlError
from csvql.models import AggregateResult, MutationResult
from csvql.operations import CsvFile
from csvql.storage.persistence import save_table
from .render import (
    aggregates_as_table,
    render_aggregates,
    render_columns,
    render_query_result,
)


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = "%(asctime)s:%(levelname)s:%(name)s:%(funcName)s:%(lineno)d: %(message)s"
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler()
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _open_csv(args: argparse.Namespace) -> Tuple[Optional[CsvFile], int]:
    """Load settings and the target CSV; on failure return (None, exit_code)."""
    config = getattr(args, "config", None)
    try:
        settings = load_settings(Path(config) if config else None)
    except (FileNotFoundError, yaml.YAMLError, ValueError) as e:
        logging.error("Failed to load settings: %s", e)
        return None, 3

    try:
        return CsvFile.load(Path(args.file), settings), 0
    except FileNotFoundError as e:
        logging.error("%s", e)
        return None, 2
    except (CsvqlError, OSError) as e:
        logging.error("%s", e)
        return None, 1


def _report(result: MutationResult) -> int:
    print(result.summary())
    return 0


def cmd_columns(args: argparse.Namespace) -> int:
    csv_file, code = _open_csv(args)
    if csv_file is None:
        return code
    print(render_columns(csv_file.columns))
    return 0


def cmd_select(args: argparse.Namespace) -> int:
    """Run a SELECT and print the result, or save it with --output.

    Returns:
        0 on success (an empty result included)
        1 if the query is invalid or the output cannot be written
        2 if the input file does not exist
        3 if settings cannot be loaded
    """
    csv_file, code = _open_csv(args)
    if csv_file is None:
        return code
    settings = csv_file.settings

    try:
        result = csv_file.select(
            args.select or "",
            where=args.where or "",
            order_by=args.order or "",
            limit=args.limit,
        )
    except CsvqlError as e:
        logging.error("Query failed: %s", e)
        return 1

    if isinstance(result, AggregateResult):
        table = aggregates_as_table(result.values, settings.null_display)
        text = render_aggregates(
            result.values, raw=args.raw, null_display=settings.null_display
        )
    else:
        table = result.table
        text = render_query_result(result, raw=args.raw, column_width=settings.column_width)

    if args.output:
        try:
            save_table(table, Path(args.output), settings, include_header=not args.raw)
        except CsvqlError as e:
            logging.error("%s", e)
            return 1
        print(f"Results saved to: {args.output}")
        return 0

    if text:
        print(text)
    return 0


def cmd_insert(args: argparse.Namespace) -> int:
    csv_file, code = _open_csv(args)
    if csv_file is None:
        return code
    try:
        if args.from_csv:
            result = csv_file.insert_from(Path(args.from_csv))
        else:
            result = csv_file.insert(args.values)
    except FileNotFoundError as e:
        logging.error("%s", e)
        return 2
    except (CsvqlError, OSError) as e:
        logging.error("Insert failed: %s", e)
        return 1
    return _report(result)


def cmd_update(args: argparse.Namespace) -> int:
    csv_file, code = _open_csv(args)
    if csv_file is None:
        return code
    try:
        result = csv_file.update(args.set, args.where or "")
    except CsvqlError as e:
        logging.error("Update failed: %s", e)
        return 1
    return _report(result)


def cmd_delete(args: argparse.Namespace) -> int:
    """Delete rows by WHERE condition, by 1-based row numbers, or all of them."""
    csv_file, code = _open_csv(args)
    if csv_file is None:
        return code
    try:
        if args.all:
            result = csv_file.truncate()
        elif args.rows:
            result = csv_file.delete_rows(_parse_rows_arg(args.rows))
        else:
            result = csv_file.delete(args.where or "")
    except CsvqlError as e:
        logging.error("Delete failed: %s", e)
        return 1
    return _report(result)


def _parse_rows_arg(rows_arg: str) -> List[int]:
    """Parse a comma-separated list of row numbers, e.g. "1,3,5"."""
    out: List[int] = []
    for part in rows_arg.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            out.append(int(part))
        except ValueError:
            raise CsvqlError(f"invalid row number: {part!r}") from None
    return out


def _add_file_argument(p: argparse.ArgumentParser) -> None:
    p.add_argument("--file", "-f", required=True, help="Path to the CSV file")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="csvql",
        description=f"SQL-like queries over CSV files (v{__version__})",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )
    p.add_argument(
        "--config",
        default=None,
        help="Path to a settings YAML (default: ./csvql.yaml when present)",
    )

    sub = p.add_subparsers(dest="command", required=True)

    p_columns = sub.add_parser("columns", help="List the column names of a CSV file")
    _add_file_argument(p_columns)
    p_columns.set_defaults(func=cmd_columns)

    p_select = sub.add_parser("select", help="Query rows or compute aggregates")
    _add_file_argument(p_select)
    p_select.add_argument(
        "--select",
        "-s",
        default="",
        help="Columns to show, '*' for all, optional leading DISTINCT, or aggregates "
        "such as 'COUNT(*), AVG(age)'",
    )
    p_select.add_argument("--where", "-w", default="", help="Condition, e.g. \"age > 30\"")
    p_select.add_argument("--order", "-o", default="", help="Sort, e.g. \"age desc\"")
    p_select.add_argument(
        "--limit", "-l", type=int, default=0, help="Maximum rows to return (0 = no limit)"
    )
    p_select.add_argument(
        "--raw", action="store_true", help="Print bare comma-separated values"
    )
    p_select.add_argument("--output", default=None, help="Write the result to this CSV file")
    p_select.set_defaults(func=cmd_select)

    p_insert = sub.add_parser("insert", help="Append rows")
    _add_file_argument(p_insert)
    src = p_insert.add_mutually_exclusive_group(required=True)
    src.add_argument(
        "--values",
        action="append",
        help="Row as assignments, e.g. \"name='Ann', age=30\" (repeat for more rows)",
    )
    src.add_argument("--from-csv", default=None, help="Append every row of another CSV file")
    p_insert.set_defaults(func=cmd_insert)

    p_update = sub.add_parser("update", help="Rewrite cells of rows matching a condition")
    _add_file_argument(p_update)
    p_update.add_argument("--set", required=True, help="Assignments, e.g. \"status='done'\"")
    p_update.add_argument("--where", "-w", default="", help="Condition selecting rows")
    p_update.set_defaults(func=cmd_update)

    p_delete = sub.add_parser("delete", help="Remove rows")
    _add_file_argument(p_delete)
    target = p_delete.add_mutually_exclusive_group(required=True)
    target.add_argument("--where", "-w", default=None, help="Condition selecting rows")
    target.add_argument("--rows", default=None, help="1-based row numbers, e.g. \"1,3\"")
    target.add_argument("--all", action="store_true", help="Delete every row, keep the header")
    p_delete.set_defaults(func=cmd_delete)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
