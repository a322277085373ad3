"""Command line interface for importing and exporting contact CSV files."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import ConfigurationError, EngineSettings, load_settings
from .ingestion import CsvImportError, ExportError, ExportProfile, ImportResult, Severity, export_records, import_records
from .store import InMemoryContactStore

LOGGER = logging.getLogger(__name__)

_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


def build_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description="Import and export contact lists as CSV")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a configuration file (YAML or JSON)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (e.g. DEBUG, INFO, WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_parser = subparsers.add_parser("import", help="Check a CSV file and report what would be imported")
    import_parser.add_argument("input", help="Path to the CSV file to import")
    import_parser.add_argument(
        "--existing",
        default=None,
        help="CSV file with contacts already in the address book; matching rows count as duplicates",
    )

    export_parser = subparsers.add_parser("export", help="Import a CSV file and write the valid contacts back out")
    export_parser.add_argument("input", help="Path to the CSV file to read contacts from")
    export_parser.add_argument(
        "--profile",
        choices=[profile.value for profile in ExportProfile],
        default=None,
        help="Which columns to write (default from configuration, else 'standard')",
    )
    export_parser.add_argument(
        "--output",
        default=None,
        help="Output file name; '.csv' is appended when missing and a timestamped name is used when omitted",
    )
    export_parser.add_argument(
        "--directory",
        default=None,
        help="Directory to write the export into",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def _report(result: ImportResult) -> None:
    for diagnostic in result.diagnostics:
        LOGGER.log(_LOG_LEVELS[diagnostic.severity], "%s", diagnostic)
    print(result.summary.describe())


def _run_import(args: argparse.Namespace, settings: EngineSettings) -> int:
    store = InMemoryContactStore()
    if args.existing:
        store.add_all(import_records(args.existing).records)
    result = import_records(args.input, store=store)
    _report(result)
    return 0


def _run_export(args: argparse.Namespace, settings: EngineSettings) -> int:
    result = import_records(args.input)
    _report(result)
    export = export_records(
        result.records,
        args.profile or settings.default_profile,
        args.output,
        directory=args.directory or settings.export_directory,
        delimiter=settings.delimiter,
        prefix=settings.filename_prefix,
    )
    if export.nothing_to_export:
        print("Nothing to export")
        return 0
    print(f"Exported {export.count} contact(s) to {Path(export.path).resolve()}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings(args.config)
    except ConfigurationError as exc:
        logging.basicConfig(level=logging.INFO)
        LOGGER.error("%s", exc)
        return 1

    level_name = (args.log_level or settings.log_level).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO))

    try:
        if args.command == "import":
            return _run_import(args, settings)
        return _run_export(args, settings)
    except (CsvImportError, ExportError) as exc:
        LOGGER.error("%s", exc)
        return 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
