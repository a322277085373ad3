"""Run the contact CSV import/export tool with ``python -m contact_csv``."""
from __future__ import annotations

import sys

from . import cli


def main(argv: list[str] | None = None) -> int:
    """Dispatch to :func:`contact_csv.cli.main`; with no arguments show usage and exit 2."""

    args = sys.argv[1:] if argv is None else argv
    if args:
        return cli.main(args)

    cli.build_parser(prog="python -m contact_csv").print_help()
    return 2


if __name__ == "__main__":  # pragma: no cover - module entry point
    sys.exit(main())
