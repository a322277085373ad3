"""Import contacts from delimited text files."""
from __future__ import annotations

import contextlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Iterable, Iterator, List, Optional, Tuple, Union

from ..models import ContactRecord
from ..store import ContactStore
from ..validation import Validators
from .builder import build_record
from .errors import HeaderNotFoundError, SourceUnreadableError
from .headers import map_header, require_mandatory
from .models import Diagnostic, HeaderMap, ImportResult, ImportSummary, Severity
from .parsing import NumberedLine, find_header, is_blank_row, split_line

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]
Source = Union[PathLike, IO[str]]


@dataclass
class _RowAccumulator:
    records: List[Tuple[int, ContactRecord]] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    malformed: int = 0

    def accept(self, line_number: int, cells: List[str], header_map: HeaderMap, validators: Optional[Validators]) -> None:
        outcome = build_record(cells, header_map, validators=validators)
        for warning in outcome.warnings:
            self.diagnostics.append(Diagnostic(line_number, Severity.WARNING, warning))
        if outcome.ok:
            self.records.append((line_number, outcome.record))
        else:
            self.malformed += 1
            self.diagnostics.append(
                Diagnostic(line_number, Severity.ERROR, f"Skipping malformed row: {outcome.reason}")
            )


def _numbered(lines: Iterable[str]) -> Iterator[NumberedLine]:
    for number, line in enumerate(lines, start=1):
        yield number, line.rstrip("\n")


@contextlib.contextmanager
def _open_source(source: Source) -> Iterator[IO[str]]:
    if hasattr(source, "read"):
        yield source  # type: ignore[misc]
        return

    path = Path(source)  # type: ignore[arg-type]
    if not path.exists():
        raise SourceUnreadableError(path, "file does not exist")
    if not path.is_file():
        raise SourceUnreadableError(path, "not a regular file")
    try:
        handle = path.open("r", newline="", encoding="utf-8-sig")
    except OSError as exc:
        raise SourceUnreadableError(path, exc.strerror or str(exc)) from exc
    with handle:
        yield handle


def import_records(
    source: Source,
    *,
    store: Optional[ContactStore] = None,
    validators: Optional[Validators] = None,
) -> ImportResult:
    """Read contacts from ``source`` and account for every data line.

    Parameters
    ----------
    source:
        Path to a CSV/TSV file, or an open text stream positioned at the start
        of the data. Streams are not closed.
    store:
        Existing contacts. Parsed records structurally equal to one of them
        are left out and counted as duplicates.
    validators:
        Overrides for the name/phone/email/address rules.

    Raises
    ------
    SourceUnreadableError, HeaderNotFoundError, MissingColumnsError
        When the file as a whole cannot be imported. Problems confined to a
        single row never raise; they are reported through ``diagnostics``.
    """

    name = getattr(source, "name", source)
    with _open_source(source) as handle:
        lines = _numbered(handle)
        try:
            header = find_header(lines)
            if header is None:
                raise HeaderNotFoundError()

            LOGGER.info("Detected CSV header at line %s using delimiter %r", header.line_number, header.delimiter)
            header_map = map_header(header.cells)
            require_mandatory(header_map)

            accumulator = _RowAccumulator()
            for line_number, line in lines:
                if not line.strip():
                    continue
                cells = split_line(line, header.delimiter)
                if is_blank_row(cells):
                    continue
                accumulator.accept(line_number, cells, header_map, validators)
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnreadableError(Path(str(name)), str(exc)) from exc

    survivors: List[ContactRecord] = []
    duplicates = 0
    diagnostics = accumulator.diagnostics
    for line_number, record in accumulator.records:
        if store is not None and store.has_contact(record):
            duplicates += 1
            diagnostics.append(
                Diagnostic(line_number, Severity.INFO, f"Skipping duplicate of existing contact {record.name!r}")
            )
            continue
        survivors.append(record)

    summary = ImportSummary(imported=len(survivors), duplicate=duplicates, malformed=accumulator.malformed)
    LOGGER.info(
        "Parsed %s contacts from %s (%s duplicate, %s malformed)",
        summary.imported,
        name,
        summary.duplicate,
        summary.malformed,
    )
    return ImportResult(
        records=survivors,
        summary=summary,
        diagnostics=sorted(diagnostics, key=lambda d: d.line or 0),
        delimiter=header.delimiter,
        header_line=header.line_number,
    )


def read_records(path: PathLike) -> List[ContactRecord]:
    """Return the contacts in the CSV file at ``path``."""

    return import_records(path).records


__all__ = ["import_records", "read_records"]
