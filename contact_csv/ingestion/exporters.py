"""Export contacts to CSV (or Excel) files."""
from __future__ import annotations

import contextlib
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import IO, Callable, Iterator, List, Optional, Sequence, Tuple, Union

import pandas as pd
from openpyxl.utils.exceptions import IllegalCharacterError

from ..models import ContactRecord
from .errors import ExportError
from .models import ExportResult
from .writer import write_header, write_row

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]
Clock = Callable[[], datetime]

STANDARD_COLUMNS: Tuple[str, ...] = ("Name", "Phone", "Email", "Address", "Role")
FULL_COLUMNS: Tuple[str, ...] = STANDARD_COLUMNS + ("Tags", "Cadence", "Interactions")

_CSV_SUFFIX = ".csv"
_EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
DEFAULT_PREFIX = "contacts"


class ExportProfile(str, Enum):
    STANDARD = "standard"
    FULL = "full"

    @classmethod
    def parse(cls, value: Union[str, "ExportProfile"]) -> "ExportProfile":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(profile.value for profile in cls)
            raise ValueError(f"Unknown export profile '{value}'. Choose one of: {choices}") from exc

    @property
    def columns(self) -> Tuple[str, ...]:
        return FULL_COLUMNS if self is ExportProfile.FULL else STANDARD_COLUMNS


def record_to_cells(record: ContactRecord, profile: ExportProfile = ExportProfile.STANDARD) -> List[str]:
    cells = [record.name, record.phone, record.email, record.address, str(record.role)]
    if profile is ExportProfile.FULL:
        cells.append(";".join(tag.label for tag in record.sorted_tags()))
        cells.append(str(record.cadence.days) if record.cadence is not None else "")
        cells.append(str(len(record.interactions)))
    return cells


def records_to_dataframe(
    records: Sequence[ContactRecord],
    profile: Union[str, ExportProfile] = ExportProfile.STANDARD,
) -> pd.DataFrame:
    """Convert contacts into a :class:`pandas.DataFrame` with the profile's columns."""

    profile = ExportProfile.parse(profile)
    rows = [record_to_cells(record, profile) for record in records]
    return pd.DataFrame(rows, columns=list(profile.columns), dtype=str)


def default_filename(clock: Optional[Clock] = None, prefix: str = DEFAULT_PREFIX) -> str:
    now = (clock or datetime.now)()
    return f"{prefix}_{now:%Y%m%d_%H%M%S}{_CSV_SUFFIX}"


def resolve_output_path(
    filename: Optional[str] = None,
    *,
    directory: PathLike = ".",
    clock: Optional[Clock] = None,
    prefix: str = DEFAULT_PREFIX,
) -> Path:
    """Return the path an export should be written to.

    Without ``filename`` a timestamped name is generated. ``.csv`` is appended
    unless the name already ends in ``.csv`` or an Excel suffix. If the file
    exists, ``_1``, ``_2``, ... is inserted before the extension until a free
    name is found.
    """

    name = (filename or "").strip() or default_filename(clock, prefix)
    suffix = Path(name).suffix.lower()
    if suffix != _CSV_SUFFIX and suffix not in _EXCEL_SUFFIXES:
        name += _CSV_SUFFIX

    candidate = Path(directory) / name
    if not candidate.exists():
        return candidate

    stem, ext = candidate.stem, candidate.suffix
    counter = 1
    while True:
        numbered = candidate.with_name(f"{stem}_{counter}{ext}")
        if not numbered.exists():
            return numbered
        counter += 1


@contextlib.contextmanager
def _create_exclusive(path: Path, mode: str, **open_kwargs) -> Iterator[IO]:
    """Open a file that must not exist yet; remove it again if writing fails."""

    # "x" refuses to replace a file created after the path was resolved.
    handle = path.open(mode, **open_kwargs)
    try:
        with handle:
            yield handle
    except BaseException:
        path.unlink(missing_ok=True)
        raise


def _write_csv(path: Path, records: Sequence[ContactRecord], profile: ExportProfile, delimiter: str) -> None:
    with _create_exclusive(path, "x", newline="", encoding="utf-8") as handle:
        write_header(profile.columns, handle, delimiter)
        for record in records:
            write_row(record_to_cells(record, profile), handle, delimiter)


def _write_excel(path: Path, records: Sequence[ContactRecord], profile: ExportProfile) -> None:
    dataframe = records_to_dataframe(records, profile)
    with _create_exclusive(path, "xb") as handle:
        with pd.ExcelWriter(handle, engine="openpyxl") as writer:
            dataframe.to_excel(writer, index=False, sheet_name="Contacts")


def export_records(
    records: Sequence[ContactRecord],
    profile: Union[str, ExportProfile] = ExportProfile.STANDARD,
    filename: Optional[str] = None,
    *,
    directory: PathLike = ".",
    delimiter: str = ",",
    clock: Optional[Clock] = None,
    prefix: str = DEFAULT_PREFIX,
) -> ExportResult:
    """Write ``records`` to a new file and report where it went.

    An empty ``records`` sequence writes nothing and returns a result whose
    ``nothing_to_export`` flag is set. Existing files are never overwritten.
    """

    profile = ExportProfile.parse(profile)
    records = list(records)
    if not records:
        LOGGER.info("No contacts to export")
        return ExportResult(path=None, count=0)

    path = resolve_output_path(filename, directory=directory, clock=clock, prefix=prefix)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix.lower() in _EXCEL_SUFFIXES:
            _write_excel(path, records, profile)
        else:
            _write_csv(path, records, profile, delimiter)
    except OSError as exc:
        raise ExportError(path, exc.strerror or str(exc)) from exc
    except (IllegalCharacterError, ValueError) as exc:
        raise ExportError(path, str(exc)) from exc

    LOGGER.info("Exported %s contacts (%s profile) to %s", len(records), profile.value, path)
    return ExportResult(path=path, count=len(records))


__all__ = [
    "ExportProfile",
    "STANDARD_COLUMNS",
    "FULL_COLUMNS",
    "record_to_cells",
    "records_to_dataframe",
    "default_filename",
    "resolve_output_path",
    "export_records",
]
