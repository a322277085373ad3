"""Data models used by the CSV import/export engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..models import ContactRecord

BOM = "\ufeff"


class Column(str, Enum):
    """Column names recognised in a header row (compared case-insensitively)."""

    NAME = "name"
    PHONE = "phone"
    EMAIL = "email"
    ADDRESS = "address"
    TAGS = "tags"
    ROLE = "role"
    CADENCE = "cadence"
    INTERACTIONS = "interactions"

    @property
    def heading(self) -> str:
        return self.value.capitalize()


# Reporting order for missing mandatory columns.
MANDATORY_COLUMNS = (Column.NAME, Column.ROLE, Column.ADDRESS, Column.PHONE, Column.EMAIL)


@dataclass(frozen=True)
class HeaderInfo:
    """Delimiter and header cells located by the detector."""

    delimiter: str
    cells: List[str]
    line_number: int


@dataclass(frozen=True)
class HeaderMap:
    """Column positions for one parse session; absent columns have no entry."""

    positions: Dict[Column, int] = field(default_factory=dict)

    def index(self, column: Column) -> Optional[int]:
        return self.positions.get(column)

    def __contains__(self, column: object) -> bool:
        return column in self.positions

    def cell(self, cells: Sequence[str], column: Column) -> str:
        """Raw cell for ``column`` or ``""`` when the column is absent or the row is short."""

        idx = self.positions.get(column)
        if idx is None or idx >= len(cells):
            return ""
        value = cells[idx]
        return "" if value is None else value


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    """Something noteworthy that happened while reading a particular line."""

    line: Optional[int]
    severity: Severity
    message: str

    def __str__(self) -> str:
        where = f"line {self.line}" if self.line is not None else "file"
        return f"[{self.severity.value}] {where}: {self.message}"


@dataclass(frozen=True)
class RowOutcome:
    """Result of turning one row into a record: either a record or a failure reason."""

    record: Optional[ContactRecord] = None
    reason: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.record is not None


@dataclass
class ImportSummary:
    imported: int = 0
    duplicate: int = 0
    malformed: int = 0

    def describe(self) -> str:
        return (
            f"Imported {self.imported} contact(s); "
            f"skipped {self.duplicate} duplicate(s) and {self.malformed} malformed row(s)."
        )


@dataclass
class ImportResult:
    """Records that survived an import plus an account of every skipped line."""

    records: List[ContactRecord] = field(default_factory=list)
    summary: ImportSummary = field(default_factory=ImportSummary)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    delimiter: str = ","
    header_line: Optional[int] = None

    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]

    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]


@dataclass(frozen=True)
class ExportResult:
    """Where an export was written and how many contacts it holds."""

    path: Optional[Path]
    count: int

    @property
    def nothing_to_export(self) -> bool:
        return self.path is None


__all__ = [
    "BOM",
    "Column",
    "MANDATORY_COLUMNS",
    "HeaderInfo",
    "HeaderMap",
    "Severity",
    "Diagnostic",
    "RowOutcome",
    "ImportSummary",
    "ImportResult",
    "ExportResult",
]
