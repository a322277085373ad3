"""Exceptions raised by the CSV import/export engine."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union


class CsvImportError(ValueError):
    """Base class for failures that abort a whole import."""


class SourceUnreadableError(CsvImportError):
    """Raised when the import source does not exist or cannot be read."""

    def __init__(self, path: Union[str, Path], reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Cannot read CSV file '{self.path}': {reason}")


class HeaderNotFoundError(CsvImportError):
    """Raised when no line of the input qualifies as a header row."""

    def __init__(self) -> None:
        super().__init__(
            "CSV must contain a header row with at least: Name, Role, Address, Phone, and Email (case-insensitive)."
        )


class MissingColumnsError(CsvImportError):
    """Raised when the header row lacks one or more mandatory columns."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"CSV header missing mandatory column(s): {', '.join(self.missing)} (case-insensitive).")


class ExportError(RuntimeError):
    """Raised when an export file cannot be written."""

    def __init__(self, path: Optional[Path], reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to export contacts to '{path}': {reason}")


__all__ = [
    "CsvImportError",
    "SourceUnreadableError",
    "HeaderNotFoundError",
    "MissingColumnsError",
    "ExportError",
]
