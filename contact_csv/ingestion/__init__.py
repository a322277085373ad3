"""CSV import/export engine for contact records."""
from __future__ import annotations

from .builder import build_record, sanitize_tag
from .errors import (
    CsvImportError,
    ExportError,
    HeaderNotFoundError,
    MissingColumnsError,
    SourceUnreadableError,
)
from .exporters import ExportProfile, export_records, records_to_dataframe, resolve_output_path
from .headers import map_header, require_mandatory
from .loaders import import_records, read_records
from .models import Column, Diagnostic, ExportResult, HeaderMap, ImportResult, ImportSummary, Severity
from .parsing import detect_delimiter, find_header, split_line
from .writer import escape, format_row, write_header, write_row

__all__ = [
    "Column",
    "CsvImportError",
    "Diagnostic",
    "ExportError",
    "ExportProfile",
    "ExportResult",
    "HeaderMap",
    "HeaderNotFoundError",
    "ImportResult",
    "ImportSummary",
    "MissingColumnsError",
    "Severity",
    "SourceUnreadableError",
    "build_record",
    "detect_delimiter",
    "escape",
    "export_records",
    "find_header",
    "format_row",
    "import_records",
    "map_header",
    "read_records",
    "records_to_dataframe",
    "require_mandatory",
    "resolve_output_path",
    "sanitize_tag",
    "split_line",
    "write_header",
    "write_row",
]
