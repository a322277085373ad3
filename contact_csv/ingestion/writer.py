"""RFC 4180 style cell escaping and row writing."""
from __future__ import annotations

from typing import Iterable, Optional, TextIO

LINE_TERMINATOR = "\n"


def escape(value: Optional[str], delimiter: str = ",") -> str:
    """Return ``value`` as a safe CSV cell.

    The cell is wrapped in double quotes, with embedded quotes doubled, only
    when it contains the delimiter, a quote or a line break. ``None`` becomes
    an empty cell.
    """

    if value is None:
        return ""
    text = str(value)
    if delimiter in text or '"' in text or "\n" in text or "\r" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def format_row(cells: Iterable[Optional[str]], delimiter: str = ",") -> str:
    return delimiter.join(escape(cell, delimiter) for cell in cells) + LINE_TERMINATOR


def write_row(cells: Iterable[Optional[str]], sink: TextIO, delimiter: str = ",") -> None:
    sink.write(format_row(cells, delimiter))


def write_header(columns: Iterable[str], sink: TextIO, delimiter: str = ",") -> None:
    write_row(columns, sink, delimiter)


__all__ = ["LINE_TERMINATOR", "escape", "format_row", "write_row", "write_header"]
