"""Line-level CSV parsing: cell splitting, delimiter sniffing and header discovery."""
from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

from .models import BOM, MANDATORY_COLUMNS, HeaderInfo

DELIMITERS = (",", "\t", ";")
_QUOTE = '"'
_HEADER_KEYS = frozenset(column.value for column in MANDATORY_COLUMNS)

NumberedLine = Tuple[int, str]


def split_line(line: Optional[str], delimiter: str = ",") -> List[str]:
    """Split one physical line into cells, honouring double-quoted cells.

    A doubled quote inside a quoted cell yields a literal quote. An unbalanced
    quote simply leaves the rest of the line inside the last cell. A trailing
    carriage return is dropped from the last cell.
    """

    if line is None:
        return [""]

    cells: List[str] = []
    current: List[str] = []
    in_quotes = False
    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if char == _QUOTE:
            if in_quotes and index + 1 < length and line[index + 1] == _QUOTE:
                current.append(_QUOTE)
                index += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            cells.append("".join(current))
            current = []
        else:
            current.append(char)
        index += 1
    cells.append("".join(current))

    if cells[-1].endswith("\r"):
        cells[-1] = cells[-1][:-1]
    return cells


def detect_delimiter(line: Optional[str]) -> str:
    """Pick comma, tab or semicolon by occurrence count; ties go to comma."""

    text = (line or "").replace(BOM, "")
    commas = text.count(",")
    tabs = text.count("\t")
    semis = text.count(";")
    if tabs > commas and tabs > semis:
        return "\t"
    if semis > commas and semis > tabs:
        return ";"
    return ","


def normalise_header_cell(cell: Optional[str]) -> str:
    return (cell or "").replace(BOM, "").strip().lower()


def looks_like_header(cells: Sequence[Optional[str]]) -> bool:
    seen = {normalise_header_cell(cell) for cell in cells}
    return _HEADER_KEYS.issubset(seen)


def find_header(lines: Iterator[NumberedLine]) -> Optional[HeaderInfo]:
    """Consume ``lines`` up to and including the first header-like line.

    Blank lines and preamble rows (titles, notes) before the header are skipped.
    Returns ``None`` when the stream ends without a qualifying line.
    """

    for line_number, line in lines:
        if not line.strip():
            continue
        candidate = line.replace(BOM, "")
        delimiter = detect_delimiter(candidate)
        cells = split_line(candidate, delimiter)
        if looks_like_header(cells):
            return HeaderInfo(delimiter=delimiter, cells=cells, line_number=line_number)
    return None


def is_blank_row(cells: Sequence[Optional[str]]) -> bool:
    return all(cell is None or not cell.strip() for cell in cells)


__all__ = [
    "DELIMITERS",
    "split_line",
    "detect_delimiter",
    "looks_like_header",
    "find_header",
    "is_blank_row",
]
