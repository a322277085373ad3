"""Map header cells to column positions."""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .errors import MissingColumnsError
from .models import MANDATORY_COLUMNS, Column, HeaderMap
from .parsing import normalise_header_cell

_COLUMNS_BY_NAME = {column.value: column for column in Column}

ROLE_SHORTCUTS: Dict[str, str] = {
    "1": "Investor",
    "2": "Partner",
    "3": "Customer",
    "4": "Lead",
}


def map_header(cells: Sequence[Optional[str]]) -> HeaderMap:
    """Build a :class:`HeaderMap` from header cells.

    Matching is case-insensitive and ignores surrounding whitespace and a
    byte-order mark. The first occurrence of a repeated column wins; columns
    that are not recognised are left out.
    """

    positions: Dict[Column, int] = {}
    for index, cell in enumerate(cells):
        column = _COLUMNS_BY_NAME.get(normalise_header_cell(cell))
        if column is not None and column not in positions:
            positions[column] = index
    return HeaderMap(positions=positions)


def missing_mandatory(header_map: HeaderMap) -> List[str]:
    return [column.heading for column in MANDATORY_COLUMNS if column not in header_map]


def require_mandatory(header_map: HeaderMap) -> None:
    missing = missing_mandatory(header_map)
    if missing:
        raise MissingColumnsError(missing)


def normalise_role_cell(text: str) -> str:
    """Expand the numeric role shortcuts ``1``-``4``; other text is returned as-is."""

    return ROLE_SHORTCUTS.get(text.strip(), text)


__all__ = [
    "ROLE_SHORTCUTS",
    "map_header",
    "missing_mandatory",
    "require_mandatory",
    "normalise_role_cell",
]
