"""Turn a row of cells into a validated :class:`~contact_csv.models.ContactRecord`."""
from __future__ import annotations

import re
from typing import List, Optional, Sequence, Set

from ..models import Cadence, ContactRecord, Role, Tag
from ..validation import DEFAULT_VALIDATORS, ValidationError, Validators
from .headers import normalise_role_cell
from .models import BOM, Column, HeaderMap, RowOutcome

_FIRST_INTEGER = re.compile(r"-?\d+")
_TAG_SEPARATORS = re.compile(r"[;,]")
_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")

MISSING_FIELDS_REASON = "Row needs non-empty Name, Role, Address, Phone, and Email."


def _clean(value: Optional[str]) -> str:
    return "" if value is None else value.replace(BOM, "").strip()


def sanitize_tag(raw: str) -> str:
    """Lower-case ``raw``, collapse non-alphanumeric runs to ``_`` and strip edge underscores."""

    return _NON_ALNUM_RUN.sub("_", raw.lower()).strip("_")


def parse_tag(raw: str, warnings: List[str]) -> Optional[Tag]:
    """Return a tag for ``raw``, sanitising it if needed, or ``None`` if it must be dropped."""

    text = raw.strip()
    if not text:
        return None
    try:
        return Tag(text)
    except ValidationError:
        pass

    slug = sanitize_tag(text)
    if not slug:
        warnings.append(f"Skipping tag with no usable characters: {text!r}")
        return None
    try:
        return Tag(slug)
    except ValidationError:
        warnings.append(f"Skipping invalid tag after sanitize: {text!r}")
        return None


def parse_tags(cell: str, warnings: List[str]) -> Set[Tag]:
    tags: Set[Tag] = set()
    if not cell:
        return tags
    for piece in _TAG_SEPARATORS.split(cell):
        tag = parse_tag(piece, warnings)
        if tag is not None:
            tags.add(tag)
    return tags


def parse_cadence(cell: str, warnings: List[str]) -> Optional[Cadence]:
    """Use the first integer found in ``cell`` as a cadence in days."""

    if not cell:
        return None
    match = _FIRST_INTEGER.search(cell)
    if match is None:
        warnings.append(f"Ignoring invalid cadence (no integer found): {cell!r}")
        return None
    try:
        return Cadence(int(match.group()))
    except ValidationError:
        warnings.append(f"Ignoring invalid cadence (must be a positive number of days): {cell!r}")
        return None


def check_interactions(cell: str, warnings: List[str]) -> None:
    # Interaction history is never reconstructed from a count column.
    if not cell:
        return
    try:
        int(cell)
    except ValueError:
        warnings.append(f"Ignoring invalid interactions count (must be integer): {cell!r}")


def build_record(
    cells: Sequence[Optional[str]],
    header_map: HeaderMap,
    *,
    validators: Optional[Validators] = None,
) -> RowOutcome:
    """Validate one row and build a contact from it.

    Mandatory fields (name, role, address, phone, email) must be present and
    pass validation, otherwise the outcome carries the failure reason. Problems
    with optional fields only drop that field and add a warning.
    """

    validators = validators or DEFAULT_VALIDATORS
    warnings: List[str] = []

    name = _clean(header_map.cell(cells, Column.NAME))
    phone = _clean(header_map.cell(cells, Column.PHONE))
    email = _clean(header_map.cell(cells, Column.EMAIL))
    address = _clean(header_map.cell(cells, Column.ADDRESS))
    role_text = _clean(header_map.cell(cells, Column.ROLE))

    if not all((name, role_text, address, phone, email)):
        return RowOutcome(reason=MISSING_FIELDS_REASON, warnings=warnings)

    try:
        role = Role.parse(normalise_role_cell(role_text))
        name = validators.name(name)
        phone = validators.phone(phone)
        email = validators.email(email)
        address = validators.address(address)
    except ValidationError as exc:
        return RowOutcome(reason=str(exc), warnings=warnings)

    tags = parse_tags(_clean(header_map.cell(cells, Column.TAGS)), warnings)
    cadence = parse_cadence(_clean(header_map.cell(cells, Column.CADENCE)), warnings)
    check_interactions(_clean(header_map.cell(cells, Column.INTERACTIONS)), warnings)

    record = ContactRecord(
        name=name,
        phone=phone,
        email=email,
        address=address,
        role=role,
        tags=frozenset(tags),
        cadence=cadence,
    )
    return RowOutcome(record=record, warnings=warnings)


__all__ = [
    "MISSING_FIELDS_REASON",
    "sanitize_tag",
    "parse_tag",
    "parse_tags",
    "parse_cadence",
    "check_interactions",
    "build_record",
]
