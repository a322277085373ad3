"""Contact store interface consumed by the import engine for duplicate checks."""
from __future__ import annotations

from typing import Iterable, Iterator, List, Protocol, Tuple

from .models import ContactRecord


class ContactStore(Protocol):
    """Read-only view of existing contacts used to detect duplicates."""

    def has_contact(self, record: ContactRecord) -> bool:  # pragma: no cover - runtime protocol
        """Return ``True`` if a contact structurally equal to ``record`` exists."""


class InMemoryContactStore:
    """Ordered, list-backed store used by the CLI and tests."""

    def __init__(self, records: Iterable[ContactRecord] = ()) -> None:
        self._records: List[ContactRecord] = []
        self.add_all(records)

    def add(self, record: ContactRecord) -> None:
        self._records.append(record)

    def add_all(self, records: Iterable[ContactRecord]) -> None:
        for record in records:
            self.add(record)

    def has_contact(self, record: ContactRecord) -> bool:
        return record in self._records

    def snapshot(self) -> Tuple[ContactRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ContactRecord]:
        return iter(self.snapshot())


__all__ = ["ContactStore", "InMemoryContactStore"]
