"""Domain models shared by the import/export engine, the CLI and the contact store."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Tuple

from .validation import ValidationError


# --- Roles ---

class Role(str, Enum):
    """Relationship a contact has with the business."""

    INVESTOR = "Investor"
    PARTNER = "Partner"
    CUSTOMER = "Customer"
    LEAD = "Lead"

    @classmethod
    def parse(cls, text: str) -> "Role":
        """Return the role named by ``text`` (case-insensitive)."""

        candidate = (text or "").strip().lower()
        for role in cls:
            if role.value.lower() == candidate:
                return role
        raise ValidationError(ROLE_CONSTRAINTS)

    def __str__(self) -> str:
        return self.value


ROLE_CONSTRAINTS = "Role should be one of the following: Investor, Partner, Customer, or Lead (case-insensitive)."


# --- Tags ---

TAG_MAX_LENGTH = 30
TAG_CONSTRAINTS = (
    f"Tags should be alphanumeric words joined by single underscores, at most {TAG_MAX_LENGTH} characters"
)
_TAG_PATTERN = re.compile(r"[A-Za-z0-9]+(?:_[A-Za-z0-9]+)*")


@dataclass(frozen=True)
class Tag:
    """Short label attached to a contact. Tags compare by their lower-cased label."""

    label: str = field(compare=False)
    key: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.label, str) or len(self.label) > TAG_MAX_LENGTH or not _TAG_PATTERN.fullmatch(self.label):
            raise ValidationError(TAG_CONSTRAINTS)
        object.__setattr__(self, "key", self.label.lower())

    def __str__(self) -> str:
        return self.label


# --- Follow-up cadence ---

@dataclass(frozen=True)
class Cadence:
    """Desired number of days between follow-ups."""

    days: int

    def __post_init__(self) -> None:
        if isinstance(self.days, bool) or not isinstance(self.days, int) or self.days <= 0:
            raise ValidationError("Cadence must be a positive whole number of days")

    def __str__(self) -> str:
        return str(self.days)


# --- Interaction history ---

class InteractionType(str, Enum):
    CALL = "call"
    EMAIL = "email"
    MEETING = "meeting"
    NOTE = "note"

    @classmethod
    def parse(cls, text: str) -> "InteractionType":
        try:
            return cls((text or "").strip().lower())
        except ValueError as exc:
            raise ValidationError("Interaction type must be one of: call, email, meeting, note") from exc


@dataclass(frozen=True)
class Interaction:
    """A logged touch-point with a contact."""

    type: InteractionType
    details: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


# --- Contact record ---

@dataclass(frozen=True)
class ContactRecord:
    """Validated, self-contained contact produced by import and consumed by export."""

    name: str
    phone: str
    email: str
    address: str
    role: Role
    tags: FrozenSet[Tag] = frozenset()
    cadence: Optional[Cadence] = None
    interactions: Tuple[Interaction, ...] = ()

    def __post_init__(self) -> None:
        missing = [
            label
            for label, value in (
                ("Name", self.name),
                ("Phone", self.phone),
                ("Email", self.email),
                ("Address", self.address),
            )
            if not value or not str(value).strip()
        ]
        if missing:
            raise ValidationError(f"Contact is missing mandatory field(s): {', '.join(missing)}")
        if not isinstance(self.role, Role):
            raise ValidationError(ROLE_CONSTRAINTS)
        # Stored trimmed so a record reads back identically from its own export.
        for attr in ("name", "phone", "email", "address"):
            object.__setattr__(self, attr, str(getattr(self, attr)).strip())
        object.__setattr__(self, "tags", frozenset(self.tags))
        object.__setattr__(self, "interactions", tuple(self.interactions))

    def sorted_tags(self) -> list[Tag]:
        """Return tags in a stable, case-insensitive order for display and export."""

        return sorted(self.tags, key=lambda tag: (tag.key, tag.label))

    def with_interaction(self, interaction: Interaction) -> "ContactRecord":
        """Return a copy with ``interaction`` appended to the history."""

        return ContactRecord(
            name=self.name,
            phone=self.phone,
            email=self.email,
            address=self.address,
            role=self.role,
            tags=self.tags,
            cadence=self.cadence,
            interactions=self.interactions + (interaction,),
        )


def make_tags(labels: Iterable[str]) -> FrozenSet[Tag]:
    """Build a tag set from raw labels, raising on the first invalid label."""

    return frozenset(Tag(label) for label in labels)


__all__ = [
    "Role",
    "Tag",
    "Cadence",
    "InteractionType",
    "Interaction",
    "ContactRecord",
    "ValidationError",
    "make_tags",
]
