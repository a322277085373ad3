"""Top-level package for the contact CSV import/export toolkit."""

from . import models  # noqa: F401
from .models import (
    Cadence,
    ContactRecord,
    Interaction,
    InteractionType,
    Role,
    Tag,
)
from .store import ContactStore, InMemoryContactStore
from .validation import ValidationError, Validators

__version__ = "0.1.0"

__all__ = [
    "Cadence",
    "ContactRecord",
    "ContactStore",
    "InMemoryContactStore",
    "Interaction",
    "InteractionType",
    "Role",
    "Tag",
    "ValidationError",
    "Validators",
    "ingestion",
]
