"""Entry storage interface."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Iterator, Protocol

from ..core.entry import Entry


class StoreError(Exception):
    """Base class for entry store failures."""


class IoFailure(StoreError):
    """Underlying storage is unavailable, unreadable or not writable."""


class CodecError(StoreError):
    """A bucket holds a record that cannot be decoded."""


class WarningKind(Enum):
    """Non-fatal problems found in a day bucket while listing."""

    TRUNCATED_TAIL = "truncated_tail"  # Partial record from an interrupted write
    CORRUPT_RECORD = "corrupt_record"  # Complete record with unreadable content


@dataclass(frozen=True)
class BucketWarning:
    """A problem attached to one day bucket."""

    day: date
    kind: WarningKind
    detail: str = ""

    def __str__(self) -> str:
        match self.kind:
            case WarningKind.TRUNCATED_TAIL:
                return f"{self.day.isoformat()}: incomplete trailing record ignored"
            case WarningKind.CORRUPT_RECORD:
                return f"{self.day.isoformat()}: unreadable record, later entries skipped ({self.detail})"
        return f"{self.day.isoformat()}: {self.detail}"


class JournalListing(Protocol):
    """Restartable lazy sequence of entries, collecting bucket warnings."""

    warnings: list[BucketWarning]

    def __iter__(self) -> Iterator[Entry]:
        ...


class EntryStore(Protocol):
    """Interface for persisting and listing journal entries."""

    def append(self, entry: Entry) -> None:
        """Durably append an entry to its day bucket."""
        ...

    def list_all(self, strict: bool = False) -> JournalListing:
        """All entries in chronological order."""
        ...

    def list_day(self, day: date, strict: bool = False) -> JournalListing:
        """Entries of a single day in chronological order."""
        ...

    def bucket_path(self, day: date) -> Path:
        """Get the file backing a given date."""
        ...

    def dates(self) -> list[date]:
        """Dates that have a bucket, ascending."""
        ...
