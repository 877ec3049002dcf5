"""Ports - interfaces/protocols for external dependencies."""

from .entry_store import (
    BucketWarning,
    CodecError,
    EntryStore,
    IoFailure,
    JournalListing,
    StoreError,
    WarningKind,
)
from .editor import Editor, EditorError
from .display import Display

__all__ = [
    "EntryStore",
    "JournalListing",
    "StoreError",
    "IoFailure",
    "CodecError",
    "BucketWarning",
    "WarningKind",
    "Editor",
    "EditorError",
    "Display",
]
