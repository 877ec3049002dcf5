"""Adapters - I/O implementations of ports."""

from .file_journal import FileEntryStore, FileJournalListing
from .click_editor import ClickEditor
from .pager_display import PagerDisplay

__all__ = [
    "FileEntryStore",
    "FileJournalListing",
    "ClickEditor",
    "PagerDisplay",
]
