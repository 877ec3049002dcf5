"""Shared workflow layer between the CLI and the entry store.

write_entry turns one user interaction into zero or one stored entry;
view_entries hands the chronological listing to a display.
"""

import logging
from datetime import date, datetime
from pathlib import Path

from .adapters.file_journal import FileEntryStore
from .config import Config
from .core.entry import Entry
from .ports.display import Display
from .ports.editor import Editor
from .ports.entry_store import EntryStore, JournalListing

logger = logging.getLogger(__name__)

DRAFT_TEMPLATE = "\n# Enter your log message here.\n# Lines starting with '#' will be ignored.\n"


def get_store(config: Config) -> FileEntryStore:
    """Resolve journal directory from config."""
    return FileEntryStore(Path(config.log_dir).expanduser())


def clean_draft(text: str) -> str:
    """Drop comment lines and surrounding whitespace from an editor draft."""
    lines = [line for line in text.splitlines() if not line.lstrip().startswith("#")]
    return "\n".join(lines).strip()


def write_entry(
    store: EntryStore,
    editor: Editor | None = None,
    message: str | None = None,
    now: datetime | None = None,
) -> Entry | None:
    """
    Collect a draft, and append it to the journal unless it is empty.

    A message given directly skips the editor. Returns the stored entry, or
    None when nothing was written (aborted edit or blank draft).
    """
    if message is None:
        if editor is None:
            raise ValueError("Either an editor or a message is required")
        draft = editor.edit(DRAFT_TEMPLATE)
        if draft is None:
            logger.debug("Editor closed without saving")
            return None
        body = clean_draft(draft)
    else:
        body = message.strip()

    if not body:
        logger.debug("Discarding empty draft")
        return None

    entry = Entry.now(body, as_of=now)
    store.append(entry)
    return entry


def view_entries(store: EntryStore, display: Display, day: date | None = None) -> JournalListing:
    """Forward the journal (or one day of it) to the display, oldest first."""
    listing = store.list_day(day) if day else store.list_all()
    display.show(listing, listing.warnings)
    return listing
