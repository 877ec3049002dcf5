"""File-based entry storage adapter."""

import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Iterator

from ..core.codec import CorruptRecord, decode, encode
from ..core.entry import Entry
from ..ports.entry_store import BucketWarning, CodecError, IoFailure, WarningKind

logger = logging.getLogger(__name__)

BUCKET_SUFFIX = ".log"


class FileJournalListing:
    """
    Lazy chronological walk over a set of day buckets.

    Each iteration starts over, re-reading buckets one at a time, and
    rebuilds ``warnings`` as damaged buckets are met. Without explicit days,
    the buckets present at the start of each iteration are walked.
    """

    def __init__(self, store: "FileEntryStore", days: list[date] | None = None, strict: bool = False):
        self._store = store
        self._days = days
        self.strict = strict
        self.warnings: list[BucketWarning] = []

    def __iter__(self) -> Iterator[Entry]:
        self.warnings.clear()
        days = self._store.dates() if self._days is None else self._days
        for day in days:
            yield from self._store._read_bucket(day, self.strict, self.warnings)


class FileEntryStore:
    """
    File-based journal storage.

    Implements EntryStore protocol. Each day gets a bucket file named
    YYYY-MM-DD.log holding that day's encoded records in append order.
    """

    def __init__(self, journal_dir: Path | str):
        self.journal_dir = Path(journal_dir).expanduser()
        try:
            self.journal_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise IoFailure(f"Cannot create journal directory {self.journal_dir}: {e}") from e
        self._locks: dict[date, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def bucket_path(self, day: date) -> Path:
        """Get the file path for a given date."""
        return self.journal_dir / f"{day.isoformat()}{BUCKET_SUFFIX}"

    def dates(self) -> list[date]:
        """List dates with a bucket, ascending."""
        try:
            paths = list(self.journal_dir.iterdir())
        except OSError as e:
            raise IoFailure(f"Cannot list journal directory {self.journal_dir}: {e}") from e

        days = []
        for path in paths:
            if path.suffix != BUCKET_SUFFIX:
                continue
            try:
                days.append(date.fromisoformat(path.stem))
            except ValueError:
                continue
        return sorted(days)

    def list_all(self, strict: bool = False) -> FileJournalListing:
        """All entries, oldest first."""
        return FileJournalListing(self, strict=strict)

    def list_day(self, day: date, strict: bool = False) -> FileJournalListing:
        """Entries of one day, oldest first."""
        return FileJournalListing(self, [day], strict)

    def append(self, entry: Entry) -> None:
        """
        Durably append an entry to its day bucket.

        The bucket is never modified in place: its current bytes plus the new
        record go to a staging file, which is synced and then renamed over the
        bucket. A reader sees either the old bucket or the new one.
        """
        record = encode(entry)
        path = self.bucket_path(entry.day)

        with self._bucket_lock(entry.day):
            try:
                existing = self._committed_bytes(path)
                with self._staging(path) as (staging, staging_path):
                    staging.write(existing)
                    staging.write(record)
                    staging.flush()
                    os.fsync(staging.fileno())
                    staging.close()
                    os.replace(staging_path, path)
                self._sync_dir()
            except OSError as e:
                raise IoFailure(f"Cannot write {path}: {e}") from e

        logger.debug(f"Appended {len(record)} bytes to {path.name}")

    def _committed_bytes(self, path: Path) -> bytes:
        """Current bucket bytes without any partial trailing record."""
        if not path.exists():
            return b""
        data = path.read_bytes()
        try:
            result = decode(data)
        except CorruptRecord as e:
            raise CodecError(f"Refusing to append to damaged bucket {path.name}: {e}") from e
        if result.truncated:
            kept = self._preserve_tail(path, data[result.valid_length:])
            logger.warning(f"Moved unreadable tail of {path.name} to {kept.name}")
        return data[:result.valid_length]

    def _preserve_tail(self, path: Path, tail: bytes) -> Path:
        """Copy bytes about to be dropped from a bucket into a side file."""
        fd, name = tempfile.mkstemp(dir=self.journal_dir, prefix=f".{path.name}.", suffix=".damaged")
        with os.fdopen(fd, "wb") as f:
            f.write(tail)
            f.flush()
            os.fsync(f.fileno())
        return Path(name)

    def _read_bucket(self, day: date, strict: bool, warnings: list[BucketWarning]) -> list[Entry]:
        """Decode one bucket, recording damage in warnings."""
        path = self.bucket_path(day)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError as e:
            raise IoFailure(f"Cannot read {path}: {e}") from e

        try:
            result = decode(data)
            entries = result.entries
            if result.truncated:
                logger.info(f"Ignoring incomplete trailing record in {path.name}")
                warnings.append(BucketWarning(day, WarningKind.TRUNCATED_TAIL))
        except CorruptRecord as e:
            if strict:
                raise CodecError(f"{path.name}: {e}") from e
            logger.warning(f"Unreadable record in {path.name}: {e}")
            entries = e.entries
            warnings.append(BucketWarning(day, WarningKind.CORRUPT_RECORD, str(e)))

        # Stable: equal timestamps keep append order
        return sorted(entries, key=lambda entry: entry.timestamp.timestamp())

    @contextmanager
    def _bucket_lock(self, day: date):
        with self._locks_guard:
            lock = self._locks.setdefault(day, threading.Lock())
        with lock:
            yield

    @contextmanager
    def _staging(self, path: Path):
        """Temporary file beside the bucket, removed unless renamed into place."""
        fd, tmp_name = tempfile.mkstemp(dir=self.journal_dir, prefix=f".{path.name}.", suffix=".tmp")
        staging = os.fdopen(fd, "wb")
        try:
            yield staging, tmp_name
        finally:
            staging.close()
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def _sync_dir(self) -> None:
        """Flush the directory entry so the rename survives a crash."""
        if not hasattr(os, "O_DIRECTORY"):
            return
        fd = os.open(self.journal_dir, os.O_RDONLY | os.O_DIRECTORY)
        try:
            os.fsync(fd)
        finally:
            os.close(fd)
