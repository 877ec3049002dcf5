"""
Entry codec - framing of journal entries inside a day bucket.

Each record is a header line followed by the body and a closing newline:

    @@ 2024-01-01T09:00:00+01:00 10
    slept well

The header carries the timestamp and the body length in bytes, so a body may
contain anything (including lines that look like headers). Records are simply
concatenated in append order.
"""

from dataclasses import dataclass, field
from datetime import datetime

from .entry import Entry

MARKER = b"@@ "
NEWLINE = b"\n"


class CorruptRecord(Exception):
    """A complete-looking record whose content cannot be parsed."""

    def __init__(self, message: str, offset: int, entries: list[Entry] | None = None):
        super().__init__(f"{message} (at byte {offset})")
        self.reason = message
        self.offset = offset
        self.entries = entries or []


@dataclass
class DecodeResult:
    """Entries decoded from a bucket, and whether a partial tail was dropped."""

    entries: list[Entry] = field(default_factory=list)
    truncated: bool = False
    # Length of the complete records, i.e. where a partial tail starts
    valid_length: int = 0


def encode(entry: Entry) -> bytes:
    """Encode one entry as a self-delimiting record."""
    body = entry.body.encode("utf-8")
    header = f"{entry.timestamp.isoformat()} {len(body)}".encode("ascii")
    return MARKER + header + NEWLINE + body + NEWLINE


def _parse_header(line: bytes, offset: int, entries: list[Entry]) -> tuple[datetime, int]:
    if not line.startswith(MARKER):
        raise CorruptRecord("missing record marker", offset, entries)
    try:
        stamp, _, length = line[len(MARKER):].decode("ascii").rpartition(" ")
    except UnicodeDecodeError:
        raise CorruptRecord("non-ascii record header", offset, entries)
    if not length.isdigit():
        raise CorruptRecord(f"invalid body length {length!r}", offset, entries)
    try:
        timestamp = datetime.fromisoformat(stamp)
    except ValueError:
        raise CorruptRecord(f"invalid timestamp {stamp!r}", offset, entries)
    return timestamp, int(length)


def decode(data: bytes) -> DecodeResult:
    """
    Decode a bucket's full contents into its entries, in append order.

    An incomplete trailing record (cut short by a crash mid-write) is dropped
    and reported through ``truncated``. Raises CorruptRecord for a record whose
    framing is complete but whose content is unreadable; the exception carries
    the entries decoded before it.
    """
    result = DecodeResult()
    pos = 0
    size = len(data)

    while pos < size:
        start = pos
        eol = data.find(NEWLINE, pos)
        if eol == -1:
            result.truncated = True
            break

        timestamp, length = _parse_header(data[pos:eol], start, result.entries)
        body_start = eol + 1
        body_end = body_start + length
        if body_end >= size:
            # Body or its terminator not fully written yet
            result.truncated = True
            break
        if data[body_end:body_end + 1] != NEWLINE:
            raise CorruptRecord("record not terminated by newline", start, result.entries)

        try:
            body = data[body_start:body_end].decode("utf-8")
            result.entries.append(Entry(timestamp=timestamp, body=body))
        except ValueError as e:
            raise CorruptRecord(str(e), start, result.entries)
        pos = body_end + 1
        result.valid_length = pos

    return result
