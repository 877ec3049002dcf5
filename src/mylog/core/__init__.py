"""Functional core - pure journal logic with no I/O."""

from .entry import Entry, parse_date
from .codec import CorruptRecord, DecodeResult, encode, decode

__all__ = [
    # Entries
    "Entry",
    "parse_date",
    # Codec
    "CorruptRecord",
    "DecodeResult",
    "encode",
    "decode",
]
