"""Entry display interface."""

from typing import Iterable, Protocol

from ..core.entry import Entry
from .entry_store import BucketWarning


class Display(Protocol):
    """Interface for presenting entries to the user."""

    def show(self, entries: Iterable[Entry], warnings: Iterable[BucketWarning]) -> None:
        """
        Present entries in the order given.

        Warnings are read after entries is exhausted, since they are
        collected while the entries are produced.
        """
        ...
