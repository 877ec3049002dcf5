"""Terminal display adapter - streams entries through click's pager."""

from typing import Iterable, Iterator

import click

from ..core.entry import Entry
from ..ports.entry_store import BucketWarning, StoreError


def format_entry(entry: Entry) -> str:
    """Format a single entry as '[YYYY-MM-DD HH:MM] body'."""
    return f"[{entry.format_time()}] {entry.body}"


def render(entries: Iterable[Entry], warnings: Iterable[BucketWarning]) -> Iterator[str]:
    """Yield display lines, with a heading for each new day."""
    current_day = None
    for entry in entries:
        if entry.day != current_day:
            if current_day is not None:
                yield "\n"
            yield f"### {entry.day.strftime('%A, %B %d, %Y')}\n\n"
            current_day = entry.day
        yield format_entry(entry) + "\n"

    if current_day is None:
        yield "No entries yet.\n"

    # Warnings are only complete once entries is exhausted
    lines = [f"! {warning}\n" for warning in warnings]
    if lines:
        yield "\n"
        yield from lines


class PagerDisplay:
    """
    Terminal display.

    Implements Display protocol. Output is generated lazily so a long
    journal is never held in memory at once.
    """

    def __init__(self, use_pager: bool = True):
        self.use_pager = use_pager

    def show(self, entries: Iterable[Entry], warnings: Iterable[BucketWarning]) -> None:
        lines = render(entries, warnings)
        if not self.use_pager:
            for line in lines:
                click.echo(line, nl=False)
            return

        # Read the first bucket before the pager takes over the terminal
        first = next(lines)
        failures: list[StoreError] = []

        def stream() -> Iterator[str]:
            yield first
            try:
                yield from lines
            except StoreError as e:
                failures.append(e)

        click.echo_via_pager(stream())
        if failures:
            raise failures[0]
