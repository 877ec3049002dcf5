"""mylog CLI - a logger tool for keeping a diary."""

import logging
import sys
from datetime import date

import click

from .adapters.click_editor import ClickEditor
from .adapters.pager_display import PagerDisplay
from .config import CONFIG_FILE, ConfigError, get_value, load_config, set_value
from .core.entry import parse_date
from .ports.editor import EditorError
from .ports.entry_store import StoreError
from .workflows import get_store, view_entries, write_entry


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """mylog - keep a diary from the command line."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.argument("text", required=False)
@click.option("--message", "-m", default=None, help="The content of the message you want to write.")
def write(text: str | None, message: str | None):
    """Write a message to today's log.

    TEXT is the message itself; without it (or --message) an editor opens.
    """
    if text is not None and message is not None:
        _fail("Give the message either as an argument or with --message, not both.")

    config = load_config()
    try:
        store = get_store(config)
        entry = write_entry(store, editor=ClickEditor(config.editor), message=message if text is None else text)
    except (StoreError, EditorError, ValueError) as e:
        _fail(str(e))

    if entry is None:
        click.echo("Nothing saved.")
        return

    click.echo(f'Written the log message to "{store.bucket_path(entry.day).name}"')


@main.command()
@click.argument("target_date", required=False)
@click.option("--no-pager", is_flag=True, help="Print directly instead of paging")
def view(target_date: str | None, no_pager: bool):
    """View stored log messages, oldest first.

    TARGET_DATE limits the output to one day (YYYY-MM-DD or MM-DD).
    """
    config = load_config()
    day: date | None = None
    if target_date:
        try:
            day = parse_date(target_date)
        except ValueError as e:
            _fail(str(e))

    display = PagerDisplay(use_pager=config.pager and not no_pager)
    try:
        view_entries(get_store(config), display, day)
    except StoreError as e:
        _fail(str(e))


@main.command("config")
@click.argument("key")
@click.argument("value", required=False)
def config_cmd(key: str, value: str | None):
    """Get or set a configuration value (log_dir, editor, pager)."""
    try:
        if value is None:
            click.echo(get_value(load_config(), key))
            return
        set_value(key, value)
    except ConfigError as e:
        _fail(str(e))
    click.echo(f"Set {key.lower()} in {CONFIG_FILE}")


if __name__ == "__main__":
    main()
