"""Editor adapter - launches the user's editor through click."""

import logging

import click

from ..ports.editor import EditorError

logger = logging.getLogger(__name__)


class ClickEditor:
    """
    Interactive editor adapter.

    Implements Editor protocol. Uses the configured editor, falling back to
    $VISUAL / $EDITOR and then click's platform default.
    """

    def __init__(self, editor: str | None = None, extension: str = ".txt"):
        self.editor = editor or None
        self.extension = extension

    def edit(self, text: str) -> str | None:
        """Open text in the editor. Returns None if the file was not saved."""
        logger.debug(f"Opening editor: {self.editor or '(environment default)'}")
        try:
            return click.edit(text, editor=self.editor, require_save=True, extension=self.extension)
        except click.ClickException as e:
            raise EditorError(e.format_message()) from e
