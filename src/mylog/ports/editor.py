"""Text editor interface."""

from typing import Protocol


class EditorError(Exception):
    """The editor could not be launched or exited with an error."""


class Editor(Protocol):
    """Interface for collecting text from the user."""

    def edit(self, text: str) -> str | None:
        """Open text for editing. Returns None if the user aborted."""
        ...
