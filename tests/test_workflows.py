"""Tests for the shared workflow layer."""

from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from mylog.adapters.file_journal import FileEntryStore
from mylog.config import Config
from mylog.ports.editor import EditorError
from mylog.ports.entry_store import IoFailure, WarningKind
from mylog.workflows import DRAFT_TEMPLATE, clean_draft, get_store, view_entries, write_entry


@pytest.fixture
def store(tmp_path):
    return FileEntryStore(tmp_path)


@pytest.fixture
def editor():
    return MagicMock()


class TestGetStore:
    def test_uses_configured_dir(self, tmp_path):
        store = get_store(Config(log_dir=str(tmp_path)))
        assert store.journal_dir == tmp_path

    def test_expands_user_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        store = get_store(Config(log_dir="~/diary"))
        assert store.journal_dir == Path(tmp_path) / "diary"


class TestCleanDraft:
    def test_strips_template_comments(self):
        assert clean_draft(DRAFT_TEMPLATE) == ""

    def test_keeps_text_and_inner_blank_lines(self):
        draft = "# header\nfirst\n\nsecond\n   # indented comment\n"
        assert clean_draft(draft) == "first\n\nsecond"


class TestWriteEntry:
    def test_saves_editor_draft(self, store, editor):
        editor.edit.return_value = "Went hiking.\n" + DRAFT_TEMPLATE
        now = datetime(2024, 1, 1, 9, 0)

        entry = write_entry(store, editor=editor, now=now)

        editor.edit.assert_called_once_with(DRAFT_TEMPLATE)
        assert entry.body == "Went hiking."
        assert list(store.list_all()) == [entry]

    def test_message_skips_editor(self, store, editor):
        entry = write_entry(store, editor=editor, message="  quick note ")

        editor.edit.assert_not_called()
        assert entry.body == "quick note"
        assert store.bucket_path(entry.day).exists()

    def test_aborted_edit_writes_nothing(self, editor):
        store = MagicMock()
        editor.edit.return_value = None

        assert write_entry(store, editor=editor) is None
        store.append.assert_not_called()

    @pytest.mark.parametrize("draft", ["", "   \n\t\n", DRAFT_TEMPLATE, "# only a comment"])
    def test_empty_draft_writes_nothing(self, store, editor, draft):
        editor.edit.return_value = draft

        assert write_entry(store, editor=editor) is None
        assert list(store.journal_dir.iterdir()) == []

    def test_blank_message_leaves_bucket_unchanged(self, store):
        existing = write_entry(store, message="already here")
        path = store.bucket_path(existing.day)
        before = path.read_bytes()

        assert write_entry(store, message="   ") is None
        assert path.read_bytes() == before

    def test_timestamp_is_local_time(self, store):
        entry = write_entry(store, message="hi", now=datetime(2024, 1, 1, 9, 0, 30, 999))
        assert entry.timestamp.tzinfo is not None
        assert entry.timestamp.replace(tzinfo=None) == datetime(2024, 1, 1, 9, 0, 30)

    def test_propagates_store_errors(self, editor):
        store = MagicMock()
        store.append.side_effect = IoFailure("permission denied")

        with pytest.raises(IoFailure, match="permission denied"):
            write_entry(store, message="hello")

    def test_propagates_editor_errors(self, store, editor):
        editor.edit.side_effect = EditorError("vim: not found")

        with pytest.raises(EditorError):
            write_entry(store, editor=editor)

    def test_requires_editor_or_message(self, store):
        with pytest.raises(ValueError):
            write_entry(store)


class TestViewEntries:
    def test_forwards_listing_in_order(self, store):
        first = write_entry(store, message="first", now=datetime(2024, 1, 1, 9, 0))
        second = write_entry(store, message="second", now=datetime(2024, 1, 2, 9, 0))
        shown = []
        display = MagicMock()
        display.show.side_effect = lambda entries, warnings: shown.extend(entries)

        view_entries(store, display)

        assert shown == [first, second]

    def test_single_day(self, store):
        write_entry(store, message="first", now=datetime(2024, 1, 1, 9, 0))
        second = write_entry(store, message="second", now=datetime(2024, 1, 2, 9, 0))
        shown = []
        display = MagicMock()
        display.show.side_effect = lambda entries, warnings: shown.extend(entries)

        view_entries(store, display, day=second.day)

        assert shown == [second]

    def test_forwards_warnings(self, store):
        entry = write_entry(store, message="kept", now=datetime(2024, 1, 2, 8, 0))
        with store.bucket_path(entry.day).open("ab") as f:
            f.write(b"@@ ")
        seen = {}

        def show(entries, warnings):
            seen["entries"] = list(entries)
            seen["warnings"] = list(warnings)

        display = MagicMock()
        display.show.side_effect = show

        listing = view_entries(store, display)

        assert seen["entries"] == [entry]
        assert [w.kind for w in seen["warnings"]] == [WarningKind.TRUNCATED_TAIL]
        assert listing.warnings[0].day == entry.day

    def test_does_not_materialize_listing(self):
        store = MagicMock()
        display = MagicMock()

        listing = view_entries(store, display)

        store.list_all.assert_called_once_with()
        display.show.assert_called_once_with(listing, listing.warnings)
