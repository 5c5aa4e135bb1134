"""Tests for note lines and the metadata/comment policy."""

import pytest

from ledgerparse.errors import ErrorReason, LedgerParseError
from ledgerparse.models import Note, NoteKind
from ledgerparse.parser import parse_note
from ledgerparse.parser.reducers import classify_metadata


# ---------------------------------------------------------------------------
# classify_metadata
# ---------------------------------------------------------------------------


class TestClassifyMetadata:
    def test_lowercase_value_is_prose(self):
        note = classify_metadata("Category", "groceries")
        assert note == Note.comment("Category: groceries")

    def test_capitalized_value_is_metadata(self):
        note = classify_metadata("Category", "Groceries")
        assert note == Note.metadata("Category", "Groceries")

    def test_numeric_value_is_metadata(self):
        assert classify_metadata("Receipt", "1234").kind is NoteKind.METADATA

    def test_empty_value_is_metadata(self):
        assert classify_metadata("Flag", "") == Note.metadata("Flag", "")

    def test_value_is_trimmed(self):
        assert classify_metadata("Payee", "  ACME  ") == Note.metadata("Payee", "ACME")

    def test_leading_blank_before_lowercase_still_prose(self):
        assert classify_metadata("Note", "  see receipt").kind is NoteKind.COMMENT

    def test_non_ascii_lowercase_start_stays_metadata(self):
        assert classify_metadata("Ort", "über").kind is NoteKind.METADATA


# ---------------------------------------------------------------------------
# parse_note
# ---------------------------------------------------------------------------


class TestParseNote:
    def test_tag(self):
        assert parse_note(";:Food:") == Note.tag("Food")

    def test_tag_with_space_after_semicolon(self):
        assert parse_note("; :travel:\n") == Note.tag("travel")

    def test_metadata(self):
        assert parse_note("; Receipt: 1234") == Note.metadata("Receipt", "1234")

    def test_lowercase_metadata_value_becomes_comment(self):
        note = parse_note(";Category: groceries")
        assert note.kind is NoteKind.COMMENT
        assert note.text == "Category: groceries"

    def test_plain_comment(self):
        assert parse_note("; just a remark") == Note.comment("just a remark")

    def test_double_semicolon(self):
        assert parse_note(";; remark") == Note.comment("remark")

    def test_lowercase_key_is_comment(self):
        assert parse_note("; note: something") == Note.comment("note: something")

    def test_text_after_closing_colon_is_not_a_tag(self):
        note = parse_note("; :tag: trailing")
        assert note.kind is NoteKind.COMMENT
        assert note.text == ":tag: trailing"

    def test_empty_comment(self):
        assert parse_note(";") == Note.comment("")

    def test_missing_semicolon(self):
        with pytest.raises(LedgerParseError) as excinfo:
            parse_note("Receipt: 1234")
        assert excinfo.value.reason is ErrorReason.PARSE_ERROR

    def test_indented_note_is_rejected_standalone(self):
        with pytest.raises(LedgerParseError):
            parse_note("    ; indented")
