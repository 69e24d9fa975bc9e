"""Tests for lint/patch.py module."""

from __future__ import annotations

from sanelint.core.errors import ErrorCode
from sanelint.lint.models import EditInstruction
from sanelint.lint.patch import apply_edits


class TestApplyEdits:
    """Tests for apply_edits()."""

    def test_no_edits(self) -> None:
        """An empty edit list leaves the buffer alone."""
        result = apply_edits(b"foo\n", [])
        assert result.text == b"foo\n"
        assert not result.changed

    def test_insertions_in_any_order(self) -> None:
        """Offsets refer to the original buffer regardless of input order."""
        source = b"a\nb\nc\n"
        edits = [
            EditInstruction.insert_before(4, "\n"),
            EditInstruction.insert_before(2, "\n"),
        ]
        result = apply_edits(source, edits)
        assert result.text == b"a\n\nb\n\nc\n"
        assert result.changed
        assert len(result.applied) == 2

    def test_replace(self) -> None:
        """Replacements swap the covered range."""
        source = b"mailer.deliver_now\n"
        result = apply_edits(source, [EditInstruction.replace(7, 18, "deliver_later")])
        assert result.text == b"mailer.deliver_later\n"

    def test_multibyte_text(self) -> None:
        """Inserted text is encoded as UTF-8."""
        result = apply_edits(b"ab", [EditInstruction.insert_after(1, "é")])
        assert result.text == "aéb".encode()

    def test_same_position_rejected(self) -> None:
        """A second insertion at an accepted offset is rejected."""
        first = EditInstruction.insert_after(4, "\n")
        second = EditInstruction.insert_before(4, "\n")
        result = apply_edits(b"foo\nbar\n", [first, second])
        assert result.text == b"foo\n\nbar\n"
        assert result.applied == [first]
        assert len(result.rejected) == 1
        rejected, error = result.rejected[0]
        assert rejected is second
        assert error.code == ErrorCode.PATCH_OVERLAP

    def test_overlapping_replace_rejected(self) -> None:
        """Intersecting ranges are rejected."""
        edits = [EditInstruction.replace(0, 5, "x"), EditInstruction.replace(3, 8, "y")]
        result = apply_edits(b"0123456789", edits)
        assert result.text == b"x56789"
        assert len(result.rejected) == 1

    def test_touching_ranges_accepted(self) -> None:
        """A range ending where the next begins does not overlap."""
        edits = [EditInstruction.replace(0, 3, "x"), EditInstruction.replace(3, 6, "y")]
        result = apply_edits(b"aaabbbccc", edits)
        assert result.text == b"xyccc"
        assert not result.rejected

    def test_out_of_range_rejected(self) -> None:
        """Edits beyond the buffer are rejected."""
        result = apply_edits(b"abc", [EditInstruction.insert_before(10, "x")])
        assert result.text == b"abc"
        assert not result.changed
        assert result.rejected[0][1].code == ErrorCode.PATCH_OUT_OF_RANGE

    def test_insert_at_end(self) -> None:
        """The end of the buffer is a valid insertion point."""
        result = apply_edits(b"abc", [EditInstruction.insert_after(3, "\n")])
        assert result.text == b"abc\n"
