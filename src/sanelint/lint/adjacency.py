"""Line adjacency between spans.

A blank line separates A from B exactly when ``B.start_line - A.end_line > 1``.
Comments are looked up by line and count as acceptable separation context.
"""

from __future__ import annotations

from collections.abc import Iterable

from sanelint.syntax.tree import Comment, Span


def is_multiline(span: Span | None) -> bool:
    return span is not None and span.start_line != span.end_line


def gap_between(first: Span, second: Span) -> bool:
    """True when at least one line lies strictly between the two spans."""
    return second.start_line - first.end_line > 1


def is_first_line_of_file(span: Span) -> bool:
    return span.start_line == 1


class AdjacencyAnalyzer:
    """Adjacency queries that need the comment list or the raw bytes of a file."""

    def __init__(self, comments: Iterable[Comment], source: bytes) -> None:
        self._source = source
        self._comment_lines: frozenset[int] = frozenset(
            line
            for comment in comments
            for line in range(comment.span.start_line, comment.span.end_line + 1)
        )

    def comment_on_line(self, line: int) -> bool:
        return line in self._comment_lines

    def comment_before(self, span: Span) -> bool:
        line = span.start_line - 1
        return line >= 1 and self.comment_on_line(line)

    def comment_after(self, span: Span) -> bool:
        return self.comment_on_line(span.end_line + 1)

    def line_end_byte(self, span: Span) -> int:
        """Offset of the newline ending ``span``'s last line (or end of buffer)."""
        newline = self._source.find(b"\n", span.end_byte)
        return len(self._source) if newline == -1 else newline

    def first_line_span(self, span: Span) -> Span:
        """Portion of ``span`` that sits on its first line."""
        if not span.is_multiline:
            return span
        newline = self._source.find(b"\n", span.start_byte)
        end_byte = span.end_byte if newline == -1 else min(newline, span.end_byte)
        return Span(
            start_line=span.start_line,
            start_column=span.start_column,
            end_line=span.start_line,
            end_column=span.start_column + (end_byte - span.start_byte),
            start_byte=span.start_byte,
            end_byte=end_byte,
        )
