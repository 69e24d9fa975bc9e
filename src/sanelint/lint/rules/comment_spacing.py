"""Sane/EmptyLineBeforeComment.

A full-line comment needs an empty line before it, except on the first line
of the file, after another comment, or right after a line that opens a body
(definition, control structure, block, branch keyword, access modifier).
"""

from __future__ import annotations

import re

from sanelint.lint.models import Diagnostic, EditInstruction
from sanelint.lint.rules.base import Rule, registry
from sanelint.syntax.parser import ParsedSource
from sanelint.syntax.tree import Comment

MSG = "Add empty line before comment."

_DEFINITION_OPENER = re.compile(r"\A(class|module|def)\s")
_CONTROL_OPENER = re.compile(r"\A(if|unless|case|while|until|for|begin)\s")
_DO_WITH_PARAMS = re.compile(r"do\s*\|[^|]*\|\s*\Z")
_BRACE_WITH_PARAMS = re.compile(r"\{\s*\|[^|]*\|\s*\Z")
_BRANCH_KEYWORD = re.compile(r"\A(rescue|ensure|else|elsif|when)\b")
_ACCESS_MODIFIER = re.compile(r"\A(private|protected|public)\s*\Z")


def opens_body(line: str) -> bool:
    """True when ``line`` starts a body whose first line may be a comment."""
    stripped = line.strip()
    if stripped == "begin":
        return True
    if _DEFINITION_OPENER.match(stripped) or _CONTROL_OPENER.match(stripped):
        return True
    if stripped.endswith((" do", " do |", "\tdo")) or _DO_WITH_PARAMS.search(stripped):
        return True
    if stripped.endswith("{") or _BRACE_WITH_PARAMS.search(stripped):
        return True
    return bool(_BRANCH_KEYWORD.match(stripped) or _ACCESS_MODIFIER.match(stripped))


@registry.register
class EmptyLineBeforeComment(Rule):
    rule_id = "Sane/EmptyLineBeforeComment"
    description = "Require an empty line before a comment that follows code."
    config_key = "empty_line_before_comment"

    def investigate(self, source: ParsedSource) -> list[Diagnostic]:
        comment_lines = {comment.line for comment in source.comments}
        diagnostics = []
        for comment in source.comments:
            if self._needs_empty_line(source, comment, comment_lines):
                fix = EditInstruction.insert_before(comment.span.line_start_byte, "\n")
                diagnostics.append(self.diagnostic(source, comment.span, MSG, fix=(fix,)))
        return diagnostics

    def _needs_empty_line(
        self, source: ParsedSource, comment: Comment, comment_lines: set[int]
    ) -> bool:
        span = comment.span
        if source.source_bytes[span.line_start_byte : span.start_byte].strip():
            return False  # trailing comment after code
        previous_number = comment.line - 1
        if previous_number < 1:
            return False
        previous = source.line(previous_number)
        if previous is None or not previous.strip():
            return False
        if previous_number in comment_lines:
            return False
        return not opens_body(previous)
