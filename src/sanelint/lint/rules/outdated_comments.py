"""Sane/OutdatedComments.

``# TODO[2024-01-01]: ...`` style comments (also NOTE and FIXME, any case)
are reported once their date has passed.
"""

from __future__ import annotations

import datetime as dt
import re

from sanelint.core.logging import get_logger
from sanelint.lint.models import Diagnostic, Severity
from sanelint.lint.rules.base import Rule, registry
from sanelint.syntax.parser import ParsedSource

log = get_logger("lint.rules.outdated_comments")

COMMENT_PATTERN = re.compile(r"^#\s*(NOTE|TODO|FIXME)\[(\d{4}-\d{2}-\d{2})\]:", re.IGNORECASE)
MSG = "Review or remove this outdated comment dated {date}"


@registry.register
class OutdatedComments(Rule):
    rule_id = "Sane/OutdatedComments"
    description = "Report dated TODO/NOTE/FIXME comments whose date has passed."
    config_key = "outdated_comments"
    default_severity = Severity.WARNING
    requires_valid_syntax = True

    def today(self) -> dt.date:
        return dt.date.today()

    def investigate(self, source: ParsedSource) -> list[Diagnostic]:
        if not source.valid_syntax:
            return []

        today = self.today()
        diagnostics = []
        for comment in source.comments:
            match = COMMENT_PATTERN.match(comment.text)
            if match is None:
                continue
            date_text = match.group(2)
            try:
                date = dt.date.fromisoformat(date_text)
            except ValueError:
                log.debug("comment_date_invalid", path=source.path, line=comment.line)
                continue
            if date < today:
                diagnostics.append(self.diagnostic(source, comment.span, MSG.format(date=date_text)))
        return diagnostics
