"""Patch applier - applies edit instructions to a source buffer.

Edits are sorted by position; an edit that overlaps one already accepted
(intersecting ranges, or a second insertion at the same offset) is rejected
and logged. Accepted edits are applied from the end of the buffer backwards
so earlier byte offsets stay valid.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from sanelint.core.errors import PatchError
from sanelint.core.logging import get_logger
from sanelint.lint.models import EditInstruction

log = get_logger("lint.patch")


@dataclass
class PatchResult:
    """Patched text plus the edits that went in and the ones that did not."""

    text: bytes
    applied: list[EditInstruction] = field(default_factory=list)
    rejected: list[tuple[EditInstruction, PatchError]] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.applied)


def apply_edits(source: bytes, edits: Iterable[EditInstruction]) -> PatchResult:
    """Apply non-overlapping edits to ``source``.

    Args:
        source: Original buffer
        edits: Instructions in any order

    Returns:
        PatchResult with the new buffer. Rejected edits leave the buffer
        untouched at their position.
    """
    size = len(source)
    ordered = sorted(edits, key=lambda e: (e.position, e.range[1]))
    accepted: list[EditInstruction] = []
    rejected: list[tuple[EditInstruction, PatchError]] = []

    for edit in ordered:
        start, end = edit.range
        if start < 0 or end > size:
            error = PatchError.out_of_range(start if start < 0 else end, size)
        elif accepted and accepted[-1].overlaps(edit):
            error = PatchError.overlap(accepted[-1].range, edit.range)
        else:
            accepted.append(edit)
            continue
        log.debug("edit_rejected", error=error.error_name, position=start, details=error.details)
        rejected.append((edit, error))

    text = source
    for edit in reversed(accepted):
        start, end = edit.range
        text = text[:start] + edit.text.encode("utf-8") + text[end:]

    return PatchResult(text=text, applied=accepted, rejected=rejected)
