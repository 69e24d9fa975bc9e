"""Lint models - diagnostics, edit instructions and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from sanelint.core.errors import SaneLintError
from sanelint.syntax.tree import Span


class Severity(Enum):
    """Diagnostic severity level."""

    ERROR = "error"
    WARNING = "warning"
    CONVENTION = "convention"
    INFO = "info"

    @property
    def letter(self) -> str:
        return self.value[0].upper()


class EditOperation(Enum):
    """How an edit instruction touches the buffer."""

    INSERT_BEFORE = "insert_before"
    INSERT_AFTER = "insert_after"
    REPLACE = "replace"


@dataclass(frozen=True, slots=True)
class EditInstruction:
    """Byte-anchored text edit.

    Insertions have an empty range at ``position``; replacements cover
    ``position`` up to ``end``.
    """

    position: int
    operation: EditOperation
    text: str
    end: int | None = None

    @classmethod
    def insert_before(cls, position: int, text: str) -> EditInstruction:
        return cls(position=position, operation=EditOperation.INSERT_BEFORE, text=text)

    @classmethod
    def insert_after(cls, position: int, text: str) -> EditInstruction:
        return cls(position=position, operation=EditOperation.INSERT_AFTER, text=text)

    @classmethod
    def replace(cls, start: int, end: int, text: str) -> EditInstruction:
        if end < start:
            raise ValueError(f"replace range is reversed: {start}..{end}")
        return cls(position=start, operation=EditOperation.REPLACE, text=text, end=end)

    @property
    def range(self) -> tuple[int, int]:
        if self.operation is EditOperation.REPLACE and self.end is not None:
            return (self.position, self.end)
        return (self.position, self.position)

    def overlaps(self, other: EditInstruction) -> bool:
        """Ranges intersect, or two edits target the same insertion point."""
        a_start, a_end = self.range
        b_start, b_end = other.range
        if a_start == b_start:
            return True
        return a_start < b_end and b_start < a_end


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single rule violation."""

    path: str
    rule_id: str
    message: str
    span: Span  # anchor shown to the user
    severity: Severity = Severity.CONVENTION
    fix: tuple[EditInstruction, ...] = ()
    fix_applied: bool = False
    # Character columns of the anchor; byte columns of ``span`` when unset
    char_columns: tuple[int, int] | None = None

    @property
    def line(self) -> int:
        return self.span.start_line

    @property
    def column(self) -> int:
        start = self.char_columns[0] if self.char_columns else self.span.start_column
        return start + 1

    @property
    def end_line(self) -> int:
        return self.span.end_line

    @property
    def end_column(self) -> int:
        end = self.char_columns[1] if self.char_columns else self.span.end_column
        return end + 1

    @property
    def fixable(self) -> bool:
        return bool(self.fix)

    def format(self) -> str:
        marker = "[Corrected] " if self.fix_applied else ""
        return (
            f"{self.path}:{self.line}:{self.column}: {self.severity.letter}: "
            f"{marker}[{self.rule_id}] {self.message}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "rule": self.rule_id,
            "message": self.message,
            "severity": self.severity.value,
            "line": self.line,
            "column": self.column,
            "end_line": self.end_line,
            "end_column": self.end_column,
            "fixable": self.fixable,
            "fix_applied": self.fix_applied,
        }


@dataclass
class FileResult:
    """Outcome of linting one file."""

    path: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    modified: bool = False
    passes: int = 0
    errors: list[SaneLintError] = field(default_factory=list)

    @property
    def status(self) -> Literal["clean", "dirty", "error"]:
        if self.errors:
            return "error"
        if any(not d.fix_applied for d in self.diagnostics):
            return "dirty"
        return "clean"


@dataclass
class LintResult:
    """Aggregated result from a lint run."""

    action: Literal["check", "fix"]
    files: list[FileResult] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [d for f in self.files for d in f.diagnostics]

    @property
    def total_diagnostics(self) -> int:
        return sum(len(f.diagnostics) for f in self.files)

    @property
    def remaining_diagnostics(self) -> int:
        return sum(1 for d in self.diagnostics if not d.fix_applied)

    @property
    def total_files_modified(self) -> int:
        return sum(1 for f in self.files if f.modified)

    @property
    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.diagnostics if not d.fix_applied)

    @property
    def status(self) -> Literal["clean", "dirty", "error"]:
        if any(f.status == "error" for f in self.files):
            return "error"
        if any(f.status == "dirty" for f in self.files):
            return "dirty"
        return "clean"

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.action,
            "status": self.status,
            "files_checked": len(self.files),
            "files_modified": self.total_files_modified,
            "duration_seconds": round(self.duration_seconds, 3),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "errors": [e.to_dict() for f in self.files for e in f.errors],
        }
