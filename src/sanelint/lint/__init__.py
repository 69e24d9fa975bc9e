"""Lint module - structural style rules for Ruby source."""

from sanelint.lint.models import (
    Diagnostic,
    EditInstruction,
    EditOperation,
    FileResult,
    LintResult,
    Severity,
)
from sanelint.lint.ops import LintOps
from sanelint.lint.patch import PatchResult, apply_edits
from sanelint.lint.rules import Rule, RuleRegistry, registry

__all__ = [
    "Diagnostic",
    "EditInstruction",
    "EditOperation",
    "FileResult",
    "LintOps",
    "LintResult",
    "PatchResult",
    "Rule",
    "RuleRegistry",
    "Severity",
    "apply_edits",
    "registry",
]
