"""Rule set. Importing this package registers every rule."""

from sanelint.lint.rules import (
    comment_spacing,
    conditional_assignment,
    disallow_methods,
    method_call_after_end,
    multiline_block,
    outdated_comments,
)
from sanelint.lint.rules.base import Rule, RuleRegistry, registry
from sanelint.lint.rules.comment_spacing import EmptyLineBeforeComment
from sanelint.lint.rules.conditional_assignment import ConditionalAssignmentAllowTernary
from sanelint.lint.rules.disallow_methods import DisallowMethods
from sanelint.lint.rules.method_call_after_end import NoMethodCallAfterEnd
from sanelint.lint.rules.multiline_block import EmptyLinesAroundMultilineBlock
from sanelint.lint.rules.outdated_comments import OutdatedComments

__all__ = [
    "comment_spacing",
    "conditional_assignment",
    "disallow_methods",
    "method_call_after_end",
    "multiline_block",
    "outdated_comments",
    "ConditionalAssignmentAllowTernary",
    "DisallowMethods",
    "EmptyLineBeforeComment",
    "EmptyLinesAroundMultilineBlock",
    "NoMethodCallAfterEnd",
    "OutdatedComments",
    "Rule",
    "RuleRegistry",
    "registry",
]
