"""Sane/ConditionalAssignmentAllowTernary.

Assign inside the branches of a multi-branch conditional instead of
assigning its value; ternaries stay allowed::

    # bad
    foo = if condition
      1
    else
      2
    end

    # good
    if condition
      foo = 1
    else
      foo = 2
    end

    # good
    foo = condition ? 1 : 2
"""

from __future__ import annotations

from sanelint.lint.models import Diagnostic
from sanelint.lint.queries import ASSIGNMENT_TYPES, has_else_branch
from sanelint.lint.rules.base import Rule, registry
from sanelint.syntax.parser import ParsedSource
from sanelint.syntax.tree import SyntaxNode, SyntaxTree

MSG = "Move the assignment inside the `{keyword}` branch."


def conditional_keyword(tree: SyntaxTree, rhs: SyntaxNode) -> str | None:
    """Keyword to report for an assigned value, or None when it is allowed."""
    if rhs.type in ("if", "unless"):
        return rhs.type if has_else_branch(tree, rhs) else None
    if rhs.type in ("case", "case_match"):
        return "case"
    return None


@registry.register
class ConditionalAssignmentAllowTernary(Rule):
    rule_id = "Sane/ConditionalAssignmentAllowTernary"
    description = "Assign inside conditional branches; ternaries are allowed."
    config_key = "conditional_assignment_allow_ternary"

    def investigate(self, source: ParsedSource) -> list[Diagnostic]:
        tree = source.tree
        diagnostics = []
        for node in tree.walk():
            if node.type not in ASSIGNMENT_TYPES or node.span is None:
                continue
            rhs = tree.child_by_field(node, "right")
            if rhs is None:
                continue
            keyword = conditional_keyword(tree, rhs)
            if keyword is not None:
                diagnostics.append(self.diagnostic(source, node.span, MSG.format(keyword=keyword)))
        return diagnostics
