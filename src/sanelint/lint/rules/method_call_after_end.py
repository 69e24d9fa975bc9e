"""Sane/NoMethodCallAfterEnd.

Flags calls made directly on a construct closed by ``end``::

    # bad
    array.map do |item|
      transform(item)
    end.compact

    # good
    result = array.map do |item|
      transform(item)
    end
    result.compact

Brace blocks are not affected.
"""

from __future__ import annotations

from sanelint.lint.models import Diagnostic
from sanelint.lint.queries import ends_with_end_keyword
from sanelint.lint.rules.base import Rule, registry
from sanelint.syntax.parser import ParsedSource
from sanelint.syntax.tree import NodeKind

MSG = "Do not call methods directly after `end`."


@registry.register
class NoMethodCallAfterEnd(Rule):
    rule_id = "Sane/NoMethodCallAfterEnd"
    description = "Disallow calling methods directly on `end`."
    config_key = "no_method_call_after_end"

    def investigate(self, source: ParsedSource) -> list[Diagnostic]:
        tree = source.tree
        diagnostics = []
        for node in tree.walk():
            if node.kind not in (NodeKind.CALL, NodeKind.BLOCK_CALL):
                continue
            receiver = tree.child_by_field(node, "receiver")
            if receiver is None or not ends_with_end_keyword(tree, receiver):
                continue
            anchor = tree.child_by_field(node, "operator") or tree.child_by_field(node, "method")
            span = anchor.span if anchor is not None else node.span
            if span is not None:
                diagnostics.append(self.diagnostic(source, span, MSG))
        return diagnostics
