"""Sane/DisallowMethods.

Configured method names are either replaced (reported with a fix that swaps
the selector) or prohibited outright. Example ``.sanelint.yml``::

    rules:
      disallow_methods:
        replace_methods:
          deliver_now:
            with: deliver_later
            reason: "`deliver_later` sends the email via background job"
        prohibited_methods:
          dangerous_method:
            reason: "This method is deprecated and unsafe"

Only explicit calls (with a receiver, arguments or a block) are matched; a
bare identifier may be a local variable and is left alone.
"""

from __future__ import annotations

from sanelint.config.models import DisallowMethodsConfig
from sanelint.lint.models import Diagnostic, EditInstruction, Severity
from sanelint.lint.rules.base import Rule, registry
from sanelint.syntax.parser import ParsedSource
from sanelint.syntax.tree import NodeKind

REPLACEABLE_METHOD_MSG = "You should use `{with_}` instead of `{method_name}` because {reason}"
PROHIBITED_METHOD_MSG = "You should not use `{method_name}` because {reason}"


@registry.register
class DisallowMethods(Rule):
    rule_id = "Sane/DisallowMethods"
    description = "Replace or prohibit configured method calls."
    config_key = "disallow_methods"
    config_model = DisallowMethodsConfig
    default_severity = Severity.ERROR

    config: DisallowMethodsConfig

    def investigate(self, source: ParsedSource) -> list[Diagnostic]:
        replace = self.config.replace_methods
        prohibited = self.config.prohibited_methods
        if not replace and not prohibited:
            return []

        tree = source.tree
        diagnostics = []
        for node in tree.walk():
            if node.kind not in (NodeKind.CALL, NodeKind.BLOCK_CALL) or node.span is None:
                continue
            selector = tree.child_by_field(node, "method")
            if selector is None or selector.span is None:
                continue
            name = tree.text(selector)

            if name in replace:
                entry = replace[name]
                message = REPLACEABLE_METHOD_MSG.format(
                    with_=entry.with_, method_name=name, reason=entry.reason
                )
                fix = EditInstruction.replace(
                    selector.span.start_byte, selector.span.end_byte, entry.with_
                )
                diagnostics.append(self.diagnostic(source, node.span, message, fix=(fix,)))
            elif name in prohibited:
                message = PROHIBITED_METHOD_MSG.format(
                    method_name=name, reason=prohibited[name].reason
                )
                diagnostics.append(self.diagnostic(source, node.span, message))
        return diagnostics
