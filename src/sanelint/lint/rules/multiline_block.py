"""Sane/EmptyLinesAroundMultilineBlock.

Multiline ``if``/``unless``/``case``/loop statements and multiline block
calls need an empty line before and after them, unless they open or close
their body slot or an exemption applies.

    # bad
    work_for = data.work_done_for
    if data.present?
      creation_date = date1
    else
      creation_date = date2
    end
    legal_start_date = date3

    # good
    work_for = data.work_done_for

    if data.present?
      creation_date = date1
    else
      creation_date = date2
    end

    legal_start_date = date3
"""

from __future__ import annotations

from sanelint.config.models import MultilineBlockConfig
from sanelint.core.logging import get_logger
from sanelint.lint.adjacency import AdjacencyAnalyzer, gap_between
from sanelint.lint.exemptions import BlockContext, Direction, first_exemption
from sanelint.lint.models import Diagnostic, EditInstruction
from sanelint.lint.queries import assignment_parent, closing_span
from sanelint.lint.rules.base import Rule, registry
from sanelint.lint.siblings import classify
from sanelint.syntax.parser import ParsedSource
from sanelint.syntax.tree import NodeKind, SyntaxNode, SyntaxTree

log = get_logger("lint.rules.multiline_block")

MSG_BEFORE = "Add empty line before multiline `{keyword}` block."
MSG_AFTER = "Add empty line after multiline `{keyword}` block."

CONDITIONAL_TYPES: frozenset[str] = frozenset({"if", "unless", "case", "case_match"})
LOOP_TYPES: frozenset[str] = frozenset({"while", "until", "for"})


def block_keyword(node: SyntaxNode) -> str:
    if node.type in ("case", "case_match"):
        return "case"
    if node.kind in (NodeKind.BLOCK_CALL, NodeKind.CLOSURE):
        return "do...end"
    return node.type


@registry.register
class EmptyLinesAroundMultilineBlock(Rule):
    rule_id = "Sane/EmptyLinesAroundMultilineBlock"
    description = "Require empty lines around multiline conditionals, loops and blocks."
    config_key = "empty_lines_around_multiline_block"
    config_model = MultilineBlockConfig

    config: MultilineBlockConfig

    def is_candidate(self, node: SyntaxNode) -> bool:
        # Keyword tokens share their construct's type name
        if not node.named:
            return False
        if node.kind in (NodeKind.BLOCK_CALL, NodeKind.CLOSURE, NodeKind.TERNARY):
            return True
        if node.type in CONDITIONAL_TYPES:
            return True
        return self.config.check_loops and node.type in LOOP_TYPES

    def investigate(self, source: ParsedSource) -> list[Diagnostic]:
        tree = source.tree
        adjacency = AdjacencyAnalyzer(source.comments, source.source_bytes)
        claimed_gaps: set[int] = set()
        diagnostics: list[Diagnostic] = []

        for node in tree.walk():
            if not self.is_candidate(node) or node.span is None:
                continue
            ctx = self._context(tree, node, adjacency)
            if ctx is None:
                continue
            for direction in (Direction.BEFORE, Direction.AFTER):
                exemption = first_exemption(ctx, direction)
                if exemption is not None:
                    log.debug(
                        "block_exempt",
                        node_type=node.type,
                        line=node.span.start_line,
                        direction=direction.value,
                        exemption=exemption,
                    )
                    continue
                diagnostic = self._check(source, ctx, direction, claimed_gaps)
                if diagnostic is not None:
                    diagnostics.append(diagnostic)

        diagnostics.sort(key=lambda d: d.span.start_byte)
        return diagnostics

    def _context(
        self, tree: SyntaxTree, node: SyntaxNode, adjacency: AdjacencyAnalyzer
    ) -> BlockContext | None:
        subject = assignment_parent(tree, node) or node
        position = classify(tree, subject)
        if position is None:
            return None
        return BlockContext(
            tree=tree,
            node=node,
            subject=subject,
            position=position,
            adjacency=adjacency,
            settings=self.config,
        )

    def _check(
        self,
        source: ParsedSource,
        ctx: BlockContext,
        direction: Direction,
        claimed_gaps: set[int],
    ) -> Diagnostic | None:
        neighbour = ctx.neighbour(direction)
        subject_span = ctx.subject.span
        if neighbour is None or neighbour.span is None or subject_span is None:
            return None

        keyword = block_keyword(ctx.node)
        if direction is Direction.BEFORE:
            if gap_between(neighbour.span, subject_span):
                return None
            anchor = ctx.adjacency.first_line_span(subject_span)
            message = MSG_BEFORE.format(keyword=keyword)
            same_line = neighbour.span.end_line == subject_span.start_line
            gap_line = subject_span.start_line - 1
            edit = EditInstruction.insert_before(subject_span.line_start_byte, "\n")
        else:
            if gap_between(subject_span, neighbour.span):
                return None
            anchor = closing_span(ctx.tree, ctx.node) or subject_span
            message = MSG_AFTER.format(keyword=keyword)
            same_line = neighbour.span.start_line == subject_span.end_line
            gap_line = subject_span.end_line
            edit = EditInstruction.insert_after(ctx.adjacency.line_end_byte(subject_span), "\n")

        fix: tuple[EditInstruction, ...] = ()
        if same_line:
            log.debug("fix_skipped_same_line", line=anchor.start_line, direction=direction.value)
        elif gap_line in claimed_gaps:
            log.debug("fix_skipped_gap_claimed", line=gap_line, direction=direction.value)
        else:
            claimed_gaps.add(gap_line)
            fix = (edit,)
        return self.diagnostic(source, anchor, message, fix=fix)
