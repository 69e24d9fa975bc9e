"""Exemption chain for the blank-line-around-block requirement.

Each entry is a named predicate over a candidate block and its context.
Entries are evaluated in order and the first match wins; a match means no
separation is required in that direction. The order is part of the contract:
the chained-receiver check runs before the generic embedded-expression
check, because a chained block is also nested in a call.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from sanelint.config.models import MultilineBlockConfig
from sanelint.lint.adjacency import AdjacencyAnalyzer, is_first_line_of_file, is_multiline
from sanelint.lint.queries import (
    DEFINITION_TYPES,
    assignment_parent,
    in_value_container,
    is_chain_receiver,
    method_name,
)
from sanelint.lint.siblings import SlotPosition
from sanelint.syntax.tree import NodeKind, SyntaxNode, SyntaxTree


class Direction(Enum):
    """Which side of a block the blank line belongs to."""

    BEFORE = "before"
    AFTER = "after"


BOTH: frozenset[Direction] = frozenset(Direction)


@dataclass(frozen=True, slots=True)
class BlockContext:
    """Everything a predicate may look at for one candidate.

    ``subject`` is the statement whose neighbours are inspected: the node
    itself, or the enclosing assignment when the node is its right-hand side.
    ``position`` locates the subject in its body slot.
    """

    tree: SyntaxTree
    node: SyntaxNode
    subject: SyntaxNode
    position: SlotPosition
    adjacency: AdjacencyAnalyzer
    settings: MultilineBlockConfig

    def neighbour(self, direction: Direction) -> SyntaxNode | None:
        if direction is Direction.BEFORE:
            return self.position.previous
        return self.position.next


@dataclass(frozen=True, slots=True)
class ExemptionRule:
    name: str
    check: Callable[[BlockContext, Direction], bool]
    directions: frozenset[Direction] = BOTH

    def applies(self, ctx: BlockContext, direction: Direction) -> bool:
        return direction in self.directions and self.check(ctx, direction)


def _single_line(ctx: BlockContext, direction: Direction) -> bool:
    return not is_multiline(ctx.node.span)


def _ternary(ctx: BlockContext, direction: Direction) -> bool:
    return ctx.node.kind is NodeKind.TERNARY


def _assignment_rhs(ctx: BlockContext, direction: Direction) -> bool:
    if assignment_parent(ctx.tree, ctx.node) is None:
        return False
    # A block call keeps its "after" check, moved to the whole assignment
    if ctx.node.kind is NodeKind.BLOCK_CALL:
        return direction is Direction.BEFORE
    return True


def _chained_receiver(ctx: BlockContext, direction: Direction) -> bool:
    return is_chain_receiver(ctx.tree, ctx.node)


def _embedded_in_collection(ctx: BlockContext, direction: Direction) -> bool:
    return in_value_container(ctx.tree, ctx.node)


def _closure_literal(ctx: BlockContext, direction: Direction) -> bool:
    return ctx.node.kind is NodeKind.CLOSURE


def _declarator_arguments_ok(tree: SyntaxTree, call: SyntaxNode) -> bool:
    if call.type == "identifier":
        return True
    arguments = tree.child_by_field(call, "arguments")
    if arguments is None:
        return True
    return all(arg.type == "string" for arg in tree.children(arguments, named_only=True))


def _paired_declarator(ctx: BlockContext, direction: Direction) -> bool:
    if ctx.node.kind is not NodeKind.BLOCK_CALL:
        return False
    previous = ctx.position.previous
    if previous is None or previous.kind is NodeKind.BLOCK_CALL:
        return False
    if previous.kind is not NodeKind.CALL and previous.type != "identifier":
        return False
    declarator = method_name(ctx.tree, previous)
    block_call = method_name(ctx.tree, ctx.node)
    for pair in ctx.settings.paired_calls:
        if pair.declarator == declarator and pair.block_call == block_call:
            return _declarator_arguments_ok(ctx.tree, previous)
    return False


def _signature_block(ctx: BlockContext, direction: Direction) -> bool:
    if ctx.node.kind is not NodeKind.BLOCK_CALL:
        return False
    if method_name(ctx.tree, ctx.node) not in ctx.settings.signature_calls:
        return False
    following = ctx.position.next
    return following is not None and following.type in DEFINITION_TYPES


def _followed_by_handler(ctx: BlockContext, direction: Direction) -> bool:
    return ctx.position.following_clause is not None


def _adjacent_comment(ctx: BlockContext, direction: Direction) -> bool:
    span = ctx.subject.span
    if span is None:
        return False
    if direction is Direction.BEFORE:
        return ctx.adjacency.comment_before(span)
    return ctx.adjacency.comment_after(span)


def _slot_boundary(ctx: BlockContext, direction: Direction) -> bool:
    if ctx.neighbour(direction) is None:
        return True
    span = ctx.subject.span
    return direction is Direction.BEFORE and span is not None and is_first_line_of_file(span)


EXEMPTION_CHAIN: tuple[ExemptionRule, ...] = (
    ExemptionRule("single_line", _single_line),
    ExemptionRule("ternary", _ternary),
    ExemptionRule("assignment_rhs", _assignment_rhs),
    ExemptionRule("chained_receiver", _chained_receiver),
    ExemptionRule("embedded_in_collection", _embedded_in_collection),
    ExemptionRule("closure_literal", _closure_literal),
    ExemptionRule("paired_declarator", _paired_declarator, frozenset({Direction.BEFORE})),
    ExemptionRule("signature_block", _signature_block, frozenset({Direction.AFTER})),
    ExemptionRule("followed_by_handler", _followed_by_handler, frozenset({Direction.AFTER})),
    ExemptionRule("adjacent_comment", _adjacent_comment),
    ExemptionRule("slot_boundary", _slot_boundary),
)


def first_exemption(ctx: BlockContext, direction: Direction) -> str | None:
    """Name of the first chain entry that waives ``direction``, or None."""
    for rule in EXEMPTION_CHAIN:
        if rule.applies(ctx, direction):
            return rule.name
    return None
