"""Sibling classification over body slots.

A body slot is the child sequence of one container node that holds
statements: the then-branch of an ``if``, the ``else`` branch, the body of a
method, block or loop, the top-level program. Only statements in the same
slot of the same parent are siblings; the branches of one conditional never
see each other.

The grammar wraps every slot in its own container node, so the table below
is keyed by container type. Supporting a new compound construct means adding
its container here.
"""

from __future__ import annotations

from dataclasses import dataclass

from sanelint.core.logging import get_logger
from sanelint.syntax.tree import SyntaxNode, SyntaxTree

log = get_logger("lint.siblings")

HANDLER_CLAUSES: frozenset[str] = frozenset({"rescue", "else", "ensure"})

# Named children that never count as statements of a slot
NON_STATEMENT_TYPES: frozenset[str] = frozenset(
    {"comment", "heredoc_body", "uninterpreted", "empty_statement"}
)


@dataclass(frozen=True, slots=True)
class BodySlot:
    """How one container type holds a statement sequence."""

    container: str
    description: str
    # Trailing clauses that belong to the construct rather than the sequence
    clause_types: frozenset[str] = frozenset()


BODY_SLOTS: dict[str, BodySlot] = {
    slot.container: slot
    for slot in (
        BodySlot("program", "top-level statements"),
        BodySlot("then", "branch body (if/unless/elsif/when/in/rescue)"),
        BodySlot("else", "else branch"),
        BodySlot("do", "loop body (while/until/for)"),
        BodySlot("body_statement", "method, class, module or do-block body", HANDLER_CLAUSES),
        BodySlot("block_body", "brace block body"),
        BodySlot("begin", "begin body", HANDLER_CLAUSES),
        BodySlot("ensure", "ensure body"),
        BodySlot("parenthesized_statements", "parenthesized statements"),
    )
}


@dataclass(frozen=True, slots=True)
class SlotPosition:
    """Where a node sits inside its body slot."""

    slot: BodySlot
    container: SyntaxNode
    statements: tuple[SyntaxNode, ...]
    index: int
    following_clause: SyntaxNode | None = None

    @property
    def label(self) -> str:
        return self.slot.container

    @property
    def is_sole(self) -> bool:
        return len(self.statements) == 1

    @property
    def previous(self) -> SyntaxNode | None:
        if self.is_sole or self.index == 0:
            return None
        return self.statements[self.index - 1]

    @property
    def next(self) -> SyntaxNode | None:
        if self.is_sole or self.index == len(self.statements) - 1:
            return None
        return self.statements[self.index + 1]


def _is_statement(node: SyntaxNode, slot: BodySlot) -> bool:
    return (
        node.named
        and node.span is not None
        and node.type not in NON_STATEMENT_TYPES
        and node.type not in slot.clause_types
    )


def slot_statements(tree: SyntaxTree, container: SyntaxNode) -> tuple[SyntaxNode, ...]:
    """Ordered statements of a container, or () if it is not a body slot."""
    slot = BODY_SLOTS.get(container.type)
    if slot is None:
        return ()
    return tuple(child for child in tree.children(container) if _is_statement(child, slot))


def classify(tree: SyntaxTree, node: SyntaxNode) -> SlotPosition | None:
    """Locate ``node`` in its parent's body slot.

    Returns None when the node has no span, no parent, or a parent that is
    not a known slot container (an embedded expression or an unfamiliar
    construct); no separation rule applies to it then.
    """
    if node.span is None:
        log.debug("slot_skip_no_span", node_type=node.type, node_id=node.id)
        return None
    parent = tree.parent(node)
    if parent is None:
        return None
    slot = BODY_SLOTS.get(parent.type)
    if slot is None:
        log.debug("slot_skip_unknown_parent", node_type=node.type, parent_type=parent.type)
        return None

    statements = slot_statements(tree, parent)
    try:
        index = next(i for i, stmt in enumerate(statements) if stmt.id == node.id)
    except StopIteration:
        return None

    following_clause = None
    position = parent.child_ids.index(node.id)
    for child in tree.children(parent)[position + 1 :]:
        if not child.named or child.type in NON_STATEMENT_TYPES:
            continue
        if child.type in slot.clause_types:
            following_clause = child
        break

    return SlotPosition(
        slot=slot,
        container=parent,
        statements=statements,
        index=index,
        following_clause=following_clause,
    )
