"""Ruby-shaped questions asked of the syntax arena by several rules."""

from __future__ import annotations

from sanelint.syntax.tree import NodeKind, Span, SyntaxNode, SyntaxTree

ASSIGNMENT_TYPES: frozenset[str] = frozenset({"assignment", "operator_assignment"})

# Containers whose members are values rather than statements
VALUE_CONTAINER_TYPES: frozenset[str] = frozenset(
    {"array", "hash", "pair", "argument_list", "element_reference"}
)

DEFINITION_TYPES: frozenset[str] = frozenset({"method", "singleton_method"})

# Constructs written as ``keyword ... end``
END_KEYWORD_TYPES: frozenset[str] = frozenset(
    {
        "if",
        "unless",
        "case",
        "case_match",
        "while",
        "until",
        "for",
        "begin",
        "method",
        "singleton_method",
        "class",
        "module",
        "singleton_class",
    }
)


def method_name(tree: SyntaxTree, call: SyntaxNode) -> str | None:
    """Selector of a call (``each`` in ``items.each``); bare identifiers name themselves."""
    if call.type == "identifier":
        return tree.text(call)
    if call.kind not in (NodeKind.CALL, NodeKind.BLOCK_CALL):
        return None
    selector = tree.child_by_field(call, "method")
    return tree.text(selector) if selector is not None else None


def block_of(tree: SyntaxTree, call: SyntaxNode) -> SyntaxNode | None:
    """The ``do ... end`` / ``{ ... }`` attached to a call or lambda."""
    if call.kind is NodeKind.BLOCK_CALL:
        return tree.child_by_field(call, "block")
    if call.kind is NodeKind.CLOSURE:
        return tree.child_by_field(call, "body")
    return None


def is_do_block_call(tree: SyntaxTree, node: SyntaxNode) -> bool:
    block = block_of(tree, node)
    return block is not None and block.type == "do_block"


def closing_span(tree: SyntaxTree, node: SyntaxNode) -> Span | None:
    """Span of the closing marker (``end`` or ``}``) of a compound node."""
    owner = block_of(tree, node) or node
    if node.kind is NodeKind.LOOP:
        # while/until/for keep their ``end`` inside the ``do`` body
        owner = tree.child_by_field(node, "body") or node
    token = tree.last_token(owner)
    if token is not None and tree.text(token) in ("end", "}"):
        return token.span
    return node.span


def assignment_parent(tree: SyntaxTree, node: SyntaxNode) -> SyntaxNode | None:
    """Enclosing assignment when ``node`` is its right-hand side.

    Covers plain, multiple, operator (``+=``, ``||=``) and setter
    (``obj.attr = ...``) assignments, which all share the ``right`` field.
    """
    parent = tree.parent(node)
    if parent is None or parent.type not in ASSIGNMENT_TYPES:
        return None
    if tree.field_of(node) != "right":
        return None
    return parent


def is_chain_receiver(tree: SyntaxTree, node: SyntaxNode) -> bool:
    """``node`` is directly followed by ``.name`` or ``&.name``."""
    parent = tree.parent(node)
    if parent is None or parent.kind not in (NodeKind.CALL, NodeKind.BLOCK_CALL):
        return False
    return tree.field_of(node) == "receiver"


def in_value_container(tree: SyntaxTree, node: SyntaxNode) -> bool:
    parent = tree.parent(node)
    return parent is not None and parent.type in VALUE_CONTAINER_TYPES


def has_else_branch(tree: SyntaxTree, conditional: SyntaxNode) -> bool:
    alternative = tree.child_by_field(conditional, "alternative")
    return alternative is not None


def ends_with_end_keyword(tree: SyntaxTree, node: SyntaxNode) -> bool:
    """Construct closed by the ``end`` keyword (brace blocks excluded)."""
    if node.type in END_KEYWORD_TYPES:
        return True
    if node.kind in (NodeKind.BLOCK_CALL, NodeKind.CLOSURE):
        return is_do_block_call(tree, node)
    return False
