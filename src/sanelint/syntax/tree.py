"""Arena-backed, read-only syntax tree.

Every node lives in one flat list owned by ``SyntaxTree`` and refers to its
parent and children by integer id. Nodes never hold references to each other,
so the parent link is a plain lookup and the whole tree is dropped at once.

The node records are built once by ``sanelint.syntax.parser`` (or by
``TreeBuilder`` in tests) and are never mutated afterwards.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class NodeKind(Enum):
    """Closed set of construct kinds the rules reason about."""

    PROGRAM = "program"
    CONDITIONAL = "conditional"
    TERNARY = "ternary"
    PATTERN_MATCH = "pattern_match"
    LOOP = "loop"
    EXCEPTION_BLOCK = "exception_block"
    CALL = "call"
    BLOCK_CALL = "block_call"
    BLOCK = "block"
    CLOSURE = "closure"
    ASSIGNMENT = "assignment"
    DEFINITION = "definition"
    COLLECTION = "collection"
    BODY = "body"
    COMMENT = "comment"
    TOKEN = "token"
    OTHER = "other"


# tree-sitter-ruby node type -> kind. Unlisted named types map to OTHER,
# anonymous tokens to TOKEN. ``call`` is refined to BLOCK_CALL when it
# carries a block.
TYPE_KINDS: dict[str, NodeKind] = {
    "program": NodeKind.PROGRAM,
    "if": NodeKind.CONDITIONAL,
    "unless": NodeKind.CONDITIONAL,
    "elsif": NodeKind.CONDITIONAL,
    "if_modifier": NodeKind.CONDITIONAL,
    "unless_modifier": NodeKind.CONDITIONAL,
    "conditional": NodeKind.TERNARY,
    "case": NodeKind.PATTERN_MATCH,
    "case_match": NodeKind.PATTERN_MATCH,
    "when": NodeKind.PATTERN_MATCH,
    "in_clause": NodeKind.PATTERN_MATCH,
    "while": NodeKind.LOOP,
    "until": NodeKind.LOOP,
    "for": NodeKind.LOOP,
    "while_modifier": NodeKind.LOOP,
    "until_modifier": NodeKind.LOOP,
    "begin": NodeKind.EXCEPTION_BLOCK,
    "rescue": NodeKind.EXCEPTION_BLOCK,
    "ensure": NodeKind.EXCEPTION_BLOCK,
    "rescue_modifier": NodeKind.EXCEPTION_BLOCK,
    "call": NodeKind.CALL,
    "block": NodeKind.BLOCK,
    "do_block": NodeKind.BLOCK,
    "lambda": NodeKind.CLOSURE,
    "assignment": NodeKind.ASSIGNMENT,
    "operator_assignment": NodeKind.ASSIGNMENT,
    "method": NodeKind.DEFINITION,
    "singleton_method": NodeKind.DEFINITION,
    "class": NodeKind.DEFINITION,
    "module": NodeKind.DEFINITION,
    "singleton_class": NodeKind.DEFINITION,
    "array": NodeKind.COLLECTION,
    "hash": NodeKind.COLLECTION,
    "pair": NodeKind.COLLECTION,
    "argument_list": NodeKind.COLLECTION,
    "then": NodeKind.BODY,
    "else": NodeKind.BODY,
    "do": NodeKind.BODY,
    "body_statement": NodeKind.BODY,
    "block_body": NodeKind.BODY,
    "comment": NodeKind.COMMENT,
}


def kind_for(node_type: str, *, named: bool, has_block: bool = False) -> NodeKind:
    """Classify a parser node type."""
    if not named:
        return NodeKind.TOKEN
    kind = TYPE_KINDS.get(node_type, NodeKind.OTHER)
    if kind is NodeKind.CALL and has_block:
        return NodeKind.BLOCK_CALL
    return kind


@dataclass(frozen=True, slots=True)
class Span:
    """Source range. Lines are 1-based, columns and bytes 0-based."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int
    start_byte: int
    end_byte: int

    @property
    def is_multiline(self) -> bool:
        return self.start_line != self.end_line

    @property
    def line_start_byte(self) -> int:
        """Byte offset of the first character on ``start_line``."""
        return self.start_byte - self.start_column

    def contains(self, other: Span) -> bool:
        return self.start_byte <= other.start_byte and other.end_byte <= self.end_byte


@dataclass(frozen=True, slots=True)
class Comment:
    """A source comment, kept outside the statement tree."""

    text: str
    span: Span

    @property
    def line(self) -> int:
        return self.span.start_line

    @property
    def column(self) -> int:
        return self.span.start_column


@dataclass(frozen=True, slots=True)
class SyntaxNode:
    """Immutable record for one node of the arena."""

    id: int
    type: str
    kind: NodeKind
    named: bool
    span: Span | None  # None for parser-inserted (missing / zero width) nodes
    parent_id: int | None
    child_ids: tuple[int, ...]
    field_names: tuple[str | None, ...]  # parallel to child_ids

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class SyntaxTree:
    """Read-only query layer over the node arena of one source file."""

    def __init__(self, nodes: list[SyntaxNode], source: bytes) -> None:
        if not nodes:
            raise ValueError("SyntaxTree needs at least a root node")
        self._nodes = nodes
        self._source = source

    @property
    def root(self) -> SyntaxNode:
        return self._nodes[0]

    @property
    def source(self) -> bytes:
        return self._source

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, node_id: int) -> SyntaxNode:
        return self._nodes[node_id]

    def parent(self, node: SyntaxNode) -> SyntaxNode | None:
        if node.parent_id is None:
            return None
        return self._nodes[node.parent_id]

    def children(self, node: SyntaxNode, *, named_only: bool = False) -> list[SyntaxNode]:
        result = [self._nodes[cid] for cid in node.child_ids]
        if named_only:
            return [child for child in result if child.named]
        return result

    def children_by_field(self, node: SyntaxNode, field_name: str) -> list[SyntaxNode]:
        return [
            self._nodes[cid]
            for cid, name in zip(node.child_ids, node.field_names, strict=True)
            if name == field_name
        ]

    def child_by_field(self, node: SyntaxNode, field_name: str) -> SyntaxNode | None:
        for cid, name in zip(node.child_ids, node.field_names, strict=True):
            if name == field_name:
                return self._nodes[cid]
        return None

    def field_of(self, node: SyntaxNode) -> str | None:
        """Field name under which ``node`` hangs off its parent."""
        parent = self.parent(node)
        if parent is None:
            return None
        index = parent.child_ids.index(node.id)
        return parent.field_names[index]

    def span(self, node: SyntaxNode) -> Span | None:
        return node.span

    def text(self, node: SyntaxNode) -> str:
        if node.span is None:
            return ""
        return self._source[node.span.start_byte : node.span.end_byte].decode(
            "utf-8", errors="replace"
        )

    def ancestors(self, node: SyntaxNode) -> Iterator[SyntaxNode]:
        current = self.parent(node)
        while current is not None:
            yield current
            current = self.parent(current)

    def walk(self, start: SyntaxNode | None = None) -> Iterator[SyntaxNode]:
        """Pre-order traversal in source order."""
        stack = [start or self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(self._nodes[cid] for cid in reversed(node.child_ids))

    def last_token(self, node: SyntaxNode) -> SyntaxNode | None:
        """Last anonymous child with a span, e.g. the closing ``end`` or ``}``."""
        for child in reversed(self.children(node)):
            if not child.named and child.span is not None:
                return child
        return None


class TreeBuilder:
    """Incremental arena construction, one node at a time in pre-order."""

    def __init__(self, source: bytes) -> None:
        self._source = source
        self._records: list[dict[str, object]] = []
        self._children: list[list[tuple[int, str | None]]] = []

    def add(
        self,
        node_type: str,
        span: Span | None,
        *,
        parent: int | None = None,
        field_name: str | None = None,
        named: bool = True,
        has_block: bool = False,
    ) -> int:
        node_id = len(self._records)
        if parent is None and node_id != 0:
            raise ValueError("only the first node may be the root")
        self._records.append(
            {
                "type": node_type,
                "kind": kind_for(node_type, named=named, has_block=has_block),
                "named": named,
                "span": span,
                "parent_id": parent,
            }
        )
        self._children.append([])
        if parent is not None:
            self._children[parent].append((node_id, field_name))
        return node_id

    def mark_block_call(self, node_id: int) -> None:
        """Refine a ``call`` record once its block child has been seen."""
        record = self._records[node_id]
        if record["kind"] is NodeKind.CALL:
            record["kind"] = NodeKind.BLOCK_CALL

    def build(self) -> SyntaxTree:
        nodes = [
            SyntaxNode(
                id=node_id,
                type=str(record["type"]),
                kind=record["kind"],  # type: ignore[arg-type]
                named=bool(record["named"]),
                span=record["span"],  # type: ignore[arg-type]
                parent_id=record["parent_id"],  # type: ignore[arg-type]
                child_ids=tuple(cid for cid, _ in self._children[node_id]),
                field_names=tuple(name for _, name in self._children[node_id]),
            )
            for node_id, record in enumerate(self._records)
        ]
        return SyntaxTree(nodes, self._source)
