"""Tests for lint/exemptions.py module."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from sanelint.config.models import MultilineBlockConfig
from sanelint.lint.adjacency import AdjacencyAnalyzer
from sanelint.lint.exemptions import (
    EXEMPTION_CHAIN,
    BlockContext,
    Direction,
    first_exemption,
)
from sanelint.lint.queries import assignment_parent
from sanelint.lint.siblings import classify
from sanelint.syntax.parser import ParsedSource
from sanelint.syntax.tree import NodeKind, SyntaxNode

Parse = Callable[..., ParsedSource]


def _find(parsed: ParsedSource, predicate: Callable[[SyntaxNode], bool]) -> SyntaxNode:
    return next(node for node in parsed.tree.walk() if predicate(node))


def _context(parsed: ParsedSource, node: SyntaxNode) -> BlockContext:
    tree = parsed.tree
    subject = assignment_parent(tree, node) or node
    position = classify(tree, subject)
    assert position is not None
    return BlockContext(
        tree=tree,
        node=node,
        subject=subject,
        position=position,
        adjacency=AdjacencyAnalyzer(parsed.comments, parsed.source_bytes),
        settings=MultilineBlockConfig(),
    )


def _by_type(node_type: str) -> Callable[[SyntaxNode], bool]:
    return lambda node: node.named and node.type == node_type


def _block_call(node: SyntaxNode) -> bool:
    return node.kind is NodeKind.BLOCK_CALL


class TestChainOrder:
    """Tests for the documented evaluation order."""

    def test_names_in_order(self) -> None:
        """The chain is evaluated in this exact order."""
        assert [rule.name for rule in EXEMPTION_CHAIN] == [
            "single_line",
            "ternary",
            "assignment_rhs",
            "chained_receiver",
            "embedded_in_collection",
            "closure_literal",
            "paired_declarator",
            "signature_block",
            "followed_by_handler",
            "adjacent_comment",
            "slot_boundary",
        ]

    def test_directional_rules(self) -> None:
        """Direction-specific entries only apply to their side."""
        directions = {rule.name: rule.directions for rule in EXEMPTION_CHAIN}
        assert directions["paired_declarator"] == frozenset({Direction.BEFORE})
        assert directions["signature_block"] == frozenset({Direction.AFTER})
        assert directions["followed_by_handler"] == frozenset({Direction.AFTER})
        assert directions["slot_boundary"] == frozenset(Direction)


class TestFirstExemption:
    """Tests for first_exemption over parsed snippets."""

    def test_single_line_wins(self, parse_ruby: Parse) -> None:
        """Single-line form is checked first."""
        parsed = parse_ruby("foo\nitems.each { |i| i }\nbar\n")
        ctx = _context(parsed, _find(parsed, _block_call))
        assert first_exemption(ctx, Direction.BEFORE) == "single_line"
        assert first_exemption(ctx, Direction.AFTER) == "single_line"

    def test_no_exemption(self, parse_ruby: Parse) -> None:
        """A multiline if between statements has no exemption."""
        parsed = parse_ruby("foo\nif a\n  b\nend\nbar\n")
        ctx = _context(parsed, _find(parsed, _by_type("if")))
        assert first_exemption(ctx, Direction.BEFORE) is None
        assert first_exemption(ctx, Direction.AFTER) is None

    def test_assigned_conditional(self, parse_ruby: Parse) -> None:
        """An assigned conditional is exempt on both sides."""
        parsed = parse_ruby("foo\nx = if a\n  1\nelse\n  2\nend\nbar\n")
        ctx = _context(parsed, _find(parsed, _by_type("if")))
        assert ctx.subject.type == "assignment"
        assert first_exemption(ctx, Direction.BEFORE) == "assignment_rhs"
        assert first_exemption(ctx, Direction.AFTER) == "assignment_rhs"

    def test_assigned_block_keeps_after(self, parse_ruby: Parse) -> None:
        """An assigned block call keeps its after requirement."""
        parsed = parse_ruby("foo\nx = items.map do |i|\n  i\nend\nbar\n")
        ctx = _context(parsed, _find(parsed, _block_call))
        assert first_exemption(ctx, Direction.BEFORE) == "assignment_rhs"
        assert first_exemption(ctx, Direction.AFTER) is None

    def test_closure_literal(self, parse_ruby: Parse) -> None:
        """A stabby lambda statement is exempt."""
        parsed = parse_ruby("foo\n-> do\n  x\nend\nbar\n")
        ctx = _context(parsed, _find(parsed, _by_type("lambda")))
        assert first_exemption(ctx, Direction.BEFORE) == "closure_literal"

    def test_paired_declarator(self, parse_ruby: Parse) -> None:
        """desc followed by task waives the before side only."""
        parsed = parse_ruby('desc "Build"\ntask :build do\n  run\nend\nnext_thing\n')
        ctx = _context(parsed, _find(parsed, _block_call))
        assert first_exemption(ctx, Direction.BEFORE) == "paired_declarator"
        assert first_exemption(ctx, Direction.AFTER) is None

    def test_signature_block(self, parse_ruby: Parse) -> None:
        """sig followed by def waives the after side only."""
        parsed = parse_ruby("setup\nsig do\n  void\nend\ndef run; end\n")
        ctx = _context(parsed, _find(parsed, _block_call))
        assert first_exemption(ctx, Direction.BEFORE) is None
        assert first_exemption(ctx, Direction.AFTER) == "signature_block"

    def test_followed_by_handler(self, parse_ruby: Parse) -> None:
        """A following rescue clause waives the after side."""
        parsed = parse_ruby("begin\n  foo\n  if a\n    b\n  end\nrescue\n  c\nend\n")
        ctx = _context(parsed, _find(parsed, _by_type("if")))
        assert ctx.position.following_clause is not None
        assert first_exemption(ctx, Direction.AFTER) == "followed_by_handler"

    @pytest.mark.parametrize(
        ("source", "direction"),
        [
            ("foo\n# note\nif a\n  b\nend\n\nbar\n", Direction.BEFORE),
            ("foo\n\nif a\n  b\nend\n# note\nbar\n", Direction.AFTER),
        ],
    )
    def test_adjacent_comment(self, parse_ruby: Parse, source: str, direction: Direction) -> None:
        """A neighbouring comment line is acceptable separation."""
        parsed = parse_ruby(source)
        ctx = _context(parsed, _find(parsed, _by_type("if")))
        assert first_exemption(ctx, direction) == "adjacent_comment"

    def test_slot_boundary(self, parse_ruby: Parse) -> None:
        """First and last statements of a slot are exempt on the open side."""
        parsed = parse_ruby("if a\n  b\nend\nbar\n")
        ctx = _context(parsed, _find(parsed, _by_type("if")))
        assert first_exemption(ctx, Direction.BEFORE) == "slot_boundary"
        assert first_exemption(ctx, Direction.AFTER) is None
