"""Syntax layer - parsing and the read-only node arena."""

from sanelint.syntax.parser import (
    GRAMMAR_MODULE,
    ParsedSource,
    RubyParser,
    is_ruby_file,
    parse_source,
)
from sanelint.syntax.tree import (
    Comment,
    NodeKind,
    Span,
    SyntaxNode,
    SyntaxTree,
    TreeBuilder,
    kind_for,
)

__all__ = [
    "GRAMMAR_MODULE",
    "Comment",
    "NodeKind",
    "ParsedSource",
    "RubyParser",
    "Span",
    "SyntaxNode",
    "SyntaxTree",
    "TreeBuilder",
    "is_ruby_file",
    "kind_for",
    "parse_source",
]
