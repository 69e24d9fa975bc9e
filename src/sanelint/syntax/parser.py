"""Tree-sitter parsing of Ruby source into the syntax arena.

The tree-sitter tree is walked once with a cursor and copied into a
``SyntaxTree``; comment nodes are collected into a separate ordered list.
Parse errors do not stop conversion: rules run on the partial tree and can
check ``ParsedSource.valid_syntax`` when they need a clean parse.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import Any

import tree_sitter

from sanelint.core.errors import ParseError
from sanelint.core.logging import get_logger
from sanelint.syntax.tree import Comment, Span, SyntaxTree, TreeBuilder

GRAMMAR_MODULE = "tree_sitter_ruby"

log = get_logger("syntax.parser")


@dataclass
class ParsedSource:
    """One parsed file: raw text, syntax arena and comments."""

    path: str
    tree: SyntaxTree
    comments: tuple[Comment, ...]
    error_count: int = 0
    total_nodes: int = 0

    @property
    def source_bytes(self) -> bytes:
        return self.tree.source

    @cached_property
    def source(self) -> str:
        return self.tree.source.decode("utf-8", errors="replace")

    @cached_property
    def lines(self) -> list[str]:
        """Source lines without terminators; ``lines[0]`` is line 1."""
        return self.source.split("\n")

    @property
    def valid_syntax(self) -> bool:
        return self.error_count == 0

    def line(self, number: int) -> str | None:
        if 1 <= number <= len(self.lines):
            return self.lines[number - 1]
        return None

    def char_columns(self, span: Span) -> tuple[int, int]:
        """0-based character columns of the start and end of ``span``."""
        data = self.source_bytes
        start = data[span.line_start_byte : span.start_byte]
        end = data[span.end_byte - span.end_column : span.end_byte]
        return (
            len(start.decode("utf-8", errors="replace")),
            len(end.decode("utf-8", errors="replace")),
        )


def is_ruby_file(path: Path, extensions: list[str], filenames: list[str]) -> bool:
    """Match by extension first, then by well-known extensionless name."""
    if path.suffix and path.suffix.lower() in extensions:
        return True
    return path.name in filenames


def _span_of(node: Any) -> Span | None:
    # Parser-inserted and zero width nodes have no usable location
    if node.is_missing or node.start_byte == node.end_byte:
        return None
    return Span(
        start_line=node.start_point[0] + 1,
        start_column=node.start_point[1],
        end_line=node.end_point[0] + 1,
        end_column=node.end_point[1],
        start_byte=node.start_byte,
        end_byte=node.end_byte,
    )


@dataclass
class RubyParser:
    """
    Tree-sitter parser for Ruby source.

    Usage::

        parser = RubyParser()
        parsed = parser.parse(b"if x\\n  y\\nend\\n", path="example.rb")
        for node in parsed.tree.walk():
            ...
    """

    _parser: Any = field(default=None, repr=False)
    _language: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Initialize the parser."""
        try:
            grammar = importlib.import_module(GRAMMAR_MODULE)
        except ImportError as err:
            raise ParseError.grammar_unavailable(GRAMMAR_MODULE) from err
        self._language = tree_sitter.Language(grammar.language())
        self._parser = tree_sitter.Parser()
        self._parser.language = self._language

    def parse_file(self, path: Path) -> ParsedSource:
        """Read and parse a file from disk."""
        content = path.read_bytes()
        try:
            content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError.decode_error(str(path), str(e)) from e
        return self.parse(content, path=str(path))

    def parse(self, content: bytes | str, *, path: str = "<source>") -> ParsedSource:
        """
        Parse Ruby source.

        Args:
            content: Source text (str is encoded as UTF-8)
            path: Display path used in diagnostics

        Returns:
            ParsedSource with the converted tree, comments and error count.
        """
        if isinstance(content, str):
            content = content.encode("utf-8")

        ts_tree = self._parser.parse(content)
        builder = TreeBuilder(content)
        comments: list[Comment] = []
        error_count = 0
        total_nodes = 0

        cursor = ts_tree.walk()
        parents: list[int] = []
        while True:
            ts_node = cursor.node
            total_nodes += 1
            if ts_node.type == "ERROR" or ts_node.is_missing:
                error_count += 1

            span = _span_of(ts_node)
            node_id = builder.add(
                ts_node.type,
                span,
                parent=parents[-1] if parents else None,
                field_name=cursor.field_name,
                named=ts_node.is_named,
            )
            if cursor.field_name == "block" and parents:
                builder.mark_block_call(parents[-1])
            if ts_node.type == "comment" and span is not None:
                text = content[span.start_byte : span.end_byte].decode("utf-8", errors="replace")
                comments.append(Comment(text=text, span=span))

            if cursor.goto_first_child():
                parents.append(node_id)
                continue
            while not cursor.goto_next_sibling():
                if not cursor.goto_parent():
                    break
                parents.pop()
            else:
                continue
            break

        if error_count:
            log.debug("parse_errors", path=path, errors=error_count)

        comments.sort(key=lambda c: c.span.start_byte)
        return ParsedSource(
            path=path,
            tree=builder.build(),
            comments=tuple(comments),
            error_count=error_count,
            total_nodes=total_nodes,
        )


_default_parser: RubyParser | None = None


def parse_source(source: bytes | str, path: str | None = None) -> ParsedSource:
    """Parse with a shared module-level parser."""
    global _default_parser
    if _default_parser is None:
        _default_parser = RubyParser()
    return _default_parser.parse(source, path=path or "<source>")
