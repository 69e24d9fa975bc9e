"""Tests for syntax/parser.py module."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from sanelint.core.errors import ErrorCode, ParseError
from sanelint.syntax.parser import ParsedSource, RubyParser, is_ruby_file, parse_source
from sanelint.syntax.tree import NodeKind

Parse = Callable[..., ParsedSource]


class TestParse:
    """Tests for RubyParser.parse()."""

    def test_root_is_program(self, parse_ruby: Parse) -> None:
        """The arena is rooted at the program node."""
        parsed = parse_ruby("foo\n")
        assert parsed.tree.root.type == "program"
        assert parsed.tree.root.kind is NodeKind.PROGRAM
        assert parsed.valid_syntax
        assert parsed.total_nodes == len(parsed.tree)

    def test_accepts_str_and_bytes(self, ruby_parser: RubyParser) -> None:
        """Text input is encoded as UTF-8."""
        from_str = ruby_parser.parse("x = 1\n")
        from_bytes = ruby_parser.parse(b"x = 1\n")
        assert from_str.source_bytes == from_bytes.source_bytes
        assert from_str.path == "<source>"

    def test_spans_are_one_based_lines(self, parse_ruby: Parse) -> None:
        """Lines start at 1, columns at 0."""
        parsed = parse_ruby("foo\nif a\n  b\nend\n")
        node = next(n for n in parsed.tree.walk() if n.named and n.type == "if")
        assert node.span is not None
        assert (node.span.start_line, node.span.start_column) == (2, 0)
        assert node.span.end_line == 4
        assert parsed.tree.text(node).startswith("if a")

    def test_block_calls_marked(self, parse_ruby: Parse) -> None:
        """Calls with do or brace blocks become block calls."""
        parsed = parse_ruby("items.each do |i|\n  i\nend\nlist.map { |x| x }\nfoo(1)\n")
        kinds = [n.kind for n in parsed.tree.walk() if n.type == "call"]
        assert kinds == [NodeKind.BLOCK_CALL, NodeKind.BLOCK_CALL, NodeKind.CALL]

    def test_comments_collected_in_order(self, parse_ruby: Parse) -> None:
        """Comments are kept aside, sorted by offset."""
        parsed = parse_ruby("# first\nfoo # second\n# third\n")
        assert [c.text for c in parsed.comments] == ["# first", "# second", "# third"]
        assert [c.line for c in parsed.comments] == [1, 2, 3]
        assert parsed.comments[1].column == 4

    def test_syntax_errors_counted(self, parse_ruby: Parse) -> None:
        """Broken input still produces a tree, flagged as invalid."""
        parsed = parse_ruby("def foo\n  if\nend end end\n")
        assert parsed.error_count > 0
        assert not parsed.valid_syntax
        assert parsed.tree.root.type == "program"

    def test_lines(self, parse_ruby: Parse) -> None:
        """line() is 1-based and bounded."""
        parsed = parse_ruby("a\nb\n")
        assert parsed.line(1) == "a"
        assert parsed.line(2) == "b"
        assert parsed.line(0) is None
        assert parsed.line(10) is None

    def test_char_columns(self, parse_ruby: Parse) -> None:
        """Multibyte characters count once in character columns."""
        parsed = parse_ruby("nom = 'é'; bar\n")
        node = next(
            n for n in parsed.tree.walk() if n.type == "identifier" and n.span.start_column > 0
        )
        assert node.span.start_column == len("nom = 'é'; ".encode())
        assert parsed.char_columns(node.span) == (len("nom = 'é'; "), len("nom = 'é'; bar"))


class TestParseFile:
    """Tests for RubyParser.parse_file()."""

    def test_reads_file(self, ruby_parser: RubyParser, tmp_path: Path) -> None:
        """Files are parsed with their path as display path."""
        path = tmp_path / "a.rb"
        path.write_text("puts 1\n")
        parsed = ruby_parser.parse_file(path)
        assert parsed.path == str(path)
        assert parsed.source == "puts 1\n"

    def test_undecodable_file(self, ruby_parser: RubyParser, tmp_path: Path) -> None:
        """Non UTF-8 bytes raise a typed error."""
        path = tmp_path / "latin1.rb"
        path.write_bytes(b"puts '\xe9'\n")
        with pytest.raises(ParseError) as exc_info:
            ruby_parser.parse_file(path)
        assert exc_info.value.code == ErrorCode.PARSE_DECODE_ERROR


class TestParseSource:
    """Tests for the module-level helper."""

    def test_shared_parser(self) -> None:
        """parse_source works without an explicit parser."""
        parsed = parse_source("foo\n", path="inline.rb")
        assert parsed.path == "inline.rb"
        assert parse_source(b"bar\n").path == "<source>"


class TestIsRubyFile:
    """Tests for is_ruby_file()."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("app.rb", True),
            ("APP.RB", True),
            ("tasks.rake", True),
            ("Rakefile", True),
            ("Gemfile", True),
            ("README.md", False),
            ("rakefile", False),
        ],
    )
    def test_matching(self, name: str, expected: bool) -> None:
        """Extensions match case-insensitively, file names exactly."""
        result = is_ruby_file(Path(name), [".rb", ".rake"], ["Rakefile", "Gemfile"])
        assert result is expected
