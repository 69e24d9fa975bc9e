"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import logging
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from textwrap import dedent

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
# This ensures that the local sanelint package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of sanelint modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("sanelint"):
        del sys.modules[module_name]

from sanelint.syntax.parser import ParsedSource, RubyParser  # noqa: E402


@pytest.fixture(scope="session")
def ruby_parser() -> RubyParser:
    """Shared tree-sitter Ruby parser."""
    return RubyParser()


@pytest.fixture
def parse_ruby(ruby_parser: RubyParser) -> Callable[[str], ParsedSource]:
    """Parse a dedented Ruby snippet."""

    def _parse(source: str, path: str = "example.rb") -> ParsedSource:
        return ruby_parser.parse(dedent(source), path=path)

    return _parse


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers installed by configure_logging during a test."""
    yield
    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    structlog.reset_defaults()
