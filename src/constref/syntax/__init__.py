"""Syntax tree abstraction and parsers for constref."""

from ..errors import UnsupportedLanguageError
from .node import Span, SyntaxNode
from .registry import (
    clear_registry,
    detect_language,
    get_parser,
    get_parser_for_path,
    is_supported_path,
    register_parser,
    supported_languages,
)
from .ruby_parser import RubyParser

RUBY_EXTENSIONS = [".rb", ".rake", ".ru", ".gemspec", ".builder", ".jbuilder"]
RUBY_FILENAMES = ["Gemfile", "Rakefile"]

# Register built-in parsers
register_parser("ruby", RUBY_EXTENSIONS, RubyParser, filenames=RUBY_FILENAMES)

__all__ = [
    # Core types
    "Span",
    "SyntaxNode",
    # Parsers
    "RubyParser",
    # Registry functions
    "register_parser",
    "detect_language",
    "get_parser",
    "get_parser_for_path",
    "is_supported_path",
    "supported_languages",
    "clear_registry",
    "UnsupportedLanguageError",
]
