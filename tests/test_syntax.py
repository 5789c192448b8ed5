"""Tests for the syntax tree abstraction and parser registry."""

import pytest

from constref.errors import UnsupportedLanguageError
from constref.syntax import (
    RUBY_EXTENSIONS,
    RUBY_FILENAMES,
    RubyParser,
    SyntaxNode,
    clear_registry,
    detect_language,
    get_parser_for_path,
    is_supported_path,
    register_parser,
    supported_languages,
)
from constref.syntax.node import Span


class TestRubyParser:
    """Tests for tree-sitter based parsing."""

    def test_parse_returns_program(self):
        tree = RubyParser().parse("Order.find(1)\n")
        assert tree is not None
        assert tree.kind == "program"

    def test_constant_leaf_keeps_text_and_span(self):
        tree = RubyParser().parse("x = 1\nOrder\n")
        constants = [n for n in tree.iter_descendants() if n.kind == "constant"]

        assert len(constants) == 1
        order = constants[0]
        assert order.text == "Order"
        assert order.span.start_line == 2
        assert order.span.start_column == 0
        assert order.span.end_column == 5

    def test_fields_are_preserved(self):
        tree = RubyParser().parse("class Invoice < Base\nend\n")
        klass = tree.children[0]

        assert klass.kind == "class"
        assert klass.child_by_field("name").text == "Invoice"
        assert klass.child_by_field("superclass") is not None
        assert klass.field_name_of(klass.child_by_field("name")) == "name"

    def test_scope_resolution_fields(self):
        tree = RubyParser().parse("Billing::Invoice\n")
        node = tree.children[0]

        assert node.kind == "scope_resolution"
        assert node.child_by_field("scope").text == "Billing"
        assert node.child_by_field("name").text == "Invoice"

    def test_syntax_error_returns_none(self):
        assert RubyParser().parse("class Foo\n  def bar(\nend\n") is None

    def test_empty_source(self):
        tree = RubyParser().parse("")
        assert tree is not None
        assert tree.children == ()

    def test_deeply_nested_expression(self):
        source = "x = " + " + ".join(["1"] * 3000) + "\nOrder\n"
        tree = RubyParser().parse(source)

        assert tree is not None
        constants = [n.text for n in tree.iter_descendants() if n.kind == "constant"]
        assert constants == ["Order"]

    def test_children_keep_source_order(self):
        tree = RubyParser().parse("Foo.new(Bar, Baz)\n")
        call = tree.children[0]

        assert call.child_by_field("receiver").text == "Foo"
        assert call.child_by_field("method").text == "new"
        arguments = call.child_by_field("arguments")
        assert [c.text for c in arguments.children] == ["Bar", "Baz"]


class TestSyntaxNode:
    def test_iter_descendants_is_preorder(self):
        leaf_a = SyntaxNode(kind="a")
        leaf_b = SyntaxNode(kind="b")
        inner = SyntaxNode(kind="inner", children=(leaf_b,))
        root = SyntaxNode(kind="root", children=(leaf_a, inner))

        assert [n.kind for n in root.iter_descendants()] == ["root", "a", "inner", "b"]

    def test_missing_field(self):
        node = SyntaxNode(kind="x", span=Span(1, 0, 1, 1))
        assert node.child_by_field("name") is None
        assert node.field_name_of(SyntaxNode(kind="y")) is None


class TestRegistry:
    """Tests for parser selection."""

    @pytest.mark.parametrize(
        "path",
        ["app/models/order.rb", "lib/tasks/db.rake", "config.ru", "shop.gemspec", "Gemfile", "Rakefile"],
    )
    def test_ruby_inputs(self, path):
        assert detect_language(path) == "ruby"
        assert is_supported_path(path)

    def test_get_parser_for_path(self):
        language, parser = get_parser_for_path("app/models/order.rb")
        assert language == "ruby"
        assert isinstance(parser, RubyParser)

    @pytest.mark.parametrize("path", ["logo.png", "index.html.erb", "README"])
    def test_unsupported_inputs(self, path):
        assert not is_supported_path(path)
        with pytest.raises(UnsupportedLanguageError) as exc_info:
            detect_language(path)
        assert exc_info.value.supported == ["ruby"]

    def test_supported_languages(self):
        assert supported_languages() == ["ruby"]

    def test_clear_registry(self):
        try:
            clear_registry()
            assert supported_languages() == []
            assert not is_supported_path("app/models/order.rb")
            with pytest.raises(UnsupportedLanguageError):
                detect_language("app/models/order.rb")
        finally:
            register_parser("ruby", RUBY_EXTENSIONS, RubyParser, filenames=RUBY_FILENAMES)

        assert detect_language("Gemfile") == "ruby"
