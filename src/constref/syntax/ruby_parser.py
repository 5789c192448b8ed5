"""Ruby parsing using Tree-sitter."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import tree_sitter
import tree_sitter_ruby as tsruby

from .node import Span, SyntaxNode

logger = logging.getLogger(__name__)


@dataclass
class _OpenNode:
    """A named node whose children are still being converted."""

    ts_node: tree_sitter.Node
    field_name: str | None
    children: list[SyntaxNode] = field(default_factory=list)
    fields: dict[str, int] = field(default_factory=dict)


class RubyParser:
    """Parses Ruby source into ``SyntaxNode`` trees."""

    def __init__(self) -> None:
        self._language = tree_sitter.Language(tsruby.language())
        self._parser = tree_sitter.Parser(self._language)

    def parse(self, source: str, path: str | None = None) -> SyntaxNode | None:
        """Parse Ruby source. Returns None if the tree contains errors."""
        tree = self._parser.parse(source.encode())
        if tree.root_node.has_error:
            logger.debug("Syntax error in %s, skipping", path or "<snippet>")
            return None
        return self._convert(tree.walk())

    def _convert(self, cursor: tree_sitter.TreeCursor) -> SyntaxNode:
        """Convert the tree under the cursor, keeping named nodes only.

        Walks the cursor without recursion, so deeply nested expressions
        cannot exhaust the interpreter stack. ``open_nodes[i]`` is the
        unfinished node at depth ``i``.
        """
        open_nodes: list[_OpenNode] = []
        depth = 0
        while True:
            if cursor.node.is_named:
                while len(open_nodes) > depth:
                    self._close(open_nodes)
                open_nodes.append(_OpenNode(cursor.node, cursor.field_name))
                if cursor.goto_first_child():
                    depth += 1
                    continue

            while not cursor.goto_next_sibling():
                if not cursor.goto_parent():
                    while len(open_nodes) > 1:
                        self._close(open_nodes)
                    return self._build(open_nodes[0])
                depth -= 1

    def _close(self, open_nodes: list[_OpenNode]) -> None:
        """Finish the innermost open node and attach it to its parent."""
        done = open_nodes.pop()
        parent = open_nodes[-1]
        if done.field_name is not None and done.field_name not in parent.fields:
            parent.fields[done.field_name] = len(parent.children)
        parent.children.append(self._build(done))

    def _build(self, open_node: _OpenNode) -> SyntaxNode:
        ts_node = open_node.ts_node
        text = None
        if not open_node.children and ts_node.text is not None:
            text = ts_node.text.decode(errors="replace")

        return SyntaxNode(
            kind=ts_node.type,
            children=tuple(open_node.children),
            span=self._span(ts_node),
            fields=open_node.fields,
            text=text,
        )

    def _span(self, node: tree_sitter.Node) -> Span:
        start_row, start_col = node.start_point
        end_row, end_col = node.end_point
        return Span(
            start_line=start_row + 1,
            start_column=start_col,
            end_line=end_row + 1,
            end_column=end_col,
            start_byte=node.start_byte,
            end_byte=node.end_byte,
        )
