"""Parser-independent syntax tree nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator


@dataclass(frozen=True)
class Span:
    """Source span. Lines are 1-based, columns are 0-based."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int
    start_byte: int = 0
    end_byte: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_line": self.start_line,
            "start_column": self.start_column,
            "end_line": self.end_line,
            "end_column": self.end_column,
        }


@dataclass(frozen=True, eq=False)
class SyntaxNode:
    """A node of a parsed source file.

    Attributes:
        kind: Grammar node type (e.g. "class", "constant", "scope_resolution").
        children: Named children in source order.
        span: Source span of the node.
        fields: Field name -> index into ``children``.
        text: Source text, kept for leaf nodes only.
    """

    kind: str
    children: tuple["SyntaxNode", ...] = ()
    span: Span = Span(1, 0, 1, 0)
    fields: dict[str, int] = field(default_factory=dict)
    text: str | None = None

    def child_by_field(self, name: str) -> "SyntaxNode | None":
        """Return the child stored under a grammar field name."""
        index = self.fields.get(name)
        return self.children[index] if index is not None else None

    def field_name_of(self, child: "SyntaxNode") -> str | None:
        """Return the field name under which ``child`` is stored, if any."""
        for name, index in self.fields.items():
            if self.children[index] is child:
                return name
        return None

    def iter_descendants(self) -> Iterator["SyntaxNode"]:
        """Yield this node and all descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))
