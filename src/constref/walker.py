"""Scope-tracking traversal of syntax trees."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterator

from .models import ScopeFrame

if TYPE_CHECKING:
    from .inspectors import NamespaceOpening
    from .syntax.node import SyntaxNode


@dataclass(frozen=True)
class NodeVisit:
    """A node with its syntactic parent and the namespace scope active at it.

    ``scope`` is ordered innermost first; its last frame is the top level.
    """

    node: SyntaxNode
    parent: SyntaxNode | None
    scope: tuple[ScopeFrame, ...]


def top_level_frame(root: SyntaxNode | None = None) -> ScopeFrame:
    return ScopeFrame(node=root, segments=(), namespace=())


def walk(
    root: SyntaxNode,
    opening_for: Callable[[SyntaxNode], NamespaceOpening | None],
) -> Iterator[NodeVisit]:
    """Visit every node of a tree in pre-order.

    ``opening_for`` decides which nodes open a namespace. Only those push a
    frame; conditionals, method bodies and blocks are traversed without
    touching the scope. Children a declaration evaluates outside its own
    namespace (its name, its superclass) keep the enclosing scope.
    """
    stack: list[tuple[SyntaxNode, SyntaxNode | None, tuple[ScopeFrame, ...]]] = [
        (root, None, (top_level_frame(root),))
    ]
    while stack:
        node, parent, scope = stack.pop()
        yield NodeVisit(node=node, parent=parent, scope=scope)

        opening = opening_for(node)
        inner = scope
        if opening is not None:
            if opening.rooted:
                namespace = opening.segments
            else:
                namespace = scope[0].namespace + opening.segments
            frame = ScopeFrame(node=node, segments=opening.segments, namespace=namespace)
            inner = (frame,) + scope

        for child in reversed(node.children):
            if opening is not None and opening.encloses(node, child):
                stack.append((child, node, inner))
            else:
                stack.append((child, node, scope))
