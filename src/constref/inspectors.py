"""Constant-reference inspectors for Ruby syntax trees.

An inspector looks at one node, together with its parent and the
namespace scope active at that node, and reports the constant the node
refers to, if any. Inspectors never resolve anything; they only record
what was written and where.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from .models import UnresolvedReference, split_name

if TYPE_CHECKING:
    from .models import ScopeFrame
    from .syntax.node import SyntaxNode

NAMESPACE_KINDS = frozenset({"class", "module"})
# ``X ||= v`` reads X as well, so it is not a definition site
ASSIGNMENT_KINDS = frozenset({"assignment"})
# Targets of multiple assignment (``A, *B = ...``)
ASSIGNMENT_TARGET_KINDS = frozenset(
    {"left_assignment_list", "rest_assignment", "destructured_left_assignment"}
)
ASSOCIATION_MACROS = frozenset(
    {"belongs_to", "has_one", "has_many", "has_and_belongs_to_many"}
)

# Fields of a class/module declaration evaluated in the enclosing scope
_OUTER_FIELDS = frozenset({"name", "superclass"})

_CONSTANT_SEGMENT = re.compile(r"^[A-Z]\w*$")


@dataclass(frozen=True)
class NamespaceOpening:
    """Namespace introduced by a class or module declaration."""

    segments: tuple[str, ...]
    rooted: bool = False

    def encloses(self, declaration: SyntaxNode, child: SyntaxNode) -> bool:
        """Whether ``child`` of ``declaration`` is evaluated inside the namespace."""
        return declaration.field_name_of(child) not in _OUTER_FIELDS


class ConstantInspector(Protocol):
    """Protocol for constant-reference inspectors."""

    def inspect(
        self,
        node: SyntaxNode,
        parent: SyntaxNode | None,
        scope: tuple[ScopeFrame, ...],
        file_path: str,
    ) -> UnresolvedReference | None:
        """Return the reference made by ``node``, or None."""
        ...


def is_constant(node: SyntaxNode) -> bool:
    """Check whether a node is a constant read (``Foo``, ``A::B``, ``::C``)."""
    if node.kind == "constant":
        return True
    if node.kind == "scope_resolution":
        name = node.child_by_field("name")
        return name is not None and name.kind == "constant"
    return False


def constant_path(node: SyntaxNode) -> tuple[bool, tuple[str, ...]] | None:
    """Return (rooted, segments) for a constant node.

    Returns None for chains with a dynamic prefix such as ``foo::Bar``.
    """
    if node.kind == "constant":
        return False, (node.text or "",)
    if not is_constant(node):
        return None

    name = node.child_by_field("name")
    scope = node.child_by_field("scope")
    if scope is None:
        return True, (name.text or "",)

    prefix = constant_path(scope)
    if prefix is None:
        return None
    rooted, segments = prefix
    return rooted, segments + (name.text or "",)


def namespace_opening(node: SyntaxNode) -> NamespaceOpening | None:
    """Return the namespace a node opens, or None if it opens none.

    Only ``class`` and ``module`` declarations with a static name open a
    namespace. ``class << self`` does not.
    """
    if node.kind not in NAMESPACE_KINDS:
        return None
    name = node.child_by_field("name")
    if name is None:
        return None
    path = constant_path(name)
    if path is None:
        return None
    rooted, segments = path
    return NamespaceOpening(segments=segments, rooted=rooted)


def _is_definition_site(node: SyntaxNode, parent: SyntaxNode) -> bool:
    field_name = parent.field_name_of(node)
    if parent.kind in NAMESPACE_KINDS:
        return field_name == "name"
    if parent.kind in ASSIGNMENT_KINDS:
        return field_name == "left"
    if parent.kind in ASSIGNMENT_TARGET_KINDS:
        return True
    return False


class ConstNodeInspector:
    """Reports constant reads.

    Only the outermost node of a chain is reported, so ``A::B::C`` is a
    single reference. The name being declared by ``class``/``module`` or a
    constant assignment is a definition; only its qualifying prefix
    (``Billing`` in ``class Billing::Invoice``) is reported.
    """

    def inspect(
        self,
        node: SyntaxNode,
        parent: SyntaxNode | None,
        scope: tuple[ScopeFrame, ...],
        file_path: str,
    ) -> UnresolvedReference | None:
        if not is_constant(node):
            return None

        if parent is not None:
            # Part of a longer chain; the chain itself is reported (or skipped
            # when its prefix is dynamic, as in ``foo::Bar``)
            if parent.kind == "scope_resolution" and (
                is_constant(parent) or parent.child_by_field("name") is node
            ):
                return None
            # ``Integer(x)`` style calls name a method, not a constant
            if parent.kind == "call" and parent.field_name_of(node) == "method":
                return None
            if _is_definition_site(node, parent):
                prefix = node.child_by_field("scope")
                if prefix is None:
                    return None
                node = prefix

        path = constant_path(node)
        if path is None:
            return None
        rooted, segments = path
        return UnresolvedReference(
            segments=segments,
            rooted=rooted,
            scope=scope,
            file_path=file_path,
            span=node.span,
        )


class AssociationInspector:
    """Reports ``class_name:`` options of Rails association macros.

    ``has_many :entries, class_name: "Ledger::Entry"`` refers to
    ``Ledger::Entry``. Associations without an explicit string
    ``class_name`` are ignored.
    """

    def inspect(
        self,
        node: SyntaxNode,
        parent: SyntaxNode | None,
        scope: tuple[ScopeFrame, ...],
        file_path: str,
    ) -> UnresolvedReference | None:
        if node.kind != "call" or node.child_by_field("receiver") is not None:
            return None
        method = node.child_by_field("method")
        if method is None or method.text not in ASSOCIATION_MACROS:
            return None
        arguments = node.child_by_field("arguments")
        if arguments is None:
            return None

        for pair in self._option_pairs(arguments):
            key = pair.child_by_field("key")
            value = pair.child_by_field("value")
            if key is None or value is None or self._symbol_name(key) != "class_name":
                continue

            literal = self._string_literal(value)
            if literal is None:
                return None
            rooted, segments = split_name(literal)
            if not segments or not all(_CONSTANT_SEGMENT.match(s) for s in segments):
                return None
            return UnresolvedReference(
                segments=segments,
                rooted=rooted,
                scope=scope,
                file_path=file_path,
                span=value.span,
            )
        return None

    def _option_pairs(self, arguments: SyntaxNode) -> list[SyntaxNode]:
        pairs: list[SyntaxNode] = []
        for arg in arguments.children:
            if arg.kind == "pair":
                pairs.append(arg)
            elif arg.kind == "hash":
                pairs.extend(c for c in arg.children if c.kind == "pair")
        return pairs

    def _symbol_name(self, key: SyntaxNode) -> str | None:
        if key.kind == "hash_key_symbol":
            return key.text
        if key.kind == "simple_symbol" and key.text:
            return key.text.lstrip(":")
        return None

    def _string_literal(self, value: SyntaxNode) -> str | None:
        """Return the content of a plain string literal (no interpolation)."""
        if value.kind != "string" or len(value.children) != 1:
            return None
        content = value.children[0]
        if content.kind != "string_content":
            return None
        return content.text


INSPECTORS: dict[str, type] = {
    "constant": ConstNodeInspector,
    "association": AssociationInspector,
}


def build_inspectors(names: list[str]) -> list[ConstantInspector]:
    """Instantiate inspectors by registered name, preserving order.

    Raises:
        KeyError: If a name is not registered.
    """
    return [INSPECTORS[name]() for name in names]
