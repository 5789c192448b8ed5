"""Data models for constref."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .syntax.node import Span, SyntaxNode

SEPARATOR = "::"
SNIPPET_PATH = "<snippet>"


def join_path(path: tuple[str, ...]) -> str:
    """Render a namespace path as a constant name ("Billing::Invoice")."""
    return SEPARATOR.join(path)


def split_name(name: str) -> tuple[bool, tuple[str, ...]]:
    """Split a constant name into (rooted, segments).

    "::Foo::Bar" -> (True, ("Foo", "Bar")), "Foo" -> (False, ("Foo",)).
    """
    rooted = name.startswith(SEPARATOR)
    if rooted:
        name = name[len(SEPARATOR) :]
    segments = tuple(s for s in name.split(SEPARATOR) if s)
    return rooted, segments


@dataclass(frozen=True, eq=False)
class ScopeFrame:
    """A namespace opened by a class or module declaration.

    Attributes:
        node: The declaration node that opened the namespace (the
            program node for the top-level frame).
        segments: Segments as written in the declaration. A compact
            ``module A::B`` contributes ("A", "B") as a single frame.
        namespace: Fully-qualified path of the namespace opened.
    """

    node: "SyntaxNode | None"
    segments: tuple[str, ...]
    namespace: tuple[str, ...]

    @property
    def is_top_level(self) -> bool:
        return not self.namespace


@dataclass(frozen=True)
class UnresolvedReference:
    """A constant mention before lookup.

    ``scope`` is ordered innermost first and always ends with the
    top-level frame.
    """

    segments: tuple[str, ...]
    rooted: bool
    scope: tuple[ScopeFrame, ...]
    file_path: str
    span: "Span"

    @property
    def name(self) -> str:
        prefix = SEPARATOR if self.rooted else ""
        return prefix + join_path(self.segments)


@dataclass(frozen=True)
class NamespaceEntry:
    """A known namespace path and the file expected to define it."""

    path: tuple[str, ...]
    defining_file: str | None = None
    directories: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return join_path(self.path)

    @property
    def is_namespace(self) -> bool:
        """True when at least one directory contributes to this path."""
        return bool(self.directories)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "defining_file": self.defining_file,
            "directories": list(self.directories),
        }


@dataclass(frozen=True)
class ConstantContext:
    """Resolved identity of a constant. Compared by path only."""

    path: tuple[str, ...]
    location: str | None = field(default=None, compare=False)

    @property
    def name(self) -> str:
        return join_path(self.path)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "location": self.location}


@dataclass(frozen=True)
class Reference:
    """A resolved reference from a source location to a project constant."""

    file_path: str  # relative to the project root, or "<snippet>"
    span: "Span"
    constant: ConstantContext

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_path": self.file_path,
            "span": self.span.to_dict(),
            "constant": self.constant.to_dict(),
        }


@dataclass
class DependencyEdge:
    """Aggregated references from one project file to another."""

    source_file: str
    target_file: str
    constants: list[str] = field(default_factory=list)
    count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_file": self.source_file,
            "target_file": self.target_file,
            "constants": self.constants,
            "count": self.count,
        }
