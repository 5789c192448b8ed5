"""Constant lookup against a namespace index."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable

from .models import ConstantContext

if TYPE_CHECKING:
    from .models import UnresolvedReference
    from .namespace_index import NamespaceIndex

# Given a namespace path, yield the namespace paths of its ancestors
# (superclass and included modules), nearest first.
AncestryLookup = Callable[[tuple[str, ...]], Iterable[tuple[str, ...]]]


class ConstantResolver:
    """Simulates Ruby constant lookup for references found in source.

    Lookup order for a relative reference ``A::B``:

    1. Each enclosing namespace, innermost first: ``<namespace>::A``.
    2. The ancestors of the innermost namespace, if an ancestry lookup is
       configured. This step is an optional extension; without whole
       program type information it is skipped.
    3. The top level: ``A``.

    Only the first segment is scope-sensitive. Remaining segments are
    appended to whatever the first one bound to. A root-anchored reference
    (``::A::B``) skips the search altogether.
    """

    def __init__(
        self,
        index: NamespaceIndex,
        ancestry: AncestryLookup | None = None,
    ) -> None:
        self.index = index
        self.ancestry = ancestry

    def qualify(self, reference: UnresolvedReference) -> tuple[str, ...] | None:
        """Return the fully-qualified path a reference binds to, or None."""
        segments = reference.segments
        if not segments:
            return None
        if reference.rooted:
            return segments

        first, rest = segments[0], segments[1:]
        base = self._lookup_base(first, reference)
        if base is None:
            return None
        return base + (first,) + rest

    def resolve(self, reference: UnresolvedReference) -> ConstantContext | None:
        """Resolve a reference to a constant defined by a project file.

        Returns None for references outside the project and for
        namespaces that have no defining file.
        """
        path = self.qualify(reference)
        if path is None:
            return None
        location = self.index.defining_file(path)
        if location is None:
            return None
        return ConstantContext(path=path, location=location)

    def _lookup_base(
        self, first: str, reference: UnresolvedReference
    ) -> tuple[str, ...] | None:
        """Find the namespace under which ``first`` is visible."""
        seen: set[tuple[str, ...]] = set()
        for frame in reference.scope:
            if frame.is_top_level or frame.namespace in seen:
                continue
            seen.add(frame.namespace)
            if self.index.is_known(frame.namespace + (first,)):
                return frame.namespace

        if self.ancestry is not None and reference.scope:
            innermost = reference.scope[0].namespace
            if innermost:
                for ancestor in self.ancestry(innermost):
                    if self.index.is_known(tuple(ancestor) + (first,)):
                        return tuple(ancestor)

        if self.index.is_known((first,)):
            return ()
        return None
