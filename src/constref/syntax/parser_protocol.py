"""Protocol definition for source parsers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .node import SyntaxNode


class SourceParser(Protocol):
    """Protocol for language-specific parsers.

    Implementations turn raw source text into a ``SyntaxNode`` tree so the
    rest of constref never sees the concrete parser's node types.
    """

    def parse(self, source: str, path: str | None = None) -> SyntaxNode | None:
        """Parse source code.

        Args:
            source: The complete source code content.
            path: File path, used for diagnostics only.

        Returns:
            The root node, or None if the source has syntax errors.
        """
        ...
