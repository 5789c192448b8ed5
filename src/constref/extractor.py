"""Reference extraction for Ruby code autoloaded by naming convention."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from .config import ProjectConfig, load_config
from .errors import InvalidProjectPathError
from .inspectors import ConstNodeInspector, build_inspectors, namespace_opening
from .models import SNIPPET_PATH, Reference, UnresolvedReference
from .namespace_index import NamespaceIndex
from .resolver import ConstantResolver
from .syntax import get_parser, get_parser_for_path
from .walker import walk

if TYPE_CHECKING:
    from .inspectors import ConstantInspector
    from .syntax.node import SyntaxNode

logger = logging.getLogger(__name__)


class Extractor:
    """Extracts references to project constants from Ruby code.

    Example:
        extractor = Extractor.from_project("/srv/shop")
        extractor.references_from_string("Order.find(1)")
        extractor.references_from_file("app/models/user.rb")

    Extraction runs in two stages: ``collect_references`` walks the tree
    and records every constant mention, ``resolve_references`` looks each
    one up in the namespace index and drops those that are not defined by
    a project file.
    """

    def __init__(
        self,
        root_path: str | Path,
        index: NamespaceIndex,
        inspectors: Iterable[ConstantInspector] | None = None,
        resolver: ConstantResolver | None = None,
    ) -> None:
        self.root_path = Path(root_path).resolve()
        self.index = index
        self.inspectors: list[ConstantInspector] = (
            list(inspectors) if inspectors is not None else [ConstNodeInspector()]
        )
        self.resolver = resolver or ConstantResolver(index)

    @classmethod
    def from_project(
        cls, root_path: str | Path, config: ProjectConfig | None = None
    ) -> "Extractor":
        """Build an extractor from a project's configuration.

        Raises:
            InvalidProjectPathError: If the root is not a directory.
            ConfigError: If the configuration is invalid.
            NamespaceCollisionError: If the autoload layout is ambiguous.
        """
        root = Path(root_path).resolve()
        if not root.is_dir():
            raise InvalidProjectPathError(str(root))

        config = config or load_config(root)
        index = NamespaceIndex.build(
            root,
            config.roots_for(root),
            inflector=config.inflector(),
            collapse=config.collapse,
            ignore=config.ignore,
        )
        return cls(root, index, build_inspectors(config.inspectors))

    def references_from_string(self, snippet: str, language: str = "ruby") -> list[Reference]:
        """Extract references from a code string, reported as ``<snippet>``."""
        tree = get_parser(language).parse(snippet, SNIPPET_PATH)
        if tree is None:
            return []
        return self.extract_references(tree, SNIPPET_PATH)

    def references_from_file(self, file_path: str | Path) -> list[Reference]:
        """Extract references from a file.

        Args:
            file_path: Path relative to the project root, or absolute.

        Returns:
            References in source order; empty if the file does not exist,
            lies outside the project root, or does not parse.

        Raises:
            UnsupportedLanguageError: If no parser handles the file type.
        """
        absolute = (self.root_path / file_path).resolve()
        if not absolute.is_relative_to(self.root_path):
            logger.warning("Ignoring %s: outside the project root", file_path)
            return []
        if not absolute.exists():
            logger.debug("File not found: %s", absolute)
            return []

        _, parser = get_parser_for_path(str(absolute))
        source = absolute.read_text(encoding="utf-8", errors="replace")
        tree = parser.parse(source, str(absolute))
        if tree is None:
            return []

        relative_path = Path(os.path.relpath(absolute, self.root_path)).as_posix()
        return self.extract_references(tree, relative_path)

    def extract_references(self, root: SyntaxNode, relative_path: str) -> list[Reference]:
        unresolved = self.collect_references(root, relative_path)
        return self.resolve_references(unresolved)

    def collect_references(
        self, root: SyntaxNode, relative_path: str
    ) -> list[UnresolvedReference]:
        """Run every inspector over every node, in source order."""
        references: list[UnresolvedReference] = []
        for visit in walk(root, namespace_opening):
            for inspector in self.inspectors:
                reference = inspector.inspect(
                    visit.node, visit.parent, visit.scope, relative_path
                )
                if reference is not None:
                    references.append(reference)
        return references

    def resolve_references(
        self, unresolved: Iterable[UnresolvedReference]
    ) -> list[Reference]:
        """Resolve references, keeping only those defined by project files."""
        references: list[Reference] = []
        for ref in unresolved:
            constant = self.resolver.resolve(ref)
            if constant is None:
                continue
            references.append(
                Reference(file_path=ref.file_path, span=ref.span, constant=constant)
            )
        return references
