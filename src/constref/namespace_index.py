"""Namespace-path index built from autoload root directories."""

from __future__ import annotations

import fnmatch
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from .errors import AutoloadRootNotFoundError, InvalidProjectPathError, NamespaceCollisionError
from .inflector import Inflector
from .models import NamespaceEntry, join_path, split_name

logger = logging.getLogger(__name__)

RUBY_SUFFIX = ".rb"

# Directories under app/ that Rails never autoloads
NON_AUTOLOADED_APP_DIRS = frozenset({"assets", "javascript", "views"})

_CONSTANT_NAME = re.compile(r"^[A-Z][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class AutoloadRoot:
    """A directory whose files define constants under ``namespace``.

    ``path`` is relative to the project root. An empty namespace means the
    root is a plain load path at the top level.
    """

    path: str
    namespace: tuple[str, ...] = ()

    @classmethod
    def create(cls, path: str, namespace: str | None = None) -> "AutoloadRoot":
        segments = split_name(namespace)[1] if namespace else ()
        return cls(path=Path(path).as_posix().rstrip("/"), namespace=segments)

    def to_dict(self) -> dict[str, str | None]:
        return {"path": self.path, "namespace": join_path(self.namespace) or None}


def default_autoload_roots(project_root: Path) -> list[AutoloadRoot]:
    """Autoload roots of a conventional Rails application.

    Every directory directly under ``app/`` except assets, javascript and
    views, each ``app/*/concerns`` directory, and ``lib`` if present.
    """
    roots: list[AutoloadRoot] = []
    app_dir = project_root / "app"
    if app_dir.is_dir():
        for child in sorted(app_dir.iterdir()):
            if not child.is_dir() or child.name.startswith("."):
                continue
            if child.name in NON_AUTOLOADED_APP_DIRS:
                continue
            roots.append(AutoloadRoot.create(f"app/{child.name}"))
            if (child / "concerns").is_dir():
                roots.append(AutoloadRoot.create(f"app/{child.name}/concerns"))
    if (project_root / "lib").is_dir():
        roots.append(AutoloadRoot.create("lib"))
    return roots


class NamespaceIndex:
    """Read-only mapping from namespace paths to their defining files.

    Built once from a directory scan and safe to share between threads.
    """

    def __init__(
        self,
        project_root: Path,
        entries: dict[tuple[str, ...], NamespaceEntry],
        roots: Sequence[AutoloadRoot] = (),
    ) -> None:
        self.project_root = project_root
        self._entries = dict(entries)
        self._roots = tuple(roots)
        self._file_namespaces = {
            e.defining_file: path
            for path, e in self._entries.items()
            if e.defining_file is not None
        }

    @classmethod
    def build(
        cls,
        project_root: str | Path,
        roots: Iterable[AutoloadRoot],
        inflector: Inflector | None = None,
        collapse: Iterable[str] = (),
        ignore: Iterable[str] = (),
    ) -> "NamespaceIndex":
        """Scan autoload roots and build the index.

        Args:
            project_root: Project root; all paths are reported relative to it.
            roots: Autoload roots, scanned in order.
            inflector: Basename to constant name conversion.
            collapse: Directory patterns that add no namespace segment.
            ignore: File or directory patterns skipped entirely.

        Raises:
            InvalidProjectPathError: If the project root is not a directory.
            AutoloadRootNotFoundError: If a root is not a directory.
            NamespaceCollisionError: If two files map to the same namespace.
        """
        project_root = Path(project_root).resolve()
        if not project_root.is_dir():
            raise InvalidProjectPathError(str(project_root))

        roots = list(roots)
        scanner = _DirectoryScanner(
            project_root=project_root,
            inflector=inflector or Inflector(),
            root_paths={r.path for r in roots},
            collapse=list(collapse),
            ignore=list(ignore),
        )
        for root in roots:
            scanner.scan_root(root)

        index = cls(project_root, scanner.entries(), roots)
        logger.info(
            "Indexed %d namespaces (%d files) from %d autoload roots",
            len(index),
            len(index._file_namespaces),
            len(roots),
        )
        return index

    @property
    def roots(self) -> tuple[AutoloadRoot, ...]:
        return self._roots

    def namespace_roots(self) -> list[AutoloadRoot]:
        """Roots that define constants under a base namespace."""
        return [r for r in self._roots if r.namespace]

    def load_paths(self) -> list[AutoloadRoot]:
        """Roots that define constants at the top level."""
        return [r for r in self._roots if not r.namespace]

    def is_known(self, path: Sequence[str]) -> bool:
        """Whether a namespace path is known, as a file or a namespace."""
        return tuple(path) in self._entries

    def entry(self, path: Sequence[str]) -> NamespaceEntry | None:
        return self._entries.get(tuple(path))

    def defining_file(self, path: Sequence[str]) -> str | None:
        """Relative path of the file expected to define ``path``, if any."""
        entry = self._entries.get(tuple(path))
        return entry.defining_file if entry else None

    def namespace_for_file(self, relative_path: str) -> tuple[str, ...] | None:
        """Namespace path a project file is expected to define."""
        return self._file_namespaces.get(Path(relative_path).as_posix())

    def entries(self) -> list[NamespaceEntry]:
        """All entries, sorted by path."""
        return [self._entries[p] for p in sorted(self._entries)]

    def defining_files(self) -> list[str]:
        """All defining files, sorted."""
        return sorted(self._file_namespaces)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, tuple) and path in self._entries


class _DirectoryScanner:
    """Accumulates files and directories per namespace path."""

    def __init__(
        self,
        project_root: Path,
        inflector: Inflector,
        root_paths: set[str],
        collapse: list[str],
        ignore: list[str],
    ) -> None:
        self.project_root = project_root
        self.inflector = inflector
        self.root_paths = root_paths
        self.collapse = collapse
        self.ignore = ignore
        self._files: dict[tuple[str, ...], str] = {}
        self._directories: dict[tuple[str, ...], list[str]] = {}

    def scan_root(self, root: AutoloadRoot) -> None:
        directory = self.project_root / root.path
        if not directory.is_dir():
            raise AutoloadRootNotFoundError(root.path)

        # Base namespaces must exist along with every enclosing namespace
        for i in range(1, len(root.namespace)):
            self._directories.setdefault(root.namespace[:i], [])
        if root.namespace:
            self._add_directory(root.namespace, root.path)

        self._scan_directory(directory, root.namespace)

    def entries(self) -> dict[tuple[str, ...], NamespaceEntry]:
        paths = set(self._files) | set(self._directories)
        return {
            path: NamespaceEntry(
                path=path,
                defining_file=self._files.get(path),
                directories=tuple(self._directories.get(path, ())),
            )
            for path in paths
        }

    def _scan_directory(self, directory: Path, namespace: tuple[str, ...]) -> None:
        for child in sorted(directory.iterdir(), key=lambda p: p.name):
            if child.name.startswith("."):
                continue
            relative = child.relative_to(self.project_root).as_posix()
            if self._matches(relative, self.ignore):
                logger.debug("Ignoring %s", relative)
                continue

            if child.is_dir():
                if relative in self.root_paths:
                    continue  # scanned as its own root
                if self._matches(relative, self.collapse):
                    self._scan_directory(child, namespace)
                    continue
                segment = self._segment(child.name, relative)
                if segment is None:
                    continue
                path = namespace + (segment,)
                self._add_directory(path, relative)
                self._scan_directory(child, path)

            elif child.suffix == RUBY_SUFFIX:
                segment = self._segment(child.stem, relative)
                if segment is None:
                    continue
                self._add_file(namespace + (segment,), relative)

    def _segment(self, basename: str, relative: str) -> str | None:
        segment = self.inflector.camelize(basename)
        if not _CONSTANT_NAME.match(segment):
            logger.warning("Skipping %s: %r is not a constant name", relative, segment)
            return None
        return segment

    def _add_file(self, path: tuple[str, ...], relative: str) -> None:
        existing = self._files.get(path)
        if existing is not None:
            raise NamespaceCollisionError(join_path(path), existing, relative)
        self._files[path] = relative

    def _add_directory(self, path: tuple[str, ...], relative: str) -> None:
        self._directories.setdefault(path, []).append(relative)

    @staticmethod
    def _matches(relative: str, patterns: list[str]) -> bool:
        return any(
            relative == p.rstrip("/") or fnmatch.fnmatch(relative, p) for p in patterns
        )
