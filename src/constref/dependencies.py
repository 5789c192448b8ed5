"""File-to-file dependency edges for a whole project."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from .models import DependencyEdge
from .syntax import is_supported_path

if TYPE_CHECKING:
    from .extractor import Extractor

logger = logging.getLogger(__name__)


def scan_dependencies(
    extractor: Extractor,
    files: Iterable[str] | None = None,
) -> list[DependencyEdge]:
    """Aggregate references of project files into dependency edges.

    Args:
        extractor: Extractor for the project.
        files: Project-relative files to scan. Defaults to every file that
            defines a constant in the namespace index.

    Returns:
        Edges between distinct files, sorted by (source, target).
    """
    if files is None:
        files = extractor.index.defining_files()

    edges: dict[tuple[str, str], DependencyEdge] = {}
    scanned = 0
    for relative_path in files:
        if not is_supported_path(relative_path):
            logger.debug("Skipping unsupported file %s", relative_path)
            continue
        scanned += 1

        for ref in extractor.references_from_file(relative_path):
            target = ref.constant.location
            if target is None or target == ref.file_path:
                continue
            key = (ref.file_path, target)
            edge = edges.get(key)
            if edge is None:
                edge = edges[key] = DependencyEdge(source_file=ref.file_path, target_file=target)
            edge.count += 1
            if ref.constant.name not in edge.constants:
                edge.constants.append(ref.constant.name)

    for edge in edges.values():
        edge.constants.sort()

    logger.info("Scanned %d files, found %d dependency edges", scanned, len(edges))
    return [edges[key] for key in sorted(edges)]
