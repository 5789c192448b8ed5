"""Registry for source parsers."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Callable

from ..errors import UnsupportedLanguageError

if TYPE_CHECKING:
    from .parser_protocol import SourceParser

# Global registry state
_language_factories: dict[str, Callable[[], SourceParser]] = {}
_extension_to_language: dict[str, str] = {}
_filename_to_language: dict[str, str] = {}


def register_parser(
    language: str,
    extensions: list[str],
    factory: Callable[[], SourceParser],
    filenames: list[str] | None = None,
) -> None:
    """Register a parser factory for a language.

    Args:
        language: Language identifier (e.g., "ruby").
        extensions: File extensions to associate (e.g., [".rb", ".rake"]).
        factory: Callable that returns a SourceParser instance.
        filenames: Exact file names to associate (e.g., ["Gemfile"]).
    """
    _language_factories[language] = factory
    for ext in extensions:
        _extension_to_language[ext.lower()] = language
    for name in filenames or []:
        _filename_to_language[name] = language


def detect_language(path: str) -> str:
    """Detect the language of a file path.

    Exact file names take precedence over extensions.

    Raises:
        UnsupportedLanguageError: If neither the name nor the extension is recognized.
    """
    p = Path(path)
    if p.name in _filename_to_language:
        return _filename_to_language[p.name]

    ext = p.suffix.lower()
    if ext not in _extension_to_language:
        raise UnsupportedLanguageError(
            language=ext or "<no extension>",
            supported=supported_languages(),
            hint=f"File '{path}' has no registered parser.",
        )
    return _extension_to_language[ext]


def get_parser(language: str) -> SourceParser:
    """Get a fresh parser instance for a language.

    Parsers are not shared so that files can be analyzed from several
    threads at once.

    Raises:
        UnsupportedLanguageError: If the language is not supported.
    """
    if language not in _language_factories:
        raise UnsupportedLanguageError(
            language=language,
            supported=supported_languages(),
        )
    return _language_factories[language]()


def get_parser_for_path(path: str) -> tuple[str, SourceParser]:
    """Get a parser for a file path.

    Returns:
        Tuple of (language, parser).

    Raises:
        UnsupportedLanguageError: If the file type is not recognized.
    """
    language = detect_language(path)
    return language, get_parser(language)


def is_supported_path(path: str) -> bool:
    """Check whether a parser is registered for a file path."""
    p = Path(path)
    return p.name in _filename_to_language or p.suffix.lower() in _extension_to_language


def supported_languages() -> list[str]:
    """Get sorted list of supported language identifiers."""
    return sorted(_language_factories.keys())



def clear_registry() -> None:
    """Clear the registry. Mainly for testing."""
    _language_factories.clear()
    _extension_to_language.clear()
    _filename_to_language.clear()
