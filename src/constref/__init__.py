"""constref: resolve Ruby constant references to the project files that define them."""

__version__ = "0.1.0"

from .errors import (
    AutoloadRootNotFoundError,
    ConfigError,
    ConstrefError,
    InvalidProjectPathError,
    NamespaceCollisionError,
    UnsupportedLanguageError,
)
from .extractor import Extractor
from .models import ConstantContext, NamespaceEntry, Reference, UnresolvedReference
from .namespace_index import AutoloadRoot, NamespaceIndex

__all__ = [
    "__version__",
    "Extractor",
    "NamespaceIndex",
    "AutoloadRoot",
    "ConstantContext",
    "NamespaceEntry",
    "Reference",
    "UnresolvedReference",
    "ConstrefError",
    "UnsupportedLanguageError",
    "NamespaceCollisionError",
    "ConfigError",
    "AutoloadRootNotFoundError",
    "InvalidProjectPathError",
]
