"""Custom exceptions for constref."""


class ConstrefError(Exception):
    """Base exception for all constref errors."""

    pass


class UnsupportedLanguageError(ConstrefError):
    """Raised when no parser is registered for a file type or language."""

    def __init__(
        self,
        language: str,
        supported: list[str] | None = None,
        hint: str | None = None,
    ):
        self.language = language
        self.supported = supported or []
        self.hint = hint
        msg = f"Unsupported language: {language}"
        if self.supported:
            msg = f"{msg}. Supported: {', '.join(self.supported)}"
        if hint:
            msg = f"{msg}. {hint}"
        super().__init__(msg)


class NamespaceCollisionError(ConstrefError):
    """Raised when two files map to the same namespace path."""

    def __init__(self, namespace: str, existing: str, duplicate: str):
        self.namespace = namespace
        self.existing = existing
        self.duplicate = duplicate
        super().__init__(
            f"Namespace {namespace} is defined by both '{existing}' and '{duplicate}'"
        )


class ConfigError(ConstrefError):
    """Raised when the project configuration cannot be loaded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid config at {path}: {reason}")


class AutoloadRootNotFoundError(ConstrefError):
    """Raised when a configured autoload root is not a directory."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Autoload root not found: {path}")


class InvalidProjectPathError(ConstrefError):
    """Raised when the project root does not exist or is not a directory."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Invalid project path: {path}")
