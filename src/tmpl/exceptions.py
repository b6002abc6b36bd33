"""tmpl exceptions."""

from pathlib import Path
from typing import Any, Self


class TmplError(Exception):
    """Base exception for tmpl errors."""


# =============================================================================
# Template Exceptions
# =============================================================================


class TemplateError(TmplError):
    """Base exception for template parse and execution failures.

    Attributes:
        path: Source path of the template, when rendering a directory tree.
        lineno: Template line the failure was reported on, if known.
        cause: The underlying exception raised by the engine or a helper.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        lineno: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        """Initialize with error message and template context.

        Args:
            message: Human-readable error message.
            path: Source path of the template, if any.
            lineno: Line number reported by the engine.
            cause: The underlying exception.
        """
        super().__init__(message)
        self.message: str = message
        self.path: str | None = path
        self.lineno: int | None = lineno
        self.cause: BaseException | None = cause

    def with_path(self, path: str) -> Self:
        """Return a copy of this error attributed to a source path."""
        return type(self)(
            self.message,
            path=path,
            lineno=self.lineno,
            cause=self.cause,
        )

    def __str__(self) -> str:
        location = self.path or "<template>"
        if self.lineno is not None:
            location = f"{location}:{self.lineno}"
        return f"{location}: {self.message}"


class TemplateSyntaxError(TemplateError):
    """Raised when a template body cannot be parsed."""


class TemplateExecutionError(TemplateError):
    """Raised when a parsed template fails while rendering."""


# =============================================================================
# Function Library Exceptions
# =============================================================================


class FunctionError(TmplError):
    """Raised by a template function to abort rendering."""


class ConversionError(FunctionError, ValueError):
    """Raised by a "must" function when its lenient sibling would degrade."""

    def __init__(self, message: str, *, value: Any = None) -> None:  # noqa: ANN401
        """Initialize with error message and the offending value."""
        super().__init__(message)
        self.value: Any = value


class PathTraversalError(FunctionError, KeyError):
    """Raised when a dotted key path segment cannot be resolved.

    Attributes:
        key: The path segment that could not be resolved.
    """

    def __init__(self, message: str, *, key: str) -> None:
        """Initialize with error message and the unresolved key."""
        super().__init__(message)
        self.key: str = key

    def __str__(self) -> str:
        return str(self.args[0])


# =============================================================================
# Archive Exceptions
# =============================================================================


class ArchiveError(TmplError):
    """Base exception for archive packing and extraction."""


class UnsupportedArchiveEntryError(ArchiveError):
    """Raised when extraction meets an entry type it cannot materialize.

    Attributes:
        name: The entry name as recorded in the archive.
        entry_type: The raw tar type flag.
    """

    def __init__(self, message: str, *, name: str, entry_type: bytes) -> None:
        """Initialize with error message and entry context."""
        super().__init__(message)
        self.name: str = name
        self.entry_type: bytes = entry_type


class UnsafeArchivePathError(ArchiveError):
    """Raised when an entry would be written outside the destination."""

    def __init__(self, message: str, *, name: str) -> None:
        """Initialize with error message and entry name."""
        super().__init__(message)
        self.name: str = name


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(TmplError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration values fail validation."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        """Initialize with error message and the offending source."""
        super().__init__(message)
        self.source: str | None = source
