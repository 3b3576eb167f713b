"""StrategySuite exceptions."""

from pathlib import Path  # noqa: TC003 - used at runtime in annotations


class StrategySuiteError(Exception):
    """Base exception for StrategySuite errors."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(StrategySuiteError):
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
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


# =============================================================================
# Project Exceptions
# =============================================================================


class ProjectError(StrategySuiteError):
    """Base exception for project operations."""


class ProjectNotFoundError(ProjectError, KeyError):
    """Raised when a project cannot be found.

    Attributes:
        project_id: The ID of the project that was not found.
    """

    def __init__(self, message: str, *, project_id: str | None = None) -> None:
        """Initialize with error message and project context.

        Args:
            message: Human-readable error message.
            project_id: The ID of the project that was not found.
        """
        super().__init__(message)
        self.project_id: str | None = project_id

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class ProjectValidationError(ProjectError, ValueError):
    """Raised when a project operation is rejected before mutation.

    Attributes:
        field: The field that failed validation.
        expected: Description of the expected value.
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        expected: str | None = None,
    ) -> None:
        """Initialize with error message and validation context.

        Args:
            message: Human-readable error message.
            field: The field that failed validation.
            expected: Description of the expected value.
        """
        super().__init__(message)
        self.field: str | None = field
        self.expected: str | None = expected


class IdeaValidationError(ProjectValidationError):
    """Raised when idea text fails validation."""


class CategoryNotFoundError(ProjectError, KeyError):
    """Raised when a framework key or category id is not in the catalog.

    Attributes:
        framework_key: The framework key that was looked up.
        item_id: The category id that was looked up, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        framework_key: str | None = None,
        item_id: str | None = None,
    ) -> None:
        """Initialize with error message and lookup context."""
        super().__init__(message)
        self.framework_key: str | None = framework_key
        self.item_id: str | None = item_id

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class ProjectIntegrityError(ProjectError):
    """Raised when a project's ownership invariants do not hold.

    Attributes:
        project_id: The ID of the inconsistent project.
        violations: Description of every violated invariant.
    """

    def __init__(
        self, message: str, *, project_id: str, violations: tuple[str, ...]
    ) -> None:
        """Initialize with error message and the list of violations."""
        super().__init__(message)
        self.project_id: str = project_id
        self.violations: tuple[str, ...] = violations


# =============================================================================
# Persistence Exceptions
# =============================================================================


class PersistenceError(StrategySuiteError):
    """Raised when a remote save or delete fails.

    Attributes:
        operation: The failed operation ("save", "delete" or "load").
        user_id: The user whose collection was targeted.
        project_id: The project involved, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        user_id: str | None = None,
        project_id: str | None = None,
    ) -> None:
        """Initialize with error message and operation context."""
        super().__init__(message)
        self.operation: str = operation
        self.user_id: str | None = user_id
        self.project_id: str | None = project_id


class StorageError(StrategySuiteError):
    """Base exception for document store failures."""


class StorageNotConfiguredError(StorageError):
    """Raised when no document store is available."""


class LegacyCacheError(StorageError):
    """Raised when the legacy local project cache cannot be decoded.

    Attributes:
        path: Location of the cache file.
    """

    def __init__(self, message: str, *, path: Path) -> None:
        """Initialize with error message and the cache location."""
        super().__init__(message)
        self.path: Path = path


# =============================================================================
# Suggestion Exceptions
# =============================================================================


class SuggestionError(StrategySuiteError):
    """Raised when idea suggestions cannot be produced.

    Attributes:
        status_code: HTTP status reported by the backend, if any.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialize with error message and optional HTTP status."""
        super().__init__(message)
        self.status_code: int | None = status_code


class SuggestionNotConfiguredError(SuggestionError):
    """Raised when the generative backend has no credentials."""
