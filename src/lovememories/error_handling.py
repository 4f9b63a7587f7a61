"""
Centralized error handling and classification for lovememories application.

Every application error carries a category, a severity, a machine readable
code and a French message that can be shown to the couple as is.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from .logging_config import get_logger, log_error, log_security_event

logger = get_logger(__name__)


class ErrorCategory(Enum):
    """Error categories for classification and handling."""

    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    UPLOAD = "upload"
    DATABASE = "database"
    STORAGE = "storage"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class LoveMemoriesError(Exception):
    """Base exception class for lovememories application."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        recoverable: bool = True,
        original_exception: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.code = code or f"{category.value}_error"
        self.user_message = user_message or self._generate_user_message()
        self.details = details or {}
        self.recoverable = recoverable
        self.original_exception = original_exception
        self.timestamp = datetime.now()

        self._log_error()

    def _generate_user_message(self) -> str:
        """Generate user-friendly error message."""
        user_messages = {
            ErrorCategory.AUTHENTICATION: "Code PIN incorrect, veuillez réessayer.",
            ErrorCategory.AUTHORIZATION: "Accès refusé. Veuillez saisir à nouveau le code PIN.",
            ErrorCategory.UPLOAD: "Impossible d'ajouter la photo.",
            ErrorCategory.DATABASE: "Une erreur de base de données est survenue.",
            ErrorCategory.STORAGE: "Une erreur de stockage est survenue.",
            ErrorCategory.VALIDATION: "Les données saisies sont invalides.",
            ErrorCategory.NOT_FOUND: "Élément introuvable.",
            ErrorCategory.UNKNOWN: "Une erreur inattendue est survenue.",
        }
        return user_messages.get(self.category, "Une erreur est survenue.")

    def _log_error(self) -> None:
        """Log the error with appropriate level."""
        error_context = {
            "category": self.category.value,
            "severity": self.severity.value,
            "code": self.code,
            "recoverable": self.recoverable,
            **self.details,
        }

        if self.original_exception:
            error_context["original_exception"] = str(self.original_exception)

        if self.category in [ErrorCategory.AUTHENTICATION, ErrorCategory.AUTHORIZATION]:
            log_security_event(self.category.value, **error_context)
        else:
            log_error(self, error_context)


class AuthenticationError(LoveMemoriesError):
    """Authentication-related errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.AUTHENTICATION,
            severity=ErrorSeverity.MEDIUM,
            code=code or "auth_failed",
            user_message=user_message,
            details=details,
            recoverable=True,
            original_exception=original_exception,
        )


class InvalidCredentialError(AuthenticationError):
    """A complete PIN entry did not match the shared PIN."""

    def __init__(self, digit_count: int):
        super().__init__(
            "Invalid PIN entered",
            code="invalid_credential",
            user_message="Code PIN incorrect, veuillez réessayer.",
            details={"digit_count": digit_count},
        )


class UnauthorizedError(LoveMemoriesError):
    """A request reached the API without the shared PIN in its Authorization header."""

    def __init__(
        self,
        message: str = "Unauthorized: Invalid PIN",
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.AUTHORIZATION,
            severity=ErrorSeverity.MEDIUM,
            code=code or "invalid_pin",
            details=details,
            recoverable=True,
        )


class ValidationError(LoveMemoriesError):
    """Validation-related errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            code=code or "validation_failed",
            user_message=user_message,
            details=details,
            recoverable=True,
            original_exception=original_exception,
        )


class NotFoundError(LoveMemoriesError):
    """A photo or note id does not exist."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            category=ErrorCategory.NOT_FOUND,
            severity=ErrorSeverity.LOW,
            code="not_found",
            details=details,
        )


class DatabaseError(LoveMemoriesError):
    """Database-related errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.DATABASE,
            severity=ErrorSeverity.HIGH,
            code=code or "database_error",
            details=details,
            recoverable=True,
            original_exception=original_exception,
        )


class StorageError(LoveMemoriesError):
    """Errors writing or deleting uploaded files."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.STORAGE,
            severity=ErrorSeverity.HIGH,
            code=code or "storage_error",
            details=details,
            recoverable=True,
            original_exception=original_exception,
        )
