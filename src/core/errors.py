"""Catalog exceptions and error classification utilities."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel


HTTP_NOT_FOUND = 404
HTTP_FORBIDDEN = 403
HTTP_TOO_MANY_REQUESTS = 429


class CatalogError(Exception):
    """Base class for catalog failures."""


class CatalogFetchError(CatalogError):
    """Raised when the document listing cannot be retrieved from GitHub."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DocumentNotFoundError(CatalogError):
    """Raised when a document id is unknown or the document cannot be downloaded."""


class ErrorCategory(Enum):
    """Categories of errors that can occur while serving the catalog."""

    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    REPOSITORY_NOT_FOUND = "repository_not_found"
    NETWORK_ERROR = "network_error"
    EMPTY_CATALOG = "empty_catalog"
    DOCUMENT_NOT_FOUND = "document_not_found"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Catalog source errors
    ERR_RATE_LIMIT_EXCEEDED = "ERR_RATE_LIMIT_EXCEEDED"
    ERR_REPOSITORY_NOT_FOUND = "ERR_REPOSITORY_NOT_FOUND"
    ERR_NETWORK_ERROR = "ERR_NETWORK_ERROR"
    ERR_EMPTY_CATALOG = "ERR_EMPTY_CATALOG"

    # Document errors
    ERR_DOCUMENT_NOT_FOUND = "ERR_DOCUMENT_NOT_FOUND"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity


_ERROR_PATTERNS: dict[
    Literal["rate_limit", "not_found", "network", "empty"],
    dict[str, list[str] | set[str]],
] = {
    "rate_limit": {
        "phrases": ["rate limit", "too many requests", "429"],
        "exception_types": set(),
    },
    "not_found": {
        "phrases": ["404", "not found"],
        "exception_types": set(),
    },
    "network": {
        "phrases": ["connection", "timeout", "timed out", "network", "502", "503", "504", "unreachable"],
        "exception_types": {"ConnectError", "ConnectTimeout", "ReadTimeout", "ConnectionError", "TimeoutError"},
    },
    "empty": {
        "phrases": ["no document files"],
        "exception_types": set(),
    },
}


def _match_error_pattern(
    *,
    error_str: str,
    exception_type: str,
    pattern_type: Literal["rate_limit", "not_found", "network", "empty"],
) -> bool:
    """Return True if the error matches the configured pattern type."""
    patterns = _ERROR_PATTERNS[pattern_type]
    return any(phrase in error_str for phrase in patterns["phrases"]) or exception_type in patterns["exception_types"]


def classify_catalog_error(exception: Exception) -> tuple[ErrorCategory, ErrorResponse]:
    """Classify a catalog error and return a structured response.

    GitHub answers 403 when the anonymous rate limit is exhausted, so a 403
    status is treated as rate limiting.

    Args:
        exception: The exception raised while fetching or resolving documents

    Returns:
        Tuple of (ErrorCategory, ErrorResponse)
    """
    error_str = str(exception).lower()
    exception_type = type(exception).__name__
    status_code = getattr(exception, "status_code", None)

    if isinstance(exception, DocumentNotFoundError):
        return (
            ErrorCategory.DOCUMENT_NOT_FOUND,
            ErrorResponse(
                code=ErrorCode.ERR_DOCUMENT_NOT_FOUND,
                message="That document is not in the catalog.",
                suggestion="Search again or refresh the catalog.",
                severity=ErrorSeverity.LOW,
            ),
        )

    if status_code in (HTTP_FORBIDDEN, HTTP_TOO_MANY_REQUESTS) or _match_error_pattern(
        error_str=error_str, exception_type=exception_type, pattern_type="rate_limit"
    ):
        return (
            ErrorCategory.RATE_LIMIT_EXCEEDED,
            ErrorResponse(
                code=ErrorCode.ERR_RATE_LIMIT_EXCEEDED,
                message="GitHub API rate limit reached.",
                suggestion="Wait a few minutes or configure GITHUB_TOKEN.",
                severity=ErrorSeverity.MEDIUM,
            ),
        )

    if status_code == HTTP_NOT_FOUND or _match_error_pattern(
        error_str=error_str, exception_type=exception_type, pattern_type="not_found"
    ):
        return (
            ErrorCategory.REPOSITORY_NOT_FOUND,
            ErrorResponse(
                code=ErrorCode.ERR_REPOSITORY_NOT_FOUND,
                message="The document repository could not be found.",
                suggestion="Check GITHUB_OWNER, GITHUB_REPO, GITHUB_BRANCH and GITHUB_DOCS_PATH.",
                severity=ErrorSeverity.HIGH,
            ),
        )

    if _match_error_pattern(error_str=error_str, exception_type=exception_type, pattern_type="empty"):
        return (
            ErrorCategory.EMPTY_CATALOG,
            ErrorResponse(
                code=ErrorCode.ERR_EMPTY_CATALOG,
                message="The repository contains no document files.",
                suggestion="Add .docx, .pdf, .doc, .txt, .md, .pptx or .xlsx files to the docs directory.",
                severity=ErrorSeverity.MEDIUM,
            ),
        )

    if _match_error_pattern(error_str=error_str, exception_type=exception_type, pattern_type="network"):
        return (
            ErrorCategory.NETWORK_ERROR,
            ErrorResponse(
                code=ErrorCode.ERR_NETWORK_ERROR,
                message="Network error while contacting GitHub.",
                suggestion="Please check your connection and try again.",
                severity=ErrorSeverity.MEDIUM,
            ),
        )

    return (
        ErrorCategory.UNKNOWN,
        ErrorResponse(
            code=ErrorCode.ERR_UNKNOWN,
            message="An unexpected error occurred.",
            suggestion="Please try again later. If the problem persists, contact support.",
            severity=ErrorSeverity.MEDIUM,
        ),
    )
