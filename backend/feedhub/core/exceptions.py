"""
Application exceptions and their HTTP mapping.

Every exception carries a machine readable ``kind`` and a ``details`` mapping
so the HTTP layer can build a response without parsing the message text.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger


class BaseAppException(Exception):
    """Base class for all application errors."""

    kind = "application_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.kind,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(BaseAppException):
    """Input rejected; the caller can fix it and retry."""

    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class SearchValidationError(ValidationError):
    kind = "search_validation_error"


class EmptyInputError(SearchValidationError):
    kind = "empty_input"

    def __init__(self) -> None:
        super().__init__("keywords cannot be empty")


class TooManyKeywordsError(SearchValidationError):
    kind = "too_many_keywords"

    def __init__(self, count: int, limit: int) -> None:
        self.count = count
        self.limit = limit
        super().__init__(
            f"too many keywords: got {count}, maximum {limit} allowed",
            {"count": count, "limit": limit},
        )


class KeywordTooLongError(SearchValidationError):
    kind = "keyword_too_long"

    def __init__(self, keyword: str, limit: int) -> None:
        self.keyword = keyword
        self.limit = limit
        super().__init__(
            f"keyword '{keyword}' exceeds maximum length of {limit} characters",
            {"keyword": keyword, "limit": limit},
        )


class InvalidFilterValueError(SearchValidationError):
    kind = "invalid_filter_value"

    def __init__(self, field: str, value: str, allowed: Sequence[str]) -> None:
        self.field = field
        self.value = value
        self.allowed = list(allowed)
        super().__init__(
            f"invalid value '{value}' for field '{field}': must be one of [{', '.join(self.allowed)}]",
            {"field": field, "value": value, "allowed": self.allowed},
        )


class InvalidParameterError(ValidationError):
    """A query parameter could not be parsed (dates, booleans, identifiers)."""

    kind = "invalid_parameter"

    def __init__(self, field: str, value: str, expected: str) -> None:
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(
            f"invalid value '{value}' for field '{field}': expected {expected}",
            {"field": field, "value": value, "expected": expected},
        )


class NotFoundError(BaseAppException):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, identifier: Any) -> None:
        super().__init__(
            f"{entity} with ID {identifier} not found",
            {"entity": entity, "id": str(identifier)},
        )


class StorageError(BaseAppException):
    """Storage failure passed through unchanged. The original error is ``__cause__``."""

    kind = "storage_error"


class SearchTimeoutError(StorageError):
    kind = "search_timeout"

    def __init__(self, operation: str, timeout: float) -> None:
        super().__init__(
            f"{operation} exceeded the {timeout:g}s deadline",
            {"operation": operation, "timeout": timeout},
        )


class ArticleServiceError(BaseAppException):
    kind = "article_service_error"


class SourceServiceError(BaseAppException):
    kind = "source_service_error"


def setup_exception_handlers(app: FastAPI) -> None:
    """Register JSON handlers for application exceptions."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        logger.warning(f"Rejected {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(BaseAppException)
    async def app_error_handler(request: Request, exc: BaseAppException) -> JSONResponse:
        # Internal details are logged, never returned to the client.
        logger.error(f"{exc.kind} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": exc.kind,
                "message": "Internal server error",
                "details": {},
            },
        )
