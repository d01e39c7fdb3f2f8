"""Error handling utilities.

This module provides the exception hierarchy for the Content Search Hub.
It defines a base SearchError class and specialized subclasses for the
failures that can occur while executing, merging and formatting a search.
"""

import http
import traceback
from typing import Any, TypeVar

# Type variable for self-referential return types
T = TypeVar("T", bound="SearchError")


class SearchError(Exception):
    """Base class for all search-related exceptions in the application.

    All custom exceptions should inherit from this class to ensure consistent
    error handling throughout the application.
    """

    def __init__(
        self,
        message: str,
        status_code: int = http.HTTPStatus.INTERNAL_SERVER_ERROR,
        original_error: Exception | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize the error with context information.

        Args:
            message: Human-readable error message
            status_code: HTTP status code to use when a host converts the error
            original_error: The original exception that caused this error, if any
            details: Additional structured details about the error
        """
        self.message = message
        self.status_code = status_code
        self.original_error = original_error
        self.details = details or {}
        super().__init__(message)

    @classmethod
    def from_exception(
        cls: type[T], exc: Exception, message: str | None = None, **kwargs
    ) -> T:
        """Create an error instance from another exception.

        Args:
            exc: The exception to wrap
            message: Custom message to use (defaults to str(exc))
            **kwargs: Additional arguments to pass to the constructor

        Returns:
            A new instance of the error class
        """
        return cls(message=message or str(exc), original_error=exc, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert the error to a dictionary representation.

        Returns:
            A dictionary containing error details suitable for serialization
        """
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
        }

        if self.details:
            result["details"] = self.details

        if self.original_error is not None:
            result["cause"] = (
                f"{self.original_error.__class__.__name__}: {self.original_error}"
            )

        return result


# Query-related errors


class QueryError(SearchError):
    """Error raised when a query expression is malformed or fails to evaluate."""

    def __init__(
        self,
        message: str,
        query: str | None = None,
        status_code: int = http.HTTPStatus.BAD_REQUEST,
        **kwargs,
    ):
        """Initialize a query error.

        Args:
            message: Error message
            query: The problematic query string
            status_code: HTTP status code (defaults to 400 Bad Request)
            **kwargs: Additional arguments passed to SearchError
        """
        details = kwargs.pop("details", {})

        if query:
            details["query"] = query

        super().__init__(message, status_code=status_code, details=details, **kwargs)

    @property
    def query(self) -> str | None:
        """The query text that failed, if known."""
        return self.details.get("query")

    def with_query(self, query: str | None) -> "QueryError":
        """Attach the query text if the error does not carry one yet."""
        if query and "query" not in self.details:
            self.details["query"] = query
        return self


class MergeCancelledError(SearchError):
    """Error raised when a merge is cancelled before the hit stream ends."""

    def __init__(
        self,
        message: str | None = None,
        consumed: int | None = None,
        **kwargs,
    ):
        """Initialize a merge cancelled error.

        Args:
            message: Error message (defaults to a standard message)
            consumed: Number of hits pulled before cancellation
            **kwargs: Additional arguments passed to SearchError
        """
        details = kwargs.pop("details", {})

        if consumed is not None:
            details["consumed"] = consumed

        message = message or "Merge was cancelled"
        super().__init__(
            message,
            status_code=http.HTTPStatus.SERVICE_UNAVAILABLE,
            details=details,
            **kwargs,
        )


# Item lookup errors


class ItemLookupError(SearchError):
    """Error raised when an item cannot be resolved from the content repository.

    Callers treat this as "item unavailable": the item is skipped and the
    surrounding operation continues.
    """

    def __init__(
        self,
        item_id: str,
        message: str | None = None,
        status_code: int = http.HTTPStatus.NOT_FOUND,
        **kwargs,
    ):
        """Initialize an item lookup error.

        Args:
            item_id: Identity of the item that could not be resolved
            message: Error message (defaults to a standard message)
            status_code: HTTP status code (defaults to 404 Not Found)
            **kwargs: Additional arguments passed to SearchError
        """
        details = kwargs.pop("details", {})
        details["item_id"] = item_id

        message = message or f"Item '{item_id}' could not be resolved"
        self.item_id = item_id
        super().__init__(message, status_code=status_code, details=details, **kwargs)


# Configuration errors


class ConfigurationError(SearchError):
    """Error raised when there's an issue with the application configuration."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        status_code: int = http.HTTPStatus.INTERNAL_SERVER_ERROR,
        **kwargs,
    ):
        """Initialize a configuration error.

        Args:
            message: Error message
            config_key: The configuration key with the issue
            status_code: HTTP status code (defaults to 500 Internal Server Error)
            **kwargs: Additional arguments passed to SearchError
        """
        details = kwargs.pop("details", {})

        if config_key:
            details["config_key"] = config_key

        super().__init__(message, status_code=status_code, details=details, **kwargs)


class MissingConfigurationError(ConfigurationError):
    """Error raised when a required configuration value is missing."""

    def __init__(self, config_key: str, message: str | None = None, **kwargs):
        """Initialize a missing configuration error.

        Args:
            config_key: The missing configuration key
            message: Error message (defaults to a standard message)
            **kwargs: Additional arguments passed to ConfigurationError
        """
        message = message or f"Required configuration '{config_key}' is missing"
        super().__init__(message, config_key, **kwargs)


def format_exception(e: Exception) -> dict[str, Any]:
    """Format an exception for structured logging.

    Args:
        e: The exception to format

    Returns:
        A dictionary containing error details suitable for logging
    """
    if isinstance(e, SearchError):
        result = e.to_dict()
        result["traceback"] = traceback.format_exc()
        return result

    return {
        "error_type": e.__class__.__name__,
        "message": str(e),
        "traceback": traceback.format_exc(),
    }
