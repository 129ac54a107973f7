"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""Exception hierarchy for Zendesk2 operations."""

from typing import Any


class ZendeskError(Exception):
    """Base exception for Zendesk2 operations."""


class MissingAttributesError(ZendeskError):
    """Required attributes were absent before a model operation."""

    def __init__(self, model_name: str, missing: list[str]):
        self.model_name = model_name
        self.missing = missing
        super().__init__(f"{', '.join(missing)} required for this operation on {model_name}")


class SelfDestructionError(ZendeskError):
    """Raised when the session user tries to destroy itself."""


class ZendeskValidationError(ZendeskError):
    """Validation/input errors raised before any request is made."""


class ZendeskApiError(ZendeskError):
    """Errors from the Zendesk API, real or mocked."""

    def __init__(self, message: str, status_code: int | None = None, body: Any = None):
        """
        Initialize Zendesk API error.

        Args:
            message: Error message
            status_code: HTTP status code if available
            body: Parsed response body if available
        """
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ZendeskNotFoundError(ZendeskApiError):
    """Resource not found (404)."""


class ZendeskUnprocessableError(ZendeskApiError):
    """Record invalid (422)."""


def error_for_status(status_code: int, body: Any) -> ZendeskApiError:
    """Build the exception matching an error response."""
    description = None
    if isinstance(body, dict):
        description = body.get("description") or body.get("error")
    message = f"{status_code}: {description or 'Zendesk API error'}"

    if status_code == 404:
        return ZendeskNotFoundError(message, status_code, body)
    if status_code == 422:
        return ZendeskUnprocessableError(message, status_code, body)
    return ZendeskApiError(message, status_code, body)
