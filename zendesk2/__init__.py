"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Zendesk2 - Zendesk support API client
A client SDK with an in-process mock of the Zendesk REST API
"""

__version__ = "0.1.0"

from zendesk2.client import ZendeskClient
from zendesk2.core.config import ZendeskConfig
from zendesk2.exceptions import (
    MissingAttributesError,
    SelfDestructionError,
    ZendeskApiError,
    ZendeskError,
    ZendeskNotFoundError,
    ZendeskUnprocessableError,
    ZendeskValidationError,
)
from zendesk2.mock_store import MockStore

__all__ = [
    "MissingAttributesError",
    "MockStore",
    "SelfDestructionError",
    "ZendeskApiError",
    "ZendeskClient",
    "ZendeskConfig",
    "ZendeskError",
    "ZendeskNotFoundError",
    "ZendeskUnprocessableError",
    "ZendeskValidationError",
]
