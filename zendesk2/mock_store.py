"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""
In-memory data store backing mock mode.

Records are kept per resource collection and keyed by identity. Identities are
drawn from a single sequence shared by every collection of the store, so ids
are unique across resource types the way they are in a real Zendesk account.
The store is not locked; share one across threads only with external
serialization.
"""

import itertools
from typing import Any

from zendesk2.core.logging import get_logger

logger = get_logger("zendesk2.mock_store")

COLLECTIONS = (
    "users",
    "identities",
    "organizations",
    "memberships",
    "tickets",
    "categories",
    "help_center_posts",
    "help_center_subscriptions",
)


class MockStore:
    """Keyed tables of mock records plus the shared identity sequence."""

    def __init__(self):
        """Initialize the store with empty collections."""
        self.data: dict[str, dict[int, dict[str, Any]]] = {}
        self._sequence = itertools.count(1)
        self.reset()

    def __getitem__(self, collection: str) -> dict[int, dict[str, Any]]:
        return self.data[collection]

    def serial_id(self) -> int:
        """Return the next identity from the shared sequence."""
        return next(self._sequence)

    def reset(self) -> None:
        """Drop every record and restart the identity sequence."""
        self.data = {collection: {} for collection in COLLECTIONS}
        self._sequence = itertools.count(1)
        logger.debug("Mock store reset")

    def counts(self) -> dict[str, int]:
        """Number of records per collection."""
        return {collection: len(records) for collection, records in self.data.items()}
