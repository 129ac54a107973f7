"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""User identity requests, nested under /users/{user_id}/identities."""

from typing import Any

from zendesk2.request import CreateRequest, DestroyRequest, GetRequest, ListRequest, UpdateRequest

IDENTITY_TYPES = ("email", "twitter", "facebook", "google", "phone_number", "agent_forwarding")


class UserIdentityRequestMixin:
    root = "identity"
    collection = "identities"

    @property
    def user_id(self) -> int:
        return int(self.params.get("user_id", self.attributes.get("user_id")))

    @property
    def collection_path(self) -> str:
        return f"/users/{self.user_id}/identities"

    def find(self, collection: str, identity: Any) -> dict[str, Any]:
        record = super().find(collection, identity)
        # Identities are only addressable through their owner
        if collection == "identities" and record["user_id"] != self.user_id:
            self.error(404, "RecordNotFound", "Not found")
        return record


class CreateUserIdentity(UserIdentityRequestMixin, CreateRequest):
    accepted_attributes = ("type", "value", "verified", "primary", "user_id")
    defaults = {"verified": False, "primary": False}

    def prepare(self, attributes: dict[str, Any]) -> dict[str, Any]:
        self.find("users", self.user_id)

        if attributes.get("type") not in IDENTITY_TYPES:
            self.invalid("type", f"Type: {attributes.get('type')} is not a valid identity type")
        if not attributes.get("value"):
            self.invalid("value", "Value: cannot be blank", error="BlankValue")

        for identity in self.store["identities"].values():
            if identity["type"] == attributes["type"] and identity["value"] == attributes["value"]:
                self.invalid(
                    "value",
                    f"Value: {attributes['value']} is already being used by another user",
                    error="DuplicateValue",
                )

        attributes["user_id"] = self.user_id
        return attributes


class GetUserIdentity(UserIdentityRequestMixin, GetRequest):
    pass


class UpdateUserIdentity(UserIdentityRequestMixin, UpdateRequest):
    accepted_attributes = ("verified", "value")


class DestroyUserIdentity(UserIdentityRequestMixin, DestroyRequest):
    pass


class GetUserIdentities(UserIdentityRequestMixin, ListRequest):
    collection_root = "identities"

    @property
    def attributes(self) -> dict[str, Any]:
        return {}

    def select(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        self.find("users", self.user_id)
        return [record for record in records if record["user_id"] == self.user_id]
