"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""Organization membership requests."""

from typing import Any

from zendesk2.request import CreateRequest, DestroyRequest, GetRequest, ListRequest


class MembershipRequestMixin:
    root = "organization_membership"
    collection = "memberships"
    collection_path = "/organization_memberships"


class CreateMembership(MembershipRequestMixin, CreateRequest):
    accepted_attributes = ("user_id", "organization_id", "default")

    def prepare(self, attributes: dict[str, Any]) -> dict[str, Any]:
        user = self.find("users", attributes.get("user_id"))
        organization = self.find("organizations", attributes.get("organization_id"))

        memberships = [
            membership for membership in self.store["memberships"].values()
            if membership["user_id"] == user["id"]
        ]
        if any(membership["organization_id"] == organization["id"] for membership in memberships):
            self.invalid("user_id", "User has already been taken", error="DuplicateValue")

        attributes["user_id"] = user["id"]
        attributes["organization_id"] = organization["id"]
        attributes["default"] = not memberships
        return attributes

    def after_create(self, record: dict[str, Any]) -> None:
        if record["default"]:
            self.store["users"][record["user_id"]]["organization_id"] = record["organization_id"]


class GetMembership(MembershipRequestMixin, GetRequest):
    pass


class DestroyMembership(MembershipRequestMixin, DestroyRequest):
    def after_destroy(self, record: dict[str, Any]) -> None:
        user = self.store["users"].get(record["user_id"])
        if user is not None and user.get("organization_id") == record["organization_id"]:
            user["organization_id"] = None


class GetMemberships(MembershipRequestMixin, ListRequest):
    collection_root = "organization_memberships"


class GetUserMemberships(GetMemberships):
    def path(self) -> str:
        return f"/users/{self.params['user_id']}/organization_memberships.json"

    def select(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        user_id = int(self.params["user_id"])
        self.find("users", user_id)
        return [record for record in records if record["user_id"] == user_id]


class GetOrganizationMemberships(GetMemberships):
    def path(self) -> str:
        return f"/organizations/{self.params['organization_id']}/organization_memberships.json"

    def select(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        organization_id = int(self.params["organization_id"])
        self.find("organizations", organization_id)
        return [record for record in records if record["organization_id"] == organization_id]
