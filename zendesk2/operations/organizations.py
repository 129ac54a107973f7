"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""Organization requests."""

from typing import Any

from zendesk2.request import CreateRequest, DestroyRequest, GetRequest, ListRequest, UpdateRequest


class OrganizationRequestMixin:
    root = "organization"
    collection = "organizations"
    collection_path = "/organizations"

    def check_unique_name(self, name: str | None, identity: int | None = None) -> None:
        if name is None:
            return
        for organization in self.store["organizations"].values():
            if (organization.get("name") or "").lower() == name.lower() and organization["id"] != identity:
                self.invalid("name", "Name: has already been taken", error="DuplicateValue")


class CreateOrganization(OrganizationRequestMixin, CreateRequest):
    accepted_attributes = (
        "name", "external_id", "details", "notes", "domain_names", "group_id",
        "shared_tickets", "shared_comments", "tags", "organization_fields",
    )
    defaults = {
        "domain_names": [],
        "shared_tickets": False,
        "shared_comments": False,
        "tags": [],
        "organization_fields": {},
    }

    def prepare(self, attributes: dict[str, Any]) -> dict[str, Any]:
        if not attributes.get("name"):
            self.invalid("name", "Name: cannot be blank", error="BlankValue")
        self.check_unique_name(attributes["name"])
        return attributes


class GetOrganization(OrganizationRequestMixin, GetRequest):
    pass


class UpdateOrganization(OrganizationRequestMixin, UpdateRequest):
    accepted_attributes = CreateOrganization.accepted_attributes

    def prepare(self, record: dict[str, Any], attributes: dict[str, Any]) -> dict[str, Any]:
        if "name" in attributes and not attributes["name"]:
            self.invalid("name", "Name: cannot be blank", error="BlankValue")
        self.check_unique_name(attributes.get("name"), identity=record["id"])
        return attributes


class DestroyOrganization(OrganizationRequestMixin, DestroyRequest):
    def after_destroy(self, record: dict[str, Any]) -> None:
        for membership_id, membership in list(self.store["memberships"].items()):
            if membership["organization_id"] == record["id"]:
                del self.store["memberships"][membership_id]


class GetOrganizations(OrganizationRequestMixin, ListRequest):
    collection_root = "organizations"


class GetUserOrganizations(GetOrganizations):
    def path(self) -> str:
        return f"/users/{self.params['user_id']}/organizations.json"

    def select(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        user_id = int(self.params["user_id"])
        self.find("users", user_id)
        organization_ids = {
            membership["organization_id"]
            for membership in self.store["memberships"].values()
            if membership["user_id"] == user_id
        }
        return [record for record in records if record["id"] in organization_ids]
