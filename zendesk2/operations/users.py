"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""User requests: /users, /users/me and organization-scoped listings."""

from typing import Any

from zendesk2.request import (
    CreateRequest,
    DestroyRequest,
    GetRequest,
    ListRequest,
    Response,
    UpdateRequest,
)


class UserRequestMixin:
    root = "user"
    collection = "users"
    collection_path = "/users"


def find_user_by_email(store, email: str | None) -> dict[str, Any] | None:
    """Find the user owning an email, through users or email identities."""
    if not email:
        return None
    email = email.lower()
    for user in store["users"].values():
        if (user.get("email") or "").lower() == email:
            return user
    for identity in store["identities"].values():
        if identity.get("type") == "email" and (identity.get("value") or "").lower() == email:
            return store["users"].get(identity["user_id"])
    return None


class CreateUser(UserRequestMixin, CreateRequest):
    accepted_attributes = (
        "name", "external_id", "alias", "active", "verified", "locale_id", "time_zone",
        "email", "phone", "signature", "details", "notes", "organization_id", "role",
        "custom_role_id", "moderator", "ticket_restriction", "only_private_comments",
        "tags", "suspended", "user_fields",
    )
    defaults = {
        "active": True,
        "verified": False,
        "role": "end-user",
        "suspended": False,
        "tags": [],
        "user_fields": {},
    }

    def prepare(self, attributes: dict[str, Any]) -> dict[str, Any]:
        email = attributes.get("email")
        if find_user_by_email(self.store, email):
            self.invalid(
                "email",
                f"Email: {email} is already being used by another user",
                error="DuplicateValue",
            )

        organization_id = attributes.get("organization_id")
        if organization_id is not None and organization_id not in self.store["organizations"]:
            self.invalid("organization_id", f"Organization: {organization_id} does not exist")

        return attributes

    def after_create(self, record: dict[str, Any]) -> None:
        if record.get("email"):
            identity_id = self.serial_id()
            self.store["identities"][identity_id] = {
                "id": identity_id,
                "url": self.url_for(f"/users/{record['id']}/identities/{identity_id}.json"),
                "created_at": self.timestamp,
                "updated_at": self.timestamp,
                "type": "email",
                "value": record["email"],
                "verified": bool(record.get("verified")),
                "primary": True,
                "user_id": record["id"],
            }

        if record.get("organization_id") is not None:
            membership_id = self.serial_id()
            self.store["memberships"][membership_id] = {
                "id": membership_id,
                "url": self.url_for(f"/organization_memberships/{membership_id}.json"),
                "created_at": self.timestamp,
                "updated_at": self.timestamp,
                "user_id": record["id"],
                "organization_id": record["organization_id"],
                "default": True,
            }


class GetUser(UserRequestMixin, GetRequest):
    pass


class GetCurrentUser(UserRequestMixin, GetRequest):
    def path(self) -> str:
        return "/users/me.json"

    def mock(self) -> Response:
        user = find_user_by_email(self.store, self.client.username)
        if user is None:
            self.error(404, "RecordNotFound", "Not found")
        return self.mock_response({"user": user})


class UpdateUser(UserRequestMixin, UpdateRequest):
    accepted_attributes = CreateUser.accepted_attributes

    def prepare(self, record: dict[str, Any], attributes: dict[str, Any]) -> dict[str, Any]:
        email = attributes.get("email")
        owner = find_user_by_email(self.store, email)
        if owner is not None and owner["id"] != record["id"]:
            self.invalid(
                "email",
                f"Email: {email} is already being used by another user",
                error="DuplicateValue",
            )
        return attributes


class DestroyUser(UserRequestMixin, DestroyRequest):
    """Users are soft-deleted: the response carries the record with ``active`` false."""

    def mock(self) -> Response:
        record = self.find("users", self.identity)
        del self.store["users"][self.identity]

        for identity_id, identity in list(self.store["identities"].items()):
            if identity["user_id"] == record["id"]:
                del self.store["identities"][identity_id]
        for membership_id, membership in list(self.store["memberships"].items()):
            if membership["user_id"] == record["id"]:
                del self.store["memberships"][membership_id]

        record = dict(record, active=False, updated_at=self.timestamp)
        return self.mock_response({"user": record})


class GetUsers(UserRequestMixin, ListRequest):
    collection_root = "users"


class GetOrganizationUsers(GetUsers):
    def path(self) -> str:
        return f"/organizations/{self.params['organization_id']}/users.json"

    def select(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        organization_id = int(self.params["organization_id"])
        self.find("organizations", organization_id)
        member_ids = {
            membership["user_id"]
            for membership in self.store["memberships"].values()
            if membership["organization_id"] == organization_id
        }
        return [record for record in records if record["id"] in member_ids]
