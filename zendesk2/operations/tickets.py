"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""Ticket requests, including requester/collaborator scoped listings."""

from typing import Any

from zendesk2.operations.users import CreateUser, find_user_by_email
from zendesk2.request import CreateRequest, DestroyRequest, GetRequest, ListRequest, UpdateRequest


class TicketRequestMixin:
    root = "ticket"
    collection = "tickets"
    collection_path = "/tickets"

    def check_references(self, attributes: dict[str, Any]) -> None:
        for key in ("requester_id", "submitter_id", "assignee_id"):
            user_id = attributes.get(key)
            if user_id is not None and user_id not in self.store["users"]:
                self.invalid(key, f"{key}: User {user_id} does not exist")

        organization_id = attributes.get("organization_id")
        if organization_id is not None and organization_id not in self.store["organizations"]:
            self.invalid("organization_id", f"organization_id: Organization {organization_id} does not exist")


class CreateTicket(TicketRequestMixin, CreateRequest):
    accepted_attributes = (
        "external_id", "type", "subject", "description", "priority", "status", "recipient",
        "requester_id", "submitter_id", "assignee_id", "organization_id", "group_id",
        "collaborator_ids", "problem_id", "due_at", "tags", "custom_fields", "requester",
    )
    defaults = {
        "status": "new",
        "collaborator_ids": [],
        "tags": [],
        "custom_fields": [],
    }

    def prepare(self, attributes: dict[str, Any]) -> dict[str, Any]:
        if not attributes.get("description"):
            self.invalid("description", "Description: cannot be blank", error="BlankValue")

        requester = attributes.pop("requester", None)
        new_requester = None
        if requester and "requester_id" not in attributes:
            existing = find_user_by_email(self.store, requester.get("email"))
            if existing is not None:
                attributes["requester_id"] = existing["id"]
            elif not requester.get("name"):
                self.invalid("requester", "Requester Name: is too short (minimum is 1 characters)")
            else:
                new_requester = requester

        current_user = find_user_by_email(self.store, self.client.username)
        current_user_id = current_user["id"] if current_user else None
        if new_requester is None:
            attributes.setdefault("requester_id", current_user_id)
        attributes.setdefault("submitter_id", current_user_id)

        self.check_references(attributes)

        # Nothing is stored until every check above has passed
        if new_requester is not None:
            response = CreateUser(self.client, {"user": dict(new_requester)}).mock()
            attributes["requester_id"] = response.body["user"]["id"]

        if attributes.get("organization_id") is None and attributes.get("requester_id") is not None:
            requester_record = self.store["users"][attributes["requester_id"]]
            if requester_record.get("organization_id") is not None:
                attributes["organization_id"] = requester_record["organization_id"]

        return attributes


class GetTicket(TicketRequestMixin, GetRequest):
    pass


class UpdateTicket(TicketRequestMixin, UpdateRequest):
    accepted_attributes = tuple(
        attribute for attribute in CreateTicket.accepted_attributes
        if attribute not in ("description", "requester")
    )

    def prepare(self, record: dict[str, Any], attributes: dict[str, Any]) -> dict[str, Any]:
        self.check_references(attributes)
        return attributes


class DestroyTicket(TicketRequestMixin, DestroyRequest):
    pass


class GetTickets(TicketRequestMixin, ListRequest):
    collection_root = "tickets"


class GetRequestedTickets(GetTickets):
    def path(self) -> str:
        return f"/users/{self.params['requester_id']}/tickets/requested.json"

    def select(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        requester_id = int(self.params["requester_id"])
        self.find("users", requester_id)
        return [record for record in records if record.get("requester_id") == requester_id]


class GetCCDTickets(GetTickets):
    def path(self) -> str:
        return f"/users/{self.params['collaborator_id']}/tickets/ccd.json"

    def select(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        collaborator_id = int(self.params["collaborator_id"])
        self.find("users", collaborator_id)
        return [
            record for record in records
            if collaborator_id in (record.get("collaborator_ids") or [])
        ]


class GetOrganizationTickets(GetTickets):
    def path(self) -> str:
        return f"/organizations/{self.params['organization_id']}/tickets.json"

    def select(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        organization_id = int(self.params["organization_id"])
        self.find("organizations", organization_id)
        return [record for record in records if record.get("organization_id") == organization_id]
