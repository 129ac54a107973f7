"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Unit tests for ticket requests and the Ticket model.
"""

import pytest

from zendesk2.exceptions import MissingAttributesError, ZendeskNotFoundError, ZendeskUnprocessableError
from zendesk2.operations import GetCCDTickets, GetRequestedTickets


@pytest.fixture
def requester(mock_client):
    return mock_client.users().create(name="Ann Example", email="ann@example.com")


@pytest.mark.unit
class TestCreateTicket:
    def test_create_applies_defaults(self, mock_client):
        ticket = mock_client.tickets().create(subject="Printer", description="It is on fire")

        assert ticket.id is not None
        assert ticket.status == "new"
        assert ticket.collaborator_ids == []
        assert ticket.tags == []

    def test_requester_defaults_to_session_user(self, mock_client):
        me = mock_client.current_user()

        ticket = mock_client.tickets().create(subject="Printer", description="It is on fire")

        assert ticket.requester_id == me.id
        assert ticket.submitter_id == me.id

    def test_requires_subject_and_description(self, mock_client):
        with pytest.raises(MissingAttributesError) as exc_info:
            mock_client.tickets().new().save()

        assert exc_info.value.missing == ["subject", "description"]

    def test_blank_description_is_rejected_by_the_mock(self, mock_client):
        with pytest.raises(ZendeskUnprocessableError):
            mock_client.create_ticket({"ticket": {"subject": "Printer"}})

    def test_requester_hash_resolves_existing_user(self, mock_client, requester):
        ticket = mock_client.tickets().create(
            subject="Printer",
            description="It is on fire",
            requester={"name": "Someone Else", "email": "ann@example.com"},
        )

        assert ticket.requester_id == requester.id
        assert ticket.requester_user.email == "ann@example.com"

    def test_requester_hash_creates_new_user(self, mock_client):
        users_before = len(mock_client.store["users"])

        ticket = mock_client.tickets().create(
            subject="Printer",
            description="It is on fire",
            requester={"name": "Newcomer", "email": "new@example.com"},
        )

        assert len(mock_client.store["users"]) == users_before + 1
        assert ticket.requester_user.name == "Newcomer"
        assert ticket.submitter.email == mock_client.username

    def test_requester_hash_without_name_is_rejected(self, mock_client):
        with pytest.raises(ZendeskUnprocessableError):
            mock_client.tickets().create(
                subject="Printer", description="It is on fire", requester={"email": "new@example.com"}
            )

    def test_unknown_requester_id_is_rejected(self, mock_client):
        with pytest.raises(ZendeskUnprocessableError) as exc_info:
            mock_client.tickets().create(subject="Printer", description="It is on fire", requester_id=4242)

        assert "requester_id" in exc_info.value.body["details"]

    def test_rejected_ticket_leaves_store_untouched(self, mock_client):
        counts = mock_client.store.counts()

        with pytest.raises(ZendeskUnprocessableError):
            mock_client.tickets().create(
                subject="Printer",
                description="It is on fire",
                requester={"name": "Newcomer", "email": "new@example.com"},
                organization_id=4242,
            )

        assert mock_client.store.counts() == counts

    def test_organization_is_inherited_from_requester(self, mock_client):
        organization = mock_client.organizations().create(name="Acme")
        user = mock_client.users().create(name="Ann", email="ann@example.com", organization_id=organization.id)

        ticket = mock_client.tickets().create(subject="Printer", description="On fire", requester_id=user.id)

        assert ticket.organization_id == organization.id
        assert [t.id for t in organization.tickets()] == [ticket.id]


@pytest.mark.unit
class TestTicketUpdates:
    def test_update_changes_status(self, mock_client):
        ticket = mock_client.tickets().create(subject="Printer", description="It is on fire")

        ticket.status = "solved"
        ticket.save()

        assert mock_client.store["tickets"][ticket.id]["status"] == "solved"
        assert ticket.status == "solved"

    def test_description_cannot_be_updated(self, mock_client):
        ticket = mock_client.tickets().create(subject="Printer", description="It is on fire")

        mock_client.update_ticket({"id": ticket.id, "ticket": {"description": "Fine now"}})

        assert mock_client.store["tickets"][ticket.id]["description"] == "It is on fire"

    def test_destroy_removes_ticket(self, mock_client):
        ticket = mock_client.tickets().create(subject="Printer", description="It is on fire")

        ticket.destroy()

        assert ticket.is_destroyed()
        with pytest.raises(ZendeskNotFoundError):
            mock_client.get_ticket({"id": ticket.id})

    def test_collaborators(self, mock_client, requester):
        ticket = mock_client.tickets().create(
            subject="Printer", description="It is on fire", collaborator_ids=[requester.id]
        )

        assert [user.email for user in ticket.collaborators()] == ["ann@example.com"]


@pytest.mark.unit
class TestTicketListings:
    def test_requested_tickets_path(self, mock_client):
        request = GetRequestedTickets(mock_client, {"requester_id": 7})

        assert request.path() == "/users/7/tickets/requested.json"

    def test_ccd_tickets_path(self, mock_client):
        request = GetCCDTickets(mock_client, {"collaborator_id": 7})

        assert request.path() == "/users/7/tickets/ccd.json"

    def test_requested_tickets_for_unknown_user_is_not_found(self, mock_client):
        with pytest.raises(ZendeskNotFoundError):
            mock_client.get_requested_tickets({"requester_id": 4242})

    def test_list_envelope(self, mock_client, requester):
        for number in range(3):
            mock_client.tickets().create(subject=f"T{number}", description="d", requester_id=requester.id)

        body = mock_client.get_requested_tickets({"requester_id": requester.id, "per_page": 2}).body

        assert body["count"] == 3
        assert [ticket["subject"] for ticket in body["tickets"]] == ["T0", "T1"]
        assert body["next_page"].endswith(f"/users/{requester.id}/tickets/requested.json?page=2&per_page=2")
        assert body["previous_page"] is None
