"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""
End-to-end workflows against the in-memory mock.
"""

import pytest

from zendesk2 import ZendeskClient
from zendesk2.exceptions import SelfDestructionError
from tests.fixtures.base import ACCOUNT_URL


@pytest.mark.integration
class TestSupportWorkflow:
    def test_customer_onboarding(self, mock_client):
        acme = mock_client.organizations().create(name="Acme", domain_names=["acme.example"])
        ann = mock_client.users().create(name="Ann", email="ann@acme.example", organization_id=acme.id)
        agent = mock_client.current_user()

        ticket = mock_client.tickets().create(
            subject="Cannot sign in",
            description="Password reset link expired",
            requester={"name": "Ann", "email": "ann@acme.example"},
            assignee_id=agent.id,
        )

        assert ticket.requester_id == ann.id
        assert ticket.organization_id == acme.id
        assert ticket.assignee.id == agent.id
        assert [t.id for t in ann.tickets()] == [ticket.id]
        assert [u.id for u in acme.users()] == [ann.id]

        ticket.status = "solved"
        ticket.save()
        assert mock_client.tickets().get(ticket.id).status == "solved"

        ann.destroy()
        assert ann.is_destroyed()
        assert acme.memberships().all() == []

    def test_sessions_sharing_a_store(self, store):
        admin = ZendeskClient(url=ACCOUNT_URL, username="admin@example.com", mock=True, store=store)
        agent = ZendeskClient(url=ACCOUNT_URL, username="agent@example.com", mock=True, store=store)

        agent_user = agent.current_user()
        admin.current_user().requires("identity")

        with pytest.raises(SelfDestructionError):
            agent_user.destroy()

        admin.users().get(agent_user.id).bind(admin).destroy()

        assert agent.users().get(agent_user.id) is None
        assert len(store["users"]) == 1

    def test_reset_empties_the_store(self, mock_client):
        mock_client.categories().create(name="General")
        mock_client.help_center_posts().create(title="Hi", details="Hello", topic_id=1)

        mock_client.reset()

        assert mock_client.categories().all() == []
        assert mock_client.help_center_posts().all() == []
        assert mock_client.current_user().email == mock_client.username
