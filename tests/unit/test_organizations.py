"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Unit tests for organizations and organization memberships.
"""

import pytest

from zendesk2.exceptions import ZendeskError, ZendeskNotFoundError, ZendeskUnprocessableError


@pytest.fixture
def acme(mock_client):
    return mock_client.organizations().create(name="Acme")


@pytest.fixture
def ann(mock_client):
    return mock_client.users().create(name="Ann Example", email="ann@example.com")


@pytest.mark.unit
class TestOrganizations:
    def test_create_applies_defaults(self, acme):
        assert acme.id is not None
        assert acme.domain_names == []
        assert acme.shared_tickets is False

    def test_duplicate_name_is_rejected(self, mock_client, acme):
        with pytest.raises(ZendeskUnprocessableError) as exc_info:
            mock_client.organizations().create(name="acme")

        assert exc_info.value.body["details"]["name"][0]["error"] == "DuplicateValue"

    def test_blank_name_is_rejected_by_the_mock(self, mock_client):
        with pytest.raises(ZendeskUnprocessableError):
            mock_client.create_organization({"organization": {"details": "nameless"}})

    def test_rename_to_own_name_is_allowed(self, mock_client, acme):
        acme.name = "Acme"
        acme.notes = "Key account"
        acme.save()

        assert mock_client.store["organizations"][acme.id]["notes"] == "Key account"

    @pytest.mark.parametrize("name", [None, ""])
    def test_blank_rename_is_rejected(self, mock_client, acme, name):
        with pytest.raises(ZendeskUnprocessableError) as exc_info:
            mock_client.update_organization({"id": acme.id, "organization": {"name": name}})

        assert exc_info.value.body["details"]["name"][0]["error"] == "BlankValue"
        assert mock_client.store["organizations"][acme.id]["name"] == "Acme"

    def test_unique_name_check_tolerates_nameless_records(self, mock_client, acme):
        mock_client.store["organizations"][acme.id]["name"] = None

        assert mock_client.organizations().create(name="Globex").name == "Globex"

    def test_rename_to_taken_name_is_rejected(self, mock_client, acme):
        other = mock_client.organizations().create(name="Globex")
        other.name = "Acme"

        with pytest.raises(ZendeskUnprocessableError):
            other.save()

    def test_destroy_cascades_memberships(self, mock_client, acme, ann):
        mock_client.memberships().create(user_id=ann.id, organization_id=acme.id)

        acme.destroy()

        assert acme.is_destroyed()
        assert mock_client.store["memberships"] == {}


@pytest.mark.unit
class TestMemberships:
    def test_first_membership_is_default(self, mock_client, acme, ann):
        membership = mock_client.memberships().create(user_id=ann.id, organization_id=acme.id)

        assert membership.default is True
        assert ann.reload().organization_id == acme.id

    def test_second_membership_is_not_default(self, mock_client, acme, ann):
        globex = mock_client.organizations().create(name="Globex")
        mock_client.memberships().create(user_id=ann.id, organization_id=acme.id)

        second = mock_client.memberships().create(user_id=ann.id, organization_id=globex.id)

        assert second.default is False
        assert ann.reload().organization_id == acme.id
        assert sorted(org.name for org in ann.organizations()) == ["Acme", "Globex"]

    def test_duplicate_membership_is_rejected(self, mock_client, acme, ann):
        mock_client.memberships().create(user_id=ann.id, organization_id=acme.id)

        with pytest.raises(ZendeskUnprocessableError):
            mock_client.memberships().create(user_id=ann.id, organization_id=acme.id)

    @pytest.mark.parametrize("missing", ["user_id", "organization_id"])
    def test_membership_for_unknown_record_is_not_found(self, mock_client, acme, ann, missing):
        params = {"user_id": ann.id, "organization_id": acme.id, missing: 4242}

        with pytest.raises(ZendeskNotFoundError):
            mock_client.create_membership({"organization_membership": params})

    def test_scoped_listings(self, mock_client, acme, ann):
        bob = mock_client.users().create(name="Bob", email="bob@example.com")
        mock_client.memberships().create(user_id=ann.id, organization_id=acme.id)

        assert [user.id for user in acme.users()] == [ann.id]
        assert [membership.user_id for membership in acme.memberships()] == [ann.id]
        assert [membership.organization_id for membership in ann.memberships()] == [acme.id]
        assert bob.memberships().all() == []

    def test_destroy_clears_default_organization(self, mock_client, acme, ann):
        membership = mock_client.memberships().create(user_id=ann.id, organization_id=acme.id)

        membership.destroy()

        assert membership.is_destroyed()
        assert ann.reload().organization_id is None
        assert ann.organization is None

    def test_memberships_cannot_be_updated(self, mock_client, acme, ann):
        membership = mock_client.memberships().create(user_id=ann.id, organization_id=acme.id)
        membership.default = False

        with pytest.raises(ZendeskError, match="does not support save"):
            membership.save()

    def test_membership_associations(self, mock_client, acme, ann):
        membership = mock_client.memberships().create(user_id=ann.id, organization_id=acme.id)

        assert membership.user.email == "ann@example.com"
        assert membership.organization.name == "Acme"
