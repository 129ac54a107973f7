"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

from datetime import datetime

import pytest

from zendesk2.exceptions import MissingAttributesError, ZendeskNotFoundError
from zendesk2.models import Category
from zendesk2.operations import CreateCategory


@pytest.mark.unit
class TestCreateCategoryRequest:
    def test_request_descriptor(self, mock_client):
        request = CreateCategory(mock_client, {"category": {"name": "General", "position": 2}})

        assert request.method == "POST"
        assert request.path() == "/categories.json"
        assert request.body() == {"category": {"name": "General", "position": 2}}

    def test_mock_create_returns_201_with_generated_fields(self, mock_client):
        response = mock_client.create_category(
            {"category": {"name": "General", "description": "Talk", "position": 1}}
        )

        assert response.status == 201
        record = response.body["category"]
        assert record["name"] == "General"
        assert record["description"] == "Talk"
        assert record["position"] == 1
        assert record["url"] == f"https://example.zendesk.com/api/v2/categories/{record['id']}.json"
        assert record["created_at"] == record["updated_at"]
        assert mock_client.store["categories"][record["id"]] == record

    def test_unaccepted_attributes_are_dropped(self, mock_client):
        record = mock_client.create_category(
            {"category": {"name": "General", "color": "red", "owner": {"id": 1}}}
        ).body["category"]

        assert "color" not in record
        assert "owner" not in record
        assert "color" not in mock_client.store["categories"][record["id"]]

    def test_caller_cannot_choose_the_identity(self, mock_client):
        record = mock_client.create_category({"category": {"id": 999, "name": "General"}}).body["category"]

        assert record["id"] != 999
        assert record["id"] in mock_client.store["categories"]

    def test_update_drops_unaccepted_attributes(self, mock_client):
        record = mock_client.create_category({"category": {"name": "General"}}).body["category"]

        updated = mock_client.update_category(
            {"id": record["id"], "category": {"name": "Renamed", "color": "red", "created_at": "1999-01-01T00:00:00Z"}}
        ).body["category"]

        stored = mock_client.store["categories"][record["id"]]
        assert updated["name"] == stored["name"] == "Renamed"
        assert "color" not in updated
        assert "color" not in stored
        assert stored["created_at"] == record["created_at"]

    def test_returned_body_is_a_copy(self, mock_client):
        record = mock_client.create_category({"category": {"name": "General"}}).body["category"]
        record["name"] = "Changed"

        assert mock_client.store["categories"][record["id"]]["name"] == "General"


@pytest.mark.unit
class TestCategoryModel:
    def test_save_new_record_creates(self, mock_client):
        category = mock_client.categories().new(name="General", description="Talk")
        assert category.is_new_record()

        category.save()

        assert category.id is not None
        assert isinstance(category.created_at, datetime)
        assert category.created_at == category.updated_at

    def test_save_requires_name(self, mock_client):
        category = mock_client.categories().new(description="No name")

        with pytest.raises(MissingAttributesError) as exc_info:
            category.save()

        assert exc_info.value.missing == ["name"]
        assert mock_client.store["categories"] == {}

    def test_save_existing_record_updates(self, mock_client):
        category = mock_client.categories().create(name="General")

        category.name = "Renamed"
        category.save()

        assert mock_client.store["categories"][category.id]["name"] == "Renamed"
        assert mock_client.categories().get(category.id).name == "Renamed"

    def test_update_unknown_category_raises_not_found(self, mock_client):
        with pytest.raises(ZendeskNotFoundError) as exc_info:
            mock_client.update_category({"id": 4242, "category": {"name": "x"}})

        assert exc_info.value.status_code == 404

    def test_destroy_removes_record(self, mock_client):
        category = mock_client.categories().create(name="General")

        category.destroy()

        assert category.id not in mock_client.store["categories"]
        assert category.is_destroyed()

    def test_destroy_answers_204(self, mock_client):
        category = mock_client.categories().create(name="General")

        response = mock_client.destroy_category({"id": category.id})

        assert response.status == 204
        assert response.body is None

    def test_destroy_requires_identity(self, mock_client):
        with pytest.raises(MissingAttributesError):
            Category(name="Unsaved").bind(mock_client).destroy()

    def test_get_missing_returns_none(self, mock_client):
        assert mock_client.categories().get(12345) is None

    def test_list_categories(self, mock_client):
        for name in ("A", "B", "C"):
            mock_client.categories().create(name=name)

        categories = mock_client.categories()
        names = [category.name for category in categories.all()]

        assert names == ["A", "B", "C"]
        assert categories.count == 3

    def test_list_pagination(self, mock_client):
        for name in ("A", "B", "C"):
            mock_client.categories().create(name=name)

        categories = mock_client.categories()
        page = categories.all(page=2, per_page=2)

        assert [category.name for category in page] == ["C"]
        assert categories.next_page is None
        assert categories.previous_page.endswith("/categories.json?page=1&per_page=2")
