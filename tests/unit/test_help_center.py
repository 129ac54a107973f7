"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Unit tests for Help Center community posts and subscriptions.
"""

import pytest

from zendesk2.exceptions import MissingAttributesError, ZendeskNotFoundError, ZendeskUnprocessableError
from zendesk2.operations import CreateHelpCenterSubscription, GetHelpCenterUserPosts


@pytest.fixture
def post(mock_client):
    return mock_client.help_center_posts().create(title="Hello", details="First post", topic_id=11)


@pytest.mark.unit
class TestHelpCenterPosts:
    def test_create_defaults_author_to_session_user(self, mock_client, post):
        assert post.author_id == mock_client.current_user().id
        assert post.author.email == mock_client.username
        assert post.html_url == f"https://example.zendesk.com/hc/community/posts/{post.id}"
        assert post.vote_sum == 0

    def test_create_requires_title_details_and_topic(self, mock_client):
        with pytest.raises(MissingAttributesError) as exc_info:
            mock_client.help_center_posts().new(title="Hello").save()

        assert exc_info.value.missing == ["details", "topic_id"]

    def test_blank_details_rejected_by_the_mock(self, mock_client):
        with pytest.raises(ZendeskUnprocessableError):
            mock_client.create_help_center_post({"post": {"title": "Hello", "topic_id": 11}})

    def test_update_and_destroy(self, mock_client, post):
        post.pinned = True
        post.save()
        assert mock_client.store["help_center_posts"][post.id]["pinned"] is True

        post.destroy()
        assert post.is_destroyed()

    def test_user_posts(self, mock_client, post):
        ann = mock_client.users().create(name="Ann", email="ann@example.com")
        mock_client.help_center_posts().create(title="Mine", details="By Ann", topic_id=11, author_id=ann.id)

        assert [p.title for p in ann.posts()] == ["Mine"]
        assert GetHelpCenterUserPosts(mock_client, {"user_id": ann.id}).path() == (
            f"/community/users/{ann.id}/posts.json"
        )
        assert len(mock_client.help_center_posts().all()) == 2


@pytest.mark.unit
class TestHelpCenterSubscriptions:
    def test_paths_by_source_type(self, mock_client):
        article = CreateHelpCenterSubscription(mock_client, {"source_type": "article", "source_id": 5})
        post = CreateHelpCenterSubscription(mock_client, {"source_type": "post", "source_id": 6})

        assert article.path() == "/help_center/articles/5/subscriptions.json"
        assert post.path() == "/community/posts/6/subscriptions.json"

    def test_subscribe_to_post(self, mock_client, post):
        subscription = mock_client.help_center_subscriptions().create(source_type="post", source_id=post.id)

        assert subscription.source_type == "Post"
        assert subscription.source_id == post.id
        assert subscription.locale == "en-us"
        assert subscription.user_id == mock_client.current_user().id

    def test_subscribing_to_missing_post_is_not_found(self, mock_client):
        with pytest.raises(ZendeskNotFoundError):
            mock_client.help_center_subscriptions().create(source_type="post", source_id=4242)

    def test_unsupported_source_is_rejected(self, mock_client):
        with pytest.raises(ZendeskUnprocessableError):
            mock_client.help_center_subscriptions().create(source_type="ticket", source_id=1)

    def test_duplicate_subscription_is_rejected(self, mock_client, post):
        mock_client.help_center_subscriptions().create(source_type="post", source_id=post.id)

        with pytest.raises(ZendeskUnprocessableError):
            mock_client.help_center_subscriptions().create(source_type="post", source_id=post.id)

    def test_user_subscriptions_and_destroy(self, mock_client, post):
        me = mock_client.current_user()
        subscription = mock_client.help_center_subscriptions().create(source_type="section", source_id=3)

        assert [s.id for s in me.subscriptions()] == [subscription.id]

        subscription.destroy()

        assert subscription.is_destroyed()
        assert me.subscriptions().all() == []
