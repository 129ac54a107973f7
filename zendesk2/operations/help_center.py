"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""Help Center community posts and content subscriptions."""

from typing import Any

from zendesk2.operations.users import find_user_by_email
from zendesk2.request import CreateRequest, DestroyRequest, GetRequest, ListRequest, UpdateRequest

SUBSCRIPTION_SOURCES = ("article", "section", "post", "topic")


def current_user_id(request) -> int | None:
    user = find_user_by_email(request.store, request.client.username)
    return user["id"] if user else None


class PostRequestMixin:
    root = "post"
    collection = "help_center_posts"
    collection_path = "/community/posts"


class CreateHelpCenterPost(PostRequestMixin, CreateRequest):
    accepted_attributes = (
        "title", "details", "topic_id", "author_id", "pinned", "featured", "closed", "status",
    )
    defaults = {
        "pinned": False,
        "featured": False,
        "closed": False,
        "status": "none",
        "comment_count": 0,
        "follower_count": 0,
        "vote_count": 0,
        "vote_sum": 0,
    }

    def prepare(self, attributes: dict[str, Any]) -> dict[str, Any]:
        for key in ("title", "details"):
            if not attributes.get(key):
                self.invalid(key, f"{key.capitalize()}: cannot be blank", error="BlankValue")

        author_id = attributes.setdefault("author_id", current_user_id(self))
        if author_id is not None:
            self.find("users", author_id)
        return attributes

    def after_create(self, record: dict[str, Any]) -> None:
        record["html_url"] = f"{self.client.url}/hc/community/posts/{record['id']}"


class GetHelpCenterPost(PostRequestMixin, GetRequest):
    pass


class UpdateHelpCenterPost(PostRequestMixin, UpdateRequest):
    accepted_attributes = CreateHelpCenterPost.accepted_attributes


class DestroyHelpCenterPost(PostRequestMixin, DestroyRequest):
    pass


class GetHelpCenterPosts(PostRequestMixin, ListRequest):
    collection_root = "posts"


class GetHelpCenterUserPosts(GetHelpCenterPosts):
    def path(self) -> str:
        return f"/community/users/{self.params['user_id']}/posts.json"

    def select(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        user_id = int(self.params["user_id"])
        self.find("users", user_id)
        return [record for record in records if record.get("author_id") == user_id]


class SubscriptionRequestMixin:
    root = "subscription"
    collection = "help_center_subscriptions"

    @property
    def source_type(self) -> str:
        return str(self.params.get("source_type", self.attributes.get("source_type", ""))).lower()

    @property
    def source_id(self) -> int:
        return int(self.params.get("source_id", self.attributes.get("source_id")))

    @property
    def collection_path(self) -> str:
        prefix = "/community" if self.source_type in ("post", "topic") else "/help_center"
        return f"{prefix}/{self.source_type}s/{self.source_id}/subscriptions"


class CreateHelpCenterSubscription(SubscriptionRequestMixin, CreateRequest):
    accepted_attributes = ("user_id", "source_type", "source_id", "locale", "include_comments")
    defaults = {"locale": "en-us", "include_comments": False}

    def prepare(self, attributes: dict[str, Any]) -> dict[str, Any]:
        if self.source_type not in SUBSCRIPTION_SOURCES:
            self.invalid("source_type", f"Source type: {self.source_type} is not supported")
        if self.source_type == "post":
            self.find("help_center_posts", self.source_id)

        user_id = attributes.setdefault("user_id", current_user_id(self))
        if user_id is not None:
            self.find("users", user_id)

        for subscription in self.store["help_center_subscriptions"].values():
            if (subscription["user_id"], subscription["source_type"], subscription["source_id"]) == \
                    (user_id, self.source_type.capitalize(), self.source_id):
                self.invalid("user_id", "User has already subscribed", error="DuplicateValue")

        attributes["source_type"] = self.source_type.capitalize()
        attributes["source_id"] = self.source_id
        return attributes


class GetHelpCenterSubscription(SubscriptionRequestMixin, GetRequest):
    pass


class DestroyHelpCenterSubscription(SubscriptionRequestMixin, DestroyRequest):
    pass


class GetHelpCenterUserSubscriptions(SubscriptionRequestMixin, ListRequest):
    collection_root = "subscriptions"

    @property
    def attributes(self) -> dict[str, Any]:
        return {}

    def path(self) -> str:
        return f"/help_center/users/{self.params['user_id']}/subscriptions.json"

    def select(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        user_id = int(self.params["user_id"])
        self.find("users", user_id)
        return [record for record in records if record["user_id"] == user_id]
