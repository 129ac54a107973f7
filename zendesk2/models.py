"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""Zendesk resource models and their collections."""

from datetime import datetime
from typing import Any

from zendesk2 import operations as ops
from zendesk2 import sso
from zendesk2.exceptions import SelfDestructionError
from zendesk2.resource import Collection, Resource, association


class Category(Resource):
    """Represents a forum category."""

    root = "category"
    collection_name = "categories"
    required_on_create = ("name",)
    create_request = ops.CreateCategory
    get_request = ops.GetCategory
    update_request = ops.UpdateCategory
    destroy_request = ops.DestroyCategory

    name: str | None = None
    description: str | None = None
    position: int | None = None


class Organization(Resource):
    """Represents an organization end-users and agents belong to."""

    root = "organization"
    collection_name = "organizations"
    required_on_create = ("name",)
    create_request = ops.CreateOrganization
    get_request = ops.GetOrganization
    update_request = ops.UpdateOrganization
    destroy_request = ops.DestroyOrganization

    name: str | None = None
    external_id: str | None = None
    details: str | None = None
    notes: str | None = None
    domain_names: list[str] | None = None
    group_id: int | None = None
    shared_tickets: bool | None = None
    shared_comments: bool | None = None
    tags: list[str] | None = None
    organization_fields: dict[str, Any] | None = None

    def users(self) -> "Users":
        """Users that are members of this organization."""
        self.requires("identity")
        return self.client.users(organization_id=self.identity)

    def tickets(self) -> "Tickets":
        self.requires("identity")
        return self.client.tickets(organization_id=self.identity)

    def memberships(self) -> "Memberships":
        self.requires("identity")
        return self.client.memberships(organization_id=self.identity)


class User(Resource):
    """Represents an end-user, agent or admin."""

    root = "user"
    collection_name = "users"
    required_on_create = ("name", "email")
    create_request = ops.CreateUser
    get_request = ops.GetUser
    update_request = ops.UpdateUser
    destroy_request = ops.DestroyUser

    # Users that have been deleted will have the value false here
    active: bool | None = None
    alias: str | None = None
    custom_role_id: int | None = None
    details: str | None = None
    email: str | None = None
    external_id: str | None = None
    identities: list[Any] | None = None
    last_login_at: datetime | None = None
    locale_id: int | None = None
    moderator: bool | None = None
    name: str | None = None
    notes: str | None = None
    only_private_comments: bool | None = None
    organization_id: int | None = None
    phone: str | None = None
    photo: dict[str, Any] | None = None
    role: str | None = None
    shared: bool | None = None
    signature: str | None = None
    suspended: bool | None = None
    tags: list[str] | None = None
    ticket_restriction: str | None = None
    time_zone: str | None = None
    user_fields: dict[str, Any] | None = None
    verified: bool | None = None

    organization = association("organization_id", "organizations", doc="The user's default organization")

    def destroy(self) -> "User":
        self.requires("identity")
        if self.email and self.email == self.client.username:
            raise SelfDestructionError("don't nuke yourself")
        return super().destroy()

    def login_url(
        self,
        timestamp: int | str | None,
        return_to: str | None = None,
        token: str | None = None,
    ) -> str:
        """
        Build the remote authentication login URL for this user.

        Using this requires the user-defined handshake endpoint described by
        Zendesk's remote authentication documentation.

        Args:
            timestamp: Time sent with the initial handshake
            return_to: URL to return to after the handshake
            token: Shared secret used when the session has no token

        Returns:
            The remote authentication login URL
        """
        self.requires("name", "email")
        return sso.remote_login_url(
            self.client.url,
            name=self.name,
            email=self.email,
            token=self.client.token or token,
            timestamp=timestamp,
            return_to=return_to,
        )

    def jwt_login_url(self, return_to: str | None = None, jwt_token: str | None = None) -> str:
        """
        Build the JWT single sign-on URL to redirect this user's browser to.

        Args:
            return_to: URL to return to after initial auth
            jwt_token: Shared secret used when the session has no JWT token

        Returns:
            The JWT login URL
        """
        self.requires("name", "email")
        return sso.jwt_login_url(
            self.client.url,
            name=self.name,
            email=self.email,
            jwt_token=self.client.jwt_token or jwt_token,
            return_to=return_to,
        )

    def tickets(self) -> "Tickets":
        """Tickets this user requested."""
        self.requires("identity")
        return self.client.tickets(requester_id=self.identity)

    requested_tickets = tickets

    def ccd_tickets(self) -> "Tickets":
        """Tickets this user is CC'd on."""
        self.requires("identity")
        return self.client.tickets(collaborator_id=self.identity)

    def user_identities(self) -> "UserIdentities":
        self.requires("identity")
        return self.client.user_identities(user_id=self.identity)

    def memberships(self) -> "Memberships":
        self.requires("identity")
        return self.client.memberships(user_id=self.identity)

    def organizations(self) -> "Organizations":
        """Organizations of this user through memberships."""
        self.requires("identity")
        return self.client.organizations(user_id=self.identity)

    def subscriptions(self) -> "HelpCenterSubscriptions":
        self.requires("identity")
        return self.client.help_center_subscriptions(user_id=self.identity)

    def posts(self) -> "HelpCenterPosts":
        """Community posts this user authored."""
        self.requires("identity")
        return self.client.help_center_posts(user_id=self.identity)


class UserIdentity(Resource):
    """Represents an email address, phone number or social account of a user."""

    root = "identity"
    collection_name = "user_identities"
    required_on_create = ("user_id", "type", "value")
    create_request = ops.CreateUserIdentity
    get_request = ops.GetUserIdentity
    update_request = ops.UpdateUserIdentity
    destroy_request = ops.DestroyUserIdentity

    user_id: int | None = None
    type: str | None = None
    value: str | None = None
    verified: bool | None = None
    primary: bool | None = None

    user = association("user_id", "users")

    def scope_params(self) -> dict[str, Any]:
        return {"user_id": self.user_id}


class Membership(Resource):
    """Represents a user's membership in an organization."""

    root = "organization_membership"
    collection_name = "memberships"
    required_on_create = ("user_id", "organization_id")
    create_request = ops.CreateMembership
    get_request = ops.GetMembership
    destroy_request = ops.DestroyMembership

    user_id: int | None = None
    organization_id: int | None = None
    default: bool | None = None

    user = association("user_id", "users")
    organization = association("organization_id", "organizations")


class Ticket(Resource):
    """Represents a support ticket."""

    root = "ticket"
    collection_name = "tickets"
    required_on_create = ("subject", "description")
    create_request = ops.CreateTicket
    get_request = ops.GetTicket
    update_request = ops.UpdateTicket
    destroy_request = ops.DestroyTicket

    external_id: str | None = None
    type: str | None = None
    subject: str | None = None
    description: str | None = None
    priority: str | None = None
    status: str | None = None
    recipient: str | None = None
    requester_id: int | None = None
    submitter_id: int | None = None
    assignee_id: int | None = None
    organization_id: int | None = None
    group_id: int | None = None
    collaborator_ids: list[int] | None = None
    problem_id: int | None = None
    due_at: datetime | None = None
    tags: list[str] | None = None
    via: dict[str, Any] | None = None
    custom_fields: list[Any] | None = None
    # Only used on create: {"name": ..., "email": ...} of a possibly new requester
    requester: dict[str, Any] | None = None

    requester_user = association("requester_id", "users", doc="The user who requested this ticket")
    submitter = association("submitter_id", "users")
    assignee = association("assignee_id", "users")
    organization = association("organization_id", "organizations")

    def collaborators(self) -> list[User]:
        users = self.client.users()
        return [user for user in (users.get(user_id) for user_id in self.collaborator_ids or []) if user]


class HelpCenterPost(Resource):
    """Represents a Help Center community post."""

    root = "post"
    collection_name = "help_center_posts"
    required_on_create = ("title", "details", "topic_id")
    create_request = ops.CreateHelpCenterPost
    get_request = ops.GetHelpCenterPost
    update_request = ops.UpdateHelpCenterPost
    destroy_request = ops.DestroyHelpCenterPost

    title: str | None = None
    details: str | None = None
    author_id: int | None = None
    topic_id: int | None = None
    pinned: bool | None = None
    featured: bool | None = None
    closed: bool | None = None
    status: str | None = None
    vote_sum: int | None = None
    vote_count: int | None = None
    comment_count: int | None = None
    follower_count: int | None = None
    html_url: str | None = None

    author = association("author_id", "users")


class HelpCenterSubscription(Resource):
    """Represents a user's subscription to Help Center content."""

    root = "subscription"
    collection_name = "help_center_subscriptions"
    required_on_create = ("source_type", "source_id")
    create_request = ops.CreateHelpCenterSubscription
    get_request = ops.GetHelpCenterSubscription
    destroy_request = ops.DestroyHelpCenterSubscription

    user_id: int | None = None
    source_type: str | None = None
    source_id: int | None = None
    locale: str | None = None
    include_comments: bool | None = None

    user = association("user_id", "users")

    def scope_params(self) -> dict[str, Any]:
        return {"source_type": self.source_type, "source_id": self.source_id}


class Categories(Collection[Category]):
    model = Category
    list_request = ops.GetCategories


class Organizations(Collection[Organization]):
    model = Organization
    list_request = ops.GetOrganizations
    scoped_requests = {"user_id": ops.GetUserOrganizations}


class Users(Collection[User]):
    model = User
    list_request = ops.GetUsers
    scoped_requests = {"organization_id": ops.GetOrganizationUsers}

    def current(self) -> User:
        """The user the session acts as."""
        response = self.client.request(ops.GetCurrentUser)
        return self.new(**response.body["user"])


class UserIdentities(Collection[UserIdentity]):
    model = UserIdentity
    scoped_requests = {"user_id": ops.GetUserIdentities}


class Memberships(Collection[Membership]):
    model = Membership
    list_request = ops.GetMemberships
    scoped_requests = {
        "user_id": ops.GetUserMemberships,
        "organization_id": ops.GetOrganizationMemberships,
    }


class Tickets(Collection[Ticket]):
    model = Ticket
    list_request = ops.GetTickets
    scoped_requests = {
        "requester_id": ops.GetRequestedTickets,
        "collaborator_id": ops.GetCCDTickets,
        "organization_id": ops.GetOrganizationTickets,
    }


class HelpCenterPosts(Collection[HelpCenterPost]):
    model = HelpCenterPost
    list_request = ops.GetHelpCenterPosts
    scoped_requests = {"user_id": ops.GetHelpCenterUserPosts}


class HelpCenterSubscriptions(Collection[HelpCenterSubscription]):
    model = HelpCenterSubscription
    scoped_requests = {"user_id": ops.GetHelpCenterUserSubscriptions}
