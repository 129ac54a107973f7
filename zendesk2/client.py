"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Zendesk API session.

``ZendeskClient`` carries the account URL and credentials, performs HTTP
calls with ``requests`` and, in mock mode, owns the ``MockStore`` that request
objects read and write. Every API operation is available as a method named
after it (``create_user``, ``get_tickets``) taking the request parameters and
returning a ``Response``; collections of models are available as
``client.users()``, ``client.tickets(requester_id=...)`` and so on.
"""

import json
import logging
import time
from typing import Any

import requests

from zendesk2 import models
from zendesk2 import operations as ops
from zendesk2.core.config import ZendeskConfig
from zendesk2.core.logging import get_logger
from zendesk2.exceptions import error_for_status
from zendesk2.mock_store import MockStore
from zendesk2.request import Request, Response

logger = get_logger("zendesk2.client")

SENSITIVE_FIELDS = ("token", "api_token", "jwt_token", "password", "secret", "authorization")


class ZendeskClient:
    """Client for the Zendesk support API, live or mocked."""

    def __init__(
        self,
        config: ZendeskConfig | None = None,
        store: MockStore | None = None,
        **settings: Any,
    ):
        """Initialize the client.

        Args:
            config: Session configuration; built from ``settings`` when omitted
            store: Mock store to share with other clients; a new one is created
                   in mock mode when omitted
            **settings: ZendeskConfig fields (url, username, token, mock, ...)
        """
        self.config = config or ZendeskConfig(**settings)
        self.store: MockStore | None = None

        if self.config.mock:
            self.store = store or MockStore()
            self._seed_session_user()

        logger.debug(
            f"ZendeskClient initialized for {self.config.url} "
            f"({'mock' if self.mock else 'live'} mode)"
        )

    def __repr__(self) -> str:
        return f"<ZendeskClient {self.url} mock={self.mock}>"

    @property
    def url(self) -> str:
        return self.config.url

    @property
    def username(self) -> str:
        return self.config.username

    @property
    def token(self) -> str | None:
        return self.config.token

    @property
    def jwt_token(self) -> str | None:
        return self.config.jwt_token

    @property
    def mock(self) -> bool:
        return self.config.mock

    @property
    def auth(self) -> tuple[str, str]:
        if self.token:
            return (f"{self.username}/token", self.token)
        return (self.username, self.config.password or "")

    def reset(self) -> None:
        """Empty the mock store, keeping the session user."""
        if self.store is not None:
            self.store.reset()
            self._seed_session_user()

    def _seed_session_user(self) -> None:
        for user in self.store["users"].values():
            if user.get("email") == self.username:
                return

        identity = self.store.serial_id()
        now = time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
        self.store["users"][identity] = {
            "id": identity,
            "url": f"{self.url}/api/v2/users/{identity}.json",
            "created_at": now,
            "updated_at": now,
            "name": "Mock Agent",
            "email": self.username,
            "role": "admin",
            "active": True,
            "verified": True,
            "tags": [],
            "user_fields": {},
        }

    def request(self, request_class: type[Request], params: dict[str, Any] | None = None) -> Response:
        """Build and call a request object."""
        return request_class(self, params).call()

    def perform(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> Response:
        """Make one HTTP request to the Zendesk API.

        Args:
            method: HTTP method
            path: API path below /api/v2
            params: Query parameters
            json_data: JSON request body

        Returns:
            The response with its parsed JSON body

        Raises:
            ZendeskApiError: For 4xx/5xx responses
            requests.RequestException: For transport failures
        """
        url = f"{self.url}/api/v2{path}"
        request_id = f"{method}_{path.replace('/', '_')}_{int(time.time() * 1000)}"

        logger.debug(f"API Request [{request_id}]: {method} {url}")
        if params:
            logger.debug(f"Parameters [{request_id}]: {params}")
        if json_data and logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Request Body [{request_id}]: {json.dumps(self._mask_sensitive_data(json_data))}")

        start_time = time.time()
        try:
            response = requests.request(
                method=method,
                url=url,
                params=params,
                json=json_data,
                auth=self.auth,
                headers={"Accept": "application/json"},
                timeout=self.config.timeout,
            )
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Connection Error [{request_id}]: Could not connect to {url}: {e}")
            raise
        except requests.exceptions.Timeout as e:
            logger.error(f"Timeout Error [{request_id}]: Request to {url} timed out: {e}")
            raise
        except requests.exceptions.RequestException as e:
            logger.error(f"Request Error [{request_id}]: {e}")
            raise

        duration = time.time() - start_time
        logger.debug(
            f"Response [{request_id}] received in {duration:.2f}s - Status: {response.status_code}"
        )

        body = None
        if response.content:
            try:
                body = response.json()
            except ValueError as e:
                logger.error(f"JSON Parsing Error [{request_id}]: {e}")
                logger.error(f"Response Text [{request_id}]: {response.text[:500]}")
                if response.status_code < 400:
                    raise ValueError(f"Could not parse JSON response: {e}") from e
                body = response.text

        if response.status_code >= 400:
            logger.error(f"HTTP Error [{request_id}]: {response.status_code} {body}")
            raise error_for_status(response.status_code, body)

        return Response(status=response.status_code, body=body, headers=dict(response.headers))

    def _mask_sensitive_data(self, data: Any) -> Any:
        """Mask sensitive fields in data before logging."""
        if not isinstance(data, dict):
            return data

        result = {}
        for key, value in data.items():
            if key.lower() in SENSITIVE_FIELDS:
                result[key] = "********"
            else:
                result[key] = self._mask_sensitive_data(value)
        return result

    # Collections

    def users(self, **filters: Any) -> models.Users:
        return models.Users(self, **filters)

    def current_user(self) -> models.User:
        return self.users().current()

    def categories(self, **filters: Any) -> models.Categories:
        return models.Categories(self, **filters)

    def organizations(self, **filters: Any) -> models.Organizations:
        return models.Organizations(self, **filters)

    def tickets(self, **filters: Any) -> models.Tickets:
        return models.Tickets(self, **filters)

    def memberships(self, **filters: Any) -> models.Memberships:
        return models.Memberships(self, **filters)

    def user_identities(self, **filters: Any) -> models.UserIdentities:
        return models.UserIdentities(self, **filters)

    def help_center_posts(self, **filters: Any) -> models.HelpCenterPosts:
        return models.HelpCenterPosts(self, **filters)

    def help_center_subscriptions(self, **filters: Any) -> models.HelpCenterSubscriptions:
        return models.HelpCenterSubscriptions(self, **filters)

    # Users

    def create_user(self, params: dict[str, Any]) -> Response:
        return self.request(ops.CreateUser, params)

    def get_user(self, params: dict[str, Any]) -> Response:
        return self.request(ops.GetUser, params)

    def get_current_user(self, params: dict[str, Any] | None = None) -> Response:
        return self.request(ops.GetCurrentUser, params)

    def update_user(self, params: dict[str, Any]) -> Response:
        return self.request(ops.UpdateUser, params)

    def destroy_user(self, params: dict[str, Any]) -> Response:
        return self.request(ops.DestroyUser, params)

    def get_users(self, params: dict[str, Any] | None = None) -> Response:
        return self.request(ops.GetUsers, params)

    def get_organization_users(self, params: dict[str, Any]) -> Response:
        return self.request(ops.GetOrganizationUsers, params)

    # Categories

    def create_category(self, params: dict[str, Any]) -> Response:
        return self.request(ops.CreateCategory, params)

    def get_category(self, params: dict[str, Any]) -> Response:
        return self.request(ops.GetCategory, params)

    def update_category(self, params: dict[str, Any]) -> Response:
        return self.request(ops.UpdateCategory, params)

    def destroy_category(self, params: dict[str, Any]) -> Response:
        return self.request(ops.DestroyCategory, params)

    def get_categories(self, params: dict[str, Any] | None = None) -> Response:
        return self.request(ops.GetCategories, params)

    # Organizations

    def create_organization(self, params: dict[str, Any]) -> Response:
        return self.request(ops.CreateOrganization, params)

    def get_organization(self, params: dict[str, Any]) -> Response:
        return self.request(ops.GetOrganization, params)

    def update_organization(self, params: dict[str, Any]) -> Response:
        return self.request(ops.UpdateOrganization, params)

    def destroy_organization(self, params: dict[str, Any]) -> Response:
        return self.request(ops.DestroyOrganization, params)

    def get_organizations(self, params: dict[str, Any] | None = None) -> Response:
        return self.request(ops.GetOrganizations, params)

    def get_user_organizations(self, params: dict[str, Any]) -> Response:
        return self.request(ops.GetUserOrganizations, params)

    # Tickets

    def create_ticket(self, params: dict[str, Any]) -> Response:
        return self.request(ops.CreateTicket, params)

    def get_ticket(self, params: dict[str, Any]) -> Response:
        return self.request(ops.GetTicket, params)

    def update_ticket(self, params: dict[str, Any]) -> Response:
        return self.request(ops.UpdateTicket, params)

    def destroy_ticket(self, params: dict[str, Any]) -> Response:
        return self.request(ops.DestroyTicket, params)

    def get_tickets(self, params: dict[str, Any] | None = None) -> Response:
        return self.request(ops.GetTickets, params)

    def get_requested_tickets(self, params: dict[str, Any]) -> Response:
        return self.request(ops.GetRequestedTickets, params)

    def get_ccd_tickets(self, params: dict[str, Any]) -> Response:
        return self.request(ops.GetCCDTickets, params)

    def get_organization_tickets(self, params: dict[str, Any]) -> Response:
        return self.request(ops.GetOrganizationTickets, params)

    # Organization memberships

    def create_membership(self, params: dict[str, Any]) -> Response:
        return self.request(ops.CreateMembership, params)

    def get_membership(self, params: dict[str, Any]) -> Response:
        return self.request(ops.GetMembership, params)

    def destroy_membership(self, params: dict[str, Any]) -> Response:
        return self.request(ops.DestroyMembership, params)

    def get_memberships(self, params: dict[str, Any] | None = None) -> Response:
        return self.request(ops.GetMemberships, params)

    def get_user_memberships(self, params: dict[str, Any]) -> Response:
        return self.request(ops.GetUserMemberships, params)

    def get_organization_memberships(self, params: dict[str, Any]) -> Response:
        return self.request(ops.GetOrganizationMemberships, params)

    # User identities

    def create_user_identity(self, params: dict[str, Any]) -> Response:
        return self.request(ops.CreateUserIdentity, params)

    def get_user_identity(self, params: dict[str, Any]) -> Response:
        return self.request(ops.GetUserIdentity, params)

    def update_user_identity(self, params: dict[str, Any]) -> Response:
        return self.request(ops.UpdateUserIdentity, params)

    def destroy_user_identity(self, params: dict[str, Any]) -> Response:
        return self.request(ops.DestroyUserIdentity, params)

    def get_user_identities(self, params: dict[str, Any]) -> Response:
        return self.request(ops.GetUserIdentities, params)

    # Help Center

    def create_help_center_post(self, params: dict[str, Any]) -> Response:
        return self.request(ops.CreateHelpCenterPost, params)

    def get_help_center_post(self, params: dict[str, Any]) -> Response:
        return self.request(ops.GetHelpCenterPost, params)

    def update_help_center_post(self, params: dict[str, Any]) -> Response:
        return self.request(ops.UpdateHelpCenterPost, params)

    def destroy_help_center_post(self, params: dict[str, Any]) -> Response:
        return self.request(ops.DestroyHelpCenterPost, params)

    def get_help_center_posts(self, params: dict[str, Any] | None = None) -> Response:
        return self.request(ops.GetHelpCenterPosts, params)

    def get_help_center_user_posts(self, params: dict[str, Any]) -> Response:
        return self.request(ops.GetHelpCenterUserPosts, params)

    def create_help_center_subscription(self, params: dict[str, Any]) -> Response:
        return self.request(ops.CreateHelpCenterSubscription, params)

    def get_help_center_subscription(self, params: dict[str, Any]) -> Response:
        return self.request(ops.GetHelpCenterSubscription, params)

    def destroy_help_center_subscription(self, params: dict[str, Any]) -> Response:
        return self.request(ops.DestroyHelpCenterSubscription, params)

    def get_help_center_user_subscriptions(self, params: dict[str, Any]) -> Response:
        return self.request(ops.GetHelpCenterUserSubscriptions, params)
