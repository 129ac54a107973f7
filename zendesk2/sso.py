"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Single sign-on URL builders.

Zendesk supports two ways of signing a user in from another application:
remote authentication, where the query carries an MD5 hash of the user's
name, email, the shared token and a timestamp, and JWT, where a signed token
carries the same identity. Both helpers are pure functions over the account
URL and caller-supplied credentials.
"""

import hashlib
import time
import uuid
from typing import Any
from urllib.parse import urlencode, urlsplit, urlunsplit

import jwt

from zendesk2.exceptions import ZendeskValidationError

JWT_ALGORITHM = "HS256"


def remote_auth_hash(name: str, email: str, token: str, timestamp: int | str) -> str:
    """MD5 hex digest of name, email, token and timestamp concatenated."""
    return hashlib.md5(f"{name}{email}{token}{timestamp}".encode("utf-8")).hexdigest()


def _build_url(account_url: str, path: str, query: dict[str, Any]) -> str:
    parts = urlsplit(account_url)
    encoded = urlencode(sorted((key, str(value)) for key, value in query.items()))
    return urlunsplit((parts.scheme, parts.netloc, path, encoded, ""))


def remote_login_url(
    account_url: str,
    name: str,
    email: str,
    token: str | None,
    timestamp: int | str | None,
    return_to: str | None = None,
) -> str:
    """
    Build a remote authentication login URL.

    Args:
        account_url: Zendesk account URL
        name: Name of the user signing in
        email: Email of the user signing in
        token: Shared remote authentication token
        timestamp: Time sent with the initial handshake
        return_to: Optional URL to return to after the handshake

    Returns:
        ``{account}/access/remote?email=...&hash=...&name=...&timestamp=...``

    Raises:
        ZendeskValidationError: If the timestamp or token is missing
    """
    if timestamp is None or timestamp == "":
        raise ZendeskValidationError("timestamp cannot be nil")
    if not token:
        raise ZendeskValidationError("remote authentication requires a token")

    query = {
        "name": name,
        "email": email,
        "timestamp": timestamp,
        "hash": remote_auth_hash(name, email, token, timestamp),
    }
    if return_to:
        query["return_to"] = return_to

    return _build_url(account_url, "/access/remote", query)


def jwt_payload(name: str, email: str, issued_at: int | None = None) -> dict[str, Any]:
    """Claims for a JWT login: issue time, a unique token id, name and email."""
    iat = int(time.time()) if issued_at is None else issued_at
    return {
        "iat": iat,
        "jti": f"{iat}/{uuid.uuid4().hex}",
        "name": name,
        "email": email,
    }


def jwt_login_url(
    account_url: str,
    name: str,
    email: str,
    jwt_token: str | None,
    return_to: str | None = None,
    issued_at: int | None = None,
) -> str:
    """
    Build a JWT single sign-on URL.

    Args:
        account_url: Zendesk account URL
        name: Name of the user signing in
        email: Email of the user signing in
        jwt_token: Shared secret the payload is signed with
        return_to: Optional URL to return to after initial auth
        issued_at: Issue time in epoch seconds, defaults to now

    Returns:
        ``{account}/access/jwt?jwt=...``

    Raises:
        ZendeskValidationError: If the shared secret is missing
    """
    if not jwt_token:
        raise ZendeskValidationError("JWT login requires a jwt_token")

    token = jwt.encode(jwt_payload(name, email, issued_at), jwt_token, algorithm=JWT_ALGORITHM)
    query = {"jwt": token}
    if return_to:
        query["return_to"] = return_to

    return _build_url(account_url, "/access/jwt", query)


def decode_jwt(token: str, jwt_token: str) -> dict[str, Any]:
    """Verify and decode a JWT login token."""
    return jwt.decode(token, jwt_token, algorithms=[JWT_ALGORITHM])
