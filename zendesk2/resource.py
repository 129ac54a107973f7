"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Base classes for Zendesk resource models and their collections.

A resource is a pydantic model: its fields are the typed attributes of the
API record, coerced from API JSON on the way in. Persistence goes through
request classes named on the model (``create_request``, ``update_request``
and so on), so the same model code works against the live API and the mock
store.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, PrivateAttr

from zendesk2.core.logging import get_logger
from zendesk2.exceptions import (
    MissingAttributesError,
    ZendeskError,
    ZendeskNotFoundError,
    ZendeskValidationError,
)
from zendesk2.request import Request

if TYPE_CHECKING:
    from zendesk2.client import ZendeskClient

logger = get_logger("zendesk2.resource")

M = TypeVar("M", bound="Resource")


def association(id_field: str, collection: str, doc: str | None = None) -> property:
    """
    Build a read-only accessor resolving ``id_field`` to a related model.

    The related record is fetched through ``client.<collection>()`` each time
    the property is read; ``None`` is returned when the id is unset or the
    record no longer exists.
    """

    def resolve(self: "Resource") -> "Resource | None":
        related_id = getattr(self, id_field)
        if related_id is None:
            return None
        return getattr(self.client, collection)().get(related_id)

    return property(resolve, doc=doc or f"Related record referenced by ``{id_field}``")


class Resource(BaseModel):
    """A Zendesk API record bound to the client that loaded it."""

    model_config = ConfigDict(extra="ignore")

    root: ClassVar[str]
    required_on_create: ClassVar[tuple[str, ...]] = ()
    create_request: ClassVar[type[Request] | None] = None
    get_request: ClassVar[type[Request] | None] = None
    update_request: ClassVar[type[Request] | None] = None
    destroy_request: ClassVar[type[Request] | None] = None
    collection_name: ClassVar[str]

    id: int | None = None
    url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    _client: Any = PrivateAttr(default=None)

    def bind(self: M, client: "ZendeskClient") -> M:
        """Attach the client used for every request this model makes."""
        self._client = client
        return self

    @property
    def client(self) -> "ZendeskClient":
        if self._client is None:
            raise ZendeskError(f"{type(self).__name__} is not bound to a client")
        return self._client

    @property
    def identity(self) -> int | None:
        return self.id

    def is_new_record(self) -> bool:
        return self.identity is None

    def requires(self, *names: str) -> None:
        """Raise MissingAttributesError listing every blank attribute in ``names``."""
        missing = []
        for name in names:
            value = self.identity if name == "identity" else getattr(self, name)
            if value is None or value == "":
                missing.append(name)
        if missing:
            raise MissingAttributesError(type(self).__name__, missing)

    def attributes(self) -> dict[str, Any]:
        """Set attributes as JSON-ready values."""
        return self.model_dump(mode="json", exclude_none=True)

    def scope_params(self) -> dict[str, Any]:
        """Parent ids needed to address this record, for nested resources."""
        return {}

    def merge_attributes(self: M, data: dict[str, Any] | None) -> M:
        """Overwrite local fields with the given API record fields."""
        if not data:
            return self
        validated = type(self).model_validate(data)
        for name in type(self).model_fields:
            if name in data:
                setattr(self, name, getattr(validated, name))
        return self

    def save(self: M) -> M:
        """Create the record when new, otherwise update it; merge the server's record."""
        if self.is_new_record():
            self.requires(*self.required_on_create)
            request_class = self.create_request
            params = {self.root: self.attributes(), **self.scope_params()}
        else:
            self.requires("identity")
            request_class = self.update_request
            params = {"id": self.identity, self.root: self.attributes(), **self.scope_params()}

        if request_class is None:
            raise ZendeskError(f"{type(self).__name__} does not support save")

        response = self.client.request(request_class, params)
        return self.merge_attributes(response.body[self.root])

    def destroy(self: M) -> M:
        """Delete the record and merge whatever the server returns."""
        self.requires("identity")
        if self.destroy_request is None:
            raise ZendeskError(f"{type(self).__name__} does not support destroy")

        params = {"id": self.identity, self.root: {"id": self.identity}, **self.scope_params()}
        response = self.client.request(self.destroy_request, params)
        if response.body:
            self.merge_attributes(response.body.get(self.root))
        logger.debug(f"Destroyed {type(self).__name__} {self.identity}")
        return self

    def reload(self: M) -> M | None:
        """Re-fetch the record; ``None`` when it no longer exists."""
        self.requires("identity")
        fresh = getattr(self.client, self.collection_name)().get(self.identity, **self.scope_params())
        if fresh is None:
            return None
        return self.merge_attributes(fresh.model_dump())

    def is_destroyed(self) -> bool:
        """True when the record can no longer be reloaded or is inactive."""
        if self.reload() is None:
            return True
        return getattr(self, "active", True) is False


class Collection(Generic[M]):
    """
    A query over one resource type, optionally scoped by filters.

    ``scoped_requests`` maps a filter name (``requester_id``) to the list
    request serving that scope; unscoped queries use ``list_request``.
    """

    model: ClassVar[type[Resource]]
    list_request: ClassVar[type[Request] | None] = None
    scoped_requests: ClassVar[dict[str, type[Request]]] = {}

    def __init__(self, client: "ZendeskClient", **filters: Any):
        self.client = client
        self.filters = {key: value for key, value in filters.items() if value is not None}
        self.count: int | None = None
        self.next_page: str | None = None
        self.previous_page: str | None = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.filters}>"

    def __iter__(self):
        return iter(self.all())

    def _list_request(self) -> type[Request]:
        for key, request_class in self.scoped_requests.items():
            if key in self.filters:
                return request_class
        if self.list_request is None:
            scopes = ", ".join(self.scoped_requests)
            raise ZendeskValidationError(f"{type(self).__name__} must be scoped by one of: {scopes}")
        return self.list_request

    def all(self, **params: Any) -> list[M]:
        """Fetch one page of records; ``page``/``per_page`` select the window."""
        request_class = self._list_request()
        response = self.client.request(request_class, {**self.filters, **params})
        body = response.body or {}

        self.count = body.get("count")
        self.next_page = body.get("next_page")
        self.previous_page = body.get("previous_page")

        return [self.new(**record) for record in body.get(request_class.collection_root, [])]

    def get(self, identity: Any, **scope: Any) -> M | None:
        """Fetch one record by identity; ``None`` when it does not exist."""
        params = {**self.filters, **scope, "id": identity}
        try:
            response = self.client.request(self.model.get_request, params)
        except ZendeskNotFoundError:
            logger.debug(f"{self.model.__name__} {identity} not found")
            return None
        return self.new(**response.body[self.model.root])

    def new(self, **attributes: Any) -> M:
        """Build an unsaved model bound to this collection's client."""
        attributes = {**self.filters, **attributes}
        model = self.model.model_validate(attributes)
        return model.bind(self.client)

    def create(self, **attributes: Any) -> M:
        return self.new(**attributes).save()
