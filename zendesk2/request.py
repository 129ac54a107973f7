"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Request objects for Zendesk API operations.

Each API operation is a ``Request`` subclass that declares its HTTP method,
its path, the body it sends and the attributes callers may set. Calling a
request either performs the HTTP call through the client or, in mock mode,
runs the subclass's ``mock`` method against the client's ``MockStore``.
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, ClassVar

from zendesk2.core.logging import get_logger
from zendesk2.exceptions import error_for_status

if TYPE_CHECKING:
    from zendesk2.client import ZendeskClient
    from zendesk2.mock_store import MockStore

logger = get_logger("zendesk2.request")

DEFAULT_PER_PAGE = 100


@dataclass
class Response:
    """HTTP status, parsed body and headers of an API call."""

    status: int
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status < 400

    def raise_for_status(self) -> "Response":
        """Raise the matching ZendeskApiError for an error status."""
        if not self.ok:
            raise error_for_status(self.status, self.body)
        return self


class Request:
    """
    Base class for a single Zendesk API operation.

    Subclasses set ``method`` and ``accepted_attributes`` and override
    ``path``, ``body``/``query`` and ``mock``.
    """

    method: ClassVar[str] = "GET"
    accepted_attributes: ClassVar[tuple[str, ...]] = ()

    def __init__(self, client: "ZendeskClient", params: dict[str, Any] | None = None):
        self.client = client
        self.params = copy.deepcopy(params) if params else {}
        self._timestamp: str | None = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.method} {self.path()}>"

    def path(self) -> str:
        raise NotImplementedError(f"{type(self).__name__} must define a path")

    def body(self) -> dict[str, Any] | None:
        return None

    def query(self) -> dict[str, Any] | None:
        page_params = {key: self.params[key] for key in ("page", "per_page") if key in self.params}
        return page_params or None

    def call(self) -> Response:
        """Perform the request, against the mock store when mocking."""
        if self.client.mock:
            logger.debug(f"Mock {self.method} {self.path()}")
            return self.mock()
        return self.client.perform(self.method, self.path(), params=self.query(), json_data=self.body())

    def mock(self) -> Response:
        raise NotImplementedError(f"{type(self).__name__} has no mock implementation")

    # Helpers for mock implementations

    @property
    def store(self) -> "MockStore":
        return self.client.store

    @property
    def timestamp(self) -> str:
        """One ISO-8601 UTC timestamp per request."""
        if self._timestamp is None:
            self._timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        return self._timestamp

    def serial_id(self) -> int:
        return self.store.serial_id()

    def url_for(self, path: str) -> str:
        return f"{self.client.url}/api/v2{path}"

    def slice(self, attributes: dict[str, Any] | None) -> dict[str, Any]:
        """Keep only the caller attributes this request accepts."""
        attributes = attributes or {}
        dropped = sorted(set(attributes) - set(self.accepted_attributes))
        if dropped:
            logger.debug(f"{type(self).__name__} ignoring unaccepted attributes: {dropped}")
        return {
            key: copy.deepcopy(value)
            for key, value in attributes.items()
            if key in self.accepted_attributes
        }

    def find(self, collection: str, identity: Any) -> dict[str, Any]:
        """Fetch a stored record or raise a 404 error."""
        record = self.store[collection].get(self._coerce_identity(identity))
        if record is None:
            self.error(
                404,
                "RecordNotFound",
                "Not found",
            )
        return record

    def page(self, collection: str, records: list[dict[str, Any]]) -> dict[str, Any]:
        """Build a list envelope honouring ``page`` and ``per_page``."""
        page = max(int(self.params.get("page", 1)), 1)
        per_page = max(int(self.params.get("per_page", DEFAULT_PER_PAGE)), 1)
        start = (page - 1) * per_page
        window = records[start:start + per_page]

        path = self.path()
        next_page = self.url_for(f"{path}?page={page + 1}&per_page={per_page}") \
            if start + per_page < len(records) else None
        previous_page = self.url_for(f"{path}?page={page - 1}&per_page={per_page}") \
            if page > 1 else None

        return {
            collection: [copy.deepcopy(record) for record in window],
            "count": len(records),
            "next_page": next_page,
            "previous_page": previous_page,
        }

    def mock_response(self, body: Any = None, status: int = 200) -> Response:
        """Wrap a mock body; statuses of 400 and above raise."""
        response = Response(status=status, body=copy.deepcopy(body))
        return response.raise_for_status()

    def error(self, status: int, error: str, description: str, details: dict[str, Any] | None = None) -> None:
        """Raise an API error shaped like Zendesk's error bodies."""
        body: dict[str, Any] = {"error": error, "description": description}
        if details:
            body["details"] = details
        logger.debug(f"Mock {self.method} {self.path()} failed with {status}: {description}")
        self.mock_response(body, status=status)

    def invalid(self, field_name: str, description: str, error: str = "InvalidValue") -> None:
        """Raise a 422 ``RecordInvalid`` error for one field."""
        self.error(
            422,
            "RecordInvalid",
            "Record validation errors",
            {field_name: [{"description": description, "error": error}]},
        )

    @staticmethod
    def _coerce_identity(identity: Any) -> Any:
        try:
            return int(identity)
        except (TypeError, ValueError):
            return identity


class CreateRequest(Request):
    """
    POST a new record under ``collection_path`` and mock its creation.

    Subclasses name the JSON ``root`` (``"category"``), the store
    ``collection`` and the ``collection_path`` (``"/categories"``);
    ``defaults`` and ``prepare`` customize the mocked record.
    """

    method = "POST"
    root: ClassVar[str]
    collection: ClassVar[str]
    collection_path: ClassVar[str]
    defaults: ClassVar[dict[str, Any]] = {}

    @property
    def attributes(self) -> dict[str, Any]:
        return self.params.get(self.root) or {}

    def path(self) -> str:
        return f"{self.collection_path}.json"

    def body(self) -> dict[str, Any]:
        return {self.root: self.slice(self.attributes)}

    def record_url(self, identity: int) -> str:
        return self.url_for(f"{self.collection_path}/{identity}.json")

    def prepare(self, attributes: dict[str, Any]) -> dict[str, Any]:
        """Validate and complete whitelisted attributes before storing."""
        return attributes

    def after_create(self, record: dict[str, Any]) -> None:
        """Hook for side effects once the record is stored."""

    def mock(self) -> Response:
        attributes = self.prepare(self.slice(self.attributes))
        identity = self.serial_id()

        record = copy.deepcopy(self.defaults)
        record.update(attributes)
        record.update({
            "id": identity,
            "url": self.record_url(identity),
            "created_at": self.timestamp,
            "updated_at": self.timestamp,
        })

        self.store[self.collection][identity] = record
        self.after_create(record)

        return self.mock_response({self.root: record}, status=201)


class MemberRequest(Request):
    """A request addressing one stored record by its id."""

    root: ClassVar[str]
    collection: ClassVar[str]
    collection_path: ClassVar[str]

    @property
    def attributes(self) -> dict[str, Any]:
        return self.params.get(self.root) or {}

    @property
    def identity(self) -> Any:
        identity = self.params.get("id", self.attributes.get("id"))
        return self._coerce_identity(identity)

    def path(self) -> str:
        return f"{self.collection_path}/{self.identity}.json"

    def query(self) -> dict[str, Any] | None:
        return None


class GetRequest(MemberRequest):
    """GET one record."""

    def mock(self) -> Response:
        record = self.find(self.collection, self.identity)
        return self.mock_response({self.root: record})


class UpdateRequest(MemberRequest):
    """PUT whitelisted attributes onto one record."""

    method = "PUT"

    def body(self) -> dict[str, Any]:
        changes = self.slice(self.attributes)
        changes.pop("id", None)
        return {self.root: changes}

    def prepare(self, record: dict[str, Any], attributes: dict[str, Any]) -> dict[str, Any]:
        """Validate whitelisted changes against the stored record."""
        return attributes

    def mock(self) -> Response:
        record = self.find(self.collection, self.identity)
        changes = self.slice(self.attributes)
        changes.pop("id", None)
        changes = self.prepare(record, changes)

        record.update(changes)
        record["updated_at"] = self.timestamp

        return self.mock_response({self.root: record})


class DestroyRequest(MemberRequest):
    """DELETE one record; the default mock removes it and answers 204."""

    method = "DELETE"

    def after_destroy(self, record: dict[str, Any]) -> None:
        """Hook for cascading removals."""

    def mock(self) -> Response:
        record = self.find(self.collection, self.identity)
        del self.store[self.collection][self.identity]
        self.after_destroy(record)
        return self.mock_response(None, status=204)


class ListRequest(Request):
    """GET a collection, optionally scoped by a parent record."""

    collection_root: ClassVar[str]
    collection: ClassVar[str]
    collection_path: ClassVar[str]

    def path(self) -> str:
        return f"{self.collection_path}.json"

    def select(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Filter stored records to this request's scope."""
        return records

    def mock(self) -> Response:
        records = sorted(self.store[self.collection].values(), key=lambda record: record["id"])
        return self.mock_response(self.page(self.collection_root, self.select(records)))
