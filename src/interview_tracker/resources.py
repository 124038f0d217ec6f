"""Generic client for one tracked-item domain.

A domain is bound by its record type, its path segment under the API root
and the filter names its list endpoint understands. Nothing is cached:
every read goes back to the backend.
"""
import logging
from typing import Any, Generic, Mapping, Optional, TypeVar

import pydantic

from interview_tracker.errors import TransportError
from interview_tracker.models import Record, SeedResult, TrackedItem
from interview_tracker.transport import Transport

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=TrackedItem)
R = TypeVar("R", bound=Record)


def parse_record(model: type[R], data: Any, operation: str) -> R:
    """Validate one JSON object into model, reporting bad shapes as TransportError."""
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise TransportError(operation, f"unexpected response shape: {e}", body=data) from e


def parse_records(model: type[R], data: Any, operation: str) -> list[R]:
    if not isinstance(data, list):
        raise TransportError(operation, "expected a JSON array", body=data)
    return [parse_record(model, item, operation) for item in data]


class ResourceClient(Generic[T]):
    """List, fetch, create, replace and delete records of one domain."""

    def __init__(
        self,
        transport: Transport,
        model: type[T],
        segment: str,
        filters: tuple[str, ...] = (),
    ):
        self.transport = transport
        self.model = model
        self.segment = segment
        self.filters = filters

    def _path(self, *parts: Any) -> str:
        return "/".join([self.segment, *(str(p) for p in parts)])

    def _op(self, action: str) -> str:
        return f"{self.segment}.{action}"

    async def list(self, filters: Optional[Mapping[str, Any]] = None) -> list[T]:
        """Return the backend's records matching every given filter, in backend order."""
        filters = dict(filters or {})
        unknown = set(filters) - set(self.filters)
        if unknown:
            raise ValueError(
                f"{self.segment} cannot be filtered by {', '.join(sorted(unknown))}; "
                f"known filters: {', '.join(self.filters) or 'none'}"
            )
        op = self._op("list")
        data = await self.transport.get(self.segment, filters, operation=op)
        return parse_records(self.model, data, op)

    async def get(self, item_id: int) -> T:
        op = self._op("get")
        data = await self.transport.get(self._path(item_id), operation=op)
        return parse_record(self.model, data, op)

    async def create(self, item: T) -> T:
        """Persist a new record; the returned copy carries the backend's id."""
        if item.id is not None:
            raise ValueError(f"{self.segment} item already has id {item.id}; use update()")
        op = self._op("create")
        data = await self.transport.post(
            self.segment, item.to_payload(include_id=False), operation=op
        )
        created = parse_record(self.model, data, op)
        logger.info("Created %s #%s", self.segment, created.id)
        return created

    async def update(self, item_id: int, item: T) -> None:
        """Replace the stored record wholesale; omitted fields are not kept."""
        payload = item.model_copy(update={"id": item_id}).to_payload()
        await self.transport.put(self._path(item_id), payload, operation=self._op("update"))

    async def remove(self, item_id: int) -> None:
        await self.transport.delete(self._path(item_id), operation=self._op("remove"))


class CatalogClient(ResourceClient[T]):
    """A resource with favorites, seeding and category listing."""

    async def toggle_favorite(self, item_id: int) -> T:
        op = self._op("toggle_favorite")
        data = await self.transport.post(self._path(item_id, "favorite"), operation=op)
        return parse_record(self.model, data, op)

    async def seed(self) -> SeedResult:
        """Ask the backend to populate its default content for this catalog."""
        op = self._op("seed")
        data = await self.transport.post(self._path("seed"), operation=op)
        result = parse_record(SeedResult, data, op)
        logger.info("Seeded %s: %s", self.segment, result.message)
        return result

    async def categories(self) -> list[str]:
        op = self._op("categories")
        data = await self.transport.get(self._path("categories"), operation=op)
        if not isinstance(data, list):
            raise TransportError(op, "expected a JSON array", body=data)
        return [str(c) for c in data]


class TopicCatalogClient(CatalogClient[T]):
    """A study-topic catalog, which can also be emptied in one call."""

    async def clear(self) -> SeedResult:
        op = self._op("clear")
        data = await self.transport.delete(self._path("clear"), operation=op)
        result = parse_record(SeedResult, data, op)
        logger.info("Cleared %s: %s", self.segment, result.message)
        return result
