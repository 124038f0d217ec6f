"""Per-domain bindings of the generic resource client."""
from typing import Any, Mapping, Optional

from interview_tracker.models import (
    AspNetCoreTopic, AttemptRequest, AzureTopic, CSharpTopic, DesignPatternTopic,
    DSAProblem, EntityFrameworkTopic, MockInterview, OOPTopic, ReviewRequest,
    SqlServerTopic, StudySession, SystemDesignTopic, WeakArea,
)
from interview_tracker.resources import (
    CatalogClient, ResourceClient, TopicCatalogClient, parse_record, parse_records,
)
from interview_tracker.transport import Transport

TOPIC_FILTERS = ("category", "status")


class DSAClient(CatalogClient[DSAProblem]):
    def __init__(self, transport: Transport):
        super().__init__(transport, DSAProblem, "dsa", ("category", "difficulty", "status", "favorite"))

    async def record_attempt(self, item_id: int, attempt: AttemptRequest) -> DSAProblem:
        """Log a solve attempt; the backend bumps the count and reschedules review."""
        op = self._op("record_attempt")
        data = await self.transport.post(
            self._path(item_id, "attempt"),
            attempt.model_dump(by_alias=True, mode="json"),
            operation=op,
        )
        return parse_record(DSAProblem, data, op)

    async def needs_review(self) -> list[DSAProblem]:
        op = self._op("needs_review")
        data = await self.transport.get(self._path("needs-review"), operation=op)
        return parse_records(DSAProblem, data, op)

    async def favorites(self) -> list[DSAProblem]:
        op = self._op("favorites")
        data = await self.transport.get(self._path("favorites"), operation=op)
        return parse_records(DSAProblem, data, op)


class SystemDesignClient(CatalogClient[SystemDesignTopic]):
    def __init__(self, transport: Transport):
        super().__init__(transport, SystemDesignTopic, "systemdesign", TOPIC_FILTERS + ("favorite",))

    async def record_review(self, item_id: int, review: ReviewRequest) -> SystemDesignTopic:
        op = self._op("record_review")
        data = await self.transport.post(
            self._path(item_id, "review"),
            review.model_dump(by_alias=True, mode="json"),
            operation=op,
        )
        return parse_record(SystemDesignTopic, data, op)

    async def favorites(self) -> list[SystemDesignTopic]:
        op = self._op("favorites")
        data = await self.transport.get(self._path("favorites"), operation=op)
        return parse_records(SystemDesignTopic, data, op)


class WeakAreaClient(ResourceClient[WeakArea]):
    def __init__(self, transport: Transport):
        super().__init__(transport, WeakArea, "weakarea", ("resolved",))

    async def resolve(self, item_id: int) -> WeakArea:
        """Mark an area resolved; the backend stamps the resolution time."""
        op = self._op("resolve")
        data = await self.transport.post(self._path(item_id, "resolve"), operation=op)
        return parse_record(WeakArea, data, op)

    async def list(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        *,
        resolved: Optional[bool] = None,
    ) -> list[WeakArea]:
        filters = dict(filters or {})
        if resolved is not None:
            filters["resolved"] = resolved
        return await super().list(filters)


def topic_catalog(transport: Transport, model, segment: str) -> TopicCatalogClient:
    return TopicCatalogClient(transport, model, segment, TOPIC_FILTERS)


def azure(transport: Transport) -> TopicCatalogClient[AzureTopic]:
    return topic_catalog(transport, AzureTopic, "azure")


def oop(transport: Transport) -> TopicCatalogClient[OOPTopic]:
    return topic_catalog(transport, OOPTopic, "oop")


def csharp(transport: Transport) -> TopicCatalogClient[CSharpTopic]:
    return topic_catalog(transport, CSharpTopic, "csharp")


def aspnetcore(transport: Transport) -> TopicCatalogClient[AspNetCoreTopic]:
    return topic_catalog(transport, AspNetCoreTopic, "aspnetcore")


def sqlserver(transport: Transport) -> TopicCatalogClient[SqlServerTopic]:
    return topic_catalog(transport, SqlServerTopic, "sqlserver")


def designpattern(transport: Transport) -> TopicCatalogClient[DesignPatternTopic]:
    return topic_catalog(transport, DesignPatternTopic, "designpattern")


def entityframework(transport: Transport) -> TopicCatalogClient[EntityFrameworkTopic]:
    return topic_catalog(transport, EntityFrameworkTopic, "entityframework")


def interviews(transport: Transport) -> ResourceClient[MockInterview]:
    return ResourceClient(transport, MockInterview, "interview", ("type", "company"))


def study_sessions(transport: Transport) -> ResourceClient[StudySession]:
    return ResourceClient(transport, StudySession, "studysession", ("type", "from", "to"))
