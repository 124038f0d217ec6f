"""One object exposing every domain client over a shared transport."""
from typing import Optional

import httpx

from interview_tracker import domains
from interview_tracker.analytics import AnalyticsClient
from interview_tracker.config import Settings, get_settings
from interview_tracker.resources import CatalogClient
from interview_tracker.transport import Transport

# Attribute names of the topic catalogs, in menu order.
CATALOGS = (
    "dsa", "system_design", "azure", "oop", "csharp",
    "aspnetcore", "sqlserver", "designpattern", "entityframework",
)


class Tracker:
    """Entry point to the tracker API.

    Use as an async context manager so the connection pool is released:

        async with Tracker() as tracker:
            problems = await tracker.dsa.list({"category": "Arrays"})
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if base_url is None:
            base_url = (settings or get_settings()).base_url
        self.transport = Transport(base_url, transport=transport)
        self.dsa = domains.DSAClient(self.transport)
        self.system_design = domains.SystemDesignClient(self.transport)
        self.azure = domains.azure(self.transport)
        self.oop = domains.oop(self.transport)
        self.csharp = domains.csharp(self.transport)
        self.aspnetcore = domains.aspnetcore(self.transport)
        self.sqlserver = domains.sqlserver(self.transport)
        self.designpattern = domains.designpattern(self.transport)
        self.entityframework = domains.entityframework(self.transport)
        self.interviews = domains.interviews(self.transport)
        self.weak_areas = domains.WeakAreaClient(self.transport)
        self.study_sessions = domains.study_sessions(self.transport)
        self.analytics = AnalyticsClient(self.transport)

    async def __aenter__(self) -> "Tracker":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.transport.aclose()

    def catalog(self, name: str) -> CatalogClient:
        if name not in CATALOGS:
            raise KeyError(f"Unknown catalog: {name}")
        return getattr(self, name)
