"""Read-only aggregate endpoints; all figures are computed by the backend."""
from interview_tracker.models import (
    DashboardStats, DSAAnalytics, InterviewAnalytics, StudyAnalytics,
    SystemDesignAnalytics, WeakAreaAnalytics,
)
from interview_tracker.resources import parse_record
from interview_tracker.transport import Transport


class AnalyticsClient:
    segment = "analytics"

    def __init__(self, transport: Transport):
        self.transport = transport

    async def _fetch(self, name: str, model):
        op = f"{self.segment}.{name.replace('-', '_')}"
        data = await self.transport.get(f"{self.segment}/{name}", operation=op)
        return parse_record(model, data, op)

    async def dashboard(self) -> DashboardStats:
        return await self._fetch("dashboard", DashboardStats)

    async def dsa(self) -> DSAAnalytics:
        return await self._fetch("dsa", DSAAnalytics)

    async def system_design(self) -> SystemDesignAnalytics:
        return await self._fetch("system-design", SystemDesignAnalytics)

    async def interviews(self) -> InterviewAnalytics:
        return await self._fetch("interviews", InterviewAnalytics)

    async def weak_areas(self) -> WeakAreaAnalytics:
        return await self._fetch("weak-areas", WeakAreaAnalytics)

    async def study(self) -> StudyAnalytics:
        return await self._fetch("study", StudyAnalytics)
