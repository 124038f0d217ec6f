import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest
import pytest_asyncio

from interview_tracker.client import Tracker

BASE_URL = "http://tracker.test/api"

TOPIC_SEGMENTS = (
    "systemdesign", "azure", "oop", "csharp", "aspnetcore",
    "sqlserver", "designpattern", "entityframework",
)
NAME_FIELDS = {
    "dsa": "title", "interview": "type", "weakarea": "area", "studysession": "topic",
    **{s: "title" for s in TOPIC_SEGMENTS},
}
REVIEW_INTERVALS = [1, 3, 7, 14, 30]
QUERY_FIELDS = {"resolved": "isResolved", "favorite": "isFavorite"}
# Non-nullable DateTime columns on the real API; a JSON null fails model binding.
SERVER_STAMPED = ("createdAt", "identifiedAt")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _json(status: int, payload=None) -> httpx.Response:
    if payload is None:
        return httpx.Response(status)
    return httpx.Response(status, json=payload)


class FakeBackend:
    """In-memory stand-in for the tracker API, served through httpx.MockTransport."""

    def __init__(self):
        self.tables: dict[str, dict[int, dict]] = {seg: {} for seg in NAME_FIELDS}
        self.next_id = 1
        self.requests: list[httpx.Request] = []
        self.failures: dict[str, int] = {}
        self.stats = {
            "totalDSAProblems": 0, "solvedDSAProblems": 0, "totalSystemDesignTopics": 0,
            "masteredTopics": 0, "totalMockInterviews": 0, "passedInterviews": 0,
            "activeWeakAreas": 0, "totalStudyHours": 0, "averageInterviewScore": 0.0,
            "dsaCompletionRate": 0.0, "systemDesignProgress": 0.0,
        }

    def add(self, segment: str, **fields) -> dict:
        item = {"id": self.next_id, "createdAt": _now().isoformat(), **fields}
        if segment == "weakarea":
            item.setdefault("identifiedAt", item["createdAt"])
        self.next_id += 1
        self.tables[segment][item["id"]] = item
        return item

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api/").strip("/")
        if path in self.failures:
            return _json(self.failures[path], {"title": "forced failure"})
        parts = path.split("/")
        if parts[0] == "analytics":
            return self._analytics(parts[1])
        segment, rest = parts[0], parts[1:]
        if segment not in self.tables:
            return _json(404)
        body = json.loads(request.content) if request.content else None
        handler = getattr(self, f"_{request.method.lower()}")
        return handler(segment, rest, request.url.params, body)

    def _get(self, segment, rest, params, body):
        table = self.tables[segment]
        if not rest:
            items = list(table.values())
            for key, value in params.items():
                field = QUERY_FIELDS.get(key, key)
                items = [i for i in items if _as_query(i.get(field)) == value]
            return _json(200, items)
        if rest[0] == "needs-review":
            now = _now().isoformat()
            due = [i for i in table.values() if i.get("nextReviewDate") and i["nextReviewDate"] <= now]
            return _json(200, due)
        if rest[0] == "favorites":
            return _json(200, [i for i in table.values() if i.get("isFavorite")])
        if rest[0] == "categories":
            return _json(200, sorted({i["category"] for i in table.values()}))
        item = table.get(int(rest[0]))
        return _json(200, item) if item else _json(404)

    def _post(self, segment, rest, params, body):
        table = self.tables[segment]
        if not rest:
            if _null_stamps(body):
                return _null_stamp_error(body)
            if body.get("id") is not None:
                return _json(400, {"errors": {"id": ["must not be set"]}})
            if not body.get(NAME_FIELDS[segment]):
                return _json(400, {"errors": {NAME_FIELDS[segment]: ["required"]}})
            item = self.add(segment, **{k: v for k, v in body.items() if k not in ("id", "createdAt")})
            return _json(201, item)
        if rest[0] == "seed":
            return self._seed(segment)
        item = table.get(int(rest[0]))
        if item is None:
            return _json(404)
        action = rest[1]
        if action == "favorite":
            item["isFavorite"] = not item.get("isFavorite", False)
        elif action == "attempt":
            item["attemptCount"] = item.get("attemptCount", 0) + 1
            item["lastAttemptedAt"] = _now().isoformat()
            item["timeTakenMinutes"] = body["timeTakenMinutes"]
            item["solvedOptimally"] = body["solvedOptimally"]
            item["status"] = body["status"]
            if body.get("notes"):
                item["notes"] = body["notes"]
            days = REVIEW_INTERVALS[min(item["attemptCount"] - 1, len(REVIEW_INTERVALS) - 1)]
            if not body["solvedOptimally"]:
                days = max(1, days // 2)
            item["nextReviewDate"] = (_now() + timedelta(days=days)).isoformat()
        elif action == "review":
            item["lastReviewedAt"] = _now().isoformat()
            item["confidenceLevel"] = body["confidenceLevel"]
            item["status"] = body["status"]
            if body.get("notes"):
                item["notes"] = body["notes"]
        elif action == "resolve":
            item["isResolved"] = True
            item["resolvedAt"] = _now().isoformat()
        else:
            return _json(404)
        return _json(200, item)

    def _put(self, segment, rest, params, body):
        item_id = int(rest[0])
        if body.get("id") != item_id:
            return _json(400)
        if _null_stamps(body):
            return _null_stamp_error(body)
        if item_id not in self.tables[segment]:
            return _json(404)
        self.tables[segment][item_id] = body
        return _json(204)

    def _delete(self, segment, rest, params, body):
        table = self.tables[segment]
        if rest[0] == "clear":
            if segment not in TOPIC_SEGMENTS or segment == "systemdesign":
                return _json(404)
            count = len(table)
            table.clear()
            return _json(200, {"message": f"Cleared {count} topics"})
        if table.pop(int(rest[0]), None) is None:
            return _json(404)
        return _json(204)

    def _seed(self, segment):
        table = self.tables[segment]
        if segment == "dsa":
            if table:
                return httpx.Response(400, text="Data already exists. Clear the database first.")
            self.add("dsa", title="Two Sum", category="Arrays", difficulty="Easy", tags=[], isFavorite=False)
            self.add("dsa", title="LRU Cache", category="Design", difficulty="Medium", tags=[], isFavorite=False)
            return _json(200, {"message": "Seeded 2 DSA problems"})
        table.clear()
        self.add(segment, title="Basics", category="Fundamentals", difficulty="Easy", tags=[], isFavorite=False)
        return _json(200, {"message": f"Seeded 1 {segment} topics with detailed lessons"})

    def _analytics(self, name):
        if name == "dashboard":
            return _json(200, self.stats)
        if name == "dsa":
            return _json(200, {
                "problemsByCategory": {"Arrays": 2},
                "categoryPerformance": [{
                    "category": "Arrays", "totalProblems": 2, "solved": 1,
                    "successRate": 50.0, "averageTime": 12.5, "strengthLevel": "Average",
                }],
                "needsReview": [],
                "averageTimePerProblem": 12.5,
                "optimalSolutionRate": 50.0,
            })
        if name == "interviews":
            return _json(200, {
                "averageScoresByType": {"DSA": 6.5},
                "scoreTrends": [{"date": "2024-05-01T00:00:00", "score": 6.5, "type": "DSA"}],
                "overallPassRate": 50.0,
                "averageCommunicationScore": 6.0,
                "averageProblemSolvingScore": 7.5,
                "averageTechnicalScore": 8.0,
                "commonWeaknesses": ["Communication"],
            })
        if name == "weak-areas":
            return _json(200, {
                "activeWeakAreas": [{"area": "Graphs", "category": "DSA", "severity": "High", "daysIdentified": 4}],
                "weakAreasByCategory": {"DSA": 1},
                "resolvedThisMonth": 2,
                "recommendedFocusAreas": ["Graphs"],
            })
        if name == "system-design":
            return _json(200, {
                "topicsByCategory": {"Caching": 3},
                "topicsByStatus": {"Mastered": 1},
                "topicProgress": [{"category": "Caching", "total": 3, "mastered": 1, "progress": 66.7}],
                "averageConfidence": 3.3,
            })
        if name == "study":
            return _json(200, {
                "totalHoursThisWeek": 5, "totalHoursThisMonth": 21,
                "hoursByType": {"DSA": 12},
                "dailyStudyData": [{"date": "2024-05-01T00:00:00", "minutes": 90, "type": "DSA"}],
                "averageProductivity": 7.2,
            })
        return _json(404)


def _null_stamps(body) -> list[str]:
    return [k for k in SERVER_STAMPED if k in body and body[k] is None]


def _null_stamp_error(body) -> httpx.Response:
    return _json(400, {"errors": {k: ["The JSON value could not be converted."] for k in _null_stamps(body)}})


def _as_query(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return "" if value is None else str(value)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest_asyncio.fixture
async def tracker(backend):
    async with Tracker(BASE_URL, transport=httpx.MockTransport(backend)) as t:
        yield t


@pytest.fixture
def two_sum():
    from interview_tracker.models import DSAProblem
    return DSAProblem(title="Two Sum", category="Arrays", difficulty="Easy", status="NotStarted", platform="LeetCode")
