"""Typed records exchanged with the tracker API.

JSON uses the backend's camelCase names; attributes are snake_case and
either spelling is accepted on construction.
"""
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class TrackedItem(Record):
    """Anything the backend persists and identifies by a server-assigned id."""

    id: Optional[int] = None
    created_at: Optional[str] = None

    # Stamped by the backend; sent only once it has assigned them.
    server_stamped: ClassVar[tuple[str, ...]] = ("created_at",)

    def to_payload(self, include_id: bool = True) -> dict[str, Any]:
        exclude = {name for name in self.server_stamped if getattr(self, name) is None}
        if not include_id:
            exclude.add("id")
        return self.model_dump(by_alias=True, mode="json", exclude=exclude)


class DSAProblem(TrackedItem):
    title: str
    category: str
    difficulty: str
    platform: str = ""
    problem_url: Optional[str] = None
    status: str = "NotStarted"
    time_taken_minutes: int = 0
    solved_optimally: bool = False
    notes: Optional[str] = None
    solution_approach: Optional[str] = None
    time_complexity: Optional[str] = None
    space_complexity: Optional[str] = None
    attempt_count: int = 0
    last_attempted_at: Optional[str] = None
    next_review_date: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    is_favorite: bool = False
    leet_code_number: Optional[int] = None


class Topic(TrackedItem):
    """Shared shape of every study-topic catalog."""

    title: str
    category: str
    difficulty: str = ""
    status: str = "NotStarted"
    confidence_level: int = 0
    notes: Optional[str] = None
    key_concepts: Optional[str] = None
    resources: Optional[str] = None
    last_reviewed_at: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    is_favorite: bool = False


class SystemDesignTopic(Topic):
    pass


class AzureTopic(Topic):
    lesson: Optional[str] = None
    code_example: Optional[str] = None
    azure_service: Optional[str] = None


class OOPTopic(Topic):
    lesson: Optional[str] = None
    code_example: Optional[str] = None


class CSharpTopic(Topic):
    lesson: Optional[str] = None
    code_example: Optional[str] = None
    dot_net_version: Optional[str] = None


class AspNetCoreTopic(Topic):
    lesson: Optional[str] = None
    code_example: Optional[str] = None


class SqlServerTopic(Topic):
    lesson: Optional[str] = None
    sql_example: Optional[str] = None


class DesignPatternTopic(Topic):
    lesson: Optional[str] = None
    code_example: Optional[str] = None
    use_cases: Optional[str] = None


class EntityFrameworkTopic(Topic):
    lesson: Optional[str] = None
    code_example: Optional[str] = None
    problem_scenario: Optional[str] = None
    ef_version: Optional[str] = None


class MockInterview(TrackedItem):
    type: str
    company: str = ""
    interview_date: str
    duration_minutes: int = 0
    overall_score: int = 0
    communication_score: int = 0
    problem_solving_score: int = 0
    technical_score: int = 0
    feedback: Optional[str] = None
    strengths: Optional[str] = None
    areas_to_improve: Optional[str] = None
    questions_asked: Optional[str] = None
    passed: bool = False


class WeakArea(TrackedItem):
    server_stamped: ClassVar[tuple[str, ...]] = ("created_at", "identified_at")

    area: str
    category: str
    severity: str = "Medium"
    description: Optional[str] = None
    improvement_plan: Optional[str] = None
    is_resolved: bool = False
    identified_at: Optional[str] = None
    resolved_at: Optional[str] = None


class StudySession(TrackedItem):
    type: str
    topic: str
    duration_minutes: int = 0
    productivity_score: int = 0
    notes: Optional[str] = None
    session_date: str


# Action payloads

class AttemptRequest(Record):
    time_taken_minutes: int
    solved_optimally: bool
    status: str = "Solved"
    notes: Optional[str] = None


class ReviewRequest(Record):
    confidence_level: int
    status: str
    notes: Optional[str] = None


class SeedResult(Record):
    message: str


# Analytics (computed by the backend, read-only here)

class DashboardStats(Record):
    total_dsa_problems: int = Field(0, alias="totalDSAProblems")
    solved_dsa_problems: int = Field(0, alias="solvedDSAProblems")
    total_system_design_topics: int = 0
    mastered_topics: int = 0
    total_mock_interviews: int = 0
    passed_interviews: int = 0
    active_weak_areas: int = 0
    total_study_hours: int = 0
    average_interview_score: float = 0.0
    dsa_completion_rate: float = 0.0
    system_design_progress: float = 0.0


class CategoryPerformance(Record):
    category: str
    total_problems: int = 0
    solved: int = 0
    success_rate: float = 0.0
    average_time: float = 0.0
    strength_level: str = ""


class ReviewDue(Record):
    id: int
    title: str
    category: str
    next_review_date: Optional[str] = None


class DSAAnalytics(Record):
    problems_by_category: dict[str, int] = Field(default_factory=dict)
    problems_by_difficulty: dict[str, int] = Field(default_factory=dict)
    problems_by_status: dict[str, int] = Field(default_factory=dict)
    category_performance: list[CategoryPerformance] = Field(default_factory=list)
    needs_review: list[ReviewDue] = Field(default_factory=list)
    average_time_per_problem: float = 0.0
    optimal_solution_rate: float = 0.0


class TopicProgress(Record):
    category: str
    total: int = 0
    mastered: int = 0
    progress: float = 0.0


class SystemDesignAnalytics(Record):
    topics_by_category: dict[str, int] = Field(default_factory=dict)
    topics_by_status: dict[str, int] = Field(default_factory=dict)
    topic_progress: list[TopicProgress] = Field(default_factory=list)
    average_confidence: float = 0.0


class ScoreTrend(Record):
    date: str
    score: float
    type: str


class InterviewAnalytics(Record):
    average_scores_by_type: dict[str, float] = Field(default_factory=dict)
    score_trends: list[ScoreTrend] = Field(default_factory=list)
    overall_pass_rate: float = 0.0
    average_communication_score: float = 0.0
    average_problem_solving_score: float = 0.0
    average_technical_score: float = 0.0
    common_weaknesses: list[str] = Field(default_factory=list)


class WeakAreaSummary(Record):
    area: str
    category: str
    severity: str
    days_identified: int = 0


class WeakAreaAnalytics(Record):
    active_weak_areas: list[WeakAreaSummary] = Field(default_factory=list)
    weak_areas_by_category: dict[str, int] = Field(default_factory=dict)
    resolved_this_month: int = 0
    recommended_focus_areas: list[str] = Field(default_factory=list)


class DailyStudy(Record):
    date: str
    minutes: int = 0
    type: str = ""


class StudyAnalytics(Record):
    total_hours_this_week: int = 0
    total_hours_this_month: int = 0
    hours_by_type: dict[str, int] = Field(default_factory=dict)
    daily_study_data: list[DailyStudy] = Field(default_factory=list)
    average_productivity: float = 0.0
