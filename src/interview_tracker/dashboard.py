"""Summary dashboard: three independent reads rendered region by region."""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from interview_tracker.client import Tracker
from interview_tracker.errors import TrackerError
from interview_tracker.models import DashboardStats

logger = logging.getLogger(__name__)

LOADING = "loading"
READY = "ready"
ERROR = "error"

LIST_LIMIT = 5
BAR_CELLS = 20


def bar_width(value: Optional[float]) -> float:
    """Backend percentages are already 0-100; clamp for drawing."""
    if not value:
        return 0.0
    return max(0.0, min(100.0, float(value)))


def format_score(value: Optional[float]) -> str:
    return f"{(value or 0):.1f}"


def top(items: list, limit: int = LIST_LIMIT) -> list:
    return list(items[:limit])


def get_progress_color(pct: float) -> str:
    if pct >= 80:
        return "green"
    elif pct >= 50:
        return "yellow"
    elif pct >= 25:
        return "dark_orange"
    return "red"


def get_severity_color(severity: str) -> str:
    return {"High": "red", "Medium": "yellow", "Low": "green"}.get(severity, "white")


def draw_bar(pct: float) -> str:
    width = bar_width(pct)
    filled = int(width / (100 / BAR_CELLS))
    color = get_progress_color(width)
    return f"[{color}]{'█' * filled}{'░' * (BAR_CELLS - filled)}[/{color}]"


@dataclass
class Region:
    """One independently loaded part of the dashboard."""

    name: str
    data: Any = None
    status: str = LOADING
    error: Optional[TrackerError] = None


@dataclass
class DashboardView:
    tracker: Tracker
    stats: Region = field(default_factory=lambda: Region("stats"))
    needs_review: Region = field(default_factory=lambda: Region("needs_review", data=[]))
    weak_areas: Region = field(default_factory=lambda: Region("weak_areas", data=[]))

    @property
    def regions(self) -> list[Region]:
        return [self.stats, self.needs_review, self.weak_areas]

    async def _fill(self, region: Region, fetch: Awaitable[Any]) -> None:
        try:
            region.data = await fetch
        except TrackerError as e:
            logger.warning("Dashboard region %s failed: %s", region.name, e)
            region.status = ERROR
            region.error = e
            return
        region.status = READY

    async def load(self) -> None:
        """Start all three reads at once; each region settles on its own."""
        for region in self.regions:
            region.status = LOADING
            region.error = None
        await asyncio.gather(
            self._fill(self.stats, self.tracker.analytics.dashboard()),
            self._fill(self.needs_review, self.tracker.dsa.needs_review()),
            self._fill(self.weak_areas, self.tracker.weak_areas.list(resolved=False)),
        )

    def render(self, console: Console) -> None:
        console.print(Panel("[bold]Interview Prep Dashboard[/bold]", border_style="blue"))
        self._render_stats(console)
        self._render_needs_review(console)
        self._render_weak_areas(console)

    @staticmethod
    def _unavailable(console: Console, region: Region, title: str) -> bool:
        if region.status == LOADING:
            console.print(f"  [dim]{title}: loading...[/dim]")
            return True
        if region.status == ERROR:
            console.print(f"  [red]{title} unavailable: {region.error}[/red]")
            return True
        return False

    def _render_stats(self, console: Console) -> None:
        if self._unavailable(console, self.stats, "Statistics"):
            return
        s: DashboardStats = self.stats.data
        console.print(
            f"\n  DSA Problems:   [bold]{s.solved_dsa_problems}/{s.total_dsa_problems}[/bold] solved  "
            f"{draw_bar(s.dsa_completion_rate)} {bar_width(s.dsa_completion_rate):.0f}%"
        )
        console.print(
            f"  System Design:  [bold]{s.mastered_topics}/{s.total_system_design_topics}[/bold] mastered "
            f"{draw_bar(s.system_design_progress)} {bar_width(s.system_design_progress):.0f}%"
        )
        console.print(
            f"  Mock Interviews: [bold]{s.passed_interviews}/{s.total_mock_interviews}[/bold] passed  |  "
            f"Avg Score: [bold]{format_score(s.average_interview_score)}/10[/bold]"
        )
        console.print(
            f"  Weak Areas: [bold]{s.active_weak_areas}[/bold] active  |  "
            f"[bold]{s.total_study_hours}[/bold] hours studied\n"
        )

    def _render_needs_review(self, console: Console) -> None:
        if self._unavailable(console, self.needs_review, "Needs review"):
            return
        if not self.needs_review.data:
            console.print("  [green]No problems due for review.[/green]")
            return
        table = Table(title="Needs Review")
        table.add_column("#", justify="right")
        table.add_column("Problem", style="cyan")
        table.add_column("Category")
        table.add_column("Difficulty")
        for p in top(self.needs_review.data):
            table.add_row(str(p.id), p.title, p.category, p.difficulty)
        console.print(table)

    def _render_weak_areas(self, console: Console) -> None:
        if self._unavailable(console, self.weak_areas, "Weak areas"):
            return
        if not self.weak_areas.data:
            console.print("  [green]No active weak areas.[/green]")
            return
        table = Table(title="Active Weak Areas")
        table.add_column("#", justify="right")
        table.add_column("Area", style="cyan")
        table.add_column("Category")
        table.add_column("Severity")
        for w in top(self.weak_areas.data):
            color = get_severity_color(w.severity)
            table.add_row(str(w.id), w.area, w.category, f"[{color}]{w.severity}[/{color}]")
        console.print(table)


async def load_dashboard(tracker: Tracker) -> DashboardView:
    view = DashboardView(tracker)
    await view.load()
    return view
