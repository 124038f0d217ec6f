"""Interactive CLI application."""
import asyncio
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from interview_tracker.client import CATALOGS, Tracker
from interview_tracker.config import get_settings
from interview_tracker.dashboard import format_score, get_severity_color, load_dashboard
from interview_tracker.errors import ConfigurationError, TrackerError
from interview_tracker.models import AttemptRequest
from interview_tracker.seed import seed_all

console = Console()

DSA_STATUSES = ["NotStarted", "InProgress", "Solved", "NeedsReview"]


def show_welcome(base_url: str):
    console.print(Panel(
        f"[bold]Interview Tracker[/bold]\n[dim]{base_url}[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("dashboard", "Progress summary"),
        ("dsa", "Browse DSA problems"),
        ("attempt", "Record a DSA attempt"),
        ("favorite", "Toggle a favorite"),
        ("topics", "Browse a topic catalog"),
        ("weak", "List weak areas"),
        ("resolve", "Resolve a weak area"),
        ("seed", "Load default content"),
        ("analytics", "DSA and interview analytics"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def ask_filter(label: str) -> str:
    return Prompt.ask(f"{label} [dim](blank for any)[/dim]", default="").strip()


def show_items(title: str, items: list, columns: list[tuple[str, str]]) -> None:
    if not items:
        console.print(f"[yellow]No {title.lower()} found.[/yellow]")
        return
    table = Table(title=title)
    table.add_column("#", justify="right")
    for header, _ in columns:
        table.add_column(header)
    for item in items:
        star = " ★" if getattr(item, "is_favorite", False) else ""
        cells = [str(getattr(item, attr) if getattr(item, attr) is not None else "") for _, attr in columns]
        cells[0] += star
        table.add_row(str(item.id), *cells)
    console.print(table)


async def cmd_dashboard(tracker: Tracker):
    view = await load_dashboard(tracker)
    view.render(console)


async def cmd_dsa(tracker: Tracker):
    filters = {
        "category": ask_filter("Category"),
        "difficulty": ask_filter("Difficulty"),
        "status": ask_filter("Status"),
    }
    problems = await tracker.dsa.list(filters)
    show_items("DSA Problems", problems, [
        ("Title", "title"), ("Category", "category"), ("Difficulty", "difficulty"),
        ("Status", "status"), ("Attempts", "attempt_count"), ("Next Review", "next_review_date"),
    ])


async def cmd_attempt(tracker: Tracker):
    problem_id = IntPrompt.ask("Problem #")
    minutes = IntPrompt.ask("Minutes taken")
    optimal = Prompt.ask("Solved optimally?", choices=["y", "n"], default="y") == "y"
    status = Prompt.ask("Status", choices=DSA_STATUSES, default="Solved")
    notes = Prompt.ask("Notes [dim](optional)[/dim]", default="").strip() or None
    problem = await tracker.dsa.record_attempt(
        problem_id,
        AttemptRequest(time_taken_minutes=minutes, solved_optimally=optimal, status=status, notes=notes),
    )
    console.print(
        f"[green]Recorded attempt #{problem.attempt_count} on {problem.title}.[/green] "
        f"Next review: [cyan]{problem.next_review_date or 'not scheduled'}[/cyan]"
    )


async def cmd_favorite(tracker: Tracker):
    name = Prompt.ask("Catalog", choices=list(CATALOGS), default="dsa")
    item_id = IntPrompt.ask("Item #")
    item = await tracker.catalog(name).toggle_favorite(item_id)
    state = "added to" if item.is_favorite else "removed from"
    console.print(f"[green]{item.title} {state} favorites.[/green]")


async def cmd_topics(tracker: Tracker):
    name = Prompt.ask("Catalog", choices=[c for c in CATALOGS if c != "dsa"], default="system_design")
    filters = {"category": ask_filter("Category"), "status": ask_filter("Status")}
    topics = await tracker.catalog(name).list(filters)
    show_items(f"{name.replace('_', ' ').title()} Topics", topics, [
        ("Title", "title"), ("Category", "category"), ("Difficulty", "difficulty"),
        ("Status", "status"), ("Confidence", "confidence_level"),
    ])


async def cmd_weak(tracker: Tracker):
    which = Prompt.ask("Show", choices=["active", "resolved", "all"], default="active")
    resolved = {"active": False, "resolved": True, "all": None}[which]
    areas = await tracker.weak_areas.list(resolved=resolved)
    if not areas:
        console.print("[green]No weak areas to show.[/green]")
        return
    table = Table(title="Weak Areas")
    table.add_column("#", justify="right")
    table.add_column("Area", style="cyan")
    table.add_column("Category")
    table.add_column("Severity")
    table.add_column("Resolved")
    for w in areas:
        color = get_severity_color(w.severity)
        table.add_row(
            str(w.id), w.area, w.category,
            f"[{color}]{w.severity}[/{color}]",
            w.resolved_at or ("yes" if w.is_resolved else ""),
        )
    console.print(table)


async def cmd_resolve(tracker: Tracker):
    area_id = IntPrompt.ask("Weak area #")
    area = await tracker.weak_areas.resolve(area_id)
    console.print(f"[green]Resolved {area.area}[/green] [dim]({area.resolved_at})[/dim]")


async def cmd_seed(tracker: Tracker):
    console.print("[dim]Seeding empty catalogs...[/dim]")
    results = await seed_all(tracker)
    for name, message in results.items():
        console.print(f"  [cyan]{name:<16}[/cyan] {message}")


async def cmd_analytics(tracker: Tracker):
    dsa, interviews = await asyncio.gather(tracker.analytics.dsa(), tracker.analytics.interviews())
    table = Table(title="DSA Category Performance")
    table.add_column("Category", style="cyan")
    table.add_column("Solved", justify="right")
    table.add_column("Success", justify="right")
    table.add_column("Avg Time", justify="right")
    table.add_column("Strength")
    for cp in dsa.category_performance:
        table.add_row(
            cp.category, f"{cp.solved}/{cp.total_problems}",
            f"{format_score(cp.success_rate)}%", f"{format_score(cp.average_time)} min",
            cp.strength_level,
        )
    console.print(table)
    console.print(
        f"\n  Optimal solutions: [bold]{format_score(dsa.optimal_solution_rate)}%[/bold]  |  "
        f"Avg time: [bold]{format_score(dsa.average_time_per_problem)} min[/bold]"
    )
    console.print(
        f"  Interview pass rate: [bold]{format_score(interviews.overall_pass_rate)}%[/bold]  |  "
        f"Communication {format_score(interviews.average_communication_score)}  "
        f"Problem solving {format_score(interviews.average_problem_solving_score)}  "
        f"Technical {format_score(interviews.average_technical_score)}"
    )
    if interviews.common_weaknesses:
        console.print(f"\n  [yellow]Work on: {', '.join(interviews.common_weaknesses)}[/yellow]")


COMMANDS = {
    "dashboard": cmd_dashboard,
    "dsa": cmd_dsa,
    "attempt": cmd_attempt,
    "favorite": cmd_favorite,
    "topics": cmd_topics,
    "weak": cmd_weak,
    "resolve": cmd_resolve,
    "seed": cmd_seed,
    "analytics": cmd_analytics,
}


async def run_command(command, base_url: str) -> None:
    async with Tracker(base_url) as tracker:
        await command(tracker)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def main():
    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        base_url = settings.base_url
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    show_welcome(base_url)

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="dashboard").strip().lower()
        try:
            if choice in ("quit", "exit", "q"):
                console.print("[dim]Good luck with your interviews![/dim]")
                break
            command = COMMANDS.get(choice)
            if command is None:
                console.print("[red]Unknown command. Try again.[/red]")
                continue
            asyncio.run(run_command(command, base_url))
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except TrackerError as e:
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
