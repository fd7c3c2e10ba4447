import json

from dataclasses import asdict

import typer

from rich.console import Console

from jejak.analytics import goal_progress, summarize
from jejak.core import Workspace

from jejak_cli.formatter import ActivityFormatter


def stats(
    ctx: typer.Context,
    top: int = typer.Option(None, "--top", help="How many categories to show. Defaults to the configured value."),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON."),
):
    """Show activity statistics, top categories and weekly goal progress."""
    ws: Workspace = ctx.obj
    activities, now = ws.snapshot()
    summary = summarize(activities, now)
    progress = goal_progress(summary, ws.config.weekly_activities_goal, ws.config.weekly_hours_goal)
    limit = top if top is not None else ws.config.top_categories

    if json_output:
        payload = asdict(summary)
        payload["top_categories"] = [asdict(share) for share in summary.top_categories(limit)]
        payload["goals"] = asdict(progress)
        typer.echo(json.dumps(payload, indent=2))
        return

    console = Console()
    console.print(ActivityFormatter.summary_table(summary))
    if summary.category_breakdown:
        console.print(ActivityFormatter.category_table(summary, limit))
    console.print(ActivityFormatter.goal_table(progress))
