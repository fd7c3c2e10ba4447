import json

import typer

from rich.console import Console

from jejak.analytics import ViewQuery, describe_duration, classify, view
from jejak.core import Workspace

from jejak_cli.formatter import ActivityFormatter


def list_activities(
    ctx: typer.Context,
    search: str = typer.Option("", "--search", "-s", help="Case-insensitive match on title or category."),
    category: str = typer.Option("all", "--category", "-c", help="Exact category, or 'all'."),
    status: str = typer.Option("all", "--status", help="all, active, completed or scheduled."),
    sort: str = typer.Option("newest", "--sort", help="newest, oldest, duration or alphabetical."),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON."),
):
    """List activities, optionally searched, filtered and sorted."""
    ws: Workspace = ctx.obj
    try:
        view_query = ViewQuery(search_term=search, category=category, status=status, sort_by=sort)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    activities, now = ws.snapshot()
    matches = view(activities, view_query, now)

    if json_output:
        rows = []
        for activity in matches:
            row = activity.to_dict()
            row["status"] = classify(activity, now).label
            row["duration_minutes"] = describe_duration(activity, now).minutes
            rows.append(row)
        typer.echo(json.dumps(rows, indent=2))
        return

    if not activities:
        typer.echo("No activities yet. Start one with 'jejak start'.")
        return
    if not matches:
        typer.echo("No activities found. Try adjusting your search terms or filters.")
        return

    if view_query.has_active_filters:
        typer.echo(f"Filtered activities ({len(matches)} of {len(activities)})")
    else:
        typer.echo(f"All activities ({len(activities)})")
    Console().print(ActivityFormatter.activity_table(matches, now))
