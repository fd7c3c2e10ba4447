import typer

from jejak.analytics import classify
from jejak.core import Workspace

from jejak_cli.formatter import ActivityFormatter
from jejak_cli.utils import resolve_natural_datetime


def start(
    ctx: typer.Context,
    title: str = typer.Argument(None, help="What are you doing? Optional with --preset."),
    category: str = typer.Option(None, "--category", "-c", help="Free-text category, e.g. Kerja."),
    at: str = typer.Option(None, "--at", help="Start time (e.g. '14:30', 'tomorrow 9am'). Defaults to now."),
    until: str = typer.Option(None, "--until", help="End time, for activities that are already over or planned."),
    for_minutes: int = typer.Option(None, "--for", help="Start now and end after this many minutes."),
    preset: str = typer.Option(None, "--preset", "-p", help="Fill title, category and length from a configured preset."),
):
    """Record a new activity, running from now unless told otherwise."""
    ws: Workspace = ctx.obj
    try:
        now = ws.now()
        start_at = resolve_natural_datetime(now, at)
        end_at = resolve_natural_datetime(now, until)

        if preset is not None:
            chosen = ws.config.find_preset(preset)
            title = title or chosen.title
            if category is None:
                category = chosen.category
            # Explicit --until or --for beats the preset's length.
            if chosen.minutes is not None and end_at is None and for_minutes is None:
                if start_at is None:
                    for_minutes = chosen.minutes
                else:
                    end_at = start_at.add(minutes=chosen.minutes)

        activity = ws.create_activity(
            title,
            category=category,
            start=start_at,
            end=end_at,
            duration_minutes=for_minutes,
        )
    except (ValueError, LookupError) as e:
        typer.echo(f"Error starting activity: {e}", err=True)
        raise typer.Exit(1)

    status = classify(activity, ws.now())
    typer.echo(
        f"Started '{activity.title}' at {activity.start_time.format('YYYY-MM-DD HH:mm')} "
        f"[{status.label}] ({ActivityFormatter.short_id(activity)})"
    )
