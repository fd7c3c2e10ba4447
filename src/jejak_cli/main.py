import datetime
import logging

import humanize
import typer

from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

import jejak
from jejak.analytics import classify, summarize
from jejak.analytics import categories as used_categories
from jejak.core import Config, FileSystem, TomlSerializer, UNCHANGED, Workspace

from jejak_cli import query, start, stats
from jejak_cli.formatter import ActivityFormatter
from jejak_cli.utils import edit_file, resolve_natural_datetime

cli = typer.Typer(help="Track what you do, and when.")

cli.command(name="start")(start.start)
cli.command(name="list")(query.list_activities)
cli.command(name="stats")(stats.stats)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@cli.callback()
def main(ctx: typer.Context,
         verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging.")):
    configure_logging(verbose)

    # init runs before there is a workspace to load
    if ctx.invoked_subcommand == "init":
        ctx.obj = None
        return

    try:
        ws = Workspace()
    except FileNotFoundError as e:
        typer.echo(f"Error: {e} Run 'jejak init' first.", err=True)
        raise typer.Exit(1)
    ctx.obj = ws
    ctx.call_on_close(ws.close)


@cli.command()
def init(target_dir_str: str = typer.Argument(".", help="Directory to initialise."),
         timezone: str = typer.Option(None, "--timezone", help="IANA timezone, defaults to the local one."),
         force: bool = typer.Option(False, "--force", help="Allow init inside a parent jejak directory.")):
    """
    cli: jejak init
    Initialise a jejak directory.
    """
    target_dir = Path(target_dir_str)
    if not target_dir.exists():
        typer.echo(f"Target directory {target_dir} does not exist.")
        raise typer.Exit(1)

    try:
        config = Config.from_dict({"workspace": {"timezone": timezone}} if timezone else {})
        jejak_dir = FileSystem.initialise_repo(target_dir, TomlSerializer.serialize(config), force)
    except (FileExistsError, ValueError) as e:
        typer.echo(f"Failed to initialise: {e}")
        raise typer.Exit(1)
    typer.echo(f"Initialized jejak at {jejak_dir}.")


@cli.command()
def config(ctx: typer.Context):
    """
    cli: jejak config
    Edit the configuration in your preferred editor.
    """
    ws: Workspace = ctx.obj
    if edit_file(ws.fs.CONFIG_PATH):
        typer.echo("Configuration file was updated.")
    else:
        typer.echo("No changes detected.")


@cli.command()
def status(ctx: typer.Context):
    """
    cli: jejak status
    Show what is in progress right now, and today's totals.
    """
    ws: Workspace = ctx.obj
    activities, now = ws.snapshot()
    summary = summarize(activities, now)

    typer.echo(f"Workspace: {ws.fs.JEJAK_DIR}")
    typer.echo(f"jejak version: {jejak.__version__}")
    typer.echo(
        f"Today: {summary.today} activities, "
        f"{humanize.precisedelta(datetime.timedelta(minutes=max(summary.today_duration_minutes, 0)), minimum_unit='minutes')}"
    )

    in_progress = [a for a in activities if classify(a, now).is_in_progress]
    if not in_progress:
        typer.echo("Not currently working on anything.")
        return

    for activity in in_progress:
        elapsed = datetime.timedelta(seconds=(now - activity.start_time).total_seconds())
        label = f"{activity.title} [{activity.category}]" if activity.category else activity.title
        typer.echo(f"Working on {label} for {humanize.precisedelta(elapsed, minimum_unit='minutes')} "
                   f"({ActivityFormatter.short_id(activity)})")


@cli.command()
def edit(ctx: typer.Context,
         activity_id: str = typer.Argument(..., help="Activity id or unique prefix."),
         title: str = typer.Option(None, "--title", "-t"),
         category: str = typer.Option(None, "--category", "-c", help="New category; '' removes it."),
         start_at: str = typer.Option(None, "--start", help="New start time, e.g. '08:00' or 'yesterday 9am'."),
         end_at: str = typer.Option(None, "--end", help="New end time."),
         clear_end: bool = typer.Option(False, "--clear-end", help="Remove the end time."),
         ):
    """
    cli: jejak edit
    Change the title, category or times of an activity.
    """
    ws: Workspace = ctx.obj
    try:
        if end_at and clear_end:
            raise ValueError("--end and --clear-end are mutually exclusive.")
        now = ws.now()
        end = UNCHANGED
        if clear_end:
            end = None
        elif end_at:
            end = resolve_natural_datetime(now, end_at)

        activity = ws.edit_activity(
            activity_id,
            title=title if title is not None else UNCHANGED,
            category=category if category is not None else UNCHANGED,
            start=resolve_natural_datetime(now, start_at) if start_at else UNCHANGED,
            end=end,
        )
    except (ValueError, LookupError) as e:
        typer.echo(f"Error editing activity: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Updated '{activity.title}' ({ActivityFormatter.short_id(activity)}).")


@cli.command()
def stop(ctx: typer.Context, activity_id: str = typer.Argument(..., help="Activity id or unique prefix.")):
    """
    Stop an open activity now.
    """
    ws: Workspace = ctx.obj
    try:
        activity = ws.stop_activity(activity_id)
    except (ValueError, LookupError) as e:
        typer.echo(f"Error stopping activity: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Stopped '{activity.title}' at {activity.end_time.format('HH:mm:ss')}.")


@cli.command()
def resume(ctx: typer.Context, activity_id: str = typer.Argument(..., help="Activity id or unique prefix.")):
    """
    Resume a stopped activity by clearing its end time.
    """
    ws: Workspace = ctx.obj
    try:
        activity = ws.resume_activity(activity_id)
    except (ValueError, LookupError) as e:
        typer.echo(f"Error resuming activity: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Resumed '{activity.title}'.")


@cli.command()
def toggle(ctx: typer.Context, activity_id: str = typer.Argument(..., help="Activity id or unique prefix.")):
    """
    Stop the activity if it is open, resume it if it has ended.
    """
    ws: Workspace = ctx.obj
    try:
        activity = ws.toggle_activity(activity_id)
    except (ValueError, LookupError) as e:
        typer.echo(f"Error toggling activity: {e}", err=True)
        raise typer.Exit(1)
    if activity.end_time is None:
        typer.echo(f"Resumed '{activity.title}'.")
    else:
        typer.echo(f"Stopped '{activity.title}' at {activity.end_time.format('HH:mm:ss')}.")


@cli.command()
def rm(ctx: typer.Context,
       activity_id: str = typer.Argument(..., help="Activity id or unique prefix."),
       yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation.")):
    """
    cli: jejak rm
    Delete an activity. This cannot be undone.
    """
    ws: Workspace = ctx.obj
    try:
        activity = ws.get_activity(activity_id)
        if not yes and not typer.confirm(
                f"Are you sure you want to delete \"{activity.title}\"? This action cannot be undone."):
            typer.echo("Cancelled.")
            return
        ws.delete_activity(activity.id)
    except (ValueError, LookupError) as e:
        typer.echo(f"Error deleting activity: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Deleted '{activity.title}'.")


@cli.command(name="categories")
def list_categories(ctx: typer.Context):
    """
    Show the categories in use, and the configured presets.
    """
    ws: Workspace = ctx.obj
    in_use = used_categories(ws.store.list())
    typer.echo("Categories in use:")
    for category in in_use:
        typer.echo(f"- {category}")
    if not in_use:
        typer.echo("(none yet)")
    typer.echo("Presets:")
    for category in ws.config.categories:
        typer.echo(f"- {category}")


@cli.command()
def presets(ctx: typer.Context):
    """
    cli: jejak presets
    Show the quick-start presets usable with `jejak start --preset`.
    """
    ws: Workspace = ctx.obj
    if not ws.config.presets:
        typer.echo("No presets configured. Add [[presets]] tables with `jejak config`.")
        return
    for preset in ws.config.presets:
        details = [d for d in (preset.category, f"{preset.minutes}m" if preset.minutes else None) if d]
        suffix = f" ({', '.join(details)})" if details else ""
        typer.echo(f"- {preset.title}{suffix}")


if __name__ == "__main__":
    cli()
