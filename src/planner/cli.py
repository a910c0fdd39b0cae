"""Planner CLI - schedule analysis, checklists and habits."""

import json
import logging
import sys
from datetime import date, timedelta

import click

from . import calendar as cal
from .adapters.json_store import FileRecordStore
from .checklist import ChecklistService
from .config import load_config
from .core.analysis import analyze_day, analyze_week
from .core.calendar import find_free_slots, group_events_by_date
from .core.intervals import EnergyLevel
from .core.preferences import UserPreferences
from .errors import NotFoundError
from .habits import HabitService
from .storage import get_preferences


def _store() -> FileRecordStore:
    return FileRecordStore(load_config().resolve_data_dir())


def _preferences(store: FileRecordStore) -> UserPreferences:
    prefs = get_preferences(store)
    if prefs is None:
        click.echo("No preferences saved yet - using defaults.", err=True)
        return UserPreferences()
    return prefs


def _events(events_file: str | None, start: date, end: date):
    if events_file:
        return cal.load_events_file(events_file)
    return cal.fetch_range(load_config(), start, end)


def _parse_date(value: str | None) -> date:
    try:
        return date.fromisoformat(value) if value else date.today()
    except ValueError:
        click.echo(f"Error: invalid date {value!r} (expected YYYY-MM-DD)", err=True)
        sys.exit(1)


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Planner - schedule analysis and daily planning."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


# ============== Analysis ==============


@main.group()
def analyze():
    """Analyze the schedule."""
    pass


@analyze.command("day")
@click.option("--date", "-d", "target_date", default=None, help="Date (YYYY-MM-DD), defaults to today")
@click.option("--events", "events_file", default=None, type=click.Path(exists=True),
              help="JSON file of events instead of the configured calendars")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def analyze_day_cmd(target_date: str | None, events_file: str | None, as_json: bool):
    """Density, conflicts, life areas and free time for one day."""
    store = _store()
    prefs = _preferences(store)
    target = _parse_date(target_date)

    events = group_events_by_date(_events(events_file, target, target), target, target, prefs.zone())
    try:
        result = analyze_day(events[target.isoformat()], prefs, target)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.echo(f"{target.strftime('%A, %b %d')}: {result.density.value}")
    if result.conflicts:
        click.echo("\nConflicts:")
        for c in result.conflicts:
            click.echo(f"  [{c.severity.value}] {c.type.value}: {c.description}")
    if result.warnings:
        click.echo("\nWarnings:")
        for w in result.warnings:
            click.echo(f"  - {w}")
    click.echo("\nLife areas:")
    for b in result.life_area_breakdown:
        click.echo(f"  {b.area:12} {b.scheduled_hours:5.1f}h / {b.target_hours}h ({b.delta:+.1f})")
    click.echo("\nFree slots:")
    for s in result.free_slots:
        click.echo(f"  {s.format()}")
    if not result.free_slots:
        click.echo("  None")


@analyze.command("week")
@click.option("--start", "start_date", default=None, help="First day (YYYY-MM-DD), defaults to today")
@click.option("--days", default=7, show_default=True, help="Number of days")
@click.option("--events", "events_file", default=None, type=click.Path(exists=True),
              help="JSON file of events instead of the configured calendars")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def analyze_week_cmd(start_date: str | None, days: int, events_file: str | None, as_json: bool):
    """Per-day analysis and weekly life-area totals."""
    store = _store()
    prefs = _preferences(store)
    start = _parse_date(start_date)
    end = start + timedelta(days=max(days, 1) - 1)

    by_date = group_events_by_date(_events(events_file, start, end), start, end, prefs.zone())
    try:
        result = analyze_week(by_date, prefs, start, end)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    summary = result.summary
    click.echo(f"{result.start_date} to {result.end_date}: {summary.total_events} events, "
               f"{summary.average_density.value} on average\n")
    for day in result.days:
        click.echo(f"  {day.date}  {day.density.value:10} {len(day.conflicts)} conflict(s)")
    click.echo("\nLife areas:")
    for b in summary.life_area_breakdown:
        click.echo(f"  {b.area:12} {b.scheduled_hours:5.1f}h / {b.target_hours}h ({b.delta:+.1f})")


@main.command()
@click.option("--date", "-d", "target_date", default=None, help="Date (YYYY-MM-DD), defaults to today")
@click.option("--min", "min_duration", default=30, show_default=True, help="Minimum minutes")
@click.option("--energy", type=click.Choice([e.value for e in EnergyLevel]), default=None,
              help="Only slots starting at this energy level")
@click.option("--events", "events_file", default=None, type=click.Path(exists=True),
              help="JSON file of events instead of the configured calendars")
def slots(target_date: str | None, min_duration: int, energy: str | None, events_file: str | None):
    """List free time slots."""
    prefs = _preferences(_store())
    target = _parse_date(target_date)
    events = _events(events_file, target, target)

    try:
        free = find_free_slots(events, prefs, target, min_duration, energy)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not free:
        click.echo("No free slots.")
        return
    for s in free:
        click.echo(s.format())


# ============== Checklist ==============


@main.group(invoke_without_command=True)
@click.pass_context
def checklist(ctx):
    """Today's checklist."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(checklist_show)


def _show_checklist(day) -> None:
    if not day.items:
        click.echo(f"Checklist for {day.date} is empty.")
        return
    click.echo(f"Checklist for {day.date}\n")
    for item in day.items:
        mark = "x" if item.completed else " "
        size = f" ({item.size})" if item.size else ""
        carried = f" [from {item.carried_from}]" if item.carried_from else ""
        click.echo(f"  [{mark}] {item.text}{size} - {item.area}{carried}  {item.id[:8]}")


def _resolve_id(service: ChecklistService, prefix: str, day: str | None) -> str:
    """Accept a unique id prefix, as shown by `checklist show`."""
    matches = [i.id for i in service.get_checklist(day).items if i.id.startswith(prefix)]
    return matches[0] if len(matches) == 1 else prefix


@checklist.command("show")
@click.option("--date", "-d", "target_date", default=None, help="Date (YYYY-MM-DD)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def checklist_show(target_date: str | None = None, as_json: bool = False):
    """Show a day's checklist."""
    target = _parse_date(target_date).isoformat() if target_date else None
    day = ChecklistService(_store()).get_checklist(target)
    if as_json:
        click.echo(json.dumps(day.to_dict(), indent=2))
    else:
        _show_checklist(day)


@checklist.command("add")
@click.argument("text")
@click.option("--area", "-a", required=True, help="Life area")
@click.option("--size", "-s", type=click.Choice(["quick", "medium", "long"]), default=None)
@click.option("--deadline", default=None, help="Deadline (YYYY-MM-DD)")
def checklist_add(text: str, area: str, size: str | None, deadline: str | None):
    """Add an item to today's checklist."""
    _show_checklist(ChecklistService(_store()).add_item(text, area, size, deadline))


@checklist.command("done")
@click.argument("item_id")
@click.option("--note", default=None, help="Completion note")
@click.option("--hours", type=float, default=None, help="Billable hours")
@click.option("--undo", is_flag=True, help="Mark as not done")
def checklist_done(item_id: str, note: str | None, hours: float | None, undo: bool):
    """Complete an item."""
    service = ChecklistService(_store())
    try:
        day = service.update_item(
            _resolve_id(service, item_id, None),
            completed=not undo,
            completion_note=note,
            billable_hours=hours,
        )
    except NotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    _show_checklist(day)


@checklist.command("remove")
@click.argument("item_id")
def checklist_remove(item_id: str):
    """Remove an item."""
    service = ChecklistService(_store())
    try:
        day = service.remove_item(_resolve_id(service, item_id, None))
    except NotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    _show_checklist(day)


# ============== Habits ==============


@main.group(invoke_without_command=True)
@click.pass_context
def habits(ctx):
    """Manage habits."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(habits_list)


@habits.command("list")
def habits_list():
    """List habits."""
    items = HabitService(_store()).list_habits()
    if not items:
        click.echo("No habits defined.")
        return
    for h in items:
        click.echo(f"• {h.name} - {h.weekly_target}x/week, {h.default_duration}min "
                   f"({h.life_area}, {h.preferred_time_of_day})  {h.id[:8]}")


@habits.command("add")
@click.argument("name")
@click.option("--per-week", "weekly_target", type=int, required=True, help="Weekly target")
@click.option("--area", "-a", "life_area", required=True, help="Life area")
@click.option("--minutes", "default_duration", type=int, default=30, show_default=True)
@click.option("--when", "preferred_time_of_day",
              type=click.Choice(["morning", "afternoon", "evening", "any"]), default="any")
def habits_add(name: str, weekly_target: int, life_area: str, default_duration: int,
               preferred_time_of_day: str):
    """Add a habit."""
    habit = HabitService(_store()).add_habit(
        name, weekly_target, life_area, default_duration, preferred_time_of_day
    )
    click.echo(f"✓ Added {habit.name} ({habit.id})")


@habits.command("remove")
@click.argument("habit_id")
def habits_remove(habit_id: str):
    """Remove a habit."""
    try:
        HabitService(_store()).remove_habit(habit_id)
    except NotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo("✓ Removed")


if __name__ == "__main__":
    main()
