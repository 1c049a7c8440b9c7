"""LifeOS CLI - declare capacity, see a modulated day."""

import asyncio
import json
import logging
import sys

import click

from .config import load_config
from .core.recommend import recommend_state
from .core.view import DailyView, explain_config
from .workflows import LifeOS, build_lifeos, get_state_store, view_to_dict

STATE_STYLES = {
    "driven": ("green", "🚀"),
    "flat": ("blue", "🚶"),
    "foggy": ("white", "🌫️"),
    "anxious": ("yellow", "😬"),
    "overstimulated": ("red", "🤯"),
    "productive": ("magenta", "⚡"),
    "social": ("cyan", "🍻"),
}


class Session:
    """Per-invocation LifeOS wiring plus the state store to persist into."""

    def __init__(self):
        config = load_config()
        self.lifeos: LifeOS = build_lifeos(config)
        self.store = get_state_store(config, self.lifeos.catalog)

    def persist(self) -> None:
        self.store.save(self.lifeos.capacity())


pass_session = click.make_pass_decorator(Session, ensure=True)


@click.group()
@click.version_option(package_name="lifeos")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """LifeOS - state-driven task and calendar modulation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _print_view(view: DailyView) -> None:
    color, icon = STATE_STYLES.get(view.state, ("white", "❓"))

    click.echo(click.style(f"\n{icon} Your Modulated Day", bold=True))
    click.echo(click.style("-" * 40, dim=True))
    click.echo(
        f"State: {click.style(view.state, fg=color, bold=True)} | "
        f"Energy: {click.style(str(view.energy_budget), fg=color)} | "
        f"As of: {click.style(view.generated_at.strftime('%Y-%m-%d %H:%M'), dim=True)}"
    )
    click.echo(click.style("-" * 40, dim=True) + "\n")

    tasks = view.tasks
    click.secho(f"Visible Tasks ({len(tasks.visible_tasks)}/{tasks.total_tasks})", fg="green", bold=True)
    if tasks.visible_tasks:
        for task in tasks.visible_tasks:
            click.echo(f"   - [ ] {task.title} " + click.style(f"(~{task.minutes} mins)", dim=True))
        click.secho(
            f"   Total time: {tasks.total_minutes} mins | Remaining capacity: {tasks.remaining_capacity} mins",
            dim=True,
        )
    else:
        click.secho("   No tasks visible for your current state.", dim=True)
    click.secho(f"   ({len(tasks.hidden_tasks)} tasks hidden)\n", dim=True)

    calendar = view.calendar
    click.secho(f"Active Events ({len(calendar.active_events)}/{calendar.total_events})", fg="blue", bold=True)
    if calendar.active_events:
        for event in calendar.active_events:
            click.echo(f"   - {click.style(event.format_time(), fg='cyan')}: {event.title}")
    else:
        click.secho("   No events scheduled for today.", dim=True)
    for buffer in calendar.recovery_buffers:
        click.secho(f"   + {buffer.title} {buffer.format()}", fg="cyan", dim=True)
    if calendar.suggested_cancellations:
        click.secho(f"   ({len(calendar.suggested_cancellations)} events suggested for cancellation)", fg="yellow")
    if calendar.calendar_limit_exceeded:
        click.secho(
            f"   Calendar is over its {view.config.workload.max_calendar_hours:g}h limit "
            f"({calendar.total_hours:.1f}h of active events).",
            fg="yellow",
        )
    click.echo()


@main.command()
@click.argument("state")
@pass_session
def mood(session: Session, state: str):
    """Set your current capacity."""
    lifeos = session.lifeos
    state = state.lower()
    if state not in lifeos.catalog:
        click.echo(
            f"Error: Invalid capacity state {state!r}. Choose from: {', '.join(lifeos.catalog.states)}",
            err=True,
        )
        sys.exit(1)

    lifeos.set_capacity(state, "declared")
    session.persist()
    click.echo(f"Capacity set to: {state}")
    _print_view(asyncio.run(lifeos.daily_view()))


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_session
def view(session: Session, as_json: bool):
    """View your current modulated day."""
    daily = asyncio.run(session.lifeos.daily_view())
    if as_json:
        click.echo(json.dumps(view_to_dict(daily), indent=2))
    else:
        _print_view(daily)


@main.command()
@pass_session
def focus(session: Session):
    """Show the next task and upcoming event."""
    daily = asyncio.run(session.lifeos.daily_view())
    click.secho("\n--- Your Immediate Focus ---", bold=True, underline=True)

    click.secho("\nNext Task:", fg="green", bold=True)
    task = daily.next_task()
    if task:
        click.echo(f"   - [ ] {task.title} " + click.style(f"(~{task.minutes} mins)", dim=True))
    else:
        click.secho("   No more tasks for today.", dim=True)

    click.secho("\nUpcoming Event:", fg="blue", bold=True)
    event = daily.next_event()
    if event:
        click.echo(f"   - {click.style(event.format_time(), fg='cyan')}: {event.title}")
    else:
        click.secho("   No more events scheduled.", dim=True)
    click.echo()


@main.command()
@click.argument("trigger", default="manual")
@pass_session
def backoff(session: Session, trigger: str):
    """Degrade to the current state's fallback."""
    lifeos = session.lifeos
    if lifeos.degrade_gracefully(trigger):
        session.persist()
        click.echo(f"Capacity degraded. New state: {lifeos.capacity()}")
        _print_view(asyncio.run(lifeos.daily_view()))
    else:
        click.echo(f"No degradation occurred. State remains: {lifeos.capacity()}")


@main.command()
@pass_session
def reset(session: Session):
    """Reset to the default state."""
    lifeos = session.lifeos
    lifeos.reset_capacity()
    session.persist()
    click.echo(f"Capacity reset to: {lifeos.capacity()}")


@main.command("rec")
@pass_session
def recommend(session: Session):
    """Suggest a state based on the unmodulated load."""
    tasks, events = asyncio.run(session.lifeos.unmodulated_data())
    rec = recommend_state(tasks, events, session.lifeos.catalog)

    click.echo(click.style("\nRecommendation: ", bold=True) + click.style(rec.state, fg="cyan", bold=True))
    click.echo(f"   {rec.reason}")
    click.secho(f"   Analyzed {rec.task_count} tasks and {rec.event_count} events.", dim=True)


@main.command()
@pass_session
def sync(session: Session):
    """Dry run of what would be pushed back to sources."""
    lifeos = session.lifeos
    daily = asyncio.run(lifeos.daily_view())

    click.secho("\n--- Sync Simulation (Dry Run) ---", bold=True, underline=True)
    click.secho("This is a dry run. No actual changes will be made.\n", dim=True)

    task_sources = lifeos.task_sources()
    if task_sources:
        click.secho("Task Managers", fg="yellow", bold=True)
    for source in task_sources:
        click.secho(f'   - Clearing "Today" list in {source.name}...', dim=True)
        if daily.tasks.visible_tasks:
            click.echo(f'   - Adding {len(daily.tasks.visible_tasks)} tasks to "Today" in {source.name}:')
            for task in daily.tasks.visible_tasks:
                click.secho(f'     + "{task.title}"', fg="green")
        else:
            click.secho(f"   - No tasks to add to {source.name}.", dim=True)

    calendars = lifeos.calendars()
    if calendars:
        click.secho("\nCalendars", fg="blue", bold=True)
    for cal in calendars:
        cancellations = daily.calendar.suggested_cancellations
        buffers = daily.calendar.recovery_buffers
        if cancellations:
            click.echo(f"   - Suggesting {len(cancellations)} event cancellations in {cal.name}:")
            for event in cancellations:
                click.secho(f'     ! Rename "{event.title}" to "[CANCEL?] {event.title}"', fg="red")
        if buffers:
            click.echo(f"   - Adding {len(buffers)} recovery buffers to {cal.name}:")
            for buffer in buffers:
                click.secho(f'     + Add "{buffer.title}" ({buffer.duration_minutes:g} mins)', fg="cyan")
        if not cancellations and not buffers:
            click.secho(f"   - No changes for {cal.name}.", dim=True)

    click.secho("\nSync simulation complete.", fg="green", bold=True)


@main.command()
@pass_session
def why(session: Session):
    """Explain why your day is modulated the way it is."""
    lifeos = session.lifeos
    click.secho(f"\n--- Why Your Day Looks This Way ({lifeos.capacity()}) ---", bold=True, underline=True)
    click.secho(lifeos.config().description, dim=True)
    for line in explain_config(lifeos.config()):
        click.secho(f"\n- {line}", fg="cyan")


@main.command()
@pass_session
def states(session: Session):
    """List the capacity states you can declare."""
    lifeos = session.lifeos
    current = lifeos.capacity()
    for name in lifeos.catalog.states:
        marker = "*" if name == current else " "
        config = lifeos.catalog.config_for(name)
        click.echo(f"{marker} {name:15} {config.description}")
