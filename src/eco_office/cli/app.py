# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Main CLI application for eco-office."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import NoReturn

import click
from rich.console import Console

from eco_office.analysis.energy_report import build_energy_report, office_summary
from eco_office.analysis.zone_energy import ZoneEnergyCalculator
from eco_office.config import Settings, StoreConfig, resolve_settings
from eco_office.data.layouts import LAYOUTS
from eco_office.errors import EcoOfficeError
from eco_office.recommendations.engine import SeatRecommender
from eco_office.reporting.terminal import TerminalRenderer
from eco_office.scoring.rewards import RewardScorer, leaderboard
from eco_office.store import build_store
from eco_office.store.base import MetricStore
from eco_office.tracking.activities import ACTIVITIES, ActivityLogger
from eco_office.tracking.environment import StaticEnvironment, SystemEnvironment
from eco_office.tracking.seating import SeatingService
from eco_office.tracking.session import SessionTracker

LAYOUT_CHOICES = list(LAYOUTS.keys())


def _fail(console: Console, message: str) -> NoReturn:
    console.print(f"[red]{message}[/red]")
    raise SystemExit(1)


def _store(ctx: click.Context) -> MetricStore:
    """Build the store lazily so ``--help`` never touches the disk."""
    if "store" not in ctx.obj:
        ctx.obj["store"] = build_store(ctx.obj["settings"])
    return ctx.obj["store"]


@click.group()
@click.version_option(version="0.1.0")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option(
    "--config", "-c", type=click.Path(), default=None,
    help="Settings YAML file (defaults to $ECO_OFFICE_CONFIG)",
)
@click.option(
    "--layout", "-l", type=click.Choice(LAYOUT_CHOICES), default=None,
    help="Office layout preset used to seed the store",
)
@click.option(
    "--store", "store_path", type=click.Path(), default=None,
    help="Persist state to this JSON file between invocations",
)
@click.option("--verbose", "-v", count=True, help="Increase log verbosity (-v, -vv)")
@click.pass_context
def cli(
    ctx: click.Context,
    no_color: bool,
    config: str | None,
    layout: str | None,
    store_path: str | None,
    verbose: int,
) -> None:
    """eco-office: Office Sustainability Metrics and Seat Recommendations

    \b
    Track laptop sessions, evaluate zone energy and CO2, recommend
    seats near colleagues, and reward energy-saving behaviour.
    """
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(name)s | %(levelname)s | %(message)s")

    ctx.ensure_object(dict)
    console = Console(no_color=no_color)
    ctx.obj["console"] = console

    try:
        settings = resolve_settings(config)
    except FileNotFoundError as exc:
        _fail(console, str(exc))
    if layout:
        settings = settings.model_copy(update={"layout": layout})
    if store_path:
        settings = settings.model_copy(
            update={"store": StoreConfig(backend="json", path=store_path)}
        )
    ctx.obj["settings"] = settings


@cli.command()
@click.pass_context
def seats(ctx: click.Context) -> None:
    """Show the floor plan: seats, zones, tiers, and occupants."""
    console: Console = ctx.obj["console"]
    store = _store(ctx)
    renderer = TerminalRenderer(console)
    renderer.render_header("Floor plan", ctx.obj["settings"].layout)
    renderer.render_seats(store.get_seats(), store.get_users(), store.get_zones())


@cli.command()
@click.option("--zone", "-z", "zone_id", type=int, default=None, help="Evaluate a single zone")
@click.pass_context
def zones(ctx: click.Context, zone_id: int | None) -> None:
    """Evaluate zone energy draw and CO2 emissions."""
    console: Console = ctx.obj["console"]
    settings: Settings = ctx.obj["settings"]
    store = _store(ctx)
    calculator = ZoneEnergyCalculator(store, co2_kg_per_kwh=settings.co2_kg_per_kwh)

    if zone_id is not None:
        if store.get_zone(zone_id) is None:
            _fail(console, f"Zone {zone_id} not found")
        metrics = [calculator.evaluate(zone_id)]
    else:
        metrics = calculator.evaluate_all()

    renderer = TerminalRenderer(console)
    renderer.render_header("Zone energy", settings.layout)
    renderer.render_zone_metrics(store.get_zones(), metrics)
    renderer.render_summary(office_summary(store))
    renderer.render_footer()


@cli.command()
@click.option(
    "--sort/--no-sort", default=False,
    help="Order recommendations by estimated savings",
)
@click.pass_context
def recommend(ctx: click.Context, sort: bool) -> None:
    """Recommend up to three free seats."""
    console: Console = ctx.obj["console"]
    store = _store(ctx)
    recs = SeatRecommender(store).recommend(sort_by_savings=sort)
    renderer = TerminalRenderer(console)
    renderer.render_recommendations(recs)


@cli.command()
@click.argument("user_id")
@click.argument("seat_id", type=int)
@click.pass_context
def move(ctx: click.Context, user_id: str, seat_id: int) -> None:
    """Move USER_ID to SEAT_ID and record a seating metric."""
    console: Console = ctx.obj["console"]
    store = _store(ctx)
    try:
        metric = SeatingService(store).move(user_id, seat_id)
    except EcoOfficeError as exc:
        _fail(console, str(exc))
    console.print(
        f"  [green]Moved[/green] {user_id} to seat {metric.seat_id} "
        f"(proximity {metric.proximity_score:.1f}, tier {metric.energy_tier.value})"
    )


@cli.command()
@click.argument("user_id")
@click.pass_context
def leave(ctx: click.Context, user_id: str) -> None:
    """Vacate the seat held by USER_ID."""
    console: Console = ctx.obj["console"]
    try:
        SeatingService(_store(ctx)).leave(user_id)
    except EcoOfficeError as exc:
        _fail(console, str(exc))
    console.print(f"  [green]{user_id} left their seat[/green]")


@cli.command()
@click.argument("user_id")
@click.option("--ticks", "-n", type=click.IntRange(min=1), default=3, help="Number of samples")
@click.option("--period", type=float, default=None, help="Seconds between samples")
@click.option(
    "--dark/--light", "dark_mode", default=None,
    help="Force the display mode instead of reading the environment",
)
@click.pass_context
def track(
    ctx: click.Context,
    user_id: str,
    ticks: int,
    period: float | None,
    dark_mode: bool | None,
) -> None:
    """Sample USER_ID's session and apply reward points."""
    console: Console = ctx.obj["console"]
    settings: Settings = ctx.obj["settings"]
    if period is not None:
        if period <= 0:
            _fail(console, "--period must be positive")
        settings = settings.model_copy(update={"sample_period_seconds": period})

    store = _store(ctx)
    if store.get_user(user_id) is None:
        _fail(console, f"User {user_id!r} not found")

    if dark_mode is not None:
        environment = StaticEnvironment(dark_mode=dark_mode)
    else:
        environment = SystemEnvironment(dark_mode=settings.dark_mode)
    tracker = SessionTracker(store, user_id, environment, settings=settings)

    with console.status(f"[bold cyan]Sampling {ticks} ticks..."):
        results = asyncio.run(tracker.run_ticks(ticks))

    renderer = TerminalRenderer(console)
    renderer.render_rewards(results)


@cli.command()
@click.argument("user_id")
@click.option(
    "--since-hours", type=float, default=None,
    help="Only count metrics from the last N hours",
)
@click.pass_context
def report(ctx: click.Context, user_id: str, since_hours: float | None) -> None:
    """Show USER_ID's energy report."""
    console: Console = ctx.obj["console"]
    settings: Settings = ctx.obj["settings"]
    store = _store(ctx)
    user = store.get_user(user_id)
    if user is None:
        _fail(console, f"User {user_id!r} not found")
    since = None
    if since_hours is not None:
        since = datetime.now(timezone.utc) - timedelta(hours=since_hours)
    energy = build_energy_report(
        store, user_id, since=since, co2_kg_per_kwh=settings.co2_kg_per_kwh
    )
    renderer = TerminalRenderer(console)
    renderer.render_report(user, energy)
    renderer.render_footer()


@cli.command(name="leaderboard")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Show only the top N")
@click.pass_context
def leaderboard_cmd(ctx: click.Context, limit: int | None) -> None:
    """Rank users by reward points."""
    console: Console = ctx.obj["console"]
    renderer = TerminalRenderer(console)
    renderer.render_leaderboard(leaderboard(_store(ctx).get_users(), limit=limit))


@cli.command(name="log-activity")
@click.argument("user_id")
@click.argument("activity", type=click.Choice(list(ACTIVITIES.keys())))
@click.pass_context
def log_activity(ctx: click.Context, user_id: str, activity: str) -> None:
    """Log an energy-saving ACTIVITY for USER_ID and award its points."""
    console: Console = ctx.obj["console"]
    logger = ActivityLogger(RewardScorer(_store(ctx)))
    try:
        user = logger.log(user_id, activity)
    except EcoOfficeError as exc:
        _fail(console, str(exc))
    entry = ACTIVITIES[activity]
    console.print(
        f"  [green]+{entry.points} points[/green] for '{entry.title}' "
        f"(balance {user.points}, {user.level})"
    )


@cli.command()
@click.pass_context
def activities(ctx: click.Context) -> None:
    """List the loggable energy-saving activities."""
    console: Console = ctx.obj["console"]
    for entry in ACTIVITIES.values():
        console.print(f"  [bold]{entry.id:<10}[/bold] {entry.title} [green]+{entry.points}[/green]")


@cli.command()
@click.argument("user_id")
@click.option("--limit", type=click.IntRange(min=1), default=10, help="Show at most N entries")
@click.pass_context
def history(ctx: click.Context, user_id: str, limit: int) -> None:
    """Show the activities USER_ID logged, newest first."""
    console: Console = ctx.obj["console"]
    store = _store(ctx)
    user = store.get_user(user_id)
    if user is None:
        _fail(console, f"User {user_id!r} not found")
    records = ActivityLogger(RewardScorer(store)).recent(user_id, limit=limit)
    titles = {a.id: a.title for a in ACTIVITIES.values()}
    TerminalRenderer(console).render_activity_history(user, records, titles)


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind host")
@click.option("--port", "-p", default=8080, type=int, help="Bind port")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int) -> None:
    """Start the REST API server."""
    from eco_office.api import check_dependency

    console: Console = ctx.obj["console"]
    try:
        check_dependency("fastapi", "pip install -e '.[api]'")
        check_dependency("uvicorn", "pip install -e '.[api]'")
    except ImportError as exc:
        _fail(console, str(exc))

    from eco_office.api.server import create_app
    import uvicorn

    console.print(f"[bold cyan]Starting API server on {host}:{port}...[/]")
    app = create_app(_store(ctx), ctx.obj["settings"])
    uvicorn.run(app, host=host, port=port)
