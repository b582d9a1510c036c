"""Rich terminal report renderer.

Composes Rich tables, panels, and ASCII bars into the user-facing
terminal output of the eco-office CLI.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

import eco_office
from eco_office.data.models import (
    ActivityRecord,
    EnergyReport,
    OfficeSummary,
    RewardResult,
    Seat,
    SeatRecommendation,
    User,
    Zone,
    ZoneEnergyMetric,
)
from eco_office.reporting.ascii_charts import horizontal_bar, percentage_bar, proximity_gauge
from eco_office.scoring.thresholds import level_progress, next_level


class TerminalRenderer:
    """Renders engine results to the terminal using Rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_header(self, title: str, subtitle: str = "") -> None:
        self.console.print()
        text = f"[bold cyan]ECO OFFICE[/bold cyan] [dim]|[/dim] {title}"
        if subtitle:
            text += f" [dim]({subtitle})[/dim]"
        self.console.print(Panel(text, title="Office Sustainability"))

    def render_seats(self, seats: list[Seat], users: list[User], zones: list[Zone]) -> None:
        """Render the seat table with occupants and zones."""
        names = {u.id: u.name for u in users}
        zone_of = {sid: z.name for z in zones for sid in z.seat_ids}

        self.console.print()
        self.console.print(Rule("[bold]SEATS[/bold]"))
        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("Seat", justify="right", style="bold", width=5)
        table.add_column("Position", justify="center", min_width=12)
        table.add_column("Zone", min_width=12)
        table.add_column("Tier", justify="center", width=8)
        table.add_column("Occupant", min_width=16)

        for seat in seats:
            tier = seat.energy_tier
            occupant = names.get(seat.user_id, seat.user_id) if seat.user_id else "[dim]free[/dim]"
            table.add_row(
                str(seat.id),
                f"({seat.x:.0f}, {seat.y:.0f})",
                zone_of.get(seat.id, "-"),
                f"[{tier.color}]{tier.value}[/{tier.color}]",
                occupant,
            )
        self.console.print(table)

    def render_zone_metrics(self, zones: list[Zone], metrics: list[ZoneEnergyMetric]) -> None:
        """Render one panel per evaluated zone with its device breakdown."""
        by_id = {z.id: z for z in zones}
        self.console.print()
        self.console.print(Rule("[bold]ZONE ENERGY[/bold]"))

        for metric in metrics:
            zone = by_id.get(metric.zone_id)
            name = zone.name if zone else f"Zone {metric.zone_id}"
            b = metric.breakdown
            peak = max(b.laptops, b.lighting, b.ac, b.other)
            lines = [
                f"  [bold]Consumption:[/bold] {metric.consumption_kwh:.3f} kWh  "
                f"[bold]CO2:[/bold] {metric.co2_kg:.3f} kg",
                horizontal_bar("Laptops", b.laptops, peak, color="cyan"),
                horizontal_bar("Lighting", b.lighting, peak, color="yellow"),
                horizontal_bar("AC", b.ac, peak, color="red"),
                horizontal_bar("Other", b.other, peak, color="green"),
            ]
            self.console.print(Panel("\n".join(lines), title=f"[bold]{name}[/bold]"))

    def render_summary(self, summary: OfficeSummary) -> None:
        table = Table(show_header=False, padding=(0, 2), box=None)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("Zones", str(summary.zone_count))
        table.add_row(
            "Occupancy",
            percentage_bar(
                f"{summary.occupied_seats}/{summary.total_seats}",
                summary.occupancy_pct,
                width=15,
            ),
        )
        table.add_row("Consumption (1 h)", f"{summary.consumption_kwh:.3f} kWh")
        table.add_row("CO2 (1 h)", f"{summary.co2_kg:.3f} kg")
        self.console.print()
        self.console.print(Panel(table, title="[bold]OFFICE SUMMARY[/bold]"))

    def render_recommendations(self, recommendations: list[SeatRecommendation]) -> None:
        """Render the recommended seats table."""
        self.console.print()
        self.console.print(Rule("[bold]RECOMMENDATIONS[/bold]"))
        if not recommendations:
            self.console.print("  [yellow]No free seats available.[/yellow]")
            return

        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("#", justify="right", style="bold", width=3)
        table.add_column("Seat", justify="right", width=5)
        table.add_column("Reason", min_width=30)
        table.add_column("Savings", justify="right", min_width=10)
        table.add_column("Proximity", min_width=14)
        table.add_column("Tier", justify="center", width=8)

        for rank, rec in enumerate(recommendations, start=1):
            tier = rec.energy_tier
            table.add_row(
                str(rank),
                str(rec.seat_id),
                rec.reason,
                f"[green]{rec.savings}[/green]",
                proximity_gauge(rec.proximity_score),
                f"[{tier.color}]{tier.value}[/{tier.color}]",
            )
        self.console.print(table)

    def render_user(self, user: User) -> None:
        upcoming = next_level(user.points)
        progress = level_progress(user.points)
        target = f"{upcoming[1]} points to {upcoming[0]}" if upcoming else "top level reached"
        self.console.print(
            f"  [bold]{user.name}[/bold] | {user.level} | "
            f"[green]{user.points}[/green] points | "
            f"{percentage_bar('', progress, width=15)} ({target})"
        )

    def render_report(self, user: User, report: EnergyReport) -> None:
        """Render a user's energy report."""
        self.console.print()
        self.console.print(Rule(f"[bold]ENERGY REPORT[/bold] - {user.name}"))
        self.render_user(user)

        table = Table(show_header=False, padding=(0, 2), box=None)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("Device energy", f"{report.total_energy_kwh:.4f} kWh")
        table.add_row("Device CO2", f"{report.co2_kg:.4f} kg")
        table.add_row("Avg proximity", proximity_gauge(report.average_proximity_score))
        table.add_row("Potential savings", f"{report.potential_savings:.1f}")
        table.add_row("Dark mode share", f"{report.dark_mode_ratio:.0%}")
        table.add_row("Metrics recorded", str(report.metrics_count))
        self.console.print(table)

    def render_leaderboard(self, users: list[User]) -> None:
        self.console.print()
        self.console.print(Rule("[bold]LEADERBOARD[/bold]"))
        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("#", justify="right", style="bold", width=3)
        table.add_column("Name", min_width=18)
        table.add_column("Level", min_width=22)
        table.add_column("Points", justify="right", min_width=8)
        for rank, user in enumerate(users, start=1):
            table.add_row(str(rank), user.name, user.level, f"{user.points:,}")
        self.console.print(table)

    def render_activity_history(
        self,
        user: User,
        records: list[ActivityRecord],
        titles: dict[str, str] | None = None,
    ) -> None:
        """Logged activities, newest first, with the balance after each."""
        titles = titles or {}
        self.console.print()
        self.console.print(Rule(f"[bold]ACTIVITIES[/bold] {user.name}"))
        if not records:
            self.console.print("  [dim]No activities logged yet.[/dim]")
            return
        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("When (UTC)", min_width=16)
        table.add_column("Activity", min_width=24)
        table.add_column("Points", justify="right", style="green")
        table.add_column("Balance", justify="right")
        for record in records:
            table.add_row(
                record.timestamp.strftime("%Y-%m-%d %H:%M"),
                titles.get(record.activity_id, record.activity_id),
                f"+{record.points}",
                f"{record.balance:,}",
            )
        self.console.print(table)

    def render_rewards(self, results: list[RewardResult]) -> None:
        """Render the reward outcome of each session tick."""
        self.console.print()
        self.console.print(Rule("[bold]SESSION REWARDS[/bold]"))
        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("Tick", justify="right", width=5)
        table.add_column("Eco score", justify="right", width=10)
        table.add_column("Delta", justify="right", width=6)
        table.add_column("Balance", justify="right", width=8)
        table.add_column("Level", min_width=20)
        for i, result in enumerate(results, start=1):
            color = "green" if result.delta > 0 else "red" if result.delta < 0 else "white"
            table.add_row(
                str(i),
                f"{result.eco_score:.2f}",
                f"[{color}]{result.delta:+d}[/{color}]",
                str(result.points),
                result.level,
            )
        self.console.print(table)

    def render_footer(self) -> None:
        self.console.print()
        self.console.print(Rule(style="dim"))
        self.console.print(f"  [dim]eco-office v{eco_office.__version__}[/dim]")
        self.console.print()
