"""Terminal-friendly visualizations using Unicode characters.

These functions return Rich-markup strings that render as bars and
gauges in the terminal via the Rich library.
"""

from __future__ import annotations


def horizontal_bar(
    label: str,
    value: float,
    max_value: float,
    width: int = 30,
    color: str = "green",
    unit: str = "W",
) -> str:
    """Render a horizontal bar chart line using Unicode block characters.

    Returns a Rich-markup string like:
        Lighting...................... [green]██████░░░░░░░░░[/]  160 W
    """
    if max_value <= 0:
        return f"  {label:.<30} [dim]no data[/]"
    ratio = min(value / max_value, 1.0)
    filled = int(ratio * width)
    bar = "█" * filled + "░" * (width - filled)
    return f"  {label:.<30} [{color}]{bar}[/] {value:>6.0f} {unit}"


def proximity_gauge(score: float, width: int = 10) -> str:
    """Compact gauge for proximity scores, where lower is better."""
    clamped = max(0.0, min(100.0, score))
    filled = int(clamped / 100 * width)
    empty = width - filled

    if clamped < 50:
        color = "green"
    elif clamped < 100:
        color = "yellow"
    else:
        color = "red"

    bar = "█" * filled + "░" * empty
    return f"[{color}]{bar}[/] {clamped:.0f}"


def percentage_bar(
    label: str,
    pct: float,
    width: int = 20,
) -> str:
    """Simple percentage bar: [label] ████░░░░ 45%"""
    clamped = max(0.0, min(100.0, pct))
    filled = int(clamped / 100 * width)
    empty = width - filled

    if clamped >= 80:
        color = "green"
    elif clamped >= 50:
        color = "yellow"
    else:
        color = "red"

    bar = "█" * filled + "░" * empty
    return f"{label} [{color}]{bar}[/] {clamped:.0f}%"
