# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Level thresholds that turn a point balance into a tier label."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Level thresholds (minimum points -> label), highest first
# ---------------------------------------------------------------------------
LEVELS: list[tuple[int, str]] = [
    (2000, "Sustainability Expert"),
    (1000, "Eco Champion"),
    (500, "Green Warrior"),
    (0, "Eco Beginner"),
]


def points_to_level(points: int) -> str:
    """Return the level label earned by a balance of *points*."""
    for minimum, label in LEVELS:
        if points >= minimum:
            return label
    return LEVELS[-1][1]


def next_level(points: int) -> tuple[str, int] | None:
    """Return ``(label, points_needed)`` for the next level, or None at the top."""
    upcoming = None
    for minimum, label in LEVELS:
        if points < minimum:
            upcoming = (label, minimum - points)
    return upcoming


def level_progress(points: int) -> float:
    """Progress towards the next level as a percentage (0-100).

    Returns 100.0 once the highest level has been reached.
    """
    upcoming = next_level(points)
    if upcoming is None:
        return 100.0
    floor = max(minimum for minimum, _ in LEVELS if points >= minimum)
    ceiling = points + upcoming[1]
    return round((points - floor) / (ceiling - floor) * 100, 2)
