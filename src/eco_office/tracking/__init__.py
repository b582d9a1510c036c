# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Session sampling, seat moves, and activity logging."""

from eco_office.tracking.activities import ACTIVITIES, ActivityLogger, get_activity
from eco_office.tracking.environment import (
    EnvironmentReader,
    PowerStatus,
    StaticEnvironment,
    SystemEnvironment,
    power_mode_for,
)
from eco_office.tracking.seating import SeatingService
from eco_office.tracking.session import SessionTracker

__all__ = [
    "ACTIVITIES",
    "ActivityLogger",
    "EnvironmentReader",
    "PowerStatus",
    "SeatingService",
    "SessionTracker",
    "StaticEnvironment",
    "SystemEnvironment",
    "get_activity",
    "power_mode_for",
]
