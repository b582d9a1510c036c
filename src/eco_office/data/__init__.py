# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Data models and office layout presets."""

from eco_office.data.models import (
    DeviceBreakdown,
    DeviceMetric,
    EnergyReport,
    EnergyTier,
    OfficeLayout,
    OfficeSummary,
    PowerMode,
    RewardResult,
    Seat,
    SeatingMetric,
    SeatRecommendation,
    SessionSample,
    User,
    Zone,
    ZoneEnergyMetric,
)
from eco_office.data.layouts import LAYOUTS, get_layout

__all__ = [
    "DeviceBreakdown",
    "DeviceMetric",
    "EnergyReport",
    "EnergyTier",
    "LAYOUTS",
    "OfficeLayout",
    "OfficeSummary",
    "PowerMode",
    "RewardResult",
    "Seat",
    "SeatRecommendation",
    "SeatingMetric",
    "SessionSample",
    "User",
    "Zone",
    "ZoneEnergyMetric",
    "get_layout",
]
