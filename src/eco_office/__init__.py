# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Eco Office - Office Sustainability Metrics and Seat Recommendation Engine."""

__version__ = "0.1.0"

from eco_office.config import Settings, load_settings, resolve_settings
from eco_office.errors import (
    EcoOfficeError,
    InvariantViolation,
    NotFoundError,
    SeatOccupiedError,
)
from eco_office.data.models import (
    ActivityRecord,
    DeviceMetric,
    EnergyReport,
    EnergyTier,
    OfficeLayout,
    PowerMode,
    RewardResult,
    Seat,
    SeatingMetric,
    SeatRecommendation,
    User,
    Zone,
    ZoneEnergyMetric,
)
from eco_office.data.layouts import LAYOUTS, get_layout
from eco_office.store import InMemoryMetricStore, JsonFileMetricStore, MetricStore, build_store
from eco_office.scoring.proximity import ProximityScorer
from eco_office.scoring.rewards import RewardScorer
from eco_office.analysis.zone_energy import ZoneEnergyCalculator
from eco_office.recommendations.engine import SeatRecommender
from eco_office.tracking.session import SessionTracker

__all__ = [
    "ActivityRecord",
    "DeviceMetric",
    "EcoOfficeError",
    "EnergyReport",
    "EnergyTier",
    "InMemoryMetricStore",
    "InvariantViolation",
    "JsonFileMetricStore",
    "LAYOUTS",
    "MetricStore",
    "NotFoundError",
    "OfficeLayout",
    "PowerMode",
    "ProximityScorer",
    "RewardResult",
    "RewardScorer",
    "Seat",
    "SeatOccupiedError",
    "SeatRecommendation",
    "SeatRecommender",
    "SeatingMetric",
    "SessionTracker",
    "Settings",
    "User",
    "Zone",
    "ZoneEnergyCalculator",
    "ZoneEnergyMetric",
    "build_store",
    "get_layout",
    "load_settings",
    "resolve_settings",
]
