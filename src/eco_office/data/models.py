# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Core Pydantic v2 data models for the office sustainability engine.

This module defines the data contract shared by the store, the scorers,
the zone energy calculator, the session tracker, and the CLI/API layers.
Entities reference each other by id only; nothing is embedded.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field, model_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class EnergyTier(str, Enum):
    """Static ambient energy-efficiency classification of a seat."""

    low = "low"
    medium = "medium"
    high = "high"

    @property
    def color(self) -> str:
        """Terminal color associated with this tier."""
        return {"low": "green", "medium": "yellow", "high": "red"}[self.value]


class PowerMode(str, Enum):
    """Device power profile observed during a session sample."""

    power_saver = "power-saver"
    balanced = "balanced"
    performance = "performance"


# ---------------------------------------------------------------------------
# Topology and users
# ---------------------------------------------------------------------------

class User(BaseModel):
    """An employee taking part in the sustainability programme."""

    model_config = {"frozen": False, "populate_by_name": True}

    id: str = Field(..., description="Unique user identifier")
    name: str = Field(..., description="Display name")
    email: str = Field(default="", description="Contact e-mail address")
    points: int = Field(
        default=0, ge=0, description="Cumulative reward-point balance"
    )
    level: str = Field(default="", description="Tier/level label derived from points")
    current_seat_id: Optional[int] = Field(
        default=None, description="Seat currently assigned to this user"
    )


class Seat(BaseModel):
    """A single desk on the office floor plan."""

    model_config = {"frozen": False, "populate_by_name": True}

    id: int = Field(..., description="Unique seat identifier")
    x: float = Field(..., description="Horizontal floor-plan position")
    y: float = Field(..., description="Vertical floor-plan position")
    occupied: bool = Field(default=False, description="Whether someone sits here")
    user_id: Optional[str] = Field(
        default=None, description="Occupying user; set exactly when occupied"
    )
    energy_tier: EnergyTier = Field(
        default=EnergyTier.medium, description="Static energy tier of this seat"
    )

    @model_validator(mode="after")
    def _check_occupancy(self) -> Seat:
        if self.occupied != (self.user_id is not None):
            raise ValueError(
                f"Seat {self.id}: occupied={self.occupied} disagrees with "
                f"user_id={self.user_id!r}"
            )
        return self


class Zone(BaseModel):
    """A named region of the office with its seats and installed devices."""

    model_config = {"frozen": False, "populate_by_name": True}

    id: int = Field(..., description="Unique zone identifier")
    name: str = Field(..., description="Human-readable zone name")
    x: float = Field(default=0.0, description="Bounding rectangle origin x")
    y: float = Field(default=0.0, description="Bounding rectangle origin y")
    width: float = Field(default=0.0, ge=0, description="Bounding rectangle width")
    height: float = Field(default=0.0, ge=0, description="Bounding rectangle height")
    seat_ids: list[int] = Field(
        default_factory=list, description="IDs of seats belonging to this zone"
    )
    devices: list[str] = Field(
        default_factory=list,
        description='Installed devices, e.g. "8x Lights", "2x AC Units", "Fan"',
    )


class OfficeLayout(BaseModel):
    """Complete topology snapshot used to seed a metric store."""

    model_config = {"frozen": False, "populate_by_name": True}

    name: str = Field(..., description="Short identifier for the layout")
    description: str = Field(default="", description="Human-readable description")
    users: list[User] = Field(default_factory=list)
    seats: list[Seat] = Field(default_factory=list)
    zones: list[Zone] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_references(self) -> OfficeLayout:
        seat_ids = {s.id for s in self.seats}
        user_ids = {u.id for u in self.users}
        for zone in self.zones:
            missing = [sid for sid in zone.seat_ids if sid not in seat_ids]
            if missing:
                raise ValueError(f"Zone {zone.id} references unknown seats {missing}")
        claimed: set[str] = set()
        for seat in self.seats:
            if seat.user_id is None:
                continue
            if seat.user_id not in user_ids:
                raise ValueError(f"Seat {seat.id} references unknown user {seat.user_id!r}")
            if seat.user_id in claimed:
                raise ValueError(f"User {seat.user_id!r} occupies more than one seat")
            claimed.add(seat.user_id)
        return self


# ---------------------------------------------------------------------------
# Time-series metrics (append-only)
# ---------------------------------------------------------------------------

class DeviceMetric(BaseModel):
    """One session sample recorded for a user's laptop."""

    model_config = {"frozen": False, "populate_by_name": True}

    id: str = Field(..., description="Unique metric identifier")
    user_id: str = Field(..., description="User the sample belongs to")
    timestamp: datetime = Field(default_factory=_utcnow, description="UTC sample time")
    is_dark_mode: bool = Field(default=False, description="Dark display mode active")
    elapsed_hours: float = Field(
        ..., ge=0, description="Hours elapsed since the previous sample"
    )
    power_mode: PowerMode = Field(default=PowerMode.balanced)
    energy_kwh: float = Field(..., ge=0, description="Estimated consumption in kWh")


class SeatingMetric(BaseModel):
    """Recorded each time a user is assigned a seat."""

    model_config = {"frozen": False, "populate_by_name": True}

    id: str = Field(..., description="Unique metric identifier")
    user_id: str = Field(..., description="User that moved")
    seat_id: int = Field(..., description="Seat the user moved into")
    zone_id: Optional[int] = Field(
        default=None, description="Zone containing the seat, if any"
    )
    timestamp: datetime = Field(default_factory=_utcnow)
    energy_tier: EnergyTier = Field(
        ..., description="Snapshot of the seat's tier at assignment time"
    )
    proximity_score: float = Field(
        ..., ge=0, le=100, description="Proximity score at assignment time"
    )


class DeviceBreakdown(BaseModel):
    """Per-category power draw of a zone, in watts."""

    model_config = {"frozen": False, "populate_by_name": True}

    laptops: float = Field(default=0.0, ge=0, description="Laptop draw in W")
    lighting: float = Field(default=0.0, ge=0, description="Lighting draw in W")
    ac: float = Field(default=0.0, ge=0, description="Air-conditioning draw in W")
    other: float = Field(default=0.0, ge=0, description="Fans and other draw in W")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_watts(self) -> float:
        """Sum of all categories in watts."""
        return round(self.laptops + self.lighting + self.ac + self.other, 4)


class ZoneEnergyMetric(BaseModel):
    """Result of one zone energy evaluation.

    ``consumption_kwh`` is the energy drawn over a one-hour evaluation
    window at the instantaneous power level, so it is numerically equal
    to the draw in kW.  The ``breakdown`` stays in watts.
    """

    model_config = {"frozen": False, "populate_by_name": True}

    id: str = Field(..., description="Unique metric identifier")
    zone_id: int = Field(..., description="Zone that was evaluated")
    timestamp: datetime = Field(default_factory=_utcnow)
    consumption_kwh: float = Field(..., ge=0, description="Energy for one hour in kWh")
    co2_kg: float = Field(..., ge=0, description="CO2 emissions in kg")
    breakdown: DeviceBreakdown = Field(default_factory=DeviceBreakdown)


class ActivityRecord(BaseModel):
    """One energy-saving activity logged by a user."""

    model_config = {"frozen": False, "populate_by_name": True}

    id: str = Field(..., description="Unique record identifier")
    user_id: str = Field(..., description="User who logged the activity")
    activity_id: str = Field(..., description="Catalog id of the activity")
    timestamp: datetime = Field(default_factory=_utcnow)
    points: int = Field(..., ge=0, description="Points awarded for the activity")
    balance: int = Field(..., ge=0, description="User's balance after the award")


# ---------------------------------------------------------------------------
# Engine results
# ---------------------------------------------------------------------------

class SessionSample(BaseModel):
    """A single reading taken by the session tracker before persistence."""

    model_config = {"frozen": True}

    is_dark_mode: bool = False
    elapsed_hours: float = Field(default=0.0, ge=0)
    power_mode: PowerMode = PowerMode.balanced
    energy_kwh: float = Field(default=0.0, ge=0)


class RewardResult(BaseModel):
    """Outcome of applying a session sample to a user's balance."""

    user_id: str
    eco_score: float = Field(..., ge=0, le=1)
    delta: int = Field(..., ge=-10, le=10)
    points: int = Field(..., ge=0, description="Balance after applying the delta")
    level: str


class SeatRecommendation(BaseModel):
    """A suggested free seat with the reason it was picked."""

    seat_id: int
    reason: str
    savings: str = Field(..., description='Savings label, e.g. "15% energy"')
    savings_pct: int = Field(..., ge=0, le=100)
    proximity_score: float = Field(..., ge=0, le=100)
    energy_tier: EnergyTier


class EnergyReport(BaseModel):
    """Per-user aggregate of device and seating metrics."""

    user_id: str
    total_energy_kwh: float = Field(default=0.0, ge=0)
    co2_kg: float = Field(default=0.0, ge=0)
    average_proximity_score: float = Field(default=0.0, ge=0, le=100)
    metrics_count: int = Field(default=0, ge=0)
    dark_mode_ratio: float = Field(default=0.0, ge=0, le=1)
    since: Optional[datetime] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def potential_savings(self) -> float:
        """Headroom left on the proximity scale (100 minus the average)."""
        return round(max(0.0, 100.0 - self.average_proximity_score), 2)


class OfficeSummary(BaseModel):
    """Roll-up of the latest zone evaluations across the office."""

    zone_count: int = Field(default=0, ge=0)
    occupied_seats: int = Field(default=0, ge=0)
    total_seats: int = Field(default=0, ge=0)
    consumption_kwh: float = Field(default=0.0, ge=0)
    co2_kg: float = Field(default=0.0, ge=0)
    breakdown: DeviceBreakdown = Field(default_factory=DeviceBreakdown)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def occupancy_pct(self) -> float:
        """Occupied seats as a percentage of all seats."""
        if self.total_seats == 0:
            return 0.0
        return round(self.occupied_seats / self.total_seats * 100, 2)
