# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""API request/response Pydantic models for the REST interface."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from eco_office.data.models import OfficeSummary, ZoneEnergyMetric


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class SeatMoveRequest(BaseModel):
    """Request body for the ``POST /api/v1/seats/{seat_id}/move`` endpoint."""

    user_id: str = Field(..., description="User moving into the seat.")


class ActivityLogRequest(BaseModel):
    """Request body for the ``POST /api/v1/activities`` endpoint."""

    user_id: str = Field(..., description="User who performed the activity.")
    activity_id: str = Field(
        ...,
        description="Catalog identifier: lights, ac, workspace or natural.",
    )


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    """Response body returned by the ``GET /api/v1/health`` endpoint."""

    status: str = Field(..., description="Service health status (e.g. 'ok').")
    version: str = Field(..., description="Application version string.")
    layout: str = Field(..., description="Layout preset the store was seeded from.")


class ZoneEnergyResponse(BaseModel):
    """Response body returned by the ``GET /api/v1/zones/energy`` endpoint."""

    metrics: list[ZoneEnergyMetric] = Field(
        default_factory=list, description="One fresh metric per zone."
    )
    summary: OfficeSummary = Field(..., description="Office-wide totals.")


class ActivityLogResponse(BaseModel):
    """Response body returned by the ``POST /api/v1/activities`` endpoint."""

    user_id: str
    activity_id: str
    points_awarded: int = Field(..., ge=0)
    points: int = Field(..., ge=0, description="Balance after the award.")
    level: str
    next_level: Optional[str] = Field(
        default=None, description="Next level label, or null at the top level."
    )
