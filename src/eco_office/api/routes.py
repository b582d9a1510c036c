# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""FastAPI router with REST endpoints for the eco-office API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from eco_office.api import check_dependency

check_dependency("fastapi", "pip install -e '.[api]'")

from fastapi import APIRouter, Depends, HTTPException, Query, Request  # noqa: E402

from eco_office.analysis.energy_report import build_energy_report, office_summary  # noqa: E402
from eco_office.analysis.zone_energy import ZoneEnergyCalculator  # noqa: E402
from eco_office.api.models import (  # noqa: E402
    ActivityLogRequest,
    ActivityLogResponse,
    HealthResponse,
    SeatMoveRequest,
    ZoneEnergyResponse,
)
from eco_office.config import Settings  # noqa: E402
from eco_office.data.models import (  # noqa: E402
    ActivityRecord,
    EnergyReport,
    Seat,
    SeatingMetric,
    SeatRecommendation,
    User,
)
from eco_office.errors import InvariantViolation, NotFoundError  # noqa: E402
from eco_office.recommendations.engine import SeatRecommender  # noqa: E402
from eco_office.scoring.rewards import RewardScorer, leaderboard  # noqa: E402
from eco_office.scoring.thresholds import next_level  # noqa: E402
from eco_office.store.base import MetricStore  # noqa: E402
from eco_office.tracking.activities import ActivityLogger, get_activity  # noqa: E402
from eco_office.tracking.seating import SeatingService  # noqa: E402

router = APIRouter(prefix="/api/v1", tags=["eco-office"])


# ---------------------------------------------------------------------------
# Dependency injection
# ---------------------------------------------------------------------------

def get_store(request: Request) -> MetricStore:
    """Return the store attached to the running application.

    Used as a FastAPI dependency so tests can swap the store through
    ``app.dependency_overrides``.
    """
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, InvariantViolation):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, KeyError):
        return HTTPException(status_code=400, detail=str(exc).strip("'\""))
    return HTTPException(status_code=500, detail=f"Request failed: {exc}")


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------
# Handlers that touch the store are plain functions: store calls take a
# threading lock and may write files, so they run in the threadpool.

@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Return service health status and version information."""
    import eco_office

    return HealthResponse(status="ok", version=eco_office.__version__, layout=settings.layout)


@router.get("/seats", response_model=list[Seat])
def seats(store: MetricStore = Depends(get_store)) -> list[Seat]:
    return store.get_seats()


@router.post("/seats/{seat_id}/move", response_model=SeatingMetric)
def move_to_seat(
    seat_id: int,
    request: SeatMoveRequest,
    store: MetricStore = Depends(get_store),
) -> SeatingMetric:
    """Move a user into *seat_id* and return the recorded seating metric.

    Responds 409 when another user already holds the seat.
    """
    try:
        return SeatingService(store).move(request.user_id, seat_id)
    except Exception as exc:
        raise _http_error(exc) from exc


@router.get("/zones/energy", response_model=ZoneEnergyResponse)
def zone_energy(
    store: MetricStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> ZoneEnergyResponse:
    """Evaluate every zone and return the fresh metrics plus office totals."""
    calculator = ZoneEnergyCalculator(store, co2_kg_per_kwh=settings.co2_kg_per_kwh)
    metrics = calculator.evaluate_all()
    return ZoneEnergyResponse(metrics=metrics, summary=office_summary(store))


@router.get("/recommendations", response_model=list[SeatRecommendation])
def recommendations(
    sort: bool = Query(default=False, description="Order by estimated savings"),
    store: MetricStore = Depends(get_store),
) -> list[SeatRecommendation]:
    return SeatRecommender(store).recommend(sort_by_savings=sort)


@router.post("/activities", response_model=ActivityLogResponse)
def log_activity(
    request: ActivityLogRequest,
    store: MetricStore = Depends(get_store),
) -> ActivityLogResponse:
    """Log an energy-saving activity and award its points.

    Unknown users map to 404 and unknown activities to 400.
    """
    try:
        activity = get_activity(request.activity_id)
        user = ActivityLogger(RewardScorer(store)).log(request.user_id, activity.id)
    except Exception as exc:
        raise _http_error(exc) from exc

    upcoming = next_level(user.points)
    return ActivityLogResponse(
        user_id=user.id,
        activity_id=activity.id,
        points_awarded=activity.points,
        points=user.points,
        level=user.level,
        next_level=upcoming[0] if upcoming else None,
    )


@router.get("/users", response_model=list[User])
def users(store: MetricStore = Depends(get_store)) -> list[User]:
    return store.get_users()


@router.get("/users/{user_id}", response_model=User)
def user_detail(user_id: str, store: MetricStore = Depends(get_store)) -> User:
    user = store.get_user(user_id)
    if user is None:
        raise _http_error(NotFoundError("User", user_id))
    return user


@router.get("/users/{user_id}/report", response_model=EnergyReport)
def user_report(
    user_id: str,
    since: Optional[datetime] = Query(default=None, description="Only count metrics after this time"),
    store: MetricStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> EnergyReport:
    if store.get_user(user_id) is None:
        raise _http_error(NotFoundError("User", user_id))
    return build_energy_report(
        store, user_id, since=since, co2_kg_per_kwh=settings.co2_kg_per_kwh
    )


@router.get("/users/{user_id}/activities", response_model=list[ActivityRecord])
def user_activities(
    user_id: str,
    limit: int = Query(default=10, ge=1, le=100),
    store: MetricStore = Depends(get_store),
) -> list[ActivityRecord]:
    """Activities the user logged, newest first."""
    if store.get_user(user_id) is None:
        raise _http_error(NotFoundError("User", user_id))
    return ActivityLogger(RewardScorer(store)).recent(user_id, limit=limit)


@router.get("/leaderboard", response_model=list[User])
def leaderboard_view(
    limit: Optional[int] = Query(default=None, ge=1),
    store: MetricStore = Depends(get_store),
) -> list[User]:
    return leaderboard(store.get_users(), limit=limit)
