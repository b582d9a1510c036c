"""User- and office-level aggregation of recorded metrics.

Readers aggregate rather than rely on record order, so both functions
work unchanged against any store backend.
"""

from __future__ import annotations

from datetime import datetime, timezone

from eco_office.data.models import DeviceBreakdown, EnergyReport, OfficeSummary
from eco_office.scoring.weights import CO2_KG_PER_KWH
from eco_office.store.base import MetricStore


def build_energy_report(
    store: MetricStore,
    user_id: str,
    since: datetime | None = None,
    co2_kg_per_kwh: float = CO2_KG_PER_KWH,
) -> EnergyReport:
    """Aggregate a user's device and seating metrics.

    When *since* is given, only metrics stamped at or after it count.
    CO2 is derived from the total energy at *co2_kg_per_kwh*.
    The average proximity score is 0.0 when no seating metrics exist,
    which reports the full 100 as potential savings.
    """
    device = store.get_device_metrics(user_id)
    seating = store.get_seating_metrics(user_id)
    if since is not None:
        if since.tzinfo is None:
            since = since.replace(tzinfo=timezone.utc)
        device = [m for m in device if m.timestamp >= since]
        seating = [m for m in seating if m.timestamp >= since]

    total_kwh = sum(m.energy_kwh for m in device)
    avg_proximity = (
        sum(m.proximity_score for m in seating) / len(seating) if seating else 0.0
    )
    dark_ratio = (
        sum(1 for m in device if m.is_dark_mode) / len(device) if device else 0.0
    )

    return EnergyReport(
        user_id=user_id,
        total_energy_kwh=round(total_kwh, 6),
        co2_kg=round(total_kwh * co2_kg_per_kwh, 6),
        average_proximity_score=round(avg_proximity, 4),
        metrics_count=len(device) + len(seating),
        dark_mode_ratio=round(dark_ratio, 4),
        since=since,
    )


def office_summary(store: MetricStore) -> OfficeSummary:
    """Roll up the most recent evaluation of every zone.

    Zones that have never been evaluated contribute nothing.
    """
    zones = store.get_zones()
    seats = store.get_seats()

    consumption = 0.0
    co2 = 0.0
    totals = {"laptops": 0.0, "lighting": 0.0, "ac": 0.0, "other": 0.0}
    for zone in zones:
        metrics = store.get_zone_energy_metrics(zone.id)
        if not metrics:
            continue
        latest = max(metrics, key=lambda m: m.timestamp)
        consumption += latest.consumption_kwh
        co2 += latest.co2_kg
        for key in totals:
            totals[key] += getattr(latest.breakdown, key)

    return OfficeSummary(
        zone_count=len(zones),
        occupied_seats=sum(1 for s in seats if s.occupied),
        total_seats=len(seats),
        consumption_kwh=round(consumption, 6),
        co2_kg=round(co2, 6),
        breakdown=DeviceBreakdown(**totals),
    )
