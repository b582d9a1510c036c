# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Zone energy calculation.

Derives the instantaneous power draw of a zone from its occupancy and
installed devices, then expresses it as energy and CO2 for a one-hour
evaluation window::

    seat_watts     = occupied_seats * 50
    device_watts   = sum(parse_device(d) for d in zone.devices)
    consumption    = (seat_watts + device_watts) / 1000      # kWh over 1 h
    co2_kg         = consumption * 0.233

Device strings are matched in this order: anything containing ``AC``
draws a flat 1000 W, anything containing ``Fan`` a flat 100 W, and
``"<N>x Lights"`` draws N * 20 W.  Anything else draws nothing.
"""

from __future__ import annotations

import logging
import re
import uuid

from eco_office.data.models import DeviceBreakdown, Zone, ZoneEnergyMetric
from eco_office.scoring.weights import (
    AC_WATTS,
    CO2_KG_PER_KWH,
    FAN_WATTS,
    LAPTOP_WATTS,
    LIGHT_WATTS,
)
from eco_office.store.base import MetricStore

logger = logging.getLogger(__name__)

_LIGHTS_RE = re.compile(r"(\d+)x Lights")


def parse_device(device: str) -> tuple[str, float]:
    """Return ``(category, watts)`` for one installed-device string.

    Categories are ``ac``, ``other`` (fans), ``lighting``, or ``unknown``.
    """
    if "AC" in device:
        return "ac", float(AC_WATTS)
    if "Fan" in device:
        return "other", float(FAN_WATTS)
    if "Lights" in device:
        match = _LIGHTS_RE.search(device)
        watts = int(match.group(1)) * LIGHT_WATTS if match else 0
        return "lighting", float(watts)
    return "unknown", 0.0


def device_breakdown(zone: Zone, occupied_count: int) -> DeviceBreakdown:
    """Per-category draw of *zone* in watts."""
    watts = {
        "laptops": float(occupied_count * LAPTOP_WATTS),
        "lighting": 0.0,
        "ac": 0.0,
        "other": 0.0,
    }
    for device in zone.devices:
        category, draw = parse_device(device)
        if category == "unknown":
            logger.debug("Zone %d: unrecognised device %r counted as 0 W", zone.id, device)
            continue
        watts[category] += draw
    return DeviceBreakdown(**watts)


def zone_power_watts(zone: Zone, occupied_count: int) -> float:
    """Total instantaneous draw of *zone* in watts."""
    seat_watts = occupied_count * LAPTOP_WATTS
    device_watts = sum(parse_device(d)[1] for d in zone.devices)
    return float(seat_watts + device_watts)


class ZoneEnergyCalculator:
    """Evaluates zones against the live seat table and records the result.

    Usage::

        calculator = ZoneEnergyCalculator(store)
        metric = calculator.evaluate(zone_id)
    """

    def __init__(self, store: MetricStore, co2_kg_per_kwh: float = CO2_KG_PER_KWH) -> None:
        self.store = store
        self.co2_kg_per_kwh = co2_kg_per_kwh

    def occupied_count(self, zone: Zone) -> int:
        """Number of occupied member seats of *zone*."""
        members = set(zone.seat_ids)
        return sum(1 for s in self.store.get_seats() if s.id in members and s.occupied)

    def evaluate(self, zone_id: int) -> ZoneEnergyMetric:
        """Compute and store the energy metric for *zone_id*.

        An unknown zone yields a zero-valued metric that is returned but
        not stored, since stored metrics must reference an existing zone.
        """
        zone = self.store.get_zone(zone_id)
        if zone is None:
            logger.warning("Zone %s not found; returning zero-valued metric", zone_id)
            return ZoneEnergyMetric(
                id=str(uuid.uuid4()),
                zone_id=zone_id,
                consumption_kwh=0.0,
                co2_kg=0.0,
            )

        occupied = self.occupied_count(zone)
        consumption_kwh = zone_power_watts(zone, occupied) / 1000
        co2_kg = consumption_kwh * self.co2_kg_per_kwh

        metric = self.store.add_zone_energy_metric(
            zone_id=zone.id,
            consumption_kwh=round(consumption_kwh, 6),
            co2_kg=round(co2_kg, 6),
            breakdown=device_breakdown(zone, occupied),
        )
        logger.debug(
            "Zone %d: %d occupied seats, %.3f kWh, %.3f kg CO2",
            zone.id, occupied, metric.consumption_kwh, metric.co2_kg,
        )
        return metric

    def evaluate_all(self) -> list[ZoneEnergyMetric]:
        """Evaluate every zone in the store."""
        return [self.evaluate(zone.id) for zone in self.store.get_zones()]
