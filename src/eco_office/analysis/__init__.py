# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Zone energy calculation and metric aggregation."""

from eco_office.analysis.energy_report import build_energy_report, office_summary
from eco_office.analysis.zone_energy import (
    ZoneEnergyCalculator,
    device_breakdown,
    parse_device,
    zone_power_watts,
)

__all__ = [
    "ZoneEnergyCalculator",
    "build_energy_report",
    "device_breakdown",
    "office_summary",
    "parse_device",
    "zone_power_watts",
]
