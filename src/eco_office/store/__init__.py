# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Metric store backends and their registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from eco_office.store.base import MetricStore
from eco_office.store.json_store import JsonFileMetricStore
from eco_office.store.memory import InMemoryMetricStore

if TYPE_CHECKING:
    from eco_office.config import Settings

STORE_REGISTRY: dict[str, type] = {
    "memory": InMemoryMetricStore,
    "json": JsonFileMetricStore,
}


def register_store(name: str, cls: type) -> None:
    """Register a store class by name."""
    STORE_REGISTRY[name] = cls


def get_store(name: str) -> type:
    """Look up a registered store class by name."""
    if name not in STORE_REGISTRY:
        available = ", ".join(sorted(STORE_REGISTRY.keys()))
        raise KeyError(f"Unknown store '{name}'. Available: {available}")
    return STORE_REGISTRY[name]


def build_store(settings: Settings) -> MetricStore:
    """Construct the store described by *settings*, seeded with its layout."""
    from eco_office.data.layouts import get_layout

    layout = get_layout(settings.layout)
    cls = get_store(settings.store.backend)
    if settings.store.backend == "json":
        return cls(path=settings.store.path, layout=layout)
    return cls(layout=layout)


__all__ = [
    "InMemoryMetricStore",
    "JsonFileMetricStore",
    "MetricStore",
    "STORE_REGISTRY",
    "build_store",
    "get_store",
    "register_store",
]
