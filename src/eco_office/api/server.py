# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""FastAPI application factory for the eco-office REST API."""

from __future__ import annotations

from typing import Optional

from eco_office.api import check_dependency

check_dependency("fastapi", "pip install -e '.[api]'")

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from eco_office.api.routes import router  # noqa: E402
from eco_office.config import Settings  # noqa: E402
from eco_office.store import build_store  # noqa: E402
from eco_office.store.base import MetricStore  # noqa: E402


def create_app(
    store: Optional[MetricStore] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    store:
        Store shared by all requests. Built from *settings* when omitted.
    settings:
        Runtime settings; defaults apply when omitted.

    Returns
    -------
    FastAPI
        A fully configured application instance with CORS middleware
        and all API routes included.
    """
    settings = settings or Settings()
    app = FastAPI(
        title="Eco Office API",
        description=(
            "REST API for office sustainability metrics: seat occupancy, "
            "zone energy and seat recommendations, plus logging of "
            "energy-saving activities."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.store = store if store is not None else build_store(settings)
    app.include_router(router)

    return app
