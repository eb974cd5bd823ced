from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from patient_service.api.exception_handlers import register_exception_handlers
from patient_service.api.schemas import HealthOut
from patient_service.core.db import close_db, init_db
from patient_service.core.logging import setup_logging
from patient_service.core.metrics import PrometheusMetricsMiddleware, metrics_router
from patient_service.core.middleware.http_logging import HttpLoggingMiddleware
from patient_service.core.settings import get_settings
from patient_service.patients.router import router as patients_router

setup_logging()


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Settings are read at startup, not import, so importing the app never needs
        # DATABASE_URL (e.g. during pytest collection).
        settings = get_settings()
        init_db(app=app, database_url=str(settings.database_url), echo=settings.database_echo)
        yield
        await close_db(app=app)

    app = FastAPI(
        title="Patient Management API",
        description=(
            "API for managing patient records.\n\n"
            "Rules:\n"
            "- Contact email is unique across all patients.\n"
            "- `id` and the registration date are assigned on creation and never change.\n"
            "- Logging and metrics avoid PHI/PII by using route templates and metadata only."
        ),
        lifespan=lifespan,
        docs_url="/swagger",
        redoc_url="/docs",
        openapi_tags=[
            {
                "name": "health",
                "description": (
                    "Basic uptime and readiness checks for load balancers and monitoring."
                ),
            },
            {
                "name": "patients",
                "description": "Create, list, update and delete patient records.",
            },
            {
                "name": "metrics",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    register_exception_handlers(app)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running. "
            "Does not check the database."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(patients_router)
    return app


app = create_app()
