from __future__ import annotations

from fastapi import FastAPI

from greeting_service.api.exception_handlers import register_exception_handlers
from greeting_service.api.schemas import HealthOut
from greeting_service.core.logging import setup_logging
from greeting_service.core.metrics import PrometheusMetricsMiddleware, metrics_router
from greeting_service.core.middleware.http_logging import HttpLoggingMiddleware
from greeting_service.core.settings import get_settings
from greeting_service.greeting.router import router as greeting_router

setup_logging()


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Greeting Service",
        # Tracebacks in 500 responses; only for local runs.
        debug=settings.is_development,
        description=(
            "Stateless Hello World service run as N independent replicas behind a "
            "load balancer.\n\n"
            "- `GET /` always returns the same plain-text greeting.\n"
            "- No state is kept between requests or shared between replicas."
        ),
        openapi_tags=[
            {
                "name": "greeting",
                "description": "The service's only business endpoint.",
            },
            {
                "name": "health",
                "description": (
                    "Liveness and readiness check for the orchestrator and load balancer."
                ),
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
            "Lightweight endpoint to verify the process is running. Wired to the "
            "Deployment's liveness and readiness probes."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(greeting_router)
    return app


app = create_app()
