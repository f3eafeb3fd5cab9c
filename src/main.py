"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src import __version__
from src.api.routes import admission_router, health_router
from src.core.config import Settings, get_settings
from src.core.errors import WebhookError
from src.core.logging import configure_logging, structured_log
from src.core.telemetry import init_telemetry, instrument_fastapi
from src.services.identity_registry import IdentityRegistry


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: configure logging and telemetry."""
    settings = app.dependency_overrides.get(get_settings, get_settings)()
    configure_logging(settings.log_level)
    init_telemetry(project_id=settings.gcp_project_id)
    structured_log("INFO", "kuberay-tpu-webhook started", operation="app.startup")
    yield
    structured_log("INFO", "Server closed", operation="app.shutdown")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app with a fresh identity registry.

    Worker ids are only unique within one registry, so a deployment must serve
    every admission from a single app instance.
    """
    app = FastAPI(
        title="KubeRay TPU Webhook",
        description="Mutating admission webhook injecting TPU worker ids and hostnames",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.registry = IdentityRegistry()
    if settings is not None:
        app.dependency_overrides[get_settings] = lambda: settings

    app.include_router(health_router)
    app.include_router(admission_router)

    instrument_fastapi(app)

    @app.exception_handler(WebhookError)
    async def webhook_error_handler(request: Request, exc: WebhookError) -> JSONResponse:
        """Map custom exceptions to JSON response."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error_code,
                "message": exc.message,
                "details": exc.details,
            },
        )

    @app.get("/")
    async def root() -> dict:
        return {"service": "kuberay-tpu-webhook"}

    return app


app = create_app()
