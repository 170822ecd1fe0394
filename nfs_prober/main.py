import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request

from .api import health, metrics, targets
from .config import Settings
from .dependencies import (
    configure_settings,
    get_fleet_launcher,
    get_mount_service,
    get_settings,
    subscribe_outcome_handlers,
)
from .logging_config import setup_logging


def create_app(settings: Optional[Settings] = None, configure_logging: bool = True) -> FastAPI:
    if settings is not None:
        configure_settings(settings)
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        # Startup
        if configure_logging:
            setup_logging(settings)

        settings.validate_probe_config()
        logging.info("NFS prober starting up...")
        logging.info(f"Local mount directory: {settings.local_mount_dir}")
        logging.info(f"Mounting with {get_mount_service().get_platform_name()} mounter")

        await subscribe_outcome_handlers(settings)
        fleet_launcher = get_fleet_launcher()
        await fleet_launcher.launch()

        yield

        # Shutdown
        logging.info("NFS prober shutting down...")
        await fleet_launcher.stop()
        logging.info("All probe schedulers stopped")

    app = FastAPI(
        title="NFS Prober",
        description="Mounts remote NFS exports on an interval and reports availability and latency",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logging.debug(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "operation": "http_request",
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
            },
        )
        return response

    app.include_router(health.router)
    app.include_router(targets.router)
    if settings.use_prometheus:
        app.include_router(metrics.router)

    return app
