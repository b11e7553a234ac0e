"""
FastAPI application entry point.
Sets up the gateway with lifespan events for logging and the metrics port.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from r2gateway.config import settings
from r2gateway.gateway.router import router as gateway_router, unrouted_method_handler
from r2gateway.gateway.errors import GatewayError, gateway_error_handler
from r2gateway.metrics_server import start_metrics_server, stop_metrics_server
from r2gateway.middleware.metrics_middleware import MetricsMiddleware
from r2gateway.storage import get_r2_client
from r2gateway.utils.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    - Startup: Configure logging, build the R2 client, start the metrics port
    - Shutdown: Stop the metrics port
    """
    configure_logging(settings.service_name, settings.log_level)

    # Build the client up front so a missing configuration is logged at boot
    get_r2_client()

    metrics_server = None
    if settings.metrics_port:
        metrics_server = start_metrics_server(settings.metrics_port)

    yield

    stop_metrics_server(metrics_server)


def create_app() -> FastAPI:
    app = FastAPI(
        title="R2 Upload Gateway",
        description="Presigned upload, listing and deletion gateway for an R2 bucket",
        version="0.1.0",
        lifespan=lifespan,
        # Every path is an object name; keep the docs routes out of the way
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # CORS middleware (for browser and mobile clients)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Metrics middleware (must be after CORS to track all requests)
    app.add_middleware(MetricsMiddleware)

    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(StarletteHTTPException, unrouted_method_handler)

    app.include_router(gateway_router)

    return app


app = create_app()
