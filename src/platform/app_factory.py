"""
Cinema API application factory.

`src.main` and the test suite both build the app here, so routers,
middleware and error envelopes are identical in production and tests; they
differ only in the lifespan they pass in.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import datetime, timezone
import time
from typing import Any

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.platform.config.core_setting import settings
from src.platform.exception.exception_handlers import register_exception_handlers
from src.service.cinema.driving_adapter.http_controller import (
    booking_controller,
    fnb_controller,
    payment_controller,
    show_controller,
)


# (router, prefix, tag)
API_ROUTES: list[tuple[APIRouter, str, str]] = [
    (show_controller.router, '/api/shows', 'show'),
    (booking_controller.router, '/api/bookings', 'booking'),
    (payment_controller.router, '/api/payments', 'payment'),
    (fnb_controller.router, '/api/fnb', 'fnb'),
]


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Cinema seat booking',
) -> FastAPI:
    """
    Args:
        lifespan: startup/shutdown context (wiring, store handle)
        title_suffix: appended to the OpenAPI title, e.g. " (Test)"
        description: OpenAPI description
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )
    register_exception_handlers(app)

    for router, prefix, tag in API_ROUTES:
        app.include_router(router, prefix=prefix, tags=[tag])
    _register_ops_endpoints(app, started_at=time.monotonic())
    return app


def _register_ops_endpoints(app: FastAPI, *, started_at: float) -> None:
    @app.get('/health', tags=['ops'])
    async def health_check() -> dict[str, Any]:
        return {
            'success': True,
            'message': f'{settings.PROJECT_NAME} API is healthy',
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'uptime': round(time.monotonic() - started_at, 3),
            'environment': settings.ENVIRONMENT,
        }

    @app.get('/metrics', tags=['ops'])
    async def get_metrics() -> PlainTextResponse:
        """Prometheus scrape endpoint."""
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
