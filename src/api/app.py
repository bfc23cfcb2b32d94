"""FastAPI application factory"""

import logging
import time
import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from src.api.error import ClientError, client_error_handler, unhandled_error_handler, validation_error_handler
from src.api.routes import invoices, line_items, orders, purchase_orders, quotes

logger = logging.getLogger(__name__)


def create_app(config) -> FastAPI:
    if config.ENABLE_SENTRY:
        sentry_sdk.init(dsn=config.DSN_SENTRY, environment=config.SENTRY_ENVIRONMENT)

    app = FastAPI(
        title="Ledger Service",
        description="Totals, balances, statuses and reference numbers of invoices, orders, quotes and purchase orders",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if config.ENABLE_LOGGING_MIDDLEWARE:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.monotonic()
            response = await call_next(request)
            elapsed_ms = int((time.monotonic() - started) * 1000)
            logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms}ms")
            return response

    app.add_exception_handler(ClientError, client_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    for module in (invoices, orders, purchase_orders, quotes, line_items):
        app.include_router(module.router, prefix=config.API_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app
