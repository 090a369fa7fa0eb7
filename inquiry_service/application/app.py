from __future__ import annotations

import time
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from inquiry_service.container import Container
from inquiry_service.infrastructure.config import PORT
from inquiry_service.infrastructure.db.engine import DATABASE_URL, _mask_password
from inquiry_service.infrastructure.logging import setup_logging
from inquiry_service.infrastructure.request_context import (
    REQUEST_ID_HEADER,
    end_request,
    start_request,
)
from inquiry_service.infrastructure.web.errors import (
    UNHANDLED_ERROR,
    OperationFailedError,
    error_response,
    operation_failed_handler,
)
from inquiry_service.infrastructure.web.routes import router as inquiries_router

# Configure logging early so all logs use consistent formatting
setup_logging()
log = structlog.stdlib.get_logger()


class App:
    def __init__(self) -> None:
        self._container = Container()
        self._container.config.database_url.from_value(DATABASE_URL)
        self._container.wire()
        log.info("app.db.configured", url=_mask_password(DATABASE_URL))

        self._fastapi = FastAPI(
            title="Inquiry API",
            description="API for managing inquiries",
            version="1.0.0",
            contact={
                "name": "API Support",
                "email": "support@example.com",
            },
            servers=[
                {"url": f"http://localhost:{PORT}", "description": "Local server"},
            ],
            openapi_tags=[
                {
                    "name": "Inquiries",
                    "description": "Create, list and delete contact/event inquiries",
                },
                {
                    "name": "health",
                    "description": "Health check endpoints for monitoring",
                },
            ],
            docs_url="/api-docs",
            openapi_url="/api-docs/openapi.json",
            redoc_url=None,
            lifespan=self._lifespan,
        )
        self._fastapi.include_router(inquiries_router)
        self._fastapi.add_exception_handler(OperationFailedError, operation_failed_handler)
        self._fastapi.middleware("http")(self._logging_middleware)
        # Added last so it wraps everything, including catch-all error responses
        self._fastapi.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=[REQUEST_ID_HEADER],
        )
        self._fastapi.get(
            "/health",
            tags=["health"],
            summary="Health check",
            response_description="Service health status",
        )(self._health_check)

    @property
    def fastapi(self) -> FastAPI:
        return self._fastapi

    @property
    def container(self) -> Container:
        return self._container

    async def __call__(self, scope, receive, send) -> None:
        await self._fastapi(scope, receive, send)

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        log.info("app.started", port=PORT)
        yield
        await self._container.engine().dispose()
        log.info("app.shutdown")

    async def _health_check(self) -> dict:
        """Liveness probe that also proves the database answers."""
        async with self._container.engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        return {"status": "healthy"}

    @staticmethod
    async def _logging_middleware(request: Request, call_next) -> Response:
        # Starlette lowercases header names
        request_id = start_request(
            request.headers.get(REQUEST_ID_HEADER.lower()),
            method=request.method,
            path=request.url.path,
        )

        start = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed_ms = round((time.perf_counter() - start) * 1000, 2)

            # Log level based on status code for easier filtering
            if response.status_code >= 500:
                log.error("request.completed", status_code=response.status_code, elapsed_ms=elapsed_ms)
            elif response.status_code >= 400:
                log.warning("request.completed", status_code=response.status_code, elapsed_ms=elapsed_ms)
            else:
                log.info("request.completed", status_code=response.status_code, elapsed_ms=elapsed_ms)
        except Exception as e:
            # Nothing else caught it: log the whole trace, hand the client a fixed body
            log.exception(
                "request.failed",
                elapsed_ms=round((time.perf_counter() - start) * 1000, 2),
                error=str(e),
                error_type=type(e).__name__,
            )
            response = error_response(UNHANDLED_ERROR)
        finally:
            end_request()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
