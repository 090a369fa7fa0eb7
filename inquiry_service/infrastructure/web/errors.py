"""Failure handling shared by every inquiry operation.

Routes run their work inside :func:`failure_boundary`. Whatever goes wrong in
there (bad input, a failed query, a missing row) is logged in full and
replaced by :class:`OperationFailedError`, which the app renders as a 500
carrying only the operation's fixed public message.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

log = structlog.stdlib.get_logger()

CREATE_FAILED = "Failed to create inquiry"
FETCH_FAILED = "Failed to fetch inquiries"
DELETE_FAILED = "Failed to delete inquiry"
UNHANDLED_ERROR = "Something broke!"


class OperationFailedError(Exception):
    def __init__(self, public_message: str) -> None:
        super().__init__(public_message)
        self.public_message = public_message


def error_response(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message})


@asynccontextmanager
async def failure_boundary(
    operation: str,
    public_message: str,
    session: AsyncSession | None = None,
) -> AsyncIterator[None]:
    try:
        yield
    except Exception as e:
        log.exception(
            f"{operation}.failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        if session is not None:
            try:
                await session.rollback()
            except Exception as rollback_error:
                # The public message must survive a dead connection too
                log.exception(
                    f"{operation}.rollback_failed",
                    error=str(rollback_error),
                    error_type=type(rollback_error).__name__,
                )
        raise OperationFailedError(public_message) from e


async def operation_failed_handler(_request: Request, exc: OperationFailedError) -> JSONResponse:
    return error_response(exc.public_message)
