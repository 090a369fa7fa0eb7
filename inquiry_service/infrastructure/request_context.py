"""Request correlation for logs.

Each request carries an id (taken from ``X-Request-ID`` or generated) that is
bound into the structlog context so every event logged while serving it can be
grouped, and echoed back on the response.
"""
from __future__ import annotations

import uuid
from typing import Any

import structlog

REQUEST_ID_HEADER = "X-Request-ID"


def _generate_id() -> str:
    return uuid.uuid4().hex[:12]


def start_request(request_id: str | None = None, **context: Any) -> str:
    """Bind the request id plus ``context`` for every event logged by this task.

    Returns the id in effect, generating one when the caller sent none.
    """
    rid = request_id or _generate_id()
    structlog.contextvars.bind_contextvars(request_id=rid, **context)
    return rid


def end_request() -> None:
    structlog.contextvars.clear_contextvars()
