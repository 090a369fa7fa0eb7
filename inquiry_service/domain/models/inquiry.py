from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Inquiry:
    name: str
    email: str
    message: str
    event_date: datetime
    user_id: str | None = None
    id: str = field(default_factory=_new_id)
    # Assigned by the persistence layer on insert
    created_at: datetime | None = None
    updated_at: datetime | None = None
