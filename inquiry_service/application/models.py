from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from inquiry_service.domain.models.inquiry import Inquiry


class InquiryResponse(BaseModel):
    """An inquiry as returned to API clients (camelCase field names)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(description="The auto-generated ID of the inquiry")
    name: str = Field(description="Name of the inquirer")
    email: str = Field(
        description="Email address of the inquirer",
        json_schema_extra={"format": "email"},
    )
    message: str = Field(description="Inquiry message")
    event_date: datetime = Field(description="Date of the event")
    user_id: str | None = Field(default=None, description="User ID (optional)")
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, inquiry: Inquiry) -> InquiryResponse:
        return cls(
            id=inquiry.id,
            name=inquiry.name,
            email=inquiry.email,
            message=inquiry.message,
            event_date=inquiry.event_date,
            user_id=inquiry.user_id,
            created_at=inquiry.created_at,
            updated_at=inquiry.updated_at,
        )


class ErrorResponse(BaseModel):
    error: str
