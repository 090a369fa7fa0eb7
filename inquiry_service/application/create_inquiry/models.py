from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CreateInquiryRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(description="Name of the inquirer")
    email: str = Field(
        description="Email address of the inquirer",
        json_schema_extra={"format": "email"},
    )
    message: str = Field(description="Inquiry message")
    event_date: datetime = Field(description="Date of the event")
    user_id: str | None = Field(default=None, description="User ID (optional)")
