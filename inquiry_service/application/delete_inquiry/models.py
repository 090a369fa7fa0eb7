from __future__ import annotations

from pydantic import BaseModel

DELETED_MESSAGE = "Inquiry deleted successfully"


class DeleteInquiryResponse(BaseModel):
    message: str = DELETED_MESSAGE
