from __future__ import annotations

from datetime import datetime, timezone

from inquiry_service.application.models import InquiryResponse
from inquiry_service.domain.models.inquiry import Inquiry
from inquiry_service.domain.ports.inquiry_repository import InquiryRepository
from inquiry_service.infrastructure.timing import log_execution

from .models import CreateInquiryRequest


def _extract_context(_self, request: CreateInquiryRequest) -> dict:
    return {"has_user": request.user_id is not None}


def _to_utc(value: datetime) -> datetime:
    # Timestamps without an offset are taken as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CreateInquiryUseCase:
    def __init__(self, repo: InquiryRepository) -> None:
        self._repo = repo

    @log_execution("use_case.create_inquiry", _extract_context)
    async def execute(self, request: CreateInquiryRequest) -> InquiryResponse:
        inquiry = Inquiry(
            name=request.name,
            email=request.email,
            message=request.message,
            event_date=_to_utc(request.event_date),
            user_id=request.user_id,
        )
        saved = await self._repo.save(inquiry)
        return InquiryResponse.from_domain(saved)
