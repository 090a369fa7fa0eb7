from __future__ import annotations

from inquiry_service.domain.ports.inquiry_repository import InquiryRepository
from inquiry_service.infrastructure.timing import log_execution

from .models import DeleteInquiryResponse


def _extract_context(_self, inquiry_id: str) -> dict:
    return {"inquiry_id": inquiry_id}


class DeleteInquiryUseCase:
    def __init__(self, repo: InquiryRepository) -> None:
        self._repo = repo

    @log_execution("use_case.delete_inquiry", _extract_context)
    async def execute(self, inquiry_id: str) -> DeleteInquiryResponse:
        await self._repo.delete(inquiry_id)
        return DeleteInquiryResponse()
