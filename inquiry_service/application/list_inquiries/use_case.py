from __future__ import annotations

from inquiry_service.application.models import InquiryResponse
from inquiry_service.domain.ports.inquiry_repository import InquiryRepository
from inquiry_service.infrastructure.timing import log_execution


class ListInquiriesUseCase:
    def __init__(self, repo: InquiryRepository) -> None:
        self._repo = repo

    @log_execution("use_case.list_inquiries")
    async def execute(self) -> list[InquiryResponse]:
        inquiries = await self._repo.find_all()
        return [InquiryResponse.from_domain(i) for i in inquiries]
