from __future__ import annotations

import abc

from inquiry_service.domain.models.inquiry import Inquiry


class InquiryRepository(abc.ABC):
    @abc.abstractmethod
    async def save(self, inquiry: Inquiry) -> Inquiry: ...

    @abc.abstractmethod
    async def find_all(self) -> list[Inquiry]:
        """Return every inquiry, most recently created first."""

    @abc.abstractmethod
    async def delete(self, inquiry_id: str) -> None:
        """Remove one inquiry. Raises InquiryNotFoundError if no row matched."""
