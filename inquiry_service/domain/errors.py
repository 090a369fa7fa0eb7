from __future__ import annotations


class InquiryNotFoundError(LookupError):
    def __init__(self, inquiry_id: str) -> None:
        super().__init__(f"Inquiry {inquiry_id!r} does not exist")
        self.inquiry_id = inquiry_id
