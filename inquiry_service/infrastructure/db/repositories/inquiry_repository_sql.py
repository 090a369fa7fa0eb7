from __future__ import annotations

from datetime import datetime, timezone

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from inquiry_service.domain.errors import InquiryNotFoundError
from inquiry_service.domain.models.inquiry import Inquiry
from inquiry_service.domain.ports.inquiry_repository import InquiryRepository
from inquiry_service.infrastructure.db.orm import InquiryRow
from inquiry_service.infrastructure.timing import timed_operation

log = structlog.stdlib.get_logger()


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SqlAlchemyInquiryRepository(InquiryRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, inquiry: Inquiry) -> Inquiry:
        with timed_operation("db.save", inquiry_id=inquiry.id):
            row = InquiryRow(
                id=inquiry.id,
                name=inquiry.name,
                email=inquiry.email,
                message=inquiry.message,
                event_date=inquiry.event_date,
                user_id=inquiry.user_id,
            )
            self._session.add(row)
            await self._session.flush()
        return self._to_domain(row)

    async def find_all(self) -> list[Inquiry]:
        with timed_operation("db.find_all") as timing:
            stmt = select(InquiryRow).order_by(
                InquiryRow.created_at.desc(), InquiryRow.id.desc()
            )
            rows = (await self._session.execute(stmt)).scalars().all()
            results = [self._to_domain(r) for r in rows]

        log.debug(
            "db.find_all.results",
            returned=len(results),
            elapsed_ms=timing.get("elapsed_ms"),
        )
        return results

    async def delete(self, inquiry_id: str) -> None:
        with timed_operation("db.delete", inquiry_id=inquiry_id):
            stmt = delete(InquiryRow).where(InquiryRow.id == inquiry_id)
            result = await self._session.execute(stmt)
            await self._session.flush()
        log.debug("db.delete.result", inquiry_id=inquiry_id, rows_deleted=result.rowcount)
        if result.rowcount == 0:
            raise InquiryNotFoundError(inquiry_id)

    @staticmethod
    def _to_domain(row: InquiryRow) -> Inquiry:
        return Inquiry(
            id=row.id,
            name=row.name,
            email=row.email,
            message=row.message,
            event_date=_as_utc(row.event_date),
            user_id=row.user_id,
            created_at=_as_utc(row.created_at),
            updated_at=_as_utc(row.updated_at),
        )
