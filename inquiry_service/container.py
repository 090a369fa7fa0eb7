from __future__ import annotations

from dependency_injector import containers, providers
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from inquiry_service.application.create_inquiry.use_case import CreateInquiryUseCase
from inquiry_service.application.delete_inquiry.use_case import DeleteInquiryUseCase
from inquiry_service.application.list_inquiries.use_case import ListInquiriesUseCase
from inquiry_service.infrastructure.config import SQL_ECHO
from inquiry_service.infrastructure.db.repositories.inquiry_repository_sql import (
    SqlAlchemyInquiryRepository,
)


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(
        modules=[
            "inquiry_service.infrastructure.web.routes",
        ],
    )

    config = providers.Configuration()

    # One engine (and connection pool) per process, shared by every request
    engine = providers.Singleton(create_async_engine, config.database_url, echo=SQL_ECHO)
    session_factory = providers.Singleton(
        async_sessionmaker, engine, expire_on_commit=False
    )


@inject
async def get_session(
    factory: async_sessionmaker = Depends(Provide[Container.session_factory]),
) -> AsyncSession:  # type: ignore[misc]
    async with factory() as session:
        yield session


async def get_inquiry_repository(
    session: AsyncSession = Depends(get_session),
) -> SqlAlchemyInquiryRepository:
    return SqlAlchemyInquiryRepository(session)


async def get_create_inquiry_use_case(
    repo: SqlAlchemyInquiryRepository = Depends(get_inquiry_repository),
) -> CreateInquiryUseCase:
    return CreateInquiryUseCase(repo)


async def get_list_inquiries_use_case(
    repo: SqlAlchemyInquiryRepository = Depends(get_inquiry_repository),
) -> ListInquiriesUseCase:
    return ListInquiriesUseCase(repo)


async def get_delete_inquiry_use_case(
    repo: SqlAlchemyInquiryRepository = Depends(get_inquiry_repository),
) -> DeleteInquiryUseCase:
    return DeleteInquiryUseCase(repo)
