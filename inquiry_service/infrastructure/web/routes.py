from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from inquiry_service.application.create_inquiry.models import CreateInquiryRequest
from inquiry_service.application.create_inquiry.use_case import CreateInquiryUseCase
from inquiry_service.application.delete_inquiry.models import DeleteInquiryResponse
from inquiry_service.application.delete_inquiry.use_case import DeleteInquiryUseCase
from inquiry_service.application.list_inquiries.use_case import ListInquiriesUseCase
from inquiry_service.application.models import ErrorResponse, InquiryResponse
from inquiry_service.container import (
    get_create_inquiry_use_case,
    get_delete_inquiry_use_case,
    get_list_inquiries_use_case,
    get_session,
)
from inquiry_service.infrastructure.web.errors import (
    CREATE_FAILED,
    DELETE_FAILED,
    FETCH_FAILED,
    failure_boundary,
)

router = APIRouter(prefix="/api", tags=["Inquiries"])


def _server_error(message: str) -> dict:
    return {
        "model": ErrorResponse,
        "description": "Server error",
        "content": {"application/json": {"example": {"error": message}}},
    }


# The body is parsed inside the failure boundary rather than by FastAPI, so a
# malformed payload fails like any other create error instead of with a 422.
# The schema is declared here to keep it in the API docs.
_CREATE_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {
                "schema": CreateInquiryRequest.model_json_schema(by_alias=True),
            },
        },
    },
}


@router.post(
    "/inquiries",
    summary="Create a new inquiry",
    response_model=InquiryResponse,
    responses={
        200: {"description": "Inquiry created successfully"},
        500: _server_error(CREATE_FAILED),
    },
    openapi_extra=_CREATE_BODY,
)
async def create_inquiry(
    request: Request,
    session: AsyncSession = Depends(get_session),
    uc: CreateInquiryUseCase = Depends(get_create_inquiry_use_case),
):
    async with failure_boundary("inquiries.create", CREATE_FAILED, session):
        body = CreateInquiryRequest.model_validate(await request.json())
        result = await uc.execute(body)
        await session.commit()
    return result


@router.get(
    "/inquiries",
    summary="Get all inquiries",
    description="All inquiries, most recently created first.",
    response_model=list[InquiryResponse],
    responses={
        200: {"description": "List of all inquiries"},
        500: _server_error(FETCH_FAILED),
    },
)
async def list_inquiries(
    uc: ListInquiriesUseCase = Depends(get_list_inquiries_use_case),
):
    async with failure_boundary("inquiries.list", FETCH_FAILED):
        return await uc.execute()


@router.delete(
    "/inquiries/{inquiry_id}",
    summary="Delete an inquiry by ID",
    response_model=DeleteInquiryResponse,
    responses={
        200: {"description": "Inquiry deleted successfully"},
        500: _server_error(DELETE_FAILED),
    },
)
async def delete_inquiry(
    inquiry_id: str = Path(..., description="The inquiry ID"),
    session: AsyncSession = Depends(get_session),
    uc: DeleteInquiryUseCase = Depends(get_delete_inquiry_use_case),
):
    async with failure_boundary("inquiries.delete", DELETE_FAILED, session):
        result = await uc.execute(inquiry_id)
        await session.commit()
    return result
