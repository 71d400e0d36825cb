"""Staff CRUD (/api/v1/staff)"""

from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends

from ..deps import get_staff_service, log_request
from ..schemas import (
    StaffListResponse,
    StaffOut,
    StaffPageResponse,
    StaffRequest,
    StaffUpdateRequest,
)
from ..services import StaffService

router = APIRouter(prefix="/api/v1/staff", tags=["staff"])


@router.post(
    "/create",
    response_model=StaffOut,
    status_code=201,
    dependencies=[Depends(log_request)],
)
async def create_staff(
    req: StaffRequest,
    service: StaffService = Depends(get_staff_service),
):
    return await service.create_staff(req)


@router.get("/get-one/{staff_id}", response_model=StaffOut)
async def get_one_staff(
    staff_id: uuid.UUID,
    service: StaffService = Depends(get_staff_service),
):
    return await service.get_one_staff(staff_id)


@router.put("/update/{staff_id}", response_model=StaffOut)
async def update_staff(
    staff_id: uuid.UUID,
    req: StaffUpdateRequest,
    service: StaffService = Depends(get_staff_service),
):
    return await service.update_staff(staff_id, req)


@router.delete("/delete/{staff_id}")
async def delete_staff(
    staff_id: uuid.UUID,
    service: StaffService = Depends(get_staff_service),
):
    await service.delete_staff(staff_id)
    return {"message": "deleted", "id": str(staff_id)}


@router.get("/get-list", response_model=StaffListResponse)
async def get_list_staff(
    username: Optional[str] = None,
    email: Optional[str] = None,
    role: Optional[str] = None,
    business_id: Optional[uuid.UUID] = None,
    service: StaffService = Depends(get_staff_service),
):
    return await service.get_list_staff(
        username=username, email=email, role=role, business_id=business_id
    )


@router.get("/get-list-paging", response_model=StaffPageResponse)
async def get_list_staff_paging(
    keyword: Optional[str] = None,
    page: int = 1,
    page_size: int = 10,
    sort: Optional[str] = None,
    service: StaffService = Depends(get_staff_service),
):
    return await service.get_list_staff_with_paging(
        keyword=keyword, page=page, page_size=page_size, sort=sort
    )
