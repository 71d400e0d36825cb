"""Business CRUD + 벌크 생성 (/api/v1/business)"""

from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from ..deps import get_business_service, log_request
from ..schemas import BusinessListResponse, BusinessOut, BusinessRequest
from ..services import BusinessService

router = APIRouter(prefix="/api/v1/business", tags=["business"])


def _list_params(
    name: Optional[str] = None,
    address: Optional[str] = None,
    business_type: Optional[str] = Query(None, alias="type"),
    description: Optional[str] = None,
    page: int = 1,
    page_size: int = 10,
    sort: Optional[str] = None,
) -> dict:
    return {
        "name": name,
        "address": address,
        "business_type": business_type,
        "description": description,
        "page": page,
        "page_size": page_size,
        "sort": sort,
    }


@router.post(
    "/create",
    response_model=BusinessOut,
    status_code=201,
    dependencies=[Depends(log_request)],
)
async def create_business(
    req: BusinessRequest,
    service: BusinessService = Depends(get_business_service),
):
    return await service.create_business(req)


@router.post(
    "/create-v2",
    response_model=list[BusinessOut],
    status_code=201,
    dependencies=[Depends(log_request)],
)
async def create_business_v2(
    response: Response,
    service: BusinessService = Depends(get_business_service),
):
    """
    합성 Business 벌크 생성.

    201: 전부 저장됨 / 207: 일부만 저장됨 (X-Ingest-* 헤더 참고)
    """
    items, report = await service.create_business_v2()
    response.status_code = 201 if report.complete else 207
    response.headers["X-Ingest-Total"] = str(report.total)
    response.headers["X-Ingest-Persisted"] = str(report.persisted)
    response.headers["X-Ingest-Failed-Workers"] = ",".join(report.failed_workers)
    return items


@router.get("/get-one/{business_id}", response_model=BusinessOut)
async def get_one_business(
    business_id: uuid.UUID,
    service: BusinessService = Depends(get_business_service),
):
    return await service.get_one_business(business_id)


@router.get("/get-one-v2/{business_id}", response_model=BusinessOut)
async def get_one_business_v2(
    business_id: uuid.UUID,
    service: BusinessService = Depends(get_business_service),
):
    return await service.get_one_business_v2(business_id)


@router.get("/get-list", response_model=BusinessListResponse)
async def get_list_business(
    params: dict = Depends(_list_params),
    service: BusinessService = Depends(get_business_service),
):
    return await service.get_list_business(**params)


@router.get("/get-list-v2", response_model=BusinessListResponse)
async def get_list_business_v2(
    params: dict = Depends(_list_params),
    service: BusinessService = Depends(get_business_service),
):
    return await service.get_list_business(preload_staffs=True, **params)


@router.put("/update/{business_id}", response_model=BusinessOut)
async def update_business(
    business_id: uuid.UUID,
    req: BusinessRequest,
    service: BusinessService = Depends(get_business_service),
):
    return await service.update_business(business_id, req)


@router.delete("/delete/{business_id}")
async def delete_business(
    business_id: uuid.UUID,
    service: BusinessService = Depends(get_business_service),
):
    await service.delete_business(business_id)
    return {"message": "deleted", "id": str(business_id)}
