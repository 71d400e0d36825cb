"""
CRUD 오케스트레이션 — 라우터와 저장소 사이의 얇은 계층.

저장소 예외는 translate_errors로 ServiceError(404/409/500)가 된다.
"""

from __future__ import annotations

import asyncio
import logging
import uuid

from business_store import (
    Business,
    BusinessRepository,
    IngestConfig,
    IngestionReport,
    RecordNotFound,
    Staff,
    generate_businesses,
    run_ingestion,
)
from pipeline_commons import AsyncFailureLogger

from .errors import ServiceError, translate_errors
from .schemas import (
    BusinessListResponse,
    BusinessOut,
    BusinessRequest,
    PageMeta,
    StaffListResponse,
    StaffOut,
    StaffPageResponse,
    StaffRequest,
    StaffUpdateRequest,
)

logger = logging.getLogger(__name__)


def _apply(target, fields: dict):
    """값이 주어진(None이 아닌) 필드만 대상 객체에 복사."""
    for key, value in fields.items():
        if value is not None:
            setattr(target, key, value)


class BusinessService:
    def __init__(
        self,
        repository: BusinessRepository,
        ingest_config: IngestConfig | None = None,
        failure_logger: AsyncFailureLogger | None = None,
    ):
        self.repository = repository
        self.ingest_config = ingest_config or IngestConfig()
        self.failure_logger = failure_logger

    async def create_business(self, req: BusinessRequest) -> BusinessOut:
        business = Business(staffs=[], **req.model_dump(exclude_none=True))
        with translate_errors("create business"):
            business = await self.repository.create_business(business)
        return BusinessOut.build(business)

    async def create_business_v2(
        self, cancel: asyncio.Event | None = None
    ) -> tuple[list[BusinessOut], IngestionReport]:
        """합성 Business를 생성해 벌크 적재. 생성한 목록과 적재 결과를 함께 반환."""
        businesses = generate_businesses(self.ingest_config.total)
        report = await run_ingestion(
            businesses,
            self.repository,
            self.ingest_config,
            cancel=cancel,
            failure_logger=self.failure_logger,
        )
        return [BusinessOut.build(b) for b in businesses], report

    async def get_one_business(self, business_id: uuid.UUID) -> BusinessOut:
        """Business 조회 후 staff를 별도 쿼리로 조회."""
        with translate_errors("get business"):
            business = await self.repository.get_one_business(business_id)
            staffs = await self.repository.get_staff_by_business_id(business_id)
        return BusinessOut.build(business, staffs)

    async def get_one_business_v2(self, business_id: uuid.UUID) -> BusinessOut:
        """staff를 eager-load하여 한 번에 조회."""
        with translate_errors("get business"):
            business = await self.repository.get_one_business(business_id, preload_staffs=True)
        return BusinessOut.build(business)

    async def get_list_business(self, *, preload_staffs: bool = False, **params) -> BusinessListResponse:
        """
        preload_staffs=False: 목록 조회 후 Business마다 staff 쿼리 (v1)
        preload_staffs=True:  staff eager-load (v2)
        """
        with translate_errors("list business"):
            rows, meta = await self.repository.get_list_business(preload_staffs=preload_staffs, **params)
            if preload_staffs:
                data = [BusinessOut.build(b) for b in rows]
            else:
                data = [
                    BusinessOut.build(b, await self.repository.get_staff_by_business_id(b.id))
                    for b in rows
                ]
        return BusinessListResponse(data=data, meta=PageMeta(**meta))

    async def update_business(self, business_id: uuid.UUID, req: BusinessRequest) -> BusinessOut:
        with translate_errors("update business"):
            business = await self.repository.get_one_business(business_id)
            _apply(business, req.model_dump())
            business = await self.repository.update_business(business)
        return BusinessOut.build(business)

    async def delete_business(self, business_id: uuid.UUID):
        with translate_errors("delete business"):
            business = await self.repository.get_one_business(business_id)
            await self.repository.delete_business(business)
        logger.info(f"business 삭제: {business_id}")


class StaffService:
    def __init__(self, repository: BusinessRepository):
        self.repository = repository

    async def create_staff(self, req: StaffRequest) -> StaffOut:
        with translate_errors("create staff"):
            try:
                await self.repository.get_one_business(req.business_id)
            except RecordNotFound as e:
                raise ServiceError.not_found(f"business {req.business_id} not found") from e
            staff = await self.repository.create_staff(Staff(**req.model_dump()))
        return StaffOut.model_validate(staff)

    async def get_one_staff(self, staff_id: uuid.UUID) -> StaffOut:
        with translate_errors("get staff"):
            staff = await self.repository.get_one_staff(staff_id)
        return StaffOut.model_validate(staff)

    async def update_staff(self, staff_id: uuid.UUID, req: StaffUpdateRequest) -> StaffOut:
        with translate_errors("update staff"):
            staff = await self.repository.get_one_staff(staff_id)
            _apply(staff, req.model_dump())
            staff = await self.repository.update_staff(staff)
        return StaffOut.model_validate(staff)

    async def delete_staff(self, staff_id: uuid.UUID):
        with translate_errors("delete staff"):
            staff = await self.repository.get_one_staff(staff_id)
            await self.repository.delete_staff(staff)

    async def get_list_staff(self, **filters) -> StaffListResponse:
        with translate_errors("list staff"):
            rows = await self.repository.get_list_staff(**filters)
        return StaffListResponse(data=[StaffOut.model_validate(s) for s in rows])

    async def get_list_staff_with_paging(self, **params) -> StaffPageResponse:
        with translate_errors("list staff"):
            rows, meta = await self.repository.get_list_staff_with_paging(**params)
        return StaffPageResponse(
            data=[StaffOut.model_validate(s) for s in rows],
            meta=PageMeta(**meta),
        )
