"""
관계형 저장소 어댑터 — Business / Staff CRUD + 배치 INSERT.

모든 메서드는 선택적으로 외부 세션(트랜잭션)을 받는다:
  - session=None: 어댑터가 제한 시간(timeout)이 걸린 자체 세션을 열고
                  블록 종료 시 커밋
  - session 지정: 호출자의 트랜잭션 안에서 실행 (flush만 하고 커밋은 호출자 몫)

조회 대상이 없으면 RecordNotFound를 던지고, 그 밖의 DB 오류는 그대로 전파한다.
"""

from __future__ import annotations

import asyncio
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from .models import Business, Staff
from .paging import (
    get_offset,
    get_order_by,
    get_page,
    get_page_size,
    pagination_info,
)

BUSINESS_SORT_COLUMNS = {
    "created_at": Business.created_at,
    "name": Business.name,
    "address": Business.address,
    "type": Business.business_type,
    "status": Business.status,
}
STAFF_SORT_COLUMNS = {
    "created_at": Staff.created_at,
    "username": Staff.username,
    "fullname": Staff.fullname,
    "email": Staff.email,
    "role": Staff.role,
}


class RecordNotFound(LookupError):
    """조회 대상 레코드가 없음"""


class BusinessRepository:
    """
    사용법:
        repo = BusinessRepository(build_session_factory(engine), timeout=30)
        await repo.create_businesses(batch)            # 자체 트랜잭션
        async with session_factory() as s, s.begin():  # 외부 트랜잭션
            await repo.create_business(b, session=s)
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], timeout: float = 30.0):
        self.session_factory = session_factory
        self.timeout = timeout

    @asynccontextmanager
    async def _session(self, session: AsyncSession | None) -> AsyncIterator[AsyncSession]:
        if session is not None:
            yield session
            return
        async with asyncio.timeout(self.timeout):
            async with self.session_factory() as own, own.begin():
                yield own

    # ================================================================
    # Business
    # ================================================================

    async def create_business(self, business: Business, session: AsyncSession | None = None) -> Business:
        async with self._session(session) as s:
            s.add(business)
            await s.flush()
        return business

    async def create_businesses(
        self, businesses: Iterable[Business], session: AsyncSession | None = None
    ) -> int:
        """배치 INSERT — 한 트랜잭션으로 묶어서 저장. 저장 건수 반환."""
        rows = list(businesses)
        async with self._session(session) as s:
            s.add_all(rows)
            await s.flush()
        return len(rows)

    async def get_one_business(
        self,
        business_id: uuid.UUID,
        preload_staffs: bool = False,
        session: AsyncSession | None = None,
    ) -> Business:
        stmt = select(Business).where(Business.id == business_id)
        if preload_staffs:
            stmt = stmt.options(selectinload(Business.staffs))
        async with self._session(session) as s:
            business = (await s.execute(stmt)).scalar_one_or_none()
        if business is None:
            raise RecordNotFound(f"business {business_id} not found")
        return business

    async def update_business(self, business: Business, session: AsyncSession | None = None) -> Business:
        async with self._session(session) as s:
            merged = await s.merge(business)
            await s.flush()
        return merged

    async def delete_business(self, business: Business, session: AsyncSession | None = None):
        """소속 Staff도 함께 삭제 (ORM cascade + FK ON DELETE CASCADE)."""
        async with self._session(session) as s:
            await s.delete(await s.merge(business))
            await s.flush()

    async def get_list_business(
        self,
        *,
        name: str | None = None,
        address: str | None = None,
        business_type: str | None = None,
        description: str | None = None,
        page: int | None = None,
        page_size: int | None = None,
        sort: str | None = None,
        preload_staffs: bool = False,
        session: AsyncSession | None = None,
    ) -> tuple[list[Business], dict]:
        """완전 일치 필터 + 페이지네이션. (rows, meta) 반환."""
        page = get_page(page)
        page_size = get_page_size(page_size)

        stmt = select(Business)
        if name is not None:
            stmt = stmt.where(Business.name == name)
        if address is not None:
            stmt = stmt.where(Business.address == address)
        if business_type is not None:
            stmt = stmt.where(Business.business_type == business_type)
        if description is not None:
            stmt = stmt.where(Business.description == description)

        count_stmt = select(func.count()).select_from(stmt.subquery())
        stmt = (
            stmt.order_by(
                get_order_by(sort, BUSINESS_SORT_COLUMNS, "created_at desc"),
                Business.id,
            )
            .limit(page_size)
            .offset(get_offset(page, page_size))
        )
        if preload_staffs:
            stmt = stmt.options(selectinload(Business.staffs))

        async with self._session(session) as s:
            total = (await s.execute(count_stmt)).scalar_one()
            rows = list((await s.execute(stmt)).scalars().all())

        return rows, pagination_info(total, page, page_size)

    async def iter_businesses(
        self, page_size: int = 500, preload_staffs: bool = True, **filters
    ) -> AsyncIterator[list[Business]]:
        """전체 Business를 생성 순으로 페이지 단위 순회."""
        page = 1
        while True:
            rows, meta = await self.get_list_business(
                page=page,
                page_size=page_size,
                sort="created_at asc",
                preload_staffs=preload_staffs,
                **filters,
            )
            if rows:
                yield rows
            if page >= meta["total_pages"]:
                return
            page += 1

    # ================================================================
    # Staff
    # ================================================================

    async def create_staff(self, staff: Staff, session: AsyncSession | None = None) -> Staff:
        async with self._session(session) as s:
            s.add(staff)
            await s.flush()
        return staff

    async def get_one_staff(self, staff_id: uuid.UUID, session: AsyncSession | None = None) -> Staff:
        async with self._session(session) as s:
            staff = await s.get(Staff, staff_id)
        if staff is None:
            raise RecordNotFound(f"staff {staff_id} not found")
        return staff

    async def update_staff(self, staff: Staff, session: AsyncSession | None = None) -> Staff:
        async with self._session(session) as s:
            merged = await s.merge(staff)
            await s.flush()
        return merged

    async def delete_staff(self, staff: Staff, session: AsyncSession | None = None):
        async with self._session(session) as s:
            await s.delete(await s.merge(staff))
            await s.flush()

    async def get_list_staff(
        self,
        *,
        username: str | None = None,
        email: str | None = None,
        role: str | None = None,
        business_id: uuid.UUID | None = None,
        session: AsyncSession | None = None,
    ) -> list[Staff]:
        stmt = select(Staff).order_by(Staff.created_at.desc(), Staff.id)
        if username is not None:
            stmt = stmt.where(Staff.username == username)
        if email is not None:
            stmt = stmt.where(Staff.email == email)
        if role is not None:
            stmt = stmt.where(Staff.role == role)
        if business_id is not None:
            stmt = stmt.where(Staff.business_id == business_id)
        async with self._session(session) as s:
            return list((await s.execute(stmt)).scalars().all())

    async def get_list_staff_with_paging(
        self,
        *,
        keyword: str | None = None,
        page: int | None = None,
        page_size: int | None = None,
        sort: str | None = None,
        session: AsyncSession | None = None,
    ) -> tuple[list[Staff], dict]:
        """fullname 부분 일치(대소문자 무시) 검색 + 페이지네이션."""
        page = get_page(page)
        page_size = get_page_size(page_size)

        stmt = select(Staff)
        if keyword:
            stmt = stmt.where(Staff.fullname.ilike(f"%{keyword}%"))

        count_stmt = select(func.count()).select_from(stmt.subquery())
        stmt = (
            stmt.order_by(get_order_by(sort, STAFF_SORT_COLUMNS, "created_at desc"), Staff.id)
            .limit(page_size)
            .offset(get_offset(page, page_size))
        )

        async with self._session(session) as s:
            total = (await s.execute(count_stmt)).scalar_one()
            rows = list((await s.execute(stmt)).scalars().all())

        return rows, pagination_info(total, page, page_size)

    async def get_staff_by_business_id(
        self, business_id: uuid.UUID, session: AsyncSession | None = None
    ) -> list[Staff]:
        stmt = select(Staff).where(Staff.business_id == business_id).order_by(Staff.created_at)
        async with self._session(session) as s:
            return list((await s.execute(stmt)).scalars().all())
