"""BusinessRepository — 파일 SQLite(aiosqlite)로 CRUD / 페이징 / 외부 트랜잭션 검증"""

import asyncio
import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from business_store import Business, RecordNotFound, Staff


def _staff(business_id, n: int, fullname: str = "Staff Member") -> Staff:
    return Staff(
        username=f"user{n}",
        password="secret1",
        fullname=fullname,
        email=f"user{n}@example.com",
        role="manager" if n % 2 else "clerk",
        business_id=business_id,
    )


def test_business_crud(open_repository):
    async def scenario():
        async with open_repository() as repo:
            created = await repo.create_business(
                Business(name="Acme", address="1 Main St", business_type="type1", staffs=[])
            )
            assert created.id is not None
            assert created.created_at is not None

            fetched = await repo.get_one_business(created.id)
            assert fetched.name == "Acme"
            assert fetched.loaded_staffs() == []

            fetched.status = "closed"
            updated = await repo.update_business(fetched)
            assert updated.status == "closed"
            assert (await repo.get_one_business(created.id)).status == "closed"

            await repo.delete_business(updated)
            with pytest.raises(RecordNotFound):
                await repo.get_one_business(created.id)

    asyncio.run(scenario())


def test_get_one_missing(open_repository):
    async def scenario():
        async with open_repository() as repo:
            with pytest.raises(RecordNotFound):
                await repo.get_one_business(uuid.uuid4())
            with pytest.raises(RecordNotFound):
                await repo.get_one_staff(uuid.uuid4())

    asyncio.run(scenario())


def test_staff_preload_and_cascade(open_repository):
    async def scenario():
        async with open_repository() as repo:
            b = await repo.create_business(Business(name="Owner", staffs=[]))
            for n in range(3):
                await repo.create_staff(_staff(b.id, n))

            preloaded = await repo.get_one_business(b.id, preload_staffs=True)
            assert len(preloaded.loaded_staffs()) == 3

            plain = await repo.get_one_business(b.id)
            assert plain.loaded_staffs() == []
            assert len(await repo.get_staff_by_business_id(b.id)) == 3

            await repo.delete_business(plain)
            assert await repo.get_list_staff(business_id=b.id) == []

    asyncio.run(scenario())


def test_staff_unique_constraints(open_repository):
    async def scenario():
        async with open_repository() as repo:
            b = await repo.create_business(Business(name="B", staffs=[]))
            await repo.create_staff(_staff(b.id, 1))
            with pytest.raises(IntegrityError):
                await repo.create_staff(_staff(b.id, 1))

    asyncio.run(scenario())


def test_get_list_business_paging_and_filters(open_repository):
    async def scenario():
        async with open_repository() as repo:
            await repo.create_businesses(
                [Business(name=f"biz{n:02d}", business_type=f"type{n % 3 + 1}", staffs=[]) for n in range(25)]
            )

            rows, meta = await repo.get_list_business(page=3, page_size=10, sort="name asc")
            assert [r.name for r in rows] == [f"biz{n:02d}" for n in range(20, 25)]
            assert meta == {"page": 3, "page_size": 10, "total": 25, "total_pages": 3}

            rows, meta = await repo.get_list_business(business_type="type1", page_size=100)
            assert meta["total"] == 9
            assert all(r.business_type == "type1" for r in rows)

            rows, _ = await repo.get_list_business(name="biz07")
            assert [r.name for r in rows] == ["biz07"]

            # 허용되지 않은 정렬 → 기본값 (created_at desc)
            rows, meta = await repo.get_list_business(sort="password; drop table", page=0, page_size=0)
            assert meta["page"] == 1
            assert meta["page_size"] == 10
            assert len(rows) == 10

    asyncio.run(scenario())


def test_iter_businesses(open_repository):
    async def scenario():
        async with open_repository() as repo:
            await repo.create_businesses([Business(name=f"b{n}", staffs=[]) for n in range(7)])
            pages = [page async for page in repo.iter_businesses(page_size=3)]
            return pages

    pages = asyncio.run(scenario())
    assert [len(p) for p in pages] == [3, 3, 1]
    assert len({b.id for p in pages for b in p}) == 7


def test_staff_paging_keyword(open_repository):
    async def scenario():
        async with open_repository() as repo:
            b = await repo.create_business(Business(name="B", staffs=[]))
            names = ["Alice Kim", "Bob Lee", "alicia park", "Carol Kim"]
            for n, name in enumerate(names):
                await repo.create_staff(_staff(b.id, n, fullname=name))

            rows, meta = await repo.get_list_staff_with_paging(keyword="ALI", sort="fullname asc")
            assert [r.fullname for r in rows] == ["Alice Kim", "alicia park"]
            assert meta["total"] == 2

            rows, meta = await repo.get_list_staff_with_paging(page=2, page_size=3)
            assert meta == {"page": 2, "page_size": 3, "total": 4, "total_pages": 2}
            assert len(rows) == 1

            managers = await repo.get_list_staff(role="manager")
            assert {s.username for s in managers} == {"user1", "user3"}

    asyncio.run(scenario())


def test_external_transaction(open_repository):
    """외부 세션을 넘기면 커밋은 호출자 몫 — 롤백 시 아무것도 남지 않음"""

    async def scenario():
        async with open_repository() as repo:
            async with repo.session_factory() as session:
                await repo.create_business(Business(name="tx", staffs=[]), session=session)
                rows, _ = await repo.get_list_business(session=session)
                assert [r.name for r in rows] == ["tx"]
                await session.rollback()

            rows, meta = await repo.get_list_business()
            assert meta["total"] == 0

    asyncio.run(scenario())
