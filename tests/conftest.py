import asyncio
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest

from business_store import (
    BusinessRepository,
    StoreConfig,
    build_engine,
    build_session_factory,
    init_db,
)


@pytest.fixture
def db_url(tmp_path):
    # 파일 DB: 커넥션마다 같은 DB를 본다 (:memory:는 커넥션별로 분리됨)
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def open_repository(db_url):
    """
    사용:
        async def scenario():
            async with open_repository() as repo:
                ...
        asyncio.run(scenario())
    """

    @asynccontextmanager
    async def _open():
        engine = build_engine(StoreConfig(database_url=db_url))
        await init_db(engine)
        try:
            yield BusinessRepository(build_session_factory(engine), timeout=10)
        finally:
            await engine.dispose()

    return _open


class RecordingStore:
    """create_businesses 호출을 기록하는 저장소 대역."""

    def __init__(self, fail_workers: set[str] | None = None, cancel_after: int | None = None,
                 cancel: asyncio.Event | None = None):
        self.batches: list[list] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.fail_workers = fail_workers or set()
        self.cancel_after = cancel_after
        self.cancel = cancel

    async def create_businesses(self, businesses):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            worker = businesses[0].worker_name
            if worker in self.fail_workers:
                raise RuntimeError(f"insert failed for {worker}")
            self.batches.append(list(businesses))
            if self.cancel_after is not None and len(self.batches) >= self.cancel_after:
                self.cancel.set()
            return len(businesses)
        finally:
            self.in_flight -= 1


@pytest.fixture
def recording_store():
    return RecordingStore


def make_mock_es() -> MagicMock:
    """AsyncElasticsearch 대역 (indices.* 포함)."""
    es = MagicMock()
    es.ping = AsyncMock(return_value=True)
    es.index = AsyncMock()
    es.get = AsyncMock()
    es.update = AsyncMock()
    es.delete = AsyncMock()
    es.search = AsyncMock()
    es.count = AsyncMock(return_value={"count": 0})
    es.close = AsyncMock()
    es.indices = MagicMock()
    es.indices.exists = AsyncMock(return_value=False)
    es.indices.create = AsyncMock()
    es.indices.delete = AsyncMock()
    es.indices.refresh = AsyncMock()
    return es


@pytest.fixture
def mock_es():
    return make_mock_es()
