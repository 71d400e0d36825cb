"""Elasticsearch 인덱스 관리 + 문서 CRUD + 벌크 인덱싱 + 검색"""

from __future__ import annotations

from typing import Iterable

from elasticsearch import AsyncElasticsearch, NotFoundError
from elasticsearch.helpers import async_bulk

from .config import BUSINESS_SCHEMA, SearchConfig


def build_es_client(config: SearchConfig) -> AsyncElasticsearch:
    """
    business 인덱스용 클라이언트.

    es_nodes가 있으면 TLS 클러스터로 보고 fingerprint와 인증(API Key 또는
    username/password)을 요구한다. 없으면 es_url 한 곳에 붙는다.
    """
    if config.es_nodes is not None:
        if not config.es_fingerprint:
            raise ValueError("es_nodes 사용 시 es_fingerprint 필수")
        if not (config.es_api_key or (config.es_username and config.es_password)):
            raise ValueError("es_nodes 사용 시 인증 정보 필수 (es_api_key 또는 es_username/es_password)")

    options: dict = {"hosts": config.es_nodes or [config.es_url]}
    if config.es_api_key:
        options["api_key"] = config.es_api_key
    elif config.es_username and config.es_password:
        options["basic_auth"] = (config.es_username, config.es_password)
    if config.es_fingerprint:
        options.update(ssl_assert_fingerprint=config.es_fingerprint, verify_certs=False)
    return AsyncElasticsearch(**options)


def _refresh_param(refresh: bool) -> str:
    return "true" if refresh else "false"


class BusinessIndexer:
    """
    business 인덱스 어댑터.

    인덱스 관리: ping / index_exists / create_index / ensure_index / delete_index
    문서 CRUD:  index_document / get_document / update_document / delete_document
    대량 적재:  bulk_index → refresh
    검색:       search(body)  — body는 query 모듈이 만든 {from, size, query, sort?, _source?}
    """

    def __init__(self, es_url: str, index_name: str = "business"):
        self.es = AsyncElasticsearch(es_url)
        self.index_name = index_name

    @classmethod
    def from_config(cls, config: SearchConfig, index_name: str | None = None) -> BusinessIndexer:
        """SearchConfig로 생성 (클러스터 / fingerprint / 인증 지원)."""
        instance = cls.__new__(cls)
        instance.es = build_es_client(config)
        instance.index_name = index_name or config.index_name
        return instance

    # ================================================================
    # 인덱스 관리
    # ================================================================

    async def ping(self) -> bool:
        return bool(await self.es.ping())

    async def index_exists(self, index: str | None = None) -> bool:
        return bool(await self.es.indices.exists(index=index or self.index_name))

    async def create_index(self, schema: dict | None = None, index: str | None = None):
        """인덱스 생성 (존재 여부 확인 없음 — 이미 있으면 ES 오류 전파)."""
        schema = schema or BUSINESS_SCHEMA
        await self.es.indices.create(
            index=index or self.index_name,
            settings=schema.get("settings", {}),
            mappings=schema.get("mappings", {}),
        )

    async def ensure_index(self, schema: dict | None = None, index: str | None = None) -> bool:
        """
        인덱스가 없을 때만 생성 (기존 데이터 보존).

        Returns: True면 새로 생성됨, False면 이미 존재.
        """
        if await self.index_exists(index):
            return False
        await self.create_index(schema, index)
        return True

    async def delete_index(self, index: str | None = None):
        await self.es.indices.delete(index=index or self.index_name)

    # ================================================================
    # 문서 CRUD
    # ================================================================

    async def index_document(self, doc_id: str, document: dict, refresh: bool = False):
        """단일 문서 인덱싱 (upsert)."""
        await self.es.index(
            index=self.index_name,
            id=doc_id,
            document=document,
            refresh=_refresh_param(refresh),
        )

    async def get_document(self, doc_id: str) -> dict | None:
        """ID로 문서 조회. 없으면 None."""
        try:
            result = await self.es.get(index=self.index_name, id=doc_id)
        except NotFoundError:
            return None
        return result["_source"]

    async def update_document(self, doc_id: str, fields: dict, refresh: bool = False):
        """문서 부분 업데이트. fields의 키-값만 변경."""
        await self.es.update(
            index=self.index_name,
            id=doc_id,
            doc=fields,
            refresh=_refresh_param(refresh),
        )

    async def delete_document(self, doc_id: str, refresh: bool = False):
        """문서 삭제. 존재하지 않으면 무시."""
        try:
            await self.es.delete(
                index=self.index_name,
                id=doc_id,
                refresh=_refresh_param(refresh),
            )
        except NotFoundError:
            pass

    async def bulk_index(self, documents: Iterable[tuple[str, dict]]) -> int:
        """(doc_id, document) 목록을 한 번에 인덱싱. 일부라도 실패하면 RuntimeError."""
        actions = [
            {"_index": self.index_name, "_id": doc_id, "_source": doc}
            for doc_id, doc in documents
        ]
        if not actions:
            return 0
        success, errors = await async_bulk(
            self.es, actions, chunk_size=len(actions), raise_on_error=False
        )
        if errors:
            raise RuntimeError(f"Bulk index errors: {len(errors)} failures")
        return success

    # ================================================================
    # 검색
    # ================================================================

    async def search(self, body: dict, index: str | None = None):
        """
        검색 본문(dict)을 그대로 실행.

        body 키 → 클라이언트 인자: "from" → from_, "_source" → source
        """
        kwargs = {k: v for k, v in body.items() if k not in ("from", "_source")}
        if "from" in body:
            kwargs["from_"] = body["from"]
        if "_source" in body:
            kwargs["source"] = body["_source"]
        return await self.es.search(index=index or self.index_name, **kwargs)

    # ================================================================
    # 상태 확인
    # ================================================================

    async def count(self) -> int:
        result = await self.es.count(index=self.index_name)
        return result["count"]

    async def refresh(self):
        """수동 리프레시 — 모든 pending 문서를 검색 가능하게"""
        await self.es.indices.refresh(index=self.index_name)

    async def close(self):
        await self.es.close()
