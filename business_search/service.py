"""
검색 / 인덱싱 서비스

push_to_index:      DB의 Business 전체(또는 필터 결과) → business 인덱스 (bulk)
search_with_field:  필터 필드 AND 완전 일치 검색 → (BusinessDocument 목록, meta)
full_text_search:   match + multi_match + sort + _source → hits 응답
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from business_store import BusinessRepository
from pipeline_commons import timer

from .config import SearchConfig
from .documents import BusinessDocument
from .indexer import BusinessIndexer
from .query import SearchRequest, build_field_query, build_fulltext_query

logger = logging.getLogger(__name__)


def _hits(response) -> dict:
    """검색 응답의 hits 부분. 응답이 없으면 빈 dict."""
    if response is None:
        return {}
    # ObjectApiResponse → dict (이미 dict면 그대로)
    return getattr(response, "body", response).get("hits", {})


def _total(hits: dict) -> int:
    total = hits.get("total", 0)
    if isinstance(total, dict):
        return int(total.get("value", 0))
    return int(total or 0)


class SearchService:
    def __init__(
        self,
        indexer: BusinessIndexer,
        repository: BusinessRepository,
        config: SearchConfig | None = None,
    ):
        self.indexer = indexer
        self.repository = repository
        self.config = config or SearchConfig()

    async def push_to_index(self, **filters) -> BusinessDocument | None:
        """
        저장된 Business를 페이지 단위로 읽어 인덱스에 bulk 적재.

        Args:
            **filters: get_list_business 완전 일치 필터 (name, address, business_type, description)

        Returns:
            첫 번째로 인덱싱된 문서, 대상이 없으면 None
        """
        created = await self.indexer.ensure_index(self.config.schema)
        logger.info(
            f"인덱스 {self.indexer.index_name}: {'신규 생성' if created else '기존 유지'}"
        )

        first: BusinessDocument | None = None
        pushed = 0
        async for rows in self.repository.iter_businesses(
            page_size=self.config.push_batch_size, preload_staffs=True, **filters
        ):
            docs = [BusinessDocument.from_business(b) for b in rows]
            with timer() as t:
                await self.indexer.bulk_index((d.id, d.to_source()) for d in docs)
            if first is None:
                first = docs[0]
            pushed += len(docs)
            logger.info(f"push {pushed:,}건  bulk=[cyan]{t.ms:.0f}ms[/cyan]")

        if pushed:
            await self.indexer.refresh()
        logger.info(f"push 완료: [green]{pushed:,}[/green]건 → {self.indexer.index_name}")
        return first

    async def search_with_field(self, request: SearchRequest) -> tuple[list[BusinessDocument], dict]:
        request = request.normalized()
        body = build_field_query(request)
        logger.debug(f"search-by-field index={request.index} body={body}")

        hits = _hits(await self.indexer.search(body, index=request.index))

        documents = []
        for hit in hits.get("hits", []):
            try:
                documents.append(BusinessDocument.from_hit(hit))
            except ValidationError as e:
                logger.warning(f"hit {hit.get('_id')} 변환 실패, 건너뜀: {e}")

        meta = {"page": request.page, "page_size": request.size, "total": _total(hits)}
        return documents, meta

    async def full_text_search(self, request: SearchRequest) -> dict:
        """
        Returns:
            {"hits": {"total": {"value": n}, "hits": [{"_id", "_score", "_source"}, ...]}}
            응답이 비어 있으면 total 0
        """
        request = request.normalized()
        body = build_fulltext_query(request)
        logger.debug(f"fulltext-search index={request.index} body={body}")

        hits = _hits(await self.indexer.search(body, index=request.index))

        return {
            "hits": {
                "total": {"value": _total(hits)},
                "hits": [
                    {
                        "_id": hit.get("_id"),
                        "_score": hit.get("_score"),
                        "_source": hit.get("_source") or {},
                    }
                    for hit in hits.get("hits", [])
                ],
            }
        }
