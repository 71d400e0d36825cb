"""
business_search — business 인덱스 어댑터 + 검색 쿼리 빌더

인덱싱 (async):
    from business_search import SearchConfig, BusinessIndexer, SearchService
    indexer = BusinessIndexer.from_config(SearchConfig(es_url="http://localhost:9200"))
    service = SearchService(indexer, repository)
    first = await service.push_to_index()

검색:
    from business_search import SearchRequest
    docs, meta = await service.search_with_field(
        SearchRequest(page=1, size=20, filters={"name": "Acme", "status": "active"})
    )
    result = await service.full_text_search(SearchRequest(sort="createAt:desc"))
"""

from .config import BUSINESS_SCHEMA, SearchConfig
from .documents import BusinessDocument, StaffDocument
from .indexer import BusinessIndexer, build_es_client
from .query import (
    FILTER_FIELDS,
    Combinator,
    SearchFilter,
    SearchRequest,
    build_field_query,
    build_fulltext_query,
    parse_sort,
)
from .service import SearchService

__all__ = [
    "BUSINESS_SCHEMA", "SearchConfig",
    "BusinessDocument", "StaffDocument",
    "BusinessIndexer", "build_es_client",
    "FILTER_FIELDS", "Combinator", "SearchFilter", "SearchRequest",
    "build_field_query", "build_fulltext_query", "parse_sort",
    "SearchService",
]
