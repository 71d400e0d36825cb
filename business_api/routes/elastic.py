"""Elasticsearch 연동 (/api/v1/elastic)"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from business_search import BusinessDocument, SearchRequest, SearchService

from ..deps import get_search_service
from ..errors import translate_errors
from ..schemas import (
    FieldSearchMeta,
    FieldSearchResponse,
    FullTextSearchMeta,
    FullTextSearchResponse,
)

router = APIRouter(prefix="/api/v1/elastic", tags=["elastic"])


@router.post("/push-to-elastic", response_model=Optional[BusinessDocument])
async def push_to_elastic(
    name: Optional[str] = None,
    address: Optional[str] = None,
    business_type: Optional[str] = Query(None, alias="type"),
    description: Optional[str] = None,
    service: SearchService = Depends(get_search_service),
):
    """DB의 Business → business 인덱스. 첫 번째 문서 반환 (없으면 null)."""
    filters = {
        "name": name,
        "address": address,
        "business_type": business_type,
        "description": description,
    }
    with translate_errors("push to elastic"):
        return await service.push_to_index(**{k: v for k, v in filters.items() if v is not None})


@router.post("/search-by-field", response_model=FieldSearchResponse)
async def search_by_field(
    req: SearchRequest,
    service: SearchService = Depends(get_search_service),
):
    with translate_errors("search by field"):
        documents, meta = await service.search_with_field(req)
    return FieldSearchResponse(data=documents, meta=FieldSearchMeta(**meta))


@router.api_route("/fulltext-search", methods=["GET", "POST"], response_model=FullTextSearchResponse)
async def fulltext_search(
    req: Optional[SearchRequest] = None,
    service: SearchService = Depends(get_search_service),
):
    """GET도 본문(SearchRequest)을 받는다. 본문이 없으면 기본값으로 검색."""
    req = (req or SearchRequest()).normalized()
    with translate_errors("fulltext search"):
        result = await service.full_text_search(req)
    return FullTextSearchResponse(
        data=result,
        meta=FullTextSearchMeta(
            page=req.page,
            size=req.size,
            total=result["hits"]["total"]["value"],
        ),
    )
