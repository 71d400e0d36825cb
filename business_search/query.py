"""
검색 쿼리 빌더 — SearchRequest → Elasticsearch 검색 본문(dict)

필드 검색 (build_field_query):
    {"from": (page-1)*size, "size": size,
     "query": {"bool": {"must": [{"match": {field: value}}, ...]}}}

전문 검색 (build_fulltext_query):
    위 match 절 + multi_match 절 + 선택적 sort / _source

검색 가능한 필드와 참여하는 절 종류는 FILTER_FIELDS 표 하나로만 정의한다.
표의 순서가 anyField 모드의 "마지막 값" 판단 순서.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_INDEX = "business"
DEFAULT_PAGE = 1
DEFAULT_SIZE = 10

MATCH = "match"
MULTI_MATCH = "multi_match"


class Combinator(str, Enum):
    """전문 검색에서 여러 필터 값을 묶는 방식"""

    ANY_FIELD = "anyField"    # multi_match 1개: 모든 필드 × 마지막 값
    ALL_FIELDS = "allFields"  # 필드마다 multi_match 1개씩 (AND)


@dataclass(frozen=True)
class FilterField:
    attr: str                    # SearchFilter 속성명
    field: str                   # 인덱스 필드명
    clauses: frozenset[str]      # 참여하는 절 종류


FILTER_FIELDS: tuple[FilterField, ...] = (
    FilterField("name", "name", frozenset({MATCH, MULTI_MATCH})),
    FilterField("description", "description", frozenset({MATCH, MULTI_MATCH})),
    FilterField("address", "address", frozenset({MATCH, MULTI_MATCH})),
    FilterField("business_type", "businessType", frozenset({MATCH, MULTI_MATCH})),
    FilterField("status", "status", frozenset({MATCH, MULTI_MATCH})),
)


# ============================================================
# 요청 모델
# ============================================================

class SearchFilter(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    description: str | None = None
    address: str | None = None
    business_type: str | None = Field(None, alias="type")
    status: str | None = None


class SearchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    index: str = DEFAULT_INDEX
    page: int = DEFAULT_PAGE
    size: int = DEFAULT_SIZE
    sort: str | None = None                                  # "field:asc|desc"
    source: list[str] | None = Field(None, alias="_source")  # 반환 필드 제한
    filters: SearchFilter = Field(default_factory=SearchFilter)
    combinator: Combinator = Combinator.ANY_FIELD

    def normalized(self) -> SearchRequest:
        """page ≤ 0 → 1, size ≤ 0 → 10, 빈 index → "business"."""
        return self.model_copy(
            update={
                "page": self.page if self.page > 0 else DEFAULT_PAGE,
                "size": self.size if self.size > 0 else DEFAULT_SIZE,
                "index": self.index.strip() or DEFAULT_INDEX,
            }
        )


# ============================================================
# 절 생성
# ============================================================

def active_filters(filters: SearchFilter) -> list[tuple[FilterField, str]]:
    """공백 제거 후 비어 있지 않은 필터만 (FILTER_FIELDS 순서). 값은 원본 그대로."""
    active = []
    for f in FILTER_FIELDS:
        value = getattr(filters, f.attr)
        if isinstance(value, str) and value.strip():
            active.append((f, value))
    return active


def match_clauses(active: list[tuple[FilterField, str]]) -> list[dict]:
    return [{"match": {f.field: value}} for f, value in active if MATCH in f.clauses]


def multi_match_clauses(
    active: list[tuple[FilterField, str]],
    combinator: Combinator = Combinator.ANY_FIELD,
) -> list[dict]:
    candidates = [(f, value) for f, value in active if MULTI_MATCH in f.clauses]
    if not candidates:
        return []

    if combinator is Combinator.ALL_FIELDS:
        return [
            {"multi_match": {"query": value, "fields": [f.field]}}
            for f, value in candidates
        ]

    # anyField: 마지막으로 만난 값 하나로 모든 필드를 검색
    return [
        {
            "multi_match": {
                "query": candidates[-1][1],
                "fields": [f.field for f, _ in candidates],
            }
        }
    ]


def parse_sort(sort: str | None) -> list[dict]:
    """
    "field:direction" → [{field: {"order": direction}}].

    콜론이 없거나 2개 이상, 빈 부분, asc/desc 이외의 방향이면 오류 없이 [].
    """
    if not sort:
        return []
    parts = sort.split(":")
    if len(parts) != 2:
        return []
    field, order = parts[0].strip(), parts[1].strip().lower()
    if not field or order not in ("asc", "desc"):
        return []
    return [{field: {"order": order}}]


def pagination_from(page: int, size: int) -> int:
    return max(0, (page - 1) * size)


# ============================================================
# 검색 본문
# ============================================================

def build_field_query(request: SearchRequest) -> dict:
    """필터 필드 AND 완전 일치(match) 검색. 빈 필터 → must=[] → 전체 문서."""
    active = active_filters(request.filters)
    return {
        "from": pagination_from(request.page, request.size),
        "size": request.size,
        "query": {"bool": {"must": match_clauses(active)}},
    }


def build_fulltext_query(request: SearchRequest) -> dict:
    active = active_filters(request.filters)
    must = match_clauses(active) + multi_match_clauses(active, request.combinator)

    body: dict = {
        "from": pagination_from(request.page, request.size),
        "size": request.size,
        "query": {"bool": {"must": must}},
    }
    sort = parse_sort(request.sort)
    if sort:
        body["sort"] = sort
    if request.source:
        body["_source"] = list(request.source)
    return body
