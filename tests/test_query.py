"""검색 쿼리 빌더 — 순수 함수 검증 (ES 불필요)"""

from business_search import (
    FILTER_FIELDS,
    Combinator,
    SearchFilter,
    SearchRequest,
    build_field_query,
    build_fulltext_query,
    parse_sort,
)


def test_pagination_arithmetic():
    body = build_field_query(SearchRequest(page=3, size=20))
    assert body["from"] == 40
    assert body["size"] == 20


def test_empty_filter_matches_everything():
    body = build_field_query(SearchRequest())
    assert body == {"from": 0, "size": 10, "query": {"bool": {"must": []}}}

    # 공백만 있는 값도 빈 값으로 취급
    body = build_field_query(SearchRequest(filters=SearchFilter(name="   ", status="")))
    assert body["query"]["bool"]["must"] == []


def test_field_query_and_semantics():
    req = SearchRequest(filters={"name": "Acme", "status": "active"})
    must = build_field_query(req)["query"]["bool"]["must"]
    assert must == [
        {"match": {"name": "Acme"}},
        {"match": {"status": "active"}},
    ]


def test_type_filter_maps_to_business_type_field():
    req = SearchRequest.model_validate({"filters": {"type": "type2"}})
    must = build_field_query(req)["query"]["bool"]["must"]
    assert must == [{"match": {"businessType": "type2"}}]


def test_match_keeps_original_value():
    req = SearchRequest(filters={"address": "  12 Main St "})
    must = build_field_query(req)["query"]["bool"]["must"]
    assert must == [{"match": {"address": "  12 Main St "}}]


def test_field_query_ignores_sort_and_source():
    req = SearchRequest(sort="name:asc", source=["name"], filters={"name": "x"})
    body = build_field_query(req)
    assert "sort" not in body
    assert "_source" not in body


def test_fulltext_any_field_last_value_wins():
    print("=" * 60)
    print("[fulltext] anyField — 마지막 값 하나로 multi_match")
    print("=" * 60)

    req = SearchRequest(filters={"name": "Acme", "address": "Seoul", "status": "active"})
    must = build_fulltext_query(req)["query"]["bool"]["must"]

    assert must[:3] == [
        {"match": {"name": "Acme"}},
        {"match": {"address": "Seoul"}},
        {"match": {"status": "active"}},
    ]
    # 표 순서상 마지막으로 만난 값(status)이 쿼리 문자열
    assert must[3] == {
        "multi_match": {"query": "active", "fields": ["name", "address", "status"]}
    }
    assert len(must) == 4
    print(f"  multi_match: {must[3]}")
    print("  PASS\n")


def test_fulltext_all_fields():
    req = SearchRequest(
        filters={"name": "Acme", "description": "coffee"},
        combinator=Combinator.ALL_FIELDS,
    )
    must = build_fulltext_query(req)["query"]["bool"]["must"]
    assert must[2:] == [
        {"multi_match": {"query": "Acme", "fields": ["name"]}},
        {"multi_match": {"query": "coffee", "fields": ["description"]}},
    ]


def test_combinator_accepts_wire_names():
    req = SearchRequest.model_validate({"combinator": "allFields"})
    assert req.combinator is Combinator.ALL_FIELDS
    assert SearchRequest().combinator is Combinator.ANY_FIELD


def test_fulltext_empty_filter():
    body = build_fulltext_query(SearchRequest())
    assert body["query"]["bool"]["must"] == []
    assert "sort" not in body
    assert "_source" not in body


def test_fulltext_sort_and_source():
    req = SearchRequest.model_validate(
        {"sort": "createAt:desc", "_source": ["name", "address"]}
    )
    body = build_fulltext_query(req)
    assert body["sort"] == [{"createAt": {"order": "desc"}}]
    assert body["_source"] == ["name", "address"]


def test_parse_sort():
    assert parse_sort("created_at:desc") == [{"created_at": {"order": "desc"}}]
    assert parse_sort("name:ASC") == [{"name": {"order": "asc"}}]
    assert parse_sort("bad") == []
    assert parse_sort("a:b:c") == []
    assert parse_sort(":desc") == []
    assert parse_sort("name:") == []
    assert parse_sort("name:sideways") == []
    assert parse_sort("name:up") == []
    assert parse_sort("") == []
    assert parse_sort(None) == []


def test_normalized_defaults():
    req = SearchRequest(index="", page=0, size=-5).normalized()
    assert (req.index, req.page, req.size) == ("business", 1, 10)

    req = SearchRequest(index="archive", page=2, size=50).normalized()
    assert (req.index, req.page, req.size) == ("archive", 2, 50)


def test_filter_table_covers_every_filter_attribute():
    attrs = {f.attr for f in FILTER_FIELDS}
    assert attrs == set(SearchFilter.model_fields)
