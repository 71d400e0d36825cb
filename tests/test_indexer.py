"""
BusinessIndexer / build_es_client — AsyncElasticsearch Mock으로 코드 경로 검증
"""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from business_search import BUSINESS_SCHEMA, BusinessIndexer, SearchConfig, build_es_client


def test_search_config_defaults():
    c = SearchConfig()
    assert c.es_url == "http://localhost:9200"
    assert c.index_name == "business"
    assert c.schema is BUSINESS_SCHEMA
    assert c.es_nodes is None


def test_business_schema():
    props = BUSINESS_SCHEMA["mappings"]["properties"]
    assert props["id"]["type"] == "keyword"
    assert props["name"]["type"] == "text"
    assert props["businessType"]["type"] == "keyword"
    assert props["createAt"]["type"] == "date"
    assert props["workerName"]["type"] == "text"
    assert props["staffs"]["type"] == "nested"
    assert props["staffs"]["properties"]["role"]["type"] == "keyword"


def test_build_es_client():
    print("=" * 60)
    print("build_es_client — 연결 설정")
    print("=" * 60)

    with patch("business_search.indexer.AsyncElasticsearch") as MockES:
        build_es_client(SearchConfig(es_url="http://es:9200"))
        kwargs = MockES.call_args.kwargs
        assert kwargs["hosts"] == ["http://es:9200"]
        assert "ssl_assert_fingerprint" not in kwargs
        assert "basic_auth" not in kwargs

        MockES.reset_mock()
        build_es_client(SearchConfig(es_username="elastic", es_password="secret"))
        assert MockES.call_args.kwargs["basic_auth"] == ("elastic", "secret")

        MockES.reset_mock()
        build_es_client(
            SearchConfig(
                es_nodes=["https://es01:9200", "https://es02:9200"],
                es_fingerprint="AA:BB:CC",
                es_api_key="key",
                es_username="elastic",
                es_password="secret",
            )
        )
        kwargs = MockES.call_args.kwargs
        assert kwargs["hosts"] == ["https://es01:9200", "https://es02:9200"]
        assert kwargs["api_key"] == "key"
        assert "basic_auth" not in kwargs
        assert kwargs["ssl_assert_fingerprint"] == "AA:BB:CC"
        assert kwargs["verify_certs"] is False
        print("  단일 노드 / basic auth / 클러스터 + API Key  OK")

        with pytest.raises(ValueError, match="fingerprint"):
            build_es_client(SearchConfig(es_nodes=["https://es01:9200"]))
        with pytest.raises(ValueError, match="인증"):
            build_es_client(SearchConfig(es_nodes=["https://es01:9200"], es_fingerprint="AA"))

    print("  PASS\n")


def _indexer(mock_es, index="business") -> BusinessIndexer:
    with patch("business_search.indexer.AsyncElasticsearch", return_value=mock_es):
        return BusinessIndexer("http://localhost:9200", index)


def test_ensure_index(mock_es):
    indexer = _indexer(mock_es)

    mock_es.indices.exists = AsyncMock(return_value=False)
    assert asyncio.run(indexer.ensure_index(BUSINESS_SCHEMA)) is True
    kwargs = mock_es.indices.create.call_args.kwargs
    assert kwargs["index"] == "business"
    assert kwargs["mappings"] == BUSINESS_SCHEMA["mappings"]
    assert kwargs["settings"] == BUSINESS_SCHEMA["settings"]

    mock_es.indices.create.reset_mock()
    mock_es.indices.exists = AsyncMock(return_value=True)
    assert asyncio.run(indexer.ensure_index()) is False
    mock_es.indices.create.assert_not_called()


def test_index_management(mock_es):
    indexer = _indexer(mock_es, "biz_test")

    assert asyncio.run(indexer.ping()) is True
    asyncio.run(indexer.create_index())
    assert mock_es.indices.create.call_args.kwargs["index"] == "biz_test"

    asyncio.run(indexer.delete_index())
    mock_es.indices.delete.assert_called_once_with(index="biz_test")

    mock_es.indices.exists = AsyncMock(return_value=True)
    assert asyncio.run(indexer.index_exists("other")) is True
    mock_es.indices.exists.assert_called_once_with(index="other")


def test_document_crud(mock_es):
    indexer = _indexer(mock_es)

    asyncio.run(indexer.index_document("b1", {"name": "Acme"}, refresh=True))
    kwargs = mock_es.index.call_args.kwargs
    assert kwargs == {"index": "business", "id": "b1", "document": {"name": "Acme"}, "refresh": "true"}

    mock_es.get = AsyncMock(return_value={"_id": "b1", "_source": {"name": "Acme"}})
    assert asyncio.run(indexer.get_document("b1")) == {"name": "Acme"}

    asyncio.run(indexer.update_document("b1", {"status": "closed"}))
    kwargs = mock_es.update.call_args.kwargs
    assert kwargs["doc"] == {"status": "closed"}
    assert kwargs["refresh"] == "false"

    asyncio.run(indexer.delete_document("b1"))
    mock_es.delete.assert_called_once()


def test_missing_document(mock_es):
    class _NotFound(Exception):
        pass

    indexer = _indexer(mock_es)
    mock_es.get = AsyncMock(side_effect=_NotFound())
    mock_es.delete = AsyncMock(side_effect=_NotFound())

    with patch("business_search.indexer.NotFoundError", _NotFound):
        assert asyncio.run(indexer.get_document("missing")) is None
        asyncio.run(indexer.delete_document("missing"))  # 무시


def test_bulk_index(mock_es):
    indexer = _indexer(mock_es)

    with patch("business_search.indexer.async_bulk", new=AsyncMock(return_value=(2, []))) as bulk:
        n = asyncio.run(indexer.bulk_index([("a", {"name": "A"}), ("b", {"name": "B"})]))
        assert n == 2
        actions = bulk.call_args.args[1]
        assert actions == [
            {"_index": "business", "_id": "a", "_source": {"name": "A"}},
            {"_index": "business", "_id": "b", "_source": {"name": "B"}},
        ]

    with patch("business_search.indexer.async_bulk", new=AsyncMock(return_value=(1, [{"err": 1}]))):
        with pytest.raises(RuntimeError, match="1 failures"):
            asyncio.run(indexer.bulk_index([("a", {}), ("b", {})]))

    with patch("business_search.indexer.async_bulk", new=AsyncMock()) as bulk:
        assert asyncio.run(indexer.bulk_index([])) == 0
        bulk.assert_not_called()


def test_search_translates_body(mock_es):
    indexer = _indexer(mock_es)
    mock_es.search = AsyncMock(return_value={"hits": {"total": {"value": 0}, "hits": []}})

    body = {
        "from": 20,
        "size": 10,
        "query": {"bool": {"must": []}},
        "sort": [{"name": {"order": "asc"}}],
        "_source": ["name"],
    }
    asyncio.run(indexer.search(body, index="archive"))

    kwargs = mock_es.search.call_args.kwargs
    assert kwargs == {
        "index": "archive",
        "from_": 20,
        "size": 10,
        "query": {"bool": {"must": []}},
        "sort": [{"name": {"order": "asc"}}],
        "source": ["name"],
    }


def test_count_refresh_close(mock_es):
    indexer = _indexer(mock_es)
    mock_es.count = AsyncMock(return_value={"count": 42})

    assert asyncio.run(indexer.count()) == 42
    asyncio.run(indexer.refresh())
    mock_es.indices.refresh.assert_called_once_with(index="business")
    asyncio.run(indexer.close())
    mock_es.close.assert_called_once()
