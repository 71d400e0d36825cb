"""Elasticsearch 검색/인덱싱 설정"""

from dataclasses import dataclass, field

# ── business 인덱스 고정 매핑 (인덱스가 없을 때만 적용) ──
BUSINESS_SCHEMA = {
    "settings": {
        "number_of_shards": 1,
        "number_of_replicas": 0,
    },
    "mappings": {
        "properties": {
            "id": {"type": "keyword"},
            "name": {"type": "text"},
            "description": {"type": "text"},
            "address": {"type": "text"},
            "businessType": {"type": "keyword"},
            "status": {"type": "keyword"},
            "createAt": {"type": "date"},
            "workerName": {"type": "text"},
            "staffs": {
                "type": "nested",
                "properties": {
                    "id": {"type": "keyword"},
                    "name": {"type": "text"},
                    "role": {"type": "keyword"},
                },
            },
        }
    },
}


@dataclass
class SearchConfig:
    # Elasticsearch 연결
    es_url: str = "http://localhost:9200"
    es_nodes: list[str] | None = None       # 클러스터 노드 목록 (설정 시 es_url 무시)
    es_fingerprint: str | None = None       # TLS 인증서 SHA-256 fingerprint (클러스터 시 필수)
    es_username: str | None = None          # Basic Auth 사용자명
    es_password: str | None = None          # Basic Auth 비밀번호
    es_api_key: str | None = None           # API Key (basic_auth 대신 사용 가능)

    # 인덱스
    index_name: str = "business"
    schema: dict = field(default_factory=lambda: BUSINESS_SCHEMA)

    # push-to-elastic: DB 페이지 크기 = bulk 배치 크기
    push_batch_size: int = 500
