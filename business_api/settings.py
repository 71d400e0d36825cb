"""
HTTP 서비스 설정 — 시작 시 환경 변수를 한 번만 읽는다.

우선순위: 환경 변수 > .env 파일 > 기본값

AppSettings는 각 컴포넌트의 dataclass 설정(StoreConfig, SearchConfig,
IngestConfig)으로 변환되어 생성자에 명시적으로 전달된다.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings

from business_search import SearchConfig
from business_store import IngestConfig, StoreConfig


class AppSettings(BaseSettings):
    # ── Server ──────────────────────────────────────────────────────────
    app_env: str = Field(default="dev", description="dev | stg | prd")
    port: int = Field(default=8080)
    log_level: str = Field(default="INFO")
    log_file: Path | None = Field(default=None)

    # ── Database ────────────────────────────────────────────────────────
    db_host: str = Field(default="localhost")
    db_port: int = Field(default=5432)
    db_user: str = Field(default="postgres")
    db_pass: str = Field(default="postgres")
    db_name: str = Field(default="business")
    database_url: str | None = Field(default=None, description="설정 시 DB_* 무시")
    db_timeout: float = Field(default=30.0)

    # ── Elasticsearch ───────────────────────────────────────────────────
    es_url: str = Field(default="http://localhost:9200")
    es_username: str | None = Field(default=None)
    es_password: str | None = Field(default=None)
    es_index: str = Field(default="business")

    # ── Bulk ingestion ──────────────────────────────────────────────────
    ingest_total: int = Field(default=10000)
    ingest_workers: int = Field(default=20)
    ingest_batch_size: int = Field(default=10)
    ingest_failure_log: Path | None = Field(default=None)

    # ── CORS ────────────────────────────────────────────────────────────
    cors_origins: list[str] = Field(default=["*"])

    model_config: dict[str, Any] = {
        "env_file": ".env",
        "extra": "ignore",
    }

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "prd"

    def resolved_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_pass}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    def store_config(self) -> StoreConfig:
        return StoreConfig(
            database_url=self.resolved_database_url(),
            timeout=self.db_timeout,
            # 벌크 워커마다 커넥션 1개
            pool_size=max(self.ingest_workers, 5),
        )

    def search_config(self) -> SearchConfig:
        return SearchConfig(
            es_url=self.es_url,
            es_username=self.es_username,
            es_password=self.es_password,
            index_name=self.es_index,
        )

    def ingest_config(self) -> IngestConfig:
        return IngestConfig(
            total=self.ingest_total,
            workers=self.ingest_workers,
            batch_size=self.ingest_batch_size,
            log_failures=self.ingest_failure_log is not None,
            failure_log_path=self.ingest_failure_log,
        )
