"""
business_store — Business / Staff 관계형 저장소 + 벌크 적재 파이프라인

저장소 (async):
    from business_store import StoreConfig, build_engine, build_session_factory, BusinessRepository
    engine = build_engine(StoreConfig(database_url="postgresql+asyncpg://..."))
    repo = BusinessRepository(build_session_factory(engine))
    rows, meta = await repo.get_list_business(page=1, page_size=20)

벌크 적재:
    from business_store import IngestConfig, generate_businesses, run_ingestion
    report = await run_ingestion(generate_businesses(10_000), repo, IngestConfig())
    report.complete, report.persisted, report.failed_workers
"""

from .config import BUSINESS_TYPES, IngestConfig, StoreConfig
from .database import Base, build_engine, build_session_factory, init_db, normalize_database_url
from .generator import generate_businesses
from .ingest import IngestionReport, WorkerOutcome, run_ingestion
from .models import Business, Staff
from .repository import BusinessRepository, RecordNotFound

__all__ = [
    # Config
    "BUSINESS_TYPES", "IngestConfig", "StoreConfig",
    # Database
    "Base", "build_engine", "build_session_factory", "init_db", "normalize_database_url",
    # Models
    "Business", "Staff",
    # Repository
    "BusinessRepository", "RecordNotFound",
    # Ingestion
    "generate_businesses", "run_ingestion", "IngestionReport", "WorkerOutcome",
]
