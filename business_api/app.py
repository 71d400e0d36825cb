"""
FastAPI application factory.

Run locally:
    python serve.py --port 8080
    uvicorn business_api.app:create_app --factory --port 8080
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from business_search import BusinessIndexer, SearchService
from business_store import (
    BusinessRepository,
    build_engine,
    build_session_factory,
    init_db,
)
from pipeline_commons import AsyncFailureLogger

from .errors import install_error_handlers
from .routes import business, elastic, internal, staff
from .services import BusinessService, StaffService
from .settings import AppSettings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: AppSettings = app.state.settings
    logger.info(f"business-api 시작 (env={settings.app_env})")
    await init_db(app.state.engine)

    yield

    await app.state.indexer.close()
    await app.state.engine.dispose()
    logger.info("business-api 종료")


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """설정으로부터 컴포넌트를 조립해 app.state에 올린다."""
    settings = settings or AppSettings()

    store_config = settings.store_config()
    ingest_config = settings.ingest_config()

    engine = build_engine(store_config)
    repository = BusinessRepository(build_session_factory(engine), timeout=store_config.timeout)
    indexer = BusinessIndexer.from_config(settings.search_config())

    failure_logger = None
    if ingest_config.log_failures:
        failure_logger = AsyncFailureLogger(ingest_config.failure_log_path)

    app = FastAPI(
        title="Business API",
        version="1.0.0",
        description="Business / Staff CRUD + bulk ingestion + Elasticsearch search",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.repository = repository
    app.state.indexer = indexer
    app.state.business_service = BusinessService(repository, ingest_config, failure_logger)
    app.state.staff_service = StaffService(repository)
    app.state.search_service = SearchService(indexer, repository, settings.search_config())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    app.include_router(internal.router)
    app.include_router(business.router)
    app.include_router(staff.router)
    app.include_router(elastic.router)

    return app
