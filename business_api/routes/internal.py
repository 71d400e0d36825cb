"""운영용 엔드포인트: 마이그레이션 + 헬스 체크"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from business_store import init_db

from ..errors import translate_errors

logger = logging.getLogger(__name__)

router = APIRouter(tags=["internal"])


@router.post("/internal/migrate")
async def migrate(request: Request):
    """누락된 테이블 생성 (여러 번 호출해도 안전)."""
    with translate_errors("migrate"):
        await init_db(request.app.state.engine)
    logger.info("마이그레이션 완료")
    return {"message": "migrated"}


@router.get("/health")
async def health(request: Request):
    elastic = False
    try:
        elastic = await request.app.state.indexer.ping()
    except Exception as e:
        logger.warning(f"Elasticsearch ping 실패: {e}")
    return {"status": "ok", "elasticsearch": elastic}
