"""FastAPI dependencies — app.state에 올려둔 컴포넌트 + 요청 로깅"""

from __future__ import annotations

import logging

from fastapi import Request

from business_search import SearchService

from .services import BusinessService, StaffService
from .settings import AppSettings

request_logger = logging.getLogger("business_api.request")


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_business_service(request: Request) -> BusinessService:
    return request.app.state.business_service


def get_staff_service(request: Request) -> StaffService:
    return request.app.state.staff_service


def get_search_service(request: Request) -> SearchService:
    return request.app.state.search_service


async def log_request(request: Request):
    """요청 URI + 본문 기록. 헤더는 prd가 아닐 때만."""
    settings: AppSettings = request.app.state.settings
    body = await request.body()
    request_logger.info(
        f"{request.method} {request.url}  body={body.decode('utf-8', errors='replace') or '-'}"
    )
    if not settings.is_production:
        request_logger.info(f"headers={dict(request.headers)}")
