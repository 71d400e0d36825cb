"""Pydantic schemas for FastAPI request / response models."""

from __future__ import annotations

import datetime as dt
import re
import uuid
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from business_search import BusinessDocument
from business_store import Business, Staff

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_email(value: str) -> str:
    if not _EMAIL_RE.match(value):
        raise ValueError("invalid email address")
    return value


Email = Annotated[str, AfterValidator(_check_email)]


# ---------------------------------------------------------------------------
# Paging
# ---------------------------------------------------------------------------

class PageMeta(BaseModel):
    page: int
    page_size: int
    total: int
    total_pages: int


# ---------------------------------------------------------------------------
# Staff
# ---------------------------------------------------------------------------

class StaffRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=6)
    fullname: str = Field(min_length=1)
    email: Email
    role: str = Field(min_length=1)
    business_id: uuid.UUID


class StaffUpdateRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[Email] = None
    role: Optional[str] = None
    business_id: Optional[uuid.UUID] = None


class StaffOut(BaseModel):
    """password는 포함하지 않음 (write-only)."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    username: str
    fullname: Optional[str] = None
    email: str
    role: str
    created_at: Optional[dt.datetime] = None
    business_id: uuid.UUID


class StaffListResponse(BaseModel):
    data: list[StaffOut]


class StaffPageResponse(BaseModel):
    data: list[StaffOut]
    meta: PageMeta


# ---------------------------------------------------------------------------
# Business
# ---------------------------------------------------------------------------

class BusinessRequest(BaseModel):
    """create / update 공용. update는 값이 주어진 필드만 반영."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    business_type: Optional[str] = Field(None, alias="type")
    status: Optional[str] = None


class BusinessOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[uuid.UUID] = None
    name: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    business_type: Optional[str] = Field(None, alias="type")
    status: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    worker_name: Optional[str] = None
    staffs: list[StaffOut] = Field(default_factory=list)

    @classmethod
    def build(cls, business: Business, staffs: Optional[list[Staff]] = None) -> BusinessOut:
        """staffs를 주지 않으면 이미 로드된 staffs만 사용 (지연 로딩 없음)."""
        if staffs is None:
            staffs = business.loaded_staffs()
        return cls(
            id=business.id,
            name=business.name,
            description=business.description,
            address=business.address,
            business_type=business.business_type,
            status=business.status,
            created_at=business.created_at,
            worker_name=business.worker_name,
            staffs=[StaffOut.model_validate(s) for s in staffs],
        )


class BusinessListResponse(BaseModel):
    data: list[BusinessOut]
    meta: PageMeta


# ---------------------------------------------------------------------------
# Elastic
# ---------------------------------------------------------------------------

class FieldSearchMeta(BaseModel):
    page: int
    page_size: int
    total: int


class FieldSearchResponse(BaseModel):
    data: list[BusinessDocument]
    meta: FieldSearchMeta


class FullTextSearchMeta(BaseModel):
    page: int
    size: int
    total: int


class FullTextSearchResponse(BaseModel):
    data: dict
    meta: FullTextSearchMeta
