"""
business 인덱스 문서 모델

인덱스 필드명은 camelCase (businessType, createAt, workerName),
파이썬 속성은 snake_case — pydantic alias로 양방향 변환.
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from business_store import Business


class StaffDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = None
    name: str | None = None
    role: str | None = None


class BusinessDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = ""
    name: str | None = None
    description: str | None = None
    address: str | None = None
    business_type: str | None = Field(None, alias="businessType")
    status: str | None = None
    created_at: dt.datetime | None = Field(None, alias="createAt")
    worker_name: str | None = Field(None, alias="workerName")
    staffs: list[StaffDocument] = Field(default_factory=list)

    @classmethod
    def from_business(cls, business: Business) -> BusinessDocument:
        """ORM Business → 인덱스 문서 (로드된 staffs만 포함)."""
        return cls(
            id=str(business.id),
            name=business.name,
            description=business.description,
            address=business.address,
            business_type=business.business_type,
            status=business.status,
            created_at=business.created_at,
            worker_name=business.worker_name,
            staffs=[
                StaffDocument(id=str(s.id), name=s.fullname, role=s.role)
                for s in business.loaded_staffs()
            ],
        )

    @classmethod
    def from_hit(cls, hit: dict) -> BusinessDocument:
        """검색 hit → 문서. id는 _source가 아니라 항상 hit의 _id."""
        return cls.model_validate({**(hit.get("_source") or {}), "id": hit["_id"]})

    def to_source(self) -> dict:
        """인덱싱용 JSON dict (camelCase 키)."""
        return self.model_dump(mode="json", by_alias=True)
