"""
SQLAlchemy ORM models.

Tables
------
business  -- 사업장 (벌크 적재 시 worker_name에 적재 워커 라벨 기록)
staff     -- 사업장 소속 직원 (business_id로 역참조)
"""

from __future__ import annotations

import datetime as dt
import uuid

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    Uuid,
    inspect,
)
from sqlalchemy.orm import relationship

from .database import Base


def _utcnow() -> dt.datetime:
    # 파이썬 측 기본값: flush 직후 객체 속성에 채워짐
    return dt.datetime.now(dt.timezone.utc)


class Business(Base):
    __tablename__ = "business"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False, default="", index=True)
    description = Column(Text, default="")
    address = Column(String(512), default="", index=True)
    business_type = Column(String(64), default="", index=True)
    status = Column(String(64), default="")
    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)
    worker_name = Column(String(64), default="")

    staffs = relationship(
        "Staff",
        back_populates="business",
        cascade="all, delete-orphan",
        order_by="Staff.created_at",
    )

    def loaded_staffs(self) -> list[Staff]:
        """이미 로드된 staffs만 반환 (미로드 상태면 빈 리스트, 지연 로딩 없음)."""
        if "staffs" in inspect(self).unloaded:
            return []
        return list(self.staffs)

    def __repr__(self) -> str:
        return f"<Business id={self.id} name={self.name!r} worker={self.worker_name!r}>"


class Staff(Base):
    __tablename__ = "staff"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(128), unique=True, nullable=False)
    password = Column(String(255), nullable=False)  # 응답 스키마에 포함하지 않음
    fullname = Column(String(255), default="")
    email = Column(String(255), unique=True, nullable=False)
    role = Column(String(64), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)
    business_id = Column(
        Uuid,
        ForeignKey("business.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    business = relationship("Business", back_populates="staffs")

    __table_args__ = (
        Index("ix_staff_business_role", "business_id", "role"),
    )

    def __repr__(self) -> str:
        return f"<Staff id={self.id} username={self.username!r}>"
