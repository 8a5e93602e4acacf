"""
授权请求模型模块 - SQLModel 版本
"""
from typing import Optional, Literal
from datetime import datetime
from enum import Enum
from sqlalchemy import Index, text
from sqlmodel import Field

from .base import SQLModelBase, TimestampMixin, IDMixin, TimestampResponse


class ConsentStatus(str, Enum):
    """授权请求状态枚举"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# ==================== 表模型 ====================

class ConsentRequest(TimestampMixin, IDMixin, SQLModelBase, table=True):
    """
    授权请求表模型

    同一 (雇主, 候选人) 同时至多存在一条 pending 请求，
    由部分唯一索引兜底并发创建
    """
    __tablename__ = "consent_requests"
    __table_args__ = (
        Index(
            "uq_consent_pending_pair",
            "employer_id",
            "candidate_id",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
    )

    employer_id: str = Field(..., foreign_key="accounts.id", index=True, description="雇主ID")
    candidate_id: str = Field(..., foreign_key="accounts.id", index=True, description="候选人ID")
    status: str = Field(ConsentStatus.PENDING.value, index=True, description="状态")
    message: Optional[str] = Field(None, description="雇主附言")
    responded_at: Optional[datetime] = Field(None, description="候选人答复时间")

    def __repr__(self) -> str:
        return f"<ConsentRequest(id={self.id}, status={self.status})>"


# ==================== 请求 Schema ====================

class ConsentRequestCreate(SQLModelBase):
    """创建授权请求"""
    candidate_id: str = Field(..., min_length=1, description="候选人ID")
    message: Optional[str] = Field(None, max_length=2000, description="附言")


class ConsentDecision(SQLModelBase):
    """候选人答复"""
    status: Literal["approved", "rejected"] = Field(..., description="答复结果")


# ==================== 响应 Schema ====================

class ConsentRequestResponse(TimestampResponse):
    """授权请求响应"""
    employer_id: str
    candidate_id: str
    status: str
    message: Optional[str]
    responded_at: Optional[datetime]

    # 关联信息
    employer: Optional[dict] = None
    candidate: Optional[dict] = None
