"""
审计事件模型模块 - SQLModel 版本

只追加，不修改不删除
"""
from typing import Optional
from datetime import datetime
from sqlmodel import Field

from .base import SQLModelBase, IDMixin, utcnow


class AuditEvent(IDMixin, SQLModelBase, table=True):
    """审计事件表模型"""
    __tablename__ = "audit_events"

    actor_id: Optional[str] = Field(None, index=True, description="操作人ID")
    action: str = Field(..., max_length=64, index=True, description="动作")
    details: Optional[str] = Field(None, description="详情")
    timestamp: datetime = Field(default_factory=utcnow, index=True, description="发生时间")

    def __repr__(self) -> str:
        return f"<AuditEvent(action={self.action}, actor={self.actor_id})>"


class AuditEventResponse(SQLModelBase):
    """审计事件响应"""
    id: str
    actor_id: Optional[str]
    action: str
    details: Optional[str]
    timestamp: datetime
