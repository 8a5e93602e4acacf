"""
档案浏览记录模型模块 - SQLModel 版本
"""
from typing import Optional
from datetime import datetime
from sqlmodel import Field

from .base import SQLModelBase, TimestampMixin, IDMixin


class ProfileView(TimestampMixin, IDMixin, SQLModelBase, table=True):
    """雇主查看候选人档案的记录"""
    __tablename__ = "profile_views"

    candidate_id: str = Field(..., foreign_key="accounts.id", index=True, description="被查看的候选人ID")
    employer_id: str = Field(..., foreign_key="accounts.id", index=True, description="查看方雇主ID")


class ProfileViewResponse(SQLModelBase):
    """浏览记录响应"""
    id: str
    candidate_id: str
    employer_id: str
    created_at: datetime
    employer: Optional[dict] = None
