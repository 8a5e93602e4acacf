"""
招聘管道模型模块 - SQLModel 版本

每对 (雇主, 候选人) 至多一条关系记录，只保存当前阶段，不保留历史
"""
from typing import Optional
from enum import Enum
from sqlmodel import Field, UniqueConstraint

from .base import SQLModelBase, TimestampMixin, IDMixin, TimestampResponse


class PipelineStatus(str, Enum):
    """管道阶段枚举"""
    POTENTIAL = "potential"
    SHORTLISTED = "shortlisted"
    ASKED_QUOTE = "asked_quote"
    INTERVIEWED = "interviewed"
    HIRED = "hired"


# ==================== 表模型 ====================

class PipelineRelation(TimestampMixin, IDMixin, SQLModelBase, table=True):
    """雇主-候选人管道关系表模型"""
    __tablename__ = "pipeline_relations"
    __table_args__ = (
        UniqueConstraint("employer_id", "candidate_id", name="uq_pipeline_pair"),
    )

    employer_id: str = Field(..., foreign_key="accounts.id", index=True, description="雇主ID")
    candidate_id: str = Field(..., foreign_key="accounts.id", index=True, description="候选人ID")
    status: str = Field(PipelineStatus.POTENTIAL.value, index=True, description="管道阶段")

    def __repr__(self) -> str:
        return f"<PipelineRelation(id={self.id}, status={self.status})>"


# ==================== 请求 Schema ====================

class PipelineStatusUpdate(SQLModelBase):
    """更新管道阶段请求"""
    status: PipelineStatus = Field(..., description="目标阶段")
    employer_id: Optional[str] = Field(None, description="雇主ID（运营/管理员代为操作时必填）")


# ==================== 响应 Schema ====================

class PipelineRelationResponse(TimestampResponse):
    """管道关系响应"""
    employer_id: str
    candidate_id: str
    status: str

    # 关联信息
    candidate: Optional[dict] = None
    employer_name: Optional[str] = None
