"""
报价请求模型模块 - SQLModel 版本

options JSON 格式示例:
[
    {
        "id": "6f1c...",
        "name": "Essential Package",
        "cost_estimate": "€10,000 - €12,000",
        "perks": ["Standard Placement", "Basic Support"],
        "items": [
            {"label": "Placement Fee", "amount": 8000, "description": "Recruitment & Vetting"},
            {"label": "Admin Fee", "amount": 2000, "description": "Processing & Compliance"}
        ],
        "selected": false
    },
    ...
]
"""
from typing import Optional, List, Literal
from datetime import datetime
from enum import Enum
from sqlalchemy import Index, text
from sqlmodel import Field, Column, JSON

from .base import SQLModelBase, TimestampMixin, IDMixin, TimestampResponse, utcnow


class QuoteStatus(str, Enum):
    """报价请求状态枚举"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# pending 与 approved 视为进行中的谈判
OPEN_QUOTE_STATUSES = (QuoteStatus.PENDING.value, QuoteStatus.APPROVED.value)


# ==================== 嵌套 Schema ====================

class QuoteItem(SQLModelBase):
    """费用明细"""
    label: str
    amount: int = Field(..., ge=0)
    description: str = ""


class QuoteOption(SQLModelBase):
    """报价方案"""
    id: str
    name: str
    cost_estimate: str
    perks: List[str] = []
    items: List[QuoteItem] = []
    selected: bool = False


# ==================== 表模型 ====================

class QuoteRequest(TimestampMixin, IDMixin, SQLModelBase, table=True):
    """
    报价请求表模型

    同一 (雇主, 候选人) 同时至多一条 pending/approved 请求
    """
    __tablename__ = "quote_requests"
    __table_args__ = (
        Index(
            "uq_quote_open_pair",
            "employer_id",
            "candidate_id",
            unique=True,
            sqlite_where=text("status IN ('pending', 'approved')"),
            postgresql_where=text("status IN ('pending', 'approved')"),
        ),
    )

    employer_id: str = Field(..., foreign_key="accounts.id", index=True, description="雇主ID")
    candidate_id: str = Field(..., foreign_key="accounts.id", index=True, description="候选人ID")
    status: str = Field(QuoteStatus.PENDING.value, index=True, description="状态")
    cost_estimate: Optional[str] = Field(None, description="运营给出的费用区间")
    items: List[dict] = Field(default_factory=list, sa_column=Column(JSON), description="费用明细")
    options: List[dict] = Field(default_factory=list, sa_column=Column(JSON), description="报价方案")
    selected_option_id: Optional[str] = Field(None, description="雇主选定的方案ID")
    requested_at: datetime = Field(default_factory=utcnow, description="申请时间")
    resolved_at: Optional[datetime] = Field(None, description="处理时间")

    def __repr__(self) -> str:
        return f"<QuoteRequest(id={self.id}, status={self.status})>"


# ==================== 请求 Schema ====================

class QuoteRequestCreate(SQLModelBase):
    """创建报价请求"""
    candidate_id: str = Field(..., min_length=1, description="候选人ID")


class QuoteResolve(SQLModelBase):
    """运营处理报价请求"""
    status: Literal["approved", "rejected"] = Field(..., description="处理结果")
    cost_estimate: Optional[str] = Field(None, max_length=100, description="基础方案费用区间")


class OptionSelect(SQLModelBase):
    """雇主选择方案"""
    option_id: str = Field(..., min_length=1, description="方案ID")


# ==================== 响应 Schema ====================

class QuoteRequestResponse(TimestampResponse):
    """报价请求响应"""
    employer_id: str
    candidate_id: str
    status: str
    cost_estimate: Optional[str]
    items: List[QuoteItem] = []
    options: List[QuoteOption] = []
    selected_option_id: Optional[str]
    requested_at: datetime
    resolved_at: Optional[datetime]

    # 关联信息
    candidate: Optional[dict] = None
    employer: Optional[dict] = None
