"""
证明材料模型模块 - SQLModel 版本

只保存文件指针与审核结果，文件本身由外部存储负责
"""
from typing import Optional
from datetime import datetime
from enum import Enum
from sqlmodel import Field

from .base import SQLModelBase, TimestampMixin, IDMixin, TimestampResponse


class DocumentType(str, Enum):
    """材料类型枚举"""
    RESUME = "resume"
    PASSPORT = "passport"
    DIPLOMA = "diploma"
    CERTIFICATE = "certificate"
    CV = "cv"
    REFERENCE = "reference"
    OTHER = "other"


class DocumentStatus(str, Enum):
    """材料审核状态枚举"""
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


# ==================== 表模型 ====================

class Document(TimestampMixin, IDMixin, SQLModelBase, table=True):
    """证明材料表模型"""
    __tablename__ = "documents"

    account_id: str = Field(..., foreign_key="accounts.id", index=True, description="所属账户ID")
    type: str = Field(..., description="材料类型")
    name: Optional[str] = Field(None, max_length=255, description="材料名称")
    file_url: str = Field(..., max_length=500, description="文件地址")
    status: str = Field(DocumentStatus.PENDING.value, index=True, description="审核状态")
    is_verified: bool = Field(default=False, description="是否已核验")
    verified_by: Optional[str] = Field(None, description="审核人ID")
    verified_at: Optional[datetime] = Field(None, description="审核时间")
    rejection_reason: Optional[str] = Field(None, description="驳回原因")

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, status={self.status})>"


# ==================== 请求 Schema ====================

class DocumentCreate(SQLModelBase):
    """登记材料请求"""
    type: DocumentType = Field(..., description="材料类型")
    name: Optional[str] = Field(None, max_length=255, description="材料名称")
    file_url: str = Field(..., min_length=1, max_length=500, description="文件地址")


class DocumentReview(SQLModelBase):
    """运营驳回材料"""
    reason: Optional[str] = Field(None, description="驳回原因")


# ==================== 响应 Schema ====================

class DocumentResponse(TimestampResponse):
    """材料响应"""
    account_id: str
    type: str
    name: Optional[str]
    file_url: str
    status: str
    is_verified: bool
    verified_by: Optional[str]
    verified_at: Optional[datetime]
    rejection_reason: Optional[str] = None
