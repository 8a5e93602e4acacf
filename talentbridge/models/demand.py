"""
人才需求模型模块 - SQLModel 版本
"""
from typing import Optional, List
from enum import Enum
from sqlmodel import Field, Column, JSON

from .base import SQLModelBase, TimestampMixin, IDMixin, TimestampResponse


class ExperienceLevel(str, Enum):
    """经验级别枚举"""
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"


class Urgency(str, Enum):
    """紧急程度枚举"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RemotePreference(str, Enum):
    """办公方式枚举"""
    ONSITE = "onsite"
    HYBRID = "hybrid"
    REMOTE = "remote"


class DemandStatus(str, Enum):
    """需求处理状态枚举"""
    OPEN = "open"
    TREATING = "treating"
    TREATED = "treated"
    CANCELLED = "cancelled"


# ==================== 基础字段定义 ====================

class TalentDemandBase(SQLModelBase):
    """人才需求基础字段"""
    title: str = Field("Untitled Demand", min_length=1, max_length=200, description="需求标题")
    sector: str = Field("General", max_length=100, description="行业")
    description: str = Field("", description="需求描述")
    required_skills: List[str] = Field(default_factory=list, sa_column=Column(JSON), description="技能要求")
    experience_level: ExperienceLevel = Field(ExperienceLevel.MID, description="经验级别")
    salary_range: str = Field("Competitive", max_length=100, description="薪资范围")
    location_preference: Optional[str] = Field(None, max_length=200, description="地点偏好")
    urgency: Urgency = Field(Urgency.MEDIUM, description="紧急程度")
    headcount: int = Field(1, ge=1, description="招聘人数")
    remote_preference: RemotePreference = Field(RemotePreference.ONSITE, description="办公方式")
    duration: Optional[str] = Field(None, max_length=100, description="合同期限")
    visa_support: bool = Field(False, description="是否提供签证支持")


# ==================== 表模型 ====================

class TalentDemand(TalentDemandBase, TimestampMixin, IDMixin, table=True):
    """人才需求表模型"""
    __tablename__ = "talent_demands"

    employer_id: str = Field(..., foreign_key="accounts.id", index=True, description="雇主ID")
    experience_level: str = Field(ExperienceLevel.MID.value, description="经验级别")
    urgency: str = Field(Urgency.MEDIUM.value, description="紧急程度")
    remote_preference: str = Field(RemotePreference.ONSITE.value, description="办公方式")
    suggested_candidate_ids: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON),
        description="运营推荐的候选人ID"
    )
    status: str = Field(DemandStatus.OPEN.value, index=True, description="处理状态")

    def __repr__(self) -> str:
        return f"<TalentDemand(id={self.id}, status={self.status})>"


# ==================== 请求 Schema ====================

class TalentDemandCreate(TalentDemandBase):
    """创建人才需求请求"""
    pass


class DemandStatusUpdate(SQLModelBase):
    """更新需求状态请求"""
    status: DemandStatus = Field(..., description="处理状态")


class CandidateSuggestion(SQLModelBase):
    """运营推荐候选人"""
    candidate_id: str = Field(..., min_length=1, description="候选人ID")


# ==================== 响应 Schema ====================

class TalentDemandResponse(TimestampResponse):
    """人才需求响应"""
    employer_id: str
    title: str
    sector: str
    description: str
    required_skills: List[str]
    experience_level: str
    salary_range: str
    location_preference: Optional[str]
    urgency: str
    headcount: int
    remote_preference: str
    duration: Optional[str]
    visa_support: bool
    suggested_candidate_ids: List[str]
    status: str

    employer: Optional[dict] = None
