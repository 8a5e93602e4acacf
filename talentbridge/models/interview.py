"""
面试安排模型模块 - SQLModel 版本

proposed_times JSON 格式示例:
[
    {
        "id": "slot-0-3f9a2c1d",
        "datetime": "2025-03-01T10:00:00+01:00",
        "duration": 45,
        "proposed_by": "<账户ID>",
        "accepted": false
    },
    ...
]
"""
from typing import Optional, List
from datetime import datetime
from enum import Enum
from pydantic import field_validator
from sqlmodel import Field, Column, JSON

from .base import SQLModelBase, TimestampMixin, IDMixin, TimestampResponse


class InterviewStatus(str, Enum):
    """面试状态枚举"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# 终态：不再允许任何流转
TERMINAL_INTERVIEW_STATUSES = (InterviewStatus.COMPLETED.value, InterviewStatus.CANCELLED.value)


def _check_iso_datetime(value: str) -> str:
    datetime.fromisoformat(value.replace("Z", "+00:00"))
    return value


# ==================== 嵌套 Schema ====================

class SlotProposal(SQLModelBase):
    """候选时间段（请求）"""
    duration: int = Field(60, ge=1, le=24 * 60, description="时长(分钟)")
    datetime: str = Field(..., description="开始时间(ISO 8601)")

    @field_validator("datetime")
    @classmethod
    def validate_datetime(cls, v: str) -> str:
        try:
            return _check_iso_datetime(v)
        except ValueError:
            raise ValueError("时间格式须为 ISO 8601")


class InterviewSlot(SQLModelBase):
    """候选时间段（存储/响应）"""
    id: str
    duration: int
    proposed_by: Optional[str] = None
    accepted: bool = False
    datetime: str


# ==================== 表模型 ====================

class InterviewMeeting(TimestampMixin, IDMixin, SQLModelBase, table=True):
    """面试安排表模型"""
    __tablename__ = "interview_meetings"

    employer_id: str = Field(..., foreign_key="accounts.id", index=True, description="雇主ID")
    candidate_id: str = Field(..., foreign_key="accounts.id", index=True, description="候选人ID")
    scheduled_by: Optional[str] = Field(None, description="发起人ID")
    title: str = Field(..., max_length=200, description="面试标题")
    proposed_times: List[dict] = Field(default_factory=list, sa_column=Column(JSON), description="候选时间段")
    confirmed_time: Optional[str] = Field(None, description="确认的时间")
    status: str = Field(InterviewStatus.PENDING.value, index=True, description="状态")
    meeting_room_id: str = Field(..., unique=True, index=True, description="会议室标识")
    notes: Optional[str] = Field(None, description="备注")

    @property
    def is_terminal(self) -> bool:
        """是否已处于终态"""
        return self.status in TERMINAL_INTERVIEW_STATUSES

    def involves(self, user_id: str) -> bool:
        """是否为面试参与方"""
        return user_id in (self.employer_id, self.candidate_id)

    def __repr__(self) -> str:
        return f"<InterviewMeeting(id={self.id}, status={self.status})>"


# ==================== 请求 Schema ====================

class InterviewCreate(SQLModelBase):
    """安排面试请求"""
    employer_id: Optional[str] = Field(None, description="雇主ID（雇主本人发起时可省略）")
    candidate_id: Optional[str] = Field(None, description="候选人ID（候选人本人发起时可省略）")
    title: str = Field(..., min_length=1, max_length=200, description="面试标题")
    proposed_times: List[SlotProposal] = Field(default_factory=list, description="候选时间段（至少一个）")
    notes: Optional[str] = Field(None, description="备注")


class SlotAnswer(SQLModelBase):
    """答复某个时间段"""
    slot_id: str = Field(..., min_length=1, description="时间段ID")
    accepted: bool = Field(..., description="是否接受")


# ==================== 响应 Schema ====================

class InterviewResponse(TimestampResponse):
    """面试安排响应"""
    employer_id: str
    candidate_id: str
    scheduled_by: Optional[str]
    title: str
    proposed_times: List[InterviewSlot] = []
    confirmed_time: Optional[str]
    status: str
    meeting_room_id: str
    notes: Optional[str]

    # 视角相关的派生字段
    candidate_name: Optional[str] = None
    employer_name: Optional[str] = None
    candidate_avatar: Optional[str] = None
    candidate: Optional[dict] = None
    employer: Optional[dict] = None
