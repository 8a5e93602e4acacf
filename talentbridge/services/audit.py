"""
审计事件发布模块

各引擎在状态变更后调用 AuditSink.emit() 发布结构化事件，
具体落到数据库、日志还是两者，由 settings.audit_sink 决定
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Protocol, Sequence, runtime_checkable

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.core.config import settings
from talentbridge.models.audit import AuditEvent
from talentbridge.models.base import utcnow


# ==================== 动作常量 ====================

CANDIDATE_STATUS_UPDATED = "CANDIDATE_STATUS_UPDATED"
CONSENT_REQUESTED = "CONSENT_REQUESTED"
CONSENT_RESPONDED = "CONSENT_RESPONDED"
QUOTE_REQUESTED = "QUOTE_REQUESTED"
QUOTE_RESOLVED = "QUOTE_RESOLVED"
QUOTE_OPTION_SELECTED = "QUOTE_OPTION_SELECTED"
INTERVIEW_SCHEDULED = "INTERVIEW_SCHEDULED"
INTERVIEW_SLOT_ACCEPTED = "INTERVIEW_SLOT_ACCEPTED"
INTERVIEW_SLOT_REJECTED = "INTERVIEW_SLOT_REJECTED"
INTERVIEW_CANCELLED = "INTERVIEW_CANCELLED"
INTERVIEW_COMPLETED = "INTERVIEW_COMPLETED"
USER_VERIFIED = "USER_VERIFIED"
USER_REJECTED = "USER_REJECTED"
EMPLOYER_VERIFIED = "EMPLOYER_VERIFIED"
EMPLOYER_REJECTED = "EMPLOYER_REJECTED"
DOCUMENT_APPROVED = "DOCUMENT_APPROVED"
DOCUMENT_REJECTED = "DOCUMENT_REJECTED"
TALENT_DEMAND_CREATED = "TALENT_DEMAND_CREATED"
CANDIDATE_SUGGESTED = "CANDIDATE_SUGGESTED"


@dataclass(frozen=True)
class AuditEventData:
    """一条待发布的审计事件"""
    action: str
    actor_id: Optional[str]
    details: str = ""
    timestamp: datetime = field(default_factory=utcnow)


@runtime_checkable
class AuditSink(Protocol):
    """审计事件发布端口"""

    async def emit(self, event: AuditEventData) -> None:
        """发布一条事件"""


class DatabaseAuditSink:
    """写入 audit_events 表，与业务变更处于同一事务"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def emit(self, event: AuditEventData) -> None:
        self.db.add(AuditEvent(
            actor_id=event.actor_id,
            action=event.action,
            details=event.details,
            timestamp=event.timestamp,
        ))
        await self.db.flush()


class LoguruAuditSink:
    """仅写日志"""

    async def emit(self, event: AuditEventData) -> None:
        logger.bind(audit=True).info(
            "AUDIT {} | actor={} | {}", event.action, event.actor_id, event.details
        )


class CompositeAuditSink:
    """依次发布到多个 sink"""

    def __init__(self, sinks: Sequence[AuditSink]):
        self.sinks = list(sinks)

    async def emit(self, event: AuditEventData) -> None:
        for sink in self.sinks:
            await sink.emit(event)


class RecordingAuditSink:
    """内存记录（测试用）"""

    def __init__(self):
        self.events: list[AuditEventData] = []

    async def emit(self, event: AuditEventData) -> None:
        self.events.append(event)

    @property
    def actions(self) -> list[str]:
        return [e.action for e in self.events]


def build_audit_sink(db: AsyncSession, mode: Optional[str] = None) -> AuditSink:
    """按配置构建审计 sink"""
    mode = mode or settings.audit_sink
    if mode == "log":
        return LoguruAuditSink()
    if mode == "both":
        return CompositeAuditSink([DatabaseAuditSink(db), LoguruAuditSink()])
    return DatabaseAuditSink(db)
