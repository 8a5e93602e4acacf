"""
面试安排服务

状态机:
    pending -> confirmed -> completed
    pending | confirmed -> cancelled

completed 与 cancelled 为终态。面试完成后通过 InterviewOutcomeRecorder
把管道阶段同步为 interviewed
"""
import secrets
import time
import uuid
from typing import List, Optional, Protocol

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.core.config import settings
from talentbridge.core.exceptions import (
    NotFoundException,
    BadRequestException,
    ForbiddenException,
    ConflictException,
    conflict_on_integrity_error,
)
from talentbridge.core.security import Viewer
from talentbridge.crud import account_crud, interview_crud
from talentbridge.models.account import Role
from talentbridge.models.interview import (
    InterviewMeeting,
    InterviewStatus,
    InterviewCreate,
    InterviewResponse,
)
from . import audit
from .anonymization import project_interview_parties
from .audit import AuditSink, AuditEventData

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"

# 按查看者角色派生的字段
PARTY_FIELDS = ("candidate", "employer", "candidate_name", "employer_name", "candidate_avatar")


class InterviewOutcomeRecorder(Protocol):
    """面试结果同步到管道的窄接口"""

    async def force_interviewed(self, employer_id: str, candidate_id: str):
        """无条件将 (雇主, 候选人) 置为 interviewed"""


def _base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_room_id(prefix: Optional[str] = None) -> str:
    """会议室ID: {前缀}-{毫秒时间戳base36}-{16位随机十六进制}"""
    prefix = prefix or settings.meeting_room_prefix
    return f"{prefix}-{_base36(int(time.time() * 1000))}-{secrets.token_hex(8)}"


def generate_slot_id(index: int) -> str:
    return f"slot-{index}-{uuid.uuid4().hex[:8]}"


class InterviewScheduler:
    """面试提议、确认与完成"""

    def __init__(self, db: AsyncSession, audit_sink: AuditSink, pipeline: InterviewOutcomeRecorder):
        self.db = db
        self.audit = audit_sink
        self.pipeline = pipeline

    async def schedule(self, viewer: Viewer, data: InterviewCreate) -> InterviewMeeting:
        """
        安排面试

        雇主以自己为 employer，候选人以自己为 candidate，
        运营/管理员须同时指定双方
        """
        employer_id, candidate_id = data.employer_id, data.candidate_id
        if viewer.is_employer:
            employer_id = viewer.user_id
        elif viewer.is_candidate:
            candidate_id = viewer.user_id
        if not employer_id or not candidate_id:
            raise BadRequestException("须指定 employer_id 与 candidate_id")
        if not data.proposed_times:
            raise BadRequestException("至少需要一个候选时间段")

        if not await account_crud.get_with_role(self.db, employer_id, Role.EMPLOYER):
            raise NotFoundException(f"雇主不存在: {employer_id}")
        if not await account_crud.get_with_role(self.db, candidate_id, Role.CANDIDATE):
            raise NotFoundException(f"候选人不存在: {candidate_id}")

        slots = [
            {
                "id": generate_slot_id(i),
                "datetime": proposal.datetime,
                "duration": proposal.duration,
                "proposed_by": viewer.user_id,
                "accepted": False,
            }
            for i, proposal in enumerate(data.proposed_times)
        ]

        with conflict_on_integrity_error("会议室ID冲突，请重试"):
            interview = await interview_crud.create(self.db, obj_in={
                "employer_id": employer_id,
                "candidate_id": candidate_id,
                "scheduled_by": viewer.user_id,
                "title": data.title,
                "proposed_times": slots,
                "status": InterviewStatus.PENDING.value,
                "meeting_room_id": generate_room_id(),
                "notes": data.notes,
            })

        await self.audit.emit(AuditEventData(
            action=audit.INTERVIEW_SCHEDULED,
            actor_id=viewer.user_id,
            details=f"Scheduled interview: {data.title} with candidate {candidate_id}",
        ))
        logger.info(
            "面试已安排: id={}, employer={}, candidate={}, slots={}",
            interview.id, employer_id, candidate_id, len(slots),
        )
        return interview

    async def respond_to_slot(
        self,
        viewer: Viewer,
        interview_id: str,
        slot_id: str,
        accepted: bool
    ) -> InterviewMeeting:
        """
        答复时间段

        接受任一时间段即进入 confirmed 并记录 confirmed_time；
        已有其他时间段被接受时再接受新的时间段视为冲突
        """
        interview = await self._load_for_party(viewer, interview_id, lock=True)
        if interview.is_terminal:
            raise ConflictException(f"面试已结束: {interview.status}")

        slots = list(interview.proposed_times or [])
        target = next((s for s in slots if s.get("id") == slot_id), None)
        if target is None:
            raise BadRequestException(f"时间段不存在: {slot_id}")
        if accepted and any(s.get("accepted") and s.get("id") != slot_id for s in slots):
            raise ConflictException("已有其他时间段被接受")

        updated = [
            {**s, "accepted": accepted} if s.get("id") == slot_id else dict(s)
            for s in slots
        ]
        updates = {"proposed_times": updated}
        if accepted:
            updates["status"] = InterviewStatus.CONFIRMED.value
            updates["confirmed_time"] = target.get("datetime")

        previous = interview.status
        interview = await interview_crud.update(self.db, db_obj=interview, obj_in=updates)

        await self.audit.emit(AuditEventData(
            action=audit.INTERVIEW_SLOT_ACCEPTED if accepted else audit.INTERVIEW_SLOT_REJECTED,
            actor_id=viewer.user_id,
            details=f"{'Accepted' if accepted else 'Rejected'} time slot {slot_id} for interview {interview.id}",
        ))
        logger.info(
            "时间段已答复: interview={}, slot={}, accepted={}, {} -> {}",
            interview.id, slot_id, accepted, previous, interview.status,
        )
        return interview

    async def cancel(self, viewer: Viewer, interview_id: str) -> InterviewMeeting:
        """取消面试（仅 pending/confirmed）"""
        interview = await self._load_for_party(viewer, interview_id, lock=True)
        if interview.is_terminal:
            raise ConflictException(f"面试已结束，不能取消: {interview.status}")

        previous = interview.status
        interview = await interview_crud.update(
            self.db, db_obj=interview, obj_in={"status": InterviewStatus.CANCELLED.value}
        )

        await self.audit.emit(AuditEventData(
            action=audit.INTERVIEW_CANCELLED,
            actor_id=viewer.user_id,
            details=f"Cancelled interview {interview.id}",
        ))
        logger.info("面试已取消: id={}, {} -> cancelled", interview.id, previous)
        return interview

    async def complete(self, viewer: Viewer, interview_id: str) -> InterviewMeeting:
        """完成面试（仅 confirmed），并同步管道阶段"""
        interview = await self._load_for_party(viewer, interview_id, lock=True)
        if interview.status != InterviewStatus.CONFIRMED.value:
            raise ConflictException(f"只有已确认的面试才能完成，当前状态: {interview.status}")

        interview = await interview_crud.update(
            self.db, db_obj=interview, obj_in={"status": InterviewStatus.COMPLETED.value}
        )
        await self.pipeline.force_interviewed(interview.employer_id, interview.candidate_id)

        await self.audit.emit(AuditEventData(
            action=audit.INTERVIEW_COMPLETED,
            actor_id=viewer.user_id,
            details=f"Completed interview {interview.id}",
        ))
        logger.info("面试已完成: id={}, 管道已同步为 interviewed", interview.id)
        return interview

    async def get_one(self, viewer: Viewer, interview_id: str) -> dict:
        """单条面试（参与方或运营/管理员）"""
        interview = await self._load_for_party(viewer, interview_id)
        return (await self.present(viewer, [interview]))[0]

    async def list_mine(self, viewer: Viewer, status: Optional[str] = None) -> List[dict]:
        """自己参与的面试"""
        interviews = await interview_crud.get_by_party(self.db, viewer.user_id, status=status)
        return await self.present(viewer, interviews)

    async def list_all(self, viewer: Viewer, status: Optional[str] = None) -> List[dict]:
        """全部面试"""
        interviews = await interview_crud.get_all(self.db, status=status)
        return await self.present(viewer, interviews)

    async def present(self, viewer: Viewer, interviews: List[InterviewMeeting]) -> List[dict]:
        accounts = await account_crud.get_many(
            self.db,
            [i.candidate_id for i in interviews] + [i.employer_id for i in interviews],
        )
        items = []
        for interview in interviews:
            item = InterviewResponse.model_validate(interview).model_dump(
                mode="json", exclude=set(PARTY_FIELDS)
            )
            item.update(project_interview_parties(
                viewer,
                accounts.get(interview.candidate_id),
                accounts.get(interview.employer_id),
            ))
            items.append(item)
        return items

    async def _load_for_party(self, viewer: Viewer, interview_id: str, lock: bool = False) -> InterviewMeeting:
        if lock:
            interview = await interview_crud.get_for_update(self.db, interview_id)
        else:
            interview = await interview_crud.get(self.db, interview_id)
        if not interview:
            raise NotFoundException(f"面试不存在: {interview_id}")
        if not viewer.is_staff and not interview.involves(viewer.user_id):
            raise ForbiddenException("只有面试参与方可以操作")
        return interview
