"""
授权请求服务

状态机: pending -> approved | rejected
同一 (雇主, 候选人) 同时至多一条 pending 请求
"""
from typing import List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.core.config import settings
from talentbridge.core.exceptions import (
    NotFoundException,
    ForbiddenException,
    ConflictException,
    conflict_on_integrity_error,
)
from talentbridge.core.security import Viewer
from talentbridge.crud import account_crud, consent_crud
from talentbridge.models.account import Role, party_brief
from talentbridge.models.base import utcnow
from talentbridge.models.consent import ConsentRequest, ConsentStatus, ConsentRequestResponse
from . import audit
from .accounts import load_candidate_records
from .anonymization import project_candidate
from .audit import AuditSink, AuditEventData


class ConsentEngine:
    """雇主 -> 候选人的授权请求"""

    def __init__(
        self,
        db: AsyncSession,
        audit_sink: AuditSink,
        allow_re_response: Optional[bool] = None
    ):
        self.db = db
        self.audit = audit_sink
        self.allow_re_response = (
            settings.allow_consent_re_response if allow_re_response is None else allow_re_response
        )

    async def create(self, employer_id: str, candidate_id: str, message: Optional[str] = None) -> ConsentRequest:
        """
        创建授权请求

        Raises:
            NotFoundException: 候选人不存在
            ConflictException: 已有 pending 请求
        """
        if not await account_crud.get_with_role(self.db, candidate_id, Role.CANDIDATE):
            raise NotFoundException(f"候选人不存在: {candidate_id}")

        if await consent_crud.get_pending_pair(self.db, employer_id, candidate_id):
            raise ConflictException("已存在待答复的授权请求")

        with conflict_on_integrity_error("已存在待答复的授权请求"):
            request = await consent_crud.create(self.db, obj_in={
                "employer_id": employer_id,
                "candidate_id": candidate_id,
                "status": ConsentStatus.PENDING.value,
                "message": message,
            })

        await self.audit.emit(AuditEventData(
            action=audit.CONSENT_REQUESTED,
            actor_id=employer_id,
            details=f"Consent requested for candidate {candidate_id}",
        ))
        logger.info("授权请求已创建: id={}, employer={}, candidate={}", request.id, employer_id, candidate_id)
        return request

    async def respond(self, request_id: str, candidate_id: str, decision: str) -> ConsentRequest:
        """
        候选人答复

        已答复的请求能否再次答复由 allow_consent_re_response 决定
        """
        request = await consent_crud.get_for_update(self.db, request_id)
        if not request:
            raise NotFoundException(f"授权请求不存在: {request_id}")
        if request.candidate_id != candidate_id:
            raise ForbiddenException("只能答复发给自己的授权请求")
        if request.status != ConsentStatus.PENDING.value and not self.allow_re_response:
            raise ConflictException(f"授权请求已答复: {request.status}")

        previous = request.status
        request = await consent_crud.update(self.db, db_obj=request, obj_in={
            "status": decision,
            "responded_at": utcnow(),
        })

        await self.audit.emit(AuditEventData(
            action=audit.CONSENT_RESPONDED,
            actor_id=candidate_id,
            details=f"Consent request {request.id} {decision}",
        ))
        logger.info("授权请求已答复: id={}, {} -> {}", request.id, previous, decision)
        return request

    async def list_for_candidate(self, viewer: Viewer, candidate_id: str) -> List[dict]:
        """候选人收到的请求，附雇主信息"""
        requests = await consent_crud.get_by_candidate(self.db, candidate_id)
        return await self.present(viewer, requests)

    async def list_for_employer(self, viewer: Viewer, employer_id: str) -> List[dict]:
        """雇主发出的请求，附候选人信息（雇主视角脱敏）"""
        requests = await consent_crud.get_by_employer(self.db, employer_id)
        return await self.present(viewer, requests)

    async def present(self, viewer: Viewer, requests: List[ConsentRequest]) -> List[dict]:
        employers = await account_crud.get_many(self.db, (r.employer_id for r in requests))
        candidates = await load_candidate_records(self.db, (r.candidate_id for r in requests))

        items = []
        for request in requests:
            item = ConsentRequestResponse.model_validate(request)
            item.employer = party_brief(employers.get(request.employer_id))
            item.candidate = project_candidate(viewer, candidates.get(request.candidate_id))
            items.append(item.model_dump(mode="json"))
        return items
