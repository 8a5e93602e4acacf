"""
报价请求服务

状态机:
    pending -> approved -> approved(已选方案)
    pending -> rejected

同一 (雇主, 候选人) 同时至多一条 pending/approved 请求
"""
import uuid
from typing import List, Optional

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
from talentbridge.crud import account_crud, quote_crud
from talentbridge.models.account import Role, party_brief
from talentbridge.models.base import utcnow
from talentbridge.models.quote import QuoteRequest, QuoteStatus, QuoteRequestResponse
from . import audit
from .accounts import load_candidate_records
from .anonymization import project_candidate
from .audit import AuditSink, AuditEventData
from .pricing import build_quote_options


class QuoteEngine:
    """报价请求生命周期"""

    def __init__(
        self,
        db: AsyncSession,
        audit_sink: AuditSink,
        allow_re_resolution: Optional[bool] = None
    ):
        self.db = db
        self.audit = audit_sink
        self.allow_re_resolution = (
            settings.allow_quote_re_resolution if allow_re_resolution is None else allow_re_resolution
        )

    async def create(self, employer_id: str, candidate_id: str) -> QuoteRequest:
        """
        雇主发起报价请求

        Raises:
            ForbiddenException: 雇主未通过审核
            NotFoundException: 候选人不存在
            ConflictException: 已有进行中的请求
        """
        employer = await account_crud.get_with_role(self.db, employer_id, Role.EMPLOYER)
        if not employer or not employer.is_verified:
            raise ForbiddenException("雇主账户须通过审核后才能申请报价")

        if not await account_crud.get_with_role(self.db, candidate_id, Role.CANDIDATE):
            raise NotFoundException(f"候选人不存在: {candidate_id}")

        if await quote_crud.get_open_pair(self.db, employer_id, candidate_id):
            raise ConflictException("该候选人已有进行中的报价请求")

        with conflict_on_integrity_error("该候选人已有进行中的报价请求"):
            quote = await quote_crud.create(self.db, obj_in={
                "employer_id": employer_id,
                "candidate_id": candidate_id,
                "status": QuoteStatus.PENDING.value,
                "requested_at": utcnow(),
            })

        await self.audit.emit(AuditEventData(
            action=audit.QUOTE_REQUESTED,
            actor_id=employer_id,
            details=f"Quote requested for candidate {candidate_id}",
        ))
        logger.info("报价请求已创建: id={}, employer={}, candidate={}", quote.id, employer_id, candidate_id)
        return quote

    async def create_approved(self, employer_id: str, candidate_id: str) -> QuoteRequest:
        """
        直接创建已批准的报价（运营推荐候选人时使用）

        调用方负责确认该组合没有进行中的请求
        """
        quote_id = str(uuid.uuid4())
        options = build_quote_options(quote_id)
        now = utcnow()
        with conflict_on_integrity_error("该候选人已有进行中的报价请求"):
            quote = await quote_crud.create(self.db, obj_in={
                "id": quote_id,
                "employer_id": employer_id,
                "candidate_id": candidate_id,
                "status": QuoteStatus.APPROVED.value,
                "cost_estimate": options[0].cost_estimate,
                "items": [item.model_dump() for item in options[0].items],
                "options": [option.model_dump() for option in options],
                "requested_at": now,
                "resolved_at": now,
            })
        logger.info("已自动批准报价: id={}, employer={}, candidate={}", quote.id, employer_id, candidate_id)
        return quote

    async def resolve(
        self,
        actor_id: str,
        request_id: str,
        decision: str,
        cost_estimate: Optional[str] = None
    ) -> QuoteRequest:
        """
        运营处理报价请求

        approved 时由定价函数生成两档方案；非 pending 请求能否再次处理由
        allow_quote_re_resolution 决定
        """
        quote = await quote_crud.get_for_update(self.db, request_id)
        if not quote:
            raise NotFoundException(f"报价请求不存在: {request_id}")
        if quote.status != QuoteStatus.PENDING.value and not self.allow_re_resolution:
            raise ConflictException(f"报价请求已处理: {quote.status}")

        previous = quote.status
        updates = {
            "status": decision,
            "cost_estimate": cost_estimate,
            "resolved_at": utcnow(),
            "selected_option_id": None,
        }
        if decision == QuoteStatus.APPROVED.value:
            options = build_quote_options(quote.id, cost_estimate)
            updates["cost_estimate"] = options[0].cost_estimate
            updates["items"] = [item.model_dump() for item in options[0].items]
            updates["options"] = [option.model_dump() for option in options]
        else:
            updates["items"] = []
            updates["options"] = []

        with conflict_on_integrity_error("该候选人已有进行中的报价请求"):
            quote = await quote_crud.update(self.db, db_obj=quote, obj_in=updates)

        await self.audit.emit(AuditEventData(
            action=audit.QUOTE_RESOLVED,
            actor_id=actor_id,
            details=f"Quote request {quote.id} {decision}",
        ))
        logger.info("报价请求已处理: id={}, {} -> {}", quote.id, previous, decision)
        return quote

    async def select_option(self, request_id: str, employer_id: str, option_id: str) -> QuoteRequest:
        """
        雇主选择方案（可重复选择，以最后一次为准）

        Raises:
            NotFoundException: 无该雇主名下已批准且有方案的请求
            BadRequestException: 方案ID不存在
        """
        quote = await quote_crud.get_owned_for_update(self.db, request_id, employer_id)
        if not quote or quote.status != QuoteStatus.APPROVED.value or not quote.options:
            raise NotFoundException(f"没有可选择方案的报价请求: {request_id}")
        if option_id not in {option.get("id") for option in quote.options}:
            raise BadRequestException(f"方案不存在: {option_id}")

        options = [
            {**option, "selected": option.get("id") == option_id}
            for option in quote.options
        ]
        quote = await quote_crud.update(self.db, db_obj=quote, obj_in={
            "options": options,
            "selected_option_id": option_id,
        })

        await self.audit.emit(AuditEventData(
            action=audit.QUOTE_OPTION_SELECTED,
            actor_id=employer_id,
            details=f"Selected option {option_id} for quote {quote.id}",
        ))
        logger.info("报价方案已选择: id={}, option={}", quote.id, option_id)
        return quote

    async def get_one(self, viewer: Viewer, request_id: str) -> dict:
        """单条报价（本人雇主或运营/管理员）"""
        quote = await quote_crud.get(self.db, request_id)
        if not quote:
            raise NotFoundException(f"报价请求不存在: {request_id}")
        if not viewer.is_staff and not (viewer.is_employer and viewer.is_self(quote.employer_id)):
            raise ForbiddenException("无权查看该报价请求")
        return (await self.present(viewer, [quote]))[0]

    async def list_mine(self, viewer: Viewer) -> List[dict]:
        """雇主自己的报价请求"""
        quotes = await quote_crud.get_by_employer(self.db, viewer.user_id)
        return await self.present(viewer, quotes)

    async def list_all(self, viewer: Viewer, status: Optional[str] = None) -> List[dict]:
        """全部报价请求"""
        quotes = await quote_crud.get_all(self.db, status=status)
        return await self.present(viewer, quotes)

    async def present(self, viewer: Viewer, quotes: List[QuoteRequest]) -> List[dict]:
        candidates = await load_candidate_records(self.db, (q.candidate_id for q in quotes))
        employers = await account_crud.get_many(self.db, (q.employer_id for q in quotes))

        items = []
        for quote in quotes:
            item = QuoteRequestResponse.model_validate(quote)
            item.candidate = project_candidate(viewer, candidates.get(quote.candidate_id))
            item.employer = party_brief(employers.get(quote.employer_id))
            items.append(item.model_dump(mode="json"))
        return items
