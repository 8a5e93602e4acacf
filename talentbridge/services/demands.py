"""
人才需求服务

雇主发布需求，运营推荐候选人；推荐时若该组合没有进行中的报价，
自动生成一条已批准的报价
"""
from typing import List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.core.exceptions import NotFoundException, ForbiddenException
from talentbridge.core.security import Viewer
from talentbridge.crud import account_crud, demand_crud, quote_crud
from talentbridge.models.account import Role, party_brief
from talentbridge.models.demand import TalentDemand, TalentDemandCreate, DemandStatus, TalentDemandResponse
from . import audit
from .accounts import load_candidate_records
from .anonymization import project_candidate
from .audit import AuditSink, AuditEventData
from .quotes import QuoteEngine


class TalentDemandBoard:
    """人才需求发布与推荐"""

    def __init__(self, db: AsyncSession, audit_sink: AuditSink, quotes: QuoteEngine):
        self.db = db
        self.audit = audit_sink
        self.quotes = quotes

    async def create(self, viewer: Viewer, data: TalentDemandCreate) -> TalentDemand:
        """已审核雇主发布需求"""
        employer = await account_crud.get_with_role(self.db, viewer.user_id, Role.EMPLOYER)
        if not employer or not employer.is_verified:
            raise ForbiddenException("雇主账户须通过审核后才能发布需求")

        values = data.model_dump(mode="json")
        values["employer_id"] = viewer.user_id
        demand = await demand_crud.create(self.db, obj_in=values)

        await self.audit.emit(AuditEventData(
            action=audit.TALENT_DEMAND_CREATED,
            actor_id=viewer.user_id,
            details=f"Created talent demand: {demand.title}",
        ))
        logger.info("人才需求已发布: id={}, employer={}", demand.id, viewer.user_id)
        return demand

    async def list_mine(self, viewer: Viewer) -> List[dict]:
        demands = await demand_crud.get_by_employer(self.db, viewer.user_id)
        return [self._record(d) for d in demands]

    async def list_all(self, status: Optional[str] = None) -> List[dict]:
        """全部需求，附雇主信息"""
        demands = await demand_crud.get_all(self.db, status=status)
        employers = await account_crud.get_many(self.db, (d.employer_id for d in demands))
        return [self._record(d, employers.get(d.employer_id)) for d in demands]

    async def delete(self, viewer: Viewer, demand_id: str) -> None:
        """发布者或运营/管理员删除需求"""
        demand = await self._load_visible(viewer, demand_id)
        await demand_crud.delete(self.db, id=demand.id)
        logger.info("人才需求已删除: id={}, by={}", demand.id, viewer.user_id)

    async def update_status(self, viewer: Viewer, demand_id: str, status: DemandStatus) -> TalentDemand:
        """运营更新需求处理状态"""
        demand = await demand_crud.get_for_update(self.db, demand_id)
        if not demand:
            raise NotFoundException(f"人才需求不存在: {demand_id}")
        previous = demand.status
        demand = await demand_crud.update(self.db, db_obj=demand, obj_in={"status": status.value})
        logger.info("需求状态更新: id={}, {} -> {}, by={}", demand.id, previous, demand.status, viewer.user_id)
        return demand

    async def suggest(self, viewer: Viewer, demand_id: str, candidate_id: str) -> TalentDemand:
        """
        运营推荐候选人

        同一候选人只记录一次；首次推荐且无进行中的报价时自动创建已批准报价
        """
        demand = await demand_crud.get_for_update(self.db, demand_id)
        if not demand:
            raise NotFoundException(f"人才需求不存在: {demand_id}")
        if not await account_crud.get_with_role(self.db, candidate_id, Role.CANDIDATE):
            raise NotFoundException(f"候选人不存在: {candidate_id}")

        suggested = list(demand.suggested_candidate_ids or [])
        if candidate_id in suggested:
            return demand

        demand = await demand_crud.update(self.db, db_obj=demand, obj_in={
            "suggested_candidate_ids": suggested + [candidate_id],
        })
        if not await quote_crud.get_open_pair(self.db, demand.employer_id, candidate_id):
            await self.quotes.create_approved(demand.employer_id, candidate_id)

        await self.audit.emit(AuditEventData(
            action=audit.CANDIDATE_SUGGESTED,
            actor_id=viewer.user_id,
            details=f"Suggested candidate {candidate_id} for demand {demand.id}",
        ))
        logger.info("已推荐候选人: demand={}, candidate={}", demand.id, candidate_id)
        return demand

    async def suggested_candidates(self, viewer: Viewer, demand_id: str) -> List[dict]:
        """需求的推荐候选人（雇主视角脱敏）"""
        demand = await self._load_visible(viewer, demand_id)
        records = await load_candidate_records(self.db, demand.suggested_candidate_ids or [])
        return [
            project_candidate(viewer, records[cid])
            for cid in demand.suggested_candidate_ids or []
            if cid in records
        ]

    def _record(self, demand: TalentDemand, employer=None) -> dict:
        item = TalentDemandResponse.model_validate(demand)
        item.employer = party_brief(employer)
        return item.model_dump(mode="json")

    async def _load_visible(self, viewer: Viewer, demand_id: str) -> TalentDemand:
        demand = await demand_crud.get(self.db, demand_id)
        if not demand:
            raise NotFoundException(f"人才需求不存在: {demand_id}")
        if not viewer.is_staff and not viewer.is_self(demand.employer_id):
            raise ForbiddenException("无权操作该人才需求")
        return demand
