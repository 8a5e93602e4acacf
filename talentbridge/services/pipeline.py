"""
招聘管道服务

维护 (雇主, 候选人) 的当前阶段，不做流转合法性校验，也不保留历史
"""
from typing import List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.core.exceptions import (
    NotFoundException,
    BadRequestException,
    ForbiddenException,
    conflict_on_integrity_error,
)
from talentbridge.core.security import Viewer
from talentbridge.crud import account_crud, pipeline_crud
from talentbridge.models.account import Role
from talentbridge.models.pipeline import PipelineRelation, PipelineStatus, PipelineRelationResponse
from . import audit
from .accounts import load_candidate_records
from .anonymization import project_candidate
from .audit import AuditSink, AuditEventData


class PipelineTracker:
    """管道阶段跟踪"""

    def __init__(self, db: AsyncSession, audit_sink: AuditSink):
        self.db = db
        self.audit = audit_sink

    async def upsert_status(
        self,
        employer_id: str,
        candidate_id: str,
        status: PipelineStatus,
        actor_id: Optional[str] = None
    ) -> PipelineRelation:
        """
        创建或覆盖 (雇主, 候选人) 的阶段

        Returns:
            更新后的关系记录
        """
        relation = await self._write(employer_id, candidate_id, status)
        await self.audit.emit(AuditEventData(
            action=audit.CANDIDATE_STATUS_UPDATED,
            actor_id=actor_id or employer_id,
            details=f"Candidate {candidate_id} status set to {relation.status} for employer {employer_id}",
        ))
        return relation

    async def force_interviewed(self, employer_id: str, candidate_id: str) -> PipelineRelation:
        """面试完成同步: 无论当前阶段（包括 hired）都覆盖为 interviewed"""
        return await self._write(employer_id, candidate_id, PipelineStatus.INTERVIEWED)

    async def _write(
        self,
        employer_id: str,
        candidate_id: str,
        status: PipelineStatus
    ) -> PipelineRelation:
        relation = await pipeline_crud.get_pair(self.db, employer_id, candidate_id)
        if relation is None:
            with conflict_on_integrity_error("管道关系已被并发创建，请重试"):
                relation = await pipeline_crud.create(self.db, obj_in={
                    "employer_id": employer_id,
                    "candidate_id": candidate_id,
                    "status": status.value,
                })
            logger.info(
                "管道关系已创建: employer={}, candidate={}, status={}",
                employer_id, candidate_id, status.value,
            )
            return relation

        previous = relation.status
        relation = await pipeline_crud.update(self.db, db_obj=relation, obj_in={"status": status.value})
        logger.info(
            "管道阶段更新: employer={}, candidate={}, {} -> {}",
            employer_id, candidate_id, previous, status.value,
        )
        return relation

    async def update_for_viewer(
        self,
        viewer: Viewer,
        candidate_id: str,
        status: PipelineStatus,
        employer_id: Optional[str] = None
    ) -> dict:
        """
        按查看者身份更新阶段

        雇主只能更新自己的管道；运营/管理员须指定 employer_id
        """
        if viewer.is_employer:
            employer_id = viewer.user_id
        elif viewer.is_staff:
            if not employer_id:
                raise BadRequestException("运营/管理员操作须指定 employer_id")
            if not await account_crud.get_with_role(self.db, employer_id, Role.EMPLOYER):
                raise NotFoundException(f"雇主不存在: {employer_id}")
        else:
            raise ForbiddenException("候选人不能修改管道阶段")

        if not await account_crud.get_with_role(self.db, candidate_id, Role.CANDIDATE):
            raise NotFoundException(f"候选人不存在: {candidate_id}")

        relation = await self.upsert_status(employer_id, candidate_id, status, actor_id=viewer.user_id)
        return (await self._present(viewer, [relation]))[0]

    async def list_for_employer(self, viewer: Viewer, employer_id: str) -> List[dict]:
        """某雇主的管道（雇主视角候选人脱敏）"""
        relations = await pipeline_crud.get_by_employer(self.db, employer_id)
        return await self._present(viewer, relations)

    async def list_all(self, viewer: Viewer) -> List[dict]:
        """全部管道关系，附 employer_name"""
        relations = await pipeline_crud.get_all(self.db)
        return await self._present(viewer, relations, with_employer_name=True)

    async def _present(
        self,
        viewer: Viewer,
        relations: List[PipelineRelation],
        with_employer_name: bool = False
    ) -> List[dict]:
        candidates = await load_candidate_records(self.db, (r.candidate_id for r in relations))
        employers = {}
        if with_employer_name:
            employers = await account_crud.get_many(self.db, (r.employer_id for r in relations))

        items = []
        for relation in relations:
            item = PipelineRelationResponse.model_validate(relation)
            item.candidate = project_candidate(viewer, candidates.get(relation.candidate_id))
            if with_employer_name:
                employer = employers.get(relation.employer_id)
                item.employer_name = (employer.company_name or employer.email) if employer else "Unknown"
            items.append(item.model_dump(mode="json"))
        return items
