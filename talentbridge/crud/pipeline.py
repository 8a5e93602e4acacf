"""
招聘管道 CRUD 操作
"""
from typing import Optional, List
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.models.pipeline import PipelineRelation
from .base import CRUDBase


class CRUDPipeline(CRUDBase[PipelineRelation]):
    """管道关系 CRUD 操作类"""

    async def get_pair(
        self,
        db: AsyncSession,
        employer_id: str,
        candidate_id: str
    ) -> Optional[PipelineRelation]:
        """获取 (雇主, 候选人) 的关系并锁定"""
        result = await db.execute(
            select(self.model)
            .where(
                self.model.employer_id == employer_id,
                self.model.candidate_id == candidate_id,
            )
            .with_for_update()
        )
        return result.scalar_one_or_none()

    async def get_by_employer(
        self,
        db: AsyncSession,
        employer_id: str
    ) -> List[PipelineRelation]:
        """获取某雇主的全部关系"""
        result = await db.execute(
            select(self.model)
            .where(self.model.employer_id == employer_id)
            .order_by(self.model.updated_at.desc())
        )
        return list(result.scalars().all())

    async def get_all(self, db: AsyncSession) -> List[PipelineRelation]:
        """获取全部关系"""
        result = await db.execute(
            select(self.model).order_by(self.model.updated_at.desc())
        )
        return list(result.scalars().all())

    async def count_by_employer(self, db: AsyncSession, employer_id: str) -> int:
        """统计某雇主管道内的候选人数量"""
        result = await db.execute(
            select(func.count())
            .select_from(self.model)
            .where(self.model.employer_id == employer_id)
        )
        return result.scalar() or 0


pipeline_crud = CRUDPipeline(PipelineRelation)
