"""
人才需求 CRUD 操作
"""
from typing import Optional, List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from talentbridge.models.demand import TalentDemand
from .base import CRUDBase


class CRUDDemand(CRUDBase[TalentDemand]):
    """人才需求 CRUD 操作类"""

    async def get_by_employer(self, db: AsyncSession, employer_id: str) -> List[TalentDemand]:
        """雇主发布的需求（新的在前）"""
        result = await db.execute(
            select(self.model)
            .where(self.model.employer_id == employer_id)
            .order_by(self.model.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_all(self, db: AsyncSession, *, status: Optional[str] = None) -> List[TalentDemand]:
        """全部需求（新的在前）"""
        query = select(self.model)
        if status:
            query = query.where(self.model.status == status)
        result = await db.execute(query.order_by(self.model.created_at.desc()))
        return list(result.scalars().all())


demand_crud = CRUDDemand(TalentDemand)
